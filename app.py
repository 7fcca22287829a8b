from __future__ import annotations
import os
import base64
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, UploadFile, File, HTTPException, BackgroundTasks, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile as FormFile
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from schemas import MatchRequest, MatchResponse, MatchResult, EmailIn, ExtractTextResponse
from parsers.pdf import pdf_to_text
from matching.skills import match_candidates
from matching.llm_groq import extract_skills, summarize_skills, SkillExtractionError
from reports.pdf_report import render_report
from services.store import CandidateStore
from services.notifier import relay_response

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the one process-wide store handle at startup."""
    os.makedirs(config.BASE_DIR, exist_ok=True)
    logger.info("Using base directory: %s", config.BASE_DIR)
    logger.info("Database URL: %s", config.DATABASE_URL)
    app.state.store = CandidateStore.from_url(config.DATABASE_URL)

    yield
    logger.info("Application shutting down.")


app = FastAPI(title="Candidate Skill Matcher", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_store(request: Request) -> CandidateStore:
    return request.app.state.store


# -------------------------------------------------------------------
# Error bodies are always {"error": "..."}
# -------------------------------------------------------------------
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


# -------------------------------------------------------------------
# Match pipeline
# -------------------------------------------------------------------
def _summarize(m: MatchResult) -> str:
    try:
        return summarize_skills(m.candidate_name, m.matched_skills, m.all_skills)
    except SkillExtractionError as e:
        logger.warning("LLM summary failed for %s, keeping built-in summary: %s", m.candidate_name, e)
        return m.summary


def run_match(job_description: str, extra_notes: str, store: CandidateStore) -> MatchResponse:
    """Extract skills -> fetch candidates -> match -> render."""
    try:
        job_skills = extract_skills(f"{job_description}\n\n{extra_notes}")
    except SkillExtractionError as e:
        logger.error("Skill extraction failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to extract skills from the job description")

    if not job_skills:
        raise HTTPException(status_code=400, detail="No skills could be extracted from the job description")

    candidates = store.fetch_all(config.CANDIDATE_PAGE_SIZE)
    matches = match_candidates(job_skills, candidates)
    logger.info("%d of %d candidates matched %d skills", len(matches), len(candidates), len(job_skills))

    if config.LLM_SUMMARIES:
        for m in matches:
            m.summary = _summarize(m)

    pdf_bytes = render_report(matches)
    return MatchResponse(
        success=True,
        candidates=matches,
        pdf_base64=base64.b64encode(pdf_bytes).decode("ascii"),
        extracted_skills=job_skills,
        processed_at=datetime.now(timezone.utc).isoformat(),
    )


async def _read_pdf_upload(upload) -> str:
    if not isinstance(upload, FormFile):
        raise HTTPException(status_code=400, detail="No PDF file provided")
    text = await run_in_threadpool(pdf_to_text, await upload.read())
    if not text:
        raise HTTPException(status_code=400, detail="Failed to extract text from PDF")
    return text


async def _read_job_input(request: Request) -> Tuple[str, str]:
    """Job description and extra notes from either a PDF upload or a JSON body."""
    content_type = request.headers.get("content-type", "")

    if "multipart/form-data" in content_type:
        form = await request.form()
        job_description = await _read_pdf_upload(form.get("file"))
        extra = form.get("extra_notes")
        return job_description, extra if isinstance(extra, str) else ""

    try:
        body = MatchRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        raise HTTPException(status_code=400, detail="Invalid JSON body")
    if not body.job_description or not body.job_description.strip():
        raise HTTPException(status_code=400, detail="job_description is required")
    return body.job_description, body.extra_notes or ""


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------
@app.post("/api/webhook", response_model=MatchResponse)
async def webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    store: CandidateStore = Depends(get_store),
):
    """Automation entry point: JSON or PDF upload in, matches + report out, copy relayed downstream."""
    try:
        job_description, extra_notes = await _read_job_input(request)
        result = await run_in_threadpool(run_match, job_description, extra_notes, store)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Webhook API error")
        raise HTTPException(status_code=500, detail="Internal server error")

    # Runs after the response is sent; its failures only reach the log
    background_tasks.add_task(relay_response, result.model_dump(mode="json"))
    return result


@app.post("/api/match", response_model=MatchResponse)
def match(payload: MatchRequest, store: CandidateStore = Depends(get_store)):
    """Interactive matching from a pasted job description."""
    if not payload.job_description or not payload.job_description.strip():
        raise HTTPException(status_code=400, detail="Please provide a job description")
    try:
        return run_match(payload.job_description, payload.extra_notes or "", store)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Match API error")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.post("/api/extract-pdf", response_model=ExtractTextResponse)
async def extract_pdf(file: Optional[UploadFile] = File(None)):
    text = await _read_pdf_upload(file)
    return ExtractTextResponse(text=text)


@app.post("/api/email-collector")
def collect_email(payload: EmailIn, store: CandidateStore = Depends(get_store)):
    if not payload.email or not payload.email.strip():
        raise HTTPException(status_code=400, detail="Email is required")
    try:
        store.save_email(payload.email)
    except SQLAlchemyError as e:
        logger.error("Database error while saving email: %s", e)
        raise HTTPException(status_code=500, detail="Failed to save email to database")
    return {"success": True}


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=False)
