from collections.abc import Mapping
from pydantic import BaseModel, field_validator
from typing import List, Optional, Dict, Any


# Candidate row as read from the store
class CandidateProfile(BaseModel):
    id: Optional[str] = None
    candidate_name: Optional[str] = None
    skills: Optional[str] = None
    feedback: Optional[Dict[str, str]] = None
    transcript: Optional[str] = None

    @field_validator("feedback", mode="before")
    @classmethod
    def _coerce_feedback(cls, value: Any) -> Optional[Dict[str, str]]:
        """Keep key order, stringify values; anything that isn't a mapping is dropped."""
        if not isinstance(value, Mapping):
            return None
        return {str(k): "" if v is None else str(v) for k, v in value.items()}


# One ranked candidate for a single match request
class MatchResult(BaseModel):
    candidate_name: str
    match_count: int
    matched_skills: List[str]
    all_skills: List[str] = []
    summary: str = ""
    feedback: Optional[Dict[str, str]] = None
    transcript: str = ""


class MatchRequest(BaseModel):
    job_description: Optional[str] = None
    extra_notes: Optional[str] = None


class MatchResponse(BaseModel):
    success: bool = True
    candidates: List[MatchResult]
    pdf_base64: str
    extracted_skills: List[str]
    processed_at: str


class EmailIn(BaseModel):
    email: Optional[str] = None


class ExtractTextResponse(BaseModel):
    text: str
