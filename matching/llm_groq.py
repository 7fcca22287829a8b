import json
import logging
from typing import List, Sequence

import requests

import config
from .prompts import (
    SKILL_EXTRACTION_PROMPT,
    SKILL_EXTRACTION_USER_TEMPLATE,
    SKILL_SUMMARY_PROMPT,
    SKILL_SUMMARY_USER_TEMPLATE,
)
from .skills import normalize_required

logger = logging.getLogger(__name__)


class SkillExtractionError(Exception):
    """The LLM could not be reached or returned something unusable."""


def _chat(messages: list, json_mode: bool, temperature: float) -> str:
    if not config.GROQ_API_KEY:
        raise SkillExtractionError("GROQ_API_KEY is not configured")

    headers = {
        "Authorization": f"Bearer {config.GROQ_API_KEY}",
        "Content-Type": "application/json"
    }
    payload = {
        "model": config.MODEL_NAME,
        "messages": messages,
        "temperature": temperature,
    }
    if json_mode:
        payload["response_format"] = {"type": "json_object"}

    try:
        response = requests.post(config.GROQ_API_URL, headers=headers, json=payload, timeout=config.LLM_TIMEOUT)
        response.raise_for_status()
        data = response.json()
        return data["choices"][0]["message"]["content"]
    except requests.RequestException as e:
        raise SkillExtractionError(f"Groq request failed: {e}") from e
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise SkillExtractionError(f"Unexpected Groq response: {e}") from e


def parse_skills_payload(raw) -> List[str]:
    """Pull the skill list out of the model's JSON answer."""
    parsed = raw
    # Handle rare cases of stringified JSON
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Skill extraction returned non-JSON content: %r", raw[:200])
            raise SkillExtractionError("Skill extraction returned invalid JSON") from e

    if isinstance(parsed, dict):
        skills = parsed.get("skills", [])
    elif isinstance(parsed, list):
        skills = parsed
    else:
        raise SkillExtractionError("Skill extraction returned an unexpected shape")

    if not isinstance(skills, list):
        raise SkillExtractionError("'skills' is not a list")
    return sorted(normalize_required(str(s) for s in skills if s is not None))


def extract_skills(text: str) -> List[str]:
    """Required skills for a job description, normalized, deduplicated and sorted.

    An empty list means the model found no skills; transport or format
    problems raise SkillExtractionError instead.
    """
    content = _chat(
        [
            {"role": "system", "content": SKILL_EXTRACTION_PROMPT},
            {"role": "user", "content": SKILL_EXTRACTION_USER_TEMPLATE.format(jd=text)},
        ],
        json_mode=True,
        temperature=0.0,
    )
    skills = parse_skills_payload(content)
    logger.info("Extracted %d skills from job description", len(skills))
    return skills


def summarize_skills(name: str, matched: Sequence[str], all_skills: Sequence[str]) -> str:
    content = _chat(
        [
            {"role": "system", "content": SKILL_SUMMARY_PROMPT},
            {
                "role": "user",
                "content": SKILL_SUMMARY_USER_TEMPLATE.format(
                    name=name,
                    matched=", ".join(matched) or "none",
                    all_skills=", ".join(all_skills) or "none",
                ),
            },
        ],
        json_mode=False,
        temperature=0.4,
    )
    summary = (content or "").strip()
    if not summary:
        raise SkillExtractionError("Empty summary from Groq")
    return summary
