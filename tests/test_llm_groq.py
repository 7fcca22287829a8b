import json

import pytest
import requests

import config
from matching import llm_groq
from matching.llm_groq import SkillExtractionError, extract_skills, parse_skills_payload, summarize_skills


class FakeResponse:
    def __init__(self, content=None, status_code=200, body=None):
        self.status_code = status_code
        self._body = body if body is not None else {"choices": [{"message": {"content": content}}]}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._body


@pytest.fixture
def groq(monkeypatch):
    """Capture outgoing Groq requests and answer with a queued FakeResponse."""
    monkeypatch.setattr(config, "GROQ_API_KEY", "test-key")
    sent = []
    replies = []

    def fake_post(url, headers=None, json=None, timeout=None):
        sent.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        reply = replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(llm_groq.requests, "post", fake_post)
    return sent, replies


def test_parse_skills_payload_normalizes():
    raw = json.dumps({"skills": ["React", " TypeScript ", "react", "", None, "SQL"]})
    assert parse_skills_payload(raw) == ["react", "sql", "typescript"]


def test_parse_skills_payload_accepts_bare_list_and_empty():
    assert parse_skills_payload('["Go"]') == ["go"]
    assert parse_skills_payload('{"skills": []}') == []
    assert parse_skills_payload("{}") == []


@pytest.mark.parametrize("raw", ["not json", '"a string"', '{"skills": "python"}'])
def test_parse_skills_payload_rejects_bad_shapes(raw):
    with pytest.raises(SkillExtractionError):
        parse_skills_payload(raw)


def test_extract_skills_calls_groq_in_json_mode(groq):
    sent, replies = groq
    replies.append(FakeResponse(json.dumps({"skills": ["Python", "FastAPI"]})))
    assert extract_skills("We need a Python engineer who knows FastAPI") == ["fastapi", "python"]

    req = sent[0]
    assert req["url"] == config.GROQ_API_URL
    assert req["headers"]["Authorization"] == "Bearer test-key"
    assert req["json"]["response_format"] == {"type": "json_object"}
    assert req["json"]["model"] == config.MODEL_NAME
    assert "Python engineer" in req["json"]["messages"][1]["content"]


def test_extract_skills_empty_result_is_not_an_error(groq):
    _, replies = groq
    replies.append(FakeResponse('{"skills": []}'))
    assert extract_skills("Lorem ipsum") == []


def test_extract_skills_transport_failure(groq):
    _, replies = groq
    replies.append(requests.ConnectionError("unreachable"))
    with pytest.raises(SkillExtractionError):
        extract_skills("anything")


def test_extract_skills_http_error(groq):
    _, replies = groq
    replies.append(FakeResponse(status_code=503))
    with pytest.raises(SkillExtractionError):
        extract_skills("anything")


def test_extract_skills_unexpected_body(groq):
    _, replies = groq
    replies.append(FakeResponse(body={"choices": []}))
    with pytest.raises(SkillExtractionError):
        extract_skills("anything")


def test_extract_skills_requires_api_key(monkeypatch):
    monkeypatch.setattr(config, "GROQ_API_KEY", "")
    with pytest.raises(SkillExtractionError, match="GROQ_API_KEY"):
        extract_skills("anything")


def test_summarize_skills_returns_plain_text(groq):
    sent, replies = groq
    replies.append(FakeResponse("  Strong React background.  "))
    assert summarize_skills("Jane", ["react"], ["react", "css"]) == "Strong React background."
    assert "response_format" not in sent[0]["json"]
    assert "MATCHED REQUIRED SKILLS: react" in sent[0]["json"]["messages"][1]["content"]


def test_summarize_skills_empty_answer(groq):
    _, replies = groq
    replies.append(FakeResponse("   "))
    with pytest.raises(SkillExtractionError):
        summarize_skills("Jane", ["react"], ["react"])
