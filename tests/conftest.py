import pytest
from sqlalchemy.pool import StaticPool

from schemas import CandidateProfile
from services.store import CandidateStore


@pytest.fixture
def store():
    """In-memory SQLite store shared across threads for the lifetime of one test."""
    return CandidateStore.from_url(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


def profile(name, skills, feedback=None, transcript=None, id=None):
    return CandidateProfile(id=id, candidate_name=name, skills=skills, feedback=feedback, transcript=transcript)
