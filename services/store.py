import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from models import Base, Interview, IncomingEmail
from schemas import CandidateProfile

logger = logging.getLogger(__name__)


def make_session_factory(url: str, **engine_kwargs) -> sessionmaker:
    """Build the engine, create missing tables and return a bound sessionmaker."""
    engine = create_engine(url, future=True, **engine_kwargs)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


class CandidateStore:
    """Read candidates and write collected emails through one process-wide sessionmaker."""

    def __init__(self, session_factory: sessionmaker):
        self.Session = session_factory

    @classmethod
    def from_url(cls, url: str, **engine_kwargs) -> "CandidateStore":
        return cls(make_session_factory(url, **engine_kwargs))

    def fetch_page(self, offset: int, limit: int) -> List[CandidateProfile]:
        with self.Session() as s:
            rows = s.scalars(
                select(Interview).order_by(Interview.id).offset(offset).limit(limit)
            ).all()
            return [
                CandidateProfile(
                    id=str(r.id),
                    candidate_name=r.candidate_name,
                    skills=r.skills,
                    feedback=r.feedback,
                    transcript=r.transcript,
                )
                for r in rows
            ]

    def fetch_all(self, page_size: int = 1000) -> List[CandidateProfile]:
        """Read the whole pool page by page.

        A page shorter than page_size (or empty) ends the loop. A database
        error also ends it: the rows read so far are returned and a warning
        is logged.
        """
        if page_size <= 0:
            raise ValueError("page_size must be > 0")

        candidates: List[CandidateProfile] = []
        offset = 0
        while True:
            try:
                page = self.fetch_page(offset, page_size)
            except SQLAlchemyError as e:
                logger.warning(
                    "Candidate fetch failed at offset %d, returning %d candidates read so far: %s",
                    offset, len(candidates), e,
                )
                break

            if not page:
                break
            candidates.extend(page)
            if len(page) < page_size:
                break
            offset += page_size

        logger.info("Fetched %d candidates", len(candidates))
        return candidates

    def add_candidate(
        self,
        candidate_name: Optional[str],
        skills: Optional[str],
        feedback: Optional[Dict[str, str]] = None,
        transcript: Optional[str] = None,
    ) -> str:
        with self.Session() as s:
            row = Interview(
                candidate_name=candidate_name,
                skills=skills,
                feedback=feedback,
                transcript=transcript,
            )
            s.add(row)
            s.commit()
            return str(row.id)

    def save_email(self, email: str) -> None:
        with self.Session() as s:
            s.add(IncomingEmail(email=email.strip(), received_at=datetime.now(timezone.utc)))
            s.commit()
        logger.info("Stored incoming email")
