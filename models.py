import json
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, TypeDecorator
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class JSONType(TypeDecorator):
    """JSON stored as text, so key order survives on SQLite."""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return json.loads(value)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Interview(Base):
    """One interviewed candidate: raw skill string, feedback record and transcript."""
    __tablename__ = "interviews"
    id = Column(Integer, primary_key=True)
    candidate_name = Column(String)
    skills = Column(Text)  # comma-separated, source of truth for matching
    feedback = Column(JSONType, nullable=True)
    transcript = Column(Text, nullable=True)


class IncomingEmail(Base):
    __tablename__ = "incoming_emails"
    id = Column(Integer, primary_key=True)
    email = Column(String, nullable=False)
    received_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
