"""
Configuration for the candidate skill matcher.
Loads settings from environment variables / .env file.
"""

import os
from dotenv import load_dotenv

load_dotenv()

IS_HF = os.environ.get("SPACE_ID") is not None
BASE_DIR = os.getenv("BASE_DIR", "/tmp/data" if IS_HF else "data")

# Any SQLAlchemy URL; defaults to a SQLite file under BASE_DIR
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(BASE_DIR, 'app.db')}")
CANDIDATE_PAGE_SIZE = int(os.getenv("CANDIDATE_PAGE_SIZE", "1000"))

# ── Groq LLM ───────────────────────────────────────────────────
GROQ_API_KEY = os.getenv("GROQ_API_KEY", "")
GROQ_API_URL = os.getenv("GROQ_API_URL", "https://api.groq.com/openai/v1/chat/completions")
MODEL_NAME = os.getenv("MODEL_NAME", "llama-3.3-70b-versatile")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "60"))
# Ask the LLM for the per-candidate skill summary instead of the built-in one
LLM_SUMMARIES = os.getenv("LLM_SUMMARIES", "false").lower() in ("1", "true", "yes")

# ── Outbound webhook relay (empty URL disables it) ─────────────
NOTIFY_WEBHOOK_URL = os.getenv("NOTIFY_WEBHOOK_URL", "")
NOTIFY_TIMEOUT = float(os.getenv("NOTIFY_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
