"""
Settings for the resume ranker
------------------------------

Everything is read from environment variables so the engine and the Flask
adapter can be tuned without touching code. A local .env file is loaded
first (python-dotenv), so the variables below can live there during dev.

    SKILL_TERMS_FILE   path to a skill vocabulary file (one label per line)
    RANKER_TOP_N       how many matched terms to report per candidate
    LOG_LEVEL          logging level for the API process
    MATCHER_PORT       port for the Flask dev server
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env early so every module sees the same values
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SKILL_TERMS_FILE = Path(__file__).resolve().parent / "skill_terms.txt"
DEFAULT_TOP_N = 10
DEFAULT_PORT = 5001


@dataclass(frozen=True)
class Settings:
    skill_terms_file: Path
    top_n: int
    log_level: str
    port: int


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %d", name, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring negative %s=%r, using %d", name, raw, default)
        return default
    return value


def load_settings() -> Settings:
    """Read the current environment into a Settings object."""
    return Settings(
        skill_terms_file=Path(os.getenv("SKILL_TERMS_FILE", str(DEFAULT_SKILL_TERMS_FILE))),
        top_n=_int_from_env("RANKER_TOP_N", DEFAULT_TOP_N),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        port=_int_from_env("MATCHER_PORT", DEFAULT_PORT),
    )


settings = load_settings()
