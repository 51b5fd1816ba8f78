"""
Runtime configuration for EnglishAI.

Values come from the environment, optionally seeded from a `.env` file in the
project root:

    GEMINI_API_KEY              API key for the Gemini text service (required
                                to generate lessons or grade open answers)
    ENGLISHAI_MODEL             Gemini model name
    ENGLISHAI_PROGRESS_DB       Path to the progress database
    ENGLISHAI_DATA_DIR          Directory with optional static skill-data files
    ENGLISHAI_GRADING_TIMEOUT   Seconds before an AI grading call is abandoned
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_PROGRESS_DIR = Path.home() / ".englishai"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"
DEFAULT_DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_GRADING_TIMEOUT = 30.0

# Progression rules
LESSONS_PER_LEVEL = 5
LEVEL_GATING_ENABLED = False  # all levels open; flip to require previous level


@dataclass
class Settings:
    gemini_api_key: Optional[str]
    model: str
    progress_db: Path
    data_dir: Path
    grading_timeout: float

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gemini_api_key=os.environ.get("GEMINI_API_KEY"),
            model=os.environ.get("ENGLISHAI_MODEL", DEFAULT_MODEL),
            progress_db=Path(os.environ.get("ENGLISHAI_PROGRESS_DB", DEFAULT_PROGRESS_DB)),
            data_dir=Path(os.environ.get("ENGLISHAI_DATA_DIR", DEFAULT_DATA_DIR)),
            grading_timeout=float(
                os.environ.get("ENGLISHAI_GRADING_TIMEOUT", DEFAULT_GRADING_TIMEOUT)
            ),
        )


@lru_cache()
def get_settings() -> Settings:
    """Load settings once per process, reading `.env` first."""
    load_dotenv(PROJECT_ROOT / ".env")
    return Settings.from_env()
