"""Paths, model names and credentials, read from the environment."""
import os
from pathlib import Path
from typing import Optional


# Project root
PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_STATE_DIR = PROJECT_ROOT / "storage" / "state"

DEFAULT_PLAN_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"


def get_state_dir() -> Path:
    """Directory holding the durable key-value slot."""
    override = os.getenv("HOLIDAY_HERO_STATE_DIR")
    return Path(override) if override else DEFAULT_STATE_DIR


def get_plan_model() -> str:
    return os.getenv("HOLIDAY_HERO_PLAN_MODEL", DEFAULT_PLAN_MODEL)


def get_image_model() -> str:
    return os.getenv("HOLIDAY_HERO_IMAGE_MODEL", DEFAULT_IMAGE_MODEL)


def get_api_key() -> Optional[str]:
    """Gemini credential. GOOGLE_API_KEY wins over GEMINI_API_KEY."""
    return os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
