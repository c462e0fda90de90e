"""Environment-driven settings.

Values come from the process environment, with a `.env` file at the repo
root loaded first. Build them once with `get_settings()`; routes receive
them through FastAPI dependencies so tests can swap them out.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

REPO_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_MODELS = [
    "tngtech/deepseek-r1t2-chimera:free",
    "deepseek/deepseek-chat:free",
]


def _split_models(raw: str) -> List[str]:
    return [m.strip() for m in raw.split(",") if m.strip()]


class Settings(BaseModel):
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    generation_models: List[str] = Field(default_factory=lambda: list(DEFAULT_MODELS))
    generation_timeout: float = 60.0
    app_url: str = "https://spiritual-clarity.app"
    app_title: str = "Spiritual Clarity"

    db_path: str = str(REPO_ROOT / "data" / "clarity.db")

    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    geo_timeout: float = 25.0
    geo_user_agent: str = "SpiritualClarityApp/1.0"

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        models = _split_models(os.getenv("GENERATION_MODELS", ""))
        db_path = os.getenv("CLARITY_DB_PATH", defaults.db_path)
        if not os.path.isabs(db_path):
            db_path = str(REPO_ROOT / db_path)
        return cls(
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            openrouter_base_url=os.getenv("OPENROUTER_BASE_URL", defaults.openrouter_base_url),
            generation_models=models or list(DEFAULT_MODELS),
            generation_timeout=float(os.getenv("GENERATION_TIMEOUT", defaults.generation_timeout)),
            app_url=os.getenv("APP_URL", defaults.app_url),
            app_title=os.getenv("APP_TITLE", defaults.app_title),
            db_path=db_path,
            nominatim_url=os.getenv("NOMINATIM_URL", defaults.nominatim_url),
            overpass_url=os.getenv("OVERPASS_URL", defaults.overpass_url),
            geo_timeout=float(os.getenv("GEO_TIMEOUT", defaults.geo_timeout)),
            geo_user_agent=os.getenv("GEO_USER_AGENT", defaults.geo_user_agent),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv(REPO_ROOT / ".env")
    return Settings.from_env()
