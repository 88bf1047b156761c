from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_DATA_DIR = Path(__file__).resolve().parents[1] / "data"

TRUTHY = {"1", "true", "yes", "on"}


def _env(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


@dataclass(frozen=True)
class Settings:
    trends_base_url: str
    trends_start_time: datetime
    trends_geo: str
    trends_hl: str
    trends_tz: int
    trends_timeout: float
    words_path: Path
    products_path: Path
    off_base_url: str
    off_app_host: str
    cors_origins: list[str]
    log_level: str


def get_settings() -> Settings:
    """Read settings from the environment (and `.env`, loaded at import)."""
    origins = _env("G2P_CORS_ORIGINS", "*")
    return Settings(
        trends_base_url=_env("G2P_TRENDS_BASE_URL", "https://trends.google.com").rstrip("/"),
        trends_start_time=datetime.strptime(_env("G2P_TRENDS_START_DATE", "2004-01-01"), "%Y-%m-%d"),
        # empty geo means worldwide
        trends_geo=_env("G2P_TRENDS_GEO"),
        trends_hl=_env("G2P_TRENDS_HL", "en-US"),
        trends_tz=int(_env("G2P_TRENDS_TZ", "0")),
        trends_timeout=float(_env("G2P_TRENDS_TIMEOUT", "15")),
        words_path=Path(_env("G2P_WORDS_PATH") or _DATA_DIR / "words.txt"),
        products_path=Path(_env("G2P_PRODUCTS_PATH") or _DATA_DIR / "food-barcodes.json"),
        off_base_url=_env("G2P_OFF_BASE_URL", "https://us.openfoodfacts.org").rstrip("/"),
        off_app_host=_env("G2P_APP_HOST", "games2play.vercel.app"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        log_level=_env("G2P_LOG_LEVEL", "INFO").upper(),
    )
