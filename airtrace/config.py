# path: airtrace-api/airtrace/config.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List
import os

from dotenv import load_dotenv

from airtrace.models.scoring_models import DEFAULT_SAMPLE_SPACING_M

# Load environment variables from .env file
load_dotenv()


@dataclass(frozen=True)
class Settings:
    aqicn_base_url: str
    aqicn_token: str
    aqicn_bounds: str
    osrm_base_url: str
    http_timeout_s: float
    scoring_workers: int
    sample_spacing_m: float
    log_level: str
    cors_origins: List[str]


def get_settings() -> Settings:
    """Read settings from the environment; call again after changing env vars."""
    origins = os.getenv("AIRTRACE_CORS_ORIGINS", "*")
    return Settings(
        aqicn_base_url=os.getenv("AQICN_BASE_URL", "https://api.waqi.info").rstrip("/"),
        aqicn_token=os.getenv("AQICN_TOKEN", ""),
        aqicn_bounds=os.getenv("AQICN_BOUNDS", "-90,-180,90,180"),
        osrm_base_url=os.getenv("OSRM_BASE_URL", "https://router.project-osrm.org").rstrip("/"),
        http_timeout_s=float(os.getenv("AIRTRACE_HTTP_TIMEOUT_S", "10")),
        scoring_workers=max(1, int(os.getenv("AIRTRACE_SCORING_WORKERS", "1"))),
        sample_spacing_m=float(os.getenv("AIRTRACE_SAMPLE_SPACING_M", str(DEFAULT_SAMPLE_SPACING_M))),
        log_level=os.getenv("AIRTRACE_LOG_LEVEL", "INFO").upper(),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )
