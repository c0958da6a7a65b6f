from __future__ import annotations
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

NEO_FEED_URL = "https://api.nasa.gov/neo/rest/v1/feed"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    nasa_api_key: str = "DEMO_KEY"
    neo_feed_url: str = NEO_FEED_URL
    http_timeout_s: float = 10.0
    ocean_depth_km: float = 4.0
    trajectory_steps: int = 100
    log_level: str = "INFO"


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a {cast.__name__}, got {raw!r}.") from None


def load_settings() -> Settings:
    """Read settings from the environment (and a local .env file if present)."""
    load_dotenv()
    return Settings(
        nasa_api_key=os.getenv("NASA_API_KEY") or "DEMO_KEY",
        neo_feed_url=os.getenv("NEO_FEED_URL") or NEO_FEED_URL,
        http_timeout_s=_env_number("IMPACTSIM_HTTP_TIMEOUT", 10.0, float),
        ocean_depth_km=_env_number("IMPACTSIM_OCEAN_DEPTH_KM", 4.0, float),
        trajectory_steps=_env_number("IMPACTSIM_TRAJECTORY_STEPS", 100, int),
        log_level=(os.getenv("IMPACTSIM_LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
