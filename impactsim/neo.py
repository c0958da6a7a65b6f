"""
Near-Earth object presets from the NASA NeoWs ``feed`` endpoint.

The feed only seeds asteroid parameters; when it is unreachable a bundled
catalogue of well-known asteroids is returned instead.
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

import httpx

from .config import NEO_FEED_URL
from .impact_model import AsteroidParameters

logger = logging.getLogger(__name__)

DEFAULT_VELOCITY_KMPS = 20.0
DEFAULT_DISTANCE_KM = 1_000_000.0


@dataclass(frozen=True)
class NeoPreset:
    id: str
    name: str
    diameter_min_m: float
    diameter_max_m: float
    velocity_kmps: float
    distance_km: float
    close_approach_date: str
    is_potentially_hazardous: bool

    @property
    def diameter_avg_m(self) -> float:
        return (self.diameter_min_m + self.diameter_max_m) / 2.0

    def to_asteroid(self, angle_deg: float = 45.0, density_kgpm3: float = 3000.0,
                    azimuth_deg: float = 0.0) -> AsteroidParameters:
        return AsteroidParameters(
            diameter_m=self.diameter_avg_m,
            velocity_kmps=self.velocity_kmps,
            angle_deg=angle_deg,
            density_kgpm3=density_kgpm3,
            azimuth_deg=azimuth_deg,
            distance_km=self.distance_km,
        ).validate()


FAMOUS_ASTEROIDS = (
    NeoPreset("2099942", "Apophis", 310.0, 700.0, 7.4, 31600.0, "2029-04-13", True),
    NeoPreset("2101955", "Bennu", 480.0, 510.0, 28.0, 480000.0, "2026-09-25", True),
    NeoPreset("2000433", "Eros", 13000.0, 29000.0, 12.5, 26000000.0, "2025-10-15", False),
    NeoPreset("2162173", "Ryugu", 850.0, 950.0, 31.5, 850000.0, "2027-03-10", False),
    NeoPreset("2000001", "Ceres", 950000.0, 950000.0, 17.9, 400000000.0, "2025-12-01", False),
    NeoPreset("2000004", "Vesta", 525000.0, 525000.0, 19.3, 350000000.0, "2025-11-15", False),
    NeoPreset("2000002", "Pallas", 512000.0, 512000.0, 20.0, 380000000.0, "2025-10-20", False),
    NeoPreset("2000003", "Juno", 320000.0, 320000.0, 18.2, 320000000.0, "2025-09-30", False),
    NeoPreset("2000005", "Astraea", 120000.0, 120000.0, 16.8, 280000000.0, "2025-08-25", False),
    NeoPreset("2000006", "Hebe", 185000.0, 185000.0, 17.5, 300000000.0, "2025-07-10", False),
)


def clean_asteroid_name(name: Optional[str]) -> str:
    """'(2024 AB12)' -> '2024 AB12'; parenthesised parts are dropped."""
    if not name:
        return "Unknown Asteroid"
    cleaned = re.sub(r"\([^)]*\)", "", name).strip()
    if not cleaned:
        # whole name was a parenthesised designation
        cleaned = name.strip().strip("()").strip()
    return re.sub(r"\s+", " ", cleaned) or "Unknown Asteroid"


def _as_float(value: Any, default: float) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError):
        return default
    return out if out > 0.0 else default


def parse_neo_feed(payload: Dict[str, Any]) -> List[NeoPreset]:
    """Flatten ``near_earth_objects`` (keyed by date) into presets sorted by miss distance."""
    presets: List[NeoPreset] = []
    for objects in (payload.get("near_earth_objects") or {}).values():
        for neo in objects:
            approaches = neo.get("close_approach_data") or []
            if not approaches:
                continue
            approach = approaches[0]
            meters = (neo.get("estimated_diameter") or {}).get("meters") or {}
            d_min = _as_float(meters.get("estimated_diameter_min"), 0.0)
            d_max = _as_float(meters.get("estimated_diameter_max"), 0.0)
            if d_min <= 0.0 or d_max <= 0.0:
                logger.debug("[neo.parse] skipping %s: no diameter estimate", neo.get("id"))
                continue
            presets.append(NeoPreset(
                id=str(neo.get("id", "")),
                name=clean_asteroid_name(neo.get("name")),
                diameter_min_m=d_min,
                diameter_max_m=d_max,
                velocity_kmps=_as_float((approach.get("relative_velocity") or {}).get("kilometers_per_second"),
                                        DEFAULT_VELOCITY_KMPS),
                distance_km=_as_float((approach.get("miss_distance") or {}).get("kilometers"),
                                      DEFAULT_DISTANCE_KM),
                close_approach_date=approach.get("close_approach_date") or "Unknown",
                is_potentially_hazardous=bool(neo.get("is_potentially_hazardous_asteroid", False)),
            ))
    return sorted(presets, key=lambda p: p.distance_km)


def fetch_neo_feed(client: httpx.Client, api_key: str, start: date | None = None, days: int = 7,
                   feed_url: str = NEO_FEED_URL) -> List[NeoPreset]:
    start = start or date.today()
    params = {
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=days)).isoformat(),
        "api_key": api_key,
    }
    logger.info("[neo.fetch] GET %s start=%s end=%s", feed_url, params["start_date"], params["end_date"])
    try:
        r = client.get(feed_url, params=params)
        r.raise_for_status()
        presets = parse_neo_feed(r.json())
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("[neo.fallback] feed unavailable (%s); using bundled catalogue", e)
        return list(FAMOUS_ASTEROIDS)
    logger.info("[neo.fetch] %d objects", len(presets))
    return presets
