from fastapi import FastAPI, Query, HTTPException
from pydantic import BaseModel, Field
import httpx
import logging
from dataclasses import asdict
from datetime import date
from typing import Optional, Literal

from .config import configure_logging, load_settings
from .geo import effect_zones_geojson
from .impact_model import (
    AsteroidParameters, ImpactLocation, InvalidParameterError, classify_surface, compute_impact_effects,
)
from .mitigation import MitigationStrategy, apply_mitigation
from .neo import fetch_neo_feed
from .presets import DENSITIES, SCENARIOS, get_scenario
from .trajectory import compute_trajectory

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Asteroid impact effects", version="1.0.0")

# -------------------------------
# Health + small utility endpoint
# -------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/isOcean")
def is_ocean(
    lat: float = Query(..., ge=-90, le=90, description="Latitude in decimal degrees"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude in decimal degrees")
):
    # coarse continental boxes, not a coastline lookup
    return classify_surface(lat, lon) == "ocean"

# -------------------------------
# Impact simulation endpoints
# -------------------------------

class AsteroidIn(BaseModel):
    diameter_m: float = Field(..., gt=0, description="Asteroid diameter in meters")
    velocity_kmps: float = Field(..., gt=0, description="Entry speed in km/s")
    angle_deg: float = Field(45.0, gt=0, le=90, description="Entry angle to horizontal in degrees")
    density_kgpm3: float = Field(3000.0, gt=0, description="Bulk density in kg/m^3")
    azimuth_deg: float = Field(0.0, description="Approach heading in degrees")
    distance_km: Optional[float] = Field(None, gt=0, description="Trajectory start distance in km")

    def to_domain(self) -> AsteroidParameters:
        return AsteroidParameters(**self.model_dump())

class LocationIn(BaseModel):
    latitude_deg: float = Field(..., ge=-90, le=90)
    longitude_deg: float = Field(..., ge=-180, le=180)

    def to_domain(self) -> ImpactLocation:
        return ImpactLocation(self.latitude_deg, self.longitude_deg)

class ImpactRequest(BaseModel):
    asteroid: AsteroidIn
    location: LocationIn
    ocean_depth_km: Optional[float] = Field(None, gt=0)

class TrajectoryRequest(BaseModel):
    asteroid: AsteroidIn
    location: LocationIn
    steps: Optional[int] = Field(None, ge=1, le=10000)

class ZonesRequest(ImpactRequest):
    circle_steps: int = Field(64, ge=16, le=512, description="Resolution of each ring")

class MitigationIn(BaseModel):
    type: Literal["kinetic_impactor", "gravity_tractor", "nuclear_device"]
    delta_v_kmps: Optional[float] = Field(None, ge=0)
    azimuth_change_deg: Optional[float] = None
    angle_change_deg: Optional[float] = None

class MitigationRequest(BaseModel):
    asteroid: AsteroidIn
    strategy: MitigationIn


def _effects(req: ImpactRequest):
    depth = req.ocean_depth_km or settings.ocean_depth_km
    try:
        return compute_impact_effects(req.asteroid.to_domain(), req.location.to_domain(), ocean_depth_km=depth)
    except InvalidParameterError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/impact/effects")
def impact_effects(req: ImpactRequest):
    effects = _effects(req)
    logger.info("[impact.effects] d=%sm v=%skm/s surface=%s E=%.3gMt crater=%.3gkm",
                req.asteroid.diameter_m, req.asteroid.velocity_kmps, effects.surface_type,
                effects.energy_megatons, effects.crater_diameter_km)
    return asdict(effects)

@app.post("/impact/trajectory")
def impact_trajectory(req: TrajectoryRequest):
    steps = req.steps or settings.trajectory_steps
    try:
        traj = compute_trajectory(req.asteroid.to_domain(), req.location.to_domain(), steps=steps)
    except InvalidParameterError as e:
        raise HTTPException(status_code=422, detail=str(e))
    points = [asdict(p) for p in traj]
    logger.info("[impact.trajectory] steps=%d start_km=%.0f", steps, traj.start_distance_km)
    return {"steps": steps, "start_distance_km": traj.start_distance_km, "points": points}

@app.post("/impact/zones")
def impact_zones(req: ZonesRequest):
    effects = _effects(req)
    return effect_zones_geojson(req.location.to_domain(), effects, steps=req.circle_steps)

@app.post("/mitigation")
def mitigation(req: MitigationRequest):
    strategy = MitigationStrategy(**req.strategy.model_dump())
    try:
        deflected = apply_mitigation(req.asteroid.to_domain(), strategy)
    except InvalidParameterError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info("[mitigation] type=%s v=%.3f->%.3f", strategy.type,
                req.asteroid.velocity_kmps, deflected.velocity_kmps)
    return {"asteroid": asdict(deflected), "strategy": strategy.type}

# -------------------------------
# Presets
# -------------------------------
@app.get("/scenarios")
def scenarios():
    return {"densities": DENSITIES, "scenarios": [asdict(s) for s in SCENARIOS]}

@app.get("/scenarios/{scenario_id}")
def scenario(scenario_id: str):
    s = get_scenario(scenario_id)
    if s is None:
        raise HTTPException(status_code=404, detail=f"Unknown scenario '{scenario_id}'.")
    effects = compute_impact_effects(s.asteroid, s.location, ocean_depth_km=settings.ocean_depth_km)
    return {"scenario": asdict(s), "effects": asdict(effects)}

@app.get("/neo/feed")
def neo_feed(
    start_date: Optional[date] = Query(None, description="First day of the 7-day window (default today)"),
    limit: int = Query(20, ge=1, le=500),
):
    with httpx.Client(timeout=settings.http_timeout_s) as client:
        presets = fetch_neo_feed(client, settings.nasa_api_key, start=start_date, feed_url=settings.neo_feed_url)
    out = []
    for p in presets[:limit]:
        item = asdict(p)
        item["diameter_avg_m"] = p.diameter_avg_m
        out.append(item)
    return {"objects": out}
