from __future__ import annotations
import math
from typing import Any, Dict, Tuple

from .impact_model import ImpactEffects, ImpactLocation

EARTH_RADIUS_KM = 6371.0
EARTH_MASS_KG = 5.972e24
G_NEWTON = 6.67430e-11           # m^3/(kg s^2)
MAX_ZONE_RADIUS_KM = 20000.0     # half the circumference

Vector3 = Tuple[float, float, float]


def lat_lon_to_cartesian(lat: float, lon: float, radius: float = EARTH_RADIUS_KM) -> Vector3:
    """Scene convention: y is the polar axis, lon = -180 on +x."""
    phi = math.radians(90.0 - lat)
    theta = math.radians(lon + 180.0)
    x = -(radius * math.sin(phi) * math.cos(theta))
    y = radius * math.cos(phi)
    z = radius * math.sin(phi) * math.sin(theta)
    return x, y, z


def cartesian_to_lat_lon(x: float, y: float, z: float) -> Tuple[float, float]:
    radius = math.sqrt(x*x + y*y + z*z)
    if radius == 0.0:
        raise ValueError("Cannot convert the origin to latitude/longitude.")
    lat = 90.0 - math.degrees(math.acos(y / radius))
    lon = math.degrees(math.atan2(z, -x)) - 180.0
    if lon < -180.0:
        lon += 360.0
    return lat, lon


def great_circle_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance on a spherical Earth."""
    φ1, φ2 = math.radians(lat1), math.radians(lat2)
    dφ = math.radians(lat2 - lat1)
    dλ = math.radians(lon2 - lon1)
    a = math.sin(dφ/2)**2 + math.cos(φ1)*math.cos(φ2)*math.sin(dλ/2)**2
    return EARTH_RADIUS_KM * 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))


def destination_point(lon_deg: float, lat_deg: float, bearing_rad: float, distance_km: float):
    """Point reached from (lon,lat) going 'distance_km' along 'bearing_rad' on a sphere."""
    δ = distance_km / EARTH_RADIUS_KM
    φ1 = math.radians(lat_deg)
    λ1 = math.radians(lon_deg)
    θ = bearing_rad

    sinφ2 = math.sin(φ1)*math.cos(δ) + math.cos(φ1)*math.sin(δ)*math.cos(θ)
    φ2 = math.asin(max(-1.0, min(1.0, sinφ2)))
    y = math.sin(θ)*math.sin(δ)*math.cos(φ1)
    x = math.cos(δ) - math.sin(φ1)*math.sin(φ2)
    λ2 = λ1 + math.atan2(y, x)
    # normalize lon to [-180, 180)
    lon2 = math.degrees((λ2 + math.pi) % (2*math.pi) - math.pi)
    lat2 = math.degrees(φ2)
    return lon2, lat2


def circle_ring(lon: float, lat: float, radius_km: float, steps: int = 64) -> list:
    """Closed geodesic ring of [lon, lat] pairs; radius clamped to half the globe."""
    r = min(radius_km, MAX_ZONE_RADIUS_KM)
    coords = []
    for i in range(steps + 1):  # close ring
        b = 2 * math.pi * (i / steps)
        coords.append(list(destination_point(lon, lat, b, r)))
    coords[-1] = coords[0]
    return coords


def effect_radii_km(effects: ImpactEffects) -> Dict[str, float]:
    """Named zone radii, outermost last, as drawn around the impact point."""
    radii = {
        "crater": effects.crater.diameter_km / 2.0,
        "fireball": effects.thermal.fireball_radius_km,
        "radiation": effects.thermal.radiation_radius_km,
        "building_collapse": effects.air_blast.building_collapse_radius_km,
        "airblast": effects.air_blast.airblast_radius_km,
        "burn_3rd_degree": effects.thermal.burn_radius_3rd_km,
        "burn_2nd_degree": effects.thermal.burn_radius_2nd_km,
        "burn_1st_degree": effects.thermal.burn_radius_1st_km,
        "tree_damage": effects.wind.tree_damage_radius_km,
        "glass_breakage": effects.air_blast.glass_breakage_radius_km,
        "seismic_felt": effects.seismic.felt_distance_km,
    }
    if effects.tsunami is not None:
        radii["tsunami"] = effects.tsunami.effective_radius_km
    return dict(sorted(radii.items(), key=lambda kv: kv[1]))


def effect_zones_geojson(location: ImpactLocation, effects: ImpactEffects, steps: int = 64) -> Dict[str, Any]:
    """FeatureCollection with one polygon per non-zero effect radius."""
    if steps < 3:
        raise ValueError(f"steps must be >= 3, got {steps}.")
    lon, lat = location.longitude_deg, location.latitude_deg
    features = []
    for name, radius_km in effect_radii_km(effects).items():
        if radius_km <= 0.0:
            continue
        features.append({
            "type": "Feature",
            "properties": {"zone": name, "radius_km": radius_km,
                           "clamped": radius_km > MAX_ZONE_RADIUS_KM},
            "geometry": {"type": "Polygon", "coordinates": [circle_ring(lon, lat, radius_km, steps)]},
        })
    return {"type": "FeatureCollection", "features": features}


def orbital_velocity_kmps(altitude_km: float) -> float:
    """Circular orbital speed at the given altitude above the mean radius."""
    radius_m = (EARTH_RADIUS_KM + altitude_km) * 1000.0
    if radius_m <= 0.0:
        raise ValueError(f"altitude_km must be above -{EARTH_RADIUS_KM}, got {altitude_km}.")
    return math.sqrt(G_NEWTON * EARTH_MASS_KG / radius_m) / 1000.0
