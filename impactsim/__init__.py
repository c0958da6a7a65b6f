"""Asteroid impact effects: physics core plus a small HTTP service."""

from .impact_model import (
    AsteroidParameters, ImpactLocation, ImpactEffects, AtmosphericEntryResult, InvalidParameterError,
    compute_impact_effects,
)
from .trajectory import TrajectoryPoint, compute_trajectory

__all__ = [
    "AsteroidParameters", "ImpactLocation", "ImpactEffects", "AtmosphericEntryResult",
    "InvalidParameterError", "compute_impact_effects",
    "TrajectoryPoint", "compute_trajectory",
]
