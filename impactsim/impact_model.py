from __future__ import annotations
from dataclasses import dataclass
from math import pi, sin, radians, log10, sqrt, log, exp, isfinite
from typing import Literal, Optional

# -----------------------------
# Physical constants & defaults
# -----------------------------
G_EARTH = 9.81                   # m/s^2
J_PER_MT_TNT = 4.184e15          # J in 1 megaton TNT
RHO0 = 1.225                     # kg/m^3, sea-level air density
SCALE_HEIGHT_M = 8500.0          # m, atmospheric scale height
CD_ENTRY = 2.0                   # drag coefficient used for entry deceleration

AIRBURST_MAX_DIAMETER_M = 200.0
SMALL_BODY_DIAMETER_M = 50.0
MIN_MASS_FRACTION = 0.01
MIN_VELOCITY_FRACTION = 0.1

# Material tensile strength (Pa) by upper density bound (kg/m^3)
STRENGTH_BRACKETS = (
    (1000.0, 1e5),   # cometary / icy
    (2000.0, 1e6),   # carbonaceous
    (3500.0, 5e6),   # rocky
)
STRENGTH_METALLIC = 1e7

# Crater scaling (Schmidt-Holsapple pi-groups)
MU = 0.41
NU = 0.41
ALPHA = (2.0 * MU + NU) / (3.0 * NU)
BETA = 2.0 * NU / 3.0
K1_LAND = 1.161
K1_OCEAN = 1.88
TARGET_DENSITIES = {"land": 2500.0, "ocean": 1000.0}
MIN_CRATER_TO_PROJECTILE = 15.0
DEPTH_TO_DIAMETER = 1.0 / 5.0

# Tsunami (Ward & Asphaug form)
DEFAULT_OCEAN_DEPTH_KM = 4.0
SHORE_DEPTH_KM = 0.01
MAX_COASTAL_HEIGHT_M = 300.0
TSUNAMI_ENERGY_NORM_J = 4.2e15

KMH_TO_MPH = 0.621371

SurfaceType = Literal["land", "ocean"]

# Coarse continental land mask: (lat_min, lat_max, lon_min, lon_max), open intervals
LAND_BOXES = {
    "north_america": (15.0, 75.0, -170.0, -50.0),
    "south_america": (-55.0, 15.0, -82.0, -35.0),
    "europe":        (35.0, 70.0, -10.0, 60.0),
    "africa":        (-35.0, 37.0, -20.0, 55.0),
    "asia":          (-10.0, 75.0, 25.0, 180.0),
    "australia":     (-45.0, -10.0, 110.0, 155.0),
}


class InvalidParameterError(ValueError):
    """Raised when impact inputs are outside their physical domain."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise InvalidParameterError(message)


def _require_finite(name: str, value: float) -> None:
    _require(isinstance(value, (int, float)) and isfinite(value), f"{name} must be a finite number, got {value!r}.")


# -----------------------------
# Input records
# -----------------------------
@dataclass(frozen=True)
class AsteroidParameters:
    diameter_m: float
    velocity_kmps: float
    angle_deg: float  # to HORIZONTAL
    density_kgpm3: float = 3000.0
    azimuth_deg: float = 0.0
    distance_km: float | None = None  # trajectory start; None -> default

    @property
    def radius_m(self) -> float:
        return 0.5 * self.diameter_m

    @property
    def volume_m3(self) -> float:
        return (4.0 / 3.0) * pi * self.radius_m**3

    @property
    def mass_kg(self) -> float:
        return self.density_kgpm3 * self.volume_m3

    @property
    def velocity_mps(self) -> float:
        return self.velocity_kmps * 1000.0

    @property
    def angle_rad(self) -> float:
        return radians(self.angle_deg)

    def validate(self) -> "AsteroidParameters":
        for name in ("diameter_m", "velocity_kmps", "angle_deg", "density_kgpm3", "azimuth_deg"):
            _require_finite(name, getattr(self, name))
        _require(self.diameter_m > 0.0, f"diameter_m must be > 0, got {self.diameter_m}.")
        _require(self.velocity_kmps > 0.0, f"velocity_kmps must be > 0, got {self.velocity_kmps}.")
        _require(self.density_kgpm3 > 0.0, f"density_kgpm3 must be > 0, got {self.density_kgpm3}.")
        _require(0.0 < self.angle_deg <= 90.0, f"angle_deg must be in (0, 90], got {self.angle_deg}.")
        if self.distance_km is not None:
            _require_finite("distance_km", self.distance_km)
            _require(self.distance_km > 0.0, f"distance_km must be > 0, got {self.distance_km}.")
        return self


@dataclass(frozen=True)
class ImpactLocation:
    latitude_deg: float
    longitude_deg: float

    @property
    def surface_type(self) -> SurfaceType:
        return classify_surface(self.latitude_deg, self.longitude_deg)

    def validate(self) -> "ImpactLocation":
        _require_finite("latitude_deg", self.latitude_deg)
        _require_finite("longitude_deg", self.longitude_deg)
        _require(-90.0 <= self.latitude_deg <= 90.0, f"latitude_deg must be in [-90, 90], got {self.latitude_deg}.")
        _require(-180.0 <= self.longitude_deg <= 180.0,
                 f"longitude_deg must be in [-180, 180], got {self.longitude_deg}.")
        return self


# -----------------------------
# Derived records
# -----------------------------
@dataclass(frozen=True)
class AtmosphericEntryResult:
    surviving_mass_fraction: float
    surviving_velocity_fraction: float
    did_airburst: bool
    fragmentation_altitude_km: float
    dynamic_pressure_pa: float
    fragmentation_ratio: float
    strength_pa: float


@dataclass(frozen=True)
class EnergyBudget:
    surface_type: SurfaceType
    kinetic_energy_j: float
    effective_energy_j: float
    impact_efficiency: float
    energy_megatons: float
    effective_mass_kg: float
    effective_velocity_kmps: float
    entry: AtmosphericEntryResult


@dataclass(frozen=True)
class CraterDimensions:
    diameter_km: float
    depth_km: float
    volume_m3: float


@dataclass(frozen=True)
class ThermalEffects:
    fireball_radius_km: float
    fireball_diameter_km: float
    thermal_radius_km: float
    radiation_radius_km: float
    burn_radius_3rd_km: float
    burn_radius_2nd_km: float
    burn_radius_1st_km: float


@dataclass(frozen=True)
class AirBlastEffects:
    airblast_radius_km: float       # ~5 psi
    peak_overpressure_psi: float
    building_collapse_radius_km: float
    glass_breakage_radius_km: float
    peak_decibel: float


@dataclass(frozen=True)
class WindEffects:
    peak_speed_kmh: float
    peak_speed_mph: float
    tree_damage_radius_km: float
    comparison: str


@dataclass(frozen=True)
class SeismicEffects:
    magnitude: float
    felt_distance_km: float
    shaking_radius_km: float
    comparison: str


@dataclass(frozen=True)
class TsunamiEffects:
    initial_height_m: float
    wavelength_km: float
    wave_speed_kmh: float
    runup_factor: float
    coastal_height_m: float
    inundation_distance_km: float
    effective_radius_km: float


@dataclass(frozen=True)
class SecondaryEffects:
    thermal: ThermalEffects
    air_blast: AirBlastEffects
    wind: WindEffects
    seismic: SeismicEffects
    tsunami: Optional[TsunamiEffects]
    ejecta_volume_m3: float
    dust_in_atmosphere_m3: float
    energy_comparison: str


@dataclass(frozen=True)
class ImpactEffects:
    """Everything one impact produces; recomputed from scratch on every input change."""
    surface_type: SurfaceType
    energy: EnergyBudget
    crater: CraterDimensions
    thermal: ThermalEffects
    air_blast: AirBlastEffects
    wind: WindEffects
    seismic: SeismicEffects
    tsunami: Optional[TsunamiEffects]
    ejecta_volume_m3: float
    dust_in_atmosphere_m3: float
    energy_comparison: str

    @property
    def energy_megatons(self) -> float:
        return self.energy.energy_megatons

    @property
    def crater_diameter_km(self) -> float:
        return self.crater.diameter_km

    @property
    def airblast_radius_km(self) -> float:
        return self.air_blast.airblast_radius_km

    @property
    def seismic_magnitude(self) -> float:
        return self.seismic.magnitude

    @property
    def did_airburst(self) -> bool:
        return self.energy.entry.did_airburst


# ---------- Location ----------
def classify_surface(latitude_deg: float, longitude_deg: float) -> SurfaceType:
    """Coarse land/ocean mask from continental bounding boxes (not coastline accurate)."""
    for lat_min, lat_max, lon_min, lon_max in LAND_BOXES.values():
        if lat_min < latitude_deg < lat_max and lon_min < longitude_deg < lon_max:
            return "land"
    return "ocean"


# ---------- ATMOSPHERIC ENTRY ----------
def material_strength_pa(density_kgpm3: float) -> float:
    for upper, strength in STRENGTH_BRACKETS:
        if density_kgpm3 < upper:
            return strength
    return STRENGTH_METALLIC


def enter_atmosphere(diameter_m: float, velocity_mps: float, angle_deg: float,
                     density_kgpm3: float) -> AtmosphericEntryResult:
    """
    Fragmentation / ablation estimate for a body crossing the atmosphere.

    Breakup altitude is where 1/2 rho(z) v^2 reaches the material strength in an
    exponential atmosphere. The fragmentation ratio compares the peak (sea-level)
    dynamic pressure with that strength: > 1 means the body breaks up before
    reaching the ground. Inputs are expected to be validated by the caller.
    """
    S = material_strength_pa(density_kgpm3)
    v = velocity_mps
    r = 0.5 * diameter_m

    z_frag_m = max(0.0, -SCALE_HEIGHT_M * log((2.0 * S) / (RHO0 * v * v)))
    rho_frag = RHO0 * exp(-z_frag_m / SCALE_HEIGHT_M)
    q_peak = 0.5 * RHO0 * v * v
    ratio = q_peak / S

    mass_frac = 1.0
    vel_frac = 1.0
    airburst = False

    if diameter_m < AIRBURST_MAX_DIAMETER_M:
        if ratio > 1.0:
            airburst = True
            excess = ratio - 1.0
            ablation = exp(-diameter_m / 100.0)
            # share of the peak load above strength, saturates at 1
            mass_frac = max(MIN_MASS_FRACTION, 1.0 - 0.5 * ablation * (excess / ratio))

            volume = (4.0 / 3.0) * pi * r**3
            cross_section = pi * r**2
            drag = (CD_ENTRY * rho_frag * cross_section) / (2.0 * density_kgpm3 * volume)
            vel_frac = max(MIN_VELOCITY_FRACTION, 1.0 - drag * excess * 0.3)

        if diameter_m < SMALL_BODY_DIAMETER_M:
            loss = exp(-diameter_m / 25.0)
            mass_frac *= 1.0 - 0.7 * loss
            vel_frac *= 1.0 - 0.5 * loss

    return AtmosphericEntryResult(
        surviving_mass_fraction=min(1.0, max(MIN_MASS_FRACTION, mass_frac)),
        surviving_velocity_fraction=min(1.0, max(MIN_VELOCITY_FRACTION, vel_frac)),
        did_airburst=airburst,
        fragmentation_altitude_km=(z_frag_m / 1000.0) if airburst else 0.0,
        dynamic_pressure_pa=q_peak,
        fragmentation_ratio=ratio,
        strength_pa=S,
    )


# ---------- Energetics ----------
def impact_efficiency(angle_rad: float) -> float:
    """Shallow impacts couple less energy into cratering: sin(theta)^(1/3)."""
    return sin(angle_rad) ** (1.0 / 3.0)


def classify_and_compute_energy(asteroid: AsteroidParameters, location: ImpactLocation) -> EnergyBudget:
    entry = enter_atmosphere(asteroid.diameter_m, asteroid.velocity_mps,
                             asteroid.angle_deg, asteroid.density_kgpm3)
    m_eff = asteroid.mass_kg * entry.surviving_mass_fraction
    v_eff = asteroid.velocity_mps * entry.surviving_velocity_fraction

    ke = 0.5 * m_eff * v_eff**2
    eff = impact_efficiency(asteroid.angle_rad)
    e_eff = ke * eff
    return EnergyBudget(
        surface_type=location.surface_type,
        kinetic_energy_j=ke,
        effective_energy_j=e_eff,
        impact_efficiency=eff,
        energy_megatons=e_eff / J_PER_MT_TNT,
        effective_mass_kg=m_eff,
        effective_velocity_kmps=v_eff / 1000.0,
        entry=entry,
    )


# ---------- Crater scaling ----------
def compute_crater(diameter_m: float, effective_velocity_mps: float, projectile_density: float,
                   surface_type: SurfaceType, angle_rad: float) -> CraterDimensions:
    """
    D = K1 * L^alpha * (rho_p/rho_t)^beta * Fr^mu * sin(theta)^(1/3), Fr = v^2/(g L).
    Never smaller than 15 projectile diameters.
    """
    L = diameter_m
    v = effective_velocity_mps
    rho_t = TARGET_DENSITIES[surface_type]
    K1 = K1_OCEAN if surface_type == "ocean" else K1_LAND

    froude = (v * v) / (G_EARTH * L)
    D_m = K1 * (L ** ALPHA) * ((projectile_density / rho_t) ** BETA) * (froude ** MU) * impact_efficiency(angle_rad)

    D_km = max(D_m / 1000.0, MIN_CRATER_TO_PROJECTILE * L / 1000.0)
    depth_km = D_km * DEPTH_TO_DIAMETER
    volume_km3 = (pi / 4.0) * (D_km / 2.0) ** 2 * depth_km
    return CraterDimensions(diameter_km=D_km, depth_km=depth_km, volume_m3=volume_km3 * 1e9)


# ---------- Comparison tables (first match wins) ----------
ENERGY_COMPARISONS = (
    (0.02, lambda mt: f"{mt * 1000:.0f} kilotons (small tactical nuke)"),
    (1.0, lambda mt: f"{mt * 50:.0f}x Hiroshima bomb"),
    (50.0, lambda mt: f"{mt / 15:.1f}x Castle Bravo test"),
    (1000.0, lambda mt: f"{mt / 50:.1f}x Tsar Bomba"),
    (100000.0, lambda mt: f"{mt / 1000:.0f}x all nuclear weapons on Earth"),
)
WIND_COMPARISONS = (
    (120.0, lambda kmh: "Hurricane Category 1"),
    (180.0, lambda kmh: "Hurricane Category 3"),
    (250.0, lambda kmh: "Hurricane Category 5"),
    (400.0, lambda kmh: f"{kmh / 75:.1f}x Hurricane Katrina"),
    (600.0, lambda kmh: "EF5 Tornado winds"),
)
SEISMIC_COMPARISONS = (
    (4.0, "Minor tremor"),
    (5.0, "Moderate earthquake"),
    (6.0, "Strong earthquake (like 1994 Northridge)"),
    (7.0, "Major earthquake (like 2010 Haiti)"),
    (8.0, "Great earthquake (like 1906 San Francisco)"),
    (9.0, "Massive earthquake (like 2011 Tōhoku)"),
)


def energy_comparison(megatons: float) -> str:
    for upper, fmt in ENERGY_COMPARISONS:
        if megatons < upper:
            return fmt(megatons)
    return "Extinction-level event"


def wind_comparison(kmh: float) -> str:
    for upper, fmt in WIND_COMPARISONS:
        if kmh < upper:
            return fmt(kmh)
    return f"{kmh / 150:.0f}x strongest tornado ever recorded"


def earthquake_comparison(magnitude: float) -> str:
    for upper, label in SEISMIC_COMPARISONS:
        if magnitude < upper:
            return label
    return "Mega-earthquake (unprecedented in modern times)"


# ---------- Secondary effects ----------
def seismic_magnitude(kinetic_energy_j: float) -> float:
    if kinetic_energy_j <= 0.0:
        return 0.0
    return max(0.0, (2.0 / 3.0) * log10(kinetic_energy_j) - 3.2)


def _require_energy_and_depth(energy_megatons: float, ocean_depth_km: float) -> None:
    _require_finite("energy_megatons", energy_megatons)
    _require(energy_megatons >= 0.0, f"energy_megatons must be >= 0, got {energy_megatons}.")
    _require_finite("ocean_depth_km", ocean_depth_km)
    _require(ocean_depth_km > 0.0, f"ocean_depth_km must be > 0, got {ocean_depth_km}.")


def tsunami_effects(energy_megatons: float, ocean_depth_km: float = DEFAULT_OCEAN_DEPTH_KM) -> TsunamiEffects:
    _require_energy_and_depth(energy_megatons, ocean_depth_km)
    E_norm = energy_megatons * J_PER_MT_TNT / TSUNAMI_ENERGY_NORM_J
    d_norm = ocean_depth_km / DEFAULT_OCEAN_DEPTH_KM

    h0 = 0.14 * (E_norm ** 0.33) * (d_norm ** -0.5)
    wavelength = 2.5 * (E_norm ** 0.25)
    g_kmps2 = G_EARTH / 1000.0
    speed_kmh = sqrt(g_kmps2 * ocean_depth_km) * 3600.0

    # Green's law shoaling
    runup = (ocean_depth_km / SHORE_DEPTH_KM) ** 0.25
    coastal = min(h0 * runup, MAX_COASTAL_HEIGHT_M)
    return TsunamiEffects(
        initial_height_m=h0,
        wavelength_km=wavelength,
        wave_speed_kmh=speed_kmh,
        runup_factor=runup,
        coastal_height_m=coastal,
        inundation_distance_km=coastal * 0.3,
        effective_radius_km=min(wavelength * 50.0, 5000.0),
    )


def compute_secondary_effects(energy_megatons: float, crater: CraterDimensions, surface_type: SurfaceType,
                              ocean_depth_km: float = DEFAULT_OCEAN_DEPTH_KM,
                              kinetic_energy_j: float | None = None) -> SecondaryEffects:
    """
    Empirical power laws on the effective yield E (Mt). Radii are in km.
    Seismic magnitude uses the pre-efficiency kinetic energy when given.
    Negative or non-finite energies and non-positive depths raise
    InvalidParameterError.
    """
    _require_energy_and_depth(energy_megatons, ocean_depth_km)
    if kinetic_energy_j is not None:
        _require_finite("kinetic_energy_j", kinetic_energy_j)
        _require(kinetic_energy_j >= 0.0, f"kinetic_energy_j must be >= 0, got {kinetic_energy_j}.")
    E = energy_megatons
    KE = energy_megatons * J_PER_MT_TNT if kinetic_energy_j is None else kinetic_energy_j

    airblast = 2.2 * E ** (1.0 / 3.0)
    thermal_r = 1.9 * E ** 0.41
    fireball_r = 0.14 * E ** 0.4
    thermal = ThermalEffects(
        fireball_radius_km=fireball_r,
        fireball_diameter_km=2.0 * fireball_r,
        thermal_radius_km=thermal_r,
        radiation_radius_km=1.5 * E ** 0.38,
        burn_radius_3rd_km=thermal_r,
        burn_radius_2nd_km=thermal_r * 1.4,
        burn_radius_1st_km=thermal_r * 1.8,
    )

    if E > 0.0:
        overpressure = (E / airblast) ** 0.7 * 100.0
        decibel = max(0.0, 170.0 + 10.0 * log10(E / airblast**2))
    else:
        overpressure, decibel = 0.0, 0.0
    air_blast = AirBlastEffects(
        airblast_radius_km=airblast,
        peak_overpressure_psi=overpressure,
        building_collapse_radius_km=E ** 0.33 * 1.5,
        glass_breakage_radius_km=airblast * 2.5,
        peak_decibel=decibel,
    )

    wind_kmh = E ** 0.35 * 450.0
    wind = WindEffects(
        peak_speed_kmh=wind_kmh,
        peak_speed_mph=wind_kmh * KMH_TO_MPH,
        tree_damage_radius_km=E ** 0.33 * 1.8,
        comparison=wind_comparison(wind_kmh),
    )

    M = seismic_magnitude(KE)
    seismic = SeismicEffects(
        magnitude=M,
        felt_distance_km=M * 100.0,
        shaking_radius_km=(10.0 ** (M - 4.0)) * 10.0 if M > 6.0 else 0.0,
        comparison=earthquake_comparison(M),
    )

    tsunami = tsunami_effects(E, ocean_depth_km) if surface_type == "ocean" else None

    # full cylinder over the crater footprint, not the bowl volume
    ejecta_m3 = pi * (crater.diameter_km / 2.0) ** 2 * crater.depth_km * 1e9

    return SecondaryEffects(
        thermal=thermal,
        air_blast=air_blast,
        wind=wind,
        seismic=seismic,
        tsunami=tsunami,
        ejecta_volume_m3=ejecta_m3,
        dust_in_atmosphere_m3=ejecta_m3 * 0.1,
        energy_comparison=energy_comparison(E),
    )


# ---------- Entry point ----------
def compute_impact_effects(asteroid: AsteroidParameters, location: ImpactLocation,
                           ocean_depth_km: float = DEFAULT_OCEAN_DEPTH_KM) -> ImpactEffects:
    """Full pipeline: entry -> energy/location -> crater -> secondary effects."""
    asteroid.validate()
    location.validate()
    _require_finite("ocean_depth_km", ocean_depth_km)
    _require(ocean_depth_km > 0.0, f"ocean_depth_km must be > 0, got {ocean_depth_km}.")

    budget = classify_and_compute_energy(asteroid, location)
    crater = compute_crater(
        asteroid.diameter_m,
        budget.effective_velocity_kmps * 1000.0,
        asteroid.density_kgpm3,
        budget.surface_type,
        asteroid.angle_rad,
    )
    sec = compute_secondary_effects(
        budget.energy_megatons, crater, budget.surface_type,
        ocean_depth_km=ocean_depth_km,
        kinetic_energy_j=budget.kinetic_energy_j,
    )
    return ImpactEffects(
        surface_type=budget.surface_type,
        energy=budget,
        crater=crater,
        thermal=sec.thermal,
        air_blast=sec.air_blast,
        wind=sec.wind,
        seismic=sec.seismic,
        tsunami=sec.tsunami,
        ejecta_volume_m3=sec.ejecta_volume_m3,
        dust_in_atmosphere_m3=sec.dust_in_atmosphere_m3,
        energy_comparison=sec.energy_comparison,
    )
