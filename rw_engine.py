# rw_engine.py
# Simplified Rankine stability check for a cantilever / gravity retaining wall.
# Pure computation: no I/O, no logging, no state. Divisions by zero come back
# as inf / nan instead of raising.

import math
from dataclasses import dataclass, fields

import numpy as np

MIN_SLIDING_FS = 1.5
MIN_OVERTURNING_FS = 2.0


def deg2rad(x):
    return np.deg2rad(x)


@dataclass(frozen=True)
class WallInput:
    """One wall, SI units (m, kN/m³, kN/m², degrees)."""

    height: float
    soil_unit_weight: float
    friction_angle: float
    cohesion: float
    surcharge: float
    inner_base: float
    outer_base: float
    higher_footing: float
    lower_footing: float
    top_width: float
    stem_base_width: float
    concrete_unit_weight: float
    base_friction: float
    allowable_bearing: float


@dataclass(frozen=True)
class StabilityResult:
    ka: float
    active_thrust: float
    self_weight: float
    sliding_factor: float
    overturning_factor: float
    eccentricity: float
    max_bearing_pressure: float
    sliding_ok: bool
    overturning_ok: bool
    bearing_ok: bool

    # intermediate quantities, reported but not part of the verdicts
    base_width: float
    base_thickness: float
    stem_thickness: float
    overturning_moment: float
    resisting_moment: float
    weight_lever_arm: float
    sliding_resistance: float

    def as_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def non_finite_fields(self):
        """Names of float fields that came out as inf or nan."""
        out = []
        for f in fields(self):
            v = getattr(self, f.name)
            if isinstance(v, float) and not math.isfinite(v):
                out.append(f.name)
        return out


def evaluate(wall: WallInput) -> StabilityResult:
    H = np.float64(wall.height)
    gamma_s = np.float64(wall.soil_unit_weight)
    phi = np.float64(wall.friction_angle)
    c = np.float64(wall.cohesion)
    q = np.float64(wall.surcharge)
    gamma_c = np.float64(wall.concrete_unit_weight)
    mu = np.float64(wall.base_friction)
    sigma_adm = np.float64(wall.allowable_bearing)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        # Rankine active, horizontal backfill
        Ka = np.tan(deg2rad(45.0 - phi / 2.0)) ** 2
        Pa = 0.5 * gamma_s * H ** 2 * Ka + q * H * Ka
        Mo = Pa * H / 3.0

        # Geometry: averaged footing and stem thicknesses
        B = np.float64(wall.inner_base) + np.float64(wall.outer_base)
        t_base = (np.float64(wall.higher_footing) + np.float64(wall.lower_footing)) / 2.0
        t_stem = (np.float64(wall.top_width) + np.float64(wall.stem_base_width)) / 2.0

        # Weights; stem taken as a rectangle over the full height
        V_base = B * t_base
        V_stem = t_stem * H
        W = gamma_c * (V_base + V_stem)
        x_W = np.float64(wall.outer_base) + t_stem / 2.0
        Mr = W * x_W

        # Checks
        R_desl = W * mu + c * B
        FS_desl = R_desl / Pa
        FS_tomb = Mr / Mo
        e = (Mr - Mo) / W
        sigma_max = (W / B) * (1.0 + (6.0 * e) / B)

    bearing_ok = bool(sigma_max <= sigma_adm) and bool(abs(e) <= B / 6.0)

    return StabilityResult(
        ka=float(Ka),
        active_thrust=float(Pa),
        self_weight=float(W),
        sliding_factor=float(FS_desl),
        overturning_factor=float(FS_tomb),
        eccentricity=float(e),
        max_bearing_pressure=float(sigma_max),
        sliding_ok=bool(FS_desl >= MIN_SLIDING_FS),
        overturning_ok=bool(FS_tomb >= MIN_OVERTURNING_FS),
        bearing_ok=bearing_ok,
        base_width=float(B),
        base_thickness=float(t_base),
        stem_thickness=float(t_stem),
        overturning_moment=float(Mo),
        resisting_moment=float(Mr),
        weight_lever_arm=float(x_W),
        sliding_resistance=float(R_desl),
    )


def check_ranges(wall: WallInput):
    """Advisory messages for inputs outside their physical range.

    evaluate() never uses these; the UI shows them next to the results.
    """
    msgs = []

    def positive(name, label):
        v = getattr(wall, name)
        if not v > 0:
            msgs.append(f"{label} must be > 0 (got {v:g})")

    def non_negative(name, label):
        v = getattr(wall, name)
        if not v >= 0:
            msgs.append(f"{label} must be >= 0 (got {v:g})")

    positive("height", "Wall height")
    positive("soil_unit_weight", "Soil unit weight")
    positive("concrete_unit_weight", "Concrete unit weight")
    positive("allowable_bearing", "Allowable bearing pressure")

    phi = wall.friction_angle
    if not 0.0 <= phi < 90.0:
        msgs.append(f"Friction angle must be in [0, 90) degrees (got {phi:g})")

    non_negative("cohesion", "Cohesion")
    non_negative("surcharge", "Surcharge")
    for name, label in (
        ("inner_base", "Inner base"),
        ("outer_base", "Outer base"),
        ("higher_footing", "Higher footing thickness"),
        ("lower_footing", "Lower footing thickness"),
        ("top_width", "Stem top width"),
        ("stem_base_width", "Stem base width"),
    ):
        non_negative(name, label)

    if not wall.inner_base + wall.outer_base > 0:
        msgs.append("Base width (inner + outer) is zero; bearing pressure is undefined")

    mu = wall.base_friction
    if not 0.0 <= mu <= 1.0:
        msgs.append(f"Base friction coefficient outside the usual 0..1 range (got {mu:g})")

    return msgs
