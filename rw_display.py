# rw_display.py
# Presentation helpers: display rounding, the outputs table and the wall
# schematic. Rounding lives here only; the verdicts come unrounded from
# rw_engine.

import math

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon
from matplotlib.patches import Patch

from rw_engine import StabilityResult, WallInput

# --- Schematic colors ---
CONCRETE_COLOR = "#B0B0B0"  # concrete gray
SOIL_BACK_COLOR = "#E6D3A3"  # soil (backfill)
ACTIVE_COLOR = ("#F5B041", "#B9770E")
BEARING_COLOR = ("#A855F7", "#6D28D9")

OK_LABEL = "OK"
FAIL_LABEL = "ERRO"

# field -> decimals shown in the results card
DISPLAY_DECIMALS = {
    "ka": 3,
    "active_thrust": 2,
    "self_weight": 2,
    "sliding_factor": 2,
    "overturning_factor": 2,
    "eccentricity": 3,
    "max_bearing_pressure": 1,
}

OUTPUT_KEYS = [
    "base_width", "base_thickness", "stem_thickness",
    "ka", "active_thrust", "overturning_moment",
    "self_weight", "weight_lever_arm", "resisting_moment",
    "sliding_resistance", "sliding_factor", "overturning_factor",
    "eccentricity", "max_bearing_pressure",
]

UNITS = {
    "base_width": "m",
    "base_thickness": "m",
    "stem_thickness": "m",
    "ka": "-",
    "active_thrust": "kN/m",
    "overturning_moment": "kN·m/m",
    "self_weight": "kN/m",
    "weight_lever_arm": "m",
    "resisting_moment": "kN·m/m",
    "sliding_resistance": "kN/m",
    "sliding_factor": "-",
    "overturning_factor": "-",
    "eccentricity": "m",
    "max_bearing_pressure": "kPa",
}

SYMBOL = {
    "base_width": "B",
    "base_thickness": "t_base",
    "stem_thickness": "t_stem",
    "ka": "Ka",
    "active_thrust": "Pa",
    "overturning_moment": "Mo",
    "self_weight": "W",
    "weight_lever_arm": "x_W",
    "resisting_moment": "Mr",
    "sliding_resistance": "R_desl",
    "sliding_factor": "FS_desl",
    "overturning_factor": "FS_tomb",
    "eccentricity": "e",
    "max_bearing_pressure": "σ_max",
}

DESC = {
    "base_width": "Footing width (inner + outer base)",
    "base_thickness": "Average footing thickness",
    "stem_thickness": "Average stem thickness",
    "ka": "Rankine active earth pressure coefficient",
    "active_thrust": "Active thrust (soil + surcharge)",
    "overturning_moment": "Overturning moment about the toe",
    "self_weight": "Concrete self-weight",
    "weight_lever_arm": "Weight lever arm from the toe",
    "resisting_moment": "Resisting moment",
    "sliding_resistance": "Sliding resistance (friction + cohesion)",
    "sliding_factor": "Factor of safety against sliding",
    "overturning_factor": "Factor of safety against overturning",
    "eccentricity": "Eccentricity of the resultant",
    "max_bearing_pressure": "Maximum bearing pressure",
}


def badge(ok):
    return OK_LABEL if ok else FAIL_LABEL


def _fmt(v, decimals):
    # inf -> "inf", nan -> "nan"
    if not math.isfinite(v):
        return str(v)
    return f"{v:.{decimals}f}"


def format_result(result: StabilityResult) -> dict:
    """Strings for the results card, plus OK/ERRO badges."""
    out = {k: _fmt(getattr(result, k), d) for k, d in DISPLAY_DECIMALS.items()}
    out["sliding"] = badge(result.sliding_ok)
    out["overturning"] = badge(result.overturning_ok)
    out["bearing"] = badge(result.bearing_ok)
    return out


def bearing_pressures(result: StabilityResult):
    """(q_toe, q_heel) of the trapezoidal distribution, nan when B is zero."""
    B = result.base_width
    V = result.self_weight
    e = result.eccentricity
    if abs(B) <= 1e-12:
        return float("nan"), float("nan")
    q_avg = V / B
    return q_avg * (1 + 6 * e / B), q_avg * (1 - 6 * e / B)


def round_df_3(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of df with all float columns rounded to 3 decimals."""
    out = df.copy()
    for c in out.columns:
        if pd.api.types.is_float_dtype(out[c]):
            out[c] = out[c].round(3)
    return out


def outputs_table(result: StabilityResult) -> pd.DataFrame:
    df = pd.DataFrame({
        "Symbol": [SYMBOL[k] for k in OUTPUT_KEYS],
        "Description": [DESC[k] for k in OUTPUT_KEYS],
        "Unit": [UNITS[k] for k in OUTPUT_KEYS],
        "Value": [float(getattr(result, k)) for k in OUTPUT_KEYS],
    })
    return round_df_3(df)


def verdicts_table(result: StabilityResult) -> pd.DataFrame:
    return pd.DataFrame({
        "Check": ["Sliding", "Overturning", "Bearing"],
        "Value": [result.sliding_factor, result.overturning_factor, result.max_bearing_pressure],
        "Status": [badge(result.sliding_ok), badge(result.overturning_ok), badge(result.bearing_ok)],
    })


def _finite(*vals):
    return all(math.isfinite(v) for v in vals)


def bearing_note(result: StabilityResult):
    """Why no bearing trapezoid can be drawn for ``result``."""
    B = result.base_width
    if not math.isfinite(B) or B <= 0:
        return "Bearing: zero base width"
    if not _finite(result.eccentricity, result.max_bearing_pressure):
        return "Bearing: non-finite result"
    return "Bearing: resultant outside middle third"


def draw_wall_schematic(wall: WallInput, result: StabilityResult, show_pressures=True, show_dims=True):
    """
    Schematic of the simplified model:
      - footing B x t_base, stem t_stem x H standing at x = outer base
      - backfill over the heel, active pressure triangle on the heel line
      - bearing trapezoid below the footing only when |e| <= B/6
    Degenerate geometry is drawn as far as it goes and never raises.
    """
    B = result.base_width
    t_f = result.base_thickness
    t_s = result.stem_thickness
    H = wall.height
    x_front = wall.outer_base

    # drawing scale for pressure shapes and limits
    span = max(v for v in (B, t_s, H, 1.0) if math.isfinite(v))

    fig, ax = plt.subplots(figsize=(10, 5.6))

    # -------------------------
    # Geometry
    # -------------------------
    if _finite(B, t_f) and B > 0 and t_f > 0:
        footing = np.array([[0, 0], [B, 0], [B, t_f], [0, t_f]])
        ax.add_patch(Polygon(footing, closed=True, fill=True, facecolor=CONCRETE_COLOR, edgecolor="none", zorder=4))
        ax.add_patch(Polygon(footing, closed=True, fill=False, linewidth=1, edgecolor="black", zorder=5))

    if _finite(t_s, H, t_f) and t_s > 0 and H > 0:
        stem = np.array([
            [x_front, t_f],
            [x_front, t_f + H],
            [x_front + t_s, t_f + H],
            [x_front + t_s, t_f],
        ])
        ax.add_patch(Polygon(stem, closed=True, fill=True, facecolor=CONCRETE_COLOR, edgecolor="none", zorder=5))
        ax.add_patch(Polygon(stem, closed=True, fill=False, linewidth=1, edgecolor="black", zorder=6))

    # Backfill over the heel
    x_back = x_front + t_s
    if _finite(B, x_back, t_f, H) and B > x_back and H > 0:
        soil_poly = np.array([[x_back, t_f], [B, t_f], [B, t_f + H], [x_back, t_f + H]])
        ax.add_patch(Polygon(soil_poly, closed=True, facecolor=SOIL_BACK_COLOR, edgecolor="none", alpha=0.70, zorder=1))

    bearing_depth = 0.0
    bearing_drawn = False
    if show_pressures:
        # Active pressure triangle on the heel line, y = 0..H
        xP = B if math.isfinite(B) else 0.0
        top = (t_f if math.isfinite(t_f) else 0.0) + H
        pa = np.array([[xP, 0], [xP, top], [xP + 0.14 * span, 0]])
        ax.add_patch(Polygon(pa, closed=True, facecolor=ACTIVE_COLOR[0], edgecolor=ACTIVE_COLOR[1], alpha=0.85, zorder=2))
        ax.text(xP + 0.16 * span, top / 2, f"Pa = {_fmt(result.active_thrust, 2)} kN/m", fontsize=9, va="center")

        # Bearing pressure, drawn below the footing (compression downward)
        q_toe, q_heel = bearing_pressures(result)
        kern_ok = _finite(result.eccentricity, B) and B > 0 and abs(result.eccentricity) <= B / 6.0
        if kern_ok and _finite(q_toe, q_heel):
            q_max_draw = max(q_toe, q_heel, 1e-9)
            scale = 0.45 * B / q_max_draw
            bearing_depth = q_max_draw * scale
            poly_q = [(0, 0), (B, 0), (B, -max(q_heel, 0.0) * scale), (0, -max(q_toe, 0.0) * scale)]
            ax.add_patch(Polygon(poly_q, closed=True, facecolor=BEARING_COLOR[0], edgecolor=BEARING_COLOR[1], alpha=0.20, linewidth=2))
            ax.text(B / 2, -bearing_depth - 0.15, f"σ_max = {_fmt(result.max_bearing_pressure, 1)} kPa", ha="center", va="top", fontsize=8, color="#4C1D95")
            bearing_drawn = True
        else:
            ax.text(max(B, 0.0) / 2 if math.isfinite(B) else 0.0, -0.3, bearing_note(result),
                    ha="center", va="top", fontsize=8, color="#B91C1C")
            bearing_depth = 0.5

    # -------------------------
    # Dimensions outside geometry
    # -------------------------
    if show_dims:
        y_base = t_f if math.isfinite(t_f) else 0.0
        if _finite(B) and B > 0:
            ydim = -bearing_depth - 0.6
            ax.annotate("", xy=(0, ydim), xytext=(B, ydim),
                        arrowprops=dict(arrowstyle="<->", lw=1.2, color="0.30"))
            ax.text(B / 2, ydim + 0.08, f"B={B:.3f} m", fontsize=8, ha="center", color="0.25")
            ax.text(wall.outer_base / 2, y_base + 0.1, f"Toe {wall.outer_base:.2f}", fontsize=8, ha="center", color="0.20")
            ax.text(B - wall.inner_base / 2, y_base + 0.1, f"Heel {wall.inner_base:.2f}", fontsize=8, ha="center", color="0.20")

        if _finite(H) and H > 0:
            xdim = -0.15 * span
            ax.annotate("", xy=(xdim, y_base), xytext=(xdim, y_base + H),
                        arrowprops=dict(arrowstyle="<->", lw=1.2, color="0.30"))
            ax.text(xdim - 0.03 * span, y_base + H / 2, f"H={H:.3f} m", fontsize=8, rotation=90, va="center", ha="right", color="0.25")

    # -------------------------
    # Legend
    # -------------------------
    legend_items = [
        Patch(facecolor=CONCRETE_COLOR, edgecolor="black", label="Concrete"),
        Patch(facecolor=SOIL_BACK_COLOR, edgecolor="none", alpha=0.70, label="Soil"),
    ]
    if show_pressures:
        legend_items.append(Patch(facecolor=ACTIVE_COLOR[0], edgecolor=ACTIVE_COLOR[1], alpha=0.85, label="Pa"))
    if bearing_drawn:
        legend_items.append(Patch(facecolor=BEARING_COLOR[0], edgecolor=BEARING_COLOR[1], alpha=0.20, label="Bearing"))
    ax.legend(handles=legend_items, loc="upper left", fontsize=8, frameon=True, framealpha=0.9)

    # view
    ax.set_aspect("equal", adjustable="box")
    ax.set_xlim(-0.35 * span, 1.45 * span)
    y_top = (t_f if math.isfinite(t_f) else 0.0) + (H if math.isfinite(H) else 0.0)
    ax.set_ylim(min(-bearing_depth - 1.0, -0.35 * span), max(y_top + 0.9, 0.35 * span))
    ax.axis("off")
    fig.tight_layout(pad=1.0)
    return fig
