import dataclasses
import math

import numpy as np
import pytest

from rw_engine import (
    MIN_OVERTURNING_FS,
    MIN_SLIDING_FS,
    StabilityResult,
    WallInput,
    check_ranges,
    evaluate,
)


def test_rankine_ka_for_30_degrees(default_wall):
    res = evaluate(default_wall)
    assert res.ka == pytest.approx(1.0 / 3.0)
    assert round(res.ka, 3) == 0.333


def test_active_thrust_soil_plus_surcharge(default_wall):
    res = evaluate(default_wall)
    # 0.5*18*9*Ka + 5*3*Ka with Ka = 1/3
    assert res.active_thrust == pytest.approx(27.0 + 5.0)
    assert res.overturning_moment == pytest.approx(res.active_thrust)


def test_default_wall_reference_values(default_wall):
    res = evaluate(default_wall)

    assert res.base_width == pytest.approx(2.0)
    assert res.base_thickness == pytest.approx(0.55)
    assert res.stem_thickness == pytest.approx(0.45)
    assert res.self_weight == pytest.approx(58.8)
    assert res.weight_lever_arm == pytest.approx(1.225)
    assert res.resisting_moment == pytest.approx(72.03)
    assert res.sliding_resistance == pytest.approx(29.4)

    assert res.sliding_factor == pytest.approx(29.4 / 32.0)
    assert res.overturning_factor == pytest.approx(72.03 / 32.0)
    assert res.eccentricity == pytest.approx(40.03 / 58.8)
    assert res.max_bearing_pressure == pytest.approx(89.445)

    assert res.sliding_ok is False
    assert res.overturning_ok is True
    # resultant falls outside the middle third
    assert res.bearing_ok is False


def test_thresholds():
    assert MIN_SLIDING_FS == 1.5
    assert MIN_OVERTURNING_FS == 2.0


def test_cohesion_adds_base_resistance(default_wall):
    wall = dataclasses.replace(default_wall, cohesion=10.0)
    res = evaluate(wall)
    assert res.sliding_resistance == pytest.approx(29.4 + 20.0)
    assert res.sliding_factor == pytest.approx(49.4 / 32.0)
    assert res.sliding_ok is True


def test_cohesion_does_not_change_thrust(default_wall):
    a = evaluate(default_wall)
    b = evaluate(dataclasses.replace(default_wall, cohesion=25.0))
    assert a.active_thrust == b.active_thrust


def test_evaluate_is_deterministic(default_wall):
    assert evaluate(default_wall) == evaluate(default_wall)


def test_result_fields_are_plain_python_types(default_wall):
    res = evaluate(default_wall)
    for name, value in res.as_dict().items():
        if name.endswith("_ok"):
            assert type(value) is bool
        else:
            assert type(value) is float


def test_wall_input_is_immutable(default_wall):
    with pytest.raises(dataclasses.FrozenInstanceError):
        default_wall.height = 5.0


def test_bearing_ok_monotonic_in_allowable_bearing(default_wall):
    # narrow toe keeps the resultant inside the middle third
    wall = dataclasses.replace(default_wall, inner_base=2.0, outer_base=0.0)
    verdicts = [
        evaluate(dataclasses.replace(wall, allowable_bearing=float(s))).bearing_ok
        for s in np.linspace(0.0, 400.0, 81)
    ]
    assert verdicts[0] is False
    assert verdicts[-1] is True
    first_ok = verdicts.index(True)
    assert all(verdicts[first_ok:])


def test_eccentricity_exactly_on_kern_limit_passes(default_wall):
    # no lateral load and no stem: e = x_W = 0.5 = B/6
    wall = dataclasses.replace(
        default_wall,
        soil_unit_weight=0.0,
        surcharge=0.0,
        inner_base=2.5,
        outer_base=0.5,
        higher_footing=0.5,
        lower_footing=0.5,
        top_width=0.0,
        stem_base_width=0.0,
    )
    res = evaluate(wall)
    assert res.eccentricity == res.base_width / 6.0
    assert res.max_bearing_pressure == pytest.approx(24.0)
    assert res.bearing_ok is True

    past = evaluate(dataclasses.replace(wall, top_width=0.02, stem_base_width=0.02))
    assert past.eccentricity > past.base_width / 6.0
    assert past.bearing_ok is False


def test_zero_base_width_returns_non_finite_without_raising(default_wall):
    wall = dataclasses.replace(default_wall, inner_base=0.0, outer_base=0.0)
    res = evaluate(wall)
    assert not math.isfinite(res.max_bearing_pressure)
    assert res.bearing_ok is False
    assert "max_bearing_pressure" in res.non_finite_fields()


def test_zero_thrust_gives_infinite_factors(default_wall):
    wall = dataclasses.replace(default_wall, soil_unit_weight=0.0, surcharge=0.0)
    res = evaluate(wall)
    assert res.active_thrust == 0.0
    assert math.isinf(res.sliding_factor)
    assert math.isinf(res.overturning_factor)
    assert res.sliding_ok is True
    assert res.overturning_ok is True


def test_zero_weight_gives_non_finite_eccentricity(default_wall):
    res = evaluate(dataclasses.replace(default_wall, concrete_unit_weight=0.0))
    assert res.self_weight == 0.0
    assert not math.isfinite(res.eccentricity)
    assert res.bearing_ok is False


def test_wall_input_carries_only_the_consumed_fields():
    names = {f.name for f in dataclasses.fields(WallInput)}
    assert len(names) == 14
    assert not names & {"name", "elevation", "tooth_height", "tooth_base", "inner_inclination"}


def test_check_ranges_clean_for_defaults(default_wall):
    assert check_ranges(default_wall) == []


def test_check_ranges_reports_bad_values(default_wall):
    wall = dataclasses.replace(
        default_wall, height=0.0, friction_angle=90.0, inner_base=0.0, outer_base=0.0, base_friction=1.2
    )
    msgs = check_ranges(wall)
    text = "\n".join(msgs)
    assert "Wall height" in text
    assert "Friction angle" in text
    assert "Base width" in text
    assert "Base friction" in text
    # advisory only
    evaluate(wall)


def test_every_result_field_is_required(default_wall):
    res = evaluate(default_wall)
    headline = {k: v for k, v in res.as_dict().items() if k not in (
        "base_width", "base_thickness", "stem_thickness", "overturning_moment",
        "resisting_moment", "weight_lever_arm", "sliding_resistance",
    )}
    with pytest.raises(TypeError):
        StabilityResult(**headline)
    assert StabilityResult(**res.as_dict()) == res
