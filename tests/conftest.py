import matplotlib

matplotlib.use("Agg")

import pytest

from rw_engine import WallInput


@pytest.fixture
def default_wall():
    """The form's initial values."""
    return WallInput(
        height=3.0,
        soil_unit_weight=18.0,
        friction_angle=30.0,
        cohesion=0.0,
        surcharge=5.0,
        inner_base=1.0,
        outer_base=1.0,
        higher_footing=0.7,
        lower_footing=0.4,
        top_width=0.3,
        stem_base_width=0.6,
        concrete_unit_weight=24.0,
        base_friction=0.5,
        allowable_bearing=200.0,
    )
