import logging

import pytest

from rw_engine import evaluate
from rw_form import (
    DEFAULTS,
    FIELD_SETTERS,
    UNUSED_FIELDS,
    ConcreteType,
    UnknownFieldError,
    WallDraft,
    WallShape,
    parse_number,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("3.5", 3.5),
        (" 2 ", 2.0),
        ("1e3", 1000.0),
        ("-0.25", -0.25),
        (7, 7.0),
        (0.6, 0.6),
        ("abc", 0.0),
        ("12abc", 0.0),
        ("", 0.0),
        ("   ", 0.0),
        (None, 0.0),
        (True, 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        ("nan", 0.0),
        (10 ** 400, 0.0),
        ("9" * 400, 0.0),
    ],
)
def test_parse_number_defaults_to_zero(raw, expected):
    assert parse_number(raw) == expected


def test_default_draft_matches_form_defaults(default_wall):
    draft = WallDraft()
    assert draft.to_input() == default_wall
    assert draft.values() == DEFAULTS


def test_every_form_field_has_a_setter():
    assert set(FIELD_SETTERS) == set(DEFAULTS)


def test_update_routes_through_setter():
    draft = WallDraft()
    draft.update("altura", "4.2")
    draft.update("ang_atrito", "not a number")
    draft.update("sigma_adm", 150)
    assert draft.altura == 4.2
    assert draft.ang_atrito == 0.0
    assert draft.sigma_adm == 150.0

    wall = draft.to_input()
    assert wall.height == 4.2
    assert wall.friction_angle == 0.0
    assert wall.allowable_bearing == 150.0


def test_unknown_field_is_rejected(caplog):
    draft = WallDraft()
    rw_logger = logging.getLogger("rw")
    rw_logger.addHandler(caplog.handler)
    try:
        with pytest.raises(UnknownFieldError):
            draft.update("altura_total", 3)
    finally:
        rw_logger.removeHandler(caplog.handler)
    assert "altura_total" in caplog.text


def test_unknown_field_error_is_a_key_error():
    with pytest.raises(KeyError):
        WallDraft().update("bogus", 1)


def test_select_fields():
    draft = WallDraft()
    draft.update("formato", "gravidade")
    draft.update("tipo_concreto", ConcreteType.CYCLOPEAN)
    assert draft.formato is WallShape.GRAVITY
    assert draft.tipo_concreto is ConcreteType.CYCLOPEAN
    assert draft.values()["formato"] == "gravidade"
    assert ConcreteType.CYCLOPEAN.label == "Concreto ciclópico"

    with pytest.raises(ValueError):
        draft.update("formato", "arch")


def test_input_snapshot_ignores_later_edits():
    draft = WallDraft()
    wall = draft.to_input()
    draft.update("altura", 6)
    assert wall.height == 3.0
    assert draft.to_input().height == 6.0


def test_unused_fields_do_not_change_the_result():
    draft = WallDraft()
    before = evaluate(draft.to_input())

    draft.update("nome", "M2")
    draft.update("elevacao", "35")
    draft.update("incl_int", 12)
    draft.update("incl_ext", 3)
    draft.update("dente_base", 0.4)
    draft.update("dente_altura", 0.3)
    draft.update("formato", WallShape.GRAVITY)
    draft.update("tipo_concreto", "CC")

    assert evaluate(draft.to_input()) == before
    unused = draft.unused_fields()
    assert set(unused) == set(UNUSED_FIELDS)
    assert unused["dente_altura"] == 0.3
    assert unused["nome"] == "M2"
