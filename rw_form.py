# rw_form.py
# Form boundary: defaults, text -> number coercion and the mutable draft the
# UI edits. The calculator only ever sees the immutable WallInput built here.

import math
from dataclasses import asdict, dataclass
from enum import Enum

import pandas as pd

from rw_engine import WallInput
from rw_logging import get_logger

logger = get_logger(__name__)


class ConcreteType(str, Enum):
    REINFORCED = "CA"
    CYCLOPEAN = "CC"

    @property
    def label(self):
        return {"CA": "Concreto armado", "CC": "Concreto ciclópico"}[self.value]


class WallShape(str, Enum):
    CANTILEVER = "cantilever"
    GRAVITY = "gravidade"

    @property
    def label(self):
        return {"cantilever": "Cantilever", "gravidade": "Gravidade"}[self.value]


# Initial values of the wall form
DEFAULTS = {
    # general
    "nome": "M1",
    "altura": 3.0,
    "elevacao": 0.0,  # cm
    "formato": WallShape.CANTILEVER.value,
    "tipo_concreto": ConcreteType.REINFORCED.value,
    # earth pressure / soil
    "gamma_solo": 18.0,
    "ang_atrito": 30.0,
    "coesao": 0.0,
    "sobrecarga": 5.0,
    # stem
    "largura_topo": 0.3,
    "incl_int": 5.0,
    "incl_ext": 0.0,
    "largura_base_parede": 0.6,
    # base
    "base_interna": 1.0,
    "base_externa": 1.0,
    "altura_maior": 0.7,
    "altura_menor": 0.4,
    # tooth (shear key)
    "dente_base": 0.2,
    "dente_altura": 0.0,
    # materials / capacity
    "gamma_concreto": 24.0,
    "mu": 0.5,
    "sigma_adm": 200.0,
}

# Collected by the form but not used by rw_engine.evaluate
UNUSED_FIELDS = (
    "nome", "elevacao", "formato", "tipo_concreto",
    "incl_int", "incl_ext", "dente_base", "dente_altura",
)


class UnknownFieldError(KeyError):
    pass


def parse_number(value) -> float:
    """Coerce a form value to float; anything unparseable becomes 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        raw = value
    else:
        raw = str(value).strip()
        if not raw:
            return 0.0
        raw = pd.to_numeric(raw, errors="coerce")
    try:
        out = float(raw)
    except (OverflowError, TypeError, ValueError):
        # ints beyond float range, or whatever to_numeric could not narrow
        return 0.0
    if not math.isfinite(out):
        return 0.0
    return out


@dataclass
class WallDraft:
    """Everything the form holds while the user is still typing."""

    nome: str = DEFAULTS["nome"]
    altura: float = DEFAULTS["altura"]
    elevacao: float = DEFAULTS["elevacao"]
    formato: WallShape = WallShape.CANTILEVER
    tipo_concreto: ConcreteType = ConcreteType.REINFORCED

    gamma_solo: float = DEFAULTS["gamma_solo"]
    ang_atrito: float = DEFAULTS["ang_atrito"]
    coesao: float = DEFAULTS["coesao"]
    sobrecarga: float = DEFAULTS["sobrecarga"]

    largura_topo: float = DEFAULTS["largura_topo"]
    incl_int: float = DEFAULTS["incl_int"]
    incl_ext: float = DEFAULTS["incl_ext"]
    largura_base_parede: float = DEFAULTS["largura_base_parede"]

    base_interna: float = DEFAULTS["base_interna"]
    base_externa: float = DEFAULTS["base_externa"]
    altura_maior: float = DEFAULTS["altura_maior"]
    altura_menor: float = DEFAULTS["altura_menor"]

    dente_base: float = DEFAULTS["dente_base"]
    dente_altura: float = DEFAULTS["dente_altura"]

    gamma_concreto: float = DEFAULTS["gamma_concreto"]
    mu: float = DEFAULTS["mu"]
    sigma_adm: float = DEFAULTS["sigma_adm"]

    # --- general ---
    def set_name(self, value):
        self.nome = "" if value is None else str(value)

    def set_height(self, value):
        self.altura = parse_number(value)

    def set_elevation(self, value):
        self.elevacao = parse_number(value)

    def set_shape(self, value):
        self.formato = WallShape(value)

    def set_concrete_type(self, value):
        self.tipo_concreto = ConcreteType(value)

    # --- soil ---
    def set_soil_unit_weight(self, value):
        self.gamma_solo = parse_number(value)

    def set_friction_angle(self, value):
        self.ang_atrito = parse_number(value)

    def set_cohesion(self, value):
        self.coesao = parse_number(value)

    def set_surcharge(self, value):
        self.sobrecarga = parse_number(value)

    # --- stem ---
    def set_top_width(self, value):
        self.largura_topo = parse_number(value)

    def set_inner_inclination(self, value):
        self.incl_int = parse_number(value)

    def set_outer_inclination(self, value):
        self.incl_ext = parse_number(value)

    def set_stem_base_width(self, value):
        self.largura_base_parede = parse_number(value)

    # --- base ---
    def set_inner_base(self, value):
        self.base_interna = parse_number(value)

    def set_outer_base(self, value):
        self.base_externa = parse_number(value)

    def set_higher_footing(self, value):
        self.altura_maior = parse_number(value)

    def set_lower_footing(self, value):
        self.altura_menor = parse_number(value)

    # --- tooth ---
    def set_tooth_base(self, value):
        self.dente_base = parse_number(value)

    def set_tooth_height(self, value):
        self.dente_altura = parse_number(value)

    # --- materials / capacity ---
    def set_concrete_unit_weight(self, value):
        self.gamma_concreto = parse_number(value)

    def set_base_friction(self, value):
        self.mu = parse_number(value)

    def set_allowable_bearing(self, value):
        self.sigma_adm = parse_number(value)

    def update(self, key, value):
        """Route a widget value to the setter registered for ``key``."""
        try:
            setter = FIELD_SETTERS[key]
        except KeyError:
            logger.warning("unknown wall field %r", key)
            raise UnknownFieldError(key) from None
        setter(self, value)

    def values(self):
        out = asdict(self)
        out["formato"] = self.formato.value
        out["tipo_concreto"] = self.tipo_concreto.value
        return out

    def unused_fields(self):
        vals = self.values()
        return {k: vals[k] for k in UNUSED_FIELDS}

    def to_input(self) -> WallInput:
        wall = WallInput(
            height=self.altura,
            soil_unit_weight=self.gamma_solo,
            friction_angle=self.ang_atrito,
            cohesion=self.coesao,
            surcharge=self.sobrecarga,
            inner_base=self.base_interna,
            outer_base=self.base_externa,
            higher_footing=self.altura_maior,
            lower_footing=self.altura_menor,
            top_width=self.largura_topo,
            stem_base_width=self.largura_base_parede,
            concrete_unit_weight=self.gamma_concreto,
            base_friction=self.mu,
            allowable_bearing=self.sigma_adm,
        )
        logger.debug("built wall input for %s: %s", self.nome, wall)
        return wall


FIELD_SETTERS = {
    "nome": WallDraft.set_name,
    "altura": WallDraft.set_height,
    "elevacao": WallDraft.set_elevation,
    "formato": WallDraft.set_shape,
    "tipo_concreto": WallDraft.set_concrete_type,
    "gamma_solo": WallDraft.set_soil_unit_weight,
    "ang_atrito": WallDraft.set_friction_angle,
    "coesao": WallDraft.set_cohesion,
    "sobrecarga": WallDraft.set_surcharge,
    "largura_topo": WallDraft.set_top_width,
    "incl_int": WallDraft.set_inner_inclination,
    "incl_ext": WallDraft.set_outer_inclination,
    "largura_base_parede": WallDraft.set_stem_base_width,
    "base_interna": WallDraft.set_inner_base,
    "base_externa": WallDraft.set_outer_base,
    "altura_maior": WallDraft.set_higher_footing,
    "altura_menor": WallDraft.set_lower_footing,
    "dente_base": WallDraft.set_tooth_base,
    "dente_altura": WallDraft.set_tooth_height,
    "gamma_concreto": WallDraft.set_concrete_unit_weight,
    "mu": WallDraft.set_base_friction,
    "sigma_adm": WallDraft.set_allowable_bearing,
}
