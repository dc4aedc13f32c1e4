"""
Attractor model catalogue.

The six supported systems form a closed set. Each model carries its own
frozen parameter dataclass; every set includes ``dt``, the integration step.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Tuple, Type, Union

from attractorscope.engine.errors import UnknownModelError


class Model(str, Enum):
    """Supported attractor systems."""

    LORENZ = "lorenz"
    AIZAWA = "aizawa"
    ROSSLER = "rossler"
    CHEN = "chen"
    THOMAS = "thomas"
    DADRAS = "dadras"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union["Model", str]) -> "Model":
        """Resolve a model id (case-insensitive) or raise UnknownModelError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnknownModelError(value)


# ---------------------------------------------------------------------------
# Per-model parameter sets
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LorenzParams:
    sigma: float = 10.0
    rho: float = 28.0
    beta: float = 2.666
    dt: float = 0.01


@dataclass(frozen=True)
class AizawaParams:
    a: float = 0.95
    b: float = 0.7
    c: float = 0.6
    d: float = 3.5
    e: float = 0.25
    f: float = 0.1
    dt: float = 0.01


@dataclass(frozen=True)
class RosslerParams:
    a: float = 0.2
    b: float = 0.2
    c: float = 5.7
    dt: float = 0.01


@dataclass(frozen=True)
class ChenParams:
    a: float = 35.0
    b: float = 3.0
    c: float = 28.0
    dt: float = 0.001


@dataclass(frozen=True)
class ThomasParams:
    b: float = 0.208186
    dt: float = 0.05


@dataclass(frozen=True)
class DadrasParams:
    a: float = 3.0
    b: float = 2.7
    c: float = 1.7
    d: float = 2.0
    e: float = 9.0
    dt: float = 0.01


ParameterSet = Union[
    LorenzParams, AizawaParams, RosslerParams, ChenParams, ThomasParams, DadrasParams
]

PARAMETER_TYPES: Dict[Model, Type] = {
    Model.LORENZ: LorenzParams,
    Model.AIZAWA: AizawaParams,
    Model.ROSSLER: RosslerParams,
    Model.CHEN: ChenParams,
    Model.THOMAS: ThomasParams,
    Model.DADRAS: DadrasParams,
}

# Slider ranges offered by interactive hosts: (min, max) per coefficient.
PARAMETER_RANGES: Dict[Model, Dict[str, Tuple[float, float]]] = {
    Model.LORENZ: {
        "sigma": (0.0, 50.0),
        "rho": (0.0, 100.0),
        "beta": (0.0, 10.0),
        "dt": (0.001, 0.05),
    },
    Model.AIZAWA: {
        "a": (0.0, 2.0),
        "b": (0.0, 2.0),
        "c": (0.0, 2.0),
        "d": (0.0, 5.0),
        "e": (0.0, 1.0),
        "f": (0.0, 1.0),
        "dt": (0.001, 0.05),
    },
    Model.ROSSLER: {
        "a": (0.0, 1.0),
        "b": (0.0, 1.0),
        "c": (0.0, 20.0),
        "dt": (0.001, 0.05),
    },
    Model.CHEN: {
        "a": (0.0, 50.0),
        "b": (0.0, 10.0),
        "c": (0.0, 50.0),
        "dt": (0.0001, 0.005),
    },
    Model.THOMAS: {
        "b": (0.0, 1.0),
        "dt": (0.01, 0.2),
    },
    Model.DADRAS: {
        "a": (0.0, 10.0),
        "b": (0.0, 10.0),
        "c": (0.0, 10.0),
        "d": (0.0, 10.0),
        "e": (0.0, 20.0),
        "dt": (0.001, 0.05),
    },
}


def default_parameters(model: Union[Model, str]) -> ParameterSet:
    """Return the authored default parameter set for ``model``."""
    return PARAMETER_TYPES[Model.parse(model)]()


def parameter_names(model: Union[Model, str]) -> Tuple[str, ...]:
    """Coefficient names of ``model`` in declaration order (``dt`` last)."""
    return tuple(f.name for f in fields(PARAMETER_TYPES[Model.parse(model)]))
