"""
Derivative library: the right-hand side of each attractor's ODE.

Every function maps a state ``(x, y, z)`` and the model's parameter set to the
instantaneous rate of change ``(dx, dy, dz)``. These are raw per-second rates;
scaling by the step size is the integrator's job. No input is out of domain:
polynomial terms may blow up, which is the system's own behaviour.
"""

import math
from typing import Callable, Dict, Tuple, Union

from attractorscope.engine.models import (
    PARAMETER_TYPES,
    AizawaParams,
    ChenParams,
    DadrasParams,
    LorenzParams,
    Model,
    ParameterSet,
    RosslerParams,
    ThomasParams,
)

State = Tuple[float, float, float]
DerivativeFn = Callable[[State, ParameterSet], State]

# Display scale of the aizawa prototype that worked in magnified coordinates.
AIZAWA_SCALE: float = 10.0


def lorenz(state: State, p: LorenzParams) -> State:
    x, y, z = state
    return (
        p.sigma * (y - x),
        x * (p.rho - z) - y,
        x * y - p.beta * z,
    )


def rossler(state: State, p: RosslerParams) -> State:
    x, y, z = state
    return (
        -y - z,
        x + p.a * y,
        p.b + z * (x - p.c),
    )


def chen(state: State, p: ChenParams) -> State:
    x, y, z = state
    return (
        p.a * (y - x),
        (p.c - p.a) * x - x * z + p.c * y,
        x * y - p.b * z,
    )


def _sin(v: float) -> float:
    # math.sin rejects infinities; an overflowed state just stays non-finite
    return math.sin(v) if math.isfinite(v) else math.nan


def thomas(state: State, p: ThomasParams) -> State:
    x, y, z = state
    return (
        _sin(y) - p.b * x,
        _sin(z) - p.b * y,
        _sin(x) - p.b * z,
    )


def dadras(state: State, p: DadrasParams) -> State:
    x, y, z = state
    return (
        y - p.a * x + p.b * y * z,
        p.c * y - x * z + z,
        p.d * x * y - p.e * z,
    )


def aizawa(state: State, p: AizawaParams) -> State:
    x, y, z = state
    return (
        (z - p.b) * x - p.d * y,
        p.d * x + (z - p.b) * y,
        p.c
        + p.a * z
        - z * z * z / 3.0
        - (x * x + y * y) * (1.0 + p.e * z)
        + p.f * z * x * x * x,
    )


def scaled_aizawa(state: State, p: AizawaParams) -> State:
    """Aizawa evaluated in display units magnified by ``AIZAWA_SCALE``.

    The state is shrunk back to model units, the raw rate computed there and
    the result magnified again, so the trajectory is the unscaled one times k.
    """
    k = AIZAWA_SCALE
    dx, dy, dz = aizawa((state[0] / k, state[1] / k, state[2] / k), p)
    return (dx * k, dy * k, dz * k)


DERIVATIVES: Dict[Model, DerivativeFn] = {
    Model.LORENZ: lorenz,
    Model.AIZAWA: aizawa,
    Model.ROSSLER: rossler,
    Model.CHEN: chen,
    Model.THOMAS: thomas,
    Model.DADRAS: dadras,
}


def derivative_for(
    model: Union[Model, str], aizawa_scaled: bool = False
) -> DerivativeFn:
    """Look up the derivative function for ``model``."""
    model = Model.parse(model)
    if model is Model.AIZAWA and aizawa_scaled:
        return scaled_aizawa
    return DERIVATIVES[model]


def derivative(
    model: Union[Model, str],
    state: State,
    params: ParameterSet,
    aizawa_scaled: bool = False,
) -> State:
    """Evaluate ``model``'s rate of change at ``state``.

    Raises:
        UnknownModelError: ``model`` is not one of the supported systems.
        TypeError: ``params`` belongs to a different model.
    """
    model = Model.parse(model)
    expected = PARAMETER_TYPES[model]
    if not isinstance(params, expected):
        raise TypeError(
            f"{model} expects {expected.__name__}, got {type(params).__name__}"
        )
    return derivative_for(model, aizawa_scaled)(state, params)
