"""
Fixed-step ODE integrators.

Classical 4th-order Runge-Kutta is the canonical method; explicit Euler is
kept as a lower-fidelity mode. Neither adapts the step, estimates error or
guards against divergence: every call advances exactly one step of ``dt``.
"""

from typing import Callable, Dict, Union

from attractorscope.engine.derivatives import DerivativeFn, State, derivative_for
from attractorscope.engine.models import Model, ParameterSet

StepFn = Callable[[DerivativeFn, State, ParameterSet, float], State]

DEFAULT_METHOD = "rk4"


def rk4_step(f: DerivativeFn, state: State, params: ParameterSet, h: float) -> State:
    """One classical RK4 step of size ``h``."""
    x, y, z = state

    d1 = f(state, params)
    k1x, k1y, k1z = h * d1[0], h * d1[1], h * d1[2]

    d2 = f((x + 0.5 * k1x, y + 0.5 * k1y, z + 0.5 * k1z), params)
    k2x, k2y, k2z = h * d2[0], h * d2[1], h * d2[2]

    d3 = f((x + 0.5 * k2x, y + 0.5 * k2y, z + 0.5 * k2z), params)
    k3x, k3y, k3z = h * d3[0], h * d3[1], h * d3[2]

    d4 = f((x + k3x, y + k3y, z + k3z), params)
    k4x, k4y, k4z = h * d4[0], h * d4[1], h * d4[2]

    return (
        x + (k1x + 2.0 * k2x + 2.0 * k3x + k4x) / 6.0,
        y + (k1y + 2.0 * k2y + 2.0 * k3y + k4y) / 6.0,
        z + (k1z + 2.0 * k2z + 2.0 * k3z + k4z) / 6.0,
    )


def euler_step(f: DerivativeFn, state: State, params: ParameterSet, h: float) -> State:
    """One explicit Euler step of size ``h``."""
    dx, dy, dz = f(state, params)
    return (state[0] + h * dx, state[1] + h * dy, state[2] + h * dz)


INTEGRATORS: Dict[str, StepFn] = {
    "rk4": rk4_step,
    "euler": euler_step,
}


def get_stepper(method: str) -> StepFn:
    """Resolve an integration method name, raising ValueError if unknown."""
    try:
        return INTEGRATORS[method]
    except KeyError:
        raise ValueError(
            f"Unknown integrator {method!r} (choose from {', '.join(INTEGRATORS)})"
        ) from None


def integrate(
    model: Union[Model, str],
    state: State,
    params: ParameterSet,
    method: str = DEFAULT_METHOD,
    aizawa_scaled: bool = False,
) -> State:
    """Advance ``state`` by one step of ``params.dt`` under ``model``."""
    step = get_stepper(method)
    f = derivative_for(model, aizawa_scaled)
    return step(f, state, params, float(params.dt))
