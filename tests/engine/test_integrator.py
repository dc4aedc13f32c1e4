"""Tests for the fixed-step integrators."""

import math

import pytest

from attractorscope.engine.derivatives import lorenz
from attractorscope.engine.integrator import (
    INTEGRATORS,
    euler_step,
    get_stepper,
    integrate,
    rk4_step,
)
from attractorscope.engine.models import (
    LorenzParams,
    Model,
    ThomasParams,
    default_parameters,
)


class TestRK4:
    def test_lorenz_single_step_reference(self):
        """One default lorenz step from (0.1, 0, 0)."""
        x, y, z = integrate(Model.LORENZ, (0.1, 0.0, 0.0), LorenzParams())
        assert x == pytest.approx(0.091793, abs=1e-4)
        assert y == pytest.approx(0.026634, abs=1e-4)
        assert z == pytest.approx(0.0000126, abs=1e-4)

    def test_lorenz_single_step_tight(self):
        x, y, z = integrate(Model.LORENZ, (0.1, 0.0, 0.0), LorenzParams())
        assert x == pytest.approx(0.091792762, abs=1e-8)
        assert y == pytest.approx(0.026633980, abs=1e-8)
        assert z == pytest.approx(0.000012637, abs=1e-8)

    def test_exact_for_linear_decay(self):
        """dx/dt = -b x has solution exp(-b t); one RK4 step is accurate to O(h^5)."""
        p = ThomasParams(b=1.0, dt=0.01)

        def decay(state, params):
            return (-params.b * state[0], -params.b * state[1], -params.b * state[2])

        x, _, _ = rk4_step(decay, (1.0, 0.0, 0.0), p, p.dt)
        assert x == pytest.approx(math.exp(-0.01), abs=1e-11)

    def test_deterministic(self):
        params = default_parameters(Model.CHEN)
        a = integrate(Model.CHEN, (0.1, 0.0, 0.0), params)
        b = integrate(Model.CHEN, (0.1, 0.0, 0.0), params)
        assert a == b

    def test_uses_params_dt(self):
        slow = integrate(Model.LORENZ, (1.0, 1.0, 1.0), LorenzParams(dt=0.001))
        fast = integrate(Model.LORENZ, (1.0, 1.0, 1.0), LorenzParams(dt=0.01))
        assert slow != fast

    def test_zero_dt_is_identity(self):
        state = (1.0, 2.0, 3.0)
        assert integrate(Model.LORENZ, state, LorenzParams(dt=0.0)) == state

    def test_divergence_is_not_guarded(self):
        state = (0.1, 0.0, 0.0)
        params = LorenzParams(dt=5.0)
        for _ in range(20):
            state = integrate(Model.LORENZ, state, params)
        assert not all(math.isfinite(v) and abs(v) < 1e6 for v in state)


class TestEuler:
    def test_single_substep(self):
        p = LorenzParams()
        state = (0.1, 0.0, 0.0)
        x, y, z = euler_step(lorenz, state, p, p.dt)
        assert x == pytest.approx(0.1 + 0.01 * 10.0 * (0.0 - 0.1))
        assert y == pytest.approx(0.01 * 0.1 * 28.0)
        assert z == pytest.approx(0.0)

    def test_selectable_by_name(self):
        p = LorenzParams()
        euler = integrate(Model.LORENZ, (0.1, 0.0, 0.0), p, method="euler")
        rk4 = integrate(Model.LORENZ, (0.1, 0.0, 0.0), p)
        assert euler != rk4


class TestStepperLookup:
    def test_known_methods(self):
        assert set(INTEGRATORS) == {"rk4", "euler"}
        assert get_stepper("rk4") is rk4_step

    def test_unknown_method(self):
        with pytest.raises(ValueError, match="Unknown integrator"):
            get_stepper("dopri5")
