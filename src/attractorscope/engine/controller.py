"""
Simulation controller: the engine's root object.

One instance owns the current state, the parameter store, the integration
method and the trail buffer. Hosts call ``step()`` once per animation frame
and read the trail's flat arrays back for drawing. All calls are synchronous
and single-threaded; each returns with state and trail mutually consistent.
"""

import logging
import math
from typing import Any, Dict, Optional, Union

import numpy as np

from attractorscope.engine.colors import color_for
from attractorscope.engine.config import EngineConfig
from attractorscope.engine.derivatives import AIZAWA_SCALE, State, derivative_for
from attractorscope.engine.errors import EngineError
from attractorscope.engine.integrator import get_stepper
from attractorscope.engine.models import Model, ParameterSet
from attractorscope.engine.parameters import ParameterStore
from attractorscope.engine.trail import TrailBuffer

logger = logging.getLogger(__name__)


class SimulationController:
    """
    Drives one attractor trajectory into a bounded trail.

    Created on the default model with the canonical initial state. Switching
    models resets state and trail; parameter edits survive resets and model
    switches, and each model's set is independent of the others.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.cfg = (config or EngineConfig()).validate()

        self.params = ParameterStore(self.cfg.model)
        self.trail = TrailBuffer(self.cfg.capacity)
        self._stepper = get_stepper(self.cfg.integrator)
        self._state: State = self.initial_state()
        self.steps_taken = 0

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    @property
    def model(self) -> Model:
        return self.params.active

    @property
    def state(self) -> State:
        return self._state

    @property
    def live_count(self) -> int:
        return self.trail.live_count

    def points_view(self) -> np.ndarray:
        return self.trail.points_view()

    def colors_view(self) -> np.ndarray:
        return self.trail.colors_view()

    def parameters(self, model: Optional[Union[Model, str]] = None) -> ParameterSet:
        """Current parameter set of ``model`` (active model when omitted)."""
        return self.params.get(model)

    def initial_state(self, model: Optional[Union[Model, str]] = None) -> State:
        """Canonical starting point for ``model`` under this configuration."""
        model = self.model if model is None else Model.parse(model)
        x, y, z = (float(v) for v in self.cfg.initial_state)
        if model is Model.AIZAWA and self.cfg.aizawa_scaled:
            k = AIZAWA_SCALE
            return (x * k, y * k, z * k)
        return (x, y, z)

    def is_diverged(self) -> bool:
        """True once the state is non-finite or beyond ``divergence_limit``."""
        limit = self.cfg.divergence_limit
        return any(not math.isfinite(v) or abs(v) > limit for v in self._state)

    # ------------------------------------------------------------------
    # Write surface
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Return to the initial state with an empty trail. Parameters are kept."""
        self._state = self.initial_state()
        self.trail.reset()
        self.steps_taken = 0
        logger.debug("Reset %s to %s", self.model, self._state)

    def select_model(self, model: Union[Model, str]) -> Model:
        """Activate ``model`` and reset. Unknown ids raise with no state change."""
        selected = self.params.select(model)
        logger.info("Selected model %s", selected)
        self.reset()
        return selected

    def set_parameter(self, model: Union[Model, str], name: str, value: Any) -> bool:
        """
        Overwrite one coefficient of ``model``.

        Rejected writes (unknown model or name, unparsable or non-finite value)
        keep the previous value. In strict mode they raise the matching
        EngineError; otherwise they are logged and ignored.

        Returns:
            True if the value was stored.
        """
        try:
            self.params.set(model, name, value)
        except EngineError as exc:
            if self.cfg.strict:
                raise
            logger.warning("Ignored parameter write: %s", exc)
            return False
        return True

    def update_parameters(
        self, values: Dict[str, Any], model: Optional[Union[Model, str]] = None
    ) -> Dict[str, bool]:
        """Apply several writes to one model; returns name -> accepted."""
        target = self.model if model is None else model
        return {name: self.set_parameter(target, name, v) for name, v in values.items()}

    def restore_defaults(self, model: Optional[Union[Model, str]] = None) -> None:
        """Put authored defaults back for ``model`` (every model when None)."""
        self.params.restore_defaults(model)
        logger.info("Restored default parameters for %s", model or "all models")

    def step(self) -> State:
        """Advance one integration step and append the new point to the trail."""
        params = self.params.get()
        f = derivative_for(self.model, self.cfg.aizawa_scaled)
        new_state = self._stepper(f, self._state, params, float(params.dt))

        self._state = new_state
        self.trail.append(new_state, color_for(self.trail.next_slot, self.trail.capacity))
        self.steps_taken += 1
        return new_state

    def run(self, n_steps: int) -> State:
        """Call ``step()`` ``n_steps`` times; returns the final state."""
        for _ in range(n_steps):
            self.step()
        return self._state
