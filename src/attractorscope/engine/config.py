"""
Engine configuration.
"""

from dataclasses import dataclass
from typing import Tuple

from attractorscope.engine.integrator import INTEGRATORS
from attractorscope.engine.models import Model
from attractorscope.engine.trail import DEFAULT_CAPACITY, check_capacity


@dataclass
class EngineConfig:
    """Construction-time settings for a SimulationController."""

    capacity: int = DEFAULT_CAPACITY
    model: str = "lorenz"
    initial_state: Tuple[float, float, float] = (0.1, 0.0, 0.0)
    integrator: str = "rk4"        # rk4 | euler

    # Evaluate aizawa in display units magnified by AIZAWA_SCALE, with the
    # initial condition magnified to match.
    aizawa_scaled: bool = False

    # Raise on rejected parameter writes instead of logging and ignoring them
    strict: bool = False

    # |state| beyond this counts as diverged (see SimulationController.is_diverged)
    divergence_limit: float = 1e6

    def validate(self) -> "EngineConfig":
        """Check settings, raising ValueError / UnknownModelError on bad ones."""
        check_capacity(self.capacity)
        if self.integrator not in INTEGRATORS:
            raise ValueError(
                f"Unknown integrator {self.integrator!r} "
                f"(choose from {', '.join(INTEGRATORS)})"
            )
        if len(self.initial_state) != 3:
            raise ValueError("initial_state must have exactly three coordinates")
        if not self.divergence_limit > 0:
            raise ValueError("divergence_limit must be positive")
        Model.parse(self.model)
        return self
