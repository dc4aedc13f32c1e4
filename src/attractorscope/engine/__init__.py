"""
Attractor simulation engine: derivatives, integrators, trail buffer and the
controller that ties them together.
"""

from attractorscope.engine.colors import color_for
from attractorscope.engine.config import EngineConfig
from attractorscope.engine.controller import SimulationController
from attractorscope.engine.derivatives import derivative
from attractorscope.engine.errors import (
    EngineError,
    NonFiniteValueError,
    UnknownModelError,
    UnknownParameterError,
)
from attractorscope.engine.integrator import integrate
from attractorscope.engine.models import Model, default_parameters, parameter_names
from attractorscope.engine.parameters import ParameterStore
from attractorscope.engine.trail import TrailBuffer, TrailPoint
