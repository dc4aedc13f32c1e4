"""
attractorscope: strange-attractor simulation and trail rendering.
"""

__version__ = "0.1.0"

from attractorscope.engine import EngineConfig, Model, SimulationController
