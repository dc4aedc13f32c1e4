"""
Exceptions raised by the simulation engine.

Every engine error derives from ``EngineError`` and from the builtin the
caller would naturally expect (``KeyError`` for lookups, ``ValueError`` for
bad values), so hosts can catch either.
"""


class EngineError(Exception):
    """Base class for all engine errors."""


class UnknownModelError(EngineError, KeyError):
    """Raised when a model id is outside the supported set."""

    def __init__(self, model):
        self.model = model
        super().__init__(f"Unknown attractor model: {model!r}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownParameterError(EngineError, KeyError):
    """Raised when a coefficient name is not part of a model's parameter set."""

    def __init__(self, model, name):
        self.model = model
        self.name = name
        super().__init__(f"Model {model!s} has no parameter {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class NonFiniteValueError(EngineError, ValueError):
    """Raised when a parameter value does not parse to a finite float."""

    def __init__(self, name, value):
        self.name = name
        self.value = value
        super().__init__(f"Parameter {name!r} needs a finite number, got {value!r}")
