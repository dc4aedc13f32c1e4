"""
Per-model parameter storage.

Holds the active model plus one independent parameter set per model. Sets are
immutable dataclasses, so a write replaces the whole set and a rejected write
can never leave a half-updated one behind.
"""

import dataclasses
import logging
import math
from typing import Any, Dict, Optional, Union

from attractorscope.engine.errors import NonFiniteValueError, UnknownParameterError
from attractorscope.engine.models import (
    PARAMETER_TYPES,
    Model,
    ParameterSet,
    default_parameters,
    parameter_names,
)

logger = logging.getLogger(__name__)


def coerce_value(name: str, value: Any) -> float:
    """Parse ``value`` as a finite float or raise NonFiniteValueError."""
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise NonFiniteValueError(name, value) from None
    if not math.isfinite(number):
        raise NonFiniteValueError(name, value)
    return number


class ParameterStore:
    """Active model id and the per-model coefficient sets."""

    def __init__(self, active: Union[Model, str] = Model.LORENZ):
        self._active = Model.parse(active)
        self._sets: Dict[Model, ParameterSet] = {
            model: cls() for model, cls in PARAMETER_TYPES.items()
        }

    @property
    def active(self) -> Model:
        return self._active

    def select(self, model: Union[Model, str]) -> Model:
        """Make ``model`` active. Raises UnknownModelError before changing anything."""
        self._active = Model.parse(model)
        return self._active

    def get(self, model: Optional[Union[Model, str]] = None) -> ParameterSet:
        """Parameter set of ``model`` (the active one when omitted)."""
        model = self._active if model is None else Model.parse(model)
        return self._sets[model]

    def as_dict(self, model: Optional[Union[Model, str]] = None) -> Dict[str, float]:
        return dataclasses.asdict(self.get(model))

    def set(self, model: Union[Model, str], name: str, value: Any) -> ParameterSet:
        """
        Overwrite one coefficient of ``model``.

        Args:
            model: Model whose set is edited.
            name: Coefficient name; must belong to the model's schema.
            value: Anything ``float()`` accepts; must be finite.

        Returns:
            The updated parameter set.

        Raises:
            UnknownModelError: ``model`` is not supported.
            UnknownParameterError: ``name`` is not one of the model's coefficients.
            NonFiniteValueError: ``value`` is unparsable, NaN or infinite.
        """
        model = Model.parse(model)
        if name not in parameter_names(model):
            raise UnknownParameterError(model, name)
        number = coerce_value(name, value)

        updated = dataclasses.replace(self._sets[model], **{name: number})
        self._sets[model] = updated
        logger.debug("%s.%s = %s", model, name, number)
        return updated

    def restore_defaults(self, model: Optional[Union[Model, str]] = None) -> None:
        """Restore authored defaults for ``model``, or for every model if None."""
        if model is None:
            for m in Model:
                self._sets[m] = default_parameters(m)
        else:
            m = Model.parse(model)
            self._sets[m] = default_parameters(m)
