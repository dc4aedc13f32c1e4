"""
Slot-indexed rainbow colouring for trail points.

The colour depends only on the buffer slot a point lands in, never on time or
trajectory length, so the gradient cycles once over the buffer capacity.
"""

import math
from typing import Tuple

Color = Tuple[float, float, float]

_TWO_PI = 2.0 * math.pi
_G_PHASE = _TWO_PI / 3.0
_B_PHASE = 2.0 * _TWO_PI / 3.0


def color_for(slot_index: int, capacity: int) -> Color:
    """RGB in [0, 1] for ``slot_index`` of a buffer holding ``capacity`` points."""
    phi = (slot_index / capacity) * _TWO_PI
    return (
        math.sin(phi) * 0.5 + 0.5,
        math.sin(phi + _G_PHASE) * 0.5 + 0.5,
        math.sin(phi + _B_PHASE) * 0.5 + 0.5,
    )

