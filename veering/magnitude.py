"""
Veering Magnitude for Veering Analysis

This module turns the change between the first and last compass heading of a
session into an estimated lateral drift.
"""

import numpy as np
from typing import Optional, Sequence, Tuple, Union
from . import constants
from . import utils
from .direction import heading_array
from .models import HeadingSample


def circular_delta(start: float, end: float) -> float:
    """
    Smallest angle between two compass headings.

    Args:
        start: Heading in degrees.
        end: Heading in degrees.

    Returns:
        Angular separation in degrees, between 0 and 180.
    """
    diff = abs(float(start) - float(end)) % constants.FULL_CIRCLE_DEG
    return min(diff, constants.FULL_CIRCLE_DEG - diff)


def compute_magnitude(headings: Sequence[Union[HeadingSample, float]], distance: float,
                      start: Optional[float] = None,
                      end: Optional[float] = None) -> Tuple[float, float]:
    """
    Estimate how far the walker drifted sideways.

    The drift is the side opposite the heading change in a right triangle
    whose hypotenuse is the walked distance: |sin(delta_theta) * distance|.

    Args:
        headings: Ordered headings; the first and last are used.
        distance: Walked distance (meters or device units).
        start: Overrides the first heading (e.g. an averaged start heading).
        end: Overrides the last heading.

    Returns:
        Tuple of (delta_theta_degrees, veering_distance).

    Raises:
        ValueError: If there are no headings and no start/end override.
        InternalInconsistencyError: If the result is not finite.
    """
    values = heading_array(headings)
    if start is None or end is None:
        if len(values) == 0:
            raise ValueError("Cannot compute veering magnitude without headings")
        start = values[0] if start is None else start
        end = values[-1] if end is None else end

    delta_theta = circular_delta(start, end)
    veering_distance = abs(np.sin(np.deg2rad(delta_theta)) * float(distance))

    return (
        utils.ensure_finite(delta_theta, "delta_theta"),
        utils.ensure_finite(veering_distance, "veering_distance"),
    )
