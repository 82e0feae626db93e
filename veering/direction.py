"""
Direction Classification for Veering Analysis

This module decides whether a walker veered left or right by letting every
consecutive pair of compass headings vote on the sign of the heading change.

Only the wraparound at North gets circular treatment: a step from just east
of North ([0, 5)) to just west of it (> 355) is a left turn, and the reverse
is a right turn. Every other step votes right when the heading increased and
left otherwise, so a flat step counts as left.
"""

import logging
import numpy as np
from typing import Sequence, Tuple, Union
from . import constants
from .models import Direction, HeadingSample, InsufficientData

LOGGER = logging.getLogger(__name__)


def heading_array(headings: Sequence[Union[HeadingSample, float]]) -> np.ndarray:
    """
    Convert heading samples or raw degree values to a float array.

    Args:
        headings: Ordered HeadingSample objects or plain heading values.

    Returns:
        1-D numpy array of headings in degrees.
    """
    values = [
        h.heading_degrees if isinstance(h, HeadingSample) else float(h)
        for h in headings
    ]
    return np.asarray(values, dtype=float)


def step_votes(headings: Sequence[Union[HeadingSample, float]],
               seam_deg: float = constants.NORTH_SEAM_DEG) -> np.ndarray:
    """
    Vote on every consecutive heading pair.

    Args:
        headings: Ordered headings (at least two for a non-empty result).
        seam_deg: Width of the band either side of North treated as a crossing.

    Returns:
        Boolean array of length len(headings) - 1, True where the step
        voted right and False where it voted left.
    """
    values = heading_array(headings)
    if len(values) < 2:
        return np.zeros(0, dtype=bool)

    prev = values[:-1]
    curr = values[1:]
    north_band = (0 <= prev) & (prev < seam_deg)
    west_band = curr > constants.FULL_CIRCLE_DEG - seam_deg

    # Crossing North while the heading decreases (e.g. 2 -> 358)
    crossed_left = north_band & west_band
    # Crossing North while the heading increases (e.g. 358 -> 2)
    crossed_right = (
        (prev > constants.FULL_CIRCLE_DEG - seam_deg)
        & (0 <= curr) & (curr < seam_deg)
        & ~crossed_left
    )
    rising = (curr > prev) & ~crossed_left & ~crossed_right

    return crossed_right | rising


def count_turns(headings: Sequence[Union[HeadingSample, float]],
                seam_deg: float = constants.NORTH_SEAM_DEG) -> Tuple[int, int]:
    """
    Count left and right votes over a session.

    Returns:
        Tuple of (left_count, right_count).
    """
    votes = step_votes(headings, seam_deg)
    right_count = int(np.count_nonzero(votes))
    left_count = int(len(votes) - right_count)
    return left_count, right_count


def classify_direction(headings: Sequence[Union[HeadingSample, float]],
                       seam_deg: float = constants.NORTH_SEAM_DEG) -> Union[Direction, InsufficientData]:
    """
    Classify the overall veering direction of a session.

    Args:
        headings: Ordered HeadingSample objects or plain heading values.
        seam_deg: Width of the North wraparound band. Default 5 degrees.

    Returns:
        InsufficientData.TOO_SHORT for no headings, InsufficientData.NO_VEERING
        for a single heading, otherwise Direction.LEFT / RIGHT by majority vote
        and Direction.STRAIGHT on an exact tie.
    """
    if len(headings) == 0:
        return InsufficientData.TOO_SHORT
    if len(headings) == 1:
        return InsufficientData.NO_VEERING

    left_count, right_count = count_turns(headings, seam_deg)
    LOGGER.debug("Turn votes: left=%d right=%d", left_count, right_count)

    if left_count > right_count:
        return Direction.LEFT
    if right_count > left_count:
        return Direction.RIGHT
    return Direction.STRAIGHT
