"""
Path Trace Reconstruction for Veering Analysis

This module rebuilds a 2D trace of the walk for the results graphic. Each
heading step moves the trace up the canvas by its share of the session time
and sideways in proportion to tan(step angle), with the sideways moves
normalized so the whole trace spans at most x_scale from the center line.

Canvas coordinates put the origin at the top-left, so the trace starts at
bottom-center (canvas_width / 2, canvas_height) and walks towards y = 0.
"""

import logging
import numpy as np
from typing import Iterator, Sequence, Union
from . import constants
from .direction import heading_array, step_votes
from .errors import InternalInconsistencyError
from .models import Direction, HeadingSample, PathPoint

LOGGER = logging.getLogger(__name__)


def step_offsets(headings: Sequence[Union[HeadingSample, float]], time_deltas: Sequence[int],
                 total_elapsed: float, canvas_height: float,
                 y_scale: float = constants.Y_MOVE):
    """
    Compute the vertical step and signed horizontal contribution of every heading step.

    Args:
        headings: Ordered headings, at least two.
        time_deltas: Milliseconds since the previous sample, one per heading.
        total_elapsed: Sum of time_deltas.
        canvas_height: Height of the drawing surface.
        y_scale: Vertical scale factor.

    Returns:
        Tuple of (delta_y, contributions) arrays of length len(headings) - 1.
        Left turns have negative contributions.

    Raises:
        InternalInconsistencyError: On mismatched lengths, a zero total time,
            or a non-finite contribution.
    """
    values = heading_array(headings)
    deltas = np.asarray(time_deltas, dtype=float)
    if len(values) != len(deltas):
        raise InternalInconsistencyError(
            f"Got {len(values)} headings but {len(deltas)} time deltas"
        )
    if total_elapsed <= 0:
        raise InternalInconsistencyError(
            f"total_elapsed must be positive for {len(values)} headings, got {total_elapsed}"
        )

    step = np.abs(np.diff(values)) % constants.FULL_CIRCLE_DEG
    step = np.minimum(step, constants.FULL_CIRCLE_DEG - step)

    delta_y = (deltas[1:] / float(total_elapsed)) * canvas_height * y_scale
    magnitude = np.abs(delta_y * np.tan(np.deg2rad(step)))
    contributions = np.where(step_votes(values), magnitude, -magnitude)

    if not np.all(np.isfinite(delta_y)) or not np.all(np.isfinite(contributions)):
        raise InternalInconsistencyError("Path trace produced a non-finite offset")

    return delta_y, contributions


def build_path_trace(headings: Sequence[Union[HeadingSample, float]], time_deltas: Sequence[int],
                     total_elapsed: float, direction: Direction,
                     canvas_height: float = constants.DEFAULT_CANVAS_HEIGHT,
                     canvas_width: float = constants.DEFAULT_CANVAS_WIDTH,
                     x_scale: float = constants.X_MOVE,
                     y_scale: float = constants.Y_MOVE) -> Iterator[PathPoint]:
    """
    Reconstruct the drift trace of a session as canvas points.

    Inputs are validated immediately; the points themselves are produced
    lazily and the returned iterator can be consumed only once. Call again
    with the same inputs for an identical trace.

    Args:
        headings: Ordered headings for the session.
        time_deltas: Milliseconds since the previous sample, one per heading.
        total_elapsed: Sum of time_deltas (normalizes vertical travel).
        direction: Overall direction, logged with the trace.
        canvas_height: Height of the drawing surface.
        canvas_width: Width of the drawing surface.
        x_scale: Maximum horizontal travel from the center line. Default 25.
        y_scale: Vertical scale factor. Default 1.

    Returns:
        Iterator of PathPoint, starting at bottom-center. Empty when there are
        fewer than two headings.

    Raises:
        InternalInconsistencyError: If total_elapsed is zero with two or more
            headings, lengths disagree, or a step is not finite.
    """
    if len(headings) < 2:
        return iter(())

    delta_y, contributions = step_offsets(headings, time_deltas, total_elapsed,
                                          canvas_height, y_scale)
    x_total = float(np.sum(np.abs(contributions)))

    if x_total == 0:
        shares = np.zeros_like(contributions)
    else:
        shares = contributions / x_total * x_scale

    LOGGER.debug("Path trace (%s): %d steps, x_total=%.4f", direction.value, len(delta_y), x_total)
    return _walk(canvas_width / 2, float(canvas_height), delta_y, shares)


def _walk(start_x: float, start_y: float, delta_y: np.ndarray,
          shares: np.ndarray) -> Iterator[PathPoint]:
    new_x, new_y = start_x, start_y
    yield PathPoint(new_x, new_y)
    for dy, dx in zip(delta_y, shares):
        new_y -= float(dy)
        new_x += float(dx)
        yield PathPoint(new_x, new_y)
