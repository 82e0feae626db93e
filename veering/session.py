"""
Session Analysis for Veering Analysis

This module orchestrates the complete analysis pipeline, turning one frozen
tracking session into the report shown on the results screen.
"""

import logging
from typing import Optional
from . import constants
from . import time_series
from .direction import classify_direction, count_turns
from .magnitude import compute_magnitude
from .models import InsufficientData, SessionRecord, VeeringReport, VeeringResult
from .path_trace import build_path_trace

LOGGER = logging.getLogger(__name__)


def analyze_session(record: SessionRecord,
                    canvas_width: float = constants.DEFAULT_CANVAS_WIDTH,
                    canvas_height: float = constants.DEFAULT_CANVAS_HEIGHT,
                    x_scale: float = constants.X_MOVE,
                    y_scale: float = constants.Y_MOVE,
                    endpoint_window_ms: int = constants.ENDPOINT_WINDOW_MS,
                    seam_deg: float = constants.NORTH_SEAM_DEG,
                    metadata: Optional[dict] = None) -> VeeringReport:
    """
    Build the veering report for a completed session.

    Main entry point that runs the analysis steps in order:
    1. Classifies the session direction (or a too-short / no-veering state)
    2. Computes the heading change and veering distance
    3. Reconstructs the drift trace for the given canvas

    Sessions with fewer than two headings stop after step 1 and never touch
    total_elapsed_ms.

    Args:
        record: Frozen session to analyse.
        canvas_width: Width of the drawing surface.
        canvas_height: Height of the drawing surface.
        x_scale: Horizontal spread of the trace. Default 25.
        y_scale: Vertical scale of the trace. Default 1.
        endpoint_window_ms: Average start/end headings over this window
            (0 uses the raw first and last heading).
        seam_deg: Width of the North wraparound band. Default 5.
        metadata: Extra fields carried into the report (e.g. session name).

    Returns:
        VeeringReport with either a VeeringResult or an InsufficientData state.

    Raises:
        InternalInconsistencyError: If the session breaks its own invariants.
    """
    metadata = dict(metadata or {})
    classification = classify_direction(record.headings, seam_deg)

    if isinstance(classification, InsufficientData):
        LOGGER.info("Session with %d heading(s): %s", len(record), classification.message)
        return VeeringReport(
            sample_count=len(record),
            walked_distance=record.walked_distance,
            insufficient=classification,
            canvas_width=canvas_width,
            canvas_height=canvas_height,
            metadata=metadata,
        )

    left_count, right_count = count_turns(record.headings, seam_deg)

    start, end = time_series.compass_averages(record, endpoint_window_ms)
    delta_theta, veering_distance = compute_magnitude(
        record.headings, record.walked_distance, start=start, end=end
    )

    path_points = tuple(build_path_trace(
        record.headings,
        record.time_deltas,
        record.total_elapsed_ms,
        classification,
        canvas_height=canvas_height,
        canvas_width=canvas_width,
        x_scale=x_scale,
        y_scale=y_scale,
    ))

    LOGGER.info(
        "Analysed session: %d headings, direction=%s, delta_theta=%.2f, veering=%.2f",
        len(record), classification.value, delta_theta, veering_distance,
    )

    result = VeeringResult(
        direction=classification,
        delta_theta_degrees=delta_theta,
        veering_distance=veering_distance,
        path_points=path_points,
        left_count=left_count,
        right_count=right_count,
    )
    return VeeringReport(
        sample_count=len(record),
        walked_distance=record.walked_distance,
        result=result,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        metadata=metadata,
    )
