"""
Time Series Views for Veering Analysis

This module lays a session out as a time-indexed DataFrame and averages the
compass heading over the start and end of a session, where the walker is
still settling in or already stopping.
"""

import numpy as np
import pandas as pd
from typing import Tuple
from . import constants
from .models import SessionRecord


def headings_frame(record: SessionRecord) -> pd.DataFrame:
    """
    Flatten a session into a DataFrame.

    Args:
        record: Frozen session.

    Returns:
        DataFrame with columns heading_deg, elapsed_ms and t_ms (milliseconds
        since the session started), one row per sample.
    """
    df = pd.DataFrame({
        "heading_deg": pd.Series(record.heading_values, dtype=float),
        "elapsed_ms": pd.Series(record.time_deltas, dtype="int64"),
    })
    df["t_ms"] = df["elapsed_ms"].cumsum()
    return df


def circular_mean_deg(headings) -> float:
    """
    Mean of compass headings on the circle (mean of 350 and 10 is 0, not 180).

    Returns:
        Mean heading in [0, 360).
    """
    radians = np.deg2rad(np.asarray(headings, dtype=float))
    mean = np.rad2deg(np.arctan2(np.sin(radians).mean(), np.cos(radians).mean()))
    return float(mean % constants.FULL_CIRCLE_DEG)


def compass_averages(record: SessionRecord,
                     window_ms: int = constants.ENDPOINT_WINDOW_MS) -> Tuple[float, float]:
    """
    Average the heading over the first and last window_ms of a session.

    If the session is not longer than the window, or has fewer than two
    headings, the raw first and last headings are returned instead.

    Args:
        record: Frozen session.
        window_ms: Averaging window at each end, in milliseconds.

    Returns:
        Tuple of (start_heading, end_heading); (0.0, 0.0) for an empty session.
    """
    if len(record) == 0:
        return 0.0, 0.0

    values = record.heading_values
    if len(record) < 2 or window_ms <= 0 or record.total_elapsed_ms <= window_ms:
        return values[0], values[-1]

    df = headings_frame(record)
    start_rows = df.loc[df["t_ms"] <= window_ms, "heading_deg"]
    end_rows = df.loc[df["t_ms"] >= record.total_elapsed_ms - window_ms, "heading_deg"]

    start = circular_mean_deg(start_rows) if not start_rows.empty else values[0]
    end = circular_mean_deg(end_rows) if not end_rows.empty else values[-1]
    return start, end
