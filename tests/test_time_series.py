from __future__ import annotations

import pytest

from veering.models import SessionRecord
from veering.time_series import circular_mean_deg, compass_averages, headings_frame


def test_headings_frame_columns() -> None:
    record = SessionRecord.from_readings([1.0, 2.0, 3.0], [0, 250, 750], 1.0)
    df = headings_frame(record)
    assert list(df.columns) == ["heading_deg", "elapsed_ms", "t_ms"]
    assert df["t_ms"].tolist() == [0, 250, 1000]


def test_circular_mean_wraps_north() -> None:
    mean = circular_mean_deg([350.0, 10.0])
    assert min(mean, 360.0 - mean) == pytest.approx(0.0, abs=1e-9)
    assert circular_mean_deg([80.0, 100.0]) == pytest.approx(90.0)


def test_compass_averages_fall_back_to_raw_endpoints() -> None:
    assert compass_averages(SessionRecord(), 3000) == (0.0, 0.0)

    record = SessionRecord.from_readings([10.0, 30.0, 50.0], [0, 1000, 1000], 1.0)
    assert compass_averages(record, 0) == (10.0, 50.0)
    # Session no longer than the window
    assert compass_averages(record, 2000) == (10.0, 50.0)


def test_compass_averages_over_window() -> None:
    record = SessionRecord.from_readings([0.0, 20.0, 40.0, 60.0], [0, 1000, 1000, 1000], 1.0)
    start, end = compass_averages(record, 1000)
    assert start == pytest.approx(10.0)
    assert end == pytest.approx(50.0)
