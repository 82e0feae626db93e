"""
Export Functions for Veering Analysis

This module provides functions to export veering reports and raw heading logs
to JSON and CSV for external analysis or backup.
"""

import csv
import io
import json
from typing import Optional
from . import data_loading
from . import report as report_module
from . import time_series
from .models import SessionRecord, VeeringReport


def export_report_json(report: VeeringReport, indent: Optional[int] = 2) -> str:
    """
    Export a veering report as a JSON document.

    Args:
        report: Report from analyze_session().
        indent: JSON indentation. Default 2.

    Returns:
        JSON string of report_to_dict().
    """
    return json.dumps(report_module.report_to_dict(report), indent=indent, ensure_ascii=False)


def export_path_csv(report: VeeringReport) -> str:
    """
    Export a report's drift trace as CSV.

    Args:
        report: Report from analyze_session().

    Returns:
        CSV string with columns index, x, y. Only the header for sessions
        without a trace.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer)

    writer.writerow(["index", "x", "y"])
    for idx, point in enumerate(report.path_points):
        writer.writerow([idx, point.x, point.y])

    return buffer.getvalue()


def export_headings_csv(record: SessionRecord) -> str:
    """
    Export the raw heading log of a session as CSV.

    Returns:
        CSV string with columns index, heading_deg, elapsed_ms, t_ms.
    """
    df = time_series.headings_frame(record)
    df.index.name = "index"
    return df.to_csv(lineterminator="\n")


def export_session_json(record: SessionRecord, indent: Optional[int] = 2) -> str:
    """Export a session in the session file format read by load_session()."""
    return json.dumps(data_loading.session_to_dict(record), indent=indent)
