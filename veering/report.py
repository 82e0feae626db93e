"""
Report Serialization for Veering Analysis

This module converts analysis results into the display string and the
JSON-ready dictionaries consumed by the web API and exports.
"""

from typing import Dict, List
from . import constants
from . import utils
from .models import VeeringReport, VeeringResult


def display_text(result: VeeringResult, places: int = constants.DISPLAY_PLACES) -> str:
    """
    Format the results label.

    Example: "Estimated Veering: 3.42 m, Change of Angle: 20.0°"
    """
    return constants.DISPLAY_TEMPLATE.format(
        veering_distance=utils.truncate(result.veering_distance, places),
        delta_theta_degrees=utils.truncate(result.delta_theta_degrees, places),
    )


def report_message(report: VeeringReport) -> str:
    """User-facing message for any report, complete or not."""
    if report.insufficient is not None:
        return report.insufficient.message
    return display_text(report.result)


def path_to_records(report: VeeringReport) -> List[Dict]:
    return [point.to_dict() for point in report.path_points]


def report_to_dict(report: VeeringReport, places: int = constants.DISPLAY_PLACES) -> Dict:
    """
    Convert a report to the output dictionary.

    Args:
        report: Report from analyze_session().
        places: Truncation places for the displayed angle and distance.

    Returns:
        Dictionary containing:
        - status: "complete", "too_short" or "no_veering"
        - message: display string or insufficient-data message
        - direction: "left" / "right" / "straight", or None
        - delta_theta_degrees, veering_distance: truncated, or None
        - left_count, right_count: step votes, or None
        - path_points: list of {x, y}
        - sample_count, walked_distance, canvas: session context
    """
    result = report.result
    payload = {
        "status": report.status,
        "message": report_message(report),
        "direction": result.direction.value if result else None,
        "delta_theta_degrees": utils.truncate(result.delta_theta_degrees, places) if result else None,
        "veering_distance": utils.truncate(result.veering_distance, places) if result else None,
        "left_count": result.left_count if result else None,
        "right_count": result.right_count if result else None,
        "path_points": path_to_records(report),
        "sample_count": report.sample_count,
        "walked_distance": report.walked_distance,
        "canvas": {"width": report.canvas_width, "height": report.canvas_height},
    }
    payload.update(report.metadata)
    return payload
