"""
Drift Shape for Veering Analysis

This module closes the drift trace into the filled triangle drawn on the
results screen (red for a left veer, blue for a right veer) and exposes it
as a GeoJSON-style Feature in canvas coordinates.
"""

from typing import Dict, List, Optional, Sequence, Tuple
from shapely.geometry import LineString, Polygon, mapping
from . import constants
from .models import Direction, PathPoint, VeeringReport


def close_trace(path_points: Sequence[PathPoint], canvas_width: float) -> List[Tuple[float, float]]:
    """
    Complete a trace into the drift triangle outline.

    After the last trace point the outline runs straight up to the top edge,
    across to the center line and back down to the starting point.

    Args:
        path_points: Trace from build_path_trace(), bottom-center first.
        canvas_width: Width of the drawing surface.

    Returns:
        List of (x, y) vertices, first and last vertex equal. Empty if the
        trace has fewer than two points.
    """
    if len(path_points) < 2:
        return []

    start = path_points[0]
    last = path_points[-1]
    center_x = canvas_width / 2

    outline = [(p.x, p.y) for p in path_points]
    outline.append((last.x, 0.0))
    outline.append((center_x, 0.0))
    outline.append((start.x, start.y))
    return outline


def max_lateral_offset(path_points: Sequence[PathPoint], canvas_width: float) -> float:
    """Largest horizontal distance of the trace from the center line."""
    center_x = canvas_width / 2
    return max((abs(p.x - center_x) for p in path_points), default=0.0)


def build_veering_shape(report: VeeringReport) -> Optional[Dict]:
    """
    Build the filled drift triangle for a report.

    Args:
        report: Report from analyze_session().

    Returns:
        GeoJSON-style Feature with a Polygon geometry (or a LineString when
        the outline has no area) and properties direction, fill,
        max_lateral_offset and trace_length. None for straight sessions and
        sessions without a trace.
    """
    result = report.result
    if result is None or result.direction is Direction.STRAIGHT:
        return None

    outline = close_trace(result.path_points, report.canvas_width)
    if not outline:
        return None

    trace = LineString([(p.x, p.y) for p in result.path_points])
    polygon = Polygon(outline)
    geometry = polygon if polygon.is_valid and polygon.area > 0 else LineString(outline)

    return {
        "type": "Feature",
        "geometry": mapping(geometry),
        "properties": {
            "direction": result.direction.value,
            "fill": constants.DIRECTION_COLORS.get(result.direction.value),
            "max_lateral_offset": max_lateral_offset(result.path_points, report.canvas_width),
            "trace_length": trace.length,
        },
    }
