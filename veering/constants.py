"""
Constants for Veering Analysis

This module defines path constants, display settings and the tuning values
used throughout the veering analysis pipeline.
"""

from pathlib import Path

# Session data folder is one level up from veering/
DATA_DIR = Path(__file__).parent.parent / "sessions"
DEFAULT_SESSION_FILE = DATA_DIR / "sample_walk.json"

# Width of the band on either side of North treated as a wraparound crossing
NORTH_SEAM_DEG = 5.0
FULL_CIRCLE_DEG = 360.0

# Horizontal spread of the drift trace. Below 10 is very narrow, 25-30 reads best
X_MOVE = 25.0
# Vertical scale of the drift trace, 1.0 uses the full canvas height
Y_MOVE = 1.0

DEFAULT_CANVAS_WIDTH = 300.0
DEFAULT_CANVAS_HEIGHT = 300.0

DISPLAY_PLACES = 2

# Start/end heading averaging window in milliseconds (0 = raw first/last heading)
ENDPOINT_WINDOW_MS = 0

DIRECTION_COLORS = {
    "left": "red",
    "right": "blue",
}

TOO_SHORT_MESSAGE = "Session was too short to detect veering"
NO_VEERING_MESSAGE = "No veering was detected in this session"
DISPLAY_TEMPLATE = "Estimated Veering: {veering_distance} m, Change of Angle: {delta_theta_degrees}°"
