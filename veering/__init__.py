"""
Veering Analysis Package

This package estimates how far a walker drifted from a straight line during a
tracking session, from the compass headings and pedometer distance recorded
on the phone. It classifies the drift as left, right or straight, estimates
its size and reconstructs a trace for the results graphic.

The package namespace re-exports the public functions of each module.
"""

# Import constants
from .constants import DATA_DIR, DEFAULT_SESSION_FILE

# Import data model
from .errors import InternalInconsistencyError
from .models import (
    Direction,
    InsufficientData,
    HeadingSample,
    SessionRecord,
    PathPoint,
    VeeringResult,
    VeeringReport,
)

# Import utility functions
from .utils import (
    safe_float,
    truncate,
    ensure_finite,
    current_millis,
)

# Import recording
from .recording import SessionRecorder

# Import data loading functions
from .data_loading import (
    parse_heading_sample,
    session_from_dict,
    session_to_dict,
    load_session,
    list_session_files,
)

# Import time series functions
from .time_series import (
    headings_frame,
    circular_mean_deg,
    compass_averages,
)

# Import analysis functions
from .direction import (
    step_votes,
    count_turns,
    classify_direction,
)
from .magnitude import (
    circular_delta,
    compute_magnitude,
)
from .path_trace import (
    step_offsets,
    build_path_trace,
)

# Import shape functions
from .shape import (
    close_trace,
    max_lateral_offset,
    build_veering_shape,
)

# Import report functions
from .report import (
    display_text,
    report_message,
    report_to_dict,
)

# Import export functions
from .export import (
    export_report_json,
    export_path_csv,
    export_headings_csv,
    export_session_json,
)

# Import session pipeline
from .session import analyze_session

__all__ = [
    # Constants
    "DATA_DIR",
    "DEFAULT_SESSION_FILE",
    # Data model
    "InternalInconsistencyError",
    "Direction",
    "InsufficientData",
    "HeadingSample",
    "SessionRecord",
    "PathPoint",
    "VeeringResult",
    "VeeringReport",
    # Utilities
    "safe_float",
    "truncate",
    "ensure_finite",
    "current_millis",
    # Recording
    "SessionRecorder",
    # Data loading
    "parse_heading_sample",
    "session_from_dict",
    "session_to_dict",
    "load_session",
    "list_session_files",
    # Time series
    "headings_frame",
    "circular_mean_deg",
    "compass_averages",
    # Analysis
    "step_votes",
    "count_turns",
    "classify_direction",
    "circular_delta",
    "compute_magnitude",
    "step_offsets",
    "build_path_trace",
    # Shape
    "close_trace",
    "max_lateral_offset",
    "build_veering_shape",
    # Report
    "display_text",
    "report_message",
    "report_to_dict",
    # Export
    "export_report_json",
    "export_path_csv",
    "export_headings_csv",
    "export_session_json",
    # Session pipeline
    "analyze_session",
]
