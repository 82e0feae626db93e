"""
Utility Functions for Veering Analysis

This module provides helper functions for data conversion, display
truncation, and numeric guards used throughout the analysis pipeline.
"""

import math
import time
import numpy as np
from typing import Optional
from .errors import InternalInconsistencyError


def safe_float(value, field: str) -> float:
    """
    Convert a value to a finite float, raising on failure.
    
    Args:
        value: Value to convert (string, number, etc.).
        field: Name of the field being converted, used in the error message.
        
    Returns:
        Float value.
        
    Raises:
        ValueError: If the value is missing, not numeric, NaN or infinite.
    """
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number, got {value!r}")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field} must be a number, got {value!r}") from exc
    if not math.isfinite(result):
        raise ValueError(f"{field} must be finite, got {value!r}")
    return result


def truncate(value, places: int = 2) -> Optional[float]:
    """
    Truncate a float to a number of decimal places for display.
    
    Values are floored rather than rounded, so 0.558 becomes 0.55. The scaled
    value is rounded to 9 places first so that 0.29 does not floor to 0.28.
    
    Args:
        value: Value to truncate.
        places: Number of decimal places. Default 2.
        
    Returns:
        Truncated float, or None if value is None, NaN, or Inf.
    """
    if value is None or (isinstance(value, float) and (np.isnan(value) or np.isinf(value))):
        return None
    factor = 10.0 ** places
    return math.floor(round(float(value) * factor, 9)) / factor


def ensure_finite(value: float, what: str) -> float:
    """
    Reject NaN and infinite intermediate results.
    
    Raises:
        InternalInconsistencyError: If value is NaN or infinite.
    """
    if not np.isfinite(value):
        raise InternalInconsistencyError(f"{what} is not finite ({value})")
    return float(value)


def current_millis() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)
