"""
Data Loading and Parsing for Veering Analysis

This module handles loading session JSON files and payloads into frozen
SessionRecord objects, and discovering the session files that are available.

A session document looks like:

    {
        "walked_distance": 12.0,
        "headings": [
            {"heading_degrees": 10.0, "elapsed_ms": 0},
            {"heading_degrees": 12.5, "elapsed_ms": 480}
        ],
        "total_elapsed_ms": 480
    }

`total_elapsed_ms` is optional; when present it must match the samples.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping
from . import constants
from .models import HeadingSample, SessionRecord

LOGGER = logging.getLogger(__name__)


def parse_heading_sample(entry, index: int) -> HeadingSample:
    """
    Parse one heading entry.

    Accepts {"heading_degrees": ..., "elapsed_ms": ...} mappings or a bare
    heading value (elapsed_ms of 0).

    Raises:
        ValueError: If the entry is malformed.
    """
    if isinstance(entry, Mapping):
        if "heading_degrees" not in entry:
            raise ValueError(f"headings[{index}] is missing 'heading_degrees'")
        try:
            return HeadingSample(entry["heading_degrees"], entry.get("elapsed_ms", 0))
        except ValueError as exc:
            raise ValueError(f"headings[{index}]: {exc}") from exc
    try:
        return HeadingSample(entry)
    except ValueError as exc:
        raise ValueError(f"headings[{index}]: {exc}") from exc


def session_from_dict(payload: Mapping) -> SessionRecord:
    """
    Build a frozen session from a decoded JSON document.

    Args:
        payload: Mapping with headings, walked_distance and optional
            total_elapsed_ms.

    Returns:
        SessionRecord.

    Raises:
        ValueError: If the document is malformed.
        InternalInconsistencyError: If total_elapsed_ms disagrees with the samples.
    """
    if not isinstance(payload, Mapping):
        raise ValueError("Session document must be a JSON object")

    raw_headings = payload.get("headings", [])
    if not isinstance(raw_headings, list):
        raise ValueError("'headings' must be a list")

    samples = tuple(parse_heading_sample(entry, i) for i, entry in enumerate(raw_headings))
    total = payload.get("total_elapsed_ms")
    if total is not None and (isinstance(total, bool) or not isinstance(total, (int, float))):
        raise ValueError(f"'total_elapsed_ms' must be a number, got {total!r}")

    return SessionRecord(
        headings=samples,
        walked_distance=payload.get("walked_distance", 0.0),
        total_elapsed_ms=int(total) if total is not None else None,
    )


def session_to_dict(record: SessionRecord) -> Dict:
    """Inverse of session_from_dict()."""
    return {
        "walked_distance": record.walked_distance,
        "total_elapsed_ms": record.total_elapsed_ms,
        "headings": [
            {"heading_degrees": s.heading_degrees, "elapsed_ms": s.elapsed_ms}
            for s in record.headings
        ],
    }


def load_session(file_path: Path = constants.DEFAULT_SESSION_FILE) -> SessionRecord:
    """
    Load a session JSON file.

    Args:
        file_path: Path to the session file. Defaults to DEFAULT_SESSION_FILE.

    Returns:
        SessionRecord.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or not a valid session.
    """
    file_path = Path(file_path)
    with file_path.open("r", encoding="utf-8") as file:
        try:
            payload = json.load(file)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{file_path.name} is not valid JSON: {exc}") from exc

    record = session_from_dict(payload)
    LOGGER.debug("Loaded %s: %d headings", file_path.name, len(record))
    return record


def list_session_files(data_dir: Path = constants.DATA_DIR) -> List[Dict]:
    """
    Discover session files in the data directory.

    Returns:
        List of dictionaries with 'filename' and 'display_name' keys,
        sorted by filename. Empty if the directory does not exist.
    """
    data_dir = Path(data_dir)
    sessions = []

    if not data_dir.exists():
        LOGGER.warning("Session directory %s does not exist", data_dir)
        return sessions

    for file_path in data_dir.glob("*.json"):
        display_name = file_path.stem.replace("_", " ").title()
        sessions.append({
            "filename": file_path.name,
            "display_name": display_name,
        })

    sessions.sort(key=lambda x: x["filename"])
    return sessions
