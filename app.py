"""
FastAPI Web Application for Veering Analysis

This module provides a REST API for analysing walking sessions and exporting
the veering results, drift trace and drift shape.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple
from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
import veering
from veering import constants

LOGGER = logging.getLogger(__name__)


# ============================================================================
# APPLICATION SETUP
# ============================================================================

app = FastAPI(title="Veering Analysis")

# Directory scanned for session files; tests point this elsewhere
DATA_DIR: Path = constants.DATA_DIR


# ============================================================================
# SESSION LOADING & CACHING
# ============================================================================

# Cache for analysed sessions ((filename, width, height) -> report)
report_cache: Dict[Tuple[str, float, float], veering.VeeringReport] = {}


def load_record(session_filename: Optional[str] = None) -> veering.SessionRecord:
    """
    Load a stored session file.

    Args:
        session_filename: Name of the session file. If None, uses the default.

    Returns:
        SessionRecord for the file.

    Raises:
        HTTPException: 404 if the file does not exist, 400 if it is malformed,
            422 if it breaks the session invariants.
    """
    if session_filename is None:
        session_filename = constants.DEFAULT_SESSION_FILE.name

    session_file = DATA_DIR / session_filename
    if Path(session_filename).name != session_filename or not session_file.exists():
        raise HTTPException(status_code=404, detail=f"Session file not found: {session_filename}")

    try:
        return veering.load_session(session_file)
    except veering.InternalInconsistencyError as exc:
        raise HTTPException(status_code=422, detail=f"Inconsistent session: {exc}") from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Failed to load session: {exc}") from exc


def analyze_record(record: veering.SessionRecord, width: float, height: float,
                   metadata: Optional[dict] = None) -> veering.VeeringReport:
    """
    Run the analysis pipeline, mapping pipeline errors to HTTP errors.

    Raises:
        HTTPException: 422 for an internally inconsistent session, 400 for
            other invalid input.
    """
    try:
        return veering.analyze_session(record, canvas_width=width, canvas_height=height,
                                       metadata=metadata)
    except veering.InternalInconsistencyError as exc:
        raise HTTPException(status_code=422, detail=f"Inconsistent session: {exc}") from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def load_report(session_filename: Optional[str] = None,
                width: float = constants.DEFAULT_CANVAS_WIDTH,
                height: float = constants.DEFAULT_CANVAS_HEIGHT) -> veering.VeeringReport:
    """
    Analyse a stored session, reusing a cached report when available.

    Returns:
        VeeringReport for the session and canvas size.
    """
    if session_filename is None:
        session_filename = constants.DEFAULT_SESSION_FILE.name

    key = (session_filename, float(width), float(height))
    if key in report_cache:
        return report_cache[key]

    LOGGER.debug("Analysing %s at %sx%s", session_filename, width, height)
    record = load_record(session_filename)
    report = analyze_record(record, width, height, metadata={"session": session_filename})
    report_cache[key] = report
    return report


# ============================================================================
# API ROUTES - SESSION MANAGEMENT
# ============================================================================

@app.get("/api/sessions")
def get_sessions():
    """
    Get list of available session files.

    Returns:
        List of dictionaries with 'filename' and 'display_name' keys.
    """
    return veering.list_session_files(DATA_DIR)


# ============================================================================
# API ROUTES - ANALYSIS
# ============================================================================

@app.get("/api/veering")
def get_veering(session: Optional[str] = Query(None, description="Session filename to analyse"),
                width: float = Query(constants.DEFAULT_CANVAS_WIDTH, gt=0),
                height: float = Query(constants.DEFAULT_CANVAS_HEIGHT, gt=0)):
    """
    Get the veering report for a stored session.

    Returns:
        Report dictionary: status, message, direction, delta_theta_degrees,
        veering_distance, path_points and session context.
    """
    return veering.report_to_dict(load_report(session, width, height))


@app.post("/api/veering")
def post_veering(payload: dict = Body(...),
                 width: float = Query(constants.DEFAULT_CANVAS_WIDTH, gt=0),
                 height: float = Query(constants.DEFAULT_CANVAS_HEIGHT, gt=0)):
    """
    Analyse a session posted as JSON.

    The body follows the session file format: headings as a list of
    {heading_degrees, elapsed_ms}, walked_distance and optional
    total_elapsed_ms.

    Returns:
        Report dictionary, as for GET /api/veering.
    """
    try:
        record = veering.session_from_dict(payload)
    except veering.InternalInconsistencyError as exc:
        raise HTTPException(status_code=422, detail=f"Inconsistent session: {exc}") from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return veering.report_to_dict(analyze_record(record, width, height))


@app.get("/api/veering/shape")
def get_veering_shape(session: Optional[str] = Query(None, description="Session filename to analyse"),
                      width: float = Query(constants.DEFAULT_CANVAS_WIDTH, gt=0),
                      height: float = Query(constants.DEFAULT_CANVAS_HEIGHT, gt=0)):
    """
    Get the filled drift triangle for a stored session.

    Returns:
        GeoJSON-style Feature, or null for straight or too-short sessions.
    """
    return veering.build_veering_shape(load_report(session, width, height))


# ============================================================================
# API ROUTES - EXPORT
# ============================================================================

@app.get("/api/export/veering")
def export_veering(session: Optional[str] = Query(None, description="Session filename to export"),
                   width: float = Query(constants.DEFAULT_CANVAS_WIDTH, gt=0),
                   height: float = Query(constants.DEFAULT_CANVAS_HEIGHT, gt=0)):
    """
    Export the veering report as a JSON download.

    Returns:
        PlainTextResponse with Content-Disposition header for download.
        Filename: veering_report.json
    """
    body = veering.export_report_json(load_report(session, width, height))
    headers = {"Content-Disposition": "attachment; filename=veering_report.json"}
    return PlainTextResponse(
        body,
        media_type="application/json",
        headers=headers
    )


@app.get("/api/export/path")
def export_path(session: Optional[str] = Query(None, description="Session filename to export"),
                width: float = Query(constants.DEFAULT_CANVAS_WIDTH, gt=0),
                height: float = Query(constants.DEFAULT_CANVAS_HEIGHT, gt=0)):
    """
    Export the drift trace as a CSV download.

    Returns:
        PlainTextResponse with Content-Disposition header for download.
        Filename: veering_path.csv
    """
    csv_body = veering.export_path_csv(load_report(session, width, height))
    headers = {"Content-Disposition": "attachment; filename=veering_path.csv"}
    return PlainTextResponse(
        csv_body,
        media_type="text/csv",
        headers=headers
    )


@app.get("/api/export/headings")
def export_headings(session: Optional[str] = Query(None, description="Session filename to export")):
    """
    Export the raw heading log of a stored session as CSV.

    Returns:
        PlainTextResponse with Content-Disposition header for download.
        Filename: headings.csv
    """
    csv_body = veering.export_headings_csv(load_record(session))
    headers = {"Content-Disposition": "attachment; filename=headings.csv"}
    return PlainTextResponse(
        csv_body,
        media_type="text/csv",
        headers=headers
    )


@app.get("/api/export/session")
def export_session(session: Optional[str] = Query(None, description="Session filename to export")):
    """
    Export a stored session in the session file format.

    Returns:
        PlainTextResponse with Content-Disposition header for download.
        Filename: session.json
    """
    body = veering.export_session_json(load_record(session))
    headers = {"Content-Disposition": "attachment; filename=session.json"}
    return PlainTextResponse(
        body,
        media_type="application/json",
        headers=headers
    )


# ============================================================================
# RUN INSTRUCTIONS
# ============================================================================
# Run with: uvicorn app:app --reload
