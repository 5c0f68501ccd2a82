"""
FastAPI Web Application for DJI SRT Metrology

This module provides a REST API for browsing, parsing and exporting drone
telemetry decoded from DJI SRT subtitle files.
"""

from typing import Dict, List, Optional, Tuple
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse
from dji_metrology import srt_metrology


# ============================================================================
# APPLICATION SETUP
# ============================================================================

app = FastAPI(title="DJI SRT Metrology")

# format -> (media type, file extension)
EXPORT_MEDIA_TYPES = {
    "json": ("application/json", "json"),
    "fusion": ("text/plain", "setting"),
    "csv": ("text/csv", "csv"),
}


# ============================================================================
# DATASET DISCOVERY
# ============================================================================

def get_available_datasets() -> list:
    """
    Discover available SRT files in the SRT Data directory.

    Returns:
        List of dictionaries with 'filename' and 'display_name' keys,
        sorted by filename.
    """
    data_dir = srt_metrology.DATA_DIR
    datasets = []

    if not data_dir.exists():
        return datasets

    for file_path in data_dir.glob("*.srt"):
        display_name = file_path.stem.replace("_", " ")
        datasets.append({
            "filename": file_path.name,
            "display_name": display_name,
        })

    datasets.sort(key=lambda x: x["filename"])
    return datasets


# ============================================================================
# SESSION LOADING & CACHING
# ============================================================================

# Cache for parsed datasets (dataset_filename -> (metrology, diagnostics))
session_cache: Dict[str, Tuple[srt_metrology.Metrology, List[srt_metrology.Diagnostic]]] = {}


def load_session(dataset_filename: Optional[str] = None):
    """
    Load and parse the SRT telemetry of a specific dataset.

    Parsed datasets are cached to avoid reprocessing on subsequent requests.

    Args:
        dataset_filename: Name of the .srt file to load. If None, uses default.

    Returns:
        Tuple of (metrology, diagnostics).

    Raises:
        HTTPException: 404 if the dataset does not exist, 422 if the file is
            not a valid SRT track, 500 for any other failure.
    """
    if dataset_filename is None:
        dataset_filename = srt_metrology.DEFAULT_SRT_FILE

    if dataset_filename in session_cache:
        return session_cache[dataset_filename]

    data_file = srt_metrology.DATA_DIR / dataset_filename
    if data_file.name != dataset_filename or not data_file.is_file():
        raise HTTPException(status_code=404, detail=f"Dataset file not found: {dataset_filename}")

    try:
        session = srt_metrology.load_metrology(data_file)
    except srt_metrology.InvalidInput as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to load telemetry: {exc}"
        ) from exc

    session_cache[dataset_filename] = session
    return session


def export_response(metrology: srt_metrology.Metrology, fmt: str, stem: str) -> PlainTextResponse:
    media_type, extension = EXPORT_MEDIA_TYPES[fmt]
    body = srt_metrology.export_metrology(metrology, fmt)
    headers = {"Content-Disposition": f"attachment; filename={stem}.{extension}"}
    return PlainTextResponse(body, media_type=media_type, headers=headers)


# ============================================================================
# API ROUTES - DATASET MANAGEMENT
# ============================================================================

@app.get("/api/datasets")
def get_datasets():
    """
    Get list of available datasets.

    Returns:
        List of dictionaries with 'filename' and 'display_name' keys.
    """
    return get_available_datasets()


# ============================================================================
# API ROUTES - DATA RETRIEVAL
# ============================================================================

@app.get("/api/session")
def get_session(dataset: Optional[str] = Query(None, description="Dataset filename to load")):
    """
    Get the complete session payload for a specific dataset.

    Returns:
        Dictionary with metrology records, flight summary and diagnostics.
    """
    metrology, diagnostics = load_session(dataset)
    return srt_metrology.build_payload(metrology, diagnostics)


@app.get("/api/metrology")
def get_metrology(dataset: Optional[str] = Query(None, description="Dataset filename to load")):
    """
    Get all sample records for a specific dataset.

    Returns:
        List of sample record dictionaries, in file order.
    """
    metrology, _ = load_session(dataset)
    return srt_metrology.metrology_to_records(metrology)


@app.get("/api/summary")
def get_summary(dataset: Optional[str] = Query(None, description="Dataset filename to load")):
    """
    Get the flight summary for a specific dataset.

    Returns:
        Dictionary of summary figures (duration, altitude range, distance...).
    """
    metrology, _ = load_session(dataset)
    return srt_metrology.summarize_flight(metrology)


# ============================================================================
# API ROUTES - EXPORT
# ============================================================================

@app.get("/api/export/{fmt}")
def export_dataset(fmt: str, dataset: Optional[str] = Query(None, description="Dataset filename to export")):
    """
    Export a dataset's metrology as a downloadable file.

    Args:
        fmt: One of json, fusion or csv.
        dataset: Optional dataset filename. If not provided, uses default.

    Returns:
        PlainTextResponse with a Content-Disposition header for download.

    Raises:
        HTTPException: If the format is unknown (status 400).
    """
    if fmt not in EXPORT_MEDIA_TYPES:
        raise HTTPException(status_code=400, detail=f"Unknown format: {fmt}")
    metrology, _ = load_session(dataset)
    stem = (dataset or srt_metrology.DEFAULT_SRT_FILE).rsplit(".", 1)[0]
    return export_response(metrology, fmt, stem)


@app.post("/api/parse")
async def parse_upload(request: Request, format: str = Query("json", description="Output format")):
    """
    Parse an SRT file sent as the raw request body.

    Returns:
        The rendered export. JSON output also carries the number of parse
        diagnostics in the X-Metrology-Diagnostics header.

    Raises:
        HTTPException: 400 for an unknown format, 422 for invalid input.
    """
    if format not in EXPORT_MEDIA_TYPES:
        raise HTTPException(status_code=400, detail=f"Unknown format: {format}")

    raw = await request.body()
    return await run_in_threadpool(render_upload, raw, format)


def render_upload(raw: bytes, format: str):
    """Parse an uploaded SRT body and render it in the requested format."""
    diagnostics: List[srt_metrology.Diagnostic] = []
    try:
        metrology = srt_metrology.parse_srt(raw, diagnostics=diagnostics)
    except srt_metrology.InvalidInput as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    if format == "json":
        return JSONResponse(
            srt_metrology.metrology_to_records(metrology),
            headers={"X-Metrology-Diagnostics": str(len(diagnostics))},
        )
    return export_response(metrology, format, "upload")


# ============================================================================
# RUN INSTRUCTIONS
# ============================================================================
# Run with: uvicorn app:app --reload
