# api.py
# MEETING EXPORT SERVICE: HTTP surface over the export coordinator.
# Meeting records are read from MEETING_EXPORT_DATA_DIR.

import time
import uuid
from datetime import date
from typing import Dict, List, Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from meeting_export.audit import configure_logging
from meeting_export.config import load_settings
from meeting_export.export import (
    ExportCoordinator,
    ExportFailedError,
    ExportFormat,
    ExportOptions,
    ExportResult,
    GeneratorError,
    MeetingNotFoundError,
    UnsupportedFormatError,
)
from meeting_export.meetings import JsonMeetingRepository

# 1. SETUP & SETTINGS
settings = load_settings()  # Loads .env for local runs

# Configure structured logging once for the whole process
configure_logging(settings.log_level)
logger = structlog.get_logger("meeting_export_api")

app = FastAPI(title="Meeting Export Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# 2. EXPORT INFRASTRUCTURE
meeting_repo = JsonMeetingRepository(settings.data_dir)
coordinator = ExportCoordinator(meeting_repo, settings=settings)


# 3. REQUEST / RESPONSE MODELS
class ExportRequest(BaseModel):
    """Request model for a single meeting export."""
    meeting_id: str = Field(
        min_length=1,
        description="Id of the meeting to export"
    )
    options: Dict = Field(
        description="Export options; 'format' is required (pdf, docx, txt, md, json)"
    )


class BatchExportRequest(BaseModel):
    """Request model for a sequential batch export."""
    meeting_ids: List[str] = Field(
        min_length=1,
        description="Meetings to export, in order"
    )
    options: Dict = Field(
        description="Export options applied to every meeting"
    )


class ExportResponse(BaseModel):
    """Response model for one exported document."""
    export_id: str = Field(description="Correlation id of the export")
    filename: str = Field(description="Suggested filename")
    format: str = Field(description="Export format")
    mime_type: str = Field(description="Content type of the document")
    size: int = Field(description="Document size in bytes")
    processing_time: int = Field(description="Generation time in milliseconds")
    metadata: Optional[Dict] = Field(default=None, description="Page or word count")
    content_base64: str = Field(description="Base64-encoded document bytes")


class EstimateResponse(BaseModel):
    """Response model for export time estimates."""
    meeting_id: str
    format: str
    estimated_ms: int


def _to_response(result: ExportResult) -> ExportResponse:
    return ExportResponse(
        export_id=result.export_id,
        filename=result.filename,
        format=result.format.value,
        mime_type=result.content.mime_type,
        size=result.size,
        processing_time=result.processing_time,
        metadata=result.metadata.model_dump(exclude_none=True) if result.metadata else None,
        content_base64=result.to_base64(),
    )


def _parse_options(raw: Dict, request_id: str) -> ExportOptions:
    """Validate raw options, mapping bad input to 400."""
    fmt = str(raw.get("format", "")).lower()
    if fmt not in [f.value for f in ExportFormat]:
        valid_formats = [f.value for f in ExportFormat]
        logger.warning("Invalid export format", request_id=request_id, format=fmt)
        raise HTTPException(
            400,
            {"error": "validation_error", "message": f"Unsupported export format '{fmt}'", "field": "options.format", "valid_options": valid_formats}
        )

    values = {**raw, "format": fmt}
    branding = raw.get("branding")
    if isinstance(branding, dict):
        # Logos are server-side files; only the configured one may be used
        if branding.get("logo"):
            logger.warning("Client logo rejected", request_id=request_id)
            raise HTTPException(
                400,
                {"error": "validation_error", "message": "Custom logos are not accepted", "field": "options.branding.logo"}
            )
        values["branding"] = {**branding, "logo": settings.default_branding.logo}

    try:
        return ExportOptions(**values)
    except ValidationError as e:
        logger.warning("Invalid export options", request_id=request_id, error=str(e))
        raise HTTPException(
            400,
            {"error": "validation_error", "message": f"Invalid options: {str(e)}", "field": "options"}
        )


def _raise_for_export_error(e: ExportFailedError, request_id: str):
    """Map a failed export to an HTTP error based on its cause."""
    cause = e.cause
    if isinstance(cause, MeetingNotFoundError):
        raise HTTPException(404, {"error": "not_found", "message": str(e)})
    if isinstance(cause, UnsupportedFormatError):
        raise HTTPException(400, {"error": "validation_error", "message": str(e)})
    if isinstance(cause, GeneratorError):
        logger.error("Generator failed", request_id=request_id, error=str(e))
        raise HTTPException(500, {"error": "export_error", "message": f"{cause.format.upper()} generation failed"})
    logger.error("Unexpected export error", request_id=request_id, error=str(e))
    raise HTTPException(500, {"error": "export_error", "message": "Export failed"})


# 4. ENDPOINTS
@app.get("/")
def health_check():
    return {"status": "ok", "service": "meeting-export"}


@app.get("/formats")
def list_formats():
    """Supported export formats with their current availability."""
    return [info.model_dump(mode="json") for info in coordinator.list_formats()]


@app.get("/templates")
def list_templates():
    """Export option presets."""
    return [template.model_dump(mode="json") for template in coordinator.list_templates()]


@app.get("/export/estimate", response_model=EstimateResponse)
async def estimate_export(meeting_id: str, format: str):
    """Estimated export duration for a meeting and format."""
    estimated = await coordinator.estimate_export_time(meeting_id, format.lower())
    return EstimateResponse(meeting_id=meeting_id, format=format, estimated_ms=estimated)


@app.post("/export", response_model=ExportResponse)
async def export_meeting(req: ExportRequest):
    """
    Export one meeting.

    Returns:
        ExportResponse with base64 content and metadata

    Raises:
        400: Invalid or unsupported options
        404: Meeting not found
        500: Generation failed
    """
    request_id = date.today().strftime("%Y%m%d") + str(int(time.time()))
    options = _parse_options(req.options, request_id)

    logger.info("Export requested", request_id=request_id, meeting_id=req.meeting_id, format=options.format.value)

    try:
        result = await coordinator.export_meeting(req.meeting_id, options)
    except ExportFailedError as e:
        _raise_for_export_error(e, request_id)

    return _to_response(result)


@app.post("/export/batch", response_model=List[ExportResponse])
async def export_batch(req: BatchExportRequest):
    """
    Export several meetings in order; the first failure aborts the batch.
    """
    request_id = date.today().strftime("%Y%m%d") + str(int(time.time()))
    options = _parse_options(req.options, request_id)
    batch_id = uuid.uuid4().hex

    logger.info("Batch export requested", request_id=request_id, batch_id=batch_id, count=len(req.meeting_ids))

    try:
        results = await coordinator.export_meetings_batch(req.meeting_ids, options, batch_id=batch_id)
    except ExportFailedError as e:
        _raise_for_export_error(e, request_id)

    return [_to_response(result) for result in results]
