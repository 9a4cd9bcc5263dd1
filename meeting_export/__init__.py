"""
Meeting Export - turns stored meeting records into downloadable documents.

Provides:
- Export coordination with progress reporting and batch export
- PDF, DOCX, plain text, Markdown and JSON generators
- Format registry, template presets and export history
"""

__version__ = "0.1.0"

from meeting_export.export import (
    ExportCoordinator,
    ExportFormat,
    ExportOptions,
    ExportProgress,
    ExportResult,
)
from meeting_export.config import ExportSettings, load_settings
from meeting_export.meetings import Meeting, MeetingRepository

__all__ = [
    "ExportSettings",
    "load_settings",
    "ExportCoordinator",
    "ExportFormat",
    "ExportOptions",
    "ExportProgress",
    "ExportResult",
    "Meeting",
    "MeetingRepository",
    "__version__",
]
