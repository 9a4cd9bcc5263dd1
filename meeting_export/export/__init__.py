"""
Export module for meeting export functionality.

Turns stored meetings into PDF, DOCX, plain text, Markdown or JSON documents
with progress reporting and sequential batch export.

Classes:
    ExportCoordinator: Runs single and batch exports
    FormatRegistry: Format metadata and generator lookup
    ProgressBus: Publish/subscribe channel for progress events
    ExportHistory: Best-effort record of completed exports
    ExportFormat: Enum of supported formats
    ExportOptions: Immutable export request options
    ExportResult: Result model with bytes and metadata
"""

from meeting_export.export.models import (
    Branding,
    BrandColors,
    ExportContent,
    ExportFormat,
    ExportMetadata,
    ExportOptions,
    ExportProgress,
    ExportResult,
    ExportStage,
    FormatInfo,
    SectionOptions,
    TemplateStyle,
)
from meeting_export.export.errors import (
    ExportError,
    ExportFailedError,
    FormatUnavailableError,
    GeneratorError,
    MeetingNotFoundError,
    TemplateNotFoundError,
    UnsupportedFormatError,
)
from meeting_export.export.formats import FormatRegistry, mime_type_of
from meeting_export.export.templates import ExportTemplate, get_template, list_templates
from meeting_export.export.progress import ProgressBus
from meeting_export.export.history import ExportHistory, ExportHistoryEntry, HistoryOutcome
from meeting_export.export.sinks import DirectorySink, DownloadSink
from meeting_export.export.coordinator import (
    ExportCoordinator,
    ExportJob,
    build_default_generators,
)

__all__ = [
    # Models
    "Branding",
    "BrandColors",
    "ExportContent",
    "ExportFormat",
    "ExportMetadata",
    "ExportOptions",
    "ExportProgress",
    "ExportResult",
    "ExportStage",
    "FormatInfo",
    "SectionOptions",
    "TemplateStyle",
    # Errors
    "ExportError",
    "ExportFailedError",
    "FormatUnavailableError",
    "GeneratorError",
    "MeetingNotFoundError",
    "TemplateNotFoundError",
    "UnsupportedFormatError",
    # Registry and catalog
    "FormatRegistry",
    "mime_type_of",
    "ExportTemplate",
    "get_template",
    "list_templates",
    # Progress, history, sinks
    "ProgressBus",
    "ExportHistory",
    "ExportHistoryEntry",
    "HistoryOutcome",
    "DirectorySink",
    "DownloadSink",
    # Coordinator
    "ExportCoordinator",
    "ExportJob",
    "build_default_generators",
]
