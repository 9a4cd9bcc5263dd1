"""
Generator contract shared by all format generators.

Provides:
- FormatGenerator: capability interface {is_supported(), generate()}
- Per-format option models (PDFOptions, DOCXOptions, TextOptions)
- Per-format result models (PDF, DOCX and text generation results)
- Helpers for filenames and metadata lines used by every format
"""

import re
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from meeting_export.audit import get_logger
from meeting_export.export.errors import ExportError, GeneratorError, MeetingNotFoundError
from meeting_export.export.models import Branding, SectionOptions, TemplateStyle
from meeting_export.meetings.models import Meeting
from meeting_export.meetings.repository import MeetingRepository


logger = get_logger("generators")


class TextMode(str, Enum):
    """Output flavour of the text family generator."""
    PLAIN_TEXT = "plain-text"
    MARKDOWN = "markdown"
    JSON = "json"


class PDFMargins(BaseModel):
    """Page margins in millimetres."""
    model_config = ConfigDict(frozen=True)

    top: float = 25.4
    right: float = 25.4
    bottom: float = 25.4
    left: float = 25.4


class PDFLayout(BaseModel):
    """Typographic settings for PDF rendering."""
    model_config = ConfigDict(frozen=True)

    font_size: int = Field(default=12, ge=6, le=32, description="Body font size in points")
    line_height: float = Field(default=1.4, gt=0, description="Line height multiplier")
    margins: PDFMargins = Field(default_factory=PDFMargins)


class PDFOptions(SectionOptions):
    """Options understood by the PDF generator."""
    template: TemplateStyle = TemplateStyle.PROFESSIONAL
    branding: Optional[Branding] = None
    layout: PDFLayout = Field(default_factory=PDFLayout)


class DOCXStyling(BaseModel):
    """Word styling settings."""
    model_config = ConfigDict(frozen=True)

    font_family: str = "Arial"
    font_size: int = Field(default=12, ge=6, le=32)
    heading_style: Literal["bold", "underline", "italic"] = "bold"
    bullet_style: Literal["dash", "bullet", "number"] = "bullet"


class DOCXOptions(SectionOptions):
    """Options understood by the DOCX generator."""
    template: TemplateStyle = TemplateStyle.PROFESSIONAL
    branding: Optional[Branding] = None
    styling: DOCXStyling = Field(default_factory=DOCXStyling)


class TextOptions(SectionOptions):
    """Options understood by the text family generator."""
    mode: TextMode = TextMode.PLAIN_TEXT
    separator: str = "\n\n"


class PDFGenerationResult(BaseModel):
    """Output of the PDF generator."""
    data: bytes
    filename: str
    size: int
    page_count: int
    processing_time: int


class DOCXGenerationResult(BaseModel):
    """Output of the DOCX generator."""
    data: bytes
    filename: str
    size: int
    processing_time: int


class TextGenerationResult(BaseModel):
    """Output of the text family generator; content is still a str."""
    content: str
    filename: str
    size: int
    processing_time: int


GenerationResult = Union[PDFGenerationResult, DOCXGenerationResult, TextGenerationResult]


class FormatGenerator(ABC):
    """
    Capability interface implemented by every format generator.

    Subclasses implement `_render`; `generate` handles meeting lookup, timing
    and error wrapping so every format fails the same way.
    """

    #: Short name used in error messages and logs ("pdf", "docx", "text")
    name: str = ""

    def __init__(self, repository: MeetingRepository, enabled: bool = True):
        """
        Initialize the generator.

        Args:
            repository: Source of meeting records
            enabled: Deployment switch reported by is_supported()
        """
        self.repository = repository
        self.enabled = enabled

    def is_supported(self) -> bool:
        """Whether this generator can run here. No side effects."""
        return self.enabled

    async def generate(self, meeting_id: str, options: BaseModel) -> GenerationResult:
        """
        Generate a document for one meeting.

        Args:
            meeting_id: Id of the meeting to render
            options: The generator's own options model

        Returns:
            The generator's result model

        Raises:
            MeetingNotFoundError: If the meeting does not exist
            GeneratorError: If rendering fails
        """
        started = time.perf_counter()

        meeting = await self.repository.get_by_id(meeting_id)
        if meeting is None:
            raise MeetingNotFoundError(meeting_id)

        try:
            return self._render(meeting, options, started)
        except ExportError:
            raise
        except Exception as e:
            logger.error(
                "Generation failed",
                generator=self.name,
                meeting_id=meeting_id,
                error=str(e),
            )
            raise GeneratorError(self.name, str(e)) from e

    @abstractmethod
    def _render(self, meeting: Meeting, options: BaseModel, started: float) -> GenerationResult:
        """Render the meeting; `started` is the perf_counter at generate() entry."""


def elapsed_ms(started: float) -> int:
    """Milliseconds since a perf_counter reading."""
    return int((time.perf_counter() - started) * 1000)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)


def generate_filename(meeting: Meeting, extension: str) -> str:
    """
    Build the download filename for a meeting.

    Non-alphanumeric characters of the title become underscores, then the
    meeting date (YYYY-MM-DD) and extension are appended.
    """
    title = meeting.title or "meeting"
    sanitized = re.sub(r"[^a-z0-9]", "_", title, flags=re.IGNORECASE).lower()
    date = _as_utc(meeting.timestamp).date().isoformat()
    return f"{sanitized}_{date}.{extension}"


def format_date(value: datetime) -> str:
    """Human-readable date, e.g. 'March 5, 2024'."""
    return f"{value:%B} {value.day}, {value.year}"


def format_duration(meeting: Meeting) -> str:
    return f"{meeting.duration} minutes" if meeting.duration else "Unknown duration"


def format_participants(meeting: Meeting) -> str:
    return ", ".join(meeting.participants) if meeting.participants else "Unknown participants"


def action_item_status(completed: bool) -> str:
    return "[DONE]" if completed else "[PENDING]"
