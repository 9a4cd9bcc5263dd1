"""
Export models for meeting export functionality.

Provides data structures for:
- Export format enumeration (PDF, DOCX, TXT, MD, JSON)
- Export options with section toggles, template style and branding
- Progress events emitted while an export runs
- Export result with bytes, MIME type, filename and metadata
"""

import base64
import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExportFormat(str, Enum):
    """Supported meeting export formats."""
    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"
    MD = "md"
    JSON = "json"


# Formats produced by the text family generator
TEXT_FORMATS = frozenset({ExportFormat.TXT, ExportFormat.MD, ExportFormat.JSON})


class TemplateStyle(str, Enum):
    """Visual style tag carried by export options."""
    PROFESSIONAL = "professional"
    MINIMAL = "minimal"
    DETAILED = "detailed"


class ExportStage(str, Enum):
    """Checkpoints of a single export, in emission order."""
    PREPARING = "preparing"
    GENERATING = "generating"
    FINALIZING = "finalizing"
    COMPLETE = "complete"


HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


class BrandColors(BaseModel):
    """Colour triple used for headings and accents."""
    model_config = ConfigDict(frozen=True)

    primary: str = Field(
        default="#2563eb",
        description="Heading colour (#RRGGBB)"
    )
    secondary: str = Field(
        default="#64748b",
        description="Secondary text colour (#RRGGBB)"
    )
    accent: str = Field(
        default="#10b981",
        description="Accent colour (#RRGGBB)"
    )

    @field_validator("primary", "secondary", "accent")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        if not HEX_COLOR_PATTERN.match(v):
            raise ValueError(f"Colour must be in #RRGGBB form, got '{v}'")
        return v.lower()


class Branding(BaseModel):
    """Optional company branding applied to rendered documents."""
    model_config = ConfigDict(frozen=True)

    logo: Optional[str] = Field(
        default=None,
        description="Reference to a logo image (file path)"
    )
    company_name: Optional[str] = Field(
        default=None,
        description="Company name shown in document headers"
    )
    colors: Optional[BrandColors] = Field(
        default=None,
        description="Brand colour triple"
    )


class SectionOptions(BaseModel):
    """Independent toggles selecting which meeting sections are exported."""
    model_config = ConfigDict(frozen=True)

    include_transcript: bool = Field(default=True)
    include_summary: bool = Field(default=True)
    include_key_points: bool = Field(default=True)
    include_action_items: bool = Field(default=True)
    include_metadata: bool = Field(default=True)


class ExportOptions(SectionOptions):
    """
    Caller-supplied options for one export.

    Immutable once constructed. No combination of toggles is invalid, but
    unknown keys are rejected.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    format: ExportFormat = Field(
        description="Target document format"
    )
    template: TemplateStyle = Field(
        default=TemplateStyle.PROFESSIONAL,
        description="Template style tag"
    )
    branding: Optional[Branding] = Field(
        default=None,
        description="Branding overrides; deployment defaults apply when None"
    )

    def section_toggles(self) -> dict:
        """Return only the section toggles, ready to build generator options."""
        return self.model_dump(include=set(SectionOptions.model_fields))


class ExportProgress(BaseModel):
    """A progress event published while an export runs."""
    model_config = ConfigDict(frozen=True)

    stage: ExportStage = Field(
        description="Current checkpoint"
    )
    progress: int = Field(
        ge=0,
        le=100,
        description="Completion percentage"
    )
    message: str = Field(
        description="Human-readable status line"
    )
    estimated_time_remaining: Optional[int] = Field(
        default=None,
        ge=0,
        description="Estimated milliseconds left, when known"
    )
    export_id: str = Field(
        description="Correlation id of the export that emitted the event"
    )
    batch_id: Optional[str] = Field(
        default=None,
        description="Correlation id of the enclosing batch, if any"
    )


class ExportContent(BaseModel):
    """Opaque document bytes with their declared MIME type."""
    data: bytes = Field(
        description="Raw bytes of the exported document"
    )
    mime_type: str = Field(
        description="Declared content type"
    )


class ExportMetadata(BaseModel):
    """Format-dependent facts about the exported document."""
    page_count: Optional[int] = Field(
        default=None,
        description="Number of pages (PDF only)"
    )
    word_count: Optional[int] = Field(
        default=None,
        description="Whitespace-delimited word count (txt, md, json only)"
    )


class ExportResult(BaseModel):
    """Result of a meeting export operation."""

    export_id: str = Field(
        description="Correlation id shared with this export's progress events"
    )
    content: ExportContent = Field(
        description="Document bytes and MIME type"
    )
    filename: str = Field(
        description="Suggested filename for the exported document"
    )
    size: int = Field(
        ge=0,
        description="Size of the document in bytes"
    )
    format: ExportFormat = Field(
        description="Export format used"
    )
    processing_time: int = Field(
        ge=0,
        description="Generation time in milliseconds"
    )
    metadata: Optional[ExportMetadata] = Field(
        default=None,
        description="Page or word count, depending on format"
    )

    def to_base64(self) -> str:
        """Convert content bytes to base64 string for API response."""
        return base64.b64encode(self.content.data).decode("utf-8")


class FormatInfo(BaseModel):
    """Descriptor of one export format as reported to clients."""
    format: ExportFormat
    name: str
    description: str
    supported: bool
