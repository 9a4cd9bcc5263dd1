"""
Export template catalog.

Four fixed presets that pre-fill export options. Presets are frozen models;
callers build their own ExportOptions from a preset and may override any
field.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from meeting_export.export.errors import TemplateNotFoundError
from meeting_export.export.models import ExportFormat, ExportOptions, SectionOptions, TemplateStyle


class TemplatePreset(SectionOptions):
    """Option values pre-filled by a template (everything except format)."""
    template: TemplateStyle = TemplateStyle.PROFESSIONAL


class ExportTemplate(BaseModel):
    """A named, read-only export preset."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable template identifier")
    name: str = Field(description="Display name")
    description: str = Field(description="What the preset produces")
    options: TemplatePreset = Field(description="Pre-filled option values")

    def build_options(self, format: ExportFormat, **overrides) -> ExportOptions:
        """
        Create ExportOptions from this preset.

        Args:
            format: Target export format
            **overrides: Individual ExportOptions fields to replace

        Returns:
            New ExportOptions; the preset itself is untouched
        """
        values = self.options.model_dump()
        values.update(overrides)
        values["format"] = format
        return ExportOptions(**values)


EXPORT_TEMPLATES: List[ExportTemplate] = [
    ExportTemplate(
        id="professional",
        name="Professional Report",
        description="Complete report with all sections and professional formatting",
        options=TemplatePreset(
            include_transcript=True,
            include_summary=True,
            include_key_points=True,
            include_action_items=True,
            include_metadata=True,
            template=TemplateStyle.PROFESSIONAL,
        ),
    ),
    ExportTemplate(
        id="meeting_minutes",
        name="Meeting Minutes",
        description="Formal meeting minutes format",
        options=TemplatePreset(
            include_transcript=False,
            include_summary=True,
            include_key_points=True,
            include_action_items=True,
            include_metadata=True,
            template=TemplateStyle.PROFESSIONAL,
        ),
    ),
    ExportTemplate(
        id="transcript_only",
        name="Transcript Only",
        description="Just the meeting transcript",
        options=TemplatePreset(
            include_transcript=True,
            include_summary=False,
            include_key_points=False,
            include_action_items=False,
            include_metadata=True,
            template=TemplateStyle.MINIMAL,
        ),
    ),
    ExportTemplate(
        id="summary_only",
        name="Summary Only",
        description="Key points and summary only",
        options=TemplatePreset(
            include_transcript=False,
            include_summary=True,
            include_key_points=True,
            include_action_items=True,
            include_metadata=True,
            template=TemplateStyle.MINIMAL,
        ),
    ),
]

_TEMPLATES_BY_ID: Dict[str, ExportTemplate] = {t.id: t for t in EXPORT_TEMPLATES}


def list_templates() -> List[ExportTemplate]:
    """All presets in catalog order."""
    return list(EXPORT_TEMPLATES)


def get_template(template_id: str) -> ExportTemplate:
    """
    Look up a preset by id.

    Raises:
        TemplateNotFoundError: If no preset has this id
    """
    try:
        return _TEMPLATES_BY_ID[template_id]
    except KeyError:
        raise TemplateNotFoundError(template_id)
