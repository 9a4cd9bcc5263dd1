"""
DOCX generator for meeting exports.

Uses python-docx to generate Word documents with headed sections, list
styles chosen from DOCXStyling and brand-coloured headings.
"""

import io

from docx import Document
from docx.shared import Pt, RGBColor

from meeting_export.export.generators.base import (
    DOCXGenerationResult,
    DOCXOptions,
    DOCXStyling,
    FormatGenerator,
    action_item_status,
    elapsed_ms,
    format_date,
    format_duration,
    format_participants,
    generate_filename,
)
from meeting_export.export.models import TemplateStyle
from meeting_export.meetings.models import Meeting


LIST_STYLES = {
    "bullet": "List Bullet",
    "number": "List Number",
}


class DOCXGenerator(FormatGenerator):
    """
    Exports meetings to DOCX for Word editing.

    Applies formatting from DOCXOptions.styling:
    - Font family and size on the Normal style
    - Heading emphasis (bold, underline or italic)
    - List style (bullets, numbers or dashes)

    Example:
        generator = DOCXGenerator(repository)
        result = await generator.generate("m1", DOCXOptions())
        docx_bytes = result.data
    """

    name = "docx"

    def _render(self, meeting: Meeting, options: DOCXOptions, started: float) -> DOCXGenerationResult:
        styling = options.styling
        doc = Document()

        normal = doc.styles["Normal"]
        normal.font.name = styling.font_family
        normal.font.size = Pt(styling.font_size)

        heading_color = None
        if options.template != TemplateStyle.MINIMAL and options.branding and options.branding.colors:
            heading_color = RGBColor.from_string(options.branding.colors.primary.lstrip("#").upper())

        props = doc.core_properties
        props.title = meeting.display_title
        if options.branding and options.branding.company_name:
            props.author = options.branding.company_name

        doc.add_heading(meeting.display_title, level=0)

        if options.include_metadata:
            doc.add_paragraph(f"Date: {format_date(meeting.timestamp)}")
            doc.add_paragraph(f"Duration: {format_duration(meeting)}")
            doc.add_paragraph(f"Participants: {format_participants(meeting)}")

        if options.include_summary and meeting.summary:
            self._add_heading(doc, "Summary", styling, heading_color)
            self._add_text(doc, meeting.summary)

        if options.include_key_points and meeting.key_points:
            self._add_heading(doc, "Key Points", styling, heading_color)
            for point in meeting.key_points:
                self._add_list_item(doc, point, styling)

        if options.include_action_items and meeting.action_items:
            self._add_heading(doc, "Action Items", styling, heading_color)
            for item in meeting.action_items:
                text = f"{action_item_status(item.completed)} {item.text}"
                if item.assignee:
                    text += f" (Assigned to: {item.assignee})"
                if item.due_date:
                    text += f" (Due: {format_date(item.due_date)})"
                self._add_list_item(doc, text, styling)

        if options.template == TemplateStyle.DETAILED:
            if meeting.minutes:
                self._add_heading(doc, "Minutes", styling, heading_color)
                self._add_text(doc, meeting.minutes)
            for translation in meeting.translations:
                self._add_heading(doc, f"Translation ({translation.language})", styling, heading_color)
                self._add_text(doc, translation.content)

        if options.include_transcript and meeting.transcript:
            self._add_heading(doc, "Transcript", styling, heading_color)
            self._add_text(doc, meeting.transcript)

        # Save to bytes
        docx_buffer = io.BytesIO()
        doc.save(docx_buffer)
        docx_bytes = docx_buffer.getvalue()

        return DOCXGenerationResult(
            data=docx_bytes,
            filename=generate_filename(meeting, "docx"),
            size=len(docx_bytes),
            processing_time=elapsed_ms(started),
        )

    def _add_heading(self, doc, text: str, styling: DOCXStyling, color):
        heading = doc.add_heading(level=1)
        run = heading.add_run(text)
        run.bold = styling.heading_style == "bold"
        run.underline = styling.heading_style == "underline"
        run.italic = styling.heading_style == "italic"
        if color is not None:
            run.font.color.rgb = color

    def _add_list_item(self, doc, text: str, styling: DOCXStyling):
        style = LIST_STYLES.get(styling.bullet_style)
        if style is None:
            doc.add_paragraph(f"- {text}")
        else:
            doc.add_paragraph(text, style=style)

    def _add_text(self, doc, content: str):
        """Add free text, one paragraph per blank-line separated block."""
        for block in content.split("\n\n"):
            if block.strip():
                doc.add_paragraph(block.strip())
