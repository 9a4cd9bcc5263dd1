"""
PDF generator for meeting exports.

Uses fpdf2 to render an A4 report with branded headings, a company header,
optional logo and "Page X of Y" footers. The page count comes from the
renderer itself.
"""

from pathlib import Path
from typing import Optional, Tuple

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from meeting_export.export.generators.base import (
    FormatGenerator,
    PDFGenerationResult,
    PDFOptions,
    action_item_status,
    elapsed_ms,
    format_date,
    format_duration,
    format_participants,
    generate_filename,
)
from meeting_export.export.models import BrandColors, TemplateStyle
from meeting_export.meetings.models import Meeting


# Conversion: 1pt = 0.352778mm
PT_TO_MM = 0.352778


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Convert '#RRGGBB' to an (r, g, b) tuple."""
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def to_latin1(text: str) -> str:
    """Fold text into the Latin-1 range supported by the core PDF fonts."""
    return text.encode("latin-1", "replace").decode("latin-1")


class MeetingReportPDF(FPDF):
    """
    Custom FPDF class with a branded header and page numbering footer.

    Header shows the logo (when the file exists) and company name; footer
    shows "Page X of Y".
    """

    company_name: Optional[str] = None
    logo_path: Optional[Path] = None
    header_rgb: Tuple[int, int, int] = (100, 116, 139)

    def header(self):
        """Add company header."""
        if self.logo_path is not None:
            self.image(str(self.logo_path), x=self.l_margin, y=8, h=10)
        if self.company_name:
            self.set_font("Helvetica", "B", 10)
            self.set_text_color(*self.header_rgb)
            self.cell(0, 10, to_latin1(self.company_name), align="R",
                      new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            self.ln(4)

    def footer(self):
        """Add page number footer."""
        self.set_y(-15)  # Position 15mm from bottom
        self.set_font("Helvetica", "I", 9)
        self.set_text_color(128, 128, 128)
        self.cell(0, 10, f"Page {self.page_no()} of {{nb}}", align="C")


class PDFGenerator(FormatGenerator):
    """
    Exports meetings to PDF.

    Applies:
    - Paper size (A4 portrait)
    - Margins and body font size from PDFOptions.layout
    - Brand primary colour for section headings (professional/detailed)
    - Company header and logo (professional/detailed)
    - Page numbers

    Example:
        generator = PDFGenerator(repository)
        result = await generator.generate("m1", PDFOptions())
        pdf_bytes = result.data
    """

    name = "pdf"

    def _render(self, meeting: Meeting, options: PDFOptions, started: float) -> PDFGenerationResult:
        layout = options.layout
        branding = options.branding
        colors = (branding.colors if branding else None) or BrandColors()
        plain = options.template == TemplateStyle.MINIMAL

        pdf = MeetingReportPDF(orientation="P", unit="mm", format="A4")
        pdf.alias_nb_pages()  # Enable total page count in footer

        if not plain and branding is not None:
            pdf.company_name = branding.company_name
            if branding.logo and Path(branding.logo).is_file():
                pdf.logo_path = Path(branding.logo)
            pdf.header_rgb = hex_to_rgb(colors.secondary)

        pdf.set_margins(layout.margins.left, layout.margins.top, layout.margins.right)
        pdf.set_auto_page_break(auto=True, margin=layout.margins.bottom)
        pdf.add_page()

        heading_rgb = (0, 0, 0) if plain else hex_to_rgb(colors.primary)
        line_height = layout.font_size * PT_TO_MM * layout.line_height

        self._write_title(pdf, meeting.display_title, layout.font_size, heading_rgb)

        if options.include_metadata:
            self._write_lines(pdf, [
                f"Date: {format_date(meeting.timestamp)}",
                f"Duration: {format_duration(meeting)}",
                f"Participants: {format_participants(meeting)}",
            ], layout.font_size, line_height)

        if options.include_summary and meeting.summary:
            self._write_heading(pdf, "Summary", layout.font_size, heading_rgb)
            self._write_paragraphs(pdf, meeting.summary, layout.font_size, line_height)

        if options.include_key_points and meeting.key_points:
            self._write_heading(pdf, "Key Points", layout.font_size, heading_rgb)
            self._write_lines(pdf, [
                f"{index}. {point}" for index, point in enumerate(meeting.key_points, 1)
            ], layout.font_size, line_height)

        if options.include_action_items and meeting.action_items:
            self._write_heading(pdf, "Action Items", layout.font_size, heading_rgb)
            lines = []
            for item in meeting.action_items:
                line = f"{action_item_status(item.completed)} {item.text}"
                if item.assignee:
                    line += f" ({item.assignee})"
                if item.due_date:
                    line += f" - due {format_date(item.due_date)}"
                lines.append(line)
            self._write_lines(pdf, lines, layout.font_size, line_height)

        if options.template == TemplateStyle.DETAILED:
            if meeting.minutes:
                self._write_heading(pdf, "Minutes", layout.font_size, heading_rgb)
                self._write_paragraphs(pdf, meeting.minutes, layout.font_size, line_height)
            for translation in meeting.translations:
                self._write_heading(pdf, f"Translation ({translation.language})",
                                    layout.font_size, heading_rgb)
                self._write_paragraphs(pdf, translation.content, layout.font_size, line_height)

        if options.include_transcript and meeting.transcript:
            self._write_heading(pdf, "Transcript", layout.font_size, heading_rgb)
            self._write_paragraphs(pdf, meeting.transcript, layout.font_size - 1, line_height)

        page_count = pdf.page_no()
        pdf_bytes = bytes(pdf.output())

        return PDFGenerationResult(
            data=pdf_bytes,
            filename=generate_filename(meeting, "pdf"),
            size=len(pdf_bytes),
            page_count=page_count,
            processing_time=elapsed_ms(started),
        )

    def _write_title(self, pdf: FPDF, title: str, font_size: int, rgb: Tuple[int, int, int]):
        pdf.set_font("Helvetica", "B", font_size + 8)
        pdf.set_text_color(*rgb)
        pdf.multi_cell(0, (font_size + 8) * PT_TO_MM * 1.3, to_latin1(title),
                       new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(3)

    def _write_heading(self, pdf: FPDF, text: str, font_size: int, rgb: Tuple[int, int, int]):
        pdf.ln(4)
        pdf.set_font("Helvetica", "B", font_size + 3)
        pdf.set_text_color(*rgb)
        pdf.cell(0, (font_size + 3) * PT_TO_MM * 1.5, to_latin1(text),
                 new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def _write_lines(self, pdf: FPDF, lines, font_size: int, line_height: float):
        pdf.set_font("Helvetica", size=font_size)
        pdf.set_text_color(0, 0, 0)
        for line in lines:
            pdf.multi_cell(0, line_height, to_latin1(line),
                           new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def _write_paragraphs(self, pdf: FPDF, content: str, font_size: int, line_height: float):
        """
        Write free text, keeping paragraph breaks.

        Paragraphs are separated by blank lines; line breaks inside a
        paragraph are preserved.
        """
        pdf.set_font("Helvetica", size=font_size)
        pdf.set_text_color(0, 0, 0)
        paragraphs = content.split("\n\n")

        for i, paragraph in enumerate(paragraphs):
            if not paragraph.strip():
                continue
            for line in paragraph.split("\n"):
                if line.strip():
                    pdf.multi_cell(0, line_height, to_latin1(line.strip()),
                                   new_x=XPos.LMARGIN, new_y=YPos.NEXT)
                else:
                    pdf.ln(line_height / 2)
            if i < len(paragraphs) - 1:
                pdf.ln(line_height / 2)
