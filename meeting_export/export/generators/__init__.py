"""
Format generators for meeting export.

Classes:
    FormatGenerator: Capability interface implemented by every generator
    PDFGenerator: PDF via fpdf2
    DOCXGenerator: Word documents via python-docx
    TextGenerator: Plain text, Markdown and JSON
"""

from meeting_export.export.generators.base import (
    DOCXGenerationResult,
    DOCXOptions,
    DOCXStyling,
    FormatGenerator,
    GenerationResult,
    PDFGenerationResult,
    PDFLayout,
    PDFMargins,
    PDFOptions,
    TextGenerationResult,
    TextMode,
    TextOptions,
    generate_filename,
)
from meeting_export.export.generators.docx import DOCXGenerator
from meeting_export.export.generators.pdf import PDFGenerator
from meeting_export.export.generators.text import TextGenerator

__all__ = [
    "FormatGenerator",
    "GenerationResult",
    "PDFGenerator",
    "PDFOptions",
    "PDFLayout",
    "PDFMargins",
    "PDFGenerationResult",
    "DOCXGenerator",
    "DOCXOptions",
    "DOCXStyling",
    "DOCXGenerationResult",
    "TextGenerator",
    "TextOptions",
    "TextMode",
    "TextGenerationResult",
    "generate_filename",
]
