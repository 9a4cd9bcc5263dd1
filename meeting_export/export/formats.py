"""
Format registry for meeting export.

Static table mapping each export format to its MIME type and descriptor,
plus the mapping from format to the generator instance that produces it.
"""

from typing import Dict, FrozenSet, Iterable, List, Mapping

from meeting_export.export.errors import UnsupportedFormatError
from meeting_export.export.generators import FormatGenerator
from meeting_export.export.models import ExportFormat, FormatInfo


DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES: Dict[ExportFormat, str] = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ExportFormat.TXT: "text/plain",
    ExportFormat.MD: "text/markdown",
    ExportFormat.JSON: "application/json",
}

# (name, description), in listing order
FORMAT_DESCRIPTORS: Dict[ExportFormat, tuple] = {
    ExportFormat.PDF: ("PDF Document", "Portable Document Format with professional layout"),
    ExportFormat.DOCX: ("Word Document", "Microsoft Word compatible document"),
    ExportFormat.TXT: ("Plain Text", "Simple text file with basic formatting"),
    ExportFormat.MD: ("Markdown", "Markdown formatted text with structure"),
    ExportFormat.JSON: ("JSON Data", "Structured data export for developers"),
}


def mime_type_of(fmt: object) -> str:
    """
    Return the MIME type for a format.

    Total over any input: unknown or malformed values map to
    application/octet-stream.
    """
    try:
        return MIME_TYPES[ExportFormat(fmt)]
    except ValueError:
        return DEFAULT_MIME_TYPE


class FormatRegistry:
    """
    Maps every export format to the generator that produces it.

    A format is supported when it is not disabled for this deployment and
    its generator's probe succeeds. Generators shared by several formats
    are probed once per format.

    Usage:
        registry = FormatRegistry({ExportFormat.PDF: pdf_gen, ...}, disabled_formats={ExportFormat.MD})
        registry.generator_for(ExportFormat.TXT)
        registry.is_supported(ExportFormat.MD)  # False
        registry.list_formats()
    """

    def __init__(
        self,
        generators: Mapping[ExportFormat, FormatGenerator],
        disabled_formats: Iterable[ExportFormat] = (),
    ):
        missing = [f.value for f in ExportFormat if f not in generators]
        if missing:
            raise ValueError(f"No generator registered for formats: {missing}")
        self._generators: Dict[ExportFormat, FormatGenerator] = dict(generators)
        self._disabled: FrozenSet[ExportFormat] = frozenset(
            ExportFormat(f) for f in disabled_formats
        )

    def generator_for(self, fmt: object) -> FormatGenerator:
        """
        Look up the generator for a format.

        Raises:
            UnsupportedFormatError: If fmt is not a known export format
        """
        try:
            return self._generators[ExportFormat(fmt)]
        except ValueError:
            raise UnsupportedFormatError(fmt)

    def is_supported(self, fmt: object) -> bool:
        """Whether fmt can be exported here. Unknown formats are unsupported."""
        try:
            fmt = ExportFormat(fmt)
        except ValueError:
            return False
        return fmt not in self._disabled and self._generators[fmt].is_supported()

    def list_formats(self) -> List[FormatInfo]:
        """All five formats in fixed order, with their current support."""
        return [
            FormatInfo(
                format=fmt,
                name=name,
                description=description,
                supported=self.is_supported(fmt),
            )
            for fmt, (name, description) in FORMAT_DESCRIPTORS.items()
        ]
