"""
Exception hierarchy for the export pipeline.

Fatal errors are raised and reach the caller wrapped in ExportFailedError.
Best-effort failures (history writes, progress subscribers) never appear
here: they are reported as outcome values instead.
"""

from typing import Optional


class ExportError(Exception):
    """Base class for export errors."""


class MeetingNotFoundError(ExportError):
    """The requested meeting id does not resolve to a stored meeting."""

    def __init__(self, meeting_id: str):
        self.meeting_id = meeting_id
        super().__init__(f"Meeting {meeting_id} not found")


class UnsupportedFormatError(ExportError):
    """The requested format is not one of the known export formats."""

    def __init__(self, fmt: object):
        self.format = getattr(fmt, "value", fmt)
        super().__init__(f"Unsupported export format: {self.format}")


class FormatUnavailableError(UnsupportedFormatError):
    """The format is known but switched off in this deployment."""

    def __init__(self, fmt: object):
        self.format = getattr(fmt, "value", fmt)
        ExportError.__init__(self, f"Export format not available: {self.format}")


class GeneratorError(ExportError):
    """A format generator failed while rendering."""

    def __init__(self, fmt: str, message: str):
        self.format = fmt
        super().__init__(f"{fmt.upper()} generation failed: {message}")


class TemplateNotFoundError(ExportError, KeyError):
    """No export template exists with the given id."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Export template '{template_id}' not found")

    def __str__(self) -> str:
        return self.args[0]


class ExportFailedError(ExportError):
    """
    Caller-facing wrapper for any fatal export error.

    The message keeps the cause's text ("Export failed: <cause>") and the
    original exception is available as `cause` (and as __cause__).
    """

    def __init__(self, cause: BaseException):
        self.cause: Optional[BaseException] = cause
        super().__init__(f"Export failed: {cause}")
