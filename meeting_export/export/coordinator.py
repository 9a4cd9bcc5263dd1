"""
Export coordinator orchestrating meeting export.

Pipeline for one export:
1. Publish `preparing` (10%)
2. Resolve the meeting through the repository
3. Publish `generating` (30%)
4. Dispatch to the generator for the requested format
5. Project the generator's result into an ExportResult
6. Publish `finalizing` (90%)
7. Record export history (best-effort)
8. Publish `complete` (100%) and return the result

Every progress event carries the export's correlation id. Batch export runs
this pipeline once per meeting, strictly in order, and stops at the first
failure.
"""

import asyncio
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence

from meeting_export.audit import get_logger
from meeting_export.config import ExportSettings
from meeting_export.export.errors import (
    ExportFailedError,
    FormatUnavailableError,
    MeetingNotFoundError,
    UnsupportedFormatError,
)
from meeting_export.export.formats import FormatRegistry, mime_type_of
from meeting_export.export.generators import (
    DOCXGenerator,
    DOCXOptions,
    FormatGenerator,
    PDFGenerator,
    PDFOptions,
    TextGenerator,
    TextMode,
    TextOptions,
)
from meeting_export.export.history import ExportHistory, ExportHistoryEntry, HistoryOutcome
from meeting_export.export.models import (
    ExportContent,
    ExportFormat,
    ExportMetadata,
    ExportOptions,
    ExportProgress,
    ExportResult,
    ExportStage,
    FormatInfo,
    TEXT_FORMATS,
)
from meeting_export.export.progress import ProgressBus, ProgressCallback
from meeting_export.export.sinks import DirectorySink, DownloadSink
from meeting_export.export.templates import ExportTemplate, list_templates
from meeting_export.meetings.repository import MeetingRepository


logger = get_logger("coordinator")


# Base generation time per format, in milliseconds
EXPORT_TIME_ESTIMATES_MS = {
    ExportFormat.PDF: 2000,
    ExportFormat.DOCX: 1500,
    ExportFormat.TXT: 500,
    ExportFormat.MD: 500,
    ExportFormat.JSON: 300,
}
DEFAULT_EXPORT_TIME_MS = 1000

TEXT_MODES = {
    ExportFormat.TXT: TextMode.PLAIN_TEXT,
    ExportFormat.MD: TextMode.MARKDOWN,
    ExportFormat.JSON: TextMode.JSON,
}


def count_words(text: str) -> int:
    """Count whitespace-delimited words."""
    return len(text.split())


def estimate_for(fmt: object) -> int:
    try:
        return EXPORT_TIME_ESTIMATES_MS[ExportFormat(fmt)]
    except ValueError:
        return DEFAULT_EXPORT_TIME_MS


@dataclass
class ExportJob:
    """A scheduled export whose correlation id is known before it runs."""
    export_id: str
    task: "asyncio.Task[ExportResult]"

    def __await__(self):
        return self.task.__await__()


def build_default_generators(
    repository: MeetingRepository,
    settings: ExportSettings,
) -> Mapping[ExportFormat, FormatGenerator]:
    """
    Create the standard generator set.

    The single text generator instance serves txt, md and json; switching
    off one of them is handled per format by the registry.
    """
    text = TextGenerator(
        repository,
        enabled=any(settings.is_format_enabled(f) for f in TEXT_FORMATS),
    )
    return {
        ExportFormat.PDF: PDFGenerator(
            repository, enabled=settings.is_format_enabled(ExportFormat.PDF)
        ),
        ExportFormat.DOCX: DOCXGenerator(
            repository, enabled=settings.is_format_enabled(ExportFormat.DOCX)
        ),
        ExportFormat.TXT: text,
        ExportFormat.MD: text,
        ExportFormat.JSON: text,
    }


class ExportCoordinator:
    """
    Turns stored meetings into downloadable documents.

    Example:
        coordinator = ExportCoordinator(repository)
        unsubscribe = coordinator.on_progress(print)
        result = await coordinator.export_meeting("m1", ExportOptions(format=ExportFormat.PDF))
        coordinator.download_export(result)
    """

    def __init__(
        self,
        repository: MeetingRepository,
        settings: Optional[ExportSettings] = None,
        generators: Optional[Mapping[ExportFormat, FormatGenerator]] = None,
        bus: Optional[ProgressBus] = None,
        history: Optional[ExportHistory] = None,
        sink: Optional[DownloadSink] = None,
    ):
        """
        Initialize the coordinator.

        Args:
            repository: Meeting lookup used before dispatch
            settings: Deployment settings. Defaults to ExportSettings().
            generators: Format -> generator mapping. Defaults to the
                        standard PDF/DOCX/text generators.
            bus: Progress bus. A private bus is created if None.
            history: Export history. Defaults to settings.history_file.
            sink: Default download sink. Defaults to settings.download_dir.
        """
        self.repository = repository
        self.settings = settings or ExportSettings()
        self.registry = FormatRegistry(
            generators or build_default_generators(repository, self.settings),
            disabled_formats=self.settings.disabled_formats,
        )
        self.bus = bus or ProgressBus()
        self.history = history or ExportHistory(self.settings.history_file)
        self.sink = sink or DirectorySink(self.settings.download_dir)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def list_formats(self) -> List[FormatInfo]:
        return self.registry.list_formats()

    def list_templates(self) -> List[ExportTemplate]:
        return list_templates()

    def on_progress(
        self,
        callback: ProgressCallback,
        export_id: Optional[str] = None,
    ) -> Callable[[], None]:
        """Subscribe to progress events; returns the unsubscribe function."""
        return self.bus.subscribe(callback, export_id=export_id)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    @staticmethod
    def new_export_id() -> str:
        return uuid.uuid4().hex

    def start_export(self, meeting_id: str, options: ExportOptions) -> ExportJob:
        """
        Schedule an export and return its correlation id immediately.

        Must be called from a running event loop. Subscribe with the
        returned export_id before awaiting the job to receive every event.
        """
        export_id = self.new_export_id()
        task = asyncio.ensure_future(
            self.export_meeting(meeting_id, options, export_id=export_id)
        )
        return ExportJob(export_id=export_id, task=task)

    async def export_meeting(
        self,
        meeting_id: str,
        options: ExportOptions,
        export_id: Optional[str] = None,
        batch_id: Optional[str] = None,
    ) -> ExportResult:
        """
        Export one meeting.

        Args:
            meeting_id: Meeting to export
            options: Export options; options.format selects the generator
            export_id: Correlation id for progress events. Generated if None.
            batch_id: Correlation id of an enclosing batch, if any

        Returns:
            ExportResult owned by the caller

        Raises:
            ExportFailedError: Wrapping MeetingNotFoundError,
                UnsupportedFormatError or GeneratorError
        """
        export_id = export_id or self.new_export_id()
        fmt = getattr(options.format, "value", options.format)

        def emit(stage: ExportStage, progress: int, message: str, **extra) -> None:
            self.bus.publish(ExportProgress(
                stage=stage,
                progress=progress,
                message=message,
                export_id=export_id,
                batch_id=batch_id,
                **extra,
            ))

        logger.info("Export started", export_id=export_id, meeting_id=meeting_id, format=fmt)

        try:
            emit(ExportStage.PREPARING, 10, "Preparing meeting data...")

            meeting = await self.repository.get_by_id(meeting_id)
            if meeting is None:
                raise MeetingNotFoundError(meeting_id)

            emit(
                ExportStage.GENERATING, 30, f"Generating {str(fmt).upper()} file...",
                estimated_time_remaining=estimate_for(fmt),
            )

            result = await self._dispatch(meeting_id, options, export_id)

            emit(ExportStage.FINALIZING, 90, "Finalizing export...")

            await self._log_history(meeting_id, result)

            emit(ExportStage.COMPLETE, 100, "Export completed successfully")
        except Exception as e:
            logger.error(
                "Export failed",
                export_id=export_id,
                meeting_id=meeting_id,
                format=fmt,
                error=str(e),
            )
            raise ExportFailedError(e) from e

        logger.info(
            "Export completed",
            export_id=export_id,
            meeting_id=meeting_id,
            filename=result.filename,
            size=result.size,
        )
        return result

    async def _dispatch(
        self,
        meeting_id: str,
        options: ExportOptions,
        export_id: str,
    ) -> ExportResult:
        """Run the generator for options.format and normalize its output."""
        fmt = options.format
        generator = self.registry.generator_for(fmt)
        if not self.registry.is_supported(fmt):
            raise FormatUnavailableError(fmt)
        branding = options.branding or self.settings.default_branding
        sections = options.section_toggles()

        if fmt == ExportFormat.PDF:
            pdf = await generator.generate(
                meeting_id,
                PDFOptions(**sections, template=options.template, branding=branding),
            )
            return ExportResult(
                export_id=export_id,
                content=ExportContent(data=pdf.data, mime_type=mime_type_of(fmt)),
                filename=pdf.filename,
                size=pdf.size,
                format=ExportFormat.PDF,
                processing_time=pdf.processing_time,
                metadata=ExportMetadata(page_count=pdf.page_count),
            )

        if fmt == ExportFormat.DOCX:
            docx = await generator.generate(
                meeting_id,
                DOCXOptions(**sections, template=options.template, branding=branding),
            )
            return ExportResult(
                export_id=export_id,
                content=ExportContent(data=docx.data, mime_type=mime_type_of(fmt)),
                filename=docx.filename,
                size=docx.size,
                format=ExportFormat.DOCX,
                processing_time=docx.processing_time,
            )

        if fmt in TEXT_MODES:
            text = await generator.generate(
                meeting_id,
                TextOptions(**sections, mode=TEXT_MODES[fmt]),
            )
            return ExportResult(
                export_id=export_id,
                content=ExportContent(
                    data=text.content.encode("utf-8"),
                    mime_type=mime_type_of(fmt),
                ),
                filename=text.filename,
                size=text.size,
                format=ExportFormat(fmt),
                processing_time=text.processing_time,
                metadata=ExportMetadata(word_count=count_words(text.content)),
            )

        raise UnsupportedFormatError(fmt)

    async def _log_history(self, meeting_id: str, result: ExportResult) -> HistoryOutcome:
        """Best-effort history write; never raises."""
        entry = ExportHistoryEntry(
            meeting_id=meeting_id,
            filename=result.filename,
            size=result.size,
            format=result.format,
            export_id=result.export_id,
        )
        try:
            return await asyncio.to_thread(self.history.record, entry)
        except Exception as e:
            # Custom history backends may raise
            logger.warning(
                "Failed to log export history",
                meeting_id=meeting_id,
                export_id=result.export_id,
                error=str(e),
            )
            return HistoryOutcome(recorded=False, entry=entry, error=str(e))

    async def export_meetings_batch(
        self,
        meeting_ids: Sequence[str],
        options: ExportOptions,
        batch_id: Optional[str] = None,
    ) -> List[ExportResult]:
        """
        Export several meetings one after another.

        Before each meeting a `preparing` event reports overall progress
        (index * 100 // total) and "Processing meeting i of n...". The first
        failure aborts the batch; later meetings are not attempted.

        Args:
            meeting_ids: Meetings to export, in order
            options: Options applied to every meeting
            batch_id: Correlation id for the batch. Generated if None.

        Returns:
            Results in input order

        Raises:
            ExportFailedError: From the first meeting that fails
        """
        batch_id = batch_id or self.new_export_id()
        total = len(meeting_ids)
        results: List[ExportResult] = []

        for index, meeting_id in enumerate(meeting_ids):
            self.bus.publish(ExportProgress(
                stage=ExportStage.PREPARING,
                progress=index * 100 // total,
                message=f"Processing meeting {index + 1} of {total}...",
                export_id=batch_id,
                batch_id=batch_id,
            ))

            result = await self.export_meeting(meeting_id, options, batch_id=batch_id)
            results.append(result)

        logger.info("Batch export completed", batch_id=batch_id, count=len(results))
        return results

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def download_export(
        self,
        result: ExportResult,
        sink: Optional[DownloadSink] = None,
    ) -> Path:
        """
        Hand an export to a download sink.

        One buffer view is created per call and released right after the
        sink returns, whether or not it succeeded.
        """
        target = sink or self.sink
        view = memoryview(result.content.data)
        try:
            return target.save(result.filename, view)
        finally:
            view.release()

    async def estimate_export_time(self, meeting_id: str, format: object) -> int:
        """
        Estimated export duration in milliseconds.

        Depends on the format only; unknown formats get the default.
        """
        return estimate_for(format)
