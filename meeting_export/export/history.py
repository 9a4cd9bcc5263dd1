"""
Export history: append-only record of completed exports.

Writing history is best-effort. `record()` never raises; it reports what
happened through a HistoryOutcome so the caller can tell a skipped write
from a successful one without catching anything.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from meeting_export.audit import get_logger
from meeting_export.export.models import ExportFormat


logger = get_logger("history")


class ExportHistoryEntry(BaseModel):
    """One completed export."""

    meeting_id: str = Field(description="Exported meeting")
    filename: str = Field(description="Filename handed to the caller")
    size: int = Field(ge=0, description="Document size in bytes")
    format: ExportFormat = Field(description="Export format")
    export_id: str = Field(description="Correlation id of the export")
    exported_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC timestamp of the export"
    )


@dataclass
class HistoryOutcome:
    """Result of a best-effort history write."""
    recorded: bool
    entry: Optional[ExportHistoryEntry] = None
    error: Optional[str] = None


class ExportHistory:
    """
    JSON-lines export history.

    Every entry is also emitted as an `export_logged` log event. With no
    file configured the log event is the only record.

    Usage:
        history = ExportHistory(Path("exports/history.jsonl"))
        outcome = history.record(entry)
        entries = history.list_entries()
    """

    def __init__(self, history_file: Optional[Path] = None):
        self.history_file = Path(history_file) if history_file else None

    def record(self, entry: ExportHistoryEntry) -> HistoryOutcome:
        """
        Append an entry.

        Args:
            entry: The export to record

        Returns:
            HistoryOutcome with recorded=False and the error text on failure
        """
        try:
            if self.history_file is not None:
                self.history_file.parent.mkdir(parents=True, exist_ok=True)
                with open(self.history_file, "a", encoding="utf-8") as f:
                    f.write(entry.model_dump_json() + "\n")

            logger.info(
                "export_logged",
                meeting_id=entry.meeting_id,
                filename=entry.filename,
                size=entry.size,
                format=entry.format.value,
                export_id=entry.export_id,
            )
            return HistoryOutcome(recorded=True, entry=entry)
        except Exception as e:
            logger.warning(
                "Failed to log export history",
                meeting_id=entry.meeting_id,
                export_id=entry.export_id,
                error=str(e),
            )
            return HistoryOutcome(recorded=False, entry=entry, error=str(e))

    def list_entries(self, meeting_id: Optional[str] = None) -> List[ExportHistoryEntry]:
        """
        Read recorded entries, oldest first.

        Args:
            meeting_id: Optional filter

        Returns:
            Entries from the history file; unreadable lines are skipped
        """
        if self.history_file is None or not self.history_file.exists():
            return []

        entries: List[ExportHistoryEntry] = []
        with open(self.history_file, "r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    entry = ExportHistoryEntry(**json.loads(line))
                except (json.JSONDecodeError, ValidationError) as e:
                    logger.warning("Skipping invalid history line", error=str(e))
                    continue
                if meeting_id is None or entry.meeting_id == meeting_id:
                    entries.append(entry)
        return entries
