"""
Meeting storage layer consumed by the export pipeline.

Provides the repository contract the pipeline depends on plus two
implementations:
- InMemoryMeetingRepository: records held in a dict (tests, embedding)
- JsonMeetingRepository: one <id>.json file per meeting in a data directory

Only lookup by id is part of the export contract; saving is offered by the
file repository so records can be seeded.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol

from pydantic import ValidationError

from meeting_export.meetings.models import Meeting


# Configure logging for the storage module
logger = logging.getLogger(__name__)


class MeetingRepository(Protocol):
    """Lookup contract for stored meetings."""

    async def get_by_id(self, meeting_id: str) -> Optional[Meeting]:
        """Return the meeting with this id, or None if absent."""
        ...


class InMemoryMeetingRepository:
    """Repository backed by a plain dict keyed on meeting id."""

    def __init__(self, meetings: Optional[Iterable[Meeting]] = None):
        self._meetings: Dict[str, Meeting] = {}
        for meeting in meetings or []:
            self.add(meeting)

    def add(self, meeting: Meeting) -> None:
        self._meetings[meeting.id] = meeting

    async def get_by_id(self, meeting_id: str) -> Optional[Meeting]:
        return self._meetings.get(meeting_id)


class JsonMeetingRepository:
    """
    Repository for meetings stored as JSON files.

    Records are loaded and validated as Meeting models on every lookup, so
    edits on disk are picked up without a restart.

    Usage:
        repo = JsonMeetingRepository(Path("data/meetings"))
        meeting = await repo.get_by_id("weekly-sync-42")
    """

    def __init__(self, data_dir: Path):
        """
        Initialize the meeting repository.

        Args:
            data_dir: Directory containing <meeting_id>.json files.
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        logger.debug(f"JsonMeetingRepository initialized with data_dir: {self.data_dir}")

    def _get_filepath(self, meeting_id: str) -> Optional[Path]:
        """
        Map a meeting id to its file, rejecting ids that would escape data_dir.

        Args:
            meeting_id: Meeting identifier

        Returns:
            Path inside data_dir, or None for ids containing path separators
        """
        if not meeting_id or "/" in meeting_id or "\\" in meeting_id or meeting_id.startswith("."):
            return None
        return self.data_dir / f"{meeting_id}.json"

    async def get_by_id(self, meeting_id: str) -> Optional[Meeting]:
        """
        Load a meeting by id.

        Args:
            meeting_id: Meeting identifier

        Returns:
            Meeting if found and valid, None otherwise
        """
        filepath = self._get_filepath(meeting_id)

        if filepath is None:
            logger.debug(f"Meeting not found: {meeting_id}")
            return None

        return await asyncio.to_thread(self._load, filepath)

    def _load(self, filepath: Path) -> Optional[Meeting]:
        if not filepath.exists():
            logger.debug(f"Meeting not found: {filepath.stem}")
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
            return Meeting(**data)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON in meeting file {filepath}: {e}")
            return None
        except ValidationError as e:
            logger.warning(f"Meeting validation failed for {filepath}: {e}")
            return None

    def list_ids(self) -> List[str]:
        """List stored meeting ids, sorted."""
        return sorted(p.stem for p in self.data_dir.glob("*.json"))

    def save(self, meeting: Meeting) -> Path:
        """
        Save a meeting to the data directory.

        Args:
            meeting: Meeting to save

        Returns:
            Path to the saved file
        """
        filepath = self._get_filepath(meeting.id)
        if filepath is None:
            raise ValueError(f"Invalid meeting id for storage: {meeting.id!r}")

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(meeting.model_dump(mode="json"), f, indent=2, ensure_ascii=False)

        logger.info(f"Saved meeting: {filepath}")
        return filepath
