"""Shared fixtures for export tests."""

from datetime import datetime

import pytest

from meeting_export.config import ExportSettings
from meeting_export.export import ExportCoordinator, ExportHistory, ProgressBus
from meeting_export.meetings import ActionItem, InMemoryMeetingRepository, Meeting, Translation


def make_meeting(meeting_id: str = "meeting-123", **overrides) -> Meeting:
    data = dict(
        id=meeting_id,
        title="Test Meeting",
        timestamp=datetime(2024, 3, 5, 14, 30),
        duration=60,
        participants=["John Doe", "Jane Smith"],
        transcript="This is a test transcript.",
        summary="This is a test summary.",
        key_points=["Point 1", "Point 2"],
        action_items=[
            ActionItem(text="Action 1", assignee="Jane Smith", completed=False),
            ActionItem(text="Action 2", completed=True),
        ],
        translations=[Translation(language="es", content="Resumen de prueba.")],
    )
    data.update(overrides)
    return Meeting(**data)


@pytest.fixture
def meeting():
    return make_meeting()


@pytest.fixture
def repository():
    return InMemoryMeetingRepository([
        make_meeting("meeting-123"),
        make_meeting("m1", title="Weekly Sync"),
        make_meeting("m2", title="Design Review"),
        make_meeting("m3", title="Retro"),
    ])


@pytest.fixture
def settings(tmp_path):
    return ExportSettings(
        data_dir=tmp_path / "meetings",
        download_dir=tmp_path / "downloads",
        history_file=tmp_path / "history.jsonl",
    )


@pytest.fixture
def bus():
    return ProgressBus()


@pytest.fixture
def coordinator(repository, settings, bus):
    return ExportCoordinator(
        repository,
        settings=settings,
        bus=bus,
        history=ExportHistory(settings.history_file),
    )
