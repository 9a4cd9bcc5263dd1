"""Tests for ExportHistory."""

from unittest.mock import patch

from meeting_export.export import ExportFormat, ExportHistory, ExportHistoryEntry


def entry(meeting_id="m1", export_id="e1"):
    return ExportHistoryEntry(
        meeting_id=meeting_id,
        filename="weekly_sync_2024-03-05.pdf",
        size=2048,
        format=ExportFormat.PDF,
        export_id=export_id,
    )


def test_record_appends_lines(tmp_path):
    history = ExportHistory(tmp_path / "logs" / "history.jsonl")

    first = history.record(entry("m1", "e1"))
    history.record(entry("m2", "e2"))

    assert first.recorded and first.error is None
    lines = (tmp_path / "logs" / "history.jsonl").read_text().splitlines()
    assert len(lines) == 2
    assert [e.export_id for e in history.list_entries()] == ["e1", "e2"]
    assert [e.export_id for e in history.list_entries(meeting_id="m2")] == ["e2"]


def test_record_emits_log_event():
    history = ExportHistory()

    with patch("meeting_export.export.history.logger") as logger:
        outcome = history.record(entry())

    assert outcome.recorded
    logger.info.assert_called_once()
    assert logger.info.call_args.args[0] == "export_logged"
    assert logger.info.call_args.kwargs["format"] == "pdf"
    assert history.list_entries() == []


def test_write_failure_is_reported_not_raised(tmp_path):
    # A directory in place of the file makes open() fail
    target = tmp_path / "history.jsonl"
    target.mkdir()
    history = ExportHistory(target)

    with patch("meeting_export.export.history.logger") as logger:
        outcome = history.record(entry())

    assert outcome.recorded is False
    assert outcome.error
    assert outcome.entry.export_id == "e1"
    logger.warning.assert_called_once()


def test_invalid_lines_are_skipped(tmp_path):
    path = tmp_path / "history.jsonl"
    history = ExportHistory(path)
    history.record(entry())
    with open(path, "a", encoding="utf-8") as f:
        f.write("garbage\n\n")

    assert len(history.list_entries()) == 1
