"""Tests for ProgressBus."""

from unittest.mock import patch

from meeting_export.export import ExportProgress, ExportStage, ProgressBus


def event(progress=10, stage=ExportStage.PREPARING, export_id="e1", batch_id=None):
    return ExportProgress(
        stage=stage,
        progress=progress,
        message="working",
        export_id=export_id,
        batch_id=batch_id,
    )


class TestProgressBus:
    """Test cases for ProgressBus."""

    def setup_method(self):
        self.bus = ProgressBus()

    def test_delivers_in_subscription_order(self):
        calls = []
        self.bus.subscribe(lambda e: calls.append("first"))
        self.bus.subscribe(lambda e: calls.append("second"))
        self.bus.subscribe(lambda e: calls.append("third"))

        delivered = self.bus.publish(event())

        assert calls == ["first", "second", "third"]
        assert delivered == 3

    def test_unsubscribe_removes_only_its_subscriber(self):
        first, second = [], []
        unsubscribe_first = self.bus.subscribe(first.append)
        self.bus.subscribe(second.append)

        unsubscribe_first()
        self.bus.publish(event())

        assert first == []
        assert len(second) == 1

    def test_unsubscribe_twice_is_harmless(self):
        received = []
        unsubscribe = self.bus.subscribe(received.append)
        other = []
        self.bus.subscribe(other.append)

        unsubscribe()
        unsubscribe()
        self.bus.publish(event())

        assert received == []
        assert len(other) == 1
        assert self.bus.subscriber_count == 1

    def test_same_callback_subscribed_twice(self):
        """Each subscription is independent even for the same callable."""
        received = []
        unsubscribe_a = self.bus.subscribe(received.append)
        self.bus.subscribe(received.append)

        unsubscribe_a()
        self.bus.publish(event())

        assert len(received) == 1

    def test_no_replay_for_late_subscribers(self):
        self.bus.publish(event(100, ExportStage.COMPLETE))

        late = []
        self.bus.subscribe(late.append)

        assert late == []

    def test_failing_subscriber_is_logged_and_skipped(self):
        received = []

        def broken(e):
            raise RuntimeError("boom")

        self.bus.subscribe(broken)
        self.bus.subscribe(received.append)

        with patch("meeting_export.export.progress.logger") as logger:
            delivered = self.bus.publish(event())

        assert len(received) == 1
        assert delivered == 1
        logger.warning.assert_called_once()
        assert logger.warning.call_args.kwargs["error"] == "boom"

    def test_unsubscribe_during_publish(self):
        """A subscriber may remove itself while being called."""
        received = []
        unsubscribe = None

        def once(e):
            received.append(e)
            unsubscribe()

        unsubscribe = self.bus.subscribe(once)
        after = []
        self.bus.subscribe(after.append)

        self.bus.publish(event(10))
        self.bus.publish(event(30))

        assert len(received) == 1
        assert len(after) == 2

    def test_filter_by_export_id(self):
        mine = []
        self.bus.subscribe(mine.append, export_id="e1")

        self.bus.publish(event(export_id="e1"))
        self.bus.publish(event(export_id="e2"))
        self.bus.publish(event(export_id="e3", batch_id="e1"))

        assert [e.export_id for e in mine] == ["e1", "e3"]

    def test_publish_without_subscribers(self):
        assert self.bus.publish(event()) == 0
