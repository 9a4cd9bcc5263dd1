"""
Progress notification bus.

Multicast publish/subscribe channel for ExportProgress events:
- Subscribers are called synchronously, in subscription order
- A failing subscriber is logged and skipped; delivery continues
- No buffering or replay for late subscribers
- Optional filtering on an export or batch correlation id
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from meeting_export.audit import get_logger
from meeting_export.export.models import ExportProgress


logger = get_logger("progress")

ProgressCallback = Callable[[ExportProgress], None]


@dataclass(eq=False)
class _Subscription:
    callback: ProgressCallback
    export_id: Optional[str] = None

    def wants(self, event: ExportProgress) -> bool:
        if self.export_id is None:
            return True
        return self.export_id in (event.export_id, event.batch_id)


class ProgressBus:
    """
    Delivers export progress events to any number of listeners.

    Example:
        bus = ProgressBus()
        unsubscribe = bus.subscribe(lambda event: print(event.progress))
        ...
        unsubscribe()
    """

    def __init__(self):
        self._subscriptions: List[_Subscription] = []

    def subscribe(
        self,
        callback: ProgressCallback,
        export_id: Optional[str] = None,
    ) -> Callable[[], None]:
        """
        Register a listener.

        Args:
            callback: Called with every matching ExportProgress
            export_id: If given, only events whose export_id or batch_id
                       equals it are delivered

        Returns:
            A function removing exactly this subscription; safe to call
            more than once
        """
        subscription = _Subscription(callback, export_id)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

        return unsubscribe

    def publish(self, event: ExportProgress) -> int:
        """
        Deliver an event to the current subscribers.

        Returns:
            Number of subscribers that handled the event without raising
        """
        delivered = 0
        # Snapshot so listeners may unsubscribe while being called
        for subscription in list(self._subscriptions):
            if not subscription.wants(event):
                continue
            try:
                subscription.callback(event)
                delivered += 1
            except Exception as e:
                logger.warning(
                    "Progress callback error",
                    export_id=event.export_id,
                    stage=event.stage.value,
                    error=str(e),
                )
        return delivered

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)
