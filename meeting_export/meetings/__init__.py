"""
Meetings module: the stored meeting record and its repositories.
"""

from meeting_export.meetings.models import ActionItem, Meeting, Translation
from meeting_export.meetings.repository import (
    InMemoryMeetingRepository,
    JsonMeetingRepository,
    MeetingRepository,
)

__all__ = [
    "ActionItem",
    "Meeting",
    "Translation",
    "MeetingRepository",
    "InMemoryMeetingRepository",
    "JsonMeetingRepository",
]
