"""
Pydantic models for stored meeting records.

Provides data structures for:
- Action items captured during a meeting
- Translations of the meeting content
- The meeting record consumed by the export pipeline
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ActionItem(BaseModel):
    """A follow-up task recorded during a meeting."""
    text: str = Field(
        description="What needs to be done"
    )
    assignee: Optional[str] = Field(
        default=None,
        description="Person responsible for the item"
    )
    completed: bool = Field(
        default=False,
        description="Whether the item has been done"
    )
    due_date: Optional[datetime] = Field(
        default=None,
        description="When the item is due"
    )


class Translation(BaseModel):
    """Meeting content rendered in another language."""
    language: str = Field(
        description="Language code, e.g. 'es' or 'de'"
    )
    content: str = Field(
        description="Translated text"
    )


class Meeting(BaseModel):
    """
    A persisted meeting record.

    Bundles the transcript, AI-generated summary and key points, action items
    and descriptive metadata under a single id.
    """
    id: str = Field(
        min_length=1,
        description="Unique meeting identifier"
    )
    title: str = Field(
        default="",
        description="Meeting title; exports fall back to 'Meeting Notes' when empty"
    )
    timestamp: datetime = Field(
        description="When the meeting took place"
    )
    duration: Optional[int] = Field(
        default=None,
        ge=0,
        description="Length of the meeting in minutes"
    )
    participants: List[str] = Field(
        default_factory=list,
        description="Names of the people present"
    )
    tags: List[str] = Field(
        default_factory=list,
        description="User-assigned tags"
    )
    is_favorite: bool = Field(
        default=False,
        description="Whether the user starred the meeting"
    )
    transcript: Optional[str] = Field(
        default=None,
        description="Full meeting transcript"
    )
    summary: Optional[str] = Field(
        default=None,
        description="Generated summary"
    )
    key_points: List[str] = Field(
        default_factory=list,
        description="Generated key points"
    )
    action_items: List[ActionItem] = Field(
        default_factory=list,
        description="Action items detected in the meeting"
    )
    translations: List[Translation] = Field(
        default_factory=list,
        description="Available translations"
    )
    minutes: Optional[str] = Field(
        default=None,
        description="Formal minutes, when generated"
    )

    @property
    def display_title(self) -> str:
        """Title used in document headings."""
        return self.title or "Meeting Notes"
