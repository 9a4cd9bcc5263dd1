"""
Text family generator: plain text, Markdown and JSON.

One generator serves the three text formats; TextOptions.mode selects the
flavour and the file extension.
"""

import json
from datetime import datetime, timezone

from meeting_export.export.generators.base import (
    FormatGenerator,
    TextGenerationResult,
    TextMode,
    TextOptions,
    action_item_status,
    elapsed_ms,
    format_date,
    format_duration,
    format_participants,
    generate_filename,
)
from meeting_export.meetings.models import Meeting


EXTENSIONS = {
    TextMode.PLAIN_TEXT: "txt",
    TextMode.MARKDOWN: "md",
    TextMode.JSON: "json",
}


class TextGenerator(FormatGenerator):
    """
    Renders meetings as plain text, Markdown or JSON.

    Example:
        generator = TextGenerator(repository)
        result = await generator.generate("m1", TextOptions(mode=TextMode.MARKDOWN))
        print(result.content)
    """

    name = "text"

    def _render(self, meeting: Meeting, options: TextOptions, started: float) -> TextGenerationResult:
        if options.mode == TextMode.JSON:
            content = self.generate_json(meeting, options)
        elif options.mode == TextMode.MARKDOWN:
            content = self.generate_markdown(meeting, options)
        else:
            content = self.generate_plain_text(meeting, options)

        return TextGenerationResult(
            content=content,
            filename=generate_filename(meeting, EXTENSIONS[options.mode]),
            size=len(content.encode("utf-8")),
            processing_time=elapsed_ms(started),
        )

    def generate_plain_text(self, meeting: Meeting, options: TextOptions) -> str:
        """Plain text with underlined upper-case section headings."""
        sep = options.separator
        title = meeting.display_title
        parts = [f"{title}\n{'=' * len(title)}\n", sep]

        if options.include_metadata:
            parts.append(f"Date: {format_date(meeting.timestamp)}\n")
            parts.append(f"Duration: {format_duration(meeting)}\n")
            parts.append(f"Participants: {format_participants(meeting)}\n")
            parts.append(sep)

        if options.include_summary and meeting.summary:
            parts.append(f"SUMMARY\n-------\n{meeting.summary}\n")
            parts.append(sep)

        if options.include_key_points and meeting.key_points:
            parts.append("KEY POINTS\n----------\n")
            for index, point in enumerate(meeting.key_points, 1):
                parts.append(f"{index}. {point}\n")
            parts.append(sep)

        if options.include_action_items and meeting.action_items:
            parts.append("ACTION ITEMS\n------------\n")
            for item in meeting.action_items:
                parts.append(f"{action_item_status(item.completed)} {item.text}\n")
                if item.assignee:
                    parts.append(f"   Assigned to: {item.assignee}\n")
                if item.due_date:
                    parts.append(f"   Due: {format_date(item.due_date)}\n")
                parts.append("\n")
            parts.append(sep)

        if options.include_transcript and meeting.transcript:
            parts.append(f"TRANSCRIPT\n----------\n{meeting.transcript}\n")

        return "".join(parts).strip()

    def generate_markdown(self, meeting: Meeting, options: TextOptions) -> str:
        """Markdown with a level-1 title and level-2 sections."""
        parts = [f"# {meeting.display_title}\n\n"]

        if options.include_metadata:
            parts.append(f"**Date:** {format_date(meeting.timestamp)}\n")
            parts.append(f"**Duration:** {format_duration(meeting)}\n")
            parts.append(f"**Participants:** {format_participants(meeting)}\n\n")

        if options.include_summary and meeting.summary:
            parts.append(f"## Summary\n\n{meeting.summary}\n\n")

        if options.include_key_points and meeting.key_points:
            parts.append("## Key Points\n\n")
            parts.extend(f"- {point}\n" for point in meeting.key_points)
            parts.append("\n")

        if options.include_action_items and meeting.action_items:
            parts.append("## Action Items\n\n")
            for item in meeting.action_items:
                box = "[x]" if item.completed else "[ ]"
                parts.append(f"- {box} {item.text}\n")
                if item.assignee:
                    parts.append(f"  - **Assigned to:** {item.assignee}\n")
                if item.due_date:
                    parts.append(f"  - **Due:** {format_date(item.due_date)}\n")
            parts.append("\n")

        if options.include_transcript and meeting.transcript:
            parts.append(f"## Transcript\n\n```\n{meeting.transcript}\n```\n")

        return "".join(parts).strip()

    def generate_json(self, meeting: Meeting, options: TextOptions) -> str:
        """Indented JSON document with the enabled sections."""
        data = {
            "id": meeting.id,
            "title": meeting.title,
            "timestamp": meeting.timestamp.isoformat(),
            "duration": meeting.duration,
            "participants": meeting.participants,
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "export_options": options.model_dump(mode="json"),
        }

        if options.include_summary and meeting.summary:
            data["summary"] = meeting.summary
        if options.include_key_points and meeting.key_points:
            data["key_points"] = meeting.key_points
        if options.include_action_items and meeting.action_items:
            data["action_items"] = [item.model_dump(mode="json") for item in meeting.action_items]
        if options.include_transcript and meeting.transcript:
            data["transcript"] = meeting.transcript
        if meeting.translations:
            data["translations"] = [t.model_dump() for t in meeting.translations]
        if meeting.minutes:
            data["minutes"] = meeting.minutes

        return json.dumps(data, indent=2, ensure_ascii=False)
