"""
Runtime configuration for the meeting export service.

Settings are read from environment variables (a local .env file is loaded
first) and validated into an ExportSettings model:
- Storage locations (meeting records, downloads, export history)
- Formats disabled in this deployment
- Default branding applied when a request carries none
- Log level
"""

import os
from pathlib import Path
from typing import Optional, Set

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from meeting_export.export.models import Branding, BrandColors, ExportFormat


class ExportSettings(BaseModel):
    """Validated settings for the export service."""

    data_dir: Path = Field(
        default=Path("data/meetings"),
        description="Directory holding meeting records as <id>.json files"
    )
    download_dir: Path = Field(
        default=Path("exports"),
        description="Directory the default download sink writes into"
    )
    history_file: Path = Field(
        default=Path("exports/history.jsonl"),
        description="Append-only export history log (JSON lines)"
    )
    disabled_formats: Set[ExportFormat] = Field(
        default_factory=set,
        description="Formats whose generators report themselves unsupported"
    )
    default_branding: Branding = Field(
        default_factory=lambda: Branding(
            company_name="Linka AI",
            colors=BrandColors(),
        ),
        description="Branding used when export options carry none"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum structlog level"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    def is_format_enabled(self, fmt: ExportFormat) -> bool:
        """Check whether a format has not been switched off."""
        return fmt not in self.disabled_formats


def _parse_formats(raw: Optional[str]) -> Set[ExportFormat]:
    """
    Parse a comma-separated list of format identifiers.

    Raises:
        ValueError: If an entry is not a known export format
    """
    if not raw:
        return set()
    formats = set()
    for item in raw.split(","):
        item = item.strip().lower()
        if not item:
            continue
        try:
            formats.add(ExportFormat(item))
        except ValueError:
            valid = [f.value for f in ExportFormat]
            raise ValueError(
                f"Invalid format '{item}' in MEETING_EXPORT_DISABLED_FORMATS; "
                f"expected one of {valid}"
            )
    return formats


def load_settings(env_file: Optional[str] = None) -> ExportSettings:
    """
    Build settings from the environment.

    Args:
        env_file: Optional path to a .env file. Defaults to python-dotenv's
                  lookup of .env in the working directory.

    Returns:
        ExportSettings populated from environment variables, falling back
        to model defaults for anything unset.
    """
    load_dotenv(env_file)

    defaults = BrandColors()
    colors = BrandColors(
        primary=os.getenv("MEETING_EXPORT_BRAND_PRIMARY", defaults.primary),
        secondary=os.getenv("MEETING_EXPORT_BRAND_SECONDARY", defaults.secondary),
        accent=os.getenv("MEETING_EXPORT_BRAND_ACCENT", defaults.accent),
    )

    return ExportSettings(
        data_dir=Path(os.getenv("MEETING_EXPORT_DATA_DIR", "data/meetings")),
        download_dir=Path(os.getenv("MEETING_EXPORT_DOWNLOAD_DIR", "exports")),
        history_file=Path(
            os.getenv("MEETING_EXPORT_HISTORY_FILE", "exports/history.jsonl")
        ),
        disabled_formats=_parse_formats(os.getenv("MEETING_EXPORT_DISABLED_FORMATS")),
        default_branding=Branding(
            logo=os.getenv("MEETING_EXPORT_LOGO") or None,
            company_name=os.getenv("MEETING_EXPORT_COMPANY_NAME", "Linka AI"),
            colors=colors,
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
