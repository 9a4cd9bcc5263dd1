"""Tests for settings loading."""

import os
from pathlib import Path

import pytest

from meeting_export.config import ExportSettings, load_settings
from meeting_export.export import ExportFormat


ENV_VARS = [
    "MEETING_EXPORT_DATA_DIR",
    "MEETING_EXPORT_DOWNLOAD_DIR",
    "MEETING_EXPORT_HISTORY_FILE",
    "MEETING_EXPORT_DISABLED_FORMATS",
    "MEETING_EXPORT_COMPANY_NAME",
    "MEETING_EXPORT_BRAND_PRIMARY",
    "MEETING_EXPORT_BRAND_SECONDARY",
    "MEETING_EXPORT_BRAND_ACCENT",
    "MEETING_EXPORT_LOGO",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Point dotenv at a file that does not exist so a developer's .env is ignored
    return str(tmp_path / "missing.env")


def test_defaults(clean_env):
    settings = load_settings(clean_env)

    assert settings.data_dir == Path("data/meetings")
    assert settings.disabled_formats == set()
    assert settings.default_branding.company_name == "Linka AI"
    assert settings.default_branding.colors.primary == "#2563eb"
    assert settings.default_branding.logo is None
    assert settings.log_level == "INFO"


def test_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("MEETING_EXPORT_DATA_DIR", "/srv/meetings")
    monkeypatch.setenv("MEETING_EXPORT_DISABLED_FORMATS", "pdf, DOCX")
    monkeypatch.setenv("MEETING_EXPORT_COMPANY_NAME", "Acme")
    monkeypatch.setenv("MEETING_EXPORT_BRAND_PRIMARY", "#FF0000")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings(clean_env)

    assert settings.data_dir == Path("/srv/meetings")
    assert settings.disabled_formats == {ExportFormat.PDF, ExportFormat.DOCX}
    assert not settings.is_format_enabled(ExportFormat.PDF)
    assert settings.is_format_enabled(ExportFormat.MD)
    assert settings.default_branding.company_name == "Acme"
    assert settings.default_branding.colors.primary == "#ff0000"
    assert settings.log_level == "DEBUG"


def test_reads_dotenv_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("MEETING_EXPORT_COMPANY_NAME=From File\n")

    try:
        settings = load_settings(str(env_file))
    finally:
        os.environ.pop("MEETING_EXPORT_COMPANY_NAME", None)

    assert settings.default_branding.company_name == "From File"


def test_unknown_disabled_format(clean_env, monkeypatch):
    monkeypatch.setenv("MEETING_EXPORT_DISABLED_FORMATS", "pdf,rtf")

    with pytest.raises(ValueError, match="rtf"):
        load_settings(clean_env)


def test_invalid_brand_colour(clean_env, monkeypatch):
    monkeypatch.setenv("MEETING_EXPORT_BRAND_ACCENT", "green")

    with pytest.raises(ValueError):
        load_settings(clean_env)


def test_settings_model_defaults():
    settings = ExportSettings()
    assert all(settings.is_format_enabled(fmt) for fmt in ExportFormat)
