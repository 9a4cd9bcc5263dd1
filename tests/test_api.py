"""Tests for the HTTP surface."""

import base64
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

import api
from meeting_export.export import ExportCoordinator, ExportFormat


@pytest.fixture
def client(monkeypatch, coordinator):
    monkeypatch.setattr(api, "coordinator", coordinator)
    return TestClient(api.app)


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_formats(client):
    formats = client.get("/formats").json()
    assert [f["format"] for f in formats] == ["pdf", "docx", "txt", "md", "json"]
    assert all(f["supported"] for f in formats)


def test_list_templates(client):
    templates = client.get("/templates").json()
    assert [t["id"] for t in templates] == [
        "professional", "meeting_minutes", "transcript_only", "summary_only",
    ]


def test_export_markdown(client):
    response = client.post("/export", json={"meeting_id": "m1", "options": {"format": "md"}})

    assert response.status_code == 200
    body = response.json()
    assert body["mime_type"] == "text/markdown"
    assert body["filename"] == "weekly_sync_2024-03-05.md"
    content = base64.b64decode(body["content_base64"]).decode("utf-8")
    assert content.startswith("# Weekly Sync")
    assert body["size"] == len(content.encode("utf-8"))
    assert body["metadata"]["word_count"] > 0


def test_export_pdf_reports_pages(client):
    response = client.post("/export", json={"meeting_id": "m1", "options": {"format": "PDF"}})

    assert response.status_code == 200
    body = response.json()
    assert body["format"] == "pdf"
    assert body["metadata"]["page_count"] == 1
    assert base64.b64decode(body["content_base64"]).startswith(b"%PDF")


def test_export_unknown_meeting(client):
    response = client.post("/export", json={"meeting_id": "nope", "options": {"format": "txt"}})

    assert response.status_code == 404
    detail = response.json()["detail"]
    assert detail["error"] == "not_found"
    assert detail["message"] == "Export failed: Meeting nope not found"


def test_export_invalid_format(client):
    response = client.post("/export", json={"meeting_id": "m1", "options": {"format": "rtf"}})

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["field"] == "options.format"
    assert "pdf" in detail["valid_options"]


def test_export_invalid_options(client):
    response = client.post(
        "/export",
        json={"meeting_id": "m1", "options": {"format": "pdf", "template": "fancy"}},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == "options"


def test_batch_export(client):
    response = client.post(
        "/export/batch",
        json={"meeting_ids": ["m1", "m2"], "options": {"format": "txt"}},
    )

    assert response.status_code == 200
    assert [r["filename"] for r in response.json()] == [
        "weekly_sync_2024-03-05.txt",
        "design_review_2024-03-05.txt",
    ]


def test_batch_stops_at_first_failure(client):
    response = client.post(
        "/export/batch",
        json={"meeting_ids": ["m1", "missing", "m2"], "options": {"format": "txt"}},
    )

    assert response.status_code == 404


def test_batch_requires_ids(client):
    response = client.post("/export/batch", json={"meeting_ids": [], "options": {"format": "txt"}})
    assert response.status_code == 422


@pytest.mark.parametrize("fmt,expected", [("pdf", 2000), ("DOCX", 1500), ("md", 500), ("rtf", 1000)])
def test_estimate(client, fmt, expected):
    response = client.get("/export/estimate", params={"meeting_id": "m1", "format": fmt})

    assert response.status_code == 200
    assert response.json()["estimated_ms"] == expected


class TestBrandingAndErrors:
    """Client-controlled branding and error bodies."""

    @pytest.mark.parametrize("logo", ["/etc/passwd", "/does/not/exist", "../../private/logo.png"])
    def test_client_logo_rejected(self, client, coordinator, logo):
        generator = coordinator.registry.generator_for("pdf")
        generator.generate = AsyncMock()

        response = client.post("/export", json={
            "meeting_id": "m1",
            "options": {"format": "pdf", "branding": {"logo": logo}},
        })

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "options.branding.logo"
        generator.generate.assert_not_called()

    def test_client_logo_outside_assets_not_read(self, client, tmp_path):
        image = tmp_path / "private" / "logo.png"
        image.parent.mkdir()
        image.write_bytes(b"\x89PNG\r\n\x1a\n")

        response = client.post("/export", json={
            "meeting_id": "m1",
            "options": {"format": "pdf", "branding": {"logo": str(image)}},
        })

        assert response.status_code == 400

    def test_branding_without_logo(self, client, coordinator):
        generator = coordinator.registry.generator_for("docx")
        original = generator.generate
        generator.generate = AsyncMock(side_effect=original)

        response = client.post("/export", json={
            "meeting_id": "m1",
            "options": {"format": "docx", "branding": {"company_name": "Acme"}},
        })

        assert response.status_code == 200
        branding = generator.generate.call_args.args[1].branding
        assert branding.company_name == "Acme"
        assert branding.logo == api.settings.default_branding.logo

    def test_generator_failure_hides_details(self, client, coordinator, monkeypatch):
        generator = coordinator.registry.generator_for("pdf")

        def explode(*args, **kwargs):
            raise RuntimeError("cannot identify image file <_io.BytesIO object>")

        monkeypatch.setattr(generator, "_write_title", explode)

        response = client.post("/export", json={"meeting_id": "m1", "options": {"format": "pdf"}})

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail == {"error": "export_error", "message": "PDF generation failed"}

    def test_unknown_option_key(self, client):
        response = client.post("/export", json={
            "meeting_id": "m1",
            "options": {"format": "txt", "includeTranscript": False},
        })

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "options"


class TestDisabledFormats:
    """Formats switched off for the deployment."""

    @pytest.fixture
    def client(self, monkeypatch, repository, settings):
        disabled = settings.model_copy(update={"disabled_formats": {ExportFormat.MD}})
        monkeypatch.setattr(api, "coordinator", ExportCoordinator(repository, settings=disabled))
        return TestClient(api.app)

    def test_listed_as_unsupported(self, client):
        supported = {f["format"]: f["supported"] for f in client.get("/formats").json()}
        assert supported == {"pdf": True, "docx": True, "txt": True, "md": False, "json": True}

    def test_export_refused(self, client):
        response = client.post("/export", json={"meeting_id": "m1", "options": {"format": "md"}})

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Export failed: Export format not available: md"

    def test_other_text_formats_still_export(self, client):
        response = client.post("/export", json={"meeting_id": "m1", "options": {"format": "txt"}})
        assert response.status_code == 200
