"""
Tests for the webhook upload
"""
from datetime import date

import pytest
import requests

from reports import webhook_uploader
from reports.webhook_uploader import upload_file


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


@pytest.fixture
def export_file(tmp_path):
    path = tmp_path / "NavisModelData.xlsx"
    path.write_bytes(b"PK\x03\x04 fake workbook")
    return path


class TestUploadFile:
    """Multipart POST to the webhook"""

    def test_successful_upload_sends_file_and_date(self, monkeypatch, export_file):
        calls = []

        def fake_post(url, files=None, data=None, timeout=None):
            name, handle, mime = files["file"]
            calls.append((url, name, handle.read(), mime, data, timeout))
            return FakeResponse(200)

        monkeypatch.setattr(webhook_uploader.requests, "post", fake_post)

        result = upload_file(str(export_file), "https://hooks.example.com/in",
                             upload_date=date(2024, 3, 1), timeout=5)

        assert result.success
        assert result.status_code == 200
        url, name, content, mime, data, timeout = calls[0]
        assert url == "https://hooks.example.com/in"
        assert name == "NavisModelData.xlsx"
        assert content == b"PK\x03\x04 fake workbook"
        assert mime == webhook_uploader.XLSX_MIME
        assert data == {"date": "2024-03-01"}
        assert timeout == 5

    def test_date_field_omitted(self, monkeypatch, export_file):
        sent = {}

        def fake_post(url, files=None, data=None, timeout=None):
            sent.update(data)
            return FakeResponse(200)

        monkeypatch.setattr(webhook_uploader.requests, "post", fake_post)

        assert upload_file(str(export_file), "https://hooks.example.com/in").success
        assert sent == {}

    def test_http_error_reported(self, monkeypatch, export_file):
        monkeypatch.setattr(webhook_uploader.requests, "post", lambda *a, **k: FakeResponse(500))

        result = upload_file(str(export_file), "https://hooks.example.com/in")

        assert not result.success
        assert result.status_code == 500
        assert export_file.exists()

    def test_connection_error_reported(self, monkeypatch, export_file):
        def fake_post(*args, **kwargs):
            raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(webhook_uploader.requests, "post", fake_post)

        result = upload_file(str(export_file), "https://hooks.example.com/in")

        assert not result.success
        assert "connection refused" in result.message

    def test_missing_file_reported(self, tmp_path):
        result = upload_file(str(tmp_path / "missing.xlsx"), "https://hooks.example.com/in")
        assert not result.success

    def test_no_url(self, export_file):
        result = upload_file(str(export_file), None)
        assert not result.success
        assert "No upload URL" in result.message
