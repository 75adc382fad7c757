"""Tests for upload and delete functionality."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers import RecordingHandler, json_response

from neocities_cli import ServerError, SiteClient, UploadError


class TestUpload:
    """Tests for file upload functionality."""

    def test_upload_sends_multipart_part_named_by_remote_path(
        self, key_client: SiteClient, handler: RecordingHandler, site_tree: Path
    ) -> None:
        """Test that the file is sent as a part named after its remote path."""
        key_client.upload("css/style.css", site_tree / "css" / "style.css")

        request = handler.last
        assert request.method == "POST"
        assert request.url.path == "/api/upload"
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="css/style.css"' in request.content
        assert b"body { color: red; }" in request.content

    def test_upload_accepts_str_path(
        self, key_client: SiteClient, handler: RecordingHandler, site_tree: Path
    ) -> None:
        """Test that local files may be given as strings."""
        key_client.upload("index.html", str(site_tree / "index.html"))

        assert b"<h1>hello</h1>" in handler.last.content

    def test_upload_missing_file_raises_upload_error(
        self, key_client: SiteClient, handler: RecordingHandler, tmp_path: Path
    ) -> None:
        """Test that an unreadable local file fails before any request."""
        with pytest.raises(UploadError) as exc_info:
            key_client.upload("gone.html", tmp_path / "gone.html")

        assert isinstance(exc_info.value.__cause__, OSError)
        assert handler.requests == []

    def test_upload_rejected_by_server(
        self, key_client: SiteClient, handler: RecordingHandler, site_tree: Path
    ) -> None:
        """Test that a server rejection surfaces as ServerError."""
        handler.queue(
            json_response(
                400,
                {
                    "result": "error",
                    "error_type": "invalid_file_type",
                    "message": "style.exe is not a valid file type",
                },
            )
        )

        with pytest.raises(ServerError) as exc_info:
            key_client.upload("style.exe", site_tree / "index.html")

        assert exc_info.value.error_type == "invalid_file_type"

    def test_upload_many_uses_one_request(
        self, key_client: SiteClient, handler: RecordingHandler, site_tree: Path
    ) -> None:
        """Test that several files go out as parts of a single request."""
        key_client.upload_many(
            {
                "index.html": site_tree / "index.html",
                "css/style.css": site_tree / "css" / "style.css",
            }
        )

        assert len(handler.requests) == 1
        body = handler.last.content
        assert b'name="index.html"' in body
        assert b'name="css/style.css"' in body

    def test_upload_many_empty_is_noop(self, key_client: SiteClient, handler: RecordingHandler) -> None:
        """Test that uploading nothing sends nothing."""
        key_client.upload_many({})

        assert handler.requests == []


class TestDelete:
    """Tests for file deletion."""

    def test_delete_many_in_one_request(self, key_client: SiteClient, handler: RecordingHandler) -> None:
        """Test that all filenames are sent as repeated query entries of one POST."""
        key_client.delete(["a.html", "b.html"])

        assert len(handler.requests) == 1
        request = handler.last
        assert request.method == "POST"
        assert request.url.path == "/api/delete"
        assert request.url.params.get_list("filenames[]") == ["a.html", "b.html"]

    def test_delete_empty_is_noop(self, key_client: SiteClient, handler: RecordingHandler) -> None:
        """Test that deleting nothing sends nothing."""
        key_client.delete([])

        assert handler.requests == []

    def test_delete_rejects_bare_string(self, key_client: SiteClient) -> None:
        """Test that a single string is not split into characters."""
        with pytest.raises(TypeError):
            key_client.delete("a.html")

    def test_delete_does_not_dedupe(self, key_client: SiteClient, handler: RecordingHandler) -> None:
        """Test that repeated deletes are each sent to the server."""
        key_client.delete(["a.html"])
        key_client.delete(["a.html"])

        assert len(handler.requests) == 2
        for request in handler.requests:
            assert request.url.params.get_list("filenames[]") == ["a.html"]

    def test_delete_missing_file_is_server_error(
        self, key_client: SiteClient, handler: RecordingHandler
    ) -> None:
        """Test that a server refusal surfaces verbatim."""
        handler.queue(
            json_response(
                400,
                {"result": "error", "error_type": "missing_files", "message": "nope.html was not found"},
            )
        )

        with pytest.raises(ServerError, match=r"\[missing_files\] nope.html was not found"):
            key_client.delete(["nope.html"])
