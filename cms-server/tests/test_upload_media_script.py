"""Tests for the command line media uploader."""
import httpx
import pytest

from upload_media import upload_media


def _client(handler) -> httpx.Client:
    return httpx.Client(base_url="http://cms.test/", transport=httpx.MockTransport(handler))


class TestUploadMediaScript:
    def test_posts_files_and_form_fields(self, tmp_path):
        image = tmp_path / "cover.png"
        image.write_bytes(b"png-bytes")
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json=[{"id": 1, "name": "cover", "url": "/uploads/cover_1.png"}])

        with _client(handler) as client:
            uploaded = upload_media(client, [image], folder="/articles")

        assert uploaded[0]["name"] == "cover"
        request = seen[0]
        assert request.url.path == "/api/upload"
        assert request.headers["content-type"].startswith("multipart/form-data")
        body = request.read()
        assert b'name="folderPath"' in body
        assert b"/articles" in body
        assert b'filename="cover.png"' in body
        assert b'name="caption"' not in body

    def test_rejected_upload_exits(self, tmp_path):
        image = tmp_path / "cover.png"
        image.write_bytes(b"png-bytes")

        with _client(lambda request: httpx.Response(502, text="bucket down")) as client:
            with pytest.raises(SystemExit, match="upload failed: 502"):
                upload_media(client, [image])

    def test_missing_file_exits(self, tmp_path):
        with _client(lambda request: httpx.Response(201, json=[])) as client:
            with pytest.raises(SystemExit, match="not a file"):
                upload_media(client, [tmp_path / "nope.png"])
