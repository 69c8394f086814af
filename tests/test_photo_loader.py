"""Photo decoding, sniffing and fetching."""

import base64
from pathlib import Path

import pytest
import requests

from campus_app.errors import PhotoError
from tools import photo_loader
from tools.photo_loader import decode_photo_base64, load_photo, read_photo_file, sniff_image_mime

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 8
WEBP = b"RIFF\x00\x00\x00\x00WEBPVP8 "


@pytest.mark.parametrize(
    "data, expected",
    [(PNG, "image/png"), (JPEG, "image/jpeg"), (WEBP, "image/webp"), (b"GIF89a", None)],
)
def test_sniff_image_mime(data: bytes, expected) -> None:
    assert sniff_image_mime(data) == expected


def test_data_url_header_is_stripped() -> None:
    encoded = "data:image/png;base64," + base64.b64encode(PNG).decode()

    photo = decode_photo_base64(encoded)

    assert photo.data == PNG
    assert photo.mime_type == "image/png"


def test_raw_base64_uses_sniffed_type() -> None:
    photo = decode_photo_base64(base64.b64encode(JPEG).decode())

    assert photo.mime_type == "image/jpeg"


@pytest.mark.parametrize("encoded", ["not base64!!", "", base64.b64encode(b"GIF89a....").decode()])
def test_bad_photos_are_rejected(encoded: str) -> None:
    with pytest.raises(PhotoError):
        decode_photo_base64(encoded)


def test_read_photo_file(tmp_path: Path) -> None:
    path = tmp_path / "me.webp"
    path.write_bytes(WEBP)

    photo = load_photo(str(path))

    assert photo.mime_type == "image/webp"


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(PhotoError):
        read_photo_file(tmp_path / "missing.jpg")


def test_oversized_photo_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(photo_loader, "MAX_PHOTO_BYTES", 4)

    with pytest.raises(PhotoError):
        decode_photo_base64(base64.b64encode(PNG).decode())


class _FakeResponse:
    def __init__(self, status_code: int, content: bytes, content_type: str) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = {"Content-Type": content_type}


def test_fetch_photo_over_http(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _FakeResponse(200, JPEG, "image/jpeg")

    monkeypatch.setattr(photo_loader.requests, "get", fake_get)

    photo = load_photo("https://cdn.example.com/me.jpg")

    assert photo.mime_type == "image/jpeg"
    assert calls == [("https://cdn.example.com/me.jpg", 10.0)]


def test_fetch_photo_http_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(photo_loader.requests, "get", lambda url, timeout: _FakeResponse(404, b"", "text/html"))

    with pytest.raises(PhotoError):
        load_photo("https://cdn.example.com/missing.jpg")


def test_fetch_photo_network_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(url, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(photo_loader.requests, "get", boom)

    with pytest.raises(PhotoError):
        load_photo("http://cdn.example.com/me.jpg")
