"""Load a student photo from a file, URL or base64 data URL."""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
import re
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests

from campus_app.errors import PhotoError
from models.preferences import SUPPORTED_PHOTO_MIME_TYPES, PhotoAttachment

logger = logging.getLogger(__name__)

MAX_PHOTO_BYTES = 10 * 1024 * 1024

_DATA_URL_HEADER = re.compile(r"^data:(image/(?:png|jpeg|jpg|webp));base64,", re.IGNORECASE)


def sniff_image_mime(data: bytes) -> Optional[str]:
    """Identify JPEG, PNG or WebP from magic bytes."""

    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None


def _attachment(data: bytes, declared_mime: Optional[str]) -> PhotoAttachment:
    if not data:
        raise PhotoError("Photo is empty")
    if len(data) > MAX_PHOTO_BYTES:
        raise PhotoError(f"Photo is larger than {MAX_PHOTO_BYTES // (1024 * 1024)} MB")
    mime_type = sniff_image_mime(data) or (declared_mime or "").split(";")[0].strip().lower()
    if mime_type == "image/jpg":
        mime_type = "image/jpeg"
    if mime_type not in SUPPORTED_PHOTO_MIME_TYPES:
        raise PhotoError(f"Unsupported photo type: {mime_type or 'unknown'}")
    return PhotoAttachment(data=data, mime_type=mime_type)


def decode_photo_base64(encoded: str, mime_type: Optional[str] = None) -> PhotoAttachment:
    """Decode raw base64 or a ``data:image/...;base64,`` URL."""

    text = encoded.strip()
    match = _DATA_URL_HEADER.match(text)
    if match:
        mime_type = mime_type or match.group(1)
        text = text[match.end():]
    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise PhotoError("Photo is not valid base64") from exc
    return _attachment(data, mime_type)


def fetch_photo(url: str, timeout: Optional[float] = 10.0) -> PhotoAttachment:
    """Download a photo over HTTP or HTTPS."""

    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise PhotoError(f"Unsupported or invalid URL: {url}")
    logger.info("Fetching photo", extra={"host": parsed.netloc})
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise PhotoError(f"Network error fetching photo: {exc}") from exc
    if not 200 <= response.status_code < 300:
        raise PhotoError(f"Failed to fetch photo: HTTP {response.status_code}")
    return _attachment(response.content, response.headers.get("Content-Type"))


def read_photo_file(path: str | Path) -> PhotoAttachment:
    photo_path = Path(path)
    if not photo_path.is_file():
        raise PhotoError(f"Photo file not found: {photo_path}")
    guessed, _ = mimetypes.guess_type(photo_path.name)
    return _attachment(photo_path.read_bytes(), guessed)


def load_photo(source: str) -> PhotoAttachment:
    """Dispatch on the shape of ``source``: data URL, http(s) URL or file path."""

    if _DATA_URL_HEADER.match(source.strip()):
        return decode_photo_base64(source)
    if source.startswith(("http://", "https://")):
        return fetch_photo(source)
    return read_photo_file(source)


__all__ = [
    "MAX_PHOTO_BYTES",
    "decode_photo_base64",
    "fetch_photo",
    "load_photo",
    "read_photo_file",
    "sniff_image_mime",
]
