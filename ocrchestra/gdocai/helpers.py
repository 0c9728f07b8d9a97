"""JSON output and page image access for Document AI results."""

from __future__ import annotations

import base64
import binascii
import dataclasses
import json
from collections.abc import Mapping
from typing import Any


class ImageExtractionError(ValueError):
    """Raised when a page carries no usable image."""


def to_json(data: Any) -> str:
    """Render data as indented JSON.

    Dataclasses keep their field order, mappings are sorted by key and
    bytes are written as base64.
    """
    return json.dumps(_prepare(data), indent=2, ensure_ascii=False)


def _prepare(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _prepare(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Mapping):
        return {str(key): _prepare(obj[key]) for key in sorted(obj, key=str)}
    if isinstance(obj, (list, tuple)):
        return [_prepare(item) for item in obj]
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    return obj


def extract_image_from_page(page: Any) -> bytes:
    """Return the image bytes of a structured page's Document AI object."""
    raw_page = getattr(page, "documentai_object", None) if page is not None else None
    if raw_page is None:
        raise ImageExtractionError("no documentai page provided")

    image = raw_page.get("image")
    if image is None:
        raise ImageExtractionError("no image found in documentai page")

    content = image.get("content")
    if isinstance(content, str):
        try:
            content = base64.b64decode(content, validate=True)
        except binascii.Error as exc:
            raise ImageExtractionError(f"image content is not valid base64: {exc}") from exc
    if not content:
        raise ImageExtractionError("image content is empty")
    return bytes(content)