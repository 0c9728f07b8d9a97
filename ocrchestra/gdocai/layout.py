"""Text lookup in Document AI documents given as JSON dictionaries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def text_from_document(document: Mapping[str, Any] | None) -> str:
    """Return the full text of a Document AI document, or "" if there is none."""
    if document is None:
        return ""
    return document.get("text", "")


def text_from_layout(layout: Mapping[str, Any] | None, full_text: str) -> str:
    """Return the text a layout's text anchor points at within ``full_text``.

    Segment indices count characters and are clamped to the text.
    """
    if layout is None:
        return ""
    anchor = layout.get("textAnchor")
    if anchor is None:
        return ""
    total = len(full_text)
    pieces = []
    for segment in anchor.get("textSegments", ()):
        start = max(int(segment.get("startIndex", 0)), 0)
        end = max(min(int(segment.get("endIndex", 0)), total), 0)
        start = min(start, end)
        pieces.append(full_text[start:end])
    return "".join(pieces)