"""Object model for hOCR documents.

hOCR is an HTML-based format for OCR results. A document holds pages,
pages hold content areas, paragraphs and lines, and lines hold words.
Each element carries a bounding box, an optional language and any other
title properties as metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class BoundingBox:
    """A rectangle given by its top-left (x1, y1) and bottom-right (x2, y2) corners."""

    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0


@dataclass
class Word:
    """A recognised word (class ``ocrx_word``)."""

    hocr_class: ClassVar[str] = "ocrx_word"

    id: str = ""
    text: str = ""
    bbox: BoundingBox = field(default_factory=BoundingBox)
    confidence: float = 0.0
    lang: str = ""
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class Line:
    """A line of text (class ``ocr_line``)."""

    hocr_class: ClassVar[str] = "ocr_line"

    id: str = ""
    lang: str = ""
    bbox: BoundingBox = field(default_factory=BoundingBox)
    baseline: str = ""
    words: list[Word] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class Paragraph:
    """A paragraph (class ``ocr_par``); words may sit in lines or directly here."""

    hocr_class: ClassVar[str] = "ocr_par"

    id: str = ""
    lang: str = ""
    bbox: BoundingBox = field(default_factory=BoundingBox)
    lines: list[Line] = field(default_factory=list)
    words: list[Word] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class Area:
    """A content area such as a column (class ``ocr_carea``)."""

    hocr_class: ClassVar[str] = "ocr_carea"

    id: str = ""
    lang: str = ""
    bbox: BoundingBox = field(default_factory=BoundingBox)
    paragraphs: list[Paragraph] = field(default_factory=list)
    lines: list[Line] = field(default_factory=list)
    words: list[Word] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class Page:
    """One page of recognised text (class ``ocr_page``)."""

    hocr_class: ClassVar[str] = "ocr_page"

    id: str = ""
    title: str = ""
    page_number: int = 0
    image_name: str = ""
    lang: str = ""
    bbox: BoundingBox = field(default_factory=BoundingBox)
    areas: list[Area] = field(default_factory=list)
    paragraphs: list[Paragraph] = field(default_factory=list)
    lines: list[Line] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class HOCR:
    """A whole hOCR document."""

    title: str = ""
    description: str = ""
    language: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
    pages: list[Page] = field(default_factory=list)