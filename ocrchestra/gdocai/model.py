"""Structured view of a Document AI document given as a JSON dictionary."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from ..hocr.types import HOCR
from .convert import create_hocr_struct
from .fields import extract_custom_extractor_fields, extract_form_fields
from .layout import text_from_document, text_from_layout

_UNSPECIFIED_BREAKS = (None, "", 0, "TYPE_UNSPECIFIED")


@dataclass
class Token:
    """A word or token on a page."""

    documentai_object: Mapping[str, Any] = field(default_factory=dict, repr=False)
    page_number: int = 0
    text: str = ""


@dataclass
class Line:
    """A line of text and the tokens inside it."""

    documentai_object: Mapping[str, Any] = field(default_factory=dict, repr=False)
    page_number: int = 0
    tokens: list[Token] = field(default_factory=list)
    text: str = ""


@dataclass
class Paragraph:
    """A paragraph and the lines inside it."""

    documentai_object: Mapping[str, Any] = field(default_factory=dict, repr=False)
    page_number: int = 0
    lines: list[Line] = field(default_factory=list)
    text: str = ""


@dataclass
class Block:
    """A layout block and the paragraphs inside it."""

    documentai_object: Mapping[str, Any] = field(default_factory=dict, repr=False)
    page_number: int = 0
    paragraphs: list[Paragraph] = field(default_factory=list)
    text: str = ""


@dataclass
class FormField:
    """A detected form field with its name and value text."""

    documentai_object: Mapping[str, Any] = field(default_factory=dict, repr=False)
    document_text: str = field(default="", repr=False)
    field_name: str = ""
    field_value: str = ""


@dataclass
class Page:
    """A page with its structural elements."""

    documentai_object: Mapping[str, Any] = field(default_factory=dict, repr=False)
    document_text: str = field(default="", repr=False)
    text: str = ""
    page_number: int = 0
    form_fields: list[FormField] = field(default_factory=list)
    lines: list[Line] = field(default_factory=list)
    paragraphs: list[Paragraph] = field(default_factory=list)
    blocks: list[Block] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)


@dataclass
class Document:
    """The result of OCR processing: raw response, structure, text, hOCR and fields."""

    raw: Mapping[str, Any] | None = field(default=None, repr=False)
    pages: list[Page] = field(default_factory=list)
    text: str = ""
    hocr: HOCR = field(default_factory=HOCR)
    form_fields: dict[str, Any] = field(default_factory=dict)
    custom_extractor_fields: dict[str, Any] = field(default_factory=dict)


def document_from_dict(document: Mapping[str, Any]) -> Document:
    """Build a :class:`Document` from a Document AI document dictionary."""
    return Document(
        raw=document,
        pages=_pages_from_document(document),
        text=text_from_document(document),
        hocr=create_hocr_struct(document),
        form_fields=extract_form_fields(document),
        custom_extractor_fields=extract_custom_extractor_fields(document),
    )


def _pages_from_document(document: Mapping[str, Any]) -> list[Page]:
    full_text = document.get("text", "")
    pages = [_build_page(raw_page, full_text) for raw_page in document.get("pages", ())]
    if len(pages) > 1 and pages[0].page_number > 0:
        pages.sort(key=lambda page: page.page_number)
    return pages


def _build_page(raw_page: Mapping[str, Any], full_text: str) -> Page:
    number = int(raw_page.get("pageNumber", 0))

    def layout_text(element: Mapping[str, Any]) -> str:
        return text_from_layout(element.get("layout"), full_text)

    page = Page(
        documentai_object=raw_page,
        document_text=full_text,
        page_number=number,
        text=layout_text(raw_page),
    )
    page.form_fields = [
        FormField(
            documentai_object=raw_field,
            document_text=full_text,
            field_name=text_from_layout(raw_field.get("fieldName"), full_text),
            field_value=text_from_layout(raw_field.get("fieldValue"), full_text),
        )
        for raw_field in raw_page.get("formFields", ())
    ]
    page.tokens = [
        Token(documentai_object=raw, page_number=number, text=_token_text(raw, full_text))
        for raw in raw_page.get("tokens", ())
    ]
    page.lines = [
        Line(documentai_object=raw, page_number=number, text=layout_text(raw))
        for raw in raw_page.get("lines", ())
    ]
    page.paragraphs = [
        Paragraph(documentai_object=raw, page_number=number, text=layout_text(raw))
        for raw in raw_page.get("paragraphs", ())
    ]
    page.blocks = [
        Block(documentai_object=raw, page_number=number, text=layout_text(raw))
        for raw in raw_page.get("blocks", ())
    ]

    for line in page.lines:
        line.tokens = _children(line, page.tokens)
    for paragraph in page.paragraphs:
        paragraph.lines = _children(paragraph, page.lines)
    for block in page.blocks:
        block.paragraphs = _children(block, page.paragraphs)
    return page


def _token_text(token: Mapping[str, Any], full_text: str) -> str:
    text = text_from_layout(token.get("layout"), full_text)
    detected = token.get("detectedBreak")
    has_break = detected is not None and detected.get("type") not in _UNSPECIFIED_BREAKS
    if has_break and text and text[-1] in " \n\r\t":
        text = text[:-1]
    return text


def _span(element: Any) -> tuple[int, int] | None:
    raw = element.documentai_object
    layout = raw.get("layout") if raw is not None else None
    if layout is None:
        return None
    anchor = layout.get("textAnchor")
    if anchor is None:
        return None
    segments = anchor.get("textSegments") or ()
    if not segments:
        return None
    first = segments[0]
    return int(first.get("startIndex", 0)), int(first.get("endIndex", 0))


_Child = TypeVar("_Child", Token, Line, Paragraph)


def _children(parent: Any, candidates: Sequence[_Child]) -> list[_Child]:
    outer = _span(parent)
    if outer is None:
        return []
    result = []
    for child in candidates:
        inner = _span(child)
        if inner is not None and inner[0] >= outer[0] and inner[1] <= outer[1]:
            result.append(child)
    return result