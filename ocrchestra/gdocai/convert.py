"""Conversion of Document AI documents, given as JSON dictionaries, to hOCR."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator, Mapping
from typing import Any

from ..hocr.types import HOCR, Area, BoundingBox, Line, Page, Paragraph, Word

_CAPABILITIES = "ocrp_lang ocr_page ocr_carea ocr_par ocr_line ocrx_word"
_UNSPECIFIED_BREAKS = (None, "", 0, "TYPE_UNSPECIFIED")

Layout = Mapping[str, Any]


def create_hocr_struct(document: Mapping[str, Any]) -> HOCR:
    """Convert a whole Document AI document to an :class:`HOCR` document."""
    text = document.get("text", "")
    pages = [
        create_hocr_page(page, text, int(page.get("pageNumber", 0)))
        for page in document.get("pages", ())
    ]
    return create_hocr_document(document, *pages)


def create_hocr_document(document: Mapping[str, Any] | None, *args: Page) -> HOCR:
    """Build an :class:`HOCR` document holding the given pages.

    Without a Document AI ``document`` the language is "unknown"; with one,
    its most frequent detected language is used and, if no pages are
    given, its page count.
    """
    pages = list(args)
    language = "unknown"
    page_count = len(pages)

    if document is not None:
        detected = _document_language(document)
        if detected:
            language = detected
        if page_count == 0 and document.get("pages") is not None:
            page_count = len(document["pages"])

    result = HOCR(
        title="Document OCR",
        language=language,
        metadata={
            "ocr-system": "Document AI OCR",
            "ocr-number-of-pages": str(page_count),
            "ocr-capabilities": _CAPABILITIES,
            "ocr-langs": language,
        },
        pages=pages,
    )
    if pages:
        _update_document_languages(result)
    return result


def create_hocr_page(page: Mapping[str, Any], full_text: str, page_number: int) -> Page:
    """Convert one Document AI page to an hOCR :class:`Page`."""
    dimension = page.get("dimension")
    ocr_page = Page(id=f"page_{page_number}", page_number=page_number)

    ocr_page.lang = _first_language(page)
    bbox = _bounding_box(page.get("layout"), dimension)
    if bbox is not None:
        ocr_page.bbox = bbox

    blocks = page.get("blocks", ())
    paragraphs = page.get("paragraphs", ())
    lines = page.get("lines", ())
    assigned_lines: set[str] = set()

    def build_lines(para: Mapping[str, Any], block_idx: int, para_idx: int) -> list[Line]:
        result = []
        for line_idx, line in enumerate(lines):
            if not _is_within(line.get("layout"), para.get("layout")):
                continue
            assigned_lines.add(_layout_key(line.get("layout")))
            result.append(
                _convert_line(line, page, full_text, page_number, block_idx, para_idx, line_idx)
            )
        return result

    def build_paragraph(para: Mapping[str, Any], para_id: str, block_idx: int, para_idx: int) -> Paragraph:
        ocr_par = Paragraph(id=para_id)
        par_box = _bounding_box(para.get("layout"), dimension)
        if par_box is not None:
            ocr_par.bbox = par_box
        ocr_par.lines = build_lines(para, block_idx, para_idx)
        return ocr_par

    for area_idx, block in enumerate(blocks):
        area = Area(id=f"carea_{page_number}_{area_idx}")
        area_box = _bounding_box(block.get("layout"), dimension)
        if area_box is not None:
            area.bbox = area_box
        for para_idx, para in enumerate(paragraphs):
            if not _is_within(para.get("layout"), block.get("layout")):
                continue
            area.paragraphs.append(
                build_paragraph(para, f"par_{page_number}_{area_idx}_{para_idx}", area_idx, para_idx)
            )
        ocr_page.areas.append(area)

    for para_idx, para in enumerate(paragraphs):
        if any(_is_within(para.get("layout"), block.get("layout")) for block in blocks):
            continue
        ocr_page.paragraphs.append(
            build_paragraph(para, f"par_{page_number}_direct_{para_idx}", 0, para_idx)
        )

    for line_idx, line in enumerate(lines):
        if _layout_key(line.get("layout")) not in assigned_lines:
            ocr_page.lines.append(
                _convert_line(line, page, full_text, page_number, 0, 0, line_idx)
            )

    return ocr_page


def _convert_line(
    line: Mapping[str, Any],
    page: Mapping[str, Any],
    full_text: str,
    page_number: int,
    block_idx: int,
    para_idx: int,
    line_idx: int,
) -> Line:
    from .layout import text_from_layout

    dimension = page.get("dimension")
    ocr_line = Line(id=f"line_{page_number}_{block_idx}_{para_idx}_{line_idx}")
    line_box = _bounding_box(line.get("layout"), dimension)
    if line_box is not None:
        ocr_line.bbox = line_box
    ocr_line.lang = _first_language(line)

    for token_idx, token in enumerate(page.get("tokens", ())):
        token_layout = token.get("layout")
        if not _is_within(token_layout, line.get("layout")):
            continue

        text = text_from_layout(token_layout, full_text).strip()
        text = text.replace("\n", " ").replace("\r", "")
        if _has_detected_break(token) and text and text[-1] in " \n\r\t":
            text = text[:-1]

        word = Word(
            id=f"word_{page_number}_{block_idx}_{para_idx}_{line_idx}_{token_idx}",
            text=text,
        )
        word_box = _bounding_box(token_layout, dimension)
        if word_box is not None:
            word.bbox = word_box
        if token_layout is not None:
            word.confidence = float(token_layout.get("confidence", 0.0)) * 100
        word.lang = _first_language(token)
        ocr_line.words.append(word)

    return ocr_line


def _has_detected_break(token: Mapping[str, Any]) -> bool:
    detected = token.get("detectedBreak")
    return detected is not None and detected.get("type") not in _UNSPECIFIED_BREAKS


def _first_language(element: Mapping[str, Any]) -> str:
    languages = element.get("detectedLanguages") or ()
    return languages[0].get("languageCode", "") if languages else ""


def _bounding_box(layout: Layout | None, dimension: Mapping[str, Any] | None) -> BoundingBox | None:
    if layout is None or dimension is None:
        return None
    poly = layout.get("boundingPoly")
    if poly is None:
        return None
    vertices = poly.get("normalizedVertices") or ()
    if len(vertices) < 4:
        return None
    width = float(dimension.get("width", 0.0))
    height = float(dimension.get("height", 0.0))

    def scale(value: Any, size: float) -> float:
        return float(int(float(value) * size + 0.5))

    top_left, bottom_right = vertices[0], vertices[2]
    return BoundingBox(
        scale(top_left.get("x", 0.0), width),
        scale(top_left.get("y", 0.0), height),
        scale(bottom_right.get("x", 0.0), width),
        scale(bottom_right.get("y", 0.0), height),
    )


def _first_segment(layout: Layout | None) -> tuple[int, int] | None:
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


def _is_within(element: Layout | None, parent: Layout | None) -> bool:
    inner = _first_segment(element)
    outer = _first_segment(parent)
    if inner is None or outer is None:
        return False
    return inner[0] >= outer[0] and inner[1] <= outer[1]


def _layout_key(layout: Layout | None) -> str:
    segment = _first_segment(layout)
    return "" if segment is None else f"{segment[0]}-{segment[1]}"


def _document_language(document: Mapping[str, Any]) -> str:
    counts: Counter[str] = Counter()
    for page in document.get("pages", ()):
        for lang in page.get("detectedLanguages") or ():
            counts[lang.get("languageCode", "")] += 1
        for token in page.get("tokens", ()):
            for lang in token.get("detectedLanguages") or ():
                counts[lang.get("languageCode", "")] += 1
    if not counts:
        return ""
    return counts.most_common(1)[0][0]


def _line_langs(line: Line) -> Iterator[str]:
    yield line.lang
    yield from (word.lang for word in line.words)


def _paragraph_langs(paragraph: Paragraph) -> Iterator[str]:
    yield paragraph.lang
    for line in paragraph.lines:
        yield from _line_langs(line)
    yield from (word.lang for word in paragraph.words)


def _page_langs(page: Page) -> Iterator[str]:
    yield page.lang
    for area in page.areas:
        yield area.lang
        for paragraph in area.paragraphs:
            yield from _paragraph_langs(paragraph)
        for line in area.lines:
            yield from _line_langs(line)
        yield from (word.lang for word in area.words)
    for paragraph in page.paragraphs:
        yield from _paragraph_langs(paragraph)
    for line in page.lines:
        yield from _line_langs(line)


def _update_document_languages(result: HOCR) -> None:
    langs = {result.language}
    for page in result.pages:
        langs.update(_page_langs(page))
    listed = sorted(lang for lang in langs if lang and lang != "unknown")
    if listed:
        result.metadata["ocr-langs"] = ", ".join(listed)