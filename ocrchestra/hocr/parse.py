"""Parsing of hOCR HTML into the hOCR object model."""

from __future__ import annotations

import re
from collections.abc import Iterable

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from .types import HOCR, Area, BoundingBox, Line, Page, Paragraph, Word

_DOCUMENT_META_NAMES = frozenset(
    {"ocr-system", "ocr-capabilities", "ocr-number-of-pages", "ocr-langs"}
)
_CHARSET_MARKER = b"charset="
_CHARSET_DELIMITERS = re.compile(rb"[\"';>]")
_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)

_PAR = "ocr_par"
_LINE = "ocr_line"
_WORD = "ocrx_word"
_AREA = "ocr_carea"
_PAGE = "ocr_page"


class HocrParseError(ValueError):
    """Raised when hOCR data holds no usable page."""


def parse_hocr(data: bytes | str) -> HOCR:
    """Parse hOCR HTML into an :class:`HOCR` document.

    A ``charset`` other than utf-8 declared in the data makes it be read
    as ISO-8859-1. Raises :class:`HocrParseError` if no ``ocr_page`` is found.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    if _detect_encoding(raw) != "utf-8":
        text = raw.decode("latin-1")
    else:
        text = raw.decode("utf-8", errors="replace")

    soup = BeautifulSoup(text, "html.parser", multi_valued_attributes=None)

    result = HOCR()
    _extract_document_meta(result, soup)
    result.pages = [_process_page(node) for node in _find_pages(soup)]

    if not result.pages:
        raise HocrParseError("no ocr_page elements found in HOCR data")
    return result


def parse_title(title: str) -> dict[str, list[str]]:
    """Split an hOCR title such as ``"bbox 1 2 3 4; x_wconf 95"`` into properties."""
    props: dict[str, list[str]] = {}
    for part in title.split(";"):
        items = part.split()
        if items:
            props[items[0]] = items[1:]
    return props


def parse_bounding_box_from_title(title: str) -> BoundingBox | None:
    """Return the ``bbox`` of an hOCR title, or None if it has no complete one."""
    coords = parse_title(title).get("bbox")
    if coords is None or len(coords) < 4:
        return None
    x1, y1, x2, y2 = (_parse_float(value) for value in coords[:4])
    return BoundingBox(x1, y1, x2, y2)


def _detect_encoding(data: bytes) -> str:
    pos = data.find(_CHARSET_MARKER)
    if pos < 0:
        return "utf-8"
    start = pos + len(_CHARSET_MARKER)
    if len(data) <= start + 10:
        return "utf-8"
    fields = [f for f in _CHARSET_DELIMITERS.split(data[start : start + 20]) if f]
    if not fields:
        return "utf-8"
    return fields[0].decode("latin-1").lower() or "utf-8"


def _parse_float(value: str) -> float:
    if "_" in value:
        return 0.0
    try:
        return float(value)
    except ValueError:
        return 0.0


def _parse_int(value: str) -> int:
    return int(value) if _INTEGER.fullmatch(value) else 0


def _attr(tag: Tag, name: str) -> str:
    value = tag.attrs.get(name, "")
    return value if isinstance(value, str) else " ".join(value)


def _joined_props(props: dict[str, list[str]], skip: Iterable[str]) -> dict[str, str]:
    excluded = set(skip)
    return {key: " ".join(values) for key, values in props.items() if key not in excluded}


def _find_pages(root: PageElement) -> list[Tag]:
    pages: list[Tag] = []

    def visit(node: PageElement) -> None:
        if not isinstance(node, Tag):
            return
        if node.name == "div" and _PAGE in _attr(node, "class"):
            pages.append(node)
            return
        for child in node.children:
            visit(child)

    visit(root)
    return pages


def _collect(root: Tag, kinds: tuple[str, ...]) -> dict[str, list[Tag]]:
    """Find the outermost descendants whose class names one of ``kinds``, checked in order."""
    found: dict[str, list[Tag]] = {kind: [] for kind in kinds}

    def visit(node: PageElement) -> None:
        if not isinstance(node, Tag):
            return
        cls = _attr(node, "class")
        for kind in kinds:
            if kind in cls:
                found[kind].append(node)
                return
        for child in node.children:
            visit(child)

    for child in root.children:
        visit(child)
    return found


def _find_head(node: PageElement) -> Tag | None:
    if isinstance(node, Tag):
        if node.name == "head":
            return node
        for child in node.children:
            head = _find_head(child)
            if head is not None:
                return head
    return None


def _extract_document_meta(result: HOCR, soup: BeautifulSoup) -> None:
    for child in soup.children:
        if isinstance(child, Tag) and child.name == "html":
            for key, value in child.attrs.items():
                if key in ("lang", "xml:lang"):
                    result.language = value
                    break

    head = _find_head(soup)
    if head is None:
        return

    for child in head.children:
        if not isinstance(child, Tag):
            continue
        if child.name == "title":
            first = next(iter(child.children), None)
            if first is not None:
                result.title = str(first) if isinstance(first, NavigableString) else first.name
        elif child.name == "meta":
            name = _attr(child, "name")
            content = _attr(child, "content")
            if not name or not content:
                continue
            if name in _DOCUMENT_META_NAMES:
                result.metadata[name] = content
            elif name == "description":
                result.description = content
            elif name == "dc.language":
                result.language = content


def _process_page(node: Tag) -> Page:
    page = Page()
    for key, value in node.attrs.items():
        if key == "id":
            page.id = value
        elif key == "lang":
            page.lang = value
        elif key == "title":
            page.title = value
            bbox = parse_bounding_box_from_title(value)
            if bbox is not None:
                page.bbox = bbox
            props = parse_title(value)
            if props.get("image"):
                page.image_name = props["image"][0]
            if props.get("ppageno"):
                page.page_number = _parse_int(props["ppageno"][0])

    found = _collect(node, (_AREA, _PAR, _LINE))
    page.areas = [_process_area(n) for n in found[_AREA]]
    page.paragraphs = [_process_paragraph(n) for n in found[_PAR]]
    page.lines = [_process_line(n) for n in found[_LINE]]
    return page


def _process_area(node: Tag) -> Area:
    area = Area()
    for key, value in node.attrs.items():
        if key == "id":
            area.id = value
        elif key == "lang":
            area.lang = value
        elif key == "title":
            bbox = parse_bounding_box_from_title(value)
            if bbox is not None:
                area.bbox = bbox
            area.metadata.update(_joined_props(parse_title(value), ("bbox",)))

    found = _collect(node, (_PAR, _LINE, _WORD))
    area.paragraphs = [_process_paragraph(n) for n in found[_PAR]]
    area.lines = [_process_line(n) for n in found[_LINE]]
    area.words = [_process_word(n) for n in found[_WORD]]
    return area


def _process_paragraph(node: Tag) -> Paragraph:
    paragraph = Paragraph()
    for key, value in node.attrs.items():
        if key == "id":
            paragraph.id = value
        elif key == "lang":
            paragraph.lang = value
        elif key == "title":
            bbox = parse_bounding_box_from_title(value)
            if bbox is not None:
                paragraph.bbox = bbox
            paragraph.metadata.update(_joined_props(parse_title(value), ("bbox",)))

    found = _collect(node, (_LINE, _WORD))
    paragraph.lines = [_process_line(n) for n in found[_LINE]]
    paragraph.words = [_process_word(n) for n in found[_WORD]]
    return paragraph


def _process_line(node: Tag) -> Line:
    line = Line()
    for key, value in node.attrs.items():
        if key == "id":
            line.id = value
        elif key == "lang":
            line.lang = value
        elif key == "title":
            bbox = parse_bounding_box_from_title(value)
            if bbox is not None:
                line.bbox = bbox
            props = parse_title(value)
            if props.get("baseline"):
                line.baseline = " ".join(props["baseline"])
            line.metadata.update(_joined_props(props, ("bbox", "baseline")))

    line.words = [_process_word(n) for n in _collect(node, (_WORD,))[_WORD]]
    return line


def _process_word(node: Tag) -> Word:
    word = Word()
    for key, value in node.attrs.items():
        if key == "id":
            word.id = value
        elif key == "lang":
            word.lang = value
        elif key == "title":
            bbox = parse_bounding_box_from_title(value)
            if bbox is not None:
                word.bbox = bbox
            props = parse_title(value)
            if props.get("x_wconf"):
                word.confidence = _parse_float(props["x_wconf"][0])
            if props.get("lang"):
                word.lang = props["lang"][0]
            word.metadata.update(_joined_props(props, ("bbox", "x_wconf", "lang")))

    word.text = _text_content(node)
    return word


def _text_content(node: PageElement) -> str:
    if isinstance(node, NavigableString):
        if isinstance(node, PreformattedString):
            return ""
        return str(node).strip()
    if isinstance(node, Tag):
        return "".join(_text_content(child) for child in node.children).strip()
    return ""