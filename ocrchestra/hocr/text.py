"""Plain-text extraction from hOCR documents."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .types import HOCR, Area, Line, Page, Paragraph, Word


def extract_hocr_text(doc: HOCR) -> str:
    """Return all text of ``doc``, one line per text line, pages separated by a blank line.

    A line is emitted only once per page, keyed by its id.
    """
    return "".join(chunk for page in doc.pages for chunk in _page_chunks(page))


def _page_chunks(page: Page) -> Iterator[str]:
    seen: set[str] = set()
    for area in page.areas:
        yield from _area_chunks(area, seen)
    for paragraph in page.paragraphs:
        yield from _paragraph_chunks(paragraph, seen)
    yield from _unseen_lines(page.lines, seen)
    yield "\n\n"


def _area_chunks(area: Area, seen: set[str]) -> Iterator[str]:
    for paragraph in area.paragraphs:
        yield from _paragraph_chunks(paragraph, seen)
    yield from _unseen_lines(area.lines, seen)
    yield from _loose_words(area.words)


def _paragraph_chunks(paragraph: Paragraph, seen: set[str]) -> Iterator[str]:
    yield from _unseen_lines(paragraph.lines, seen)
    yield from _loose_words(paragraph.words)


def _unseen_lines(lines: Iterable[Line], seen: set[str]) -> Iterator[str]:
    for line in lines:
        if line.id in seen:
            continue
        seen.add(line.id)
        yield _words_text(line.words)


def _loose_words(words: list[Word]) -> Iterator[str]:
    if words:
        yield _words_text(words)


def _words_text(words: Iterable[Word]) -> str:
    return "".join(f"{word.text} " for word in words) + "\n"