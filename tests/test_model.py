import base64

from ocrchestra.gdocai.helpers import extract_image_from_page
from ocrchestra.gdocai.model import Document, document_from_dict


def _layout(start, end):
    return {
        "textAnchor": {"textSegments": [{"startIndex": str(start), "endIndex": str(end)}]},
        "boundingPoly": {
            "normalizedVertices": [
                {"x": 0.1, "y": 0.1},
                {"x": 0.5, "y": 0.1},
                {"x": 0.5, "y": 0.2},
                {"x": 0.1, "y": 0.2},
            ]
        },
        "confidence": 0.9,
    }


TEXT = "Hello world\nName: Bob\n"
IMAGE = b"\x89PNG fake image bytes"


def _page(number=1):
    name_start = TEXT.index("Name:")
    bob_start = TEXT.index("Bob")
    return {
        "pageNumber": number,
        "dimension": {"width": 1000, "height": 2000},
        "layout": _layout(0, len(TEXT)),
        "image": {"content": base64.b64encode(IMAGE).decode("ascii")},
        "tokens": [
            {"layout": _layout(0, 6), "detectedBreak": {"type": "SPACE"}},
            {"layout": _layout(6, 12), "detectedBreak": {"type": "EOL_SURE_SPACE"}},
            {"layout": _layout(name_start, name_start + 6)},
        ],
        "lines": [{"layout": _layout(0, 12)}, {"layout": _layout(name_start, len(TEXT))}],
        "paragraphs": [{"layout": _layout(0, 12)}],
        "blocks": [{"layout": _layout(0, 12)}],
        "formFields": [
            {
                "fieldName": _layout(name_start, name_start + 5),
                "fieldValue": _layout(bob_start, bob_start + 3),
            }
        ],
    }


def _document(pages):
    return {"text": TEXT, "pages": pages}


def test_document_text_and_raw_are_kept():
    raw = _document([_page()])
    doc = document_from_dict(raw)
    assert isinstance(doc, Document)
    assert doc.text == TEXT
    assert doc.raw is raw


def test_token_text_loses_trailing_break_character():
    page = document_from_dict(_document([_page()])).pages[0]
    assert [token.text for token in page.tokens] == ["Hello", "world", "Name: "]


def test_hierarchy_is_built_by_text_ranges():
    page = document_from_dict(_document([_page()])).pages[0]
    first_line, second_line = page.lines
    assert first_line.tokens == page.tokens[:2]
    assert first_line.tokens[0] is page.tokens[0]
    assert second_line.tokens == [page.tokens[2]]
    assert page.paragraphs[0].lines == [first_line]
    assert page.blocks[0].paragraphs == [page.paragraphs[0]]


def test_element_texts_follow_layouts():
    page = document_from_dict(_document([_page()])).pages[0]
    assert page.text == TEXT
    assert page.lines[0].text == TEXT[:12]
    assert page.blocks[0].text == TEXT[:12]
    assert all(token.page_number == 1 for token in page.tokens)


def test_page_form_fields_and_extracted_fields():
    doc = document_from_dict(_document([_page()]))
    form_field = doc.pages[0].form_fields[0]
    assert form_field.field_name == "Name:"
    assert form_field.field_value == "Bob"
    assert doc.form_fields == {"Name": "Bob"}
    assert doc.custom_extractor_fields == {}


def test_pages_are_sorted_by_page_number():
    doc = document_from_dict(_document([_page(2), _page(1), _page(3)]))
    assert [page.page_number for page in doc.pages] == [1, 2, 3]


def test_pages_not_sorted_when_first_number_is_zero():
    doc = document_from_dict(_document([_page(0), _page(2), _page(1)]))
    assert [page.page_number for page in doc.pages] == [0, 2, 1]


def test_hocr_is_built_from_the_same_document():
    doc = document_from_dict(_document([_page()]))
    assert len(doc.hocr.pages) == 1
    assert doc.hocr.title == "Document OCR"
    assert doc.hocr.metadata["ocr-number-of-pages"] == "1"


def test_line_without_layout_has_no_tokens():
    raw_page = _page()
    raw_page["lines"] = [{}]
    page = document_from_dict(_document([raw_page])).pages[0]
    assert page.lines[0].tokens == []
    assert page.lines[0].text == ""


def test_page_image_can_be_extracted():
    doc = document_from_dict(_document([_page()]))
    assert extract_image_from_page(doc.pages[0]) == IMAGE


def test_empty_document_has_no_pages():
    doc = document_from_dict({"text": ""})
    assert doc.pages == []
    assert doc.form_fields == {}
    assert doc.hocr.pages == []