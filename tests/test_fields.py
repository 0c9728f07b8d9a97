from ocrchestra.gdocai.fields import extract_custom_extractor_fields, extract_form_fields


def _layout(text, fragment, occurrence=0):
    start = -1
    for _ in range(occurrence + 1):
        start = text.index(fragment, start + 1)
    return {
        "textAnchor": {
            "textSegments": [{"startIndex": str(start), "endIndex": str(start + len(fragment))}]
        }
    }


def _form_doc(text, pairs):
    form_fields = [
        {"fieldName": _layout(text, name, n_occ), "fieldValue": _layout(text, value, v_occ)}
        for name, n_occ, value, v_occ in pairs
    ]
    return {"text": text, "pages": [{"formFields": form_fields}]}


def test_form_field_name_is_trimmed_and_loses_colon():
    text = " Name: John \n"
    doc = _form_doc(text, [(" Name: ", 0, " John ", 0)])
    assert extract_form_fields(doc) == {"Name": "John"}


def test_form_field_duplicate_with_different_value_becomes_list():
    text = "Name: John\nName: Jane\nName: John\n"
    doc = _form_doc(
        text,
        [("Name:", 0, "John", 0), ("Name:", 1, "Jane", 0), ("Name:", 2, "John", 1)],
    )
    assert extract_form_fields(doc) == {"Name": ["John", "Jane", "John"]}


def test_form_field_duplicate_with_same_value_stays_single():
    text = "City: Oslo\nCity: Oslo\n"
    doc = _form_doc(text, [("City:", 0, "Oslo", 0), ("City:", 1, "Oslo", 1)])
    assert extract_form_fields(doc) == {"City": "Oslo"}


def test_form_field_with_empty_name_is_skipped():
    text = "  value"
    doc = _form_doc(text, [("  ", 0, "value", 0)])
    assert extract_form_fields(doc) == {}


def test_form_fields_across_pages_are_merged():
    text = "A: 1\nB: 2\n"
    doc = {
        "text": text,
        "pages": [
            {"formFields": [{"fieldName": _layout(text, "A:"), "fieldValue": _layout(text, "1")}]},
            {"formFields": [{"fieldName": _layout(text, "B:"), "fieldValue": _layout(text, "2")}]},
        ],
    }
    assert extract_form_fields(doc) == {"A": "1", "B": "2"}


def test_custom_fields_of_missing_document_are_empty():
    assert extract_custom_extractor_fields(None) == {}
    assert extract_custom_extractor_fields({"entities": []}) == {}


def test_custom_fields_simple_entity():
    doc = {"entities": [{"type": "invoice_id", "mentionText": "INV-1"}]}
    assert extract_custom_extractor_fields(doc) == {"invoice_id": "INV-1"}


def test_custom_fields_duplicates_become_unique_list():
    doc = {
        "entities": [
            {"type": "item", "mentionText": "apple"},
            {"type": "item", "mentionText": "apple"},
            {"type": "item", "mentionText": "pear"},
            {"type": "item", "mentionText": "apple"},
            {"type": "item", "mentionText": "plum"},
        ]
    }
    assert extract_custom_extractor_fields(doc) == {"item": ["apple", "pear", "plum"]}


def test_custom_fields_entity_without_type_is_skipped():
    doc = {"entities": [{"type": "", "mentionText": "x"}, {"mentionText": "y"}]}
    assert extract_custom_extractor_fields(doc) == {}


def test_custom_fields_entity_without_value_becomes_empty_mapping():
    doc = {"entities": [{"type": "note", "mentionText": ""}]}
    assert extract_custom_extractor_fields(doc) == {"note": {}}


def test_custom_fields_nested_properties():
    doc = {
        "entities": [
            {
                "type": "address",
                "mentionText": "Main St 1, Springfield",
                "properties": [
                    {"type": "street", "mentionText": "Main St 1"},
                    {"type": "city", "mentionText": "Springfield"},
                ],
            }
        ]
    }
    assert extract_custom_extractor_fields(doc) == {
        "address": {
            "_value": "Main St 1, Springfield",
            "street": "Main St 1",
            "city": "Springfield",
        }
    }


def test_custom_fields_existing_value_kept_when_properties_follow():
    doc = {
        "entities": [
            {"type": "client", "mentionText": "ACME"},
            {
                "type": "client",
                "mentionText": "ignored",
                "properties": [{"type": "id", "mentionText": "42"}],
            },
        ]
    }
    assert extract_custom_extractor_fields(doc) == {"client": {"_value": "ACME", "id": "42"}}


def test_custom_fields_value_added_to_existing_mapping():
    doc = {
        "entities": [
            {"type": "total", "properties": [{"type": "currency", "mentionText": "EUR"}]},
            {"type": "total", "mentionText": "100"},
            {"type": "total", "mentionText": "200"},
        ]
    }
    result = extract_custom_extractor_fields(doc)
    assert result["total"]["currency"] == "EUR"
    assert result["total"]["_value"] == ["100", "200"]


def test_custom_fields_deeply_nested_properties():
    doc = {
        "entities": [
            {
                "type": "a",
                "properties": [
                    {"type": "b", "properties": [{"type": "c", "mentionText": "deep"}]}
                ],
            }
        ]
    }
    assert extract_custom_extractor_fields(doc) == {"a": {"b": {"c": "deep"}}}