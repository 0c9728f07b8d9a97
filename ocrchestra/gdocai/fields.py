"""Form field and custom extractor field extraction from Document AI documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .layout import text_from_layout

FieldValue = Any


def extract_form_fields(document: Mapping[str, Any]) -> dict[str, FieldValue]:
    """Collect the form fields of all pages into one mapping.

    Names are stripped of surrounding whitespace and one trailing colon.
    A name seen again with a different value turns into a list of values;
    once a list, every further value is appended.
    """
    full_text = document.get("text", "")
    fields: dict[str, FieldValue] = {}

    for page in document.get("pages", ()):
        for form_field in page.get("formFields", ()):
            key = text_from_layout(form_field.get("fieldName"), full_text).strip()
            key = key.removesuffix(":")
            value = text_from_layout(form_field.get("fieldValue"), full_text).strip()
            if not key:
                continue

            if key not in fields:
                fields[key] = value
                continue
            existing = fields[key]
            if isinstance(existing, str):
                if existing != value:
                    fields[key] = [existing, value]
            elif isinstance(existing, list):
                existing.append(value)

    return fields


def extract_custom_extractor_fields(document: Mapping[str, Any] | None) -> dict[str, FieldValue]:
    """Collect custom extractor entities into a nested mapping.

    Entities with properties become mappings; their own mention text is kept
    under ``"_value"``. Repeated entity types with distinct values become lists.
    """
    fields: dict[str, FieldValue] = {}
    if document is None:
        return fields

    for entity in document.get("entities") or ():
        if not entity.get("type", ""):
            continue
        _process_entity(entity, fields)
    return fields


def _process_entity(entity: Mapping[str, Any], fields: dict[str, FieldValue]) -> None:
    key = entity.get("type", "")
    value = entity.get("mentionText", "")
    properties = entity.get("properties") or ()

    if not properties:
        _add_value(fields, key, value)
        return

    if key in fields:
        existing = fields[key]
        prop_map = existing if isinstance(existing, dict) else {"_value": existing}
    else:
        prop_map = {"_value": value} if value else {}

    for prop in properties:
        _process_entity(prop, prop_map)
    fields[key] = prop_map


def _add_value(fields: dict[str, FieldValue], key: str, value: str) -> None:
    if not key:
        return

    if key not in fields:
        fields[key] = value if value else {}
        return

    existing = fields[key]
    if isinstance(existing, str):
        if existing != value and value:
            fields[key] = [existing, value]
    elif isinstance(existing, list):
        if value and value not in existing:
            existing.append(value)
    elif isinstance(existing, dict):
        if value:
            _add_value(existing, "_value", value)