# craftd/utils/json_fields.py
"""
Parsing helpers for JSON columns (metadata, salary adjustments, bonus history).

The persistence layer hands these over either already decoded or as raw JSON
text. Everything is validated against a pydantic model here so downstream
calculations never see untyped blobs.
"""

import json
import logging
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


def safe_parse_json(json_field: Any, fallback: T) -> Any:
    """
    Decode a JSON field, returning ``fallback`` for empty or invalid input.

    Values that are not strings are assumed to be decoded already and are
    returned unchanged.
    """
    if not json_field:
        return fallback
    if not isinstance(json_field, str):
        return json_field
    try:
        return json.loads(json_field)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse JSON field: {e}")
        return fallback


def parse_json_model(json_field: Any, model: Type[M]) -> M:
    """Decode and validate a JSON object; invalid content yields ``model()``."""
    raw = safe_parse_json(json_field, {})
    if isinstance(raw, model):
        return raw
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Discarding invalid {model.__name__} payload: {e.error_count()} error(s)")
        return model()


def parse_json_list(json_field: Any, item_model: Type[M]) -> List[M]:
    """
    Decode a JSON array and validate each element.

    Elements that fail validation are dropped individually; one malformed
    entry does not discard the rest of the list.
    """
    raw = safe_parse_json(json_field, [])
    if not isinstance(raw, list):
        logger.warning(f"Expected a list of {item_model.__name__}, got {type(raw).__name__}")
        return []

    adapter = TypeAdapter(item_model)
    items: List[M] = []
    for idx, entry in enumerate(raw):
        if isinstance(entry, item_model):
            items.append(entry)
            continue
        try:
            items.append(adapter.validate_python(entry))
        except ValidationError as e:
            logger.warning(
                f"Skipping invalid {item_model.__name__} at index {idx}: {e.error_count()} error(s)"
            )
    return items
