# Path: ikea_api/engine/response_parser.py
"""
Response Parser

Extracts typed values from decoded catalog documents.
Missing paths or wrongly typed fields raise StructuralError.
"""

from typing import Any, Optional

from ikea_api.core.logger import get_logger
from ikea_api.engine.errors import StructuralError
from ikea_api.engine.result import SearchResultItem
from ikea_api.constants import (
    SEARCH_RESULT_PATH,
    SEARCH_ITEM_WRAPPER,
    FIELD_ITEM_NO,
    FIELD_NAME,
    FIELD_IMAGE_URL,
    FIELD_IMAGE_ALT,
    FIELD_DETAIL_URL,
    FIELD_EXISTS,
    FIELD_MODEL_URL,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


# Source field -> SearchResultItem attribute
SEARCH_FIELD_MAP: dict[str, str] = {
    FIELD_ITEM_NO: 'identifier',
    FIELD_NAME: 'display_name',
    FIELD_IMAGE_URL: 'image_url',
    FIELD_IMAGE_ALT: 'image_alt_text',
    FIELD_DETAIL_URL: 'detail_page_url',
}


def parse_search_response(document: Any) -> tuple[list[SearchResultItem], int]:
    """
    Map a search document to result items.

    Items missing any mandatory field are dropped and counted.

    Returns:
        Tuple of (items, dropped count)

    Raises:
        StructuralError: If the result path is absent at any depth
    """
    node = document
    for key in SEARCH_RESULT_PATH:
        if not isinstance(node, dict) or key not in node:
            raise StructuralError("invalid response structure")
        node = node[key]

    if not isinstance(node, list):
        raise StructuralError("invalid response structure")

    items = []
    dropped = 0

    for raw in node:
        item = _map_search_item(raw)
        if item is None:
            dropped += 1
        else:
            items.append(item)

    logger.info(f"{LOG_OUTPUT} Parsed {len(items)} search items ({dropped} dropped)")
    return items, dropped


def _map_search_item(raw: Any) -> Optional[SearchResultItem]:
    if not isinstance(raw, dict):
        return None

    # Newer responses nest the fields under 'product'
    source = raw.get(SEARCH_ITEM_WRAPPER, raw)
    if not isinstance(source, dict):
        return None

    values = {}
    for field_name, attribute in SEARCH_FIELD_MAP.items():
        value = source.get(field_name)
        if value is None:
            return None
        values[attribute] = str(value)

    return SearchResultItem(**values)


def parse_availability(document: Any) -> bool:
    """
    Read the boolean exists flag.

    Raises:
        StructuralError: If the field is missing or not a boolean
    """
    if not isinstance(document, dict) or FIELD_EXISTS not in document:
        raise StructuralError(f"missing '{FIELD_EXISTS}' field")

    exists = document[FIELD_EXISTS]
    if not isinstance(exists, bool):
        raise StructuralError(f"'{FIELD_EXISTS}' is not a boolean: {exists!r}")

    return exists


def parse_model_url(document: Any) -> str:
    """
    Read the model download URL.

    Raises:
        StructuralError: If the field is missing or not a non-empty string
    """
    if not isinstance(document, dict):
        raise StructuralError(f"missing '{FIELD_MODEL_URL}' field")

    model_url = document.get(FIELD_MODEL_URL)
    if not isinstance(model_url, str) or not model_url.strip():
        raise StructuralError(f"missing '{FIELD_MODEL_URL}' field")

    return model_url.strip()


__all__ = [
    'SEARCH_FIELD_MAP',
    'parse_search_response',
    'parse_availability',
    'parse_model_url',
]
