# Path: ikea_api/engine/response_decoder.py
"""
Response Decoder

Turns raw response bytes into a JSON document.
Malformed payloads raise DecodeError, distinct from network failures.
"""

import json
from typing import Any, Optional

from ikea_api.core.logger import get_logger
from ikea_api.engine.errors import DecodeError
from ikea_api.constants import LOG_PROCESS

logger = get_logger(__name__, 'engine')


class ResponseDecoder:
    """
    UTF-8 JSON decoder.

    Example:
        document = ResponseDecoder().decode(body)
    """

    def decode(self, data: Optional[bytes], identifier: Optional[str] = None) -> Any:
        """
        Decode bytes to a document.

        Args:
            data: Raw bytes
            identifier: Identifier attached to any raised error

        Returns:
            Parsed JSON value (never None)

        Raises:
            DecodeError: Empty body, invalid UTF-8, invalid JSON or a null document
        """
        if not data:
            raise DecodeError("cannot decode empty body", identifier=identifier)

        try:
            text = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"Invalid UTF-8 at byte {e.start}: {e.reason}",
                position=e.start,
                identifier=identifier
            ) from e

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(
                f"Invalid JSON at line {e.lineno} column {e.colno}: {e.msg}",
                position=e.pos,
                identifier=identifier
            ) from e

        if document is None:
            raise DecodeError("document is null", identifier=identifier)

        logger.debug(f"{LOG_PROCESS} Decoded {len(data)} bytes as {type(document).__name__}")
        return document


__all__ = ['ResponseDecoder']
