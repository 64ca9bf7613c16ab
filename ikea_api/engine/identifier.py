# Path: ikea_api/engine/identifier.py
"""
Product Identifier Normalizer

Recognizes, compacts and formats 8-digit catalog item numbers.

Two textual encodings exist:
- compact:   '00346735'
- formatted: '003.467.35' (3-3-2 digit groups)

compact(formatted(x)) == x for every valid 8-digit x.
"""

import re
from dataclasses import dataclass

from ikea_api.constants import METADATA_PARTITION_SLICE
from ikea_api.core.logger import get_logger
from ikea_api.engine.errors import FormatError, InputValidationError

logger = get_logger(__name__, 'engine')


IDENTIFIER_LENGTH: int = 8
DEFAULT_SEPARATOR: str = '.'

_COMPACT_PATTERN = re.compile(r'[0-9]{8}')
_FORMATTED_PATTERN = re.compile(r'[0-9]{3}([.\- ])[0-9]{3}\1[0-9]{2}')
_NON_DIGIT = re.compile(r'[^0-9]')


def is_valid_identifier(text: str) -> bool:
    """
    Check whether text is a product identifier.

    True for exactly 8 ASCII digits, or 3+3+2 digit groups joined by the
    same separator ('.', '-' or space). Empty text is invalid.
    """
    if not text or not isinstance(text, str):
        return False
    return bool(_COMPACT_PATTERN.fullmatch(text) or _FORMATTED_PATTERN.fullmatch(text))


def to_compact(text: str) -> str:
    """
    Strip every non-digit character.

    Does not validate length: garbage in gives a digit string of any length.
    """
    if not text:
        return ''
    return _NON_DIGIT.sub('', text)


def to_formatted(text: str, separator: str = DEFAULT_SEPARATOR, strict: bool = False) -> str:
    """
    Format text as 'DDD.DDD.DD'.

    When the compact form is not 8 digits a FormatError is reported: logged
    and the unmodified input returned for display, or raised when strict.

    Args:
        text: Identifier in any encoding
        separator: Group separator
        strict: Raise FormatError instead of returning the input

    Returns:
        Formatted identifier, or the original text on failure

    Raises:
        FormatError: If strict and the text has no 8-digit compact form
    """
    digits = to_compact(text)

    if len(digits) != IDENTIFIER_LENGTH:
        error = FormatError(
            f"Cannot format '{text}': expected {IDENTIFIER_LENGTH} digits, got {len(digits)}"
        )
        if strict:
            raise error
        logger.warning(str(error))
        return text

    return f"{digits[0:3]}{separator}{digits[3:6]}{separator}{digits[6:8]}"


@dataclass(frozen=True)
class ProductIdentifier:
    """
    Parsed, immutable product identifier.

    Example:
        item = ProductIdentifier.parse('003.467.35')
        item.compact    # '00346735'
        item.formatted  # '003.467.35'
    """
    compact: str

    @classmethod
    def parse(cls, text: str) -> 'ProductIdentifier':
        """
        Parse identifier text.

        Raises:
            InputValidationError: If text is not a valid identifier
        """
        if not is_valid_identifier(text):
            raise InputValidationError(f"Invalid identifier: '{text}'")
        return cls(compact=to_compact(text))

    @property
    def formatted(self) -> str:
        return to_formatted(self.compact, strict=True)

    @property
    def partition(self) -> str:
        """Last three digits, used by the catalog to shard metadata URLs."""
        return self.compact[METADATA_PARTITION_SLICE]

    def __str__(self) -> str:
        return self.compact


__all__ = [
    'IDENTIFIER_LENGTH',
    'is_valid_identifier',
    'to_compact',
    'to_formatted',
    'ProductIdentifier',
]
