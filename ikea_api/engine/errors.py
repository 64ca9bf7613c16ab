# Path: ikea_api/engine/errors.py
"""
Catalog Error Taxonomy

Classified failures raised inside catalog flows and reported through
failure events. Each error carries a stable ErrorKind so callers can tell
"try again later" (transport, HTTP status, capacity) from "this item has
no model" and from "bad input".

Hierarchy:
- CatalogError
  - InputValidationError
    - FormatError
  - TransportError (DNS, CONNECT, TLS, TIMEOUT, TRANSPORT)
  - HttpStatusError
  - DecodeError
  - StructuralError
    - ModelUnavailableError
  - IntegrityError
  - StorageError
  - CapacityError
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Stable tags for every classified failure."""
    INVALID_INPUT = 'invalid_input'
    DNS = 'dns'
    CONNECT = 'connect'
    TLS = 'tls'
    TIMEOUT = 'timeout'
    TRANSPORT = 'transport'
    HTTP_STATUS = 'http_status'
    DECODE = 'decode'
    STRUCTURE = 'structure'
    MODEL_UNAVAILABLE = 'model_unavailable'
    INTEGRITY = 'integrity'
    STORAGE = 'storage'
    CAPACITY = 'capacity'


TRANSPORT_KINDS: frozenset = frozenset({
    ErrorKind.DNS,
    ErrorKind.CONNECT,
    ErrorKind.TLS,
    ErrorKind.TIMEOUT,
    ErrorKind.TRANSPORT,
})

# Failures a caller may reasonably retry later
RETRYABLE_KINDS: frozenset = TRANSPORT_KINDS | {ErrorKind.HTTP_STATUS, ErrorKind.CAPACITY}


class CatalogError(Exception):
    """
    Base class for all classified catalog failures.

    Attributes:
        message: Human-readable detail
        identifier: Compact product identifier, when the flow has one
        kind: ErrorKind tag
    """

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str, identifier: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.identifier = identifier

    @property
    def retryable(self) -> bool:
        """True when retrying the same request later may succeed."""
        return self.kind in RETRYABLE_KINDS

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/storage."""
        return {
            'kind': self.kind.value,
            'message': self.message,
            'identifier': self.identifier,
            'retryable': self.retryable,
        }


class InputValidationError(CatalogError):
    """Malformed identifier or empty required argument, detected before any I/O."""
    kind = ErrorKind.INVALID_INPUT


class FormatError(InputValidationError):
    """Text cannot be formatted because its compact form is not 8 digits."""


class TransportError(CatalogError):
    """DNS, connect, TLS, timeout or generic transport failure."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.TRANSPORT,
        identifier: Optional[str] = None
    ):
        if kind not in TRANSPORT_KINDS:
            raise ValueError(f"Not a transport error kind: {kind}")
        super().__init__(message, identifier)
        self.kind = kind


class HttpStatusError(CatalogError):
    """Response status outside [200, 300)."""
    kind = ErrorKind.HTTP_STATUS

    def __init__(self, message: str, status_code: int, identifier: Optional[str] = None):
        super().__init__(message, identifier)
        self.status_code = status_code

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['status_code'] = self.status_code
        return data


class DecodeError(CatalogError):
    """Bytes could not be decoded to text or parsed to a document."""
    kind = ErrorKind.DECODE

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        identifier: Optional[str] = None
    ):
        super().__init__(message, identifier)
        self.position = position

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['position'] = self.position
        return data


class StructuralError(CatalogError):
    """Decoded document is missing an expected field or shape."""
    kind = ErrorKind.STRUCTURE


class ModelUnavailableError(StructuralError):
    """The catalog reports no 3D model for this item (a normal negative result)."""
    kind = ErrorKind.MODEL_UNAVAILABLE


class IntegrityError(CatalogError):
    """Downloaded binary failed size or magic-number validation."""
    kind = ErrorKind.INTEGRITY


class StorageError(CatalogError):
    """Cache directory or file could not be created, written or read."""
    kind = ErrorKind.STORAGE


class CapacityError(CatalogError):
    """Every transport slot is busy."""
    kind = ErrorKind.CAPACITY


__all__ = [
    'ErrorKind',
    'TRANSPORT_KINDS',
    'RETRYABLE_KINDS',
    'CatalogError',
    'InputValidationError',
    'FormatError',
    'TransportError',
    'HttpStatusError',
    'DecodeError',
    'StructuralError',
    'ModelUnavailableError',
    'IntegrityError',
    'StorageError',
    'CapacityError',
]
