# Path: ikea_api/engine/result.py
"""
Catalog Result Objects

Type-safe, structured results for transport and catalog operations.

Architecture:
- ErrorDetail: Classified failure of one outbound call
- TransportResult: Outcome of one outbound HTTP call
- ValidationResult: Integrity checks on downloaded bytes
- SearchResultItem: One mapped search hit
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ikea_api.engine.errors import (
    ErrorKind,
    TRANSPORT_KINDS,
    CatalogError,
    TransportError,
    HttpStatusError,
    CapacityError,
)


@dataclass(frozen=True)
class ErrorDetail:
    """
    Classified failure of an outbound call.

    Attributes:
        kind: Stable error tag
        message: Human-readable detail
        status_code: HTTP status for HTTP_STATUS failures
    """
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None

    def to_exception(self, identifier: Optional[str] = None) -> CatalogError:
        """Build the matching CatalogError for this detail."""
        if self.kind == ErrorKind.HTTP_STATUS:
            return HttpStatusError(self.message, self.status_code or 0, identifier)
        if self.kind == ErrorKind.CAPACITY:
            return CapacityError(self.message, identifier)
        if self.kind in TRANSPORT_KINDS:
            return TransportError(self.message, self.kind, identifier)
        raise ValueError(f"No transport exception for kind {self.kind}")


@dataclass
class TransportResult:
    """
    Result of a single outbound HTTP call.

    Attributes:
        success: Whether a 2xx response body was received
        body: Raw response bytes on success
        url: Final requested URL (query string included)
        status_code: HTTP status code when a response arrived
        duration: Call duration in seconds
        error: Classified failure when success is False
    """
    success: bool
    body: Optional[bytes] = None
    url: str = ''
    status_code: Optional[int] = None
    duration: float = 0.0
    error: Optional[ErrorDetail] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def raise_for_error(self, identifier: Optional[str] = None) -> bytes:
        """
        Return the body, or raise the classified error.

        Raises:
            TransportError, HttpStatusError: If the call failed
        """
        if self.success:
            return self.body if self.body is not None else b''
        raise self.error.to_exception(identifier)

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/storage."""
        return {
            'success': self.success,
            'body_size': len(self.body) if self.body is not None else 0,
            'url': self.url,
            'status_code': self.status_code,
            'duration': self.duration,
            'error_kind': self.error.kind.value if self.error else None,
            'error_message': self.error.message if self.error else None,
            'timestamp': self.timestamp.isoformat(),
        }


@dataclass
class ValidationResult:
    """
    Result of integrity validation on downloaded bytes.

    Attributes:
        valid: Whether validation passed
        checks_performed: List of validation checks performed
        checks_passed: List of checks that passed
        checks_failed: List of checks that failed
        error_messages: Detailed error messages
        size: Number of bytes validated
    """
    valid: bool
    checks_performed: list[str] = field(default_factory=list)
    checks_passed: list[str] = field(default_factory=list)
    checks_failed: list[str] = field(default_factory=list)
    error_messages: list[str] = field(default_factory=list)
    size: int = 0

    def add_check(self, check_name: str, passed: bool, message: str = ''):
        """Add validation check result."""
        self.checks_performed.append(check_name)
        if passed:
            self.checks_passed.append(check_name)
        else:
            self.checks_failed.append(check_name)
            self.valid = False
            if message:
                self.error_messages.append(f"{check_name}: {message}")

    @property
    def summary(self) -> str:
        """Failure messages joined for reporting."""
        return '; '.join(self.error_messages)


@dataclass(frozen=True)
class SearchResultItem:
    """One search hit; every field is mandatory."""
    identifier: str
    display_name: str
    image_url: str
    image_alt_text: str
    detail_page_url: str

    def to_dict(self) -> dict:
        return {
            'identifier': self.identifier,
            'display_name': self.display_name,
            'image_url': self.image_url,
            'image_alt_text': self.image_alt_text,
            'detail_page_url': self.detail_page_url,
        }


__all__ = [
    'ErrorDetail',
    'TransportResult',
    'ValidationResult',
    'SearchResultItem',
]
