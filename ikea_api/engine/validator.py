# Path: ikea_api/engine/validator.py
"""
Download Validator

URL checks before a download and integrity checks on downloaded bytes.

Architecture:
- URL validation before download
- Minimum size validation
- Binary container magic-number check (GLB)
"""

from typing import Optional
from urllib.parse import urlparse

from ikea_api.core.logger import get_logger
from ikea_api.core.config_loader import ConfigLoader
from ikea_api.engine.result import ValidationResult
from ikea_api.constants import (
    GLB_MAGIC,
    VALID_URL_SCHEMES,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


class Validator:
    """
    Validates download URLs and downloaded payloads.

    Example:
        validator = Validator()

        # Before download
        if validator.validate_url(model_url):
            ...

        # After download
        result = validator.validate_model(body)
        if not result.valid:
            raise IntegrityError(result.summary)
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize validator.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()

    def validate_url(self, url: str) -> bool:
        """
        Validate URL format.

        Args:
            url: URL to validate

        Returns:
            True if URL is non-empty, HTTP/HTTPS and has a host
        """
        logger.debug(f"{LOG_PROCESS} Validating URL: {url}")

        if not url or not isinstance(url, str):
            logger.warning("Empty URL")
            return False

        try:
            parsed = urlparse(url)
        except ValueError as e:
            logger.warning(f"Unparseable URL {url}: {e}")
            return False

        # Must have scheme and netloc
        if not parsed.scheme or not parsed.netloc:
            logger.warning(f"Invalid URL format: {url}")
            return False

        # Must be HTTP or HTTPS
        if parsed.scheme.lower() not in VALID_URL_SCHEMES:
            logger.warning(f"URL must be HTTP/HTTPS: {url}")
            return False

        return True

    def validate_thumbnail(self, data: bytes) -> ValidationResult:
        """
        Validate downloaded image bytes.

        Only size is checked; anything under the threshold is likely an
        error page or an empty placeholder.
        """
        min_size = self.config.get('min_thumbnail_size')
        result = ValidationResult(valid=True, size=len(data))

        self._check_size(result, data, min_size)

        logger.debug(f"{LOG_OUTPUT} Thumbnail validation: {'passed' if result.valid else result.summary}")
        return result

    def validate_model(self, data: bytes) -> ValidationResult:
        """
        Validate downloaded 3D model bytes.

        Args:
            data: Downloaded payload

        Returns:
            ValidationResult with check details
        """
        logger.info(f"{LOG_INPUT} Validating model payload ({len(data)} bytes)")

        min_size = self.config.get('min_model_size')
        result = ValidationResult(valid=True, size=len(data))

        # Check 1: Size >= minimum
        self._check_size(result, data, min_size)

        # Check 2: GLB container header
        header = data[:len(GLB_MAGIC)]
        if header == GLB_MAGIC:
            result.add_check('magic_number', True)
        else:
            result.add_check(
                'magic_number',
                False,
                f'Expected {GLB_MAGIC!r}, got {header!r}'
            )

        logger.info(f"{LOG_OUTPUT} Model validation: {'passed' if result.valid else result.summary}")
        return result

    def _check_size(self, result: ValidationResult, data: bytes, min_size: int) -> None:
        if len(data) >= min_size:
            result.add_check('minimum_size', True)
        else:
            result.add_check(
                'minimum_size',
                False,
                f'Payload too small: {len(data)} bytes (minimum {min_size})'
            )


__all__ = ['Validator']
