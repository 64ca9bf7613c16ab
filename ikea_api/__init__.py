# Path: ikea_api/__init__.py
"""
IKEA API Client

Searches the IKEA product catalog, fetches product metadata and downloads
thumbnails and 3D models into a permanent on-disk cache.

Example:
    from ikea_api import CatalogCoordinator

    async with CatalogCoordinator() as catalog:
        event = await catalog.search('poang')
"""

from ikea_api.engine import (
    CatalogCoordinator,
    EventChannel,
    ProductIdentifier,
    is_valid_identifier,
    to_compact,
    to_formatted,
)
from ikea_api.engine.errors import CatalogError, ErrorKind

__version__ = '1.0.0'

__all__ = [
    'CatalogCoordinator',
    'EventChannel',
    'ProductIdentifier',
    'is_valid_identifier',
    'to_compact',
    'to_formatted',
    'CatalogError',
    'ErrorKind',
    '__version__',
]
