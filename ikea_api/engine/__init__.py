# Path: ikea_api/engine/__init__.py
"""Engine Module - Cache, Transport and Catalog Flows"""

from .cache_store import Artifact, CacheStore
from .coordinator import CatalogCoordinator
from .events import (
    EventChannel,
    SearchCompleted,
    SearchFailed,
    MetadataLoaded,
    MetadataFailed,
    ThumbnailReady,
    ThumbnailFailed,
    ModelReady,
    ModelFailed,
    AvailabilityChecked,
)
from .identifier import ProductIdentifier, is_valid_identifier, to_compact, to_formatted
from .response_decoder import ResponseDecoder
from .transport_pool import TransportPool

__all__ = [
    'Artifact',
    'CacheStore',
    'CatalogCoordinator',
    'EventChannel',
    'SearchCompleted',
    'SearchFailed',
    'MetadataLoaded',
    'MetadataFailed',
    'ThumbnailReady',
    'ThumbnailFailed',
    'ModelReady',
    'ModelFailed',
    'AvailabilityChecked',
    'ProductIdentifier',
    'is_valid_identifier',
    'to_compact',
    'to_formatted',
    'ResponseDecoder',
    'TransportPool',
]
