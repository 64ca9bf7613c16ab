# Path: ikea_api/tools/__init__.py
"""Tools Module - Helpers for cached artifacts"""

from .draco import (
    DracoError,
    DracoToolMissingError,
    DracoDecompressionError,
    decompress_draco,
)

__all__ = [
    'DracoError',
    'DracoToolMissingError',
    'DracoDecompressionError',
    'decompress_draco',
]
