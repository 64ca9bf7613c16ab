# Path: ikea_api/engine/cache_store.py
"""
Cache Store

Persistent, on-disk artifact storage keyed by product identifier.

Layout:
    <cache_dir>/<compact id>/metadata.json
    <cache_dir>/<compact id>/thumbnail.jpg
    <cache_dir>/<compact id>/model.glb
    <cache_dir>/<compact id>/exists.json

Entries are written once per successful fetch and never expire; removing
files by hand is the only way to invalidate them. Writes go to a temporary
sibling first and are moved into place, so readers never see a partial file.
The cache root is read from configuration on every call.
"""

import os
import stat
import uuid
from enum import Enum
from pathlib import Path
from typing import Optional

from ikea_api.core.config_loader import ConfigLoader
from ikea_api.core.logger import get_logger
from ikea_api.engine.errors import StorageError
from ikea_api.constants import (
    ARTIFACT_METADATA,
    ARTIFACT_THUMBNAIL,
    ARTIFACT_MODEL,
    ARTIFACT_EXISTS,
    TEMP_SUFFIX,
    LOG_INPUT,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


class Artifact(str, Enum):
    """Named artifacts cached per identifier."""
    METADATA = ARTIFACT_METADATA
    THUMBNAIL = ARTIFACT_THUMBNAIL
    MODEL = ARTIFACT_MODEL
    EXISTS = ARTIFACT_EXISTS


class CacheStore:
    """
    Keyed binary blob storage on the local filesystem.

    Example:
        cache = CacheStore()
        if not cache.exists('00346735', Artifact.METADATA):
            path = cache.write('00346735', Artifact.METADATA, body)
        data = cache.read('00346735', Artifact.METADATA)
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize cache store.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()

    @property
    def root(self) -> Path:
        """Current cache root directory."""
        return Path(self.config.get('cache_dir'))

    def namespace(self, identifier: str) -> Path:
        """Directory holding every artifact of one identifier."""
        return self.root / identifier

    def path_for(self, identifier: str, artifact: Artifact) -> Path:
        """Storage path of one artifact."""
        return self.namespace(identifier) / Artifact(artifact).value

    def exists(self, identifier: str, artifact: Artifact) -> bool:
        """
        Check whether an artifact is cached. Never fetches.

        Raises:
            StorageError: If the namespace cannot be inspected
        """
        path = self.path_for(identifier, artifact)
        try:
            return stat.S_ISREG(path.stat().st_mode)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as e:
            raise StorageError(f"Cannot access {path}: {e}", identifier) from e

    def write(self, identifier: str, artifact: Artifact, data: bytes) -> Path:
        """
        Store artifact bytes.

        Args:
            identifier: Compact identifier
            artifact: Artifact name
            data: Raw bytes

        Returns:
            Storage path

        Raises:
            StorageError: If the directory or file cannot be written
        """
        artifact = Artifact(artifact)
        target = self.path_for(identifier, artifact)
        logger.debug(f"{LOG_INPUT} Caching {len(data)} bytes to {target}")

        try:
            # exist_ok: a namespace created by another flow is not an error
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Cannot create cache directory {target.parent}: {e}",
                identifier
            ) from e

        temp_path = target.with_name(f"{target.name}.{uuid.uuid4().hex}{TEMP_SUFFIX}")
        try:
            with open(temp_path, 'wb') as f:
                f.write(data)
            os.replace(temp_path, target)
        except OSError as e:
            self._discard(temp_path)
            raise StorageError(f"Cannot write {target}: {e}", identifier) from e

        logger.debug(f"{LOG_OUTPUT} Cached {artifact.value} for {identifier}")
        return target

    def read(self, identifier: str, artifact: Artifact) -> Optional[bytes]:
        """
        Read artifact bytes.

        Returns:
            Bytes, or None when the artifact is not cached

        Raises:
            StorageError: If the file exists but cannot be read
        """
        path = self.path_for(identifier, artifact)

        try:
            return path.read_bytes()
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}", identifier) from e

    def _discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove temporary file {path}: {e}")


__all__ = ['Artifact', 'CacheStore']
