# Path: ikea_api/engine/coordinator.py
"""
Catalog Coordinator

Main workflow orchestrator for catalog operations.
Coordinates: validate -> cache check -> network -> decode -> cache write -> emit.

Flows:
- search: query -> list of SearchResultItem
- get_metadata: identifier -> product document
- get_thumbnail: identifier + image URL -> cached image path
- get_model: identifier -> existence check -> model metadata -> GLB download
- check_availability: identifier -> exists flag

Architecture:
- Cache-first: a cached artifact short-circuits every network call
- One transport slot per outbound call, no queuing when the pool is full
- Every flow ends with exactly one event, both emitted and returned
- No retries; the caller decides whether to try again
- IPO logging throughout
"""

import asyncio
from typing import Optional, Union

from ikea_api.core.logger import get_logger
from ikea_api.core.config_loader import ConfigLoader
from ikea_api.core.data_paths import DataPathsManager
from ikea_api.engine.cache_store import Artifact, CacheStore
from ikea_api.engine.errors import (
    CatalogError,
    CapacityError,
    DecodeError,
    InputValidationError,
    IntegrityError,
    ModelUnavailableError,
    StorageError,
    StructuralError,
)
from ikea_api.engine.events import (
    AvailabilityChecked,
    CatalogEvent,
    EventChannel,
    MetadataFailed,
    MetadataLoaded,
    ModelFailed,
    ModelReady,
    SearchCompleted,
    SearchFailed,
    ThumbnailFailed,
    ThumbnailReady,
)
from ikea_api.engine.identifier import ProductIdentifier
from ikea_api.engine.response_decoder import ResponseDecoder
from ikea_api.engine.response_parser import (
    parse_availability,
    parse_model_url,
    parse_search_response,
)
from ikea_api.engine.transport_pool import TransportPool
from ikea_api.engine.url_builder import CatalogURLBuilder
from ikea_api.engine.url_rewriter import ModelURLRewriter
from ikea_api.engine.validator import Validator
from ikea_api.constants import LOG_INPUT, LOG_PROCESS, LOG_OUTPUT

logger = get_logger(__name__, 'engine')


class CatalogCoordinator:
    """
    Coordinates every catalog flow over one cache and one transport pool.

    Example:
        async with CatalogCoordinator() as catalog:
            catalog.events.subscribe(ModelReady, on_model)
            event = await catalog.get_model('003.467.35')
            if event.succeeded:
                print(event.path)
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        handler=None,
        events: Optional[EventChannel] = None
    ):
        """
        Initialize catalog coordinator.

        Args:
            config: Optional ConfigLoader instance
            handler: Optional host transport (defaults to HTTPHandler)
            events: Optional EventChannel shared with listeners
        """
        self.config = config if config else ConfigLoader()

        self.path_manager = DataPathsManager(self.config)
        self.path_manager.ensure_all_directories()

        self.cache = CacheStore(self.config)
        self.pool = TransportPool(self.config, handler=handler)
        self.decoder = ResponseDecoder()
        self.urls = CatalogURLBuilder(self.config)
        self.rewriter = ModelURLRewriter()
        self.validator = Validator(self.config)
        self.events = events if events is not None else EventChannel()

        self._tasks: set[asyncio.Task] = set()

    # ========================================================================
    # SEARCH
    # ========================================================================

    async def search(self, query: str) -> Union[SearchCompleted, SearchFailed]:
        """
        Search the catalog.

        An empty hit list is a success.

        Args:
            query: Free text or an identifier

        Returns:
            SearchCompleted or SearchFailed (also emitted)
        """
        logger.info(f"{LOG_INPUT} Search: {query!r}")

        try:
            if not query or not query.strip():
                raise InputValidationError("empty query")
            query = query.strip()

            body = await self._fetch(
                self.urls.search_url(),
                self.urls.search_params(query)
            )
            document = self.decoder.decode(body)
            items, dropped = parse_search_response(document)

            logger.info(f"{LOG_OUTPUT} Search {query!r}: {len(items)} items")
            event = SearchCompleted(items=items, dropped=dropped)

        except CatalogError as e:
            logger.warning(f"{LOG_OUTPUT} Search {query!r} failed: {e.message}")
            event = SearchFailed(message=e.message, error=e)

        return self._emit(event)

    # ========================================================================
    # METADATA
    # ========================================================================

    async def get_metadata(self, identifier: str) -> Union[MetadataLoaded, MetadataFailed]:
        """
        Get the product document, from cache when possible.

        A cached document that no longer decodes is refetched. Failing to
        cache a fetched document is logged only.

        Returns:
            MetadataLoaded or MetadataFailed (also emitted)
        """
        logger.info(f"{LOG_INPUT} Metadata: {identifier!r}")
        key = str(identifier)

        try:
            item = self._parse_identifier(identifier)
            key = item.compact

            document = self._read_cached_document(item, Artifact.METADATA)
            if document is not None:
                logger.info(f"{LOG_OUTPUT} Metadata {key} served from cache")
                return self._emit(MetadataLoaded(identifier=key, document=document, from_cache=True))

            body = await self._fetch(self.urls.metadata_url(item), identifier=key)

            try:
                document = self.decoder.decode(body, identifier=key)
            except DecodeError as e:
                raise DecodeError(f"invalid response: {e.message}", e.position, key) from e

            try:
                self.cache.write(key, Artifact.METADATA, body)
            except StorageError as e:
                logger.warning(f"{LOG_PROCESS} Metadata {key} not cached: {e.message}")

            logger.info(f"{LOG_OUTPUT} Metadata {key} fetched")
            event = MetadataLoaded(identifier=key, document=document, from_cache=False)

        except CatalogError as e:
            logger.warning(f"{LOG_OUTPUT} Metadata {key} failed: {e.message}")
            event = MetadataFailed(identifier=key, message=e.message, error=e)

        return self._emit(event)

    # ========================================================================
    # THUMBNAIL
    # ========================================================================

    async def get_thumbnail(
        self,
        identifier: str,
        source_url: str
    ) -> Union[ThumbnailReady, ThumbnailFailed]:
        """
        Download a product image into the cache.

        Args:
            identifier: Product identifier
            source_url: Image URL (typically SearchResultItem.image_url)

        Returns:
            ThumbnailReady with the cached path, or ThumbnailFailed (also emitted)
        """
        logger.info(f"{LOG_INPUT} Thumbnail: {identifier!r} from {source_url!r}")
        key = str(identifier)

        try:
            item = self._parse_identifier(identifier)
            key = item.compact

            if not source_url or not source_url.strip():
                raise InputValidationError("empty source url", key)

            if self.cache.exists(key, Artifact.THUMBNAIL):
                path = self.cache.path_for(key, Artifact.THUMBNAIL)
                logger.info(f"{LOG_OUTPUT} Thumbnail {key} served from cache")
                return self._emit(ThumbnailReady(identifier=key, path=path, from_cache=True))

            body = await self._fetch(source_url.strip(), identifier=key)

            validation = self.validator.validate_thumbnail(body)
            if not validation.valid:
                raise IntegrityError(f"likely invalid image: {validation.summary}", key)

            path = self._store(key, Artifact.THUMBNAIL, body)

            logger.info(f"{LOG_OUTPUT} Thumbnail {key} cached at {path}")
            event = ThumbnailReady(identifier=key, path=path, from_cache=False)

        except CatalogError as e:
            logger.warning(f"{LOG_OUTPUT} Thumbnail {key} failed: {e.message}")
            event = ThumbnailFailed(identifier=key, message=e.message, error=e)

        return self._emit(event)

    # ========================================================================
    # MODEL
    # ========================================================================

    async def get_model(self, identifier: str) -> Union[ModelReady, ModelFailed]:
        """
        Download the product's 3D model into the cache.

        Stages run strictly in order and the first failure ends the flow:
        1. Existence check (cached flag reused)
        2. Model metadata, Draco URL rewritten to plain GLB
        3. Binary download, size and magic-number validation

        Returns:
            ModelReady with the cached path, or ModelFailed (also emitted)
        """
        logger.info(f"{LOG_INPUT} Model: {identifier!r}")
        key = str(identifier)

        try:
            item = self._parse_identifier(identifier)
            key = item.compact

            if self.cache.exists(key, Artifact.MODEL):
                path = self.cache.path_for(key, Artifact.MODEL)
                logger.info(f"{LOG_OUTPUT} Model {key} served from cache")
                return self._emit(ModelReady(identifier=key, path=path, from_cache=True))

            # Stage 1: existence
            try:
                exists = await self._resolve_availability(item)
            except CatalogError:
                self._emit(AvailabilityChecked(identifier=key, exists=False))
                raise
            self._emit(AvailabilityChecked(identifier=key, exists=exists))

            if not exists:
                raise ModelUnavailableError("no model available for this item", key)

            # Stage 2: model metadata
            body = await self._fetch(self.urls.model_url(item), identifier=key)
            document = self.decoder.decode(body, identifier=key)
            model_url = self.rewriter.rewrite(parse_model_url(document))

            if not self.validator.validate_url(model_url):
                raise StructuralError(f"invalid model URL: {model_url!r}", key)

            # Stage 3: binary
            logger.info(f"{LOG_PROCESS} Downloading model {key} from {model_url}")
            binary = await self._fetch(model_url, identifier=key)

            validation = self.validator.validate_model(binary)
            if not validation.valid:
                raise IntegrityError(f"invalid or corrupted model file: {validation.summary}", key)

            path = self._store(key, Artifact.MODEL, binary)

            logger.info(f"{LOG_OUTPUT} Model {key} cached at {path}")
            event = ModelReady(identifier=key, path=path, from_cache=False)

        except CatalogError as e:
            logger.warning(f"{LOG_OUTPUT} Model {key} failed: {e.message}")
            event = ModelFailed(identifier=key, message=e.message, error=e)

        return self._emit(event)

    # ========================================================================
    # AVAILABILITY
    # ========================================================================

    async def check_availability(self, identifier: str) -> AvailabilityChecked:
        """
        Check whether the catalog has a 3D model for an item.

        Never fails: any error is logged and reported as exists=False.
        """
        logger.info(f"{LOG_INPUT} Availability: {identifier!r}")
        key = str(identifier)

        try:
            item = self._parse_identifier(identifier)
            key = item.compact
            exists = await self._resolve_availability(item)
        except CatalogError as e:
            logger.warning(f"{LOG_OUTPUT} Availability {key} unknown: {e.message}")
            exists = False

        logger.info(f"{LOG_OUTPUT} Availability {key}: {exists}")
        return self._emit(AvailabilityChecked(identifier=key, exists=exists))

    async def _resolve_availability(self, item: ProductIdentifier) -> bool:
        """
        Existence sub-flow.

        A cached flag that still parses is reused; otherwise the existence
        endpoint is called and its raw response cached.

        Raises:
            CatalogError: Transport, decode or structure failure
        """
        key = item.compact

        cached = self._read_cached_document(item, Artifact.EXISTS)
        if cached is not None:
            try:
                exists = parse_availability(cached)
                logger.debug(f"{LOG_PROCESS} Existence flag for {key} from cache: {exists}")
                return exists
            except StructuralError as e:
                logger.warning(f"{LOG_PROCESS} Cached existence flag for {key} unusable: {e.message}")

        body = await self._fetch(self.urls.exists_url(item), identifier=key)
        document = self.decoder.decode(body, identifier=key)

        try:
            exists = parse_availability(document)
        except StructuralError as e:
            raise StructuralError(e.message, key) from e

        try:
            self.cache.write(key, Artifact.EXISTS, body)
        except StorageError as e:
            logger.warning(f"{LOG_PROCESS} Existence flag for {key} not cached: {e.message}")

        return exists

    # ========================================================================
    # SCHEDULING
    # ========================================================================

    def schedule(self, coro) -> asyncio.Task:
        """
        Run a flow in the background.

        The coordinator keeps a reference until the task finishes; results
        arrive through the event channel.

        Example:
            catalog.schedule(catalog.get_thumbnail(item.identifier, item.image_url))
        """
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(f"{LOG_OUTPUT} Scheduled flow {task.get_name()} cancelled")
            return
        error = task.exception()
        if error is not None:
            logger.error(
                f"{LOG_OUTPUT} Scheduled flow {task.get_name()} raised: {error!r}",
                exc_info=(type(error), error, error.__traceback__)
            )

    @property
    def pending(self) -> int:
        """Number of scheduled flows still running."""
        return len(self._tasks)

    async def close(self) -> None:
        """Wait for scheduled flows, then close the transport."""
        if self._tasks:
            results = await asyncio.gather(*self._tasks, return_exceptions=True)
            failed = sum(1 for result in results if isinstance(result, BaseException))
            if failed:
                logger.error(f"{LOG_OUTPUT} {failed} of {len(results)} scheduled flows did not finish")
        await self.pool.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _parse_identifier(self, identifier: str) -> ProductIdentifier:
        try:
            return ProductIdentifier.parse(identifier)
        except InputValidationError as e:
            raise InputValidationError("invalid identifier", str(identifier)) from e

    async def _fetch(
        self,
        url: str,
        query_params: Optional[dict] = None,
        identifier: Optional[str] = None
    ) -> bytes:
        """
        One outbound GET through the pool.

        Raises:
            CapacityError: No idle transport slot
            TransportError, HttpStatusError: Call failed
        """
        slot = self.pool.acquire()
        if slot is None:
            raise CapacityError(
                f"transport pool exhausted ({self.pool.size} requests in flight)",
                identifier
            )

        result = await self.pool.execute(slot, url, query_params)
        return result.raise_for_error(identifier)

    def _read_cached_document(self, item: ProductIdentifier, artifact: Artifact):
        """Decode a cached JSON artifact; None on miss or when unreadable."""
        key = item.compact
        try:
            data = self.cache.read(key, artifact)
            if data is None:
                return None
            return self.decoder.decode(data, identifier=key)
        except (DecodeError, StorageError) as e:
            logger.warning(f"{LOG_PROCESS} Cached {artifact.value} for {key} unusable, refetching: {e.message}")
            return None

    def _store(self, key: str, artifact: Artifact, data: bytes):
        try:
            return self.cache.write(key, artifact, data)
        except StorageError as e:
            raise StorageError(f"cache write failed: {e.message}", key) from e

    def _emit(self, event: CatalogEvent) -> CatalogEvent:
        self.events.emit(event)
        return event


__all__ = ['CatalogCoordinator']
