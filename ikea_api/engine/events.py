# Path: ikea_api/engine/events.py
"""
Catalog Events

Typed terminal events for each flow and the channel that delivers them.

Every flow ends with exactly one event: a success variant carrying the
payload or a failure variant carrying the classified error. The
availability check has no failure variant; a failed check reports
exists=False.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from ikea_api.core.logger import get_logger
from ikea_api.engine.errors import CatalogError
from ikea_api.engine.result import SearchResultItem

logger = get_logger(__name__, 'engine')


@dataclass(frozen=True)
class CatalogEvent:
    """Base class for all flow events."""

    @property
    def succeeded(self) -> bool:
        return not isinstance(self, FailureEvent)


@dataclass(frozen=True)
class FailureEvent(CatalogEvent):
    """Base class for failure events."""


@dataclass(frozen=True)
class SearchCompleted(CatalogEvent):
    items: list[SearchResultItem] = field(default_factory=list)
    dropped: int = 0


@dataclass(frozen=True)
class SearchFailed(FailureEvent):
    message: str = ''
    error: Optional[CatalogError] = None


@dataclass(frozen=True)
class MetadataLoaded(CatalogEvent):
    identifier: str = ''
    document: Any = None
    from_cache: bool = False


@dataclass(frozen=True)
class MetadataFailed(FailureEvent):
    identifier: str = ''
    message: str = ''
    error: Optional[CatalogError] = None


@dataclass(frozen=True)
class ThumbnailReady(CatalogEvent):
    identifier: str = ''
    path: Optional[Path] = None
    from_cache: bool = False


@dataclass(frozen=True)
class ThumbnailFailed(FailureEvent):
    identifier: str = ''
    message: str = ''
    error: Optional[CatalogError] = None


@dataclass(frozen=True)
class ModelReady(CatalogEvent):
    identifier: str = ''
    path: Optional[Path] = None
    from_cache: bool = False


@dataclass(frozen=True)
class ModelFailed(FailureEvent):
    identifier: str = ''
    message: str = ''
    error: Optional[CatalogError] = None


@dataclass(frozen=True)
class AvailabilityChecked(CatalogEvent):
    identifier: str = ''
    exists: bool = False


Listener = Callable[[CatalogEvent], Any]


class EventChannel:
    """
    Synchronous fan-out of flow events to listeners.

    A listener that raises is logged; delivery to the remaining listeners
    continues and the emitting flow is unaffected.

    Example:
        channel = EventChannel()
        channel.subscribe(ThumbnailReady, lambda e: print(e.path))
        channel.emit(ThumbnailReady(identifier='00346735', path=path))
    """

    def __init__(self):
        self._listeners: dict[type, list[Listener]] = defaultdict(list)
        self._global_listeners: list[Listener] = []

    def subscribe(self, event_type: type, listener: Listener) -> None:
        """Listen for one event type (subclasses included)."""
        self._listeners[event_type].append(listener)

    def subscribe_all(self, listener: Listener) -> None:
        """Listen for every event."""
        self._global_listeners.append(listener)

    def unsubscribe(self, event_type: Optional[type], listener: Listener) -> None:
        """
        Remove a listener.

        Pass event_type=None to remove a subscribe_all() listener.
        Unknown listeners are ignored.
        """
        listeners = self._global_listeners if event_type is None else self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def emit(self, event: CatalogEvent) -> int:
        """
        Deliver an event.

        Returns:
            Number of listeners that handled it without raising
        """
        targets = []
        for event_type, listeners in self._listeners.items():
            if isinstance(event, event_type):
                targets.extend(listeners)
        targets.extend(self._global_listeners)

        delivered = 0
        for listener in targets:
            try:
                listener(event)
                delivered += 1
            except Exception as e:
                logger.error(
                    f"Listener {listener!r} failed on {type(event).__name__}: {e}",
                    exc_info=True
                )

        return delivered


__all__ = [
    'CatalogEvent',
    'FailureEvent',
    'SearchCompleted',
    'SearchFailed',
    'MetadataLoaded',
    'MetadataFailed',
    'ThumbnailReady',
    'ThumbnailFailed',
    'ModelReady',
    'ModelFailed',
    'AvailabilityChecked',
    'EventChannel',
]
