"""
Watcher handle module for PathWatcher.

A WatcherHandle observes exactly one file or directory. It works out which
of the two the path refers to, exposes a few derived properties and relays
the events of its watch source to one replaceable event handler.
"""

import logging
import os
import threading
from typing import Optional

from pathwatcher.errors import InvalidPathError
from pathwatcher.events import EventHook, NotifyFilters, WatcherType
from pathwatcher.handlers import EventHandler, ForwardingHandler
from pathwatcher.source import DEFAULT_STOP_TIMEOUT, WatchSource

logger = logging.getLogger(__name__)

DIRECTORY_MIME_TYPE = "application/octet-stream"


def normalize_path(path, param_name: str = "path") -> str:
    """
    Trim a user-supplied path and check that it names an existing entry.

    Args:
        path (str or os.PathLike): The path to check.
        param_name (str): Parameter name reported in the error.

    Returns:
        str: The trimmed path.

    Raises:
        InvalidPathError: If the path is None, blank, or neither an existing
            file nor an existing directory.
    """
    if path is None:
        raise InvalidPathError(path, param_name)
    try:
        trimmed = os.fsdecode(path).strip()
    except (TypeError, AttributeError):
        raise InvalidPathError(path, param_name) from None

    if not trimmed or not (os.path.isfile(trimmed) or os.path.isdir(trimmed)):
        raise InvalidPathError(path, param_name, display_path=trimmed)
    return trimmed


class WatcherHandle:
    """
    Watches a single file or directory and forwards its events.

    Attributes:
        disposed (EventHook): Fired once with ``(handle, None)`` when the
            handle is closed.
    """

    def __init__(
        self,
        path,
        handler: Optional[EventHandler] = None,
        stop_timeout: float = DEFAULT_STOP_TIMEOUT,
    ):
        self._kind = WatcherType.UNKNOWN
        self._handler = handler
        self._lock = threading.RLock()
        self._dispose_lock = threading.Lock()
        self._is_disposed = False
        self.disposed = EventHook("disposed")

        path = normalize_path(path)
        is_file = os.path.isfile(path)
        path = os.path.abspath(path)

        if is_file:
            self._source = WatchSource(
                os.path.dirname(path),
                name_filter=os.path.basename(path),
                notify_filter=NotifyFilters.LAST_WRITE | NotifyFilters.FILE_NAME,
                exact_name=True,
                stop_timeout=stop_timeout,
            )
            self._kind = WatcherType.FILE
        else:
            self._source = WatchSource(
                path,
                notify_filter=NotifyFilters.LAST_WRITE | NotifyFilters.DIRECTORY_NAME,
                stop_timeout=stop_timeout,
            )
            self._kind = WatcherType.DIRECTORY

        self._relay = ForwardingHandler(self)
        logger.debug(f"Created {self._kind.value} watcher for {self.full_path}")

    @property
    def kind(self) -> WatcherType:
        return self._kind

    @property
    def source(self) -> WatchSource:
        """The underlying watch source."""
        return self._source

    @property
    def name(self) -> str:
        if self._kind == WatcherType.FILE:
            return self._source.name_filter
        return os.path.basename(self._source.path)

    @property
    def full_path(self) -> str:
        if self._kind == WatcherType.FILE:
            return os.path.join(self._source.path, self.name)
        return self._source.path

    @property
    def mime_type(self) -> str:
        """File extension for files, a generic binary type for directories."""
        if self._kind == WatcherType.DIRECTORY:
            return DIRECTORY_MIME_TYPE
        return os.path.splitext(self.name)[1]

    @property
    def is_watching(self) -> bool:
        return self._source.enable_raising_events

    @property
    def is_disposed(self) -> bool:
        return self._is_disposed

    @property
    def handler(self) -> Optional[EventHandler]:
        return self._handler

    @handler.setter
    def handler(self, value: Optional[EventHandler]):
        self.set_handler(value)

    def set_handler(self, handler: Optional[EventHandler]) -> None:
        """
        Bind a new event handler.

        When the handle is watching, the subscription is stopped before the
        swap and started again afterwards under the handle's lock. The old
        observer is shut down after the lock is released; anything it still
        emits is dropped, so the old handler gets nothing after the swap.
        """
        with self._lock:
            if self._is_disposed:
                logger.debug(f"Ignoring handler change on closed watcher {self.full_path}")
                return
            was_watching = self._source.enable_raising_events
            observer = self._stop() if was_watching else None
            self._handler = handler
            if was_watching:
                self._start()
        self._source.shutdown(observer)

    def start_watching(self) -> None:
        """Start forwarding events. Does nothing if already watching or closed."""
        with self._lock:
            if self._is_disposed:
                logger.debug(f"Ignoring start on closed watcher {self.full_path}")
                return
            self._start()

    def stop_watching(self) -> None:
        """Stop forwarding events. Does nothing if not watching or closed."""
        with self._lock:
            if self._is_disposed:
                return
            observer = self._stop()
        self._source.shutdown(observer)

    def _start(self):
        source = self._source
        if source.enable_raising_events:
            return

        source.changed.subscribe(self._relay.on_changed)
        source.created.subscribe(self._relay.on_created)
        source.deleted.subscribe(self._relay.on_deleted)
        source.error.subscribe(self._relay.on_error)
        source.renamed.subscribe(self._relay.on_renamed)

        source.enable_raising_events = True
        if not source.enable_raising_events:
            # The failure has already been delivered as an error event.
            self._unsubscribe()
            return
        logger.info(f"Started watching {self.full_path}")

    def _stop(self):
        # Callers pass the returned observer to source.shutdown() only after
        # releasing the handle lock.
        observer = self._source.detach()
        self._unsubscribe()
        if observer is not None:
            logger.info(f"Stopped watching {self.full_path}")
        return observer

    def _unsubscribe(self):
        source = self._source
        source.changed.unsubscribe(self._relay.on_changed)
        source.created.unsubscribe(self._relay.on_created)
        source.deleted.unsubscribe(self._relay.on_deleted)
        source.error.unsubscribe(self._relay.on_error)
        source.renamed.unsubscribe(self._relay.on_renamed)

    def close(self) -> None:
        """
        Stop watching, drop the handler and notify ``disposed`` subscribers.

        Only the first call has any effect.
        """
        with self._dispose_lock:
            if self._is_disposed:
                return
            self._is_disposed = True

        with self._lock:
            observer = self._stop()
            self._handler = None
        self._source.shutdown(observer)
        logger.debug(f"Closed watcher for {self.full_path}")
        self.disposed.fire(self, None)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return (
            f"WatcherHandle(kind={self._kind.value}, full_path={self.full_path!r}, "
            f"watching={self.is_watching})"
        )
