"""
Watch source module for PathWatcher.

Adapts the watchdog observer to the shape the watcher handle expects:
- a watch directory, an optional name filter and a notification mask
- an enable flag that starts and stops the underlying observer
- five event streams (changed, created, deleted, error, renamed)

Raw watchdog events are translated into the records from pathwatcher.events
and published on the matching stream. Nothing is coalesced or deduplicated.
"""

import fnmatch
import logging
import os
import threading
from typing import Optional, Tuple

from watchdog.events import (EVENT_TYPE_CREATED, EVENT_TYPE_DELETED,
                             EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED,
                             FileSystemEvent, FileSystemEventHandler)
from watchdog.observers import Observer

from pathwatcher.events import (ChangeType, ErrorEventArgs, EventHook,
                                FileSystemEventArgs, NotifyFilters,
                                RenamedEventArgs)

logger = logging.getLogger(__name__)

DEFAULT_NOTIFY_FILTER = (
    NotifyFilters.LAST_WRITE | NotifyFilters.FILE_NAME | NotifyFilters.DIRECTORY_NAME
)
DEFAULT_STOP_TIMEOUT = 5.0


def _decode(path) -> Optional[str]:
    if isinstance(path, bytes):
        return path.decode("utf-8", errors="replace")
    return path or None


def _same_path(a: str, b: str) -> bool:
    return os.path.normcase(os.path.realpath(a)) == os.path.normcase(os.path.realpath(b))


def _matches(name: str, name_filter: Optional[str], exact_name: bool = False) -> bool:
    if not name_filter:
        return True
    if exact_name:
        return os.path.normcase(name) == os.path.normcase(name_filter)
    return fnmatch.fnmatch(name, name_filter)


def translate_event(
    event: FileSystemEvent,
    watch_path: str,
    name_filter: Optional[str] = None,
    notify_filter: NotifyFilters = DEFAULT_NOTIFY_FILTER,
    exact_name: bool = False,
) -> Optional[Tuple[str, object]]:
    """
    Translate a watchdog event into a ``(stream_name, event_args)`` pair.

    Args:
        event: The raw watchdog event.
        watch_path: Absolute path of the watched directory.
        name_filter: Optional fnmatch pattern applied to entry base names.
        notify_filter: Change attributes that should raise events.
        exact_name: Compare base names to name_filter literally instead of
            as a pattern.

    Returns:
        tuple or None: The stream to publish on ("changed", "created",
        "deleted", "renamed" or "error") and its arguments, or None when the
        event is not relevant for this source.
    """
    src_path = _decode(event.src_path)
    dest_path = _decode(getattr(event, "dest_path", None))
    is_directory = event.is_directory

    if src_path and _same_path(src_path, watch_path):
        if event.event_type == EVENT_TYPE_DELETED:
            return "error", ErrorEventArgs(
                FileNotFoundError(f"Watched directory was deleted: {watch_path}")
            )
        return None

    name_mask = NotifyFilters.DIRECTORY_NAME if is_directory else NotifyFilters.FILE_NAME

    def make_args(change_type, path):
        name = os.path.basename(path)
        return FileSystemEventArgs(
            change_type=change_type,
            directory=watch_path,
            name=name,
            full_path=os.path.join(watch_path, name),
            is_directory=is_directory,
        )

    if event.event_type == EVENT_TYPE_MODIFIED:
        if not notify_filter & NotifyFilters.LAST_WRITE:
            return None
        if not _matches(os.path.basename(src_path), name_filter, exact_name):
            return None
        return "changed", make_args(ChangeType.CHANGED, src_path)

    if event.event_type in (EVENT_TYPE_CREATED, EVENT_TYPE_DELETED):
        if not notify_filter & name_mask:
            return None
        if not _matches(os.path.basename(src_path), name_filter, exact_name):
            return None
        if event.event_type == EVENT_TYPE_CREATED:
            return "created", make_args(ChangeType.CREATED, src_path)
        return "deleted", make_args(ChangeType.DELETED, src_path)

    if event.event_type == EVENT_TYPE_MOVED:
        if not notify_filter & name_mask:
            return None
        src_inside = _same_path(os.path.dirname(src_path), watch_path)
        dest_inside = bool(dest_path) and _same_path(os.path.dirname(dest_path), watch_path)

        if src_inside and not dest_inside:
            if not _matches(os.path.basename(src_path), name_filter, exact_name):
                return None
            return "deleted", make_args(ChangeType.DELETED, src_path)
        if dest_inside and not src_inside:
            if not _matches(os.path.basename(dest_path), name_filter, exact_name):
                return None
            return "created", make_args(ChangeType.CREATED, dest_path)
        if not (src_inside and dest_inside):
            return None

        old_name = os.path.basename(src_path)
        new_name = os.path.basename(dest_path)
        if not (_matches(old_name, name_filter, exact_name) or _matches(new_name, name_filter, exact_name)):
            return None
        return "renamed", RenamedEventArgs(
            change_type=ChangeType.RENAMED,
            directory=watch_path,
            name=new_name,
            full_path=os.path.join(watch_path, new_name),
            is_directory=is_directory,
            old_name=old_name,
            old_full_path=os.path.join(watch_path, old_name),
        )

    # opened/closed and any future watchdog event types
    return None


class _Dispatcher(FileSystemEventHandler):
    """Routes watchdog events of one observer run back into the WatchSource."""

    def __init__(self, source: "WatchSource", generation: int):
        super().__init__()
        self.source = source
        self.generation = generation

    def dispatch(self, event):
        self.source.publish_raw(event, self.generation)


class WatchSource:
    """
    A single non-recursive watchdog subscription on one directory.

    Every enable starts a fresh observer tagged with a new generation number.
    Events carrying an older generation are dropped, so an observer that is
    still winding down never publishes after a restart.

    Attributes:
        changed, created, deleted, error, renamed (EventHook): Event streams,
            each fired with ``(source, event_args)``.
    """

    def __init__(
        self,
        path: str,
        name_filter: Optional[str] = None,
        notify_filter: NotifyFilters = DEFAULT_NOTIFY_FILTER,
        stop_timeout: float = DEFAULT_STOP_TIMEOUT,
        exact_name: bool = False,
    ):
        self._path = os.path.abspath(path)
        self._name_filter = name_filter
        self._notify_filter = notify_filter
        self._exact_name = exact_name
        self.stop_timeout = stop_timeout

        self.changed = EventHook("changed")
        self.created = EventHook("created")
        self.deleted = EventHook("deleted")
        self.error = EventHook("error")
        self.renamed = EventHook("renamed")

        self._observer = None
        self._generation = 0
        self._lock = threading.RLock()

    @property
    def path(self) -> str:
        return self._path

    @property
    def name_filter(self) -> Optional[str]:
        return self._name_filter

    @property
    def notify_filter(self) -> NotifyFilters:
        return self._notify_filter

    @property
    def exact_name(self) -> bool:
        return self._exact_name

    @property
    def generation(self) -> int:
        """Number of the current (or last) observer run."""
        return self._generation

    @property
    def enable_raising_events(self) -> bool:
        # Read without the lock: handler code on the observer thread may ask
        # while another thread is stopping that very observer.
        return self._observer is not None

    @enable_raising_events.setter
    def enable_raising_events(self, value: bool):
        if value:
            with self._lock:
                self._start_observer()
        else:
            self.shutdown(self.detach())

    def _start_observer(self):
        if self._observer is not None:
            return

        # A stopped watchdog observer cannot be restarted, so every enable
        # gets a fresh one.
        generation = self._generation + 1
        observer = Observer()
        try:
            observer.schedule(_Dispatcher(self, generation), self._path, recursive=False)
            observer.start()
        except OSError as e:
            logger.error(f"Failed to start watching {self._path}: {e}")
            self._fire("error", ErrorEventArgs(e))
            return

        self._generation = generation
        self._observer = observer
        logger.debug(
            f"Watching {self._path} (filter={self._name_filter}, "
            f"notify={self._notify_filter}, generation={generation})"
        )

    def detach(self):
        """
        Disable event raising without waiting for the observer thread.

        Returns:
            The detached observer (or None when nothing was running). Pass it
            to :meth:`shutdown` once no locks are held.
        """
        with self._lock:
            observer, self._observer = self._observer, None
            if observer is not None:
                self._generation += 1
            return observer

    def shutdown(self, observer) -> None:
        """Stop a detached observer and wait up to ``stop_timeout`` for it."""
        if observer is None:
            return

        observer.stop()
        # Stopping from a subscriber runs on the observer thread itself.
        if threading.current_thread() is not observer:
            observer.join(self.stop_timeout)
            if observer.is_alive():
                logger.warning(
                    f"Observer for {self._path} did not stop within {self.stop_timeout}s"
                )
        logger.debug(f"Stopped watching {self._path}")

    def publish_raw(self, event: FileSystemEvent, generation: int) -> None:
        """
        Translate a raw watchdog event and publish it on its stream.

        Events from an observer run other than the current one are dropped.
        """
        if self._observer is None or generation != self._generation:
            return

        result = translate_event(
            event, self._path, self._name_filter, self._notify_filter, self._exact_name
        )
        if result is None:
            return

        stream, args = result
        self._fire(stream, args)

    def _fire(self, stream: str, args) -> None:
        try:
            getattr(self, stream).fire(self, args)
        except Exception:
            logger.exception(f"Exception in {stream} subscriber for {self._path}")

    def __repr__(self):
        return (
            f"WatchSource(path={self._path!r}, name_filter={self._name_filter!r}, "
            f"enabled={self.enable_raising_events})"
        )
