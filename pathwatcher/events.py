"""
Event types shared by the watch source, the watcher handle and event handlers.

Contains:
- WatcherType: whether a handle targets a file or a directory
- NotifyFilters: the change attributes that raise events
- ChangeType and the event argument records passed to handlers
- EventHook: a thread-safe list of subscribers
"""

import enum
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional


class WatcherType(enum.Enum):
    """Kind of path a watcher handle observes."""

    UNKNOWN = "unknown"
    FILE = "file"
    DIRECTORY = "directory"


class NotifyFilters(enum.Flag):
    """Change attributes that cause the watch source to raise events."""

    FILE_NAME = enum.auto()
    DIRECTORY_NAME = enum.auto()
    LAST_WRITE = enum.auto()


class ChangeType(enum.Enum):
    CHANGED = "changed"
    CREATED = "created"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass(frozen=True)
class FileSystemEventArgs:
    """
    Arguments of a changed, created or deleted event.

    Attributes:
        change_type: What happened to the entry.
        directory: The watch directory the event was raised for.
        name: Base name of the affected entry.
        full_path: Absolute path of the affected entry.
        is_directory: Whether the affected entry is a directory.
    """

    change_type: ChangeType
    directory: str
    name: str
    full_path: str
    is_directory: bool = False


@dataclass(frozen=True)
class RenamedEventArgs(FileSystemEventArgs):
    """Arguments of a renamed event; adds the entry's previous name and path."""

    old_name: str = ""
    old_full_path: str = ""


@dataclass(frozen=True)
class ErrorEventArgs:
    """Arguments of an error event raised by the watch source."""

    exception: BaseException

    def get_exception(self) -> BaseException:
        return self.exception


class EventHook:
    """
    A named list of subscribers called with ``(sender, args)``.

    Subscribing the same callback twice registers it twice; unsubscribing
    removes a single registration, and does nothing for unknown callbacks.
    """

    def __init__(self, name: str):
        self.name = name
        self._callbacks: List[Callable] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Callable) -> None:
        with self._lock:
            self._callbacks.append(callback)

    def unsubscribe(self, callback: Callable) -> None:
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

    def fire(self, sender, args: Optional[object] = None) -> None:
        """
        Call every subscriber in registration order.

        The subscriber list is copied first so callbacks may subscribe or
        unsubscribe while the hook fires.
        """
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(sender, args)

    def __len__(self):
        with self._lock:
            return len(self._callbacks)

    def __repr__(self):
        return f"EventHook({self.name!r}, subscribers={len(self)})"
