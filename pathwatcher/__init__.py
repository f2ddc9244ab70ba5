"""
PathWatcher: watch a single file or directory for changes.

Wraps the watchdog observer behind a handle that works out whether a path
is a file or a directory and forwards change events to one event handler.
"""

from pathwatcher.errors import InvalidPathError, PathWatcherError
from pathwatcher.events import (ChangeType, ErrorEventArgs, FileSystemEventArgs,
                                NotifyFilters, RenamedEventArgs, WatcherType)
from pathwatcher.factory import create_instance, create_instance_async
from pathwatcher.handlers import (CallbackEventHandler, EventHandler,
                                  LoggingEventHandler)
from pathwatcher.watcher import WatcherHandle

__version__ = "0.1.0"

__all__ = [
    "CallbackEventHandler",
    "ChangeType",
    "ErrorEventArgs",
    "EventHandler",
    "FileSystemEventArgs",
    "InvalidPathError",
    "LoggingEventHandler",
    "NotifyFilters",
    "PathWatcherError",
    "RenamedEventArgs",
    "WatcherHandle",
    "WatcherType",
    "create_instance",
    "create_instance_async",
]
