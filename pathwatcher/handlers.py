"""
Event handler implementations.

EventHandler is the capability every consumer implements: one method per
event kind, each called with ``(sender, event_args)``. The watcher handle
relays into a bound EventHandler through ForwardingHandler.
"""

import logging
from typing import Callable, Optional

from pathwatcher.events import ErrorEventArgs, FileSystemEventArgs, RenamedEventArgs


class EventHandler:
    """
    Base event handler. Every method is a no-op, so subclasses only override
    the events they care about.
    """

    def on_changed(self, sender, event_args: FileSystemEventArgs) -> None:
        pass

    def on_created(self, sender, event_args: FileSystemEventArgs) -> None:
        pass

    def on_deleted(self, sender, event_args: FileSystemEventArgs) -> None:
        pass

    def on_error(self, sender, event_args: ErrorEventArgs) -> None:
        pass

    def on_renamed(self, sender, event_args: RenamedEventArgs) -> None:
        pass


class ForwardingHandler(EventHandler):
    """
    Pass-through adapter subscribed to a watch source on behalf of a watcher
    handle. Each event is relayed unchanged to the handle's currently bound
    handler, with the handle as sender.
    """

    def __init__(self, owner):
        self.owner = owner

    def on_changed(self, sender, event_args):
        handler = self.owner.handler
        if handler is not None:
            handler.on_changed(self.owner, event_args)

    def on_created(self, sender, event_args):
        handler = self.owner.handler
        if handler is not None:
            handler.on_created(self.owner, event_args)

    def on_deleted(self, sender, event_args):
        handler = self.owner.handler
        if handler is not None:
            handler.on_deleted(self.owner, event_args)

    def on_error(self, sender, event_args):
        handler = self.owner.handler
        if handler is not None:
            handler.on_error(self.owner, event_args)

    def on_renamed(self, sender, event_args):
        handler = self.owner.handler
        if handler is not None:
            handler.on_renamed(self.owner, event_args)


class LoggingEventHandler(EventHandler):
    """Logs every event it receives."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger(__name__)
        self.level = level

    def on_changed(self, sender, event_args):
        self.logger.log(self.level, f"Changed: {event_args.full_path}")

    def on_created(self, sender, event_args):
        self.logger.log(self.level, f"Created: {event_args.full_path}")

    def on_deleted(self, sender, event_args):
        self.logger.log(self.level, f"Deleted: {event_args.full_path}")

    def on_error(self, sender, event_args):
        self.logger.error(f"Error watching {sender}: {event_args.exception}")

    def on_renamed(self, sender, event_args):
        self.logger.log(
            self.level,
            f"Renamed: {event_args.old_full_path} -> {event_args.full_path}",
        )


class CallbackEventHandler(EventHandler):
    """
    Adapts a single callable to the handler interface.

    Args:
        callback (callable): Called as ``callback(sender, event_kind, event_args)``
            where event_kind is one of "changed", "created", "deleted", "error"
            or "renamed".
    """

    def __init__(self, callback: Callable):
        self.callback = callback

    def on_changed(self, sender, event_args):
        self.callback(sender, "changed", event_args)

    def on_created(self, sender, event_args):
        self.callback(sender, "created", event_args)

    def on_deleted(self, sender, event_args):
        self.callback(sender, "deleted", event_args)

    def on_error(self, sender, event_args):
        self.callback(sender, "error", event_args)

    def on_renamed(self, sender, event_args):
        self.callback(sender, "renamed", event_args)
