"""
Factory functions for creating watcher handles.
"""

import asyncio
import functools
import logging

from pathwatcher.watcher import WatcherHandle

logger = logging.getLogger(__name__)


def create_instance(path, handler=None, **options) -> WatcherHandle:
    """
    Create a watcher handle for an existing file or directory.

    Args:
        path (str or os.PathLike): File or directory to watch. Surrounding
            whitespace is ignored.
        handler (EventHandler, optional): Handler to bind right away.
        **options: Extra keyword arguments for WatcherHandle, such as
            ``stop_timeout``.

    Returns:
        WatcherHandle: A handle that is not watching yet.

    Raises:
        InvalidPathError: If the path is not an existing file or directory.
    """
    watcher = WatcherHandle(path, handler, **options)
    logger.debug(f"Created watcher instance: {watcher!r}")
    return watcher


async def create_instance_async(path, handler=None, **options) -> WatcherHandle:
    """
    Create a watcher handle without blocking the event loop.

    The path checks run on the loop's default executor; the handle is ready
    once the coroutine completes.

    Raises:
        InvalidPathError: If the path is not an existing file or directory.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None, functools.partial(create_instance, path, handler, **options)
    )
