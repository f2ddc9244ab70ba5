"""
Exception types raised by PathWatcher.
"""


class PathWatcherError(Exception):
    """Base class for all PathWatcher errors."""

    pass


class InvalidPathError(PathWatcherError, ValueError):
    """
    Raised when a watcher is created for a path that is neither an existing
    file nor an existing directory.

    Attributes:
        path: The offending value as supplied by the caller.
        param_name (str): Name of the parameter that carried the path.

    The message shows ``display_path`` when given (the trimmed form of the
    input), otherwise ``path``.
    """

    def __init__(self, path, param_name="path", display_path=None):
        self.path = path
        self.param_name = param_name
        shown = path if display_path is None else display_path
        super().__init__(
            f"The supplied path neither is a directory, nor a file: '{shown}' "
            f"(parameter '{param_name}')"
        )
