"""
Tests for creating watcher handles through the factory functions.
"""

import asyncio
import os

import pytest

from pathwatcher import factory
from pathwatcher.errors import InvalidPathError
from pathwatcher.events import WatcherType
from pathwatcher.handlers import EventHandler
from pathwatcher.watcher import DIRECTORY_MIME_TYPE, WatcherHandle


@pytest.fixture
def temp_file(tmp_path):
    """A scratch file inside a scratch directory."""
    path = tmp_path / "report.txt"
    path.write_text("Initial content")
    return path


def test_create_instance_for_file(temp_file):
    watcher = factory.create_instance(str(temp_file))

    assert isinstance(watcher, WatcherHandle)
    assert watcher.kind == WatcherType.FILE
    assert watcher.full_path == os.path.abspath(str(temp_file))
    assert watcher.name == "report.txt"
    assert watcher.mime_type == ".txt"
    assert not watcher.is_watching, "A new watcher should not listen for changes by default."


def test_create_instance_for_directory(tmp_path):
    watcher = factory.create_instance(str(tmp_path))

    assert watcher.kind == WatcherType.DIRECTORY
    assert watcher.full_path == os.path.abspath(str(tmp_path))
    assert watcher.name == tmp_path.name
    assert watcher.mime_type == DIRECTORY_MIME_TYPE
    assert not watcher.is_watching


def test_create_instance_trims_whitespace(temp_file):
    watcher = factory.create_instance(f"  {temp_file}\t\n")
    assert watcher.kind == WatcherType.FILE
    assert watcher.full_path == os.path.abspath(str(temp_file))


def test_create_instance_accepts_path_objects(temp_file):
    watcher = factory.create_instance(temp_file)
    assert watcher.name == temp_file.name


def test_directory_with_trailing_separator(tmp_path):
    watcher = factory.create_instance(str(tmp_path) + os.sep)
    assert watcher.name == tmp_path.name
    assert watcher.full_path == os.path.abspath(str(tmp_path))


def test_file_without_extension_has_empty_mime_type(tmp_path):
    path = tmp_path / "Makefile"
    path.write_text("all:\n")
    watcher = factory.create_instance(str(path))
    assert watcher.mime_type == ""


def test_create_instance_binds_handler(temp_file):
    handler = EventHandler()
    watcher = factory.create_instance(str(temp_file), handler)
    assert watcher.handler is handler


@pytest.mark.parametrize(
    "path",
    [
        "",
        None,
        "   ",
        "This is not a valid path",
        "Ínv@l1d;Cháràçter?",
        "*.*",
        "bad\0path",
    ],
)
def test_create_instance_rejects_invalid_paths(path):
    with pytest.raises(InvalidPathError) as exc_info:
        factory.create_instance(path)
    assert exc_info.value.param_name == "path"
    assert exc_info.value.path == path


def test_invalid_path_error_is_value_error(tmp_path):
    missing = str(tmp_path / "missing.txt")
    with pytest.raises(ValueError) as exc_info:
        factory.create_instance(missing)
    assert missing in str(exc_info.value)


def test_invalid_path_message_shows_trimmed_path(tmp_path):
    missing = str(tmp_path / "missing.txt")
    padded = f"  {missing}\t\n"
    with pytest.raises(InvalidPathError) as exc_info:
        factory.create_instance(padded)
    assert f"'{missing}'" in str(exc_info.value)
    assert exc_info.value.path == padded


def test_create_instance_async(temp_file):
    watcher = asyncio.run(factory.create_instance_async(str(temp_file)))
    assert watcher.kind == WatcherType.FILE
    assert watcher.full_path == os.path.abspath(str(temp_file))
    assert not watcher.is_watching


def test_create_instance_async_raises_invalid_path(tmp_path):
    with pytest.raises(InvalidPathError):
        asyncio.run(factory.create_instance_async(str(tmp_path / "nope")))


def test_create_instance_passes_options(temp_file):
    watcher = factory.create_instance(str(temp_file), stop_timeout=1.5)
    assert watcher.source.stop_timeout == 1.5
