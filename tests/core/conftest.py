"""
Shared fixtures for core module tests.

This module provides reusable pytest fixtures for testing core functionality:
an empty workspace, test doubles for readers, progress displays and git.
The kit repository fixtures live in the top-level conftest.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from ui.progress import NoOpProgressDisplay


@pytest.fixture
def workspace(tmp_path):
    """Empty directory new projects are created in."""
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def progress_display():
    """Progress display for testing."""
    return NoOpProgressDisplay()


@pytest.fixture
def tracking_progress_display():
    """Progress display that records calls as (method_name, *args) tuples."""
    mock = MagicMock()
    mock.calls = []

    def make_tracker(method_name):
        def tracker(*args, **kwargs):
            mock.calls.append((method_name, *args, *kwargs.values()))

        return tracker

    mock.on_start = make_tracker("start")
    mock.on_update = make_tracker("update")
    mock.on_complete = make_tracker("complete")
    mock.__enter__ = MagicMock(return_value=mock)
    mock.__exit__ = MagicMock(return_value=None)
    return mock


@pytest.fixture
def no_git():
    """Git client double reporting that git is not installed."""
    client = MagicMock()
    client.is_available.return_value = False
    return client


@pytest.fixture
def mock_file_reader_factory():
    """Factory for creating MockFileReader instances with file content mappings."""

    def _factory(file_contents: dict[str, str]):
        from core.file_io import MockFileReader

        def read_file_side_effect(path: Path) -> str:
            return file_contents.get(path.name, "")

        return MockFileReader(read_file_fn=read_file_side_effect)

    return _factory
