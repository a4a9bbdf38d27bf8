"""Shared test fixtures for carafe."""
import io

import pytest

from carafe.stream import Stream, StreamFactory


@pytest.fixture
def factory():
    return StreamFactory()


@pytest.fixture
def make_stream():
    """Return a callable building a ``Stream`` over in-memory bytes."""
    def _make(data=b""):
        if isinstance(data, str):
            data = data.encode("utf-8")
        return Stream(io.BytesIO(data))
    return _make


@pytest.fixture
def upload_path(tmp_path):
    """A temporary file standing in for an upload spooled to disk."""
    path = tmp_path / "upload.tmp"
    path.write_bytes(b"uploaded payload")
    return path


@pytest.fixture
def debug_config():
    """Snapshot ``carafe.config`` and restore it after the test."""
    from carafe.config import config
    saved = dict(config)
    yield config
    config.clear()
    config.update(saved)
