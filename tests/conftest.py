"""Shared fixtures for codify tests."""
import pytest

from codify_core.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; reset around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def write_file(tmp_path):
    """Create a file under tmp_path (parents included) and return its path."""
    def _write(relative: str, content, root=None):
        path = (root or tmp_path) / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path
    return _write
