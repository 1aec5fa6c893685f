"""pytest configuration file."""

import pytest, os, logging

# Qt widgets are exercised without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

pytest_plugins = [
    "pytest_asyncio",
]

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "gui: marks tests that construct Qt widgets"
    )

@pytest.fixture(autouse=True, scope="session")
def _quiet_logs():
    logging.getLogger("asyncio").setLevel(logging.ERROR)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    yield


@pytest.fixture
def list_file(tmp_path):
    """Write a list source to a temp file and return its path as a string."""
    def _write(text: str, name: str = "list.js") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write
