"""Pytest configuration and fixtures."""

import logging
from pathlib import Path

import pytest

from screenlex.config import ScreenlexSettings, reset_settings, set_settings

# Import CLI fixtures to make them available globally
from tests.cli_fixtures import clean_runner, cli_invoke  # noqa: F401

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "fountain"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test",
    )
    config.addinivalue_line(
        "markers",
        "slow: mark test as slow running (may need extended timeout)",
    )
    config.addinivalue_line(
        "markers",
        "unit: mark test as unit test",
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test with default settings, untouched by user config files."""
    for name in (
        "SCREENLEX_CONFIG",
        "SCREENLEX_DEBUG",
        "SCREENLEX_LOG_LEVEL",
        "SCREENLEX_LOG_FORMAT",
        "SCREENLEX_LOG_FILE",
        "SCREENLEX_HIGHLIGHT_ENABLED",
        "SCREENLEX_SCENE_SCAN_BUDGET",
        "SCREENLEX_FOUNTAIN_EXTENSIONS",
    ):
        monkeypatch.delenv(name, raising=False)

    reset_settings()
    set_settings(ScreenlexSettings(_env_file=None))

    yield

    reset_settings()


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Restore root logging handlers after each test.

    ``configure_logging`` replaces the root handlers, and a handler created
    inside a CliRunner invocation would keep writing to a closed stream.
    """
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers.copy()

    yield

    for handler in root_logger.handlers.copy():
        root_logger.removeHandler(handler)
        if handler not in original_handlers:
            handler.close()
    root_logger.setLevel(original_level)
    for handler in original_handlers:
        root_logger.addHandler(handler)


@pytest.fixture
def sample_script() -> str:
    """The short screenplay used across tests."""
    return (FIXTURES_DIR / "coffee_shop.fountain").read_text(encoding="utf-8")


@pytest.fixture
def script_file(tmp_path, sample_script) -> Path:
    """A copy of the sample screenplay in a temporary directory.

    Tests must never modify files under ``tests/fixtures`` directly.
    """
    path = tmp_path / "coffee_shop.fountain"
    path.write_text(sample_script, encoding="utf-8")
    return path
