"""Shared test fixtures for routedoc.

Provides reusable fixtures for isolated config environments, output and
logging state.  The route actions and model
types used throughout the suite live in :mod:`sample_api`.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from routedoc.config import ENV_VARS
from routedoc.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global output and logging state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _reset_routedoc_logger() -> None:
    """Drop handlers the CLI callback installs on the ``routedoc`` logger."""
    logger = logging.getLogger("routedoc")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


# ---------------------------------------------------------------------------
# Isolated environment
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test in an empty working directory with no ROUTEDOC_* variables.

    Returns:
        The temporary working directory.
    """
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path

