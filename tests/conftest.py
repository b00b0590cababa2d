"""Pytest configuration and fixtures for PiTime tests.

This module provides:
- Pytest hooks and markers
- Settings isolation (tests never read ~/.pitime/settings.toml)
- A subprocess runner for the pi.py CLI

Fixtures:
    cli: CliRunner for invoking pi.py
    clean_env: Environment with all PITIME_* variables removed
"""

import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

from pitime.config import is_slow_tests_enabled

PROJECT_ROOT = Path(__file__).parent.parent
SCRIPT_PATH = PROJECT_ROOT / "pi.py"

PI_50 = "3.14159265358979323846264338327950288419716939937510"


# =============================================================================
# Pytest Hooks
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow (thousands of digits)"
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless explicitly enabled."""
    if not is_slow_tests_enabled():
        skip_slow = pytest.mark.skip(reason="Set RUN_SLOW_TESTS=1 to run slow tests")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove PITIME_* variables and point settings at an empty location.

    Returns:
        Path the settings file would be read from (does not exist yet).
    """
    for name in list(os.environ):
        if name.startswith("PITIME_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("VERBOSE", raising=False)
    settings_path = tmp_path / "settings.toml"
    monkeypatch.setenv("PITIME_SETTINGS", str(settings_path))
    return settings_path


# =============================================================================
# CLI Runner
# =============================================================================


@dataclass
class CliRunner:
    """Runs pi.py in a subprocess with an isolated environment."""

    env: dict[str, str]
    timeout: float = 60.0

    def run(self, *args: str, **env: str) -> subprocess.CompletedProcess:
        """Run pi.py with arguments and extra environment variables."""
        run_env = {**self.env, **env}
        return subprocess.run(
            [sys.executable, str(SCRIPT_PATH), *args],
            capture_output=True,
            text=True,
            env=run_env,
            cwd=PROJECT_ROOT,
            timeout=self.timeout,
        )


@pytest.fixture
def cli(tmp_path) -> CliRunner:
    """CliRunner whose environment ignores user settings and PITIME_* vars."""
    env = {
        name: value
        for name, value in os.environ.items()
        if not name.startswith("PITIME_") and name != "VERBOSE"
    }
    env["PITIME_SETTINGS"] = str(tmp_path / "settings.toml")
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")])
    )
    return CliRunner(env=env)
