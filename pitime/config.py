"""PiTime Configuration.

Centralized configuration for the pi digit CLI.

Environment Variables:
    PITIME_DIGITS: Default number of digits to compute
    PITIME_SLACK: Extra state terms beyond floor(10n/3), at least 3
    PITIME_MAX_DIGITS: Largest digit count the CLI accepts
    PITIME_TIMEOUT: Deadline in seconds (0 disables)
    PITIME_VERIFY: Check output against mpmath (1, true, yes)
    PITIME_SETTINGS: Path to an alternative settings file
    VERBOSE: Enable progress output (1, true, yes)
    RUN_SLOW_TESTS: Enable slow tests (1, true, yes)

Settings File:
    ~/.pitime/settings.toml

    [pitime]
    digits = 1000
    slack = 3
    max_digits = 200000
    timeout = 0
    verify = false

Environment files loaded (in order):
    1. .env (project root)
    2. .env (current directory)

Environment variables take priority over the settings file.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .digits import SLACK, check_slack

# Load .env files (project root first, then local)
_project_root = Path(__file__).parent.parent
load_dotenv(_project_root / ".env")
load_dotenv()

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_DIGITS = 1000
DEFAULT_MAX_DIGITS = 200000
DEFAULT_TIMEOUT = 0.0

TRUTHY = ("1", "true", "yes")

# =============================================================================
# Paths
# =============================================================================

PROJECT_ROOT = _project_root
DEFAULT_SETTINGS_PATH = Path.home() / ".pitime" / "settings.toml"


# =============================================================================
# Settings Loading
# =============================================================================


def get_settings_path() -> Path:
    """Get the path to the settings file.

    Priority:
        1. PITIME_SETTINGS environment variable
        2. ~/.pitime/settings.toml
    """
    if path := os.environ.get("PITIME_SETTINGS"):
        return Path(path)
    return DEFAULT_SETTINGS_PATH


def load_settings() -> dict[str, Any]:
    """Load the [pitime] table from the settings file.

    Returns:
        Settings dict, or an empty dict if the file doesn't exist.
    """
    path = get_settings_path()
    if not path.exists():
        return {}
    with open(path, "rb") as f:
        return tomllib.load(f).get("pitime", {})


def _flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() in TRUTHY


def _lookup(name: str, settings: dict[str, Any], default, convert):
    """Resolve one setting: env var PITIME_<NAME>, then settings, then default."""
    env_name = f"PITIME_{name.upper()}"
    if (raw := os.environ.get(env_name)) is not None:
        source = env_name
    elif name in settings:
        raw = settings[name]
        source = f"settings [pitime].{name}"
    else:
        return default

    try:
        return convert(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid value for {source}: {raw!r}") from None


def _non_negative_int(value) -> int:
    if isinstance(value, bool):
        raise TypeError("boolean is not a count")
    result = int(value)
    if result < 0:
        raise ValueError("must be non-negative")
    return result


def _slack(value) -> int:
    result = _non_negative_int(value)
    check_slack(result)
    return result


def _non_negative_float(value) -> float:
    result = float(value)
    if result < 0:
        raise ValueError("must be non-negative")
    return result


def is_verbose() -> bool:
    """Check if verbose mode is enabled.

    Returns:
        True if VERBOSE env var is set to 1/true/yes.
    """
    return os.environ.get("VERBOSE", "").lower() in TRUTHY


def is_slow_tests_enabled() -> bool:
    """Check if slow tests should run.

    Returns:
        True if RUN_SLOW_TESTS env var is set to 1/true/yes.
    """
    return os.environ.get("RUN_SLOW_TESTS", "").lower() in TRUTHY


# =============================================================================
# Configuration Dataclass
# =============================================================================


@dataclass
class PiConfig:
    """Complete CLI configuration."""

    digits: int
    slack: int
    max_digits: int
    timeout: float
    verify: bool
    verbose: bool

    @classmethod
    def from_env(cls) -> "PiConfig":
        """Create config from environment and settings.

        Raises:
            ValueError: If a configured value is not a valid number.
        """
        settings = load_settings()
        return cls(
            digits=_lookup("digits", settings, DEFAULT_DIGITS, _non_negative_int),
            slack=_lookup("slack", settings, SLACK, _slack),
            max_digits=_lookup(
                "max_digits", settings, DEFAULT_MAX_DIGITS, _non_negative_int
            ),
            timeout=_lookup("timeout", settings, DEFAULT_TIMEOUT, _non_negative_float),
            verify=_lookup("verify", settings, False, _flag),
            verbose=is_verbose(),
        )


def get_config() -> PiConfig:
    """Get the current configuration."""
    return PiConfig.from_env()
