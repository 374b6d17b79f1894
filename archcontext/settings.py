"""
Settings for the context generator.

Values come from environment variables, optionally loaded from a .env file
in the working directory. CLI flags override them.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_KEEP = 5
DEFAULT_MAX_CONFIG_LINES = 100

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class SettingsError(ValueError):
    """Raised when a setting has an invalid value."""


@dataclass
class Settings:
    """Resolved configuration for one generator run."""
    output_dir: Path = Path(".")
    keep: int = DEFAULT_KEEP
    max_config_lines: int = DEFAULT_MAX_CONFIG_LINES
    redact: bool = True
    deep_scrub: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from ARCH_CONTEXT_* environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ after
                     loading a .env file.

        Raises:
            SettingsError: If a numeric or boolean value cannot be parsed.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        return cls(
            output_dir=Path(environ.get("ARCH_CONTEXT_OUTPUT_DIR", ".")),
            keep=_parse_int(environ, "ARCH_CONTEXT_KEEP", DEFAULT_KEEP, minimum=1),
            max_config_lines=_parse_int(
                environ, "ARCH_CONTEXT_MAX_CONFIG_LINES", DEFAULT_MAX_CONFIG_LINES, minimum=1
            ),
            redact=_parse_bool(environ, "ARCH_CONTEXT_REDACT", True),
            deep_scrub=_parse_bool(environ, "ARCH_CONTEXT_DEEP_SCRUB", False),
        )


def _parse_int(environ: Mapping[str, str], name: str, default: int, minimum: int = 0) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise SettingsError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise SettingsError(f"{name} must be >= {minimum}, got {value}")
    return value


def _parse_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise SettingsError(f"{name} must be a boolean, got {raw!r}")
