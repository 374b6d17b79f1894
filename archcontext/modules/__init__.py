"""
Module registry.

Maps each module name to a handler that writes exactly one top-level
section to the report. Dict order is report order.
"""

from typing import Callable

from ..report import Report
from . import (
    audio,
    configuration,
    development,
    display,
    hardware,
    network,
    packages,
    security,
    services,
    shell,
    system,
    theme,
)

Handler = Callable[[Report], None]

MODULES: dict[str, Handler] = {
    "hardware": hardware.collect,
    "os": system.collect,
    "packages": packages.collect,
    "config": configuration.collect,
    "audio": audio.collect,
    "display": display.collect,
    "network": network.collect,
    "services": services.collect,
    "development": development.collect,
    "shell": shell.collect,
    "security": security.collect,
    "theme": theme.collect,
}

ALL_MODULES = tuple(MODULES)
BASIC_MODULES = ("hardware", "os", "packages")

__all__ = ["Handler", "MODULES", "ALL_MODULES", "BASIC_MODULES"]
