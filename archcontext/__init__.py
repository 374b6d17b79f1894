"""Arch context generator - Markdown snapshots of an Arch Linux workstation."""

from .generator import UnknownModuleError, generate, resolve_modules
from .modules import ALL_MODULES, BASIC_MODULES, MODULES
from .report import Report
from .settings import Settings, SettingsError

__all__ = [
    "generate", "resolve_modules", "UnknownModuleError",
    "MODULES", "ALL_MODULES", "BASIC_MODULES",
    "Report",
    "Settings", "SettingsError",
]
__version__ = "0.1.0"
