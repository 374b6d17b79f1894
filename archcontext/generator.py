"""
Report generation: run the selected module handlers against a new report,
then update the latest link and prune old reports.
"""

import datetime
import logging
from pathlib import Path
from typing import Iterable, Optional

from redaction import RedactionEngine

from .modules import MODULES
from .modules.summary import write_summary
from .report import ERROR_MARKER, FILE_PREFIX, Report
from .settings import Settings

logger = logging.getLogger(__name__)

LATEST_NAME = f"{FILE_PREFIX}latest.md"


class UnknownModuleError(ValueError):
    """Raised when a requested module name is not registered."""

    def __init__(self, names: list[str]):
        self.names = names
        super().__init__(
            f"Unknown module(s): {', '.join(names)}. "
            f"Available: {', '.join(MODULES)}"
        )


def resolve_modules(names: Iterable[str]) -> list[str]:
    """
    Validate module names and return them in report order, de-duplicated.

    Raises:
        UnknownModuleError: If any name is not registered.
    """
    requested = [n.strip().lower() for n in names if n.strip()]
    unknown = [n for n in requested if n not in MODULES]
    if unknown:
        raise UnknownModuleError(unknown)
    return [name for name in MODULES if name in requested]


def build_engine(settings: Settings) -> Optional[RedactionEngine]:
    """Return the redaction engine for these settings, or None if disabled."""
    if not settings.redact:
        return None
    return RedactionEngine(deep_scrub=settings.deep_scrub)


def generate(
    module_names: Iterable[str],
    settings: Settings,
    engine: Optional[RedactionEngine] = None,
    now: Optional[datetime.datetime] = None,
) -> Path:
    """
    Generate a context report and return its path.

    A handler that raises does not stop the run: the error is logged and an
    inline marker is written in its place.

    Args:
        module_names: Modules to run; validated with resolve_modules().
        settings: Output directory, rotation and redaction settings.
        engine: Redaction engine. Defaults to build_engine(settings).
        now: Timestamp for the file name, for reproducible runs.
    """
    modules = resolve_modules(module_names)
    if engine is None:
        engine = build_engine(settings)

    report = Report.create(
        settings.output_dir,
        engine=engine,
        max_config_lines=settings.max_config_lines,
        now=now,
    )
    logger.info(f"Generating system context: {report.path}")

    for name in modules:
        try:
            MODULES[name](report)
        except Exception as e:
            logger.exception(f"Module '{name}' failed")
            report.code_block(report.redact_lines([f"{ERROR_MARKER} module {name}: {e}"]))

    write_summary(report, now=now)

    update_latest_link(report.path)
    removed = rotate_reports(report.path.parent, settings.keep)
    if removed:
        logger.info(f"Removed {len(removed)} old context file(s)")

    return report.path


def update_latest_link(report_path: Path) -> Path:
    """Point <output_dir>/arch-context_latest.md at report_path."""
    link = report_path.parent / LATEST_NAME
    if link.is_symlink() or link.exists():
        link.unlink()
    link.symlink_to(report_path.name)
    return link


def list_reports(output_dir: Path) -> list[Path]:
    """Return generated reports in output_dir, newest first."""
    reports = [
        p for p in Path(output_dir).glob(f"{FILE_PREFIX}*.md")
        if p.name != LATEST_NAME and not p.is_symlink()
    ]
    # Timestamped names sort chronologically
    return sorted(reports, key=lambda p: p.name, reverse=True)


def rotate_reports(output_dir: Path, keep: int) -> list[Path]:
    """Delete all but the newest keep reports. Returns the deleted paths."""
    stale = list_reports(output_dir)[keep:]
    for path in stale:
        path.unlink()
        logger.debug(f"Removed old context file: {path}")
    return stale
