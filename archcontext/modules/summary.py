"""Closing summary section: quick facts and context file info."""

import datetime
import os
import platform
from typing import Optional

from .. import runner
from ..report import Report
from .packages import installed_packages


def human_size(num_bytes: int) -> str:
    """Format a byte count like `du -h` (e.g. 512B, 4.0K, 1.2M)."""
    if num_bytes < 1024:
        return f"{num_bytes}B"
    size = num_bytes / 1024
    for unit in ("K", "M"):
        if size < 1024:
            return f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}G"


def write_summary(report: Report, now: Optional[datetime.datetime] = None) -> None:
    now = now or datetime.datetime.now()

    report.heading(1, "System Summary")
    report.heading(2, "Quick Facts")

    report.bullet("Kernel", platform.release())
    report.bullet("Uptime", runner.first_line(["uptime", "-p"]) if runner.command_exists("uptime") else "unknown")

    total = installed_packages()
    explicit = installed_packages(explicit=True)
    if total is not None and explicit is not None:
        report.bullet("Package Count", f"{len(total)} total, {len(explicit)} explicit")
    else:
        report.bullet("Package Count", "unknown")

    shell = os.environ.get("SHELL", "")
    report.bullet("Shell", os.path.basename(shell) or "Not set")
    report.bullet("Desktop", os.environ.get("XDG_CURRENT_DESKTOP") or "Not set")
    report.bullet("Session", os.environ.get("XDG_SESSION_TYPE") or "Not set")
    report.write("")

    report.heading(2, "Context File Info")
    report.bullet("Generated", now.strftime("%a %d %b %Y %H:%M:%S"))
    report.bullet("File Size", human_size(report.size_bytes))
    report.bullet("Location", str(report.path), redact=True)
