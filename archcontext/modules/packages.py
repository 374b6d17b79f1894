"""
Package management: counts, explicitly installed packages grouped by
family, and AUR packages.
"""

import logging
import re
from typing import Iterable, Optional

from .. import runner
from ..report import ERROR_MARKER, Report

logger = logging.getLogger(__name__)

# Matching order; a package goes to the first group whose prefix matches.
_GROUP_RULES = [
    ("linux", re.compile(r"^linux")),
    ("xorg", re.compile(r"^(xorg|x11)")),
    ("libs", re.compile(r"^lib")),
    ("python", re.compile(r"^python")),
    ("kde", re.compile(r"^(plasma|kde)")),
    ("gnome", re.compile(r"^(gnome|gtk)")),
]

# Display order and titles
GROUP_TITLES = [
    ("linux", "Kernel & System"),
    ("xorg", "X.org/Display"),
    ("kde", "KDE/Plasma"),
    ("gnome", "GNOME/GTK"),
    ("python", "Python"),
    ("libs", "Libraries"),
    ("other", "Other Packages"),
]

AUR_HELPERS = ("yay", "paru")


def group_packages(names: Iterable[str]) -> dict[str, list[str]]:
    """
    Sort package names into families.

    Returns a dict keyed by group title, in display order, holding only
    non-empty groups. Names within a group are sorted.
    """
    buckets: dict[str, list[str]] = {key: [] for key, _ in GROUP_TITLES}
    for name in sorted(names):
        for key, regex in _GROUP_RULES:
            if regex.search(name):
                buckets[key].append(name)
                break
        else:
            buckets["other"].append(name)

    return {title: buckets[key] for key, title in GROUP_TITLES if buckets[key]}


def installed_packages(explicit: bool = False) -> Optional[list[str]]:
    """
    Return installed package names from pacman.

    Returns None if pacman is unavailable or fails.
    """
    if not runner.command_exists("pacman"):
        return None
    result = runner.run_command(["pacman", "-Qe" if explicit else "-Q"])
    if not result.ok:
        return None
    return [line.split()[0] for line in result.lines if line.strip()]


def collect(report: Report) -> None:
    report.heading(1, "Package Management")

    if not runner.command_exists("pacman"):
        logger.warning("Skipping package sections - command not found: pacman")
        return

    logger.info("Collecting package information (this may take a while)...")
    report.heading(2, "Total Installed Packages Count")
    packages = installed_packages()
    if packages is None:
        report.code_block([f"{ERROR_MARKER}: pacman -Q"])
    else:
        report.code_block([str(len(packages))])

    report.heading(2, "Explicitly Installed Packages (Grouped)")
    explicit = installed_packages(explicit=True)
    if explicit is None:
        report.code_block([f"{ERROR_MARKER}: pacman -Qe"])
    else:
        for title, names in group_packages(explicit).items():
            report.heading(3, title)
            report.code_block(names)

    for helper in AUR_HELPERS:
        if runner.command_exists(helper):
            report.command_section("AUR Packages", [helper, "-Qm"], redact=False)
            break
