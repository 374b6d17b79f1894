"""Pacman configuration and mirrors."""

from ..report import Report

PACMAN_CONF = "/etc/pacman.conf"
MIRRORLIST = "/etc/pacman.d/mirrorlist"


def collect(report: Report) -> None:
    report.heading(1, "System Configuration")

    report.config_section(PACMAN_CONF, "Pacman Configuration", lang="ini")
    report.config_section(
        MIRRORLIST,
        "Pacman Mirrors (Top 20)",
        pattern=r"^\[.*\]|^Server",
        max_lines=20,
    )
