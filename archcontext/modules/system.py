"""Operating system: release, systemd, locale and clock settings."""

from ..report import Report

OS_RELEASE = "/etc/os-release"


def collect(report: Report) -> None:
    report.heading(1, "Operating System Details")

    report.config_section(OS_RELEASE, "OS Release Information")
    report.command_section("Systemd Version", ["systemctl", "--version"], limit=2)
    report.command_section("Locale Settings", ["localectl", "status"])
    report.command_section("Time & Date Settings", ["timedatectl", "status"])
