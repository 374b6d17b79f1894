"""Enabled systemd services, system and user scope."""

from ..report import Report

# Template units contain '@' and are left out
TEMPLATE_UNIT = "@"


def collect(report: Report) -> None:
    report.heading(1, "Systemd Services")

    report.command_section(
        "Enabled Services",
        ["systemctl", "list-unit-files", "--state=enabled", "--type=service"],
        pattern=TEMPLATE_UNIT,
        invert=True,
    )
    report.command_section(
        "Enabled User Services",
        ["systemctl", "--user", "list-unit-files", "--state=enabled", "--type=service"],
        pattern=TEMPLATE_UNIT,
        invert=True,
    )
