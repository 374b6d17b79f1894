"""Sudoers and firewall status."""

import logging

from .. import runner
from ..report import Report

logger = logging.getLogger(__name__)

SUDOERS = "/etc/sudoers"


def collect(report: Report) -> None:
    report.heading(1, "Security Configuration")

    if runner.command_exists("sudo"):
        logger.info("Collecting: Sudoers Configuration")
        # -n: never prompt for a password
        result = runner.run_command(["sudo", "-n", "cat", SUDOERS])
        report.heading(2, "Sudoers Configuration")
        if result.ok:
            rules = runner.filter_lines(result.lines, r"^[^#]")
            report.code_block(report.redact_lines(rules))
        else:
            report.code_block(["Sudoers not readable without password"])
    else:
        logger.warning("Skipping Sudoers Configuration - command not found: sudo")

    report.command_section(
        "Firewall Status",
        ["systemctl", "is-active", "ufw", "firewalld", "iptables"],
        allow_nonzero=True,
    )
