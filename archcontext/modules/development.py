"""Installed compilers and language runtimes."""

import logging

from .. import runner
from ..report import Report

logger = logging.getLogger(__name__)

TOOLS = (
    "gcc", "g++", "python", "python3", "node", "npm", "cargo",
    "rustc", "go", "java", "javac", "php", "ruby", "perl",
)

# go has no --version flag
VERSION_ARGS = {"go": ["version"]}


def collect(report: Report) -> None:
    report.heading(1, "Development Environment")

    found = 0
    for tool in TOOLS:
        if not runner.command_exists(tool):
            continue
        version = runner.first_line([tool, *VERSION_ARGS.get(tool, ["--version"])])
        report.bullet(tool, version or "(no version output)")
        found += 1

    logger.info(f"Collecting: Development Environment ({found} tools found)")
    report.write("")
