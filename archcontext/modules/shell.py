"""Shell environment: default shell, PATH and shell rc files."""

import os
from pathlib import Path

from ..report import Report

RC_FILES = [
    ("~/.bashrc", "bash"),
    ("~/.zshrc", "zsh"),
    ("~/.config/fish/config.fish", "fish"),
]
RC_MAX_LINES = 50


def collect(report: Report) -> None:
    report.heading(1, "Shell Environment")

    report.heading(2, "Default Shell")
    report.code_block(report.redact_lines([os.environ.get("SHELL", "(not set)")]))

    report.heading(2, "PATH Environment")
    path_entries = [p for p in os.environ.get("PATH", "").split(os.pathsep) if p]
    report.code_block(report.redact_lines(path_entries))

    for rc_file, lang in RC_FILES:
        name = Path(rc_file).name
        report.config_section(
            rc_file,
            f"{name} (first {RC_MAX_LINES} lines)",
            max_lines=RC_MAX_LINES,
            lang=lang,
        )
