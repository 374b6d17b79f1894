"""
Command runner - synchronous subprocess invocation for system collectors.

Commands run without a shell. Line filtering that would otherwise need a
pipeline (grep, head, wc -l) is done in Python on the captured output.
"""

import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single command invocation."""
    command: str
    returncode: int
    output: str  # stdout and stderr, merged

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def lines(self) -> list[str]:
        return self.output.splitlines()


def command_exists(name: str) -> bool:
    """Return True if an executable called name is on PATH."""
    return shutil.which(name) is not None


def run_command(args: Sequence[str], *, input: Optional[str] = None) -> CommandResult:
    """
    Run a command and capture its merged output.

    Never raises for a missing executable or an OS error; those produce a
    result with returncode 127 / 126 and the error text as output. There is
    no timeout.
    """
    command = " ".join(args)
    logger.debug(f"Running: {command}")
    try:
        completed = subprocess.run(
            list(args),
            input=input,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except FileNotFoundError:
        return CommandResult(command=command, returncode=127, output=f"command not found: {args[0]}")
    except OSError as e:
        return CommandResult(command=command, returncode=126, output=str(e))

    return CommandResult(command=command, returncode=completed.returncode, output=completed.stdout.rstrip("\n"))


def first_line(args: Sequence[str]) -> str:
    """Return the first non-empty output line of a command, or ''."""
    result = run_command(args)
    for line in result.lines:
        if line.strip():
            return line.strip()
    return ""


def filter_lines(lines: Iterable[str], pattern: str, *, invert: bool = False, flags: int = 0) -> list[str]:
    """grep -E equivalent; invert=True behaves like grep -v."""
    regex = re.compile(pattern, flags)
    return [line for line in lines if bool(regex.search(line)) != invert]


def head(lines: Iterable[str], limit: Optional[int]) -> list[str]:
    """Return at most limit lines (all lines when limit is None)."""
    lines = list(lines)
    if limit is None:
        return lines
    return lines[:limit]
