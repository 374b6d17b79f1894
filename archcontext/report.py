"""
Report writer - appends Markdown sections to a single context file.

A Report is created once per run and passed to every module handler.
All writes after the header append to the file.
"""

import datetime
import logging
import platform
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence

from redaction import RedactionEngine

from . import runner
from .runner import CommandResult
from .settings import DEFAULT_MAX_CONFIG_LINES

logger = logging.getLogger(__name__)

FILE_PREFIX = "arch-context_"
TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
ERROR_MARKER = "Error executing"


class Report:
    """
    An append-only Markdown report on disk.

    Args:
        path: The report file. Created by Report.create().
        engine: Redaction engine for command output and config files.
                None disables redaction.
        max_config_lines: Default line cap for config_section().
    """

    def __init__(
        self,
        path: Path,
        engine: Optional[RedactionEngine] = None,
        max_config_lines: int = DEFAULT_MAX_CONFIG_LINES,
    ):
        self.path = Path(path)
        self.engine = engine
        self.max_config_lines = max_config_lines

    @classmethod
    def create(
        cls,
        output_dir: Path,
        *,
        engine: Optional[RedactionEngine] = None,
        max_config_lines: int = DEFAULT_MAX_CONFIG_LINES,
        now: Optional[datetime.datetime] = None,
        hostname: Optional[str] = None,
    ) -> "Report":
        """Create a timestamped report file in output_dir and write its header."""
        now = now or datetime.datetime.now()
        hostname = hostname or platform.node() or "unknown-host"

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / f"{FILE_PREFIX}{now.strftime(TIMESTAMP_FORMAT)}.md"

        path.write_text(
            "# Arch Linux System Context\n"
            f"Generated: {now.strftime('%a %d %b %Y %H:%M:%S')}\n"
            f"Hostname: {hostname}\n"
            "\n"
            "---\n"
            "\n",
            encoding="utf-8",
        )
        return cls(path, engine=engine, max_config_lines=max_config_lines)

    # ------------------------------------------------------------------
    # Low-level writers
    # ------------------------------------------------------------------

    def write(self, *lines: str) -> None:
        """Append lines to the report, one per line."""
        with self.path.open("a", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")

    def heading(self, level: int, title: str) -> None:
        self.write("#" * level + " " + title, "")

    def text(self, line: str, *, redact: bool = False) -> None:
        if redact:
            line = next(self.redact_lines([line]))
        self.write(line)

    def bullet(self, label: str, value: str, *, redact: bool = False) -> None:
        self.text(f"- **{label}**: {value}", redact=redact)

    def code_block(self, lines: Iterable[str], lang: str = "") -> None:
        self.write("```" + lang, *lines, "```", "")

    def redact_lines(self, lines: Iterable[str]) -> Iterator[str]:
        """Lazily redact lines; a no-op when the report has no engine."""
        if self.engine is None:
            return iter(lines)
        return self.engine.redact_lines(lines)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def command_section(
        self,
        title: str,
        args: Sequence[str],
        *,
        pattern: Optional[str] = None,
        invert: bool = False,
        limit: Optional[int] = None,
        redact: bool = True,
        allow_nonzero: bool = False,
        level: int = 2,
    ) -> Optional[CommandResult]:
        """
        Run a command and write its output as a fenced section.

        If the executable is missing, the section is skipped with a
        warning. If it fails, an inline error marker is appended after its
        output; allow_nonzero suppresses the marker for status commands whose
        exit code is informational (systemctl is-active).

        Args:
            pattern: Keep only lines matching this regex (grep -E).
            invert: Drop matching lines instead (grep -v).
            limit: Keep at most this many lines (head -n).

        Returns:
            The CommandResult, or None if the command was skipped.
        """
        if not runner.command_exists(args[0]):
            logger.warning(f"Skipping {title} - command not found: {args[0]}")
            return None

        logger.info(f"Collecting: {title}")
        result = runner.run_command(args)

        lines = result.lines
        if pattern is not None:
            lines = runner.filter_lines(lines, pattern, invert=invert)
        lines = runner.head(lines, limit)
        if redact:
            lines = list(self.redact_lines(lines))
        if not (result.ok or allow_nonzero):
            logger.debug(f"{result.command} exited with {result.returncode}")
            lines = [*lines, f"{ERROR_MARKER}: {result.command}"]

        self.heading(level, title)
        self.code_block(lines)
        return result

    def config_section(
        self,
        path: Path,
        title: str,
        *,
        max_lines: Optional[int] = None,
        pattern: Optional[str] = None,
        lang: str = "",
        redact: bool = True,
        level: int = 2,
    ) -> bool:
        """
        Write the first lines of a configuration file as a fenced section.

        Absent or unreadable files are skipped without touching the report.

        Args:
            max_lines: Line cap, defaults to the report's max_config_lines.
            pattern: Keep only lines matching this regex before capping.

        Returns:
            True if the section was written.
        """
        path = Path(path).expanduser()
        max_lines = max_lines or self.max_config_lines

        try:
            with path.open(encoding="utf-8", errors="replace") as f:
                lines = f.read().splitlines()
        except OSError as e:
            logger.debug(f"Omitting {title}: {e}")
            return False

        logger.info(f"Collecting configuration: {title}")
        if pattern is not None:
            lines = runner.filter_lines(lines, pattern)
        shown = lines[:max_lines]
        if redact:
            shown = self.redact_lines(shown)

        self.heading(level, title)
        self.text(f"File: `{path}`", redact=redact)
        body = list(shown)
        if len(lines) > max_lines:
            body.append(f"... ({len(lines)} lines total, showing first {max_lines})")
        self.code_block(body, lang)
        return True

    @property
    def size_bytes(self) -> int:
        return self.path.stat().st_size
