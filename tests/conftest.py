"""
Pytest configuration and shared fixtures for the arch-context tests.

System commands are never executed by collector tests: the `fake_system`
fixture replaces the command runner with canned outputs.
"""

import os
import sys

import pytest

# Add parent directory to path for server and package imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from archcontext import runner  # noqa: E402
from archcontext.runner import CommandResult  # noqa: E402


class FakeSystem:
    """
    Stand-in for archcontext.runner.

    Every command exists and succeeds with empty output unless configured
    otherwise with add(), missing or installed.
    """

    def __init__(self):
        self.outputs: dict[str, tuple[int, str]] = {}
        self.missing: set[str] = set()
        self.installed: set[str] | None = None
        self.calls: list[str] = []

    def add(self, command: str, output: str = "", returncode: int = 0) -> None:
        self.outputs[command] = (returncode, output)

    def command_exists(self, name: str) -> bool:
        if self.installed is not None:
            return name in self.installed
        return name not in self.missing

    def run_command(self, args, *, input=None) -> CommandResult:
        command = " ".join(args)
        self.calls.append(command)
        returncode, output = self.outputs.get(command, (0, ""))
        return CommandResult(command=command, returncode=returncode, output=output)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """
    Remove ARCH_CONTEXT_* settings so every test starts from defaults.
    This runs automatically before each test.
    """
    for name in list(os.environ):
        if name.startswith("ARCH_CONTEXT_"):
            monkeypatch.delenv(name)
    yield


@pytest.fixture
def fake_system(monkeypatch):
    """Route all command lookups and invocations through a FakeSystem."""
    fake = FakeSystem()
    monkeypatch.setattr(runner, "command_exists", fake.command_exists)
    monkeypatch.setattr(runner, "run_command", fake.run_command)
    return fake


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """Point HOME at an empty temporary directory."""
    home = tmp_path / "user-home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


def top_level_headings(text: str) -> list[str]:
    """Return '# ' headings that are not inside fenced code blocks."""
    headings = []
    in_fence = False
    for line in text.splitlines():
        if line.startswith("```"):
            in_fence = not in_fence
            continue
        if not in_fence and line.startswith("# "):
            headings.append(line[2:])
    return headings
