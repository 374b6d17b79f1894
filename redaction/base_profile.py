"""
Base Redaction Profile - Abstract base class for ordered redaction rules.

A profile is an ordered list of (pattern, replacement) rules. The engine
applies the rules one after another to every line, so a later rule always
sees the output of the earlier ones.

Each profile defines:
    - name: Unique identifier for the profile
    - description: Human-readable description
    - get_patterns(): Returns the rules, in application order
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Pattern


@dataclass(frozen=True)
class RedactionPattern:
    """A single redaction rule."""
    name: str  # e.g., "credential", "email"
    pattern: Pattern[str]  # Compiled regex pattern
    replacement: str  # Fixed placeholder, may reference groups (e.g. r"\1<REDACTED>")
    description: str = ""

    def apply(self, text: str) -> str:
        """Return text with every match of this rule replaced."""
        return self.pattern.sub(self.replacement, text)


class RedactionProfile(ABC):
    """
    Abstract base class for redaction profiles.

    Subclass this to add rules for other kinds of sensitive data without
    touching the engine.

    Example:
        class SerialProfile(RedactionProfile):
            @property
            def name(self) -> str:
                return "serials"

            @property
            def description(self) -> str:
                return "Hardware serial numbers"

            def get_patterns(self) -> list[RedactionPattern]:
                return [
                    RedactionPattern(
                        name="serial",
                        pattern=re.compile(r'(Serial Number:\\s*)\\S+'),
                        replacement=r"\\1<SERIAL>",
                    ),
                ]
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this profile (e.g., 'workstation')."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this profile covers."""
        pass

    @abstractmethod
    def get_patterns(self) -> list[RedactionPattern]:
        """
        Return the RedactionPattern objects to apply, in order.

        Order matters: rules are composed sequentially, so overlapping
        matches go to whichever rule comes first.
        """
        pass

    def __repr__(self) -> str:
        return f"<RedactionProfile: {self.name}>"
