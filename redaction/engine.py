"""
RedactionEngine - Core engine for masking sensitive data in report lines.

This engine orchestrates:
1. Ordered rules from the loaded redaction profiles (applied in load order)
2. An optional scrubadub pass for PII the fixed rules do not cover
3. Tracking of whether any redaction occurred

Every rule sees the output of the rules before it. Lines that match
nothing are returned unchanged.
"""

import logging
from typing import Iterable, Iterator, Optional

import scrubadub

from .base_profile import RedactionProfile
from .profiles import DEFAULT_PROFILE

logger = logging.getLogger(__name__)


class RedactionEngine:
    """
    Engine for masking sensitive data in text.

    Uses a layered approach:
    1. First, apply the rules of each loaded profile, in order
    2. Then, if deep_scrub is enabled, apply scrubadub's detectors

    Example:
        engine = RedactionEngine()

        safe_text, was_redacted = engine.redact("password=hunter2")
        # safe_text: "password=<REDACTED>"
        # was_redacted: True

        # Lazily redact a stream of lines
        for line in engine.redact_lines(open("/etc/pacman.conf")):
            ...
    """

    def __init__(self, load_default_profile: bool = True, deep_scrub: bool = False):
        """
        Initialize the RedactionEngine.

        Args:
            load_default_profile: If True, loads the workstation profile.
                                  Set to False for a clean slate.
            deep_scrub: If True, run scrubadub after the profile rules.
        """
        self._profiles: dict[str, RedactionProfile] = {}
        self._scrubber: Optional[scrubadub.Scrubber] = None
        self.deep_scrub = deep_scrub

        if load_default_profile:
            self.load_profile(DEFAULT_PROFILE)

    def load_profile(self, profile: RedactionProfile) -> None:
        """
        Load a redaction profile into the engine.

        Profiles run in the order they were loaded. Loading a profile with
        a name that is already present replaces it in place.
        """
        self._profiles[profile.name] = profile
        logger.debug(f"Loaded redaction profile: {profile.name}")

    def unload_profile(self, profile_name: str) -> bool:
        """
        Remove a redaction profile from the engine.

        Returns:
            True if profile was removed, False if not found.
        """
        if profile_name in self._profiles:
            del self._profiles[profile_name]
            logger.debug(f"Unloaded redaction profile: {profile_name}")
            return True
        return False

    def list_profiles(self) -> list[str]:
        """Return the loaded profile names, in application order."""
        return list(self._profiles.keys())

    def _get_scrubber(self) -> scrubadub.Scrubber:
        if self._scrubber is None:
            self._scrubber = scrubadub.Scrubber()
        return self._scrubber

    def redact(self, text: str) -> tuple[str, bool]:
        """
        Redact sensitive data from the given text.

        Args:
            text: The input text to sanitize.

        Returns:
            A tuple of (redacted_text, was_redacted):
            - redacted_text: The sanitized text with sensitive data replaced
            - was_redacted: True if any redaction occurred
        """
        if not text:
            return text, False

        original_text = text

        for profile in self._profiles.values():
            for pattern in profile.get_patterns():
                try:
                    text = pattern.apply(text)
                except Exception as e:
                    logger.warning(f"Pattern '{pattern.name}' error: {e}")

        if self.deep_scrub:
            try:
                text = self._get_scrubber().clean(text)
            except Exception as e:
                logger.warning(f"Scrubadub error (keeping rule output): {e}")

        was_redacted = text != original_text

        return text, was_redacted

    def redact_batch(self, texts: list[str]) -> tuple[list[str], bool]:
        """
        Redact sensitive data from multiple texts.

        Returns:
            A tuple of (redacted_texts, any_redacted)
        """
        results = []
        any_redacted = False

        for text in texts:
            redacted_text, was_redacted = self.redact(text)
            results.append(redacted_text)
            if was_redacted:
                any_redacted = True

        return results, any_redacted

    def redact_lines(self, lines: Iterable[str]) -> Iterator[str]:
        """
        Lazily redact a stream of lines.

        Yields exactly one output line per input line, in order. Trailing
        newlines are kept so file handles can be passed straight through.
        """
        for line in lines:
            body = line.rstrip("\n")
            redacted, _ = self.redact(body)
            yield redacted + line[len(body):]


# Singleton instance for convenience
_default_engine: Optional[RedactionEngine] = None


def get_default_engine() -> RedactionEngine:
    """
    Get the default RedactionEngine instance.

    For deep scrubbing or custom profiles, instantiate RedactionEngine
    directly.
    """
    global _default_engine
    if _default_engine is None:
        _default_engine = RedactionEngine()
    return _default_engine
