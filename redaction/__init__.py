"""
Redaction Module - Sensitive data masking for Arch context reports

Masks credentials and personally identifying data in command output and
configuration files before they are appended to a report.

Architecture:
    - RedactionEngine: Applies ordered rules from the loaded profiles
    - RedactionProfile: Abstract base class for an ordered rule set
    - profiles/: Concrete profiles (the default is "workstation")

Example:
    from redaction import RedactionEngine

    engine = RedactionEngine()
    safe_text, was_redacted = engine.redact("inet 192.168.1.20/24 home /home/alice")
    # safe_text: "inet <IP>/24 home /home/<USER>"
    # was_redacted: True
"""

from .engine import RedactionEngine, get_default_engine
from .base_profile import RedactionProfile, RedactionPattern

__all__ = ["RedactionEngine", "RedactionProfile", "RedactionPattern", "get_default_engine"]
