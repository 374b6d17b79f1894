"""
Redaction Profiles Package

Available profiles:
    - workstation: Default rules for system context reports (credentials,
      email addresses, IPv4 addresses, home directory usernames)

To add a new profile:
    1. Create a new module here
    2. Subclass RedactionProfile
    3. Implement get_patterns() with your RedactionPatterns, in order
    4. Load it with engine.load_profile(); it runs after the default profile
"""

from .workstation import WorkstationProfile, DEFAULT_PROFILE

__all__ = ["WorkstationProfile", "DEFAULT_PROFILE"]
