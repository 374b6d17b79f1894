"""
Workstation Redaction Profile - Default rules for system context reports.

Rules, in application order:
    1. Credential assignments (password=..., api_key: ...) - value masked
    2. Email addresses
    3. IPv4-shaped dotted quads
    4. Usernames in /home/<name> paths

The IPv4 rule is purely syntactic. Dotted version strings such as
"1.2.3.4" are redacted as well.
"""

import re
from ..base_profile import RedactionProfile, RedactionPattern

REDACTED = "<REDACTED>"
EMAIL_PLACEHOLDER = "<EMAIL>"
IP_PLACEHOLDER = "<IP>"
USER_PLACEHOLDER = "<USER>"

CREDENTIAL_KEYWORDS = (
    "password",
    "passwd",
    "token",
    "secret",
    "key",
    "auth",
    "api_key",
    "api_token",
    "auth_token",
)


class WorkstationProfile(RedactionProfile):
    """
    Default profile for Arch workstation reports.

    Placeholders never match any rule, so running the profile twice
    gives the same output as running it once.
    """

    @property
    def name(self) -> str:
        return "workstation"

    @property
    def description(self) -> str:
        return "Credentials, email addresses, IPv4 addresses and home directory usernames"

    def get_patterns(self) -> list[RedactionPattern]:
        keywords = "|".join(re.escape(k) for k in CREDENTIAL_KEYWORDS)
        return [
            # name=value / name: value, name contains a credential keyword.
            # An HTTP auth scheme (Bearer, Basic, ...) is masked with its value.
            RedactionPattern(
                name="credential",
                pattern=re.compile(
                    r'\b([\w.-]*(?:' + keywords + r')[\w.-]*)'
                    r'(\s*[=:]\s*)'
                    r'((?:(?:Bearer|Basic|Digest|Token)\s+)?(?:"[^"]*"|\'[^\']*\'|\S+))',
                    re.IGNORECASE
                ),
                replacement=r"\1\2" + REDACTED,
                description="Credential value in key=value or key: value form"
            ),

            RedactionPattern(
                name="email",
                pattern=re.compile(
                    r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'
                ),
                replacement=EMAIL_PLACEHOLDER,
                description="Email address"
            ),

            # No octet range check
            RedactionPattern(
                name="ipv4",
                pattern=re.compile(
                    r'\b\d{1,3}(?:\.\d{1,3}){3}\b'
                ),
                replacement=IP_PLACEHOLDER,
                description="IPv4-shaped dotted quad"
            ),

            RedactionPattern(
                name="home_user",
                pattern=re.compile(
                    r'(/home/)[^/\s<>:\'"`]+'
                ),
                replacement=r"\1" + USER_PLACEHOLDER,
                description="Username segment of a /home path"
            ),
        ]


DEFAULT_PROFILE = WorkstationProfile()
