"""Value shape detection shared by the validators and the security analyzer."""

from __future__ import annotations

import json
import math
import re
from urllib.parse import SplitResult, urlsplit

PLACEHOLDER_PATTERNS = [
    re.compile(r"^<.*>\Z"),
    re.compile(r"^\[.*\]\Z"),
    re.compile(r"^\{.*\}\Z"),
    re.compile(r"^your_.*\Z", re.IGNORECASE),
    re.compile(r"^example_.*\Z", re.IGNORECASE),
    re.compile(r"^placeholder\Z", re.IGNORECASE),
    re.compile(r"^change_me\Z", re.IGNORECASE),
    re.compile(r"^replace_me\Z", re.IGNORECASE),
    re.compile(r"^xxx+\Z", re.IGNORECASE),
    re.compile(r"^todo\Z", re.IGNORECASE),
    re.compile(r"^fixme\Z", re.IGNORECASE),
]

BOOLEAN_WORDS = frozenset({"true", "false", "1", "0", "yes", "no"})

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+\Z")

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
# Schemes that are meaningless without a host
_HOST_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})


def is_placeholder(value: str) -> bool:
    """Check if a value is a template stand-in such as ``<your-key>``."""
    text = value.strip()
    return any(p.search(text) for p in PLACEHOLDER_PATTERNS)


def parse_url(value: str) -> SplitResult | None:
    """Parse a value as an absolute URL.

    Returns:
        The split URL, or None when the value is not a URL
    """
    text = value.strip()
    if not text or any(c.isspace() for c in text):
        return None
    if not _SCHEME_RE.match(text):
        return None
    try:
        parts = urlsplit(text)
        # .port raises for out-of-range or non-numeric ports
        parts.port
    except ValueError:
        return None
    if parts.scheme.lower() in _HOST_SCHEMES and not parts.hostname:
        return None
    return parts


def looks_like_url(value: str) -> bool:
    return parse_url(value) is not None


def url_has_credentials(value: str) -> bool:
    """Check if a URL value embeds a username or password."""
    parts = parse_url(value)
    if parts is None:
        return False
    return bool(parts.username or parts.password)


def looks_like_number(value: str) -> bool:
    """Check if a value is a finite numeric literal.

    Accepts decimal, exponent and 0x/0o/0b integer forms.
    """
    text = value.strip()
    if not text or "_" in text:
        return False
    try:
        return math.isfinite(float(text))
    except ValueError:
        pass
    try:
        int(text, 0)
    except ValueError:
        return False
    return True


def looks_like_boolean(value: str) -> bool:
    return value.strip().lower() in BOOLEAN_WORDS


def looks_like_email(value: str) -> bool:
    return EMAIL_RE.match(value) is not None


def looks_like_json(value: str) -> bool:
    try:
        json.loads(value)
    except ValueError:
        return False
    return True
