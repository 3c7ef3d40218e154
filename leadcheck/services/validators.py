"""
Input shape checks for lead submissions.
"""
import re
from urllib.parse import urlparse

_EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def is_valid_email(value) -> bool:
    if not isinstance(value, str):
        return False
    value = value.strip()
    return bool(value) and _EMAIL_RE.match(value) is not None


def is_valid_url(value) -> bool:
    """True for absolute http(s) URLs with a host."""
    if not isinstance(value, str) or not value:
        return False
    try:
        parsed = urlparse(value)
        # .port raises ValueError for out-of-range or non-numeric ports
        parsed.port
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.hostname)
