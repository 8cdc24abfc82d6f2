"""Page name grammar."""

import re

from plainwiki.core.exceptions import InvalidPageName

# ASCII letters and digits only; str.isalnum() would accept any Unicode digit.
PAGE_NAME_PATTERN = r"[A-Za-z0-9]+"

_PAGE_NAME_RE = re.compile(PAGE_NAME_PATTERN)


def is_valid_name(candidate: object) -> bool:
    """Return True if candidate is a non-empty ASCII alphanumeric string."""
    if not isinstance(candidate, str):
        return False
    return _PAGE_NAME_RE.fullmatch(candidate) is not None


def validate_name(candidate: object) -> str:
    """Return candidate unchanged, or raise InvalidPageName."""
    if not is_valid_name(candidate):
        raise InvalidPageName(candidate)
    return candidate  # type: ignore[return-value]
