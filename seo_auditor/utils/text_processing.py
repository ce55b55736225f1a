"""Text processing helpers shared by the extractors."""

import re
from typing import Optional

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to one space and trim the ends."""
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def count_words(text: str) -> int:
    """Count whitespace-separated tokens in *text*.

    Splitting an empty string still yields one (empty) token, so an empty
    page body reports a word count of 1.

    Examples:
        >>> count_words("one two  three")
        3
        >>> count_words("")
        1
    """
    return len(_WHITESPACE_RE.split(text))


_LEADING_INT_RE = re.compile(r"\s*([+-]?)(\d+)", re.ASCII)
_MAX_INT_DIGITS = 18


def leading_int(value: Optional[str]) -> Optional[int]:
    """Parse the integer prefix of *value*, ignoring anything after it.

    Returns None when *value* does not start with a number.

    Examples:
        >>> leading_int("1px")
        1
        >>> leading_int(" 300.5")
        300
        >>> leading_int("auto") is None
        True
    """
    match = _LEADING_INT_RE.match(value or "")
    if not match:
        return None
    digits = match.group(2).lstrip("0") or "0"
    if len(digits) > _MAX_INT_DIGITS:
        digits = "9" * _MAX_INT_DIGITS
    number = int(digits)
    return -number if match.group(1) == "-" else number
