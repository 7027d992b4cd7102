"""Splitting of command lines into words."""

from __future__ import annotations

import re

# Characters the C library's isspace() accepts in the default locale.
_TRIM_CHARS = " \t\n\v\f\r"
_SEPARATORS = re.compile(r"[ \t\n]+")


def split_string(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces, tabs or newlines.

    Leading and trailing whitespace is trimmed first; other whitespace
    characters inside a word (such as a carriage return) are kept.
    """
    trimmed = text.strip(_TRIM_CHARS)
    return [word for word in _SEPARATORS.split(trimmed) if word]