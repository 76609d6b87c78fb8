"""Lowercase word tokenizer shared by scoring and selection."""

from __future__ import annotations

import re

# ASCII alphanumerics, Hangul syllables, underscore and hyphen.
_TOKEN_PATTERN = re.compile(r"[a-z0-9가-힣_\-]+")


def tokenize(text: str) -> list[str]:
    """Return lowercase tokens longer than one character, in text order."""
    return [token for token in _TOKEN_PATTERN.findall(text.lower()) if len(token) > 1]
