"""Text normalization shared by every scorer."""

from __future__ import annotations

import re

_STRIP_PATTERN = re.compile(r"[^\w\s]")


def tokenize(text: str) -> list[str]:
    """Lowercase `text`, drop punctuation, and split on whitespace runs."""
    return _STRIP_PATTERN.sub("", text.lower()).split()
