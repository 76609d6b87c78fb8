"""Timing and coarse token accounting."""

from __future__ import annotations

import math
import time


class Timer:
    """Simple context timer used by the compiler and tool registry."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0


def estimate_token_count(text: str | None, chars_per_token: int = 4) -> int:
    """Character-length proxy for model tokens: ``ceil(len / chars_per_token)``."""
    return math.ceil(len(text or "") / chars_per_token)
