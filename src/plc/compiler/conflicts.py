"""Contradictory-directive detection."""

from __future__ import annotations

from plc.config import CompilerConfig


class ConflictDetector:
    """Flags word pairs that both appear somewhere in the text.

    Matching is plain lowercase substring containment with no proximity or
    negation handling, so ``must not`` also satisfies ``must``.
    """

    def __init__(self, pairs: list[tuple[str, str]] | None = None) -> None:
        self.pairs = list(pairs if pairs is not None else CompilerConfig().conflict_pairs)

    def detect(self, text: str) -> list[str]:
        lower = text.lower()
        return [
            f"Potential conflict: '{first}' with '{second}'"
            for first, second in self.pairs
            if first in lower and second in lower
        ]
