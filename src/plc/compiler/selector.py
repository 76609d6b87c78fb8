"""Paragraph chunking and relevance-based selection."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from plc.compiler.scoring import score_chunk
from plc.config import CompilerConfig
from plc.types import ContextChunk

logger = logging.getLogger(__name__)

_BLANK_LINE_SPLIT = re.compile(r"\n\s*\n+")


class ChunkSelector:
    """Ranks context paragraphs against the query and keeps the top slice.

    Selection policy:
    1. Chunks with a positive score are ranked by score, highest first. The
       sort is stable, so ties keep their original order.
    2. At most ``max_selected`` ranked chunks are kept.
    3. When nothing overlaps the query, the first ``fallback_chunks`` chunks
       are kept in original order so the prompt never loses all context.
    """

    def __init__(self, config: CompilerConfig | None = None) -> None:
        self.config = config or CompilerConfig()

    @staticmethod
    def split(raw_context: str) -> list[ContextChunk]:
        parts = [part.strip() for part in _BLANK_LINE_SPLIT.split(raw_context)]
        return [
            ContextChunk(index=i, text=text)
            for i, text in enumerate(part for part in parts if part)
        ]

    def score(self, chunks: list[ContextChunk], query_tokens: Iterable[str]) -> None:
        query_set = set(query_tokens)
        for chunk in chunks:
            chunk.score = score_chunk(chunk.text, query_set)

    def select(
        self, chunks: list[ContextChunk], query_tokens: Iterable[str]
    ) -> tuple[list[ContextChunk], bool]:
        """Score and select chunks; returns ``(selected, fallback_used)``."""

        self.score(chunks, query_tokens)
        ranked = sorted(
            (chunk for chunk in chunks if chunk.score > 0),
            key=lambda chunk: chunk.score,
            reverse=True,
        )[: self.config.max_selected]

        if ranked:
            logger.debug("Selected %d of %d chunks by relevance", len(ranked), len(chunks))
            return ranked, False

        fallback = chunks[: self.config.fallback_chunks]
        if chunks:
            logger.debug(
                "No chunk overlaps the query; falling back to first %d chunks",
                len(fallback),
            )
        return fallback, bool(chunks)
