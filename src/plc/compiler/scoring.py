"""Query-overlap relevance scoring."""

from __future__ import annotations

from collections.abc import Iterable
from math import sqrt

from plc.compiler.tokenizer import tokenize


def score_chunk(chunk: str, query_tokens: Iterable[str]) -> float:
    """Score a chunk by query-token hits, damped by chunk length.

    ``score = hits / sqrt(len(chunk_tokens) + 1)`` where ``hits`` counts chunk
    token occurrences found in the query-token set. Chunks without tokens
    score 0.
    """

    tokens = tokenize(chunk)
    if not tokens:
        return 0.0
    query_set = set(query_tokens)
    overlap = sum(1 for token in tokens if token in query_set)
    return overlap / sqrt(len(tokens) + 1)
