"""Shared domain models."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(slots=True)
class ContextChunk:
    """A blank-line delimited paragraph of raw context."""

    index: int
    text: str
    score: float = 0.0


@dataclass(frozen=True, slots=True)
class CompileMetrics:
    """Size, timing and lint figures for one compile call."""

    context_chars_in: int
    context_chars_out: int
    prompt_tokens_est_in: int
    prompt_tokens_est_out: int
    compile_ms: int
    lint_warnings: int
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["warnings"] = list(self.warnings)
        return payload


@dataclass(frozen=True, slots=True)
class CompileResult:
    """Compiled document plus the metrics and chunks that produced it."""

    document: str
    metrics: CompileMetrics
    selected: tuple[ContextChunk, ...] = ()
    fallback_used: bool = False


@dataclass(slots=True)
class ToolTrace:
    """Trace record for an executed tool call."""

    name: str
    input_payload: dict[str, Any]
    output_preview: str
    latency_ms: float
