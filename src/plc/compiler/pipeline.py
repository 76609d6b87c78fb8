"""End-to-end context compilation: select -> dedup -> conflict guard -> scaffold."""

from __future__ import annotations

import logging

from plc.compiler.conflicts import ConflictDetector
from plc.compiler.dedup import dedup_lines
from plc.compiler.scaffold import ScaffoldBuilder
from plc.compiler.selector import ChunkSelector
from plc.compiler.tokenizer import tokenize
from plc.config import CompilerConfig
from plc.errors import InvalidInputError
from plc.obs.tracing import Timer, estimate_token_count
from plc.types import CompileMetrics, CompileResult

logger = logging.getLogger(__name__)

_DOCUMENT_TEMPLATE = """# COMPILED_PROMPT

## QUERY
{query}

## CONTEXT
{context}

## EXECUTION_SCAFFOLD
{scaffold}

## NOTES
- compiler: {compiler_id}
- small_model: {model_label}
- strategy: {strategy}
"""


class ContextCompiler:
    """Turns raw context plus a query into a bounded, annotated prompt.

    The compiler holds only configuration; every call builds its own chunk
    list and seen-line set, so one instance can be shared freely.
    """

    def __init__(self, config: CompilerConfig | None = None) -> None:
        self.config = config or CompilerConfig()
        self.selector = ChunkSelector(self.config)
        self.conflicts = ConflictDetector(self.config.conflict_pairs)
        self.scaffold = ScaffoldBuilder(self.config.scaffold)

    def compile(
        self,
        raw_context: str,
        query: str,
        model_label: str | None = None,
    ) -> CompileResult:
        """Compile one prompt.

        Args:
            raw_context: Concatenated context documents; may be empty.
            query: User request; must contain non-whitespace text.
            model_label: Optional small-model label recorded in the notes.

        Returns:
            A :class:`CompileResult` with the document and its metrics.

        Raises:
            InvalidInputError: If ``query`` is blank.
        """

        if not query or not query.strip():
            raise InvalidInputError("query")

        with Timer() as timer:
            query_tokens = set(tokenize(query))
            chunks = self.selector.split(raw_context)
            selected, fallback_used = self.selector.select(chunks, query_tokens)

            deduped = dedup_lines("\n\n".join(chunk.text for chunk in selected))
            warnings = self.conflicts.detect(deduped)
            scaffold = self.scaffold.render(query, deduped)

            document = _DOCUMENT_TEMPLATE.format(
                query=query.strip(),
                context=deduped.strip(),
                scaffold=scaffold,
                compiler_id=self.config.compiler_id,
                model_label=model_label or "none",
                strategy=self.config.strategy,
            )

        per_token = self.config.chars_per_token
        metrics = CompileMetrics(
            context_chars_in=len(raw_context),
            context_chars_out=len(deduped),
            prompt_tokens_est_in=estimate_token_count(raw_context + "\n" + query, per_token),
            prompt_tokens_est_out=estimate_token_count(document, per_token),
            compile_ms=int(timer.elapsed_ms),
            lint_warnings=len(warnings),
            warnings=tuple(warnings),
        )
        logger.info(
            "Compiled %d/%d chunks (fallback=%s): %d -> %d chars, %d warning(s)",
            len(selected),
            len(chunks),
            fallback_used,
            metrics.context_chars_in,
            metrics.context_chars_out,
            metrics.lint_warnings,
        )
        return CompileResult(
            document=document,
            metrics=metrics,
            selected=tuple(selected),
            fallback_used=fallback_used,
        )


def compile_context(
    raw_context: str,
    query: str,
    model_label: str | None = None,
    *,
    config: CompilerConfig | None = None,
) -> CompileResult:
    """Functional shortcut for :meth:`ContextCompiler.compile`."""
    return ContextCompiler(config).compile(raw_context, query, model_label)
