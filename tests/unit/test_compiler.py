import re

import pytest

from plc.compiler.dedup import dedup_lines
from plc.compiler.pipeline import ContextCompiler, compile_context
from plc.config import CompilerConfig
from plc.errors import InvalidInputError


def _section(document: str, name: str) -> str:
    match = re.search(rf"## {name}\n(.*?)(?:\n\n## |\Z)", document, flags=re.DOTALL)
    assert match is not None
    return match.group(1)


def test_only_overlapping_chunk_is_selected() -> None:
    result = compile_context("foo bar\n\nbar baz", "foo", "haiku")

    assert result.fallback_used is False
    assert [chunk.text for chunk in result.selected] == ["foo bar"]
    assert _section(result.document, "CONTEXT") == "foo bar"
    assert "- small_model: haiku" in result.document


def test_metrics_are_consistent() -> None:
    raw = "foo bar\n\nbar baz"
    result = compile_context(raw, "foo")
    metrics = result.metrics

    assert metrics.context_chars_in == len(raw)
    assert metrics.context_chars_out == len("foo bar")
    assert metrics.prompt_tokens_est_in == 5
    assert metrics.prompt_tokens_est_out == -(-len(result.document) // 4)
    assert metrics.compile_ms >= 0
    assert metrics.lint_warnings == len(metrics.warnings) == 0


def test_fallback_and_conflict_warning() -> None:
    result = compile_context("never always", "zzzz")

    assert result.fallback_used is True
    assert result.metrics.lint_warnings == 1
    assert result.metrics.warnings == ("Potential conflict: 'never' with 'always'",)
    assert "- small_model: none" in result.document


def test_existing_scaffold_language_yields_placeholder() -> None:
    result = compile_context("acceptance criteria\nvalidate", "DONE_WHEN test")
    assert _section(result.document, "EXECUTION_SCAFFOLD") == "- (already present)"


def test_missing_scaffold_language_yields_two_directives() -> None:
    result = compile_context("alpha beta", "alpha")
    lines = _section(result.document, "EXECUTION_SCAFFOLD").split("\n")

    assert len(lines) == 2
    assert lines[0].startswith("- DONE_WHEN:")
    assert lines[1].startswith("- VALIDATION:")


def test_duplicate_lines_across_chunks_are_collapsed() -> None:
    raw = "deploy rules\nrun lint first\n\ndeploy checklist\nRUN LINT FIRST"
    result = compile_context(raw, "deploy")

    context = _section(result.document, "CONTEXT")
    assert context.lower().count("run lint first") == 1
    assert result.metrics.context_chars_out <= len(raw)


def test_context_section_is_stable_under_dedup() -> None:
    raw = "api auth\nuse tokens\n\napi limits\nuse tokens\n\napi auth"
    context = _section(compile_context(raw, "api").document, "CONTEXT")
    assert dedup_lines(context) == context


def test_empty_context_is_allowed() -> None:
    result = compile_context("", "fix the login bug")

    assert _section(result.document, "CONTEXT") == ""
    assert result.selected == ()
    assert result.metrics.context_chars_in == 0
    assert result.metrics.context_chars_out == 0


@pytest.mark.parametrize("query", ["", "   ", "\n\t"])
def test_blank_query_is_rejected(query: str) -> None:
    with pytest.raises(InvalidInputError) as exc_info:
        compile_context("some context", query)
    assert exc_info.value.field == "query"
    assert "query" in str(exc_info.value)


def test_compile_is_deterministic_apart_from_timing() -> None:
    compiler = ContextCompiler()
    raw = "alpha one\n\nbeta two\n\nalpha three must not"
    first = compiler.compile(raw, "alpha")
    second = compiler.compile(raw, "alpha")

    assert first.document == second.document
    assert first.metrics.warnings == second.metrics.warnings


def test_config_controls_notes_and_selection() -> None:
    config = CompilerConfig(max_selected=1, compiler_id="plc-test@9")
    result = ContextCompiler(config).compile("foo one\n\nfoo two", "foo")

    assert [chunk.text for chunk in result.selected] == ["foo one"]
    assert "- compiler: plc-test@9" in result.document
