"""Command-line entry point: ``plc compile | run | report``."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import typer

from plc.compiler.pipeline import ContextCompiler
from plc.config import RunLogConfig
from plc.errors import InvalidInputError, PLCError
from plc.ingest.loader import ContextLoader, load_query
from plc.metrics.aggregator import aggregate
from plc.metrics.records import Mode, new_run_record
from plc.metrics.report import render_report, report_to_dict
from plc.metrics.store import RunLogStore
from plc.obs.log import setup_logging

DEFAULT_RUN_LOG = RunLogConfig().path

app = typer.Typer(
    add_completion=False,
    help="PLC PoC CLI v0.1.0: compile pruned prompts and track baseline vs plc runs.",
)


@contextmanager
def _reported_errors() -> Iterator[None]:
    try:
        yield
    except (PLCError, OSError, ValueError) as exc:
        typer.echo(f"[PLC ERROR] {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    setup_logging("DEBUG" if verbose else "WARNING")


@app.command("compile")
def compile_command(
    context: Optional[str] = typer.Option(
        None, "--context", help="Comma-separated file/dir paths (markdown/txt)."
    ),
    query: Optional[str] = typer.Option(
        None, "--query", help="Query text or @path/to/query.txt."
    ),
    out: Path = typer.Option(Path("compiled_prompt.md"), "--out", help="Output markdown path."),
    small_model: Optional[str] = typer.Option(
        None, "--small-model", help="Optional label for small-model refinement metadata."
    ),
) -> None:
    """Compile context files and a query into a pruned prompt document."""
    with _reported_errors():
        if not context:
            raise InvalidInputError("--context")
        query_text = load_query(query)
        raw_context = ContextLoader().load(context)
        result = ContextCompiler().compile(raw_context, query_text, small_model)
        out.write_text(result.document, encoding="utf-8")

    typer.echo(f"Compiled prompt written to {out}")
    if result.metrics.warnings:
        typer.echo("Warnings:")
        for warning in result.metrics.warnings:
            typer.echo(f"- {warning}")
    typer.echo(json.dumps(result.metrics.to_dict(), indent=2, ensure_ascii=False))


@app.command("run")
def run_command(
    mode: Mode = typer.Option(..., "--mode", help="Experimental condition."),
    tool: str = typer.Option(..., "--tool", help="Tool identifier, e.g. claude_code or cursor."),
    task_id: str = typer.Option(..., "--task-id", help="Benchmark task identifier."),
    first_pass_success: bool = typer.Option(
        False, "--first-pass-success/--no-first-pass-success"
    ),
    reask_count: int = typer.Option(0, "--reask-count", min=0),
    turns_to_done: int = typer.Option(0, "--turns-to-done", min=0),
    human_override: bool = typer.Option(False, "--human-override/--no-human-override"),
    constraint_violation: int = typer.Option(0, "--constraint-violation", min=0),
    total_tokens_actual: int = typer.Option(0, "--total-tokens-actual", min=0),
    latency_sec: float = typer.Option(0.0, "--latency-sec", min=0.0),
    context_chars_in: int = typer.Option(0, "--context-chars-in", min=0),
    context_chars_out: int = typer.Option(0, "--context-chars-out", min=0),
    prompt_tokens_est_in: int = typer.Option(0, "--prompt-tokens-est-in", min=0),
    prompt_tokens_est_out: int = typer.Option(0, "--prompt-tokens-est-out", min=0),
    compile_ms: int = typer.Option(0, "--compile-ms", min=0),
    lint_warnings: int = typer.Option(0, "--lint-warnings", min=0),
    log: Path = typer.Option(
        Path(DEFAULT_RUN_LOG), "--log", envvar="PLC_RUNS_LOG", help="Run log to append to."
    ),
) -> None:
    """Append one task outcome to the run log."""
    with _reported_errors():
        record = new_run_record(
            mode=mode,
            tool=tool,
            task_id=task_id,
            first_pass_success=first_pass_success,
            reask_count=reask_count,
            turns_to_done=turns_to_done,
            human_override=human_override,
            constraint_violation=constraint_violation,
            total_tokens_actual=total_tokens_actual,
            latency_sec=latency_sec,
            context_chars_in=context_chars_in,
            context_chars_out=context_chars_out,
            prompt_tokens_est_in=prompt_tokens_est_in,
            prompt_tokens_est_out=prompt_tokens_est_out,
            compile_ms=compile_ms,
            lint_warnings=lint_warnings,
        )
        RunLogStore(log).append(record)
    typer.echo(f"Run logged: {record.run_id}")


@app.command("report")
def report_command(
    source: Path = typer.Option(
        Path(DEFAULT_RUN_LOG), "--from", envvar="PLC_RUNS_LOG", help="Run log to summarize."
    ),
    json_out: Optional[Path] = typer.Option(
        None, "--json", help="Also write the aggregation as JSON to this path."
    ),
) -> None:
    """Summarize logged runs and print the Go/No-Go decision."""
    with _reported_errors():
        result = aggregate(RunLogStore(source).read())
    typer.echo(render_report(result, str(source)))
    if json_out is not None:
        with _reported_errors():
            json_out.parent.mkdir(parents=True, exist_ok=True)
            json_out.write_text(json.dumps(report_to_dict(result), indent=2), encoding="utf-8")


if __name__ == "__main__":
    app()
