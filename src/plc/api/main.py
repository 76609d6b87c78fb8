"""FastAPI entrypoint for compile/run-log/report endpoints."""

from __future__ import annotations

import os
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from plc.compiler.pipeline import ContextCompiler
from plc.config import CompilerConfig, GateConfig, RunLogConfig
from plc.errors import InvalidInputError
from plc.metrics.aggregator import aggregate
from plc.metrics.records import Mode, new_run_record
from plc.metrics.report import render_report, report_to_dict
from plc.metrics.store import RunLogStore


class CompileRequest(BaseModel):
    context: str = ""
    query: str
    small_model: str | None = None


class RunRequest(BaseModel):
    mode: Mode
    tool: str
    task_id: str
    context_chars_in: int = Field(default=0, ge=0)
    context_chars_out: int = Field(default=0, ge=0)
    prompt_tokens_est_in: int = Field(default=0, ge=0)
    prompt_tokens_est_out: int = Field(default=0, ge=0)
    compile_ms: int = Field(default=0, ge=0)
    lint_warnings: int = Field(default=0, ge=0)
    first_pass_success: bool = False
    reask_count: int = Field(default=0, ge=0)
    turns_to_done: int = Field(default=0, ge=0)
    human_override: bool = False
    constraint_violation: int = Field(default=0, ge=0)
    total_tokens_actual: int = Field(default=0, ge=0)
    latency_sec: float = Field(default=0.0, ge=0.0)


app = FastAPI(title="PLC Prompt Compiler", version="0.1.0")

_compiler_config = CompilerConfig()
_compiler = ContextCompiler(_compiler_config)
_gates = GateConfig()
_store = RunLogStore(os.getenv("PLC_RUNS_LOG", RunLogConfig().path))


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "compiler": _compiler_config.compiler_id,
        "run_log": str(_store.path),
    }


@app.post("/compile")
def compile_prompt(request: CompileRequest) -> dict[str, Any]:
    try:
        result = _compiler.compile(request.context, request.query, request.small_model)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return {
        "compiled": result.document,
        "metrics": result.metrics.to_dict(),
        "fallback_used": result.fallback_used,
    }


@app.post("/runs")
def record_run(request: RunRequest) -> dict[str, Any]:
    try:
        record = new_run_record(**request.model_dump())
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    _store.append(record)
    return record.to_dict()


@app.get("/runs")
def list_runs(limit: int = 20) -> dict[str, Any]:
    return {"items": [record.to_dict() for record in _store.list_recent(limit=limit)]}


@app.get("/report")
def report() -> dict[str, Any]:
    result = aggregate(_store.read(), gates=_gates)
    return {
        **report_to_dict(result),
        "source": str(_store.path),
        "text": render_report(result, str(_store.path)),
    }
