"""Built-in PLC tools for agent runtimes."""

from __future__ import annotations

import json

from pydantic import BaseModel, Field

from plc.agent.registry import ToolRegistry, ToolSpec
from plc.compiler.pipeline import ContextCompiler
from plc.config import GateConfig
from plc.metrics.aggregator import aggregate
from plc.metrics.records import Mode, new_run_record
from plc.metrics.report import render_report, report_to_dict
from plc.metrics.store import RunLogStore


class CompileToolInput(BaseModel):
    context: str = ""
    query: str = Field(min_length=1)
    small_model: str | None = None


class RecordRunToolInput(BaseModel):
    mode: Mode
    tool: str = Field(min_length=1)
    task_id: str = Field(min_length=1)
    first_pass_success: bool = False
    reask_count: int = Field(default=0, ge=0)
    turns_to_done: int = Field(default=0, ge=0)
    human_override: bool = False
    constraint_violation: int = Field(default=0, ge=0)
    total_tokens_actual: int = Field(default=0, ge=0)
    latency_sec: float = Field(default=0.0, ge=0.0)
    prompt_tokens_est_out: int = Field(default=0, ge=0)


class ReportToolInput(BaseModel):
    as_json: bool = False


def register_plc_tools(
    registry: ToolRegistry,
    store: RunLogStore,
    *,
    compiler: ContextCompiler | None = None,
    gates: GateConfig | None = None,
) -> None:
    """Register the default PLC tool set.

    Tools:
    - `compile_context`: compile raw context + query into a prompt document.
    - `record_run`: append one baseline/plc outcome to the run log.
    - `report_runs`: aggregate the run log and return the Go/No-Go report.
    """

    context_compiler = compiler or ContextCompiler()

    def _compile(input_data: CompileToolInput) -> str:
        result = context_compiler.compile(
            input_data.context, input_data.query, input_data.small_model
        )
        return result.document

    def _record(input_data: RecordRunToolInput) -> str:
        record = new_run_record(**input_data.model_dump())
        store.append(record)
        return f"Run logged: {record.run_id}"

    def _report(input_data: ReportToolInput) -> str:
        result = aggregate(store.read(), gates=gates)
        if input_data.as_json:
            return json.dumps(report_to_dict(result), indent=2)
        return render_report(result, str(store.path))

    registry.register(
        ToolSpec(
            name="compile_context",
            description="Compile context documents and a query into a pruned prompt.",
            args_schema=CompileToolInput,
            handler=_compile,
            tags=["compiler"],
        )
    )
    registry.register(
        ToolSpec(
            name="record_run",
            description="Record the outcome of one task run under baseline or plc mode.",
            args_schema=RecordRunToolInput,
            handler=_record,
            tags=["metrics"],
        )
    )
    registry.register(
        ToolSpec(
            name="report_runs",
            description="Summarize logged runs and return the Go/No-Go decision.",
            args_schema=ReportToolInput,
            handler=_report,
            tags=["metrics", "report"],
        )
    )
