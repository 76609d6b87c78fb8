import pytest
from pydantic import ValidationError

from plc.agent.registry import ToolRegistry
from plc.agent.tools import register_plc_tools
from plc.metrics.store import RunLogStore


def _registry(tmp_path) -> tuple[ToolRegistry, RunLogStore]:
    store = RunLogStore(tmp_path / "runs.jsonl")
    registry = ToolRegistry()
    register_plc_tools(registry, store)
    return registry, store


def test_agent_drives_compile_record_and_report(tmp_path) -> None:
    registry, store = _registry(tmp_path)
    observed = []
    registry.set_observer(observed.append)

    document = registry.execute(
        "compile_context", {"context": "foo bar\n\nbar baz", "query": "foo"}
    )
    registry.execute(
        "record_run",
        {"mode": "baseline", "tool": "agent", "task_id": "T1", "total_tokens_actual": 100,
         "reask_count": 1},
    )
    registry.execute(
        "record_run",
        {"mode": "plc", "tool": "agent", "task_id": "T1", "total_tokens_actual": 60,
         "first_pass_success": True},
    )
    report = registry.execute("report_runs", {})

    assert "## CONTEXT\nfoo bar\n" in document
    assert [record.mode for record in store.read()] == ["baseline", "plc"]
    assert "=> Decision: GO" in report
    assert [trace.name for trace in observed] == [
        "compile_context",
        "record_run",
        "record_run",
        "report_runs",
    ]


def test_tool_inputs_are_validated(tmp_path) -> None:
    registry, _ = _registry(tmp_path)

    with pytest.raises(ValidationError):
        registry.execute("compile_context", {"context": "x", "query": ""})
    with pytest.raises(ValidationError):
        registry.execute("record_run", {"mode": "other", "tool": "a", "task_id": "T"})


def test_report_tool_json_output(tmp_path) -> None:
    registry, _ = _registry(tmp_path)
    assert '"decision": "NO-GO"' in registry.execute("report_runs", {"as_json": True})


def test_tools_export_to_langchain(tmp_path) -> None:
    registry, _ = _registry(tmp_path)

    tools = registry.as_langchain_tools()

    assert sorted(tool.name for tool in tools) == ["compile_context", "record_run", "report_runs"]


def test_langchain_tools_filter_by_tag_and_surface_plc_errors(tmp_path) -> None:
    registry, _ = _registry(tmp_path)

    metrics_tools = registry.as_langchain_tools(tag="metrics")
    compile_tool = registry.as_langchain_tools(tag="compiler")[0]

    assert sorted(tool.name for tool in metrics_tools) == ["record_run", "report_runs"]
    assert compile_tool.invoke({"context": "x", "query": "   "}) == "query is required"
