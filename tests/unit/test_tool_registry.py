import pytest
from pydantic import BaseModel, Field, ValidationError

from plc.agent.registry import ToolRegistry, ToolSpec


class EchoInput(BaseModel):
    value: int = Field(ge=1)


def _echo_spec() -> ToolSpec:
    def _handler(data: EchoInput) -> str:
        return str(data.value)

    return ToolSpec(
        name="echo",
        description="echo positive int",
        args_schema=EchoInput,
        handler=_handler,
    )


def test_tool_registry_validation() -> None:
    registry = ToolRegistry()
    registry.register(_echo_spec())

    assert registry.execute("echo", {"value": 3}) == "3"

    with pytest.raises(ValidationError):
        registry.execute("echo", {"value": 0})


def test_duplicate_tool_registration_rejected() -> None:
    registry = ToolRegistry()
    registry.register(_echo_spec())

    with pytest.raises(ValueError):
        registry.register(_echo_spec())


def test_unknown_tool_raises_key_error() -> None:
    with pytest.raises(KeyError):
        ToolRegistry().execute("missing", {})


def test_tool_observer_captures_latency_and_payload() -> None:
    registry = ToolRegistry()
    registry.register(_echo_spec())

    observed = []
    registry.set_observer(observed.append)
    result = registry.execute("echo", {"value": 7})
    registry.set_observer(None)
    registry.execute("echo", {"value": 8})

    assert result == "7"
    assert len(observed) == 1
    assert observed[0].name == "echo"
    assert observed[0].input_payload == {"value": 7}
    assert observed[0].output_preview == "7"
    assert observed[0].latency_ms >= 0.0


def test_specs_filter_by_tag() -> None:
    registry = ToolRegistry()
    spec = _echo_spec()
    spec.tags.append("math")
    registry.register(spec)

    assert [s.name for s in registry.specs("math")] == ["echo"]
    assert registry.specs("other") == []
