"""Tool registry exposing PLC operations to agent runtimes."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from langchain_core.tools import StructuredTool, ToolException
from pydantic import BaseModel, ConfigDict, Field

from plc.errors import PLCError
from plc.obs.tracing import Timer
from plc.types import ToolTrace


class ToolSpec(BaseModel):
    """A named PLC operation with a pydantic argument schema."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    description: str
    args_schema: type[BaseModel]
    handler: Callable[[BaseModel], str]
    tags: list[str] = Field(default_factory=list)

    def invoke(self, payload: dict[str, Any]) -> str:
        return self.handler(self.args_schema.model_validate(payload))


class ToolRegistry:
    """Holds PLC tool specs, traces executions and exports LangChain tools.

    Direct calls through :meth:`execute` propagate validation and PLC errors.
    Exported LangChain tools turn :class:`PLCError` into ``ToolException`` so
    the agent sees the message instead of aborting its loop.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}
        self._observer: Callable[[ToolTrace], None] | None = None

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = spec

    def set_observer(self, observer: Callable[[ToolTrace], None] | None) -> None:
        """Set an optional callback invoked after each successful execution."""
        self._observer = observer

    def specs(self, tag: str | None = None) -> list[ToolSpec]:
        return [spec for spec in self._tools.values() if tag is None or tag in spec.tags]

    def execute(self, name: str, payload: dict[str, Any]) -> str:
        spec = self._tools.get(name)
        if spec is None:
            raise KeyError(f"Unknown tool: {name}")

        with Timer() as timer:
            output = spec.invoke(payload)

        if self._observer is not None:
            self._observer(
                ToolTrace(
                    name=spec.name,
                    input_payload=payload,
                    output_preview=output[:320],
                    latency_ms=timer.elapsed_ms,
                )
            )
        return output

    def as_langchain_tools(self, tag: str | None = None) -> list[StructuredTool]:
        return [
            StructuredTool.from_function(
                name=spec.name,
                description=spec.description,
                args_schema=spec.args_schema,
                func=self._agent_callable(spec.name),
                handle_tool_error=True,
            )
            for spec in self.specs(tag)
        ]

    def _agent_callable(self, name: str) -> Callable[..., str]:
        def _call(**kwargs: Any) -> str:
            try:
                return self.execute(name, kwargs)
            except PLCError as exc:
                raise ToolException(str(exc)) from exc

        return _call
