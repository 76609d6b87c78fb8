"""Run records: one observed task execution under an experimental mode."""

from __future__ import annotations

import math
import uuid
from dataclasses import asdict, dataclass, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from plc.errors import InvalidInputError


class Mode(str, Enum):
    BASELINE = "baseline"
    PLC = "plc"


_REQUIRED_FIELDS = ("mode", "tool", "task_id")
_INT_FIELDS = (
    "context_chars_in",
    "context_chars_out",
    "prompt_tokens_est_in",
    "prompt_tokens_est_out",
    "compile_ms",
    "lint_warnings",
    "reask_count",
    "turns_to_done",
    "constraint_violation",
    "total_tokens_actual",
)
_BOOL_FIELDS = ("first_pass_success", "human_override")


@dataclass(frozen=True, slots=True)
class RunRecord:
    """Immutable log row. Field order matches the persisted JSON layout."""

    run_id: str = ""
    timestamp: str = ""
    tool: str = ""
    mode: str = ""
    task_id: str = ""
    context_chars_in: int = 0
    context_chars_out: int = 0
    prompt_tokens_est_in: int = 0
    prompt_tokens_est_out: int = 0
    compile_ms: int = 0
    lint_warnings: int = 0
    first_pass_success: bool = False
    reask_count: int = 0
    turns_to_done: int = 0
    human_override: bool = False
    constraint_violation: int = 0
    total_tokens_actual: int = 0
    latency_sec: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(payload: dict[str, Any]) -> "RunRecord":
        """Build a record from a decoded log row.

        Missing, null or non-numeric numeric fields become 0 and booleans
        count only when they are literally ``true``. Unknown keys are ignored.
        A payload that is not a JSON object raises ``TypeError``.
        """

        if not isinstance(payload, dict):
            raise TypeError(f"Run record must be an object, got {type(payload).__name__}")

        values: dict[str, Any] = {}
        for name in ("run_id", "timestamp", "tool", "mode", "task_id"):
            raw = payload.get(name)
            values[name] = "" if raw is None else str(raw)
        for name in _INT_FIELDS:
            values[name] = _as_number(payload.get(name), int)
        for name in _BOOL_FIELDS:
            values[name] = payload.get(name) is True
        values["latency_sec"] = _as_number(payload.get("latency_sec"), float)
        return RunRecord(**values)


def new_run_record(
    *,
    mode: str | Mode | None,
    tool: str | None,
    task_id: str | None,
    **outcomes: Any,
) -> RunRecord:
    """Create a fresh record with a generated ``run_id`` and UTC timestamp.

    Raises:
        InvalidInputError: If ``mode``, ``tool`` or ``task_id`` is blank.
        TypeError: If ``outcomes`` names an unknown field.
    """

    required = {"mode": mode, "tool": tool, "task_id": task_id}
    for name in _REQUIRED_FIELDS:
        value = required[name]
        if isinstance(value, Mode):
            required[name] = value.value
        elif value is None or not str(value).strip():
            raise InvalidInputError(name)
        else:
            required[name] = str(value)

    known = {f.name for f in fields(RunRecord)}
    unknown = sorted(set(outcomes) - known)
    if unknown:
        raise TypeError(f"Unknown run record field(s): {', '.join(unknown)}")

    return RunRecord(
        **{
            **outcomes,
            **required,
            "run_id": str(uuid.uuid4()),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )


def _as_number(raw: Any, kind: type) -> Any:
    if raw is None or raw == "":
        return kind(0)
    if isinstance(raw, bool):
        return kind(int(raw))
    if kind is int and isinstance(raw, float) and not raw.is_integer():
        return raw if math.isfinite(raw) else 0
    try:
        return kind(raw)
    except (ValueError, TypeError, OverflowError):
        return kind(0)
