"""Baseline-vs-plc aggregation and Go/No-Go gating."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from plc.config import GateConfig
from plc.metrics.records import Mode, RunRecord

GO = "GO"
NO_GO = "NO-GO"


@dataclass(frozen=True, slots=True)
class ModeSummary:
    """Per-mode means and rates; rates are fractions in [0, 1]."""

    n: int
    tokens_per_task: float
    first_pass_rate: float
    reask_rate: float
    turns_to_done: float
    violations: float


@dataclass(frozen=True, slots=True)
class Gains:
    """Percent improvement of plc over baseline, positive is better."""

    tokens: float
    first_pass: float
    reask: float


@dataclass(frozen=True, slots=True)
class GateResult:
    tokens: bool
    first_pass: bool
    reask: bool
    decision: str

    @property
    def passed(self) -> int:
        return sum((self.tokens, self.first_pass, self.reask))


@dataclass(frozen=True, slots=True)
class AggregationResult:
    baseline: ModeSummary
    plc: ModeSummary
    gains: Gains
    gates: GateResult
    config: GateConfig


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def bool_rate(records: Sequence[RunRecord], predicate: Callable[[RunRecord], bool]) -> float:
    if not records:
        return 0.0
    return sum(1 for record in records if predicate(record)) / len(records)


def delta(base: float, treatment: float, lower_is_better: bool = True) -> float:
    """Percent change from ``base`` to ``treatment``, signed so positive is better.

    A zero baseline yields 0 when the treatment is also 0 and 100 otherwise,
    whatever the polarity or the treatment's sign. Gate arithmetic relies on
    that sentinel.
    """

    if base == 0:
        return 0.0 if treatment == 0 else 100.0
    raw = ((treatment - base) / base) * 100.0
    return -raw if lower_is_better else raw


def summarize(records: Sequence[RunRecord]) -> ModeSummary:
    return ModeSummary(
        n=len(records),
        tokens_per_task=mean(
            [r.total_tokens_actual or r.prompt_tokens_est_out or 0 for r in records]
        ),
        first_pass_rate=bool_rate(records, lambda r: r.first_pass_success is True),
        reask_rate=bool_rate(records, lambda r: r.reask_count > 0),
        turns_to_done=mean([r.turns_to_done or 0 for r in records]),
        violations=mean([r.constraint_violation or 0 for r in records]),
    )


def evaluate_gates(gains: Gains, config: GateConfig | None = None) -> GateResult:
    config = config or GateConfig()
    tokens = gains.tokens >= config.token_reduction_min
    first_pass = gains.first_pass >= config.first_pass_increase_min
    reask = gains.reask >= config.reask_reduction_min
    passed = sum((tokens, first_pass, reask))
    return GateResult(
        tokens=tokens,
        first_pass=first_pass,
        reask=reask,
        decision=GO if passed >= config.required_passes else NO_GO,
    )


def aggregate(
    records: Iterable[RunRecord],
    *,
    gates: GateConfig | None = None,
) -> AggregationResult:
    """Summarize baseline and plc runs and evaluate the adoption gates.

    Records whose mode is neither ``baseline`` nor ``plc`` are ignored.
    """

    config = gates or GateConfig()
    by_mode: dict[str, list[RunRecord]] = {Mode.BASELINE.value: [], Mode.PLC.value: []}
    for record in records:
        bucket = by_mode.get(record.mode)
        if bucket is not None:
            bucket.append(record)

    baseline = summarize(by_mode[Mode.BASELINE.value])
    plc = summarize(by_mode[Mode.PLC.value])
    gains = Gains(
        tokens=delta(baseline.tokens_per_task, plc.tokens_per_task, lower_is_better=True),
        first_pass=delta(baseline.first_pass_rate, plc.first_pass_rate, lower_is_better=False),
        reask=delta(baseline.reask_rate, plc.reask_rate, lower_is_better=True),
    )
    return AggregationResult(
        baseline=baseline,
        plc=plc,
        gains=gains,
        gates=evaluate_gates(gains, config),
        config=config,
    )
