"""Human-readable and JSON renderings of an aggregation result."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from plc.metrics.aggregator import AggregationResult


def _verdict(passed: bool) -> str:
    return "PASS" if passed else "FAIL"


def render_report(result: AggregationResult, source: str) -> str:
    b, p, gains, gates, cfg = (
        result.baseline,
        result.plc,
        result.gains,
        result.gates,
        result.config,
    )
    return "\n".join(
        [
            "=== PLC Report ===",
            f"source: {source}",
            f"baseline n={b.n}, plc n={p.n}",
            "",
            "KPI (baseline -> plc):",
            f"- Tokens/task: {b.tokens_per_task:.2f} -> {p.tokens_per_task:.2f}"
            f" (improvement {gains.tokens:.2f}%)",
            f"- First-pass success: {b.first_pass_rate * 100:.2f}% -> {p.first_pass_rate * 100:.2f}%"
            f" (improvement {gains.first_pass:.2f}%)",
            f"- Re-ask rate: {b.reask_rate * 100:.2f}% -> {p.reask_rate * 100:.2f}%"
            f" (improvement {gains.reask:.2f}%)",
            f"- Turns to done: {b.turns_to_done:.2f} -> {p.turns_to_done:.2f}",
            f"- Violations: {b.violations:.2f} -> {p.violations:.2f}",
            "",
            "Go/No-Go gates:",
            f"- token reduction >={cfg.token_reduction_min:g}%: {_verdict(gates.tokens)}",
            f"- first-pass increase >={cfg.first_pass_increase_min:g}%: {_verdict(gates.first_pass)}",
            f"- re-ask reduction >={cfg.reask_reduction_min:g}%: {_verdict(gates.reask)}",
            f"=> Decision: {gates.decision}",
        ]
    )


def report_to_dict(result: AggregationResult) -> dict[str, Any]:
    return {
        "baseline": asdict(result.baseline),
        "plc": asdict(result.plc),
        "gains": asdict(result.gains),
        "gates": asdict(result.gates),
        "thresholds": result.config.model_dump(),
    }
