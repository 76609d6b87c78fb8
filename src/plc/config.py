"""Configuration models for the prompt compiler and experiment gates."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ScaffoldRule(BaseModel):
    """One execution-scaffold category: trigger patterns plus the directive
    injected when none of them appear in the query or context."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    patterns: list[str] = Field(min_length=1)
    directive: str = Field(min_length=1)


def _default_scaffold_rules() -> list[ScaffoldRule]:
    return [
        ScaffoldRule(
            name="done_when",
            patterns=[r"done_when", r"완료\s*기준", r"acceptance criteria"],
            directive="- DONE_WHEN: 요청한 결과물이 생성되고, 핵심 요구사항이 충족됨",
        ),
        ScaffoldRule(
            name="validation",
            patterns=[r"validate", r"test", r"검증", r"테스트"],
            directive="- VALIDATION: 변경/결과를 점검할 최소 검증 단계를 수행하고 요약 보고",
        ),
    ]


class ScaffoldConfig(BaseModel):
    """Ordered scaffold rules; order decides directive order."""

    model_config = ConfigDict(frozen=True)

    rules: list[ScaffoldRule] = Field(default_factory=_default_scaffold_rules)
    placeholder: str = "- (already present)"


class CompilerConfig(BaseModel):
    """Configures chunk selection, conflict guarding and document notes."""

    model_config = ConfigDict(frozen=True)

    max_selected: int = Field(default=25, ge=1)
    fallback_chunks: int = Field(default=10, ge=0)
    chars_per_token: int = Field(default=4, ge=1)
    compiler_id: str = "plc-poc@0.1.0"
    strategy: str = "relevance_pruning + dedup + conflict_guard + scaffold"
    conflict_pairs: list[tuple[str, str]] = Field(
        default_factory=lambda: [
            ("never", "always"),
            ("must not", "must"),
            ("deny", "allow"),
            ("forbid", "require"),
        ]
    )
    scaffold: ScaffoldConfig = Field(default_factory=ScaffoldConfig)


class GateConfig(BaseModel):
    """Go/No-Go thresholds, in percent improvement over baseline."""

    model_config = ConfigDict(frozen=True)

    token_reduction_min: float = Field(default=20.0, ge=0.0)
    first_pass_increase_min: float = Field(default=15.0, ge=0.0)
    reask_reduction_min: float = Field(default=25.0, ge=0.0)
    required_passes: int = Field(default=2, ge=1, le=3)


class RunLogConfig(BaseModel):
    """Location of the append-only run log."""

    path: str = Field(default=".plc/logs/runs.jsonl", min_length=1)
