from plc.compiler.scaffold import ScaffoldBuilder
from plc.config import ScaffoldConfig, ScaffoldRule


def test_both_directives_added_in_fixed_order() -> None:
    builder = ScaffoldBuilder()
    directives = builder.build("작업해줘", "context")

    assert len(directives) == 2
    assert directives[0].startswith("- DONE_WHEN:")
    assert directives[1].startswith("- VALIDATION:")


def test_present_categories_yield_placeholder() -> None:
    builder = ScaffoldBuilder()

    assert builder.build("DONE_WHEN and test", "acceptance criteria validate") == []
    assert builder.render("ship it", "Acceptance Criteria: validate output") == "- (already present)"


def test_bilingual_triggers() -> None:
    builder = ScaffoldBuilder()

    assert builder.build("완료 기준 정리", "검증 단계") == []
    assert builder.build("완료기준", "") == [builder.config.rules[1].directive]


def test_query_alone_can_satisfy_rules() -> None:
    builder = ScaffoldBuilder()
    assert builder.build("  please validate the parser  ", "unrelated") == [
        builder.config.rules[0].directive
    ]


def test_rules_are_configurable() -> None:
    config = ScaffoldConfig(
        rules=[
            ScaffoldRule(name="rollback", patterns=[r"roll\s*back"], directive="- ROLLBACK: describe it"),
        ]
    )
    builder = ScaffoldBuilder(config)

    assert builder.build("deploy", "") == ["- ROLLBACK: describe it"]
    assert builder.render("deploy with rollback", "") == "- (already present)"
