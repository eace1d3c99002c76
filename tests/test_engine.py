# tests/test_engine.py
"""Tests for rule dispatch and the lint entry points."""

import pytest

from gqlstyle.checkers import RuleRegistry
from gqlstyle.config import IgnoreEntry, LintOptions
from gqlstyle.diagnostics import Severity
from gqlstyle.engine import RuleRunner, lint_file, lint_source
from gqlstyle.errors import (
    ConfigError,
    DuplicateTypeName,
    ErrorCodes,
    GqlStyleError,
    UnresolvedTypeReference,
)
from gqlstyle.heuristics import Heuristics
from gqlstyle.parser import parse_schema
from gqlstyle.report import Verdict
from gqlstyle.symbols import build_symbol_table
from tests.conftest import CLEAN_SDL

MESSY_SDL = '''\
type Users {
  id: ID!
  First_Name: String
  friend: [Users!]!
  usersTags: String
}

enum color { red, lightGreen }

type Query {
  users: [Users]
  user(id: ID!): Users!
}
'''


class NeverPlural:
    def is_plural(self, word):
        return None


class TestRuleRunner:

    def test_stats(self):
        table = build_symbol_table(parse_schema(CLEAN_SDL))
        runner = RuleRunner()
        kept, suppressed = runner.run(table)
        assert kept == []
        assert suppressed == 0
        assert runner.stats.entities == len(list(table.entities()))
        assert runner.stats.rules == RuleRegistry.default().names
        assert "Rule run complete" in runner.stats.summary()

    def test_unknown_rule_is_rejected_before_running(self):
        with pytest.raises(ConfigError) as info:
            RuleRunner(options=LintOptions(disabled_rules=frozenset({"NoSuchRule"})))
        assert info.value.code == ErrorCodes.UNKNOWN_RULE

    def test_unknown_rule_in_ignore_entries(self):
        with pytest.raises(ConfigError):
            RuleRunner(options=LintOptions(ignore=(IgnoreEntry("NoSuchRule", "User.*"),)))


class TestLintSource:

    def test_clean_schema_passes(self):
        report = lint_source(CLEAN_SDL)
        assert report.verdict is Verdict.PASS
        assert report.exit_code == 0

    def test_every_violation_reported_in_one_pass(self):
        report = lint_source(MESSY_SDL)
        rules = {d.rule_id for d in report.diagnostics}
        assert {
            "TypeCasing",
            "TypeSingular",
            "FieldCasing",
            "FieldPlurality",
            "FieldRedundantName",
            "EnumValueCasing",
            "CollectionQueryShape",
            "ByIdQueryShape",
        } <= rules
        assert report.verdict is Verdict.FAIL
        assert report.error_count + report.warning_count == len(report.diagnostics)

    def test_diagnostics_carry_positions(self):
        report = lint_source(MESSY_SDL)
        (diag,) = report.by_rule("TypeCasing")
        assert (diag.location.line, diag.location.column) == (8, 6)

    def test_disabled_rules(self):
        report = lint_source(MESSY_SDL, LintOptions(disabled_rules=frozenset({"TypeSingular"})))
        assert report.by_rule("TypeSingular") == []
        assert report.by_rule("TypeCasing")

    def test_severity_override(self):
        sdl = "type Users { id: ID!, name: String }"
        assert lint_source(sdl).passed
        report = lint_source(sdl, LintOptions(severity_overrides={"TypeSingular": Severity.ERROR}))
        (diag,) = report.by_rule("TypeSingular")
        assert diag.severity is Severity.ERROR
        assert not report.passed

    def test_severity_override_can_downgrade(self):
        report = lint_source(
            "type user { id: ID!, name: String }",
            LintOptions(severity_overrides={"TypeCasing": Severity.WARNING}),
        )
        assert report.passed
        assert report.warning_count == 1

    @pytest.mark.parametrize("jobs", [2, 4, 8])
    def test_thread_pool_gives_identical_report(self, jobs):
        serial = lint_source(MESSY_SDL)
        parallel = lint_source(MESSY_SDL, LintOptions(jobs=jobs))
        assert parallel == serial

    def test_idempotent(self):
        assert lint_source(MESSY_SDL).to_text() == lint_source(MESSY_SDL).to_text()

    def test_inline_suppressions(self):
        sdl = (
            "type Users { # gqlstyle-ignore TypeSingular\n"
            "  id: ID!\n"
            "  name: String\n"
            "}\n"
        )
        report = lint_source(sdl)
        assert report.diagnostics == ()
        assert report.suppressed == 1

    def test_trailing_suppression_does_not_cover_next_line(self):
        sdl = (
            "type User {\n"
            "  id: ID!\n"
            "  user_name: String # gqlstyle-ignore FieldCasing\n"
            "  home_town: String\n"
            "}\n"
        )
        report = lint_source(sdl)
        assert [d.location.field_name for d in report.by_rule("FieldCasing")] == ["home_town"]
        assert report.suppressed == 1

    def test_file_suppression(self):
        report = lint_source("# gqlstyle-ignore-file\ntype user_profiles { Name: String }\n")
        assert report.diagnostics == ()
        assert report.suppressed > 0
        assert report.summary_line().endswith("suppressed")

    def test_ignore_entries(self):
        options = LintOptions(ignore=(IgnoreEntry("FieldRedundantName", "Legacy*.*"),))
        report = lint_source(
            "type LegacyUser { id: ID!, legacyUserName: String }\n"
            "type User { id: ID!, userName: String }\n",
            options,
        )
        assert [d.location.type_name for d in report.by_rule("FieldRedundantName")] == ["User"]
        assert report.suppressed == 1

    def test_custom_heuristics(self):
        report = lint_source("type Users { id: ID!, name: String }", heuristics=Heuristics(plurality=NeverPlural()))
        assert report.by_rule("TypeSingular") == []

    def test_allow_list_applies_with_custom_heuristics(self):
        sdl = "type User { id: ID!, userName: String, userEmail: String }"
        options = LintOptions(entity_name_allow_list=frozenset({"userName"}))
        for heuristics in (None, Heuristics(plurality=NeverPlural())):
            report = lint_source(sdl, options, heuristics=heuristics)
            assert [d.location.field_name for d in report.by_rule("FieldRedundantName")] == ["userEmail"]

    def test_empty_schema_passes(self):
        report = lint_source("")
        assert report.diagnostics == ()
        assert report.passed

    def test_structural_failure_produces_no_report(self):
        with pytest.raises(DuplicateTypeName):
            lint_source("type User { id: ID! }\ntype User { id: ID! }")
        with pytest.raises(UnresolvedTypeReference):
            lint_source("type Query { user: Usr }\ntype User { id: ID! }")

    def test_source_name(self):
        assert lint_source(CLEAN_SDL, source_name="api.graphql").source_name == "api.graphql"


class TestLintFile:

    def test_reads_file(self, tmp_path):
        path = tmp_path / "schema.graphql"
        path.write_text(CLEAN_SDL, encoding="utf-8")
        report = lint_file(path)
        assert report.passed
        assert report.source_name == str(path)

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(GqlStyleError) as info:
            lint_file(tmp_path / "missing.graphql")
        assert info.value.code == ErrorCodes.UNREADABLE_INPUT
        assert "missing.graphql" in str(info.value)
