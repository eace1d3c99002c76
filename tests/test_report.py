# tests/test_report.py
"""Tests for diagnostic aggregation and the Report value."""

import random

from gqlstyle.diagnostics import Diagnostic, Location, Severity
from gqlstyle.report import EXIT_FAIL, EXIT_PASS, Report, Verdict, aggregate


def _d(rule, type_name, field_name=None, severity=Severity.ERROR, message="bad", argument_name=None):
    return Diagnostic(rule, severity, message, Location(type_name, field_name, argument_name))


class TestAggregate:

    def test_empty(self):
        report = aggregate([])
        assert report == Report()
        assert report.verdict is Verdict.PASS
        assert report.summary_line() == "no diagnostics emitted"

    def test_exact_duplicates_removed(self):
        report = aggregate([_d("TypeCasing", "user")] * 3)
        assert report.total_count == 1

    def test_near_duplicates_kept(self):
        report = aggregate([
            _d("TypeCasing", "user"),
            _d("TypeCasing", "user", message="other"),
        ])
        assert report.total_count == 2

    def test_sort_order(self):
        diags = [
            _d("FieldCasing", "User", "b"),
            _d("TypeSingular", "Users", severity=Severity.WARNING),
            _d("FieldPlurality", "User", "a", severity=Severity.WARNING),
            _d("TypeSingular", "User", severity=Severity.WARNING),
            _d("TypeCasing", "User"),
            _d("FieldCasing", "User", "a"),
            _d("FieldCasing", "User", "a", argument_name="x"),
        ]
        expected = [
            ("User", None, None, "TypeCasing"),
            ("User", None, None, "TypeSingular"),
            ("User", "a", None, "FieldCasing"),
            ("User", "a", None, "FieldPlurality"),
            ("User", "a", "x", "FieldCasing"),
            ("User", "b", None, "FieldCasing"),
            ("Users", None, None, "TypeSingular"),
        ]
        for seed in range(5):
            shuffled = list(diags)
            random.Random(seed).shuffle(shuffled)
            report = aggregate(shuffled)
            got = [
                (d.location.type_name, d.location.field_name, d.location.argument_name, d.rule_id)
                for d in report.diagnostics
            ]
            assert got == expected

    def test_catalog_order_breaks_ties_not_alphabet(self):
        report = aggregate([_d("FieldRedundantName", "User", "x"), _d("FieldPlurality", "User", "x")])
        assert [d.rule_id for d in report.diagnostics] == ["FieldPlurality", "FieldRedundantName"]

    def test_custom_rule_order(self):
        report = aggregate(
            [_d("B", "User"), _d("A", "User")],
            rule_order={"B": 0, "A": 1},
        )
        assert [d.rule_id for d in report.diagnostics] == ["B", "A"]

    def test_unknown_rules_sort_after_catalog(self):
        report = aggregate([_d("Custom", "User"), _d("BooleanFieldPrefix", "User")])
        assert [d.rule_id for d in report.diagnostics] == ["BooleanFieldPrefix", "Custom"]


class TestVerdict:

    def test_warnings_never_fail(self):
        report = aggregate([_d("TypeSingular", "Users", severity=Severity.WARNING)])
        assert report.passed
        assert report.exit_code == EXIT_PASS
        assert report.summary_line() == "1 warning (1 total)"

    def test_any_error_fails(self):
        report = aggregate([
            _d("TypeSingular", "Users", severity=Severity.WARNING),
            _d("TypeCasing", "user"),
            _d("FieldCasing", "user", "A_b"),
        ])
        assert report.verdict is Verdict.FAIL
        assert report.exit_code == EXIT_FAIL
        assert report.counts == {"error": 2, "warning": 1}
        assert report.summary_line() == "2 errors; 1 warning (3 total)"

    def test_suppressed_in_summary(self):
        report = aggregate([_d("TypeCasing", "user")], suppressed=2)
        assert report.summary_line() == "1 error (1 total), 2 suppressed"


class TestReportQueries:

    def test_by_rule_and_severity(self):
        report = aggregate([
            _d("TypeSingular", "Users", severity=Severity.WARNING),
            _d("TypeCasing", "user"),
        ])
        assert [d.rule_id for d in report.by_rule("TypeCasing")] == ["TypeCasing"]
        assert [d.rule_id for d in report.by_severity(Severity.WARNING)] == ["TypeSingular"]

    def test_records_and_text(self):
        report = aggregate([_d("TypeCasing", "user", message="Type 'user' should be PascalCase")])
        assert report.to_records() == [{
            "severity": "error",
            "ruleId": "TypeCasing",
            "message": "Type 'user' should be PascalCase",
            "typeName": "user",
        }]
        assert report.to_text() == "error: Type 'user' should be PascalCase (user) [TypeCasing]"

    def test_source_name(self):
        assert aggregate([], source_name="api.graphql").source_name == "api.graphql"
