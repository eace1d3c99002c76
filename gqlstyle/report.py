"""
gqlstyle/report.py
══════════════════

Diagnostic aggregation.

:func:`aggregate` turns the unordered output of a rule run into an
immutable :class:`Report`: exact duplicates removed, diagnostics sorted by
``(type, field or "", argument or "", catalog position, rule id,
message)``, counts per severity, and the pass/fail verdict.  Warnings
never fail a run.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from gqlstyle.checkers import catalog_order
from gqlstyle.diagnostics import Diagnostic, Severity
from gqlstyle.parser import DEFAULT_SOURCE_NAME

EXIT_PASS = 0
EXIT_FAIL = 1


class Verdict(enum.Enum):
    PASS = "pass"
    FAIL = "fail"

    @property
    def exit_code(self) -> int:
        return EXIT_PASS if self is Verdict.PASS else EXIT_FAIL


@dataclass(frozen=True)
class Report:
    """
    Result of one lint run.

    Attributes
    ----------
    diagnostics : tuple of Diagnostic
        Deduplicated and sorted.
    error_count, warning_count : int
        Counts per severity.
    verdict : Verdict
        ``FAIL`` when any Error diagnostic exists.
    suppressed : int
        Diagnostics removed by suppressions before aggregation.
    source_name : str
        The schema file the report is about.
    """

    diagnostics: Tuple[Diagnostic, ...] = ()
    error_count: int = 0
    warning_count: int = 0
    verdict: Verdict = Verdict.PASS
    suppressed: int = 0
    source_name: str = DEFAULT_SOURCE_NAME

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.PASS

    @property
    def exit_code(self) -> int:
        return self.verdict.exit_code

    @property
    def total_count(self) -> int:
        return len(self.diagnostics)

    @property
    def counts(self) -> Dict[str, int]:
        return {
            Severity.ERROR.label: self.error_count,
            Severity.WARNING.label: self.warning_count,
        }

    def by_severity(self, severity: Severity) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is severity]

    def by_rule(self, rule_id: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.rule_id == rule_id]

    def summary_line(self) -> str:
        parts: List[str] = []
        if self.error_count:
            parts.append(f"{self.error_count} error{'s' if self.error_count != 1 else ''}")
        if self.warning_count:
            parts.append(f"{self.warning_count} warning{'s' if self.warning_count != 1 else ''}")
        if not parts:
            line = "no diagnostics emitted"
        else:
            line = "; ".join(parts) + f" ({self.total_count} total)"
        if self.suppressed:
            line += f", {self.suppressed} suppressed"
        return line

    def to_records(self) -> List[Dict[str, Any]]:
        return [d.to_record() for d in self.diagnostics]

    def to_text(self) -> str:
        return "\n".join(d.to_text() for d in self.diagnostics)


def sort_key(
    diag: Diagnostic,
    rule_order: Mapping[str, int],
) -> Tuple[Any, ...]:
    """Total order over diagnostics; the trailing fields only break exact ties."""
    loc = diag.location
    return (
        loc.type_name,
        loc.field_name or "",
        loc.argument_name or "",
        rule_order.get(diag.rule_id, len(rule_order)),
        diag.rule_id,
        diag.message,
        loc.line,
        loc.column,
        diag.severity.label,
        diag.suggested_fix or "",
    )


def aggregate(
    diagnostics: Iterable[Diagnostic],
    suppressed: int = 0,
    rule_order: Optional[Mapping[str, int]] = None,
    source_name: str = DEFAULT_SOURCE_NAME,
) -> Report:
    """Deduplicate, sort and count *diagnostics*; decide the verdict.

    Parameters
    ----------
    diagnostics:
        Any iterable, in any order, possibly with exact duplicates.
    suppressed:
        Count carried into the report.
    rule_order:
        Catalog positions used as tie-break; defaults to the built-in
        catalog.
    source_name:
        Schema file name carried into the report.
    """
    order = catalog_order() if rule_order is None else rule_order
    unique = sorted(set(diagnostics), key=lambda d: sort_key(d, order))
    errors = sum(1 for d in unique if d.severity is Severity.ERROR)
    warnings = len(unique) - errors
    return Report(
        diagnostics=tuple(unique),
        error_count=errors,
        warning_count=warnings,
        verdict=Verdict.FAIL if errors else Verdict.PASS,
        suppressed=suppressed,
        source_name=source_name,
    )


__all__ = [
    "EXIT_PASS",
    "EXIT_FAIL",
    "Verdict",
    "Report",
    "sort_key",
    "aggregate",
]
