"""
gqlstyle/diagnostics.py
═══════════════════════

Diagnostic values and suppression handling.

A :class:`Diagnostic` is an immutable, hashable record of one style
violation: which rule, how severe, what was wrong, where, and optionally
how to fix it.  Rules create them; the aggregator deduplicates and sorts
them; renderers print them.

Suppressions
────────────
    type User {
      # gqlstyle-ignore FieldRedundantName
      userName: String
      legacyIDs: [ID!]!   # gqlstyle-ignore FieldCasing, FieldPlurality
    }
    # gqlstyle-ignore-file TypeSingular

A bare ``# gqlstyle-ignore`` suppresses every rule on the same or the
following line.
"""

from __future__ import annotations

import enum
import re
from collections import defaultdict
from dataclasses import dataclass, replace
from fnmatch import fnmatchcase
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from graphql.language import DocumentNode, TokenKind


# ═════════════════════════════════════════════════════════════════════════
#  SEVERITY ENUM
# ═════════════════════════════════════════════════════════════════════════

class Severity(enum.Enum):
    """
    Diagnostic severity levels.

    Each carries:
      • label      : the lower-case name used in every output format
      • color      : termcolor colour name
      • sarif_level: SARIF 2.1.0 ``level`` string
    """

    ERROR = ("error", "red", "error")
    WARNING = ("warning", "yellow", "warning")

    def __init__(self, label: str, color: str, sarif_level: str) -> None:
        self.label = label
        self.color = color
        self.sarif_level = sarif_level

    @classmethod
    def from_string(cls, s: str) -> "Severity":
        """Parse a severity from its label (case-insensitive).

        Raises ``ValueError`` for anything but ``error``/``warning``
        (``warn`` is accepted as an alias).
        """
        s_low = s.strip().lower()
        if s_low == "warn":
            s_low = "warning"
        for member in cls:
            if member.label == s_low:
                return member
        raise ValueError(f"unknown severity {s!r} (expected 'error' or 'warning')")

    def __str__(self) -> str:
        return self.label


# ═════════════════════════════════════════════════════════════════════════
#  DATA STRUCTURES
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Location:
    """The schema entity a diagnostic is about, plus its source position."""

    type_name: str
    field_name: Optional[str] = None
    argument_name: Optional[str] = None
    line: int = 0
    column: int = 0

    @property
    def path(self) -> str:
        """Dotted entity path: ``Type``, ``Type.field`` or ``Type.field.arg``."""
        parts = [self.type_name]
        if self.field_name is not None:
            parts.append(self.field_name)
            if self.argument_name is not None:
                parts.append(self.argument_name)
        return ".".join(parts)

    def __str__(self) -> str:
        if self.field_name is None:
            return self.type_name
        return f"{self.type_name}.{self.field_name}"


@dataclass(frozen=True)
class Diagnostic:
    """
    One style violation.

    Attributes
    ----------
    rule_id : str
        Catalog name of the rule that produced it (``MutationNaming``).
    severity : Severity
        After any configured override.
    message : str
        Human-readable description.
    location : Location
        Type, optional field, optional argument.
    suggested_fix : str, optional
        A concrete replacement, when the rule can propose one.
    """

    rule_id: str
    severity: Severity
    message: str
    location: Location
    suggested_fix: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def with_severity(self, severity: Severity) -> "Diagnostic":
        if severity is self.severity:
            return self
        return replace(self, severity=severity)

    def to_text(self) -> str:
        """``<severity>: <message> (<type>[.<field>]) [<rule-id>]``"""
        return f"{self.severity.label}: {self.message} ({self.location}) [{self.rule_id}]"

    def to_record(self) -> Dict[str, Any]:
        """Machine-readable record; optional keys are omitted when absent."""
        record: Dict[str, Any] = {
            "severity": self.severity.label,
            "ruleId": self.rule_id,
            "message": self.message,
            "typeName": self.location.type_name,
        }
        if self.location.field_name is not None:
            record["fieldName"] = self.location.field_name
        if self.location.argument_name is not None:
            record["argumentName"] = self.location.argument_name
        if self.suggested_fix is not None:
            record["suggestedFix"] = self.suggested_fix
        return record

    def __str__(self) -> str:
        return self.to_text()


# ═════════════════════════════════════════════════════════════════════════
#  SUPPRESSIONS
# ═════════════════════════════════════════════════════════════════════════

_DIRECTIVE_RE = re.compile(r"^\s*gqlstyle-ignore(?P<file>-file)?(?:\s+(?P<ids>.*))?$")


def _parse_rule_ids(raw: Optional[str]) -> Set[str]:
    ids = {part for part in re.split(r"[\s,]+", raw or "") if part}
    return ids or {"*"}


class SuppressionManager:
    """
    Manages diagnostic suppressions from multiple sources.

    Sources:
      1. Inline comments:  ``# gqlstyle-ignore RuleId`` trailing a line
         covers that line; on a line of its own it covers the next line
      2. File-wide comments: ``# gqlstyle-ignore-file RuleId``
      3. Location patterns:  ``RuleId`` at ``User.*`` (config ``ignore``)
      4. Global suppressions

    Usage
    -----
    >>> sm = SuppressionManager()
    >>> sm.load_inline_suppressions(document)
    >>> sm.add_location_suppression("FieldRedundantName", "User.user*")
    >>> kept = sm.filter_diagnostics(diagnostics)
    """

    def __init__(self) -> None:
        # comment line -> rule ids, for directives trailing code on that line
        self._trailing: Dict[int, Set[str]] = defaultdict(set)
        # comment line -> rule ids, for directives standing on their own line
        self._leading: Dict[int, Set[str]] = defaultdict(set)
        # entity path pattern -> set of rule ids
        self._patterns: Dict[str, Set[str]] = defaultdict(set)
        self._global: Set[str] = set()

    def load_inline_suppressions(self, document: DocumentNode) -> int:
        """
        Scan the document's comment tokens for ``gqlstyle-ignore``
        directives.  Returns the number of directives found.
        """
        loc = document.loc
        if loc is None:
            return 0
        found = 0
        token = loc.start_token
        while token is not None:
            if token.kind == TokenKind.COMMENT:
                match = _DIRECTIVE_RE.match(token.value or "")
                if match:
                    ids = _parse_rule_ids(match.group("ids"))
                    if match.group("file"):
                        self._global.update(ids)
                    elif token.prev is not None and token.prev.line == token.line:
                        self._trailing[token.line].update(ids)
                    else:
                        self._leading[token.line].update(ids)
                    found += 1
            token = token.next
        return found

    def add_location_suppression(self, rule_id: str, pattern: str) -> None:
        """Suppress *rule_id* (``*`` for all) on entities matching *pattern*."""
        self._patterns[pattern].add(rule_id)

    def add_global_suppression(self, rule_id: str) -> None:
        """Globally suppress *rule_id*."""
        self._global.add(rule_id)

    def is_suppressed(self, diag: Diagnostic) -> bool:
        """Check whether a diagnostic should be suppressed."""
        rid = diag.rule_id

        if rid in self._global or "*" in self._global:
            return True

        loc = diag.location
        if loc.line:
            for ids in (
                self._trailing.get(loc.line, ()),
                self._leading.get(loc.line - 1, ()),
            ):
                if rid in ids or "*" in ids:
                    return True

        path = loc.path
        for pattern, ids in self._patterns.items():
            if (rid in ids or "*" in ids) and fnmatchcase(path, pattern):
                return True

        return False

    def filter_diagnostics(
        self, diagnostics: Iterable[Diagnostic]
    ) -> Tuple[List[Diagnostic], int]:
        """Return the non-suppressed diagnostics and the suppressed count."""
        kept: List[Diagnostic] = []
        dropped = 0
        for diag in diagnostics:
            if self.is_suppressed(diag):
                dropped += 1
            else:
                kept.append(diag)
        return kept, dropped

    def __bool__(self) -> bool:
        return bool(self._trailing or self._leading or self._patterns or self._global)


# ═════════════════════════════════════════════════════════════════════════
#  PUBLIC API
# ═════════════════════════════════════════════════════════════════════════

__all__ = [
    "Severity",
    "Location",
    "Diagnostic",
    "SuppressionManager",
]
