"""
gqlstyle/engine.py
══════════════════

Rule dispatch and the one-call lint entry points.

    report = lint_source(sdl_text)
    report = lint_file("schema.graphql", options)

A run is parse -> build symbol table -> run rules -> aggregate.  Rules are
pure functions of the read-only symbol table, so entities may be checked
on a thread pool (``LintOptions.jobs``); the aggregator's sort makes the
report independent of completion order.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from graphql.language import DocumentNode

from gqlstyle.checkers import EntityKind, Rule, RuleContext, RuleRegistry, entity_kind
from gqlstyle.config import LintOptions
from gqlstyle.diagnostics import Diagnostic, SuppressionManager
from gqlstyle.errors import ErrorCodes, GqlStyleError, SourceSpan
from gqlstyle.heuristics import Heuristics
from gqlstyle.parser import DEFAULT_SOURCE_NAME, parse_schema
from gqlstyle.report import Report, aggregate
from gqlstyle.symbols import Entity, SymbolTable, build_symbol_table

_log = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════════
#  RUN STATISTICS
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class RunStats:
    """Timing and counting statistics of one engine run (not part of the report)."""

    entities: int = 0
    rules: List[str] = field(default_factory=list)
    diagnostics_by_rule: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    suppressed: int = 0
    elapsed: float = 0.0

    def summary(self) -> str:
        lines = [
            f"Rule run complete: {len(self.rules)} rules over {self.entities} entities "
            f"in {self.elapsed:.3f}s ({self.suppressed} suppressed)",
        ]
        for rule_id in self.rules:
            lines.append(f"  {rule_id}: {self.diagnostics_by_rule.get(rule_id, 0)}")
        return "\n".join(lines)


# ═════════════════════════════════════════════════════════════════════════
#  RULE RUNNER
# ═════════════════════════════════════════════════════════════════════════

class RuleRunner:
    """
    Dispatches every enabled rule to every entity of a matching kind.

    Parameters
    ----------
    registry:
        Rule catalog; defaults to the built-in rules.
    options:
        Lint options; ``disabledRules`` and ``severityOverrides`` are
        applied here.
    heuristics:
        Strategy objects for the Warning-level rules.
    suppressions:
        Filters diagnostics after they are produced.
    """

    def __init__(
        self,
        registry: Optional[RuleRegistry] = None,
        options: Optional[LintOptions] = None,
        heuristics: Optional[Heuristics] = None,
        suppressions: Optional[SuppressionManager] = None,
    ) -> None:
        self.registry = registry or RuleRegistry.default()
        self.options = options or LintOptions()
        self.heuristics = heuristics or Heuristics.default(self.options.entity_name_allow_list)
        self.suppressions = suppressions or SuppressionManager()
        self.stats = RunStats()
        # validates disabledRules / severityOverrides before any work is done
        self.rules: List[Rule] = self.registry.instantiate(self.options)

    def _dispatch_table(self) -> Dict[EntityKind, List[Rule]]:
        table: Dict[EntityKind, List[Rule]] = {kind: [] for kind in EntityKind}
        for rule in self.rules:
            for kind in rule.targets:
                table[kind].append(rule)
        return table

    def run(self, table: SymbolTable) -> Tuple[List[Diagnostic], int]:
        """Run all rules; return (kept diagnostics, suppressed count)."""
        t0 = time.monotonic()
        ctx = RuleContext(table=table, options=self.options, heuristics=self.heuristics)
        dispatch = self._dispatch_table()
        entities = list(table.entities())

        def _check(entity: Entity) -> List[Diagnostic]:
            found: List[Diagnostic] = []
            for rule in dispatch[entity_kind(entity)]:
                if rule.applies_to(ctx, entity):
                    found.extend(rule.check(ctx, entity))
            return found

        jobs = self.options.jobs
        if jobs > 1 and len(entities) > 1:
            with ThreadPoolExecutor(max_workers=jobs) as pool:
                batches = list(pool.map(_check, entities))
        else:
            batches = [_check(entity) for entity in entities]

        overrides = self.options.severity_overrides
        produced: List[Diagnostic] = []
        for batch in batches:
            for diag in batch:
                override = overrides.get(diag.rule_id)
                produced.append(diag.with_severity(override) if override else diag)

        kept, suppressed = self.suppressions.filter_diagnostics(produced)

        self.stats = RunStats(
            entities=len(entities),
            rules=[rule.rule_id for rule in self.rules],
            suppressed=suppressed,
            elapsed=time.monotonic() - t0,
        )
        for diag in kept:
            self.stats.diagnostics_by_rule[diag.rule_id] += 1
        _log.debug("%s", self.stats.summary())
        return kept, suppressed


# ═════════════════════════════════════════════════════════════════════════
#  CONVENIENCE ENTRY POINTS
# ═════════════════════════════════════════════════════════════════════════

def build_suppressions(document: DocumentNode, options: LintOptions) -> SuppressionManager:
    """Inline directives from *document* plus the configured ``ignore`` entries."""
    suppressions = SuppressionManager()
    found = suppressions.load_inline_suppressions(document)
    if found:
        _log.info("%d inline suppression directive(s)", found)
    for entry in options.ignore:
        suppressions.add_location_suppression(entry.rule, entry.at)
    return suppressions


def lint_document(
    document: DocumentNode,
    options: Optional[LintOptions] = None,
    registry: Optional[RuleRegistry] = None,
    heuristics: Optional[Heuristics] = None,
    source_name: Optional[str] = None,
) -> Report:
    """Lint an already parsed document.

    Raises
    ------
    SchemaStructureError
        Duplicate or unresolved types; no diagnostics are produced.
    ConfigError
        Options naming unknown rules.
    """
    options = options or LintOptions()
    registry = registry or RuleRegistry.default()
    runner = RuleRunner(
        registry=registry,
        options=options,
        heuristics=heuristics,
        suppressions=build_suppressions(document, options),
    )
    table = build_symbol_table(document, source_name=source_name)
    diagnostics, suppressed = runner.run(table)
    return aggregate(
        diagnostics,
        suppressed=suppressed,
        rule_order=registry.order(),
        source_name=table.source_name,
    )


def lint_source(
    text: str,
    options: Optional[LintOptions] = None,
    source_name: str = DEFAULT_SOURCE_NAME,
    registry: Optional[RuleRegistry] = None,
    heuristics: Optional[Heuristics] = None,
) -> Report:
    """Parse and lint SDL *text*."""
    document = parse_schema(text, source_name)
    return lint_document(
        document,
        options=options,
        registry=registry,
        heuristics=heuristics,
        source_name=source_name,
    )


def lint_file(
    path: Union[str, Path],
    options: Optional[LintOptions] = None,
    registry: Optional[RuleRegistry] = None,
) -> Report:
    """Read and lint the schema file at *path*."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise GqlStyleError(
            f"Cannot read schema: {exc.strerror or exc}",
            code=ErrorCodes.UNREADABLE_INPUT,
            span=SourceSpan(str(path)),
        ) from exc
    return lint_source(text, options=options, source_name=str(path), registry=registry)


__all__ = [
    "RunStats",
    "RuleRunner",
    "build_suppressions",
    "lint_document",
    "lint_source",
    "lint_file",
]
