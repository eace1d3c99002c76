"""gqlstyle: a GraphQL schema convention linter.

This package checks an SDL document against a fixed catalog of naming and
shape conventions and reports every violation in one deterministic pass.

Submodules
----------
errors
    Exception hierarchy for structural and configuration failures, with
    ``GQL-NNNN`` error codes and GCC-style rendering.

parser, symbols, model
    graphql-core front-end, the read-only ``SymbolTable`` and the
    immutable entity records (types, fields, arguments) rules inspect.

heuristics
    Swappable plurality, entity and redundancy strategies behind the
    Warning-level rules.

checkers, engine
    The rule catalog, the ``RuleRegistry`` and the dispatcher that runs
    every enabled rule over every matching entity.

diagnostics, report, reporter
    ``Diagnostic`` values, suppressions, the aggregated ``Report`` and
    its text / JSON / SARIF / HTML renderings.

config
    ``LintOptions`` and YAML configuration loading.

main
    CLI entry-point with subcommands: ``check``, ``rules``, ``init``.

Usage
-----
Command-line::

    gqlstyle check schema.graphql
    python -m gqlstyle check schema.graphql --format json

Programmatic::

    from gqlstyle import LintOptions, lint_source

    report = lint_source(sdl, LintOptions(disabled_rules=frozenset({"TypeSingular"})))
    for diag in report.diagnostics:
        print(diag.to_text())
"""

from __future__ import annotations

__version__: str = "0.1.0"

from gqlstyle.config import LintOptions, load_options  # noqa: E402
from gqlstyle.diagnostics import Diagnostic, Location, Severity  # noqa: E402
from gqlstyle.engine import lint_document, lint_file, lint_source  # noqa: E402
from gqlstyle.errors import (  # noqa: E402
    ConfigError,
    GqlStyleError,
    SchemaStructureError,
    SchemaSyntaxError,
)
from gqlstyle.report import Report, Verdict  # noqa: E402

__all__: list[str] = [
    "__version__",
    "LintOptions",
    "load_options",
    "Diagnostic",
    "Location",
    "Severity",
    "Report",
    "Verdict",
    "lint_document",
    "lint_file",
    "lint_source",
    "GqlStyleError",
    "SchemaStructureError",
    "SchemaSyntaxError",
    "ConfigError",
]
