#!/usr/bin/env python3
"""gqlstyle/main.py: CLI entry-point for the GraphQL schema linter.

Usage examples
--------------
    # Lint a schema file, human-readable output
    gqlstyle check schema.graphql

    # Machine-readable output for CI
    gqlstyle check schema.graphql --format json -o report.json
    gqlstyle check schema.graphql --format sarif -o gqlstyle.sarif

    # Read the schema from stdin
    cat schema.graphql | gqlstyle check -

    # Tune a run without a config file
    gqlstyle check schema.graphql --disable TypeSingular \\
        --severity FieldPlurality=error --verb add

    # List the rule catalog
    gqlstyle rules

    # Write a commented default .gqlstyle.yml
    gqlstyle init

Exit codes
----------
    0   The schema passed (warnings never fail a run).
    1   One or more Error diagnostics were emitted.
    2   The schema could not be analysed (syntax error, duplicate or
        unresolved type), the configuration is invalid, or the input
        could not be read.

The module doubles as ``python -m gqlstyle`` via the companion
``gqlstyle/__main__.py`` which simply calls :func:`main`.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import textwrap
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, TextIO, Tuple

from gqlstyle import __version__

if TYPE_CHECKING:
    from gqlstyle.config import LintOptions

_log = logging.getLogger("gqlstyle")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2

STDIN_NAME = "<stdin>"


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``gqlstyle`` package logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("gqlstyle")
    root.setLevel(level)
    # main() may run several times in one process (tests, embedding)
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(handler)


def _open_output(dest: Optional[str]) -> TextIO:
    """Return a writable text stream.

    *dest* ``None`` or ``"-"`` → ``sys.stdout``; otherwise open the path
    for writing (creating parent directories as needed).
    """
    if dest is None or dest == "-":
        return sys.stdout
    p = Path(dest).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return open(p, "w", encoding="utf-8")


def _use_color(mode: str, stream: TextIO) -> bool:
    """Decide colour for *stream*: ``always``, ``never`` or ``auto``."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    if os.environ.get("NO_COLOR") is not None:
        return False
    try:
        return hasattr(stream, "isatty") and stream.isatty()
    except ValueError:
        # closed stream
        return False


def _report_failure(exc: Exception, color: bool) -> None:
    from termcolor import colored

    text = str(exc)
    if color:
        head, _, rest = text.partition("\n")
        text = colored(head, "red", attrs=["bold"], force_color=True) + ("\n" + rest if rest else "")
    sys.stderr.write(text + "\n")


def _read_schema(raw: str) -> Tuple[str, str]:
    """Return ``(text, source_name)`` for a path or ``-`` (stdin)."""
    from gqlstyle.errors import ErrorCodes, GqlStyleError, SourceSpan

    if raw == "-":
        return sys.stdin.read(), STDIN_NAME
    try:
        return Path(raw).read_text(encoding="utf-8"), raw
    except (OSError, UnicodeDecodeError) as exc:
        reason = getattr(exc, "strerror", None) or str(exc)
        raise GqlStyleError(
            f"Cannot read schema: {reason}",
            code=ErrorCodes.UNREADABLE_INPUT,
            span=SourceSpan(raw),
        ) from exc


# ===========================================================================
# Option assembly
# ===========================================================================

def _build_options(args: argparse.Namespace) -> "LintOptions":
    """Config file (explicit, discovered or defaults) overlaid with CLI flags."""
    from gqlstyle.config import load_options, parse_severity_assignment

    options = load_options(Path(args.config) if args.config else None)

    overrides: Dict[str, Any] = {}
    if args.disable:
        overrides["disabled_rules"] = options.disabled_rules | frozenset(args.disable)
    if args.severity:
        severities = dict(options.severity_overrides)
        for assignment in args.severity:
            rule_id, severity = parse_severity_assignment(assignment)
            severities[rule_id] = severity
        overrides["severity_overrides"] = severities
    if args.verb:
        overrides["allowed_mutation_verbs"] = options.allowed_mutation_verbs | frozenset(args.verb)
    if args.allow:
        overrides["entity_name_allow_list"] = options.entity_name_allow_list | frozenset(args.allow)
    overrides["boolean_prefix_policy"] = args.boolean_prefix
    overrides["jobs"] = args.jobs

    merged = options.merged(**overrides)
    _log.debug("effective options: %s", merged.to_mapping())
    return merged


# ===========================================================================
# Command handlers
# ===========================================================================

def cmd_check(args: argparse.Namespace) -> int:
    """Handle the 'check' command: lint one schema and render the report."""
    from gqlstyle.engine import lint_source
    from gqlstyle.errors import GqlStyleError
    from gqlstyle.reporter import render, summary_text

    err_color = _use_color(args.color, sys.stderr)
    try:
        options = _build_options(args)
        text, source_name = _read_schema(args.schema)
        report = lint_source(text, options=options, source_name=source_name)
    except GqlStyleError as exc:
        _report_failure(exc, err_color)
        return EXIT_INFRA

    out = _open_output(args.output)
    try:
        color = args.format == "text" and out is sys.stdout and _use_color(args.color, out)
        out.write(render(report, args.format, color=color))
        out.flush()
    finally:
        if out is not sys.stdout:
            out.close()

    if not args.quiet:
        sys.stderr.write(summary_text(report, color=err_color) + "\n")
    _log.info("verdict: %s", report.verdict.value)
    return EXIT_OK if report.passed else EXIT_ERROR


def cmd_rules(args: argparse.Namespace) -> int:
    """Handle the 'rules' command: print the rule catalog."""
    from gqlstyle.checkers import RuleRegistry

    registry = RuleRegistry.default()
    entries: List[Dict[str, Any]] = []
    for position, rule_cls in enumerate(registry.get_all(), start=1):
        entries.append({
            "position": position,
            "id": rule_cls.rule_id,
            "severity": rule_cls.default_severity.label,
            "targets": sorted(kind.value for kind in rule_cls.targets),
            "heuristic": rule_cls.heuristic,
            "description": rule_cls.description,
        })

    out = _open_output(args.output)
    try:
        if args.format == "json":
            out.write(json.dumps(entries, indent=2) + "\n")
        else:
            for entry in entries:
                marker = "*" if entry["heuristic"] else " "
                out.write(
                    f"{entry['position']:>3}  {entry['id']:<22}{marker}"
                    f"{entry['severity']:<8} {entry['description']}\n"
                )
            out.write("\n* heuristic rule\n")
    finally:
        if out is not sys.stdout:
            out.close()
    return EXIT_OK


def cmd_init(args: argparse.Namespace) -> int:
    """Handle the 'init' command: write a default configuration file."""
    from gqlstyle.config import CONFIG_FILE_NAMES, DEFAULT_CONFIG_TEMPLATE

    output_path = Path(args.output or CONFIG_FILE_NAMES[0])
    if output_path.exists() and not args.force:
        _log.error("File already exists: %s (use --force to overwrite)", output_path)
        return EXIT_ERROR

    try:
        output_path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as exc:
        _log.error("Cannot write file: %s", exc)
        return EXIT_INFRA
    sys.stderr.write(f"Created: {output_path}\n")
    return EXIT_OK


# ===========================================================================
# Argument parser
# ===========================================================================

def build_parser() -> argparse.ArgumentParser:
    """Construct the full CLI argument parser with subcommands."""
    from gqlstyle.config import BOOLEAN_PREFIX_POLICIES
    from gqlstyle.reporter import FORMATS

    parser = argparse.ArgumentParser(
        prog="gqlstyle",
        description=(
            "gqlstyle: GraphQL schema convention linter.\n\n"
            "Checks an SDL document against naming and shape conventions\n"
            "and reports every violation in one pass."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              gqlstyle check schema.graphql
              gqlstyle check schema.graphql --format sarif -o gqlstyle.sarif
              gqlstyle check - < schema.graphql
              gqlstyle rules
              gqlstyle init
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    # --- check -------------------------------------------------------------
    p_check = subparsers.add_parser(
        "check",
        aliases=["lint"],
        help="Lint a GraphQL schema.",
        description=(
            "Parse an SDL document, run every enabled rule and report "
            "the diagnostics.  Exits 1 when any Error is reported."
        ),
    )
    p_check.add_argument("schema", metavar="SCHEMA", help='Schema file ("-" for stdin).')
    p_check.add_argument(
        "-o", "--output",
        default=None,
        metavar="FILE",
        help='Output file ("-" or omit for stdout).',
    )
    p_check.add_argument(
        "-f", "--format",
        choices=list(FORMATS),
        default="text",
        help="Output format (default: text).",
    )
    p_check.add_argument(
        "--config",
        default=None,
        metavar="PATH",
        help="Configuration file (default: $GQLSTYLE_CONFIG or ./.gqlstyle.yml).",
    )
    p_check.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Colourise text output (default: auto, honours NO_COLOR).",
    )
    p_check.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const="never",
        help="Same as --color never.",
    )
    p_check.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not print the summary line on stderr.",
    )

    g = p_check.add_argument_group("rule tuning (overrides the config file)")
    g.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="RULE",
        help="Disable a rule (repeatable).",
    )
    g.add_argument(
        "--severity",
        action="append",
        default=[],
        metavar="RULE=LEVEL",
        help="Override a rule's severity: error or warning (repeatable).",
    )
    g.add_argument(
        "--verb",
        action="append",
        default=[],
        metavar="VERB",
        help="Accept an additional mutation verb (repeatable).",
    )
    g.add_argument(
        "--allow",
        action="append",
        default=[],
        metavar="FIELD",
        help="Exempt a field name from FieldRedundantName (repeatable).",
    )
    g.add_argument(
        "--boolean-prefix",
        choices=list(BOOLEAN_PREFIX_POLICIES),
        default=None,
        help="Boolean field naming policy.",
    )
    g.add_argument(
        "-j", "--jobs",
        type=int,
        default=None,
        metavar="N",
        help="Worker threads used to run the rules.",
    )
    p_check.set_defaults(func=cmd_check)

    # --- rules -------------------------------------------------------------
    p_rules = subparsers.add_parser(
        "rules",
        help="List the rule catalog.",
    )
    p_rules.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text).",
    )
    p_rules.add_argument(
        "-o", "--output",
        default=None,
        metavar="FILE",
        help='Output file ("-" or omit for stdout).',
    )
    p_rules.set_defaults(func=cmd_rules)

    # --- init --------------------------------------------------------------
    p_init = subparsers.add_parser(
        "init",
        help="Write a commented default configuration file.",
    )
    p_init.add_argument(
        "-o", "--output",
        default=None,
        metavar="FILE",
        help="Destination (default: .gqlstyle.yml).",
    )
    p_init.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing file.",
    )
    p_init.set_defaults(func=cmd_init)

    return parser


# ===========================================================================
# Main
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the gqlstyle CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    # No subcommand given → print help.
    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        return EXIT_INFRA

    try:
        return args.func(args)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130
    except BrokenPipeError:
        # piping to head and friends
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return EXIT_OK
    except Exception as exc:
        _log.error("Unhandled exception: %s", exc, exc_info=True)
        return EXIT_INFRA


if __name__ == "__main__":
    raise SystemExit(main())
