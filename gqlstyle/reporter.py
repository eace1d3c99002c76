#!/usr/bin/env python3
"""
gqlstyle/reporter.py
════════════════════

Renderers for a :class:`~gqlstyle.report.Report`.

Output formats
──────────────
  • text  : one line per diagnostic,
            ``<severity>: <message> (<type>[.<field>]) [<rule-id>]``,
            colourised with termcolor when writing to a terminal
  • json  : a JSON array of records
            ``{severity, ruleId, message, typeName, fieldName?,
            argumentName?, suggestedFix?}``
  • jsonl : the same records, one JSON object per line
  • sarif : SARIF 2.1.0, for code-scanning uploads
  • html  : a standalone page rendered with Jinja2

Every renderer is a pure function of the report: rendering the same
report twice yields byte-identical output.
"""

from __future__ import annotations

import json
import os
import textwrap
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TextIO

import jinja2
from termcolor import colored

from gqlstyle import __version__
from gqlstyle.checkers import RuleRegistry
from gqlstyle.diagnostics import Diagnostic
from gqlstyle.report import Report

TOOL_NAME = "gqlstyle"
TOOL_URI = "https://github.com/gqlstyle/gqlstyle"

FORMATS = ("text", "json", "jsonl", "sarif", "html")


# ═════════════════════════════════════════════════════════════════════════
#  TEXT
# ═════════════════════════════════════════════════════════════════════════

def render_text(report: Report, color: bool = False) -> str:
    """One line per diagnostic; empty string for a clean report."""
    if not color:
        return "".join(d.to_text() + "\n" for d in report.diagnostics)
    return "".join(_colored_line(d) + "\n" for d in report.diagnostics)


def _paint(text: str, color: Optional[str] = None, attrs: Optional[List[str]] = None) -> str:
    # colour was already decided by the caller
    return colored(text, color, attrs=attrs, force_color=True)


def _colored_line(diag: Diagnostic) -> str:
    sev = _paint(f"{diag.severity.label}:", diag.severity.color, attrs=["bold"])
    loc = _paint(f"({diag.location})", "blue")
    rule = _paint(f"[{diag.rule_id}]", attrs=["dark"])
    return f"{sev} {diag.message} {loc} {rule}"


def summary_text(report: Report, color: bool = False) -> str:
    """The closing summary line, written to stderr by the CLI."""
    summary = f"{report.source_name}: {report.summary_line()}"
    if not color:
        return summary
    if report.error_count:
        return _paint(summary, "red", attrs=["bold"])
    if report.total_count:
        return _paint(summary, "yellow", attrs=["bold"])
    return _paint(summary, "green", attrs=["bold"])


# ═════════════════════════════════════════════════════════════════════════
#  JSON
# ═════════════════════════════════════════════════════════════════════════

def render_json(report: Report) -> str:
    return json.dumps(report.to_records(), indent=2) + "\n"


def render_json_lines(report: Report) -> str:
    return "".join(json.dumps(record) + "\n" for record in report.to_records())


# ═════════════════════════════════════════════════════════════════════════
#  SARIF 2.1.0 BUILDER
# ═════════════════════════════════════════════════════════════════════════

class SarifBuilder:
    """Builds a SARIF 2.1.0 log for one report."""

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = (
        "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/"
        "Schemata/sarif-schema-2.1.0.json"
    )

    def __init__(self, registry: Optional[RuleRegistry] = None) -> None:
        self._registry = registry or RuleRegistry.default()
        self._results: List[Dict[str, Any]] = []
        self._rules: Dict[str, Dict[str, Any]] = {}  # ruleId -> rule obj

    def add(self, diag: Diagnostic, source_name: str) -> None:
        # ── rule ─────────────────────────────────────────────────────
        if diag.rule_id not in self._rules:
            rule_cls = self._registry.get_by_name(diag.rule_id)
            rule: Dict[str, Any] = {
                "id": diag.rule_id,
                "shortDescription": {
                    "text": rule_cls.description if rule_cls else diag.rule_id,
                },
                "defaultConfiguration": {
                    "level": rule_cls.default_severity.sarif_level if rule_cls else "error",
                },
            }
            self._rules[diag.rule_id] = rule

        # ── result ───────────────────────────────────────────────────
        loc = diag.location
        result: Dict[str, Any] = {
            "ruleId": diag.rule_id,
            "ruleIndex": list(self._rules).index(diag.rule_id),
            "level": diag.severity.sarif_level,
            "message": {"text": diag.message},
        }
        location: Dict[str, Any] = {
            "logicalLocations": [
                {
                    "name": loc.argument_name or loc.field_name or loc.type_name,
                    "fullyQualifiedName": loc.path,
                    "kind": "member" if loc.field_name else "type",
                }
            ],
        }
        if loc.line:
            region: Dict[str, Any] = {"startLine": loc.line}
            if loc.column:
                region["startColumn"] = loc.column
            location["physicalLocation"] = {
                "artifactLocation": {"uri": source_name},
                "region": region,
            }
        result["locations"] = [location]

        if diag.suggested_fix is not None:
            result.setdefault("properties", {})["suggestedFix"] = diag.suggested_fix

        self._results.append(result)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "$schema": self.SARIF_SCHEMA,
            "version": self.SARIF_VERSION,
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": TOOL_NAME,
                            "version": __version__,
                            "informationUri": TOOL_URI,
                            "rules": list(self._rules.values()),
                        }
                    },
                    "results": self._results,
                }
            ],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2) + "\n"


def render_sarif(report: Report, registry: Optional[RuleRegistry] = None) -> str:
    builder = SarifBuilder(registry)
    for diag in report.diagnostics:
        builder.add(diag, report.source_name)
    return builder.to_json()


# ═════════════════════════════════════════════════════════════════════════
#  HTML BUILDER
# ═════════════════════════════════════════════════════════════════════════

HTML_TEMPLATE_ENV_VAR = "GQLSTYLE_HTML_TEMPLATE"


class HtmlBuilder:
    """Renders a report to a standalone HTML page via Jinja2."""

    def __init__(self, template_path: Optional[str] = None) -> None:
        self._template_path = template_path

    def render(self, report: Report) -> str:
        env = jinja2.Environment(autoescape=True)
        tmpl = env.from_string(self._load_template())
        return tmpl.render(
            title=f"gqlstyle report: {report.source_name}",
            source_name=report.source_name,
            diagnostics=[self._entry(d) for d in report.diagnostics],
            verdict=report.verdict.value,
            error_count=report.error_count,
            warning_count=report.warning_count,
            summary=report.summary_line(),
            version=__version__,
        )

    @staticmethod
    def _entry(diag: Diagnostic) -> Dict[str, Any]:
        loc = diag.location
        return {
            "severity": diag.severity.label,
            "rule_id": diag.rule_id,
            "message": diag.message,
            "location": str(loc),
            "path": loc.path,
            "line": loc.line,
            "column": loc.column,
            "suggested_fix": diag.suggested_fix,
        }

    def _load_template(self) -> str:
        """Resolve the HTML template: argument, then env var, then built-in."""
        if self._template_path:
            return Path(self._template_path).read_text(encoding="utf-8")
        env_tmpl = os.environ.get(HTML_TEMPLATE_ENV_VAR, "")
        if env_tmpl and Path(env_tmpl).is_file():
            return Path(env_tmpl).read_text(encoding="utf-8")
        return _DEFAULT_HTML_TEMPLATE


def render_html(report: Report, template_path: Optional[str] = None) -> str:
    return HtmlBuilder(template_path).render(report)


# ═════════════════════════════════════════════════════════════════════════
#  DISPATCH
# ═════════════════════════════════════════════════════════════════════════

_RENDERERS: Dict[str, Callable[[Report], str]] = {
    "json": render_json,
    "jsonl": render_json_lines,
    "sarif": render_sarif,
    "html": render_html,
}


def render(report: Report, fmt: str = "text", color: bool = False) -> str:
    """Render *report* in the named format."""
    if fmt == "text":
        return render_text(report, color=color)
    try:
        renderer = _RENDERERS[fmt]
    except KeyError:
        raise ValueError(f"unknown output format {fmt!r}; choose from {', '.join(FORMATS)}") from None
    return renderer(report)


def write_report(report: Report, stream: TextIO, fmt: str = "text", color: bool = False) -> None:
    stream.write(render(report, fmt, color=color))
    stream.flush()


# ═════════════════════════════════════════════════════════════════════════
#  DEFAULT HTML TEMPLATE
# ═════════════════════════════════════════════════════════════════════════

_DEFAULT_HTML_TEMPLATE = textwrap.dedent("""\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{{ title }}</title>
  <style>
    :root { --bg: #1e1e2e; --fg: #cdd6f4; --surface: #313244;
            --red: #f38ba8; --yellow: #f9e2af; --green: #a6e3a1;
            --blue: #89b4fa; --border: #45475a; }
    * { box-sizing: border-box; margin: 0; padding: 0; }
    body { font-family: 'Fira Code', 'Cascadia Code', monospace;
           background: var(--bg); color: var(--fg); padding: 2rem; }
    h1 { margin-bottom: 1rem; }
    .card { background: var(--surface); border: 1px solid var(--border);
            border-radius: 8px; padding: 1rem; margin-bottom: 1rem; }
    .sev-error   { border-left: 4px solid var(--red); }
    .sev-warning { border-left: 4px solid var(--yellow); }
    .badge { display: inline-block; padding: 2px 8px; border-radius: 4px;
             font-size: 0.85em; font-weight: bold; }
    .badge-error   { background: var(--red); color: var(--bg); }
    .badge-warning { background: var(--yellow); color: var(--bg); }
    .loc { color: var(--blue); font-size: 0.9em; }
    .msg { margin-top: 0.4rem; }
    .help { color: var(--green); margin-top: 0.3rem; font-size: 0.9em; }
    .summary { margin-top: 2rem; padding: 1rem; background: var(--surface);
               border-radius: 8px; text-align: center; font-size: 1.1em; }
    .verdict-pass { color: var(--green); }
    .verdict-fail { color: var(--red); }
  </style>
</head>
<body>
  <h1>{{ source_name }}</h1>
  {% for d in diagnostics %}
  <div class="card sev-{{ d.severity }}">
    <span class="badge badge-{{ d.severity }}">{{ d.severity }}</span>
    <code>[{{ d.rule_id }}]</code>
    <span class="loc">{{ d.path }}{% if d.line %} (line {{ d.line }}){% endif %}</span>
    <div class="msg">{{ d.message }}</div>
    {% if d.suggested_fix is not none %}
      <div class="help">help: try <code>{{ d.suggested_fix }}</code></div>
    {% endif %}
  </div>
  {% endfor %}
  <div class="summary">
    <span class="verdict-{{ verdict }}">{{ verdict | upper }}</span>: {{ summary }}
  </div>
  <p class="loc">generated by gqlstyle {{ version }}</p>
</body>
</html>
""")


# ═════════════════════════════════════════════════════════════════════════
#  PUBLIC API
# ═════════════════════════════════════════════════════════════════════════

__all__ = [
    "FORMATS",
    "render",
    "render_text",
    "render_json",
    "render_json_lines",
    "render_sarif",
    "render_html",
    "summary_text",
    "write_report",
    "SarifBuilder",
    "HtmlBuilder",
]
