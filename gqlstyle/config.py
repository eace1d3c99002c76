"""
gqlstyle/config.py
══════════════════

Lint options and the YAML configuration file.

Resolution order (first hit wins):

  1. ``--config PATH`` on the command line
  2. ``$GQLSTYLE_CONFIG``
  3. ``.gqlstyle.yml`` / ``.gqlstyle.yaml`` in the working directory
  4. built-in defaults

Command-line flags are applied on top of whatever file was loaded.
File keys are camelCase, as in the example written by ``gqlstyle init``::

    allowedMutationVerbs: [create, update, delete, set, track]
    entityNameAllowList: [dateOfBirth]
    disabledRules: [TypeSingular]
    severityOverrides:
      FieldPlurality: error
    ignore:
      - rule: FieldRedundantName
        at: "Legacy*.*"
"""

from __future__ import annotations

import logging
import os
import textwrap
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

import yaml

from gqlstyle.diagnostics import Severity
from gqlstyle.errors import ConfigError, ErrorCodes, SourceSpan

_log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GQLSTYLE_CONFIG"
CONFIG_FILE_NAMES: Tuple[str, ...] = (".gqlstyle.yml", ".gqlstyle.yaml")

DEFAULT_MUTATION_VERBS: FrozenSet[str] = frozenset({"create", "update", "delete", "set", "track"})
DEFAULT_ENTITY_ALLOW_LIST: FrozenSet[str] = frozenset({"dateOfBirth"})
DEFAULT_INPUT_SUFFIXES: Tuple[str, ...] = ("Input", "Filter", "Draft")
DEFAULT_BOOLEAN_PREFIXES: Tuple[str, ...] = ("is", "has", "can", "should", "was")
BOOLEAN_PREFIX_POLICIES: Tuple[str, ...] = ("ignore", "require", "forbid")


# ═════════════════════════════════════════════════════════════════════════
#  OPTIONS
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class IgnoreEntry:
    """Suppress *rule* (``*`` for any) on entity paths matching *at*."""

    rule: str
    at: str


@dataclass(frozen=True)
class LintOptions:
    """
    Everything that tunes a lint run.

    Attributes
    ----------
    allowed_mutation_verbs : frozenset of str
        Leading verbs accepted by ``MutationNaming``.
    entity_name_allow_list : frozenset of str
        Field names exempt from ``FieldRedundantName``.
    disabled_rules : frozenset of str
        Rule ids removed from dispatch.
    severity_overrides : dict
        Rule id to :class:`Severity`, applied to every emitted diagnostic.
    input_suffixes : tuple of str
        Suffixes an input type name may end with (``InputSuffix``).
    boolean_prefix_policy : str
        ``ignore``, ``require`` or ``forbid`` (``BooleanFieldPrefix``).
    boolean_prefixes : tuple of str
        Predicate prefixes recognised by ``BooleanFieldPrefix``.
    ignore : tuple of IgnoreEntry
        Location-pattern suppressions.
    jobs : int
        Worker threads for rule dispatch; 1 runs inline.
    """

    allowed_mutation_verbs: FrozenSet[str] = DEFAULT_MUTATION_VERBS
    entity_name_allow_list: FrozenSet[str] = DEFAULT_ENTITY_ALLOW_LIST
    disabled_rules: FrozenSet[str] = frozenset()
    severity_overrides: Dict[str, Severity] = field(default_factory=dict)
    input_suffixes: Tuple[str, ...] = DEFAULT_INPUT_SUFFIXES
    boolean_prefix_policy: str = "ignore"
    boolean_prefixes: Tuple[str, ...] = DEFAULT_BOOLEAN_PREFIXES
    ignore: Tuple[IgnoreEntry, ...] = ()
    jobs: int = 1

    def __post_init__(self) -> None:
        if self.boolean_prefix_policy not in BOOLEAN_PREFIX_POLICIES:
            raise ConfigError(
                f"booleanPrefixPolicy must be one of {', '.join(BOOLEAN_PREFIX_POLICIES)}, "
                f"got {self.boolean_prefix_policy!r}"
            )
        if self.jobs < 1:
            raise ConfigError(f"jobs must be at least 1, got {self.jobs}")
        if not self.allowed_mutation_verbs:
            raise ConfigError("allowedMutationVerbs must not be empty")
        if not self.input_suffixes:
            raise ConfigError("inputSuffixes must not be empty")

    # ── construction ─────────────────────────────────────────────────

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], source: str = "") -> "LintOptions":
        """Build options from a camelCase mapping (a parsed config file)."""
        unknown = sorted(set(data) - set(_KEYS))
        if unknown:
            raise ConfigError(
                f"Unknown configuration key(s): {', '.join(unknown)}",
                span=SourceSpan(source),
                hint=f"Valid keys: {', '.join(sorted(_KEYS))}",
            )

        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            attr = _KEYS[key]
            if attr in ("allowed_mutation_verbs", "entity_name_allow_list", "disabled_rules"):
                kwargs[attr] = frozenset(_string_list(key, value, source))
            elif attr in ("input_suffixes", "boolean_prefixes"):
                kwargs[attr] = tuple(_string_list(key, value, source))
            elif attr == "severity_overrides":
                kwargs[attr] = _severity_map(value, source)
            elif attr == "ignore":
                kwargs[attr] = tuple(_ignore_entries(value, source))
            elif attr == "jobs":
                if not isinstance(value, int) or isinstance(value, bool):
                    raise ConfigError(f"'jobs' must be an integer, got {value!r}", span=SourceSpan(source))
                kwargs[attr] = value
            else:
                kwargs[attr] = str(value)

        try:
            return cls(**kwargs)
        except ConfigError as exc:
            raise exc.with_source(source) if source else exc

    def merged(self, **changes: Any) -> "LintOptions":
        """Return a copy with *changes* applied; ``None`` values are ignored."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def to_mapping(self) -> Dict[str, Any]:
        """camelCase mapping, suitable for YAML output."""
        return {
            "allowedMutationVerbs": sorted(self.allowed_mutation_verbs),
            "entityNameAllowList": sorted(self.entity_name_allow_list),
            "disabledRules": sorted(self.disabled_rules),
            "severityOverrides": {k: v.label for k, v in sorted(self.severity_overrides.items())},
            "inputSuffixes": list(self.input_suffixes),
            "booleanPrefixPolicy": self.boolean_prefix_policy,
            "booleanPrefixes": list(self.boolean_prefixes),
            "ignore": [{"rule": e.rule, "at": e.at} for e in self.ignore],
            "jobs": self.jobs,
        }


_KEYS: Dict[str, str] = {
    "allowedMutationVerbs": "allowed_mutation_verbs",
    "entityNameAllowList": "entity_name_allow_list",
    "disabledRules": "disabled_rules",
    "severityOverrides": "severity_overrides",
    "inputSuffixes": "input_suffixes",
    "booleanPrefixPolicy": "boolean_prefix_policy",
    "booleanPrefixes": "boolean_prefixes",
    "ignore": "ignore",
    "jobs": "jobs",
}


# ═════════════════════════════════════════════════════════════════════════
#  VALUE PARSING
# ═════════════════════════════════════════════════════════════════════════

def _string_list(key: str, value: Any, source: str) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings, got {value!r}", span=SourceSpan(source))
    return [v.strip() for v in value if v.strip()]


def _severity_map(value: Any, source: str) -> Dict[str, Severity]:
    if not isinstance(value, Mapping):
        raise ConfigError(
            f"'severityOverrides' must map rule ids to severities, got {value!r}",
            span=SourceSpan(source),
        )
    return {str(rule): parse_severity(str(sev), source) for rule, sev in value.items()}


def _ignore_entries(value: Any, source: str) -> Iterable[IgnoreEntry]:
    if not isinstance(value, list):
        raise ConfigError(f"'ignore' must be a list, got {value!r}", span=SourceSpan(source))
    for item in value:
        if isinstance(item, str):
            yield IgnoreEntry(rule="*", at=item)
        elif isinstance(item, Mapping) and "at" in item:
            yield IgnoreEntry(rule=str(item.get("rule", "*")), at=str(item["at"]))
        else:
            raise ConfigError(
                f"'ignore' entries need an 'at' pattern, got {item!r}",
                span=SourceSpan(source),
            )


def parse_severity(value: str, source: str = "") -> Severity:
    try:
        return Severity.from_string(value)
    except ValueError as exc:
        raise ConfigError(str(exc), span=SourceSpan(source)) from exc


def parse_severity_assignment(text: str) -> Tuple[str, Severity]:
    """Parse a ``RuleId=level`` command-line override."""
    rule, sep, level = text.partition("=")
    if not sep or not rule.strip():
        raise ConfigError(
            f"Invalid severity override {text!r}",
            hint="Use RULE=error or RULE=warning",
        )
    return rule.strip(), parse_severity(level)


# ═════════════════════════════════════════════════════════════════════════
#  FILE LOADING
# ═════════════════════════════════════════════════════════════════════════

def find_config_file(
    cwd: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[Path]:
    """Locate a config file via ``$GQLSTYLE_CONFIG`` or the working directory."""
    env = os.environ if environ is None else environ
    explicit = env.get(CONFIG_ENV_VAR, "")
    if explicit:
        return Path(explicit).expanduser()
    base = cwd or Path.cwd()
    for name in CONFIG_FILE_NAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_options(path: Optional[Path] = None) -> LintOptions:
    """Load options from *path*, or from a discovered file, or defaults."""
    if path is None:
        path = find_config_file()
        if path is None:
            _log.debug("no configuration file found; using defaults")
            return LintOptions()

    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file: {exc.strerror or exc}",
            code=ErrorCodes.CONFIG_FILE,
            span=SourceSpan(str(path)),
        ) from exc

    _log.info("loading configuration from %s", path)
    return parse_config(text, source=str(path))


def parse_config(text: str, source: str = "") -> LintOptions:
    """Parse YAML configuration *text*."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        span = SourceSpan(source, mark.line + 1, mark.column + 1) if mark else SourceSpan(source)
        raise ConfigError(
            f"Malformed YAML: {getattr(exc, 'problem', None) or exc}",
            code=ErrorCodes.CONFIG_FILE,
            span=span,
        ) from exc

    if data is None:
        return LintOptions()
    if not isinstance(data, Mapping):
        raise ConfigError(
            "Configuration must be a mapping at the top level",
            code=ErrorCodes.CONFIG_FILE,
            span=SourceSpan(source),
        )
    return LintOptions.from_mapping(data, source=source)


DEFAULT_CONFIG_TEMPLATE = textwrap.dedent("""\
    # gqlstyle configuration
    #
    # Verbs a root mutation field may start with (createUser, deletePost, ...).
    allowedMutationVerbs: [create, update, delete, set, track]

    # Field names never reported by FieldRedundantName.
    entityNameAllowList: [dateOfBirth]

    # Rules to switch off entirely.
    disabledRules: []

    # Per-rule severity: error or warning.
    severityOverrides: {}

    # Accepted suffixes for input type names.
    inputSuffixes: [Input, Filter, Draft]

    # Boolean field naming: ignore, require (isActive) or forbid (active).
    booleanPrefixPolicy: ignore
    booleanPrefixes: [is, has, can, should, was]

    # Location suppressions, matched against Type.field.argument paths.
    ignore: []
    #  - rule: FieldRedundantName
    #    at: "Legacy*.*"

    # Worker threads used to run the rules.
    jobs: 1
""")


__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILE_NAMES",
    "DEFAULT_MUTATION_VERBS",
    "DEFAULT_ENTITY_ALLOW_LIST",
    "DEFAULT_INPUT_SUFFIXES",
    "DEFAULT_BOOLEAN_PREFIXES",
    "BOOLEAN_PREFIX_POLICIES",
    "DEFAULT_CONFIG_TEMPLATE",
    "IgnoreEntry",
    "LintOptions",
    "find_config_file",
    "load_options",
    "parse_config",
    "parse_severity",
    "parse_severity_assignment",
]
