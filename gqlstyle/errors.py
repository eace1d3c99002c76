# gqlstyle/errors.py
"""
Error types for the gqlstyle pipeline.

Two families of failure exist and they never mix:

    GqlStyleError (base)
    ├── SchemaStructureError      - the document cannot be analysed at all
    │   ├── SchemaSyntaxError     - graphql-core rejected the SDL text
    │   ├── DuplicateTypeName     - two type definitions share a name
    │   ├── DuplicateFieldName    - a member name repeats inside its owner
    │   └── UnresolvedTypeReference
    └── ConfigError               - invalid options or config file

Style violations are *not* exceptions: they are ``Diagnostic`` values
collected by the rule engine (see :mod:`gqlstyle.diagnostics`).

Error codes follow the pattern ``GQL-NNNN``:
  - 0001-0999: input errors (unreadable schema file)
  - 1000-1999: syntax errors
  - 2000-2999: structural (symbol table) errors
  - 3000-3999: configuration errors
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CODES
# ═══════════════════════════════════════════════════════════════════════════════

class ErrorCodes:
    """Predefined error codes."""

    UNREADABLE_INPUT = "GQL-0001"

    SYNTAX_ERROR = "GQL-1000"
    EXECUTABLE_DEFINITION = "GQL-1001"

    DUPLICATE_TYPE = "GQL-2000"
    DUPLICATE_MEMBER = "GQL-2001"
    UNRESOLVED_TYPE = "GQL-2002"

    INVALID_CONFIG = "GQL-3000"
    UNKNOWN_RULE = "GQL-3001"
    CONFIG_FILE = "GQL-3002"


# ═══════════════════════════════════════════════════════════════════════════════
# SOURCE POSITION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SourceSpan:
    """A position inside the schema source (1-based, 0 means unknown)."""

    source: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        if not self.source and self.line == 0:
            return "<unknown location>"
        parts = [self.source or "<schema>"]
        if self.line > 0:
            parts.append(str(self.line))
            if self.column > 0:
                parts.append(str(self.column))
        return ":".join(parts)


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTION CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

class GqlStyleError(Exception):
    """
    Base exception for all gqlstyle failures.

    Carries a message, an error code, an optional source span, notes and a
    hint, and renders itself GCC-style.
    """

    default_code: str = ErrorCodes.INVALID_CONFIG

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        span: Optional[SourceSpan] = None,
        notes: Optional[List[str]] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.span = span or SourceSpan()
        self.notes: List[str] = list(notes or [])
        self.hint = hint

    def add_note(self, message: str) -> "GqlStyleError":
        """Add a note to this error."""
        self.notes.append(message)
        return self

    def with_hint(self, hint: str) -> "GqlStyleError":
        """Add a hint to this error."""
        self.hint = hint
        return self

    def with_source(self, source: str) -> "GqlStyleError":
        """Attach the schema source name (file path) to the span."""
        self.span = SourceSpan(source=source, line=self.span.line, column=self.span.column)
        return self

    def to_gcc_format(self) -> str:
        """Format as a GCC-style error message."""
        lines = [f"{self.span}: error: {self.message} [{self.code}]"]
        for note in self.notes:
            lines.append(f"note: {note}")
        if self.hint:
            lines.append(f"hint: {self.hint}")
        return "\n".join(lines)

    def to_json(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "location": {
                "source": self.span.source,
                "line": self.span.line,
                "column": self.span.column,
            },
            "notes": list(self.notes),
            "hint": self.hint,
        }

    def __str__(self) -> str:
        return self.to_gcc_format()


# ───────────────────────────────────────────────────────────────────────────────
# STRUCTURAL ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class SchemaStructureError(GqlStyleError):
    """The schema document is not analysable; no diagnostics are produced."""

    default_code = ErrorCodes.DUPLICATE_TYPE


class SchemaSyntaxError(SchemaStructureError):
    """The SDL text could not be parsed."""

    default_code = ErrorCodes.SYNTAX_ERROR


class DuplicateTypeName(SchemaStructureError):
    """Two type definitions share a name."""

    default_code = ErrorCodes.DUPLICATE_TYPE

    def __init__(
        self,
        name: str,
        span: Optional[SourceSpan] = None,
        original_span: Optional[SourceSpan] = None,
    ) -> None:
        super().__init__(
            message=f"Redefinition of type '{name}'",
            span=span,
        )
        self.name = name
        if original_span is not None and original_span.line:
            self.add_note(f"Previously defined at line {original_span.line}")


class DuplicateFieldName(SchemaStructureError):
    """A field, argument or enum value repeats inside its owner."""

    default_code = ErrorCodes.DUPLICATE_MEMBER

    def __init__(
        self,
        owner: str,
        name: str,
        kind: str = "field",
        span: Optional[SourceSpan] = None,
    ) -> None:
        super().__init__(
            message=f"Redefinition of {kind} '{name}' in '{owner}'",
            span=span,
        )
        self.owner = owner
        self.name = name
        self.kind = kind


class UnresolvedTypeReference(SchemaStructureError):
    """A type reference names a type absent from the document."""

    default_code = ErrorCodes.UNRESOLVED_TYPE

    def __init__(
        self,
        name: str,
        referenced_from: str = "",
        span: Optional[SourceSpan] = None,
        suggestions: Optional[Sequence[str]] = None,
    ) -> None:
        where = f" (referenced from '{referenced_from}')" if referenced_from else ""
        super().__init__(
            message=f"Undefined type '{name}'{where}",
            span=span,
        )
        self.name = name
        self.referenced_from = referenced_from
        if suggestions:
            if len(suggestions) == 1:
                self.with_hint(f"Did you mean '{suggestions[0]}'?")
            else:
                self.add_note(f"Similar names: {', '.join(suggestions[:5])}")


# ───────────────────────────────────────────────────────────────────────────────
# CONFIGURATION ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class ConfigError(GqlStyleError):
    """Invalid lint options or an unreadable configuration file."""

    default_code = ErrorCodes.INVALID_CONFIG


# ═══════════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = [
    "ErrorCodes",
    "SourceSpan",
    "GqlStyleError",
    "SchemaStructureError",
    "SchemaSyntaxError",
    "DuplicateTypeName",
    "DuplicateFieldName",
    "UnresolvedTypeReference",
    "ConfigError",
]
