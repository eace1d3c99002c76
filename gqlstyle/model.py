"""
gqlstyle/model.py
═════════════════

Immutable data model of an analysed schema.

Every entity is a frozen dataclass built once by
:func:`gqlstyle.symbols.build_symbol_table` and shared read-only by all
rules.  Owner links (``FieldDefinition.owner``,
``ArgumentDefinition.owner``/``field``) are names, resolved through the
:class:`~gqlstyle.symbols.SymbolTable`; they never own the target.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple


BUILTIN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})


# ═════════════════════════════════════════════════════════════════════════
#  TYPE KIND
# ═════════════════════════════════════════════════════════════════════════

class TypeKind(enum.Enum):
    """Kind of a named type definition."""

    OBJECT = "object"
    INPUT = "input"
    ENUM = "enum"
    SCALAR = "scalar"
    UNION = "union"
    INTERFACE = "interface"

    @property
    def has_fields(self) -> bool:
        return self in (TypeKind.OBJECT, TypeKind.INPUT, TypeKind.INTERFACE)


# ═════════════════════════════════════════════════════════════════════════
#  TYPE REFERENCES
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TypeRef:
    """
    A reference to a named type, with list and nullability wrappers.

    Attributes
    ----------
    name : str
        The named type at the core of the nesting.
    nullable : bool
        Nullability of the reference itself (the outermost wrapper).
    list_depth : int
        Number of list wrappers; 0 for a plain named type.
    element_nullable : bool or None
        For lists, nullability of the innermost named type; ``None`` when
        the reference is not a list.
    text : str
        SDL rendering, e.g. ``[Country!]!``.
    """

    name: str
    nullable: bool = True
    list_depth: int = 0
    element_nullable: Optional[bool] = None
    text: str = ""

    @property
    def is_list(self) -> bool:
        return self.list_depth > 0

    @property
    def non_null(self) -> bool:
        return not self.nullable

    def is_named(self, name: str, non_null: bool = True) -> bool:
        """True for a non-list reference to *name* (non-null when asked)."""
        if self.is_list or self.name != name:
            return False
        return self.non_null or not non_null

    def __str__(self) -> str:
        return self.text or self.name


# ═════════════════════════════════════════════════════════════════════════
#  DEFINITIONS
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ArgumentDefinition:
    """An argument of a field."""

    name: str
    type: TypeRef
    owner: str
    field: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class FieldDefinition:
    """A field of an object, interface or input type."""

    name: str
    owner: str
    type: TypeRef
    arguments: Tuple[ArgumentDefinition, ...] = ()
    line: int = 0
    column: int = 0

    @property
    def nullable(self) -> bool:
        return self.type.nullable

    @property
    def is_list(self) -> bool:
        return self.type.is_list

    def argument(self, name: str) -> Optional[ArgumentDefinition]:
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None


@dataclass(frozen=True)
class EnumValue:
    """A value of an enum type."""

    name: str
    owner: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class TypeDefinition:
    """
    A named type definition, with any extensions already merged in.

    Attributes
    ----------
    name : str
        Unique across the schema.
    kind : TypeKind
        Never changes once built.
    fields : tuple of FieldDefinition
        Object, interface and input types only; document order.
    values : tuple of EnumValue
        Enum types only.
    members : tuple of str
        Union member type names.
    interfaces : tuple of str
        Interfaces implemented by an object or interface type.
    """

    name: str
    kind: TypeKind
    fields: Tuple[FieldDefinition, ...] = ()
    values: Tuple[EnumValue, ...] = ()
    members: Tuple[str, ...] = ()
    interfaces: Tuple[str, ...] = ()
    line: int = 0
    column: int = 0

    def field(self, name: str) -> Optional[FieldDefinition]:
        for fld in self.fields:
            if fld.name == name:
                return fld
        return None

    def has_field(self, name: str) -> bool:
        return self.field(name) is not None


# ═════════════════════════════════════════════════════════════════════════
#  PUBLIC API
# ═════════════════════════════════════════════════════════════════════════

__all__ = [
    "BUILTIN_SCALARS",
    "TypeKind",
    "TypeRef",
    "ArgumentDefinition",
    "FieldDefinition",
    "EnumValue",
    "TypeDefinition",
]
