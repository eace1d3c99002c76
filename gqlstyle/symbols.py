"""
gqlstyle/symbols.py
═══════════════════

Symbol table construction.

:func:`build_symbol_table` walks a graphql-core ``DocumentNode`` into the
immutable model of :mod:`gqlstyle.model`.  It validates structural
resolvability only (unique type names, unique member names, every type
reference resolves) and stops at the first problem in document order.
Naming style is left entirely to the rule engine.

Usage
─────
    document = parse_schema(sdl)
    table = build_symbol_table(document)
    for entity in table.entities():
        ...
"""

from __future__ import annotations

import difflib
import logging
from collections import OrderedDict
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    FrozenSet,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from graphql.language import (
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
)

from gqlstyle.errors import (
    DuplicateFieldName,
    DuplicateTypeName,
    SchemaStructureError,
    SourceSpan,
    UnresolvedTypeReference,
)
from gqlstyle.model import (
    BUILTIN_SCALARS,
    ArgumentDefinition,
    EnumValue,
    FieldDefinition,
    TypeDefinition,
    TypeKind,
    TypeRef,
)
from gqlstyle.parser import DEFAULT_SOURCE_NAME, node_position

_log = logging.getLogger(__name__)

Entity = Union[TypeDefinition, FieldDefinition, ArgumentDefinition]

_DEFINITION_KINDS: Dict[type, TypeKind] = {
    ObjectTypeDefinitionNode: TypeKind.OBJECT,
    InputObjectTypeDefinitionNode: TypeKind.INPUT,
    EnumTypeDefinitionNode: TypeKind.ENUM,
    ScalarTypeDefinitionNode: TypeKind.SCALAR,
    UnionTypeDefinitionNode: TypeKind.UNION,
    InterfaceTypeDefinitionNode: TypeKind.INTERFACE,
}

_EXTENSION_KINDS: Dict[type, TypeKind] = {
    ObjectTypeExtensionNode: TypeKind.OBJECT,
    InputObjectTypeExtensionNode: TypeKind.INPUT,
    EnumTypeExtensionNode: TypeKind.ENUM,
    ScalarTypeExtensionNode: TypeKind.SCALAR,
    UnionTypeExtensionNode: TypeKind.UNION,
    InterfaceTypeExtensionNode: TypeKind.INTERFACE,
}

DEFAULT_ROOT_NAMES: Dict[str, str] = {
    "query": "Query",
    "mutation": "Mutation",
    "subscription": "Subscription",
}


# ═════════════════════════════════════════════════════════════════════════
#  SYMBOL TABLE
# ═════════════════════════════════════════════════════════════════════════

class SymbolTable:
    """
    Read-only mapping of type name to :class:`TypeDefinition`.

    Types iterate in document order.  Besides lookups the table exposes
    the root operation types and two indexes the rules need: which
    arguments reference a type, and which types are returned by root
    mutation fields.
    """

    def __init__(
        self,
        types: "OrderedDict[str, TypeDefinition]",
        root_types: Mapping[str, str],
        source_name: str = DEFAULT_SOURCE_NAME,
    ) -> None:
        self._types = MappingProxyType(OrderedDict(types))
        self._root_types = MappingProxyType(dict(root_types))
        self.source_name = source_name

        usages: Dict[str, List[ArgumentDefinition]] = {}
        for tdef in self._types.values():
            for fld in tdef.fields:
                for arg in fld.arguments:
                    usages.setdefault(arg.type.name, []).append(arg)
        self._argument_usages: Mapping[str, Tuple[ArgumentDefinition, ...]] = (
            MappingProxyType({k: tuple(v) for k, v in usages.items()})
        )

        mutation = self.mutation_type
        self._mutation_results: FrozenSet[str] = frozenset(
            fld.type.name for fld in (mutation.fields if mutation else ())
        )

    # ── mapping protocol ─────────────────────────────────────────────

    @property
    def types(self) -> Mapping[str, TypeDefinition]:
        return self._types

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeDefinition]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    def get(self, name: str) -> Optional[TypeDefinition]:
        return self._types.get(name)

    def kind_of(self, name: str) -> Optional[TypeKind]:
        """Kind of the named type; built-in scalars are ``SCALAR``."""
        tdef = self._types.get(name)
        if tdef is not None:
            return tdef.kind
        if name in BUILTIN_SCALARS:
            return TypeKind.SCALAR
        return None

    def is_leaf(self, name: str) -> bool:
        """True for scalar and enum types (built-in or declared)."""
        return self.kind_of(name) in (TypeKind.SCALAR, TypeKind.ENUM)

    # ── root operation types ─────────────────────────────────────────

    @property
    def root_types(self) -> Mapping[str, str]:
        """Operation (``query``/``mutation``/``subscription``) to type name."""
        return self._root_types

    def root_type(self, operation: str) -> Optional[TypeDefinition]:
        name = self._root_types.get(operation)
        return self._types.get(name) if name else None

    @property
    def query_type(self) -> Optional[TypeDefinition]:
        return self.root_type("query")

    @property
    def mutation_type(self) -> Optional[TypeDefinition]:
        return self.root_type("mutation")

    @property
    def subscription_type(self) -> Optional[TypeDefinition]:
        return self.root_type("subscription")

    def is_root_type(self, name: str) -> bool:
        return name in self._root_types.values()

    def root_operation_of(self, field: FieldDefinition) -> Optional[str]:
        """The operation whose root type owns *field*, if any."""
        for operation, type_name in self._root_types.items():
            if field.owner == type_name:
                return operation
        return None

    # ── indexes ──────────────────────────────────────────────────────

    def owner_of(self, entity: Union[FieldDefinition, ArgumentDefinition]) -> TypeDefinition:
        return self._types[entity.owner]

    def field_of(self, argument: ArgumentDefinition) -> FieldDefinition:
        fld = self._types[argument.owner].field(argument.field)
        assert fld is not None
        return fld

    def argument_usages(self, type_name: str) -> Tuple[ArgumentDefinition, ...]:
        """All field arguments whose type refers to *type_name*."""
        return self._argument_usages.get(type_name, ())

    @property
    def mutation_result_types(self) -> FrozenSet[str]:
        return self._mutation_results

    # ── traversal ────────────────────────────────────────────────────

    def entities(self) -> Iterator[Entity]:
        """Yield every type, then its fields, each followed by its arguments."""
        for tdef in self._types.values():
            yield tdef
            for fld in tdef.fields:
                yield fld
                yield from fld.arguments

    def __repr__(self) -> str:
        return f"SymbolTable({len(self._types)} types, roots={dict(self._root_types)})"


# ═════════════════════════════════════════════════════════════════════════
#  BUILDER
# ═════════════════════════════════════════════════════════════════════════

def type_ref_from_node(node: TypeNode) -> TypeRef:
    """Convert a graphql-core type node into a :class:`TypeRef`."""
    nullable = not isinstance(node, NonNullTypeNode)
    depth = 0
    current: Any = node
    while True:
        inner_nullable = True
        if isinstance(current, NonNullTypeNode):
            inner_nullable = False
            current = current.type
        if isinstance(current, ListTypeNode):
            depth += 1
            current = current.type
            continue
        return TypeRef(
            name=current.name.value,
            nullable=nullable,
            list_depth=depth,
            element_nullable=inner_nullable if depth else None,
            text=_type_text(node),
        )


def _type_text(node: Any) -> str:
    if isinstance(node, NonNullTypeNode):
        return _type_text(node.type) + "!"
    if isinstance(node, ListTypeNode):
        return f"[{_type_text(node.type)}]"
    return node.name.value


class _Builder:
    """Accumulates definition nodes per type name, then freezes them."""

    def __init__(self, document: DocumentNode, source_name: str) -> None:
        self.document = document
        self.source_name = source_name
        # name -> (kind, [definition/extension nodes in document order])
        self._nodes: "OrderedDict[str, Tuple[TypeKind, List[Any]]]" = OrderedDict()
        self._has_base: Dict[str, Any] = {}
        self._schema_nodes: List[Any] = []
        self._directives: List[DirectiveDefinitionNode] = []

    def _span(self, node: Any) -> SourceSpan:
        line, column = node_position(node)
        return SourceSpan(self.source_name, line, column)

    # ── pass 1: collect ──────────────────────────────────────────────

    def collect(self) -> None:
        for node in self.document.definitions:
            node_type = type(node)
            if node_type in _DEFINITION_KINDS:
                self._add(node, _DEFINITION_KINDS[node_type], is_extension=False)
            elif node_type in _EXTENSION_KINDS:
                self._add(node, _EXTENSION_KINDS[node_type], is_extension=True)
            elif isinstance(node, (SchemaDefinitionNode, SchemaExtensionNode)):
                self._schema_nodes.append(node)
            elif isinstance(node, DirectiveDefinitionNode):
                self._directives.append(node)

    def _add(self, node: Any, kind: TypeKind, is_extension: bool) -> None:
        name = node.name.value
        if not is_extension:
            if name in self._has_base:
                raise DuplicateTypeName(
                    name,
                    span=self._span(node),
                    original_span=self._span(self._has_base[name]),
                )
            self._has_base[name] = node
        entry = self._nodes.get(name)
        if entry is None:
            self._nodes[name] = (kind, [node])
            return
        existing_kind, nodes = entry
        if existing_kind is not kind:
            raise SchemaStructureError(
                f"Cannot extend {existing_kind.value} type '{name}' as {kind.value}",
                span=self._span(node),
            )
        nodes.append(node)

    # ── pass 2: freeze and resolve ───────────────────────────────────

    def build(self) -> SymbolTable:
        self.collect()
        known = set(self._nodes) | BUILTIN_SCALARS

        types: "OrderedDict[str, TypeDefinition]" = OrderedDict()
        for name, (kind, nodes) in self._nodes.items():
            types[name] = self._freeze(name, kind, nodes, known)

        for directive in self._directives:
            owner = f"@{directive.name.value}"
            for arg in directive.arguments or ():
                self._resolve(type_ref_from_node(arg.type).name, owner, arg, known)

        root_types = self._root_types(types, known)
        table = SymbolTable(types, root_types, source_name=self.source_name)
        _log.debug("built %r", table)
        return table

    def _freeze(self, name: str, kind: TypeKind, nodes: List[Any], known: set) -> TypeDefinition:
        first = self._has_base.get(name, nodes[0])
        line, column = node_position(first)

        fields: List[FieldDefinition] = []
        values: List[EnumValue] = []
        members: List[str] = []
        interfaces: List[str] = []
        seen: Dict[str, str] = {}

        def _unique(member_name: str, member_kind: str, node: Any) -> None:
            if member_name in seen:
                raise DuplicateFieldName(name, member_name, member_kind, span=self._span(node))
            seen[member_name] = member_kind

        for node in nodes:
            if kind is TypeKind.ENUM:
                for value in node.values or ():
                    _unique(value.name.value, "enum value", value)
                    vline, vcol = node_position(value)
                    values.append(EnumValue(value.name.value, name, vline, vcol))
            elif kind is TypeKind.UNION:
                for member in node.types or ():
                    self._resolve(member.name.value, name, member, known)
                    members.append(member.name.value)
            elif kind.has_fields:
                for iface in getattr(node, "interfaces", None) or ():
                    self._resolve(iface.name.value, name, iface, known)
                    interfaces.append(iface.name.value)
                for fnode in node.fields or ():
                    _unique(fnode.name.value, "field", fnode)
                    fields.append(self._field(name, fnode, known))

        return TypeDefinition(
            name=name,
            kind=kind,
            fields=tuple(fields),
            values=tuple(values),
            members=tuple(members),
            interfaces=tuple(interfaces),
            line=line,
            column=column,
        )

    def _field(self, owner: str, node: Any, known: set) -> FieldDefinition:
        field_name = node.name.value
        ref = type_ref_from_node(node.type)
        self._resolve(ref.name, f"{owner}.{field_name}", node.type, known)

        arguments: List[ArgumentDefinition] = []
        seen_args: set = set()
        # input fields carry no "arguments" attribute
        for anode in getattr(node, "arguments", None) or ():
            arg_name = anode.name.value
            if arg_name in seen_args:
                raise DuplicateFieldName(
                    f"{owner}.{field_name}", arg_name, "argument", span=self._span(anode)
                )
            seen_args.add(arg_name)
            aref = type_ref_from_node(anode.type)
            self._resolve(aref.name, f"{owner}.{field_name}({arg_name})", anode.type, known)
            aline, acol = node_position(anode)
            arguments.append(ArgumentDefinition(arg_name, aref, owner, field_name, aline, acol))

        line, column = node_position(node)
        return FieldDefinition(
            name=field_name,
            owner=owner,
            type=ref,
            arguments=tuple(arguments),
            line=line,
            column=column,
        )

    def _resolve(self, name: str, referenced_from: str, node: Any, known: set) -> None:
        if name in known:
            return
        suggestions = suggest_names(name, sorted(known))
        raise UnresolvedTypeReference(
            name,
            referenced_from=referenced_from,
            span=self._span(node),
            suggestions=suggestions,
        )

    def _root_types(self, types: Mapping[str, TypeDefinition], known: set) -> Dict[str, str]:
        roots: Dict[str, str] = {}
        for node in self._schema_nodes:
            for op in node.operation_types or ():
                type_name = op.type.name.value
                self._resolve(type_name, "schema", op.type, known)
                roots[op.operation.value] = type_name
        if self._schema_nodes:
            return roots
        for operation, type_name in DEFAULT_ROOT_NAMES.items():
            tdef = types.get(type_name)
            if tdef is not None and tdef.kind is TypeKind.OBJECT:
                roots[operation] = type_name
        return roots


def build_symbol_table(
    document: DocumentNode,
    source_name: Optional[str] = None,
) -> SymbolTable:
    """Build the symbol table for a parsed schema document.

    Raises
    ------
    DuplicateTypeName
        Two type definitions share a name.
    DuplicateFieldName
        A field, argument or enum value repeats within its owner.
    UnresolvedTypeReference
        A reference names a type the document does not define.
    """
    if source_name is None:
        loc = document.loc
        source_name = loc.source.name if loc is not None and loc.source else DEFAULT_SOURCE_NAME
    return _Builder(document, source_name).build()


def suggest_names(name: str, candidates: Sequence[str]) -> List[str]:
    """Close matches of *name* among *candidates* (for error hints)."""
    return difflib.get_close_matches(name, list(candidates), n=3)


__all__ = [
    "DEFAULT_ROOT_NAMES",
    "Entity",
    "SymbolTable",
    "build_symbol_table",
    "suggest_names",
    "type_ref_from_node",
]
