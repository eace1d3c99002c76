"""
gqlstyle/checkers.py
════════════════════

Rule framework and the built-in rule catalog.

Every rule is a stateless object declaring which entity kinds it targets
(types, fields, arguments), its default severity, and a ``check``
generator yielding :class:`~gqlstyle.diagnostics.Diagnostic` values.  The
engine (:mod:`gqlstyle.engine`) dispatches each enabled rule to each
entity of a matching kind exactly once.

Catalog order (also the tie-break between diagnostics on one entity)
────────────────────────────────────────────────────────────────────
     1  TypeCasing            type names are PascalCase
     2  TypeSingular          type names are singular           (heuristic)
     3  TypeKindSuffix        no Enum/Type/Scalar suffix
     4  InputSuffix           input names end in Input/Filter/Draft
     5  FilterSuffix          inputs used as `filter` end in Filter
     6  FieldCasing           field and argument names are camelCase
     7  FieldPlurality        list fields plural, others singular (heuristic)
     8  FieldRedundantName    fields do not repeat type names   (heuristic)
     9  MutationNaming        mutations are <verb><Object>
    10  MutationResultShape   results carry success and errors
    11  CreateMutationShape   create<X>(draft: <X>Draft!)
    12  DeleteMutationShape   delete<X>(id: ID!)
    13  CollectionQueryShape  collections are [T!]!
    14  ByIdQueryShape        lookups by id return a nullable T
    15  IdFieldPresence       entities have id: ID!             (heuristic)
    16  EnumValueCasing       enum values are SCREAMING_SNAKE_CASE
    17  BooleanFieldPrefix    is/has prefix policy (off by default)
"""

from __future__ import annotations

import enum
import re
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import (
    ClassVar,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
    Type,
)

from gqlstyle.config import LintOptions
from gqlstyle.diagnostics import Diagnostic, Location, Severity
from gqlstyle.errors import ConfigError, ErrorCodes
from gqlstyle.heuristics import (
    ROLE_SUFFIXES,
    Heuristics,
    name_is_plural,
    plural_of,
    split_words,
    strip_role_suffix,
)
from gqlstyle.model import ArgumentDefinition, FieldDefinition, TypeDefinition, TypeKind
from gqlstyle.symbols import Entity, SymbolTable, suggest_names


# ═════════════════════════════════════════════════════════════════════════
#  PART 1: ENTITY KINDS AND NAME HELPERS
# ═════════════════════════════════════════════════════════════════════════

class EntityKind(enum.Enum):
    TYPE = "type"
    FIELD = "field"
    ARGUMENT = "argument"


def entity_kind(entity: Entity) -> EntityKind:
    if isinstance(entity, TypeDefinition):
        return EntityKind.TYPE
    if isinstance(entity, FieldDefinition):
        return EntityKind.FIELD
    if isinstance(entity, ArgumentDefinition):
        return EntityKind.ARGUMENT
    raise TypeError(f"not a schema entity: {entity!r}")


def location_of(entity: Entity) -> Location:
    """The diagnostic location naming *entity*."""
    if isinstance(entity, TypeDefinition):
        return Location(entity.name, line=entity.line, column=entity.column)
    if isinstance(entity, FieldDefinition):
        return Location(entity.owner, entity.name, line=entity.line, column=entity.column)
    return Location(
        entity.owner,
        entity.field,
        entity.name,
        line=entity.line,
        column=entity.column,
    )


PASCAL_CASE = re.compile(r"^[A-Z][A-Za-z0-9]*$")
CAMEL_CASE = re.compile(r"^[a-z][A-Za-z0-9]*$")
SCREAMING_SNAKE_CASE = re.compile(r"^[A-Z][A-Z0-9_]*$")


def _upper_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def _lower_first(word: str) -> str:
    return word[:1].lower() + word[1:]


def to_pascal_case(name: str) -> str:
    return "".join(_upper_first(w) for w in split_words(name))


def to_camel_case(name: str) -> str:
    return _lower_first(to_pascal_case(name))


def to_screaming_snake_case(name: str) -> str:
    return "_".join(w.upper() for w in split_words(name))


def _is_introspection(name: str) -> bool:
    return name.startswith("__")


# ═════════════════════════════════════════════════════════════════════════
#  PART 2: RULE BASE CLASS AND CONTEXT
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RuleContext:
    """
    Read-only context shared by every rule invocation of one run.

    Attributes
    ----------
    table      : the symbol table under analysis
    options    : lint options in effect
    heuristics : strategy objects for the Warning-level rules
    """
    table: SymbolTable
    options: LintOptions = field(default_factory=LintOptions)
    heuristics: Heuristics = field(default_factory=Heuristics)


class Rule(ABC):
    """
    Abstract base class for all rules.

    Subclass Contract
    ─────────────────
      - Set ``rule_id``, ``description`` and ``targets``
      - Implement ``check()`` as a generator of diagnostics
      - Optionally override ``applies_to()`` to narrow the entities
      - Keep no state between calls: rules may run on several threads
    """

    rule_id: ClassVar[str] = "BaseRule"
    description: ClassVar[str] = ""
    targets: ClassVar[FrozenSet[EntityKind]] = frozenset()
    default_severity: ClassVar[Severity] = Severity.ERROR
    heuristic: ClassVar[bool] = False

    def applies_to(self, ctx: RuleContext, entity: Entity) -> bool:
        return True

    @abstractmethod
    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        ...

    def _diag(
        self,
        entity: Entity,
        message: str,
        suggested_fix: Optional[str] = None,
        location: Optional[Location] = None,
    ) -> Diagnostic:
        """Helper to create a diagnostic at *entity* with the default severity."""
        return Diagnostic(
            rule_id=self.rule_id,
            severity=self.default_severity,
            message=message,
            location=location or location_of(entity),
            suggested_fix=suggested_fix,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} '{self.rule_id}'>"


class TypeRule(Rule):
    """A rule over type definitions, optionally restricted to some kinds."""

    targets = frozenset({EntityKind.TYPE})
    kinds: ClassVar[Optional[FrozenSet[TypeKind]]] = None

    def applies_to(self, ctx: RuleContext, entity: Entity) -> bool:
        assert isinstance(entity, TypeDefinition)
        if _is_introspection(entity.name):
            return False
        return self.kinds is None or entity.kind in self.kinds


class RootFieldRule(Rule):
    """A rule over the fields of one root operation type."""

    targets = frozenset({EntityKind.FIELD})
    operation: ClassVar[str] = "query"

    def applies_to(self, ctx: RuleContext, entity: Entity) -> bool:
        assert isinstance(entity, FieldDefinition)
        return ctx.table.root_operation_of(entity) == self.operation


# ═════════════════════════════════════════════════════════════════════════
#  PART 3: TYPE NAMING RULES
# ═════════════════════════════════════════════════════════════════════════

class TypeCasing(TypeRule):
    rule_id = "TypeCasing"
    description = "Type names are PascalCase."

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        name = entity.name
        if PASCAL_CASE.match(name):
            return
        fix = to_pascal_case(name)
        yield self._diag(
            entity,
            f"Type '{name}' should be PascalCase",
            suggested_fix=fix if fix and fix != name else None,
        )


class TypeSingular(TypeRule):
    rule_id = "TypeSingular"
    description = "Type names are singular nouns."
    default_severity = Severity.WARNING
    heuristic = True
    kinds = frozenset(set(TypeKind) - {TypeKind.ENUM})

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        core = strip_role_suffix(entity.name, ROLE_SUFFIXES)
        words = split_words(core)
        if not words:
            return
        if ctx.heuristics.plurality.is_plural(words[-1]) is True:
            yield self._diag(
                entity,
                f"Type '{entity.name}' should be singular ('{words[-1]}' looks plural)",
            )


class TypeKindSuffix(TypeRule):
    rule_id = "TypeKindSuffix"
    description = "Type names do not end with Enum, Type or Scalar."

    SUFFIXES: ClassVar[Tuple[str, ...]] = ("Enum", "Type", "Scalar")

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        name = entity.name
        for suffix in self.SUFFIXES:
            if name.endswith(suffix) and len(name) > len(suffix):
                yield self._diag(
                    entity,
                    f"Type '{name}' should not end with '{suffix}'",
                    suggested_fix=name[: -len(suffix)],
                )
                return


class InputSuffix(TypeRule):
    rule_id = "InputSuffix"
    description = "Input type names end with an accepted input suffix."
    kinds = frozenset({TypeKind.INPUT})

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        suffixes = ctx.options.input_suffixes
        if entity.name.endswith(tuple(suffixes)):
            return
        yield self._diag(
            entity,
            f"Input type '{entity.name}' should end with one of: {', '.join(suffixes)}",
            suggested_fix=entity.name + suffixes[0],
        )


class FilterSuffix(TypeRule):
    rule_id = "FilterSuffix"
    description = "Input types used as a 'filter' argument end with Filter."
    kinds = frozenset({TypeKind.INPUT})

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        if entity.name.endswith("Filter"):
            return
        usages = [a for a in ctx.table.argument_usages(entity.name) if a.name == "filter"]
        if not usages:
            return
        first = usages[0]
        yield self._diag(
            entity,
            f"Input type '{entity.name}' is used as a 'filter' argument "
            f"({first.owner}.{first.field}) and should end with 'Filter'",
            suggested_fix=strip_role_suffix(entity.name) + "Filter",
        )


# ═════════════════════════════════════════════════════════════════════════
#  PART 4: FIELD NAMING RULES
# ═════════════════════════════════════════════════════════════════════════

class FieldCasing(Rule):
    rule_id = "FieldCasing"
    description = "Field and argument names are camelCase."
    targets = frozenset({EntityKind.FIELD, EntityKind.ARGUMENT})

    def applies_to(self, ctx: RuleContext, entity: Entity) -> bool:
        return not _is_introspection(entity.name)

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        name = entity.name
        if CAMEL_CASE.match(name):
            return
        what = "Argument" if isinstance(entity, ArgumentDefinition) else "Field"
        fix = to_camel_case(name)
        yield self._diag(
            entity,
            f"{what} '{name}' should be camelCase",
            suggested_fix=fix if fix and fix != name else None,
        )


class FieldPlurality(Rule):
    rule_id = "FieldPlurality"
    description = "List fields have plural names; other fields singular ones."
    targets = frozenset({EntityKind.FIELD})
    default_severity = Severity.WARNING
    heuristic = True

    PAGED_SUFFIXES: ClassVar[Tuple[str, ...]] = ("Connection", "Page")

    def applies_to(self, ctx: RuleContext, entity: Entity) -> bool:
        assert isinstance(entity, FieldDefinition)
        return entity.type.name != "Boolean" and not _is_introspection(entity.name)

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        assert isinstance(entity, FieldDefinition)
        plural = name_is_plural(ctx.heuristics.plurality, entity.name)
        if entity.is_list:
            if plural is False:
                last = split_words(entity.name)[-1]
                yield self._diag(
                    entity,
                    f"List field '{entity.name}' should have a plural name",
                    suggested_fix=entity.name[: -len(last)] + plural_of(last),
                )
        elif plural is True and not entity.type.name.endswith(self.PAGED_SUFFIXES):
            yield self._diag(
                entity,
                f"Field '{entity.name}' returns a single '{entity.type}' "
                f"and should have a singular name",
            )


class FieldRedundantName(Rule):
    """
    Warn when a field name repeats its owning or output type name.

    Names in ``entityNameAllowList`` are never reported, whatever
    redundancy heuristic is in use.  Fields of root operation types are
    exempt under the default heuristic: lookups such as ``userById`` or
    ``userList`` name the type they return on purpose.
    """

    rule_id = "FieldRedundantName"
    description = "Field names do not repeat their owning or output type name."
    targets = frozenset({EntityKind.FIELD})
    default_severity = Severity.WARNING
    heuristic = True

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        assert isinstance(entity, FieldDefinition)
        if entity.name in ctx.options.entity_name_allow_list:
            return
        repeated = ctx.heuristics.redundancy.redundant_with(ctx.table, entity)
        if repeated is None:
            return
        name = entity.name
        start = name.lower().find(repeated.lower())
        rest = name[:start] + name[start + len(repeated):] if start >= 0 else ""
        yield self._diag(
            entity,
            f"Field '{name}' repeats the type name '{repeated}'",
            suggested_fix=_lower_first(rest) if rest else None,
        )


# ═════════════════════════════════════════════════════════════════════════
#  PART 5: MUTATION RULES
# ═════════════════════════════════════════════════════════════════════════

VERB_SYNONYMS: Dict[str, str] = {
    "new": "create",
    "add": "create",
    "insert": "create",
    "make": "create",
    "edit": "update",
    "modify": "update",
    "change": "update",
    "remove": "delete",
    "destroy": "delete",
    "erase": "delete",
}


def _verb_and_object(name: str) -> Tuple[str, str]:
    """Split ``createUser`` into (``create``, ``User``)."""
    words = split_words(name)
    if not words:
        return "", ""
    verb = words[0]
    return verb, name[len(verb):]


class MutationNaming(RootFieldRule):
    rule_id = "MutationNaming"
    description = "Mutation fields are named <verb><Object> with an allowed verb."
    operation = "mutation"

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        verbs = ctx.options.allowed_mutation_verbs
        verb, obj = _verb_and_object(entity.name)
        if verb in verbs and obj[:1].isupper():
            return
        fix = None
        synonym = VERB_SYNONYMS.get(verb.lower())
        if synonym in verbs and obj[:1].isupper():
            fix = synonym + obj
        yield self._diag(
            entity,
            f"Mutation '{entity.name}' should be named <verb><Object> "
            f"with a verb from: {', '.join(sorted(verbs))}",
            suggested_fix=fix,
        )


class MutationResultShape(RootFieldRule):
    rule_id = "MutationResultShape"
    description = "Mutations return a non-null object with success and errors fields."
    operation = "mutation"

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        assert isinstance(entity, FieldDefinition)
        ref = entity.type
        problems: List[str] = []
        if ref.nullable:
            problems.append(f"result type '{ref}' should be non-null")

        result = ctx.table.get(ref.name)
        if ref.is_list or result is None or result.kind is not TypeKind.OBJECT:
            problems.append(f"should return a single object type, not '{ref}'")
        else:
            success = result.field("success")
            if success is None or not success.type.is_named("Boolean"):
                problems.append(f"'{result.name}' should have a 'success: Boolean!' field")
            errors = result.field("errors")
            if errors is None or not self._is_error_list(ctx.table, errors):
                problems.append(f"'{result.name}' should have an 'errors: [Error!]!' field")

        if problems:
            yield self._diag(
                entity,
                f"Mutation '{entity.name}' result: " + "; ".join(problems),
            )

    @staticmethod
    def _is_error_list(table: SymbolTable, fld: FieldDefinition) -> bool:
        ref = fld.type
        if not ref.is_list or ref.nullable:
            return False
        kind = table.kind_of(ref.name)
        return (
            kind in (TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION)
            and ref.name.endswith("Error")
        )


class CreateMutationShape(RootFieldRule):
    rule_id = "CreateMutationShape"
    description = "create<Entity> takes exactly one argument 'draft: <Entity>Draft!'."
    operation = "mutation"

    def applies_to(self, ctx: RuleContext, entity: Entity) -> bool:
        verb, obj = _verb_and_object(entity.name)
        return super().applies_to(ctx, entity) and verb == "create" and obj[:1].isupper()

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        assert isinstance(entity, FieldDefinition)
        draft = _verb_and_object(entity.name)[1] + "Draft"
        args = entity.arguments
        if len(args) == 1 and args[0].name == "draft" and args[0].type.is_named(draft):
            return
        yield self._diag(
            entity,
            f"Mutation '{entity.name}' should take exactly one argument 'draft: {draft}!'",
            suggested_fix=f"{entity.name}(draft: {draft}!)",
        )


class DeleteMutationShape(RootFieldRule):
    rule_id = "DeleteMutationShape"
    description = "delete<Entity> takes an 'id: ID!' argument."
    operation = "mutation"

    def applies_to(self, ctx: RuleContext, entity: Entity) -> bool:
        verb, obj = _verb_and_object(entity.name)
        return super().applies_to(ctx, entity) and verb == "delete" and obj[:1].isupper()

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        assert isinstance(entity, FieldDefinition)
        arg = entity.argument("id")
        if arg is not None and arg.type.is_named("ID"):
            return
        yield self._diag(
            entity,
            f"Mutation '{entity.name}' should take an 'id: ID!' argument",
        )


# ═════════════════════════════════════════════════════════════════════════
#  PART 6: QUERY RULES
# ═════════════════════════════════════════════════════════════════════════

class CollectionQueryShape(RootFieldRule):
    rule_id = "CollectionQueryShape"
    description = "Root query fields returning lists use [T!]!."
    operation = "query"

    def applies_to(self, ctx: RuleContext, entity: Entity) -> bool:
        assert isinstance(entity, FieldDefinition)
        return super().applies_to(ctx, entity) and entity.is_list

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        assert isinstance(entity, FieldDefinition)
        ref = entity.type
        if not ref.nullable and ref.element_nullable is False:
            return
        expected = f"[{ref.name}!]!"
        yield self._diag(
            entity,
            f"Query field '{entity.name}' returns '{ref}'; collections should be '{expected}'",
            suggested_fix=expected,
        )


class ByIdQueryShape(RootFieldRule):
    rule_id = "ByIdQueryShape"
    description = "Root query lookups by 'id: ID!' return a nullable type."
    operation = "query"

    def applies_to(self, ctx: RuleContext, entity: Entity) -> bool:
        assert isinstance(entity, FieldDefinition)
        if not super().applies_to(ctx, entity) or entity.is_list:
            return False
        args = entity.arguments
        return len(args) == 1 and args[0].name == "id" and args[0].type.is_named("ID")

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        assert isinstance(entity, FieldDefinition)
        if entity.nullable:
            return
        yield self._diag(
            entity,
            f"Query field '{entity.name}' looks up by id and should return a nullable "
            f"'{entity.type.name}', not '{entity.type}'",
            suggested_fix=entity.type.name,
        )


# ═════════════════════════════════════════════════════════════════════════
#  PART 7: ENTITY, ENUM AND BOOLEAN RULES
# ═════════════════════════════════════════════════════════════════════════

class IdFieldPresence(TypeRule):
    rule_id = "IdFieldPresence"
    description = "Object types modelling entities have an 'id: ID!' field."
    default_severity = Severity.WARNING
    heuristic = True
    kinds = frozenset({TypeKind.OBJECT})

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        assert isinstance(entity, TypeDefinition)
        if ctx.heuristics.entity.is_entity(ctx.table, entity) is not True:
            return
        id_field = entity.field("id")
        if id_field is None:
            yield self._diag(
                entity,
                f"Type '{entity.name}' looks like an entity and should have an 'id: ID!' field",
                suggested_fix="id: ID!",
            )
        elif not id_field.type.is_named("ID"):
            yield self._diag(
                entity,
                f"Type '{entity.name}' should declare 'id' as 'ID!', not '{id_field.type}'",
                suggested_fix="id: ID!",
            )


class EnumValueCasing(TypeRule):
    rule_id = "EnumValueCasing"
    description = "Enum values are SCREAMING_SNAKE_CASE."
    kinds = frozenset({TypeKind.ENUM})

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        assert isinstance(entity, TypeDefinition)
        for value in entity.values:
            if SCREAMING_SNAKE_CASE.match(value.name):
                continue
            yield self._diag(
                entity,
                f"Enum value '{value.name}' of '{entity.name}' should be SCREAMING_SNAKE_CASE",
                suggested_fix=to_screaming_snake_case(value.name),
                location=Location(entity.name, value.name, line=value.line, column=value.column),
            )


class BooleanFieldPrefix(Rule):
    rule_id = "BooleanFieldPrefix"
    description = "Boolean field names follow the configured is/has prefix policy."
    targets = frozenset({EntityKind.FIELD})
    default_severity = Severity.WARNING

    # required by MutationResultShape, whatever the policy
    EXEMPT: ClassVar[FrozenSet[str]] = frozenset({"success"})

    def applies_to(self, ctx: RuleContext, entity: Entity) -> bool:
        assert isinstance(entity, FieldDefinition)
        return (
            ctx.options.boolean_prefix_policy != "ignore"
            and entity.type.is_named("Boolean", non_null=False)
            and entity.name not in self.EXEMPT
            and not ctx.table.is_root_type(entity.owner)
        )

    def check(self, ctx: RuleContext, entity: Entity) -> Iterator[Diagnostic]:
        prefixes = ctx.options.boolean_prefixes
        words = split_words(entity.name)
        prefix = words[0] if len(words) > 1 and words[0] in prefixes else None

        if ctx.options.boolean_prefix_policy == "require" and prefix is None:
            yield self._diag(
                entity,
                f"Boolean field '{entity.name}' should start with one of: {', '.join(prefixes)}",
                suggested_fix=prefixes[0] + _upper_first(entity.name) if prefixes else None,
            )
        elif ctx.options.boolean_prefix_policy == "forbid" and prefix is not None:
            yield self._diag(
                entity,
                f"Boolean field '{entity.name}' should not start with '{prefix}'",
                suggested_fix=_lower_first(entity.name[len(prefix):]),
            )


# ═════════════════════════════════════════════════════════════════════════
#  PART 8: RULE REGISTRY
# ═════════════════════════════════════════════════════════════════════════

DEFAULT_RULES: Tuple[Type[Rule], ...] = (
    TypeCasing,
    TypeSingular,
    TypeKindSuffix,
    InputSuffix,
    FilterSuffix,
    FieldCasing,
    FieldPlurality,
    FieldRedundantName,
    MutationNaming,
    MutationResultShape,
    CreateMutationShape,
    DeleteMutationShape,
    CollectionQueryShape,
    ByIdQueryShape,
    IdFieldPresence,
    EnumValueCasing,
    BooleanFieldPrefix,
)


class RuleRegistry:
    """
    Ordered registry of rule classes.

    Registration order is the catalog order; it decides the tie-break
    between diagnostics on the same entity.

    Usage
    -----
    >>> registry = RuleRegistry.default()
    >>> registry.disable("TypeSingular")
    >>> rules = registry.instantiate()
    """

    def __init__(self, rules: Iterable[Type[Rule]] = ()) -> None:
        self._rules: "OrderedDict[str, Type[Rule]]" = OrderedDict()
        self._disabled: Set[str] = set()
        for rule_cls in rules:
            self.register(rule_cls)

    @classmethod
    def default(cls) -> "RuleRegistry":
        return cls(DEFAULT_RULES)

    def register(self, rule_cls: Type[Rule]) -> None:
        """Register a rule class at the end of the catalog."""
        if rule_cls.rule_id in self._rules:
            raise ValueError(f"rule '{rule_cls.rule_id}' is already registered")
        self._rules[rule_cls.rule_id] = rule_cls

    def unregister(self, rule_id: str) -> None:
        self._rules.pop(rule_id, None)
        self._disabled.discard(rule_id)

    def disable(self, rule_id: str) -> None:
        self.validate_ids([rule_id])
        self._disabled.add(rule_id)

    def enable(self, rule_id: str) -> None:
        self._disabled.discard(rule_id)

    def get_all(self) -> List[Type[Rule]]:
        return list(self._rules.values())

    def get_enabled(self) -> List[Type[Rule]]:
        return [cls for rid, cls in self._rules.items() if rid not in self._disabled]

    def get_by_name(self, rule_id: str) -> Optional[Type[Rule]]:
        return self._rules.get(rule_id)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def names(self) -> List[str]:
        """Rule ids in catalog order."""
        return list(self._rules)

    def order(self) -> Mapping[str, int]:
        """Rule id to catalog position (0-based)."""
        return {rid: idx for idx, rid in enumerate(self._rules)}

    def validate_ids(self, rule_ids: Iterable[str], setting: str = "rule") -> None:
        """Raise ConfigError for any id that is not in the catalog."""
        for rule_id in rule_ids:
            if rule_id in self._rules:
                continue
            err = ConfigError(
                f"Unknown rule '{rule_id}' in {setting}",
                code=ErrorCodes.UNKNOWN_RULE,
            )
            suggestions = suggest_names(rule_id, self.names)
            if suggestions:
                err.with_hint(f"Did you mean '{suggestions[0]}'?")
            else:
                err.add_note(f"Known rules: {', '.join(self.names)}")
            raise err

    def instantiate(self, options: Optional[LintOptions] = None) -> List[Rule]:
        """Fresh rule instances for one run, honouring ``disabledRules``.

        Raises
        ------
        ConfigError
            When ``disabledRules`` or ``severityOverrides`` name an
            unknown rule.
        """
        options = options or LintOptions()
        self.validate_ids(sorted(options.disabled_rules), "disabledRules")
        self.validate_ids(sorted(options.severity_overrides), "severityOverrides")
        self.validate_ids(
            sorted(e.rule for e in options.ignore if e.rule != "*"), "ignore"
        )
        return [
            cls() for cls in self.get_enabled()
            if cls.rule_id not in options.disabled_rules
        ]


def catalog_order() -> Mapping[str, int]:
    """Catalog positions of the built-in rules."""
    return {cls.rule_id: idx for idx, cls in enumerate(DEFAULT_RULES)}


# ═════════════════════════════════════════════════════════════════════════
#  PUBLIC API
# ═════════════════════════════════════════════════════════════════════════

__all__ = [
    "EntityKind",
    "entity_kind",
    "location_of",
    "to_pascal_case",
    "to_camel_case",
    "to_screaming_snake_case",
    "RuleContext",
    "Rule",
    "TypeRule",
    "RootFieldRule",
    "TypeCasing",
    "TypeSingular",
    "TypeKindSuffix",
    "InputSuffix",
    "FilterSuffix",
    "FieldCasing",
    "FieldPlurality",
    "FieldRedundantName",
    "VERB_SYNONYMS",
    "MutationNaming",
    "MutationResultShape",
    "CreateMutationShape",
    "DeleteMutationShape",
    "CollectionQueryShape",
    "ByIdQueryShape",
    "IdFieldPresence",
    "EnumValueCasing",
    "BooleanFieldPrefix",
    "DEFAULT_RULES",
    "RuleRegistry",
    "catalog_order",
]
