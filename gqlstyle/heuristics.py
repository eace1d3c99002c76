# gqlstyle/heuristics.py
"""
Swappable heuristics used by the Warning-level rules.

Each heuristic is a small strategy object behind a ``Protocol``.  Every
method may answer ``None`` for *inconclusive*; the rules treat that as
"no diagnostic".  Nothing here is exact: English plurality and "is this
an entity" cannot be decided from a name alone, which is why the rules
built on these answers default to Warning.

Word splitting
──────────────
    split_words("URLPath")      -> ["URL", "Path"]
    split_words("userIDs")      -> ["user", "IDs"]
    split_words("dateOfBirth")  -> ["date", "Of", "Birth"]
    split_words("user_name")    -> ["user", "name"]

Plurality (``EnglishPluralityHeuristic``)
─────────────────────────────────────────
  - irregular plurals (people, children, data, criteria, ...) are plural
  - their singular forms (person, child, datum, ...) are singular
  - uncountable words (news, series, metadata, ...) are inconclusive
  - words ending in ``ics`` are inconclusive (analytics, statistics)
  - words ending in ``ss``, ``us``, ``is`` are singular
  - other words ending in ``s`` and longer than two letters are plural
  - everything else is singular
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Collection,
    FrozenSet,
    List,
    Optional,
    Protocol,
    Tuple,
    runtime_checkable,
)

from gqlstyle.model import BUILTIN_SCALARS, FieldDefinition, TypeDefinition, TypeKind

if TYPE_CHECKING:
    from gqlstyle.symbols import SymbolTable


# ═════════════════════════════════════════════════════════════════════════
#  WORD HELPERS
# ═════════════════════════════════════════════════════════════════════════

_WORD_RE = re.compile(r"[A-Z]{2,}s(?![a-z])|[A-Z]+(?=[A-Z][a-z]|\d|\b|_)|[A-Z]?[a-z]+|[A-Z]+|\d+")

# Suffixes naming the role of a type rather than the thing it describes.
ROLE_SUFFIXES: Tuple[str, ...] = (
    "Input",
    "Filter",
    "Draft",
    "Result",
    "Payload",
    "Connection",
    "Edge",
)


def split_words(name: str) -> List[str]:
    """Split a camelCase, PascalCase or snake_case identifier into words."""
    return _WORD_RE.findall(name)


def last_word(name: str) -> str:
    words = split_words(name)
    return words[-1] if words else name


def strip_role_suffix(name: str, suffixes: Collection[str] = ROLE_SUFFIXES) -> str:
    """Remove one trailing role suffix (``CountriesFilter`` -> ``Countries``)."""
    for suffix in suffixes:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


def plural_of(word: str) -> str:
    """Naive English plural, good enough for exemption checks."""
    lower = word.lower()
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        return word[:-1] + "ies"
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


# ═════════════════════════════════════════════════════════════════════════
#  PLURALITY
# ═════════════════════════════════════════════════════════════════════════

@runtime_checkable
class PluralityHeuristic(Protocol):
    """Decide whether a single word is plural."""

    def is_plural(self, word: str) -> Optional[bool]:
        ...


IRREGULAR_PLURALS: FrozenSet[str] = frozenset({
    "people", "children", "men", "women", "data", "criteria", "media",
    "indices", "matrices", "vertices", "feet", "mice", "geese", "teeth",
    "phenomena", "alumni", "oxen",
})

IRREGULAR_SINGULARS: FrozenSet[str] = frozenset({
    "person", "child", "man", "woman", "datum", "criterion", "medium",
    "index", "matrix", "vertex", "foot", "mouse", "goose", "tooth",
    "phenomenon", "alumnus", "ox",
    # singular words that merely end in "s"
    "alias", "atlas", "bias", "canvas", "gas", "lens", "yes", "this",
    "its", "has", "was", "always",
})

UNCOUNTABLE: FrozenSet[str] = frozenset({
    "news", "series", "species", "information", "metadata", "equipment",
    "feedback", "software", "hardware", "sheep", "fish", "deer", "aircraft",
    "means", "headquarters", "progress",
})


class EnglishPluralityHeuristic:
    """Suffix rules plus small irregular and uncountable word lists."""

    def __init__(
        self,
        plurals: Collection[str] = IRREGULAR_PLURALS,
        singulars: Collection[str] = IRREGULAR_SINGULARS,
        uncountable: Collection[str] = UNCOUNTABLE,
    ) -> None:
        self.plurals = frozenset(w.lower() for w in plurals)
        self.singulars = frozenset(w.lower() for w in singulars)
        self.uncountable = frozenset(w.lower() for w in uncountable)

    def is_plural(self, word: str) -> Optional[bool]:
        w = word.lower()
        if not w or w.isdigit():
            return None
        if w in self.uncountable:
            return None
        if w in self.plurals:
            return True
        if w in self.singulars:
            return False
        if w.endswith("ics"):
            return None
        if w.endswith(("ss", "us", "is")):
            return False
        if w.endswith("s") and len(w) > 2:
            return True
        return False


def name_is_plural(heuristic: PluralityHeuristic, name: str) -> Optional[bool]:
    """Plurality of an identifier, judged by its last word."""
    words = split_words(name)
    if not words:
        return None
    return heuristic.is_plural(words[-1])


# ═════════════════════════════════════════════════════════════════════════
#  ENTITY DETECTION
# ═════════════════════════════════════════════════════════════════════════

@runtime_checkable
class EntityHeuristic(Protocol):
    """Decide whether an object type models an identifiable entity."""

    def is_entity(self, table: "SymbolTable", tdef: TypeDefinition) -> Optional[bool]:
        ...


NON_ENTITY_SUFFIXES: Tuple[str, ...] = (
    "Result",
    "Payload",
    "Connection",
    "Edge",
    "Error",
    "PageInfo",
)


class FieldShapeEntityHeuristic:
    """
    An object type is an entity when it is not a root operation type, not
    returned by a root mutation field, not named with a wrapper suffix
    (``Result``, ``Payload``, ``Connection``, ``Edge``, ``Error``,
    ``PageInfo``), and carries at least one scalar or enum field other
    than ``id``.  Types made only of object references are inconclusive.
    """

    def __init__(self, non_entity_suffixes: Collection[str] = NON_ENTITY_SUFFIXES) -> None:
        self.non_entity_suffixes = tuple(non_entity_suffixes)

    def is_entity(self, table: "SymbolTable", tdef: TypeDefinition) -> Optional[bool]:
        if tdef.kind is not TypeKind.OBJECT:
            return False
        if table.is_root_type(tdef.name) or tdef.name in table.mutation_result_types:
            return False
        if tdef.name.endswith(self.non_entity_suffixes):
            return False
        for fld in tdef.fields:
            if fld.name != "id" and table.is_leaf(fld.type.name):
                return True
        return None


# ═════════════════════════════════════════════════════════════════════════
#  NAME REDUNDANCY
# ═════════════════════════════════════════════════════════════════════════

@runtime_checkable
class RedundancyHeuristic(Protocol):
    """Find the type name a field name needlessly repeats."""

    def redundant_with(self, table: "SymbolTable", fld: FieldDefinition) -> Optional[str]:
        ...


class SubstringRedundancyHeuristic:
    """
    A field name is redundant when it contains, case-insensitively, the
    name of its owning type or of its output type.

    Exemptions: fields of root operation types, fields in the allow-list,
    built-in scalar output types, type names shorter than three letters,
    and fields named exactly like their output type or its plural
    (``continent: Continent``, ``users: [User!]!``).
    """

    MIN_TYPE_NAME = 3

    def __init__(self, allow_list: Collection[str] = ()) -> None:
        self.allow_list = frozenset(allow_list)

    def redundant_with(self, table: "SymbolTable", fld: FieldDefinition) -> Optional[str]:
        if fld.name in self.allow_list or table.is_root_type(fld.owner):
            return None
        name = fld.name.lower()
        candidates = [fld.owner]
        output = fld.type.name
        if output not in BUILTIN_SCALARS and output != fld.owner:
            lowered = output.lower()
            if name not in (lowered, plural_of(output).lower()):
                candidates.append(output)
        for candidate in candidates:
            if len(candidate) >= self.MIN_TYPE_NAME and candidate.lower() in name:
                return candidate
        return None


# ═════════════════════════════════════════════════════════════════════════
#  BUNDLE
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Heuristics:
    """The heuristic strategies handed to the rule engine."""

    plurality: PluralityHeuristic = field(default_factory=EnglishPluralityHeuristic)
    entity: EntityHeuristic = field(default_factory=FieldShapeEntityHeuristic)
    redundancy: RedundancyHeuristic = field(default_factory=SubstringRedundancyHeuristic)

    @classmethod
    def default(cls, allow_list: Collection[str] = ()) -> "Heuristics":
        return cls(redundancy=SubstringRedundancyHeuristic(allow_list))


__all__ = [
    "ROLE_SUFFIXES",
    "NON_ENTITY_SUFFIXES",
    "split_words",
    "last_word",
    "strip_role_suffix",
    "plural_of",
    "PluralityHeuristic",
    "EnglishPluralityHeuristic",
    "name_is_plural",
    "EntityHeuristic",
    "FieldShapeEntityHeuristic",
    "RedundancyHeuristic",
    "SubstringRedundancyHeuristic",
    "Heuristics",
]
