# tests/test_heuristics.py
"""Tests for the swappable naming heuristics."""

import pytest

from gqlstyle.heuristics import (
    EnglishPluralityHeuristic,
    EntityHeuristic,
    FieldShapeEntityHeuristic,
    Heuristics,
    PluralityHeuristic,
    RedundancyHeuristic,
    SubstringRedundancyHeuristic,
    last_word,
    name_is_plural,
    plural_of,
    split_words,
    strip_role_suffix,
)
from gqlstyle.parser import parse_schema
from gqlstyle.symbols import build_symbol_table
from tests.conftest import CLEAN_SDL


def _table(sdl: str):
    return build_symbol_table(parse_schema(sdl))


class TestWordHelpers:

    @pytest.mark.parametrize("name, words", [
        ("URLPath", ["URL", "Path"]),
        ("userIDs", ["user", "IDs"]),
        ("imageURLs", ["image", "URLs"]),
        ("IDsByUser", ["IDs", "By", "User"]),
        ("dateOfBirth", ["date", "Of", "Birth"]),
        ("user_name", ["user", "name"]),
        ("Country", ["Country"]),
        ("ID", ["ID"]),
        ("address2", ["address", "2"]),
        ("", []),
    ])
    def test_split_words(self, name, words):
        assert split_words(name) == words

    def test_last_word(self):
        assert last_word("CountryFilter") == "Filter"
        assert last_word("") == ""

    def test_strip_role_suffix(self):
        assert strip_role_suffix("CountriesFilter") == "Countries"
        assert strip_role_suffix("UpdateUserResult") == "UpdateUser"
        assert strip_role_suffix("Filter") == "Filter"
        assert strip_role_suffix("Country") == "Country"

    @pytest.mark.parametrize("word, plural", [
        ("Country", "Countries"),
        ("key", "keys"),
        ("box", "boxes"),
        ("match", "matches"),
        ("address", "addresses"),
        ("user", "users"),
    ])
    def test_plural_of(self, word, plural):
        assert plural_of(word) == plural


class TestEnglishPlurality:

    @pytest.fixture
    def heuristic(self):
        return EnglishPluralityHeuristic()

    @pytest.mark.parametrize("word", ["users", "countries", "Items", "people", "children", "data"])
    def test_plural(self, heuristic, word):
        assert heuristic.is_plural(word) is True

    @pytest.mark.parametrize("word", [
        "user", "country", "address", "status", "analysis", "person", "alias", "id", "is",
    ])
    def test_singular(self, heuristic, word):
        assert heuristic.is_plural(word) is False

    @pytest.mark.parametrize("word", ["news", "series", "metadata", "analytics", "statistics", "42", ""])
    def test_inconclusive(self, heuristic, word):
        assert heuristic.is_plural(word) is None

    def test_custom_word_lists(self):
        heuristic = EnglishPluralityHeuristic(uncountable={"Users"})
        assert heuristic.is_plural("users") is None

    def test_name_is_plural_uses_last_word(self, heuristic):
        assert name_is_plural(heuristic, "activeUsers") is True
        assert name_is_plural(heuristic, "usersCount") is False
        assert name_is_plural(heuristic, "") is None

    def test_satisfies_protocol(self, heuristic):
        assert isinstance(heuristic, PluralityHeuristic)


class TestEntityHeuristic:

    @pytest.fixture
    def heuristic(self):
        return FieldShapeEntityHeuristic()

    def test_object_with_scalar_fields_is_entity(self, heuristic):
        table = _table(CLEAN_SDL)
        assert heuristic.is_entity(table, table.get("Country")) is True

    def test_root_and_result_types_are_not_entities(self, heuristic):
        table = _table(CLEAN_SDL)
        assert heuristic.is_entity(table, table.get("Query")) is False
        assert heuristic.is_entity(table, table.get("CreateCountryResult")) is False

    def test_wrapper_suffixes_are_not_entities(self, heuristic):
        table = _table("type UserConnection { totalCount: Int }\ntype PageInfo { hasNextPage: Boolean }")
        assert heuristic.is_entity(table, table.get("UserConnection")) is False
        assert heuristic.is_entity(table, table.get("PageInfo")) is False

    def test_non_object_is_not_entity(self, heuristic):
        table = _table(CLEAN_SDL)
        assert heuristic.is_entity(table, table.get("CountryDraft")) is False

    def test_only_object_references_is_inconclusive(self, heuristic):
        table = _table("type Pair { left: Side, right: Side }\ntype Side { id: ID!, label: String }")
        assert heuristic.is_entity(table, table.get("Pair")) is None

    def test_id_alone_is_inconclusive(self, heuristic):
        table = _table("type Handle { id: ID! }")
        assert heuristic.is_entity(table, table.get("Handle")) is None

    def test_satisfies_protocol(self, heuristic):
        assert isinstance(heuristic, EntityHeuristic)


class TestRedundancyHeuristic:

    SDL = (
        "type Query { userName: String }\n"
        "type Country { countryCode: String, name: String, continent: Continent,"
        " languages: [Language!]!, dateOfBirth: Date, officialLanguage: Language }\n"
        "type Language { id: ID! }\n"
        "type Continent { id: ID! }\n"
        "type Date { id: ID! }\n"
    )

    def _field(self, table, owner, name):
        return table.get(owner).field(name)

    def test_owner_name_repeated(self):
        table = _table(self.SDL)
        heuristic = SubstringRedundancyHeuristic()
        assert heuristic.redundant_with(table, self._field(table, "Country", "countryCode")) == "Country"

    def test_output_name_repeated(self):
        table = _table(self.SDL)
        heuristic = SubstringRedundancyHeuristic()
        assert heuristic.redundant_with(table, self._field(table, "Country", "officialLanguage")) == "Language"

    def test_exact_or_plural_output_name_is_fine(self):
        table = _table(self.SDL)
        heuristic = SubstringRedundancyHeuristic()
        assert heuristic.redundant_with(table, self._field(table, "Country", "continent")) is None
        assert heuristic.redundant_with(table, self._field(table, "Country", "languages")) is None
        assert heuristic.redundant_with(table, self._field(table, "Country", "name")) is None

    def test_root_fields_exempt(self):
        table = _table(self.SDL + "type User { id: ID! }\n")
        heuristic = SubstringRedundancyHeuristic()
        assert heuristic.redundant_with(table, self._field(table, "Query", "userName")) is None

    def test_allow_list(self):
        table = _table(self.SDL)
        fld = self._field(table, "Country", "dateOfBirth")
        assert SubstringRedundancyHeuristic().redundant_with(table, fld) == "Date"
        assert SubstringRedundancyHeuristic(["dateOfBirth"]).redundant_with(table, fld) is None

    def test_satisfies_protocol(self):
        assert isinstance(SubstringRedundancyHeuristic(), RedundancyHeuristic)


class TestHeuristicsBundle:

    def test_default_carries_allow_list(self):
        bundle = Heuristics.default(["dateOfBirth"])
        assert bundle.redundancy.allow_list == frozenset({"dateOfBirth"})
        assert isinstance(bundle.plurality, EnglishPluralityHeuristic)

    def test_bundle_is_immutable(self):
        bundle = Heuristics()
        with pytest.raises(AttributeError):
            bundle.plurality = None
