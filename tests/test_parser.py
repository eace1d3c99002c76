# tests/test_parser.py
"""Tests for the graphql-core front-end wrapper."""

import textwrap

import pytest
from graphql.language import DocumentNode, ObjectTypeDefinitionNode

from gqlstyle.errors import ErrorCodes, SchemaStructureError, SchemaSyntaxError
from gqlstyle.parser import DEFAULT_SOURCE_NAME, node_position, parse_schema


class TestParseSchema:

    def test_returns_document(self):
        doc = parse_schema("type Query { ping: String }")
        assert isinstance(doc, DocumentNode)
        assert len(doc.definitions) == 1
        assert isinstance(doc.definitions[0], ObjectTypeDefinitionNode)

    @pytest.mark.parametrize("text", ["", "  \n\n", "# nothing here yet\n"])
    def test_blank_document_has_no_definitions(self, text):
        doc = parse_schema(text)
        assert isinstance(doc, DocumentNode)
        assert len(doc.definitions) == 0

    def test_invalid_character_in_blank_document(self):
        with pytest.raises(SchemaSyntaxError):
            parse_schema("  ?")

    def test_syntax_error_carries_position(self):
        src = textwrap.dedent('''\
            type Query {
              ping: String
              pong String
            }
        ''')
        with pytest.raises(SchemaSyntaxError) as info:
            parse_schema(src, "schema.graphql")
        err = info.value
        assert err.code == ErrorCodes.SYNTAX_ERROR
        assert err.span.source == "schema.graphql"
        assert err.span.line == 3
        assert str(err).startswith("schema.graphql:3:")

    def test_syntax_error_is_structural(self):
        with pytest.raises(SchemaStructureError):
            parse_schema("type {")

    def test_executable_definition_rejected(self):
        with pytest.raises(SchemaSyntaxError) as info:
            parse_schema("type Query { a: String }\nquery { a }")
        assert info.value.code == ErrorCodes.EXECUTABLE_DEFINITION
        assert info.value.span.line == 2

    def test_default_source_name(self):
        with pytest.raises(SchemaSyntaxError) as info:
            parse_schema("type {")
        assert info.value.span.source == DEFAULT_SOURCE_NAME


class TestNodePosition:

    def test_named_node_reports_name_position(self):
        doc = parse_schema('"""A user."""\ntype User { id: ID! }')
        assert node_position(doc.definitions[0]) == (2, 6)

    def test_field_position(self):
        doc = parse_schema("type User {\n  id: ID!\n}")
        fld = doc.definitions[0].fields[0]
        assert node_position(fld) == (2, 3)

    def test_node_without_location(self):
        class Bare:
            loc = None

        assert node_position(Bare()) == (0, 0)
