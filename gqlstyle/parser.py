# gqlstyle/parser.py
"""
Thin wrapper around the graphql-core SDL parser.

The linter does not parse GraphQL itself; it asks ``graphql.parse`` for a
``DocumentNode`` and converts the parser's failures into
:class:`~gqlstyle.errors.SchemaSyntaxError`.
"""

from __future__ import annotations

import logging
from typing import Any, Tuple

from graphql import GraphQLSyntaxError, parse
from graphql.language import DocumentNode, ExecutableDefinitionNode, Lexer, Source, TokenKind

from gqlstyle.errors import ErrorCodes, SchemaSyntaxError, SourceSpan

_log = logging.getLogger(__name__)

DEFAULT_SOURCE_NAME = "<schema>"


def parse_schema(text: str, source_name: str = DEFAULT_SOURCE_NAME) -> DocumentNode:
    """Parse SDL *text* into a graphql-core document.

    Parameters
    ----------
    text:
        The schema definition language source.
    source_name:
        File name used in error locations.

    Raises
    ------
    SchemaSyntaxError
        When the text is not valid GraphQL, or contains executable
        definitions (operations, fragments) instead of type system ones.

    A blank or comment-only document has no definitions to lint and
    yields an empty ``DocumentNode`` instead of a syntax error.
    """
    source = Source(text, source_name)
    try:
        if Lexer(source).advance().kind == TokenKind.EOF:
            _log.debug("parsed %s: no definitions", source_name)
            return DocumentNode(definitions=())
        document = parse(source)
    except GraphQLSyntaxError as exc:
        line = column = 0
        if exc.locations:
            line, column = exc.locations[0].line, exc.locations[0].column
        raise SchemaSyntaxError(
            exc.message,
            span=SourceSpan(source_name, line, column),
        ) from exc

    for definition in document.definitions:
        if isinstance(definition, ExecutableDefinitionNode):
            line, column = node_position(definition)
            raise SchemaSyntaxError(
                "Executable definitions are not allowed in a schema document",
                code=ErrorCodes.EXECUTABLE_DEFINITION,
                span=SourceSpan(source_name, line, column),
                hint="Lint the schema file, not a query or fragment file",
            )

    _log.debug("parsed %s: %d definition(s)", source_name, len(document.definitions))
    return document


def node_position(node: Any) -> Tuple[int, int]:
    """Return the 1-based (line, column) where *node* starts, or (0, 0).

    Named nodes report the position of their name, so a leading
    description string does not shift the location.
    """
    target = getattr(node, "name", None) or node
    loc = getattr(target, "loc", None)
    if loc is None:
        return 0, 0
    token = loc.start_token
    return token.line, token.column


__all__ = ["DEFAULT_SOURCE_NAME", "parse_schema", "node_position"]
