# tests/conftest.py
"""Shared SDL documents and helpers for the gqlstyle test-suite."""

import textwrap
from typing import Callable

import pytest

from gqlstyle import LintOptions, Report, lint_source


# A schema that follows every convention: linting it yields no diagnostics.
CLEAN_SDL = textwrap.dedent('''\
    type Query {
      countries(filter: CountryFilter): [Country!]!
      country(id: ID!): Country
    }

    type Mutation {
      createCountry(draft: CountryDraft!): CreateCountryResult!
      deleteCountry(id: ID!): DeleteCountryResult!
    }

    type Country {
      id: ID!
      name: String!
      continent: Continent
      languages: [Language!]!
    }

    type Language {
      id: ID!
      code: String!
    }

    enum Continent {
      AFRICA
      EUROPE
      NORTH_AMERICA
    }

    input CountryFilter {
      continent: Continent
    }

    input CountryDraft {
      name: String!
      continent: Continent
    }

    type CreateCountryResult {
      success: Boolean!
      errors: [Error!]!
      country: Country
    }

    type DeleteCountryResult {
      success: Boolean!
      errors: [Error!]!
    }

    type Error {
      message: String!
      code: String
    }
''')

# Mutation result scaffolding reused by the mutation-shape tests.
USER_SDL = textwrap.dedent('''\
    type User {
      id: ID!
      name: String!
    }

    type Error {
      message: String!
    }

    input UserDraft {
      name: String!
    }

    input UserInput {
      name: String!
    }
''')


@pytest.fixture
def clean_sdl() -> str:
    return CLEAN_SDL


@pytest.fixture
def user_sdl() -> str:
    return USER_SDL


@pytest.fixture
def lint() -> Callable[..., Report]:
    """``lint(sdl, **options)`` runs the full pipeline with the given options."""

    def _lint(sdl: str, **options) -> Report:
        return lint_source(textwrap.dedent(sdl), LintOptions(**options))

    return _lint
