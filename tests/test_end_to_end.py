# tests/test_end_to_end.py
"""End-to-end properties of a lint run, from SDL text to rendered report."""

import pytest

from gqlstyle import LintOptions, Severity, Verdict, lint_source
from gqlstyle.reporter import FORMATS, render
from tests.conftest import CLEAN_SDL, USER_SDL

RESULTS = '''
type CreateUserResult { success: Boolean!, errors: [Error!]!, user: User }
type UpdateUserResult { success: Boolean!, errors: [Error!]!, user: User }
'''


class TestEmptySchemas:

    @pytest.mark.parametrize("sdl", ["", "\n\n", "# a schema, one day\n", "directive @internal on FIELD_DEFINITION\n"])
    def test_no_definitions_pass(self, sdl):
        report = lint_source(sdl)
        assert report.diagnostics == ()
        assert report.verdict is Verdict.PASS
        assert report.exit_code == 0


class TestCreateMutation:

    def test_sole_draft_argument(self, lint):
        report = lint(USER_SDL + RESULTS + "type Mutation { createUser(draft: UserDraft!): CreateUserResult! }")
        assert report.by_rule("CreateMutationShape") == []

    @pytest.mark.parametrize("args", ["input: UserDraft!", "draft: UserDraft"])
    def test_renamed_or_nullable_draft(self, lint, args):
        report = lint(USER_SDL + RESULTS + f"type Mutation {{ createUser({args}): CreateUserResult! }}")
        found = report.by_rule("CreateMutationShape")
        assert len(found) == 1
        assert found[0].severity is Severity.ERROR
        assert report.verdict is Verdict.FAIL


class TestQueryShapes:

    def test_collection_non_null_list(self, lint):
        assert lint(USER_SDL + "type Query { users: [User!]! }").by_rule("CollectionQueryShape") == []

    @pytest.mark.parametrize("ref", ["[User]", "[User!]", "[User]!"])
    def test_collection_nullable_variants(self, lint, ref):
        found = lint(USER_SDL + f"type Query {{ users: {ref} }}").by_rule("CollectionQueryShape")
        assert len(found) == 1
        assert found[0].severity is Severity.ERROR

    def test_by_id(self, lint):
        assert len(lint(USER_SDL + "type Query { user(id: ID!): User! }").by_rule("ByIdQueryShape")) == 1
        assert lint(USER_SDL + "type Query { user(id: ID!): User }").by_rule("ByIdQueryShape") == []

    def test_countries_filter(self, lint):
        report = lint('''
            type Query { countries(filter: CountryFilter): [Country!]! }
            type Country { id: ID!, name: String! }
            enum Continent { EUROPE }
            input CountryFilter { continent: Continent }
        ''')
        assert report.by_rule("CollectionQueryShape") == []
        assert report.by_rule("FilterSuffix") == []


class TestUpdateMutationResult:

    MUTATION = '''
        type Mutation {{ updateUser(id: ID!, draft: UserDraft!): UpdateUserResult! }}
        type UpdateUserResult {{ {fields} user: User }}
    '''

    def _sdl(self, fields):
        return USER_SDL + self.MUTATION.format(fields=fields)

    def test_complete_result(self, lint):
        report = lint(self._sdl("success: Boolean!, errors: [Error!]!,"))
        assert report.by_rule("MutationResultShape") == []

    @pytest.mark.parametrize("fields", ["errors: [Error!]!,", "success: Boolean!,"])
    def test_one_missing_field_gives_one_error(self, lint, fields):
        found = lint(self._sdl(fields)).by_rule("MutationResultShape")
        assert len(found) == 1
        assert found[0].severity is Severity.ERROR


class TestNewUser:

    def test_exact_diagnostic(self, lint):
        report = lint(USER_SDL + '''
            type NewUserResult { success: Boolean!, errors: [Error!]!, user: User }
            type Mutation { newUser(user: UserInput!): NewUserResult! }
        ''')
        assert [d.rule_id for d in report.diagnostics] == ["MutationNaming"]
        diag = report.diagnostics[0]
        assert diag.severity is Severity.ERROR
        assert diag.message == (
            "Mutation 'newUser' should be named <verb><Object> with a verb from: "
            "create, delete, set, track, update"
        )
        assert (diag.location.type_name, diag.location.field_name) == ("Mutation", "newUser")


class TestDeterminism:

    MESSY = USER_SDL + '''
        type Users { id: ID!, First_Name: String, friend: [User!]!, usersTags: String }
        enum color { red }
        type Query { users: [User], user(id: ID!): User! }
        type Mutation { newUser(user: UserInput!): Boolean }
    '''

    @pytest.mark.parametrize("fmt", FORMATS)
    def test_two_runs_render_identically(self, lint, fmt):
        assert render(lint(self.MESSY), fmt) == render(lint(self.MESSY), fmt)

    def test_parallel_run_renders_identically(self, lint):
        assert render(lint(self.MESSY, jobs=6), "json") == render(lint(self.MESSY), "json")

    def test_every_problem_reported(self, lint):
        rules = {d.rule_id for d in lint(self.MESSY).diagnostics}
        assert {"MutationNaming", "MutationResultShape", "TypeCasing", "EnumValueCasing"} <= rules


class TestCleanSchema:

    def test_every_format(self, clean_sdl):
        report = lint_source(clean_sdl)
        assert render(report, "text") == ""
        assert render(report, "json") == "[]\n"
        assert render(report, "jsonl") == ""

    def test_all_rules_disabled(self):
        from gqlstyle.checkers import RuleRegistry

        options = LintOptions(disabled_rules=frozenset(RuleRegistry.default().names))
        assert lint_source(TestDeterminism.MESSY, options).diagnostics == ()

    def test_clean_sdl_constant(self):
        assert lint_source(CLEAN_SDL).passed
