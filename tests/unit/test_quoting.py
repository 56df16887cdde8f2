"""Unit tests for sqlcompose.quoting."""

from __future__ import annotations

import pytest

from sqlcompose.dialects.mysql import MYSQL
from sqlcompose.dialects.postgresql import POSTGRESQL
from sqlcompose.quoting import Quoter


@pytest.fixture()
def pgq() -> Quoter:
    return Quoter(POSTGRESQL)


@pytest.fixture()
def myq() -> Quoter:
    return Quoter(MYSQL)


# ---------------------------------------------------------------------------
# quote_field
# ---------------------------------------------------------------------------


class TestQuoteField:
    def test_plain_identifier_is_wrapped(self, pgq):
        assert pgq.quote_field("id") == '"id"'

    def test_mixed_case_identifier_is_wrapped(self, pgq):
        assert pgq.quote_field("lastName") == '"lastName"'

    def test_dotted_lowercase_side_stays_bare(self, pgq):
        assert pgq.quote_field("twd.Index") == 'twd."Index"'

    def test_dotted_all_lowercase_unchanged(self, pgq):
        assert pgq.quote_field("twd.id") == "twd.id"

    def test_lowercase_function_unchanged(self, pgq):
        assert pgq.quote_field("count(*)") == "count(*)"

    def test_uppercase_function_unchanged(self, pgq):
        assert pgq.quote_field("SUM(amount)") == "SUM(amount)"

    def test_mixed_case_function_name_wrapped(self, pgq):
        assert pgq.quote_field("myFunc(x)") == '"myFunc"(x)'

    def test_star_unchanged(self, pgq):
        assert pgq.quote_field("*") == "*"

    def test_binding_label_unchanged(self, pgq):
        assert pgq.quote_field("id = :_t1_") == '"id" = :_t1_'

    def test_placeholder_unchanged(self, pgq):
        assert pgq.quote_field("id = ?") == '"id" = ?'

    def test_string_literal_unchanged(self, pgq):
        assert pgq.quote_field("status = 'open'") == "\"status\" = 'open'"

    @pytest.mark.parametrize("number", ["5", "-1", "3.14", ".5", "1e10", "-2.5E-3"])
    def test_numbers_unchanged(self, pgq, number):
        assert pgq.quote_field(number) == number

    def test_keywords_and_symbols_unchanged(self, pgq):
        assert pgq.quote_field("a.b > 5 AND x IS NULL") == 'a.b > 5 AND "x" IS NULL'

    def test_ilike_is_a_postgresql_keyword(self, pgq):
        assert pgq.quote_field("name ilike 'a%'") == "\"name\" ilike 'a%'"

    def test_leading_and_trailing_punctuation_peeled(self, pgq):
        assert pgq.quote_field("(id") == '("id"'
        assert pgq.quote_field("id),") == '"id"),'

    def test_prequoted_token_unchanged(self, pgq):
        assert pgq.quote_field('"Already"') == '"Already"'

    def test_empty_text(self, pgq):
        assert pgq.quote_field("") == ""

    def test_mysql_uses_backticks(self, myq):
        assert myq.quote_field("id") == "`id`"
        assert myq.quote_field("twd.Index") == "twd.`Index`"
        assert myq.quote_field("twd.id") == "twd.id"


class TestQuoteFieldIdempotent:
    @pytest.mark.parametrize(
        "text",
        [
            "id",
            "twd.Index",
            "myFunc(x)",
            "count(*)",
            "a.b > 5 AND x IS NULL",
            "lastName = :_t1_",
            "(Value, other)",
        ],
    )
    @pytest.mark.parametrize("rules", [POSTGRESQL, MYSQL])
    def test_quote_twice_equals_quote_once(self, rules, text):
        q = Quoter(rules)
        once = q.quote_field(text)
        assert q.quote_field(once) == once


# ---------------------------------------------------------------------------
# quote_table
# ---------------------------------------------------------------------------


class TestQuoteTable:
    def test_lowercase_table_stays_bare(self, pgq):
        assert pgq.quote_table("people") == "people"

    def test_mixed_case_table_wrapped(self, pgq):
        assert pgq.quote_table("tableWithData twd") == '"tableWithData" twd'

    def test_schema_qualified(self, pgq):
        assert pgq.quote_table("public.Orders") == 'public."Orders"'

    def test_keyword_alias_left_alone(self, pgq):
        assert pgq.quote_table("Orders AS o") == '"Orders" AS o'

    def test_mysql_table(self, myq):
        assert myq.quote_table("tableNeedingData tnd") == "`tableNeedingData` tnd"

    def test_prequoted_table_unchanged(self, myq):
        assert myq.quote_table("`Mixed`") == "`Mixed`"


# ---------------------------------------------------------------------------
# Toggle
# ---------------------------------------------------------------------------


class TestQuotingToggle:
    def test_disabled_returns_text_unchanged(self, pgq):
        pgq.enable_quoting(False)
        assert pgq.is_enabled() is False
        assert pgq.quote_field("lastName = 1") == "lastName = 1"
        assert pgq.quote_table("Orders") == "Orders"

    def test_reenable(self, pgq):
        pgq.enable_quoting(False).enable_quoting(True)
        assert pgq.quote_field("id") == '"id"'

    def test_copy_is_independent(self, pgq):
        clone = pgq.copy()
        clone.enable_quoting(False)
        assert pgq.is_enabled() is True
        assert clone.rules is pgq.rules

    def test_constructed_disabled(self):
        q = Quoter(POSTGRESQL, enabled=False)
        assert q.quote_field("id") == "id"
