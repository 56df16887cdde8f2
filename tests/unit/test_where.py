"""Unit tests for sqlcompose.where."""

from __future__ import annotations

import pytest

from sqlcompose import WhereClause, WhereKind
from sqlcompose.dialects.postgresql import POSTGRESQL
from sqlcompose.quoting import Quoter
from sqlcompose.stacks import Indenter
from sqlcompose.where import Criteria, SubqueryMembership, ValueMembership, Where


@pytest.fixture()
def quoter() -> Quoter:
    return Quoter(POSTGRESQL)


@pytest.fixture()
def where(quoter, labels) -> Where:
    return Where(quoter, Indenter(), labels)


class TestCriteria:
    def test_scalar_bind_value(self, quoter, labels):
        c = Criteria("id = ?", 5, quoter=quoter, labels=labels)
        assert c.render() == '"id" = :_t1_'
        assert c.bindings == {":_t1_": 5}
        assert c.kind is WhereKind.CRITERIA

    def test_list_bind_values_in_order(self, quoter, labels):
        c = Criteria("a = ? OR b = ?", ["x", "y"], quoter=quoter, labels=labels)
        assert c.render() == '"a" = :_t1_ OR "b" = :_t2_'
        assert list(c.bindings.values()) == ["x", "y"]

    def test_none_is_bound_when_passed(self, quoter, labels):
        c = Criteria("a = ?", None, quoter=quoter, labels=labels)
        assert c.bindings == {":_t1_": None}

    def test_no_bind_values(self, quoter, labels):
        c = Criteria("active = true", quoter=quoter, labels=labels)
        assert c.render() == '"active" = true'
        assert c.bindings == {}

    def test_mismatch_leaves_text_unbound(self, quoter, labels):
        c = Criteria("a = ? AND b = ?", [1], quoter=quoter, labels=labels)
        assert c.render() == '"a" = ? AND "b" = ?'
        assert c.bindings == {}

    def test_satisfies_protocol(self, quoter, labels):
        assert isinstance(Criteria("a = 1", quoter=quoter, labels=labels), WhereClause)


class TestValueMembership:
    def test_in_list(self, quoter, labels):
        v = ValueMembership("grp", ["a", "b"], quoter=quoter, labels=labels)
        assert v.render() == '"grp" IN (:_t1_, :_t2_)'
        assert v.bindings == {":_t1_": "a", ":_t2_": "b"}
        assert v.kind is WhereKind.VALUE_MEMBERSHIP

    def test_not_in_list(self, quoter, labels):
        v = ValueMembership("grp", [1], is_in=False, quoter=quoter, labels=labels)
        assert v.render() == '"grp" NOT IN (:_t1_)'


class TestSubqueryMembership:
    def test_render_indents_subselect(self, pg, quoter):
        sub = pg.select().field("id").from_("t")
        s = SubqueryMembership("id", sub, quoter=quoter, indenter=Indenter())
        assert s.render() == (
            '"id" IN\n'
            "    (\n"
            "        SELECT\n"
            '            "id"\n'
            "        FROM\n"
            "            t\n"
            "    )"
        )
        assert s.kind is WhereKind.SUBQUERY_MEMBERSHIP

    def test_bindings_delegate_lazily(self, pg, quoter):
        sub = pg.select().from_("t")
        s = SubqueryMembership("id", sub, is_in=False, quoter=quoter, indenter=Indenter())
        assert s.bindings == {}
        sub.where("x = ?", 1)
        assert s.bindings == {":_t1_": 1}
        assert s.render().startswith('"id" NOT IN\n')


class TestWhereWrapper:
    def test_unset(self, where):
        assert where.is_set() is False
        assert where.render() == ""
        assert where.bindings == {}
        assert where.kind is None

    def test_first_write_wins(self, where):
        where.set_criteria("a = ?", 1)
        where.set_in_list("b", [2, 3])
        where.set_criteria("c = 4")
        assert where.kind is WhereKind.CRITERIA
        assert where.render() == '"a" = :_t1_'
        assert where.bindings == {":_t1_": 1}

    def test_in_list(self, where):
        where.set_in_list("b", [2, 3], is_in=False)
        assert where.render() == '"b" NOT IN (:_t1_, :_t2_)'

    def test_in_select(self, where, pg):
        where.set_in_select("id", pg.select().from_("t"))
        assert where.kind is WhereKind.SUBQUERY_MEMBERSHIP
        assert where.clause is not None
