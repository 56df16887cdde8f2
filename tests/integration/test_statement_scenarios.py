"""Cross-statement scenarios: nesting, binding precedence and lazy rendering."""

from __future__ import annotations

import re

from sqlcompose import LabelGenerator, get_driver
from sqlcompose.dialects.mysql import MySQLDriver
from sqlcompose.dialects.postgresql import PostgreSQLDriver

_LABEL_RE = re.compile(r":_t\d+_")


class TestInsertScenario:
    def test_insert_with_generated_label(self, pg):
        s = pg.insert().table("people").field_value("name", "?", "Fred")
        sql = s.render()

        assert len(s.bindings) == 1
        assert "INSERT" in sql
        assert "INTO" in sql
        assert "    people\n" in sql
        assert '("name")' in sql
        (label,) = _LABEL_RE.findall(sql)
        assert s.bindings[label] == "Fred"

    def test_insert_from_filtered_select(self, my):
        source = my.select().fields(["id", "email"]).from_("signups").where_in("status", ["new", "pending"])
        s = my.insert().into("mailingList").fields(["id", "email"]).value_select(source)
        assert s.render().startswith("INSERT\nINTO\n    `mailingList`\n    (`id`, `email`)\n    SELECT\n")
        assert s.bindings == {":_t1_": "new", ":_t2_": "pending"}


class TestSelectScenario:
    def test_where_and_membership(self, pg):
        s = pg.select().from_("t").where("id = ?", [5]).where_in("grp", ["a", "b"])
        sql = s.render()
        where_block = sql.split("WHERE\n", 1)[1]
        assert where_block.count("AND") == 1
        assert len(s.bindings) == 3
        assert sorted(s.bindings.values(), key=str) == [5, "a", "b"]

    def test_from_sub_indented_and_parent_wins(self, pg):
        sub = pg.select().field("id").from_("orders").where("total > ?", 100)
        parent = pg.select().field("s.id").from_sub("s", sub).where("s.id > ?", 0)
        (sub_label,) = sub.bindings
        parent.set_binding(sub_label, 500)

        lines = parent.render().splitlines()
        from_at = lines.index("FROM")
        assert lines[from_at + 1] == "    ("
        assert lines[from_at + 2] == "        SELECT"
        assert lines[from_at + 3] == '            "id"'

        assert parent.bindings[sub_label] == 500
        assert sub.bindings[sub_label] == 100
        assert len(parent.bindings) == 2

    def test_deeply_nested_bindings_collected(self, pg):
        inner = pg.select().field("pid").from_("payments").where("amount > ?", 10)
        middle = pg.select().field("id").from_("orders").where_in_sub("id", inner)
        outer = pg.select().from_sub("o", middle).where("flag = ?", True)
        assert set(outer.bindings.values()) == {10, True}
        assert outer.render().count("SELECT") == 3


class TestComposedScenario:
    def test_with_union_suffix(self, pg):
        recent = pg.select().from_("orders").where("createdAt > ?", "2024-01-01")
        a = pg.select().field("id").from_("recent").where("total > ?", 100)
        b = pg.select().field("id").from_("recent").where("flagged = ?", True)
        union = pg.union().set_select(a).set_select(b, "ALL")
        w = pg.with_().set_statement("recent", recent).set_suffix(union)

        sql = w.render()
        assert sql.startswith('WITH\n"recent" AS\n(\n')
        assert "UNION ALL\n" in sql
        assert list(w.bindings.values()) == ["2024-01-01", 100, True]

    def test_same_chain_differs_only_in_quotes(self):
        def build(driver):
            return (
                driver.select()
                .field("id")
                .from_("people")
                .join_outer("left", "Addresses a", "a.personId = people.id")
                .where("lastName = ?", "Smith")
                .order("id", "desc")
            )

        pg_sql = build(PostgreSQLDriver(labels=LabelGenerator("t"))).render()
        my_sql = build(MySQLDriver(labels=LabelGenerator("t"))).render()
        assert pg_sql.replace('"', "`") == my_sql


class TestFactoryScenario:
    def test_env_configured_driver(self, monkeypatch):
        monkeypatch.setenv("SQLCOMPOSE_DEFAULT_DIALECT", "mysql")
        monkeypatch.setenv("SQLCOMPOSE_INDENT_WIDTH", "2")
        driver = get_driver()
        assert driver.select().field("id").render() == "SELECT\n  `id`\n"
