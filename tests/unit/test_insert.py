"""Unit tests for sqlcompose.statements.insert."""

from __future__ import annotations

from sqlcompose import FieldValue


class TestInsertValues:
    def test_single_bound_field(self, pg):
        s = pg.insert().table("people").field_value("name", "?", "Fred")
        assert s.render() == 'INSERT\nINTO\n    people\n    ("name")\nVALUES\n    (:_t1_)\n'
        assert s.bindings == {":_t1_": "Fred"}

    def test_no_table_renders_keyword_only(self, driver):
        s = driver.insert().field_value("name", "?", "Fred")
        assert s.render() == "INSERT\n"

    def test_into_alias(self, pg):
        assert "INTO\n    people\n" in pg.insert().into("people").render()

    def test_mixed_case_table_quoted(self, my):
        assert "INTO\n    `PeopleData`\n" in my.insert().table("PeopleData").render()

    def test_field_values_mapping(self, pg):
        s = pg.insert().table("t").field_values({"a": 1, "lastName": "x"})
        assert '    ("a", "lastName")\nVALUES\n    (:_t1_, :_t2_)\n' in s.render()
        assert s.bindings == {":_t1_": 1, ":_t2_": "x"}

    def test_named_label(self, pg):
        s = pg.insert().table("t").field_value("name", ":nm", "Fred")
        assert "VALUES\n    (:nm)\n" in s.render()
        assert s.bindings == {":nm": "Fred"}

    def test_verbatim_value(self, pg):
        s = pg.insert().table("t").field_value("created", "now()")
        assert "VALUES\n    (now())\n" in s.render()
        assert s.bindings == {}

    def test_none_bound_value(self, pg):
        s = pg.insert().table("t").field_value("a", "?", None)
        assert s.bindings == {":_t1_": None}

    def test_repeated_field_replaces(self, pg):
        s = pg.insert().table("t").field_value("a", "?", 1).field_value("b", "2").field_value("a", "3")
        assert '    ("a", "b")\nVALUES\n    (3, 2)\n' in s.render()
        assert s.bindings == {}

    def test_add_field_value_custom_marker(self, pg, labels):
        x, y = FieldValue.bind_key(labels), FieldValue.bind_key(labels)
        pos = FieldValue("position").set_value_marker(f"point({x}, {y})").add_binding(x, 1).add_binding(y, 2)
        s = pg.insert().table("places").add_field_value(pos)
        assert '    ("position")\nVALUES\n    (point(:_t1_, :_t2_))\n' in s.render()
        assert s.bindings == {":_t1_": 1, ":_t2_": 2}

    def test_fields_with_verbatim_values(self, pg):
        s = pg.insert().table("t").fields(["a", "lastName"]).values(["1", "now()"])
        assert s.render() == 'INSERT\nINTO\n    t\n    ("a", "lastName")\nVALUES\n    (1, now())\n'
        assert s.bindings == {}

    def test_verbatim_values_follow_field_markers(self, my):
        s = my.insert().table("t").field_value("a", "?", 1).fields(["b"]).values([":_t9_"])
        assert "    (`a`, `b`)\nVALUES\n    (:_t1_, :_t9_)\n" in s.render()
        assert s.bindings == {":_t1_": 1}

    def test_field_value_set_exposed(self, pg):
        s = pg.insert().field_value("a", "1")
        assert s.field_value_set.names == ['"a"']


class TestInsertValueSelect:
    def test_value_select(self, pg):
        sel = pg.select().fields(["id", "name"]).from_("people").where("active = ?", [True])
        s = pg.insert().table("archive").fields(["id", "name"]).value_select(sel)
        assert s.render() == (
            "INSERT\n"
            "INTO\n"
            "    archive\n"
            '    ("id", "name")\n'
            "    SELECT\n"
            '        "id",\n'
            '        "name"\n'
            "    FROM\n"
            "        people\n"
            "    WHERE\n"
            '        "active" = :_t1_\n'
        )
        assert s.bindings == {":_t1_": True}

    def test_value_select_suppresses_values(self, pg):
        s = pg.insert().table("t").field_value("a", "?", 1).value_select(pg.select().from_("u"))
        assert "VALUES" not in s.render()

    def test_value_select_rendered_lazily(self, pg):
        sel = pg.select().from_("u")
        s = pg.insert().table("t").value_select(sel)
        sel.where("x = ?", 9)
        assert '"x" = :_t1_' in s.render()
        assert s.bindings == {":_t1_": 9}


class TestInsertReturning:
    def test_postgresql_returning(self, pg):
        s = pg.insert().table("t").field_value("a", "1").returning("id")
        assert s.render().endswith('RETURNING\n    "id"\n')

    def test_returning_list(self, pg):
        s = pg.insert().table("t").returning(["id", "createdAt"])
        assert s.render().endswith('RETURNING\n    "id", "createdAt"\n')

    def test_mysql_ignores_returning(self, my):
        s = my.insert().table("t").field_value("a", "1")
        before = s.render()
        s.returning("id")
        assert s.render() == before
        assert "RETURNING" not in before
