from __future__ import annotations

from dataclasses import dataclass

import pytest

from crashorm.columns import Column, EntityColumn
from crashorm.entity import CreateEntity, Entity
from crashorm.query import DeleteQuery, OrderDirection, SelectQuery
from crashorm.result_mapping import SingleResult
from crashorm.sql import BoxedSql


@dataclass
class Person(Entity, table_name="person"):
    id: int | None
    name: str
    age: int


@dataclass
class PersonCreate(CreateEntity, entity=Person):
    name: str
    age: int


@dataclass
class TestItem(Entity):
    id: int | None


class LowerColumn(Column):
    def to_sql(self):
        return BoxedSql("lower(_$i)", ["Mixed"])


class FakeConnection:
    def __init__(self, rows):
        self.rows = rows
        self.calls = []

    async def query_many(self, sql, params):
        self.calls.append((sql, list(params)))
        return self.rows

    async def query_single(self, sql, params):
        self.calls.append((sql, list(params)))
        return self.rows[0]

    async def execute_query(self, sql, params):
        self.calls.append((sql, list(params)))


def test_query_selects_whole_table():
    query = Person.query()
    assert isinstance(query, SelectQuery)
    expected = SelectQuery(BoxedSql("SELECT * FROM person")).build()
    assert query.build() == expected
    assert expected == ("SELECT * FROM person", [])


def test_default_table_name_is_snake_case():
    assert TestItem.table_name == "test_item"
    expected = SelectQuery(BoxedSql("SELECT * FROM test_item")).build()
    assert TestItem.query().build() == expected


def test_delete_with_condition():
    query = Person.delete().condition(EntityColumn("id").equals(3))
    assert isinstance(query, DeleteQuery)
    sql, values = query.build()
    assert sql == "DELETE FROM person WHERE id = $1"
    assert values == [3]


def test_select_query_joins_columns():
    sql, values = Person.select_query([EntityColumn("name"), EntityColumn("age")]).build()
    assert sql == "SELECT name,age FROM person"
    assert values == []


def test_select_query_numbers_column_and_condition_values():
    query = Person.select_query([LowerColumn()]).condition(EntityColumn("age").equals(5))
    sql, values = query.build()
    assert sql.index("$1") < sql.index("$2")
    assert "_$i" not in sql
    assert values == ["Mixed", 5]


def test_values_exclude_primary_key():
    person = Person(id=1, name="Ann", age=30)
    assert Entity.values(person) == {"name": "Ann", "age": 30}
    assert Entity.primary_key(person) == 1


def test_values_require_dataclass():
    class Plain(Entity):
        pass

    with pytest.raises(TypeError):
        Entity.values(Plain())


def test_into_entity_leaves_key_empty():
    person = CreateEntity.into_entity(PersonCreate(name="Bob", age=41))
    assert person == Person(id=None, name="Bob", age=41)
    assert Entity.values(person) == {"name": "Bob", "age": 41}


def test_into_entity_without_target_fails():
    @dataclass
    class Orphan(CreateEntity):
        name: str

    with pytest.raises(TypeError):
        CreateEntity.into_entity(Orphan(name="x"))


@pytest.mark.asyncio
async def test_query_fetch_maps_positional_and_named_rows():
    conn = FakeConnection([(1, "Ann", 30), {"id": 2, "name": "Bob", "age": 41}])
    people = await Person.query().order(EntityColumn("id"), OrderDirection.ASC).fetch(conn)
    assert people == [Person(1, "Ann", 30), Person(2, "Bob", 41)]
    assert conn.calls == [("SELECT * FROM person ORDER BY id ASC", [])]


@pytest.mark.asyncio
async def test_select_query_fetch_single_with_mapping():
    conn = FakeConnection([(42,)])
    result = await Person.select_query([EntityColumn("age")], SingleResult).fetch_single(conn)
    assert result == SingleResult(42)