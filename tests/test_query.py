import pytest

from crashorm.columns import EntityColumn
from crashorm.errors import OrmError
from crashorm.query import DeleteQuery, OrderDirection, SelectQuery
from crashorm.result_mapping import SingleResult
from crashorm.sql import BoxedSql

ID = EntityColumn("id")
NAME = EntityColumn("name")


class FakeConnection:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.calls = []

    async def query_many(self, sql, params):
        self.calls.append(("many", sql, list(params)))
        if self.error:
            raise self.error
        return self.rows

    async def query_single(self, sql, params):
        self.calls.append(("single", sql, list(params)))
        if self.error:
            raise self.error
        return self.rows[0]

    async def execute_query(self, sql, params):
        self.calls.append(("execute", sql, list(params)))
        if self.error:
            raise self.error
        return len(self.rows)


def select():
    return SelectQuery(BoxedSql("SELECT * FROM item"))


def test_build_without_clauses_keeps_base():
    assert select().build() == ("SELECT * FROM item", [])


def test_condition_numbers_parameters():
    sql, values = select().condition(ID.equals(7)).build()
    assert sql == "SELECT * FROM item WHERE id = $1"
    assert values == [7]


def test_condition_replaces_previous():
    sql, values = select().condition(ID.equals(1)).condition(NAME.equals("x")).build()
    assert sql.endswith("WHERE name = $1")
    assert values == ["x"]


def test_compound_condition_keeps_value_order():
    cond = ID.greater_than(1).and_(NAME.like("a%"))
    sql, values = select().condition(cond).build()
    assert "$1" in sql and "$2" in sql
    assert sql.index("$1") < sql.index("$2")
    assert values == [1, "a%"]


def test_order_and_add_order():
    sql, _ = select().order(ID, OrderDirection.DESC).add_order(NAME, OrderDirection.ASC).build()
    assert sql == "SELECT * FROM item ORDER BY id DESC,name ASC"


def test_order_overrides_previous():
    sql, _ = select().add_order(NAME, OrderDirection.ASC).order(ID, OrderDirection.DESC).build()
    assert sql.endswith("ORDER BY id DESC")
    assert "name" not in sql


def test_group_by_and_add_group_by():
    sql, _ = select().group_by(ID).add_group_by(NAME).build()
    assert sql.endswith("GROUP BY id,name")
    sql2, _ = select().add_group_by(NAME).group_by(ID).build()
    assert sql2.endswith("GROUP BY id")


def test_clause_order_where_group_order():
    sql, values = (
        select()
        .order(ID, OrderDirection.ASC)
        .group_by(NAME)
        .condition(ID.less_equal(3))
        .build()
    )
    assert sql.index("WHERE") < sql.index("GROUP BY") < sql.index("ORDER BY")
    assert values == [3]


def test_order_direction_text():
    assert str(OrderDirection.ASC) == "ASC"
    assert str(OrderDirection.DESC) == "DESC"
    sql, _ = select().order(ID, OrderDirection.ASC).build()
    assert sql.endswith("id ASC")


@pytest.mark.asyncio
async def test_fetch_maps_rows():
    conn = FakeConnection(rows=[(4,), (9,)])
    query = SelectQuery(BoxedSql("SELECT id FROM item"), mapping=SingleResult)
    results = await query.condition(ID.greater_than(2)).fetch(conn)
    assert results == [SingleResult(4), SingleResult(9)]
    assert conn.calls == [("many", "SELECT id FROM item WHERE id > $1", [2])]


@pytest.mark.asyncio
async def test_fetch_without_mapping_returns_rows():
    conn = FakeConnection(rows=[("a", 1)])
    assert await select().fetch(conn) == [("a", 1)]


@pytest.mark.asyncio
async def test_fetch_single_with_callable_mapping():
    conn = FakeConnection(rows=[(5, "five")])
    query = SelectQuery(BoxedSql("SELECT * FROM item"), mapping=lambda row: row[1])
    assert await query.fetch_single(conn) == "five"
    assert conn.calls[0][0] == "single"


@pytest.mark.asyncio
async def test_delete_executes():
    conn = FakeConnection()
    query = DeleteQuery(BoxedSql("DELETE FROM item")).condition(ID.in_vec([1, 2]))
    assert await query.execute(conn) is None
    assert conn.calls == [("execute", "DELETE FROM item WHERE id IN ($1,$2)", [1, 2])]


@pytest.mark.asyncio
async def test_driver_error_is_wrapped():
    failure = RuntimeError("connection lost")
    conn = FakeConnection(error=failure)
    with pytest.raises(OrmError) as info:
        await select().fetch(conn)
    assert info.value.is_database_error
    assert str(info.value) == "connection lost"