# crashorm

An async query builder for PostgreSQL entities. You describe an entity as a
dataclass and name its columns. You then build `SELECT`, `DELETE` and batch
`INSERT` statements from conditions on those columns. Every statement comes
out as SQL with numbered `$n` parameters plus the list of values to bind.
Statements run against any connection object that has the async methods listed
under [Connections](#connections).

The package has no dependencies beyond the standard library.

## Installation

```
pip install crashorm
```

## SQL fragments: `crashorm.sql`

- `BoxedSql(sql, values)` holds a piece of SQL and the values it binds. Until
  the statement is complete, a parameter is written as the placeholder `_$i`.
- `BoxedSql.resolve(index)` replaces the placeholders in order with `$index`,
  `$index+1`, and so on. It returns `(sql, values, next_index)`.
- `BoxedSql.modify(func)` replaces the SQL with `func(sql)`.
- `into_sql(value)` turns a value into a `BoxedSql`:
  - a `BoxedSql` is copied;
  - anything with a `to_sql()` method, such as a column, uses that method;
  - `None` becomes `NULL`;
  - any other value becomes one `_$i` parameter.

## Columns and conditions

`crashorm.columns.EntityColumn(name)` stands for a column. Its methods return a
`crashorm.conditions.QueryCondition`. An argument may be a plain value, `None`
or another column.

| Method | SQL |
|---|---|
| `equals(x)` / `not_equals(x)` | `col = x` / `col <> x` |
| `greater_than(x)` / `greater_equal(x)` | `col > x` / `col >= x` |
| `less_than(x)` / `less_equal(x)` | `col < x` / `col <= x` |
| `between(a, b)` / `not_between(a, b)` | `col BETWEEN a AND b` / `col NOT BETWEEN a AND b` |
| `in_vec(xs)` / `not_in_vec(xs)` | `col IN (...)` / `col NOT IN (...)` |
| `like(p)` / `not_like(p)` | `col LIKE p` / `col NOT LIKE p` |
| `is_null()` / `is_not_null()` | `col IS NULL` / `col IS NOT NULL` |
| `is_true()` / `is_false()` | `col IS TRUE` / `col IS FALSE` |

You can write your own column type. Subclass the abstract `Column` and
implement `to_sql()`; your subclass then gets all of the methods above.

Conditions combine in two ways:

- with the methods `and_`, `or_` and `not_`;
- with the operators `&`, `|` and `~`.

`QueryCondition.resolve(index)` numbers the parameters of a condition.

```python
from crashorm.columns import EntityColumn

id_col = EntityColumn("id")
name_col = EntityColumn("name")

condition = id_col.greater_than(10).and_(name_col.like("A%"))
condition.resolve(1)
# ("(id > $1) AND (name LIKE $2)", [10, "A%"], 3)
```

## Entities: `crashorm.entity`

An entity is a dataclass that subclasses `Entity`.

**Table name.** Pass it as `table_name=...`. If you leave it out, the table
name is the class name in snake case.

**Primary key.** The primary key field is `id`. To use another field, set the
`primary_key_name` class attribute.

**Create structure.** A create structure is a dataclass that subclasses
`CreateEntity` and names its target with `entity=...`. It holds the values of a
new entity without the primary key.

```python
from dataclasses import dataclass
from typing import ClassVar

from crashorm.columns import EntityColumn
from crashorm.entity import CreateEntity, Entity
from crashorm.query import OrderDirection


@dataclass
class Person(Entity, table_name="person"):
    ID: ClassVar[EntityColumn] = EntityColumn("id")
    NAME: ClassVar[EntityColumn] = EntityColumn("name")

    id: int | None
    name: str


@dataclass
class PersonCreate(CreateEntity, entity=Person):
    name: str


query = (
    Person.query()
    .condition(Person.ID.equals(1))
    .order(Person.NAME, OrderDirection.DESC)
)
query.build()
# ("SELECT * FROM person WHERE id = $1 ORDER BY name DESC", [1])

rows = await query.fetch(connection)
```

### Class methods

- `Entity.query()` returns a `SelectQuery` over `SELECT * FROM <table>`. Each
  row becomes an entity. A row given as a mapping is read by field name. Any
  other row is read by position.
- `Entity.delete()` returns a `DeleteQuery` over `DELETE FROM <table>`.
- `Entity.select_query(columns, mapping=None)` selects the given columns. Each
  row is passed to `mapping`, which is handled in one of three ways:
  - if `mapping` is `None`, the row is returned as it is;
  - if `mapping` has a `from_row` method, that method is called with the row;
  - otherwise `mapping` itself is called with the row.

  `crashorm.result_mapping.SingleResult` works as a mapping. It keeps the first
  column of each row in its `value` attribute.

### Instance methods

- `entity.values()` returns the field values as a dict, without the primary
  key.
- `entity.primary_key()` returns the value of the primary key.
- `create.into_entity()` builds the entity. Its primary key is `None`.

## Queries: `crashorm.query`

`Query.condition(cond)` sets the `WHERE` clause. `Query.build()` returns the
finished `(sql, values)`.

`SelectQuery` adds the following methods:

- `add_order(column, direction)` appends an `ORDER BY` entry.
- `order(column, direction)` replaces all `ORDER BY` entries with this one.
  The direction is `OrderDirection.ASC` or `OrderDirection.DESC`.
- `add_group_by(column)` appends a `GROUP BY` column.
- `group_by(column)` replaces all `GROUP BY` columns with this one.
- `await fetch(connection)` returns a list of mapped rows.
- `await fetch_single(connection)` returns one mapped row.

`DeleteQuery` adds `await execute(connection)`.

## Batch statements: `crashorm.batch`

- `build_insert_all(creates)` builds one `INSERT INTO <table>(...) VALUES
  (...),(...)` covering every create structure. The primary keys are not read
  back.
- `build_remove_all(entities)` builds one `DELETE FROM <table> WHERE <pk> IN
  (...)`.
- `await insert_all(creates, connection)` runs the `INSERT` statement.
- `await remove_all(entities, connection)` runs the `DELETE` statement.

For an empty input, the builders return `None` and the runners do nothing.
Mixing entities of different classes raises `TypeError`.

## Relations: `crashorm.relations`

- `ManyToOne(target_id)` and `OneToOne(target_id)` hold the primary key of the
  referenced entity.
  - `from_entity(entity)` builds one from an entity.
  - `to_sql()` binds the key as a parameter, so a relation can be used as a
    condition value.
- `OneToMany()` and `OneToOneRef()` mark the other side of a relation. They
  store nothing.

## Connections

Queries and batch statements call these async methods on the connection you
pass:

- `query_many(sql, params)`
- `query_single(sql, params)`
- `execute_query(sql, params)`

In each call, `params` is a list. If the connection raises an exception, it
is re-raised as `crashorm.errors.OrmError`. That error keeps the original
exception as `error` and as `__cause__`, and its `is_database_error`
attribute is true. An `OrmError` built from a plain message has
`is_database_error` false.

## What this package does not do

- It does not open connections to PostgreSQL and ships no driver. You supply
  the connection object.
- It does not create, drop or truncate tables, and has no migrations.
- It has no per-entity insert, update, remove, count or lookup by primary key.
  Use the query builders and batch statements, or run your own SQL.
- It does not load related entities through a relation. A relation holds only
  the referenced key.