"""
====================================
Pytest suite for querybuilder/ddl.py
====================================

Sections:
---------
1. Unit tests - Column specs and DDL rendering
2. Integration tests - Create/Alter/Drop execution via a fake executor
3. Edge case tests - Validation failures and error classification

Available markers:
------------------
unit, integration, edge_case

How to Execute:
---------------
All tests:          pytest tests/tests_querybuilder/test_ddl_builders.py -v
With coverage:      pytest tests/tests_querybuilder/test_ddl_builders.py --cov=querybuilder.ddl
"""

import pytest

from core.exceptions import (
    ColumnSpecError,
    DatabaseError,
    MissingReferenceError,
    SchemaError,
    UnsupportedTypeError,
)
from querybuilder.ddl import (
    AlterTableBuilder,
    ColumnSpec,
    CreateTableBuilder,
    DropTableBuilder,
    ForeignKey,
    add_column_sql,
    create_table_sql,
    drop_column_sql,
    modify_column_sql,
)

# ===============
# 1. UNIT TESTS
# ===============


@pytest.mark.unit
def test_create_table_with_primary_key_and_not_null():
    sql = create_table_sql("tbl", {
        "id": {"type": "number", "primary_key": True, "auto_increment": True},
        "name": {"type": "string", "not_null": True},
    })

    assert sql == "CREATE TABLE tbl (id INT PRIMARY KEY AUTO_INCREMENT, name VARCHAR(255) NOT NULL)"


@pytest.mark.unit
def test_create_table_foreign_keys_trail_column_definitions():
    sql = create_table_sql("users", {
        "id": {"type": "number", "primary_key": True},
        "friend_id": {"type": "number", "foreign_key": {"references": "friends", "referenced_column": "id"}},
        "is_active": {"type": "boolean"},
        "joined": "date",
    })

    assert sql == (
        "CREATE TABLE users (id INT PRIMARY KEY, friend_id INT, is_active TINYINT(1), "
        "joined DATETIME, FOREIGN KEY (friend_id) REFERENCES friends(id))"
    )


@pytest.mark.unit
def test_column_spec_accepts_camel_case_keys():
    spec = ColumnSpec.from_value({
        "type": "number",
        "primaryKey": True,
        "autoIncrement": True,
        "notNull": True,
        "foreignKey": {"references": "teams", "referencedColumn": "id"},
    })

    assert spec == ColumnSpec(
        type="number",
        primary_key=True,
        auto_increment=True,
        not_null=True,
        foreign_key=ForeignKey(references="teams", referenced_column="id"),
    )


@pytest.mark.unit
def test_column_spec_from_bare_type_tag():
    assert ColumnSpec.from_value("string") == ColumnSpec(type="string")


@pytest.mark.unit
def test_create_table_accepts_column_spec_instances():
    sql = create_table_sql("t", {"flag": ColumnSpec(type="boolean", not_null=True)})

    assert sql == "CREATE TABLE t (flag TINYINT(1) NOT NULL)"


@pytest.mark.unit
def test_alter_statements_render_mapped_types():
    assert add_column_sql("users", "nickname", "string") == "ALTER TABLE users ADD nickname VARCHAR(255)"
    assert drop_column_sql("users", "nickname") == "ALTER TABLE users DROP COLUMN nickname"
    assert modify_column_sql("users", "age", "number") == "ALTER TABLE users MODIFY COLUMN age INT"


@pytest.mark.unit
def test_create_builder_render_is_idempotent(fake_executor):
    builder = CreateTableBuilder(fake_executor, "t", {"a": "string", "b": "number"})

    assert builder.render() == builder.render() == "CREATE TABLE t (a VARCHAR(255), b INT)"


# ======================
# 2. INTEGRATION TESTS
# ======================


@pytest.mark.integration
def test_create_executes_rendered_statement(fake_executor):
    CreateTableBuilder(fake_executor, "users", {"name": "string", "age": "number"}).create()

    assert fake_executor.calls == [("CREATE TABLE users (name VARCHAR(255), age INT)", [])]


@pytest.mark.integration
def test_alter_operations_execute_immediately(fake_executor):
    alter = AlterTableBuilder(fake_executor, "users")

    alter.add_column("email", "string")
    alter.modify_column("age", "boolean")
    alter.drop_column("email")

    assert fake_executor.statements == [
        "ALTER TABLE users ADD email VARCHAR(255)",
        "ALTER TABLE users MODIFY COLUMN age TINYINT(1)",
        "ALTER TABLE users DROP COLUMN email",
    ]


@pytest.mark.integration
def test_drop_table_executes(fake_executor):
    builder = DropTableBuilder(fake_executor, "users")

    builder.delete()

    assert builder.render() == "DROP TABLE users"
    assert fake_executor.statements == ["DROP TABLE users"]


@pytest.mark.integration
@pytest.mark.parametrize("code", [1822, 1824, 3734])
def test_create_missing_reference_is_classified(executor_factory, code):
    failure = DatabaseError("Failed to open the referenced table 'teams'", code=code)
    executor = executor_factory(results=[failure])
    builder = CreateTableBuilder(executor, "players", {
        "team_id": {"type": "number", "foreign_key": {"references": "teams", "referenced_column": "id"}},
    })

    with pytest.raises(MissingReferenceError, match="referenced table or column does not exist") as exc_info:
        builder.create()

    assert exc_info.value.__cause__ is failure


@pytest.mark.integration
def test_create_generic_failure_raises_schema_error(executor_factory):
    executor = executor_factory(results=[DatabaseError("Table 'users' already exists", code=1050)])

    with pytest.raises(SchemaError) as exc_info:
        CreateTableBuilder(executor, "users", {"a": "string"}).create()

    assert not isinstance(exc_info.value, MissingReferenceError)


@pytest.mark.integration
@pytest.mark.parametrize("operation,args", [
    ("add_column", ("email", "string")),
    ("drop_column", ("email",)),
    ("modify_column", ("email", "date")),
])
def test_alter_failures_are_raised(executor_factory, operation, args):
    executor = executor_factory(results=[DatabaseError("Unknown column", code=1054)])
    alter = AlterTableBuilder(executor, "users")

    with pytest.raises(SchemaError, match="column 'email'"):
        getattr(alter, operation)(*args)


@pytest.mark.integration
def test_drop_failure_is_raised(executor_factory):
    executor = executor_factory(results=[DatabaseError("Unknown table 'ghosts'", code=1051)])

    with pytest.raises(SchemaError, match="dropping table 'ghosts'"):
        DropTableBuilder(executor, "ghosts").delete()


# ====================
# 3. EDGE CASE TESTS
# ====================


@pytest.mark.edge_case
def test_unsupported_type_aborts_whole_statement(fake_executor):
    builder = CreateTableBuilder(fake_executor, "t", {"ok": "string", "bad": "float"})

    with pytest.raises(UnsupportedTypeError):
        builder.create()

    assert fake_executor.calls == []


@pytest.mark.edge_case
def test_alter_unsupported_type_is_not_executed(fake_executor):
    with pytest.raises(UnsupportedTypeError):
        AlterTableBuilder(fake_executor, "t").add_column("x", "blob")

    assert fake_executor.calls == []


@pytest.mark.edge_case
def test_two_primary_keys_rejected(fake_executor):
    builder = CreateTableBuilder(fake_executor, "t", {
        "a": {"type": "number", "primary_key": True},
        "b": {"type": "number", "primary_key": True},
    })

    with pytest.raises(ColumnSpecError, match="one primary key"):
        builder.create()

    assert fake_executor.calls == []


@pytest.mark.edge_case
def test_no_columns_rejected():
    with pytest.raises(ColumnSpecError):
        create_table_sql("t", {})


@pytest.mark.edge_case
@pytest.mark.parametrize("spec", [
    {"type": "string", "primary_key": True, "auto_increment": True},
    {"type": "number", "auto_increment": True},
])
def test_auto_increment_only_on_number_primary_key(spec, caplog):
    with caplog.at_level("WARNING", logger="querybuilder.ddl"):
        sql = create_table_sql("t", {"c": spec})

    assert "AUTO_INCREMENT" not in sql
    assert "AUTO_INCREMENT ignored" in caplog.text


@pytest.mark.edge_case
@pytest.mark.parametrize("value", [
    {"primary_key": True},
    42,
    {"type": "number", "foreign_key": {"references": "teams"}},
    {"type": "number", "foreign_key": "teams.id"},
])
def test_invalid_column_specs_rejected(value):
    with pytest.raises(ColumnSpecError):
        ColumnSpec.from_value(value)


@pytest.mark.edge_case
def test_incompatible_foreign_key_stays_generic_schema_error(executor_factory):
    """1215 also reports type mismatches, so it is not classed as a missing reference."""
    executor = executor_factory(results=[DatabaseError("Cannot add foreign key constraint", code=1215)])
    builder = CreateTableBuilder(executor, "players", {
        "team_id": {"type": "string", "foreign_key": {"references": "teams", "referenced_column": "id"}},
    })

    with pytest.raises(SchemaError) as exc_info:
        builder.create()

    assert not isinstance(exc_info.value, MissingReferenceError)


@pytest.mark.edge_case
def test_create_builder_reads_columns_once(fake_executor):
    columns = {"name": "string"}
    builder = CreateTableBuilder(fake_executor, "t", columns)

    columns["age"] = "number"
    columns.pop("name")

    assert builder.render() == "CREATE TABLE t (name VARCHAR(255))"
