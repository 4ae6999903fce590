import json
from pathlib import Path
from typing import Any, Dict, List

import yaml

from td_core.errors import NotFoundError, SchemaLoadError
from td_core.model import Column, Constraint, Driver, Index, Relation, Schema, Table, Trigger


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _column_from_dict(data: Dict[str, Any]) -> Column:
    default = data.get("default")
    return Column(
        name=_text(data.get("name")),
        type=_text(data.get("type")),
        nullable=bool(data.get("nullable", True)),
        default=None if default is None else str(default),
        comment=_text(data.get("comment")),
        extra_def=_text(data.get("extra_def")),
    )


def _constraint_from_dict(data: Dict[str, Any]) -> Constraint:
    return Constraint(
        name=_text(data.get("name")),
        type=_text(data.get("type")),
        definition=_text(data.get("def")),
        table=_text(data.get("table")),
        referenced_table=_text(data.get("referenced_table")),
        columns=[str(c) for c in data.get("columns") or []],
        referenced_columns=[str(c) for c in data.get("referenced_columns") or []],
        comment=_text(data.get("comment")),
    )


def _index_from_dict(data: Dict[str, Any]) -> Index:
    return Index(
        name=_text(data.get("name")),
        definition=_text(data.get("def")),
        table=_text(data.get("table")),
        columns=[str(c) for c in data.get("columns") or []],
        comment=_text(data.get("comment")),
    )


def _trigger_from_dict(data: Dict[str, Any]) -> Trigger:
    return Trigger(
        name=_text(data.get("name")),
        definition=_text(data.get("def")),
        comment=_text(data.get("comment")),
    )


def _table_from_dict(data: Dict[str, Any]) -> Table:
    if not isinstance(data, dict) or not data.get("name"):
        raise SchemaLoadError("Every table must be an object with a name.")
    return Table(
        name=str(data["name"]),
        type=_text(data.get("type", "BASE TABLE")),
        comment=_text(data.get("comment")),
        columns=[_column_from_dict(c) for c in data.get("columns") or []],
        constraints=[_constraint_from_dict(c) for c in data.get("constraints") or []],
        indexes=[_index_from_dict(i) for i in data.get("indexes") or []],
        triggers=[_trigger_from_dict(t) for t in data.get("triggers") or []],
        definition=_text(data.get("def")),
    )


def _resolve_columns(table: Table, names: List[Any], where: str) -> List[Column]:
    columns = []
    for name in names:
        try:
            columns.append(table.find_column_by_name(str(name)))
        except NotFoundError as exc:
            raise SchemaLoadError(f"{where}: {exc}") from exc
    return columns


def _relation_from_dict(schema: Schema, data: Dict[str, Any]) -> Relation:
    where = f"relation {data.get('table', '?')} -> {data.get('parent_table', '?')}"
    try:
        table = schema.find_table_by_name(_text(data.get("table")))
        parent_table = schema.find_table_by_name(_text(data.get("parent_table")))
    except NotFoundError as exc:
        raise SchemaLoadError(f"{where}: {exc}") from exc

    relation = Relation(
        table=table,
        columns=_resolve_columns(table, data.get("columns") or [], where),
        parent_table=parent_table,
        parent_columns=_resolve_columns(parent_table, data.get("parent_columns") or [], where),
        definition=_text(data.get("def")),
        virtual=bool(data.get("virtual", False)),
    )
    for column in relation.columns:
        column.parent_relations.append(relation)
    for column in relation.parent_columns:
        column.child_relations.append(relation)
    return relation


def schema_from_dict(data: Dict[str, Any]) -> Schema:
    if not isinstance(data, dict):
        raise SchemaLoadError("Schema snapshot must parse to an object/map at root.")

    tables = [_table_from_dict(t) for t in data.get("tables") or []]
    seen = set()
    for table in tables:
        if table.name in seen:
            raise SchemaLoadError(f"Duplicate table name: {table.name}")
        seen.add(table.name)

    driver_data = data.get("driver")
    driver = None
    if isinstance(driver_data, dict) and driver_data.get("name"):
        driver = Driver(
            name=str(driver_data["name"]),
            database_version=_text(driver_data.get("database_version")),
        )

    schema = Schema(
        name=_text(data.get("name")),
        desc=_text(data.get("desc")),
        tables=tables,
        driver=driver,
    )

    raw_tables = {str(t["name"]): t for t in data.get("tables") or []}
    for table in schema.tables:
        for name in raw_tables[table.name].get("referenced_tables") or []:
            try:
                table.referenced_tables.append(schema.find_table_by_name(str(name)))
            except NotFoundError:
                table.referenced_tables.append(Table(name=str(name), type="", external=True))

    schema.relations = [_relation_from_dict(schema, r) for r in data.get("relations") or []]
    return schema


def load_schema_file(path: str) -> Schema:
    schema_path = Path(path)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    with schema_path.open("r", encoding="utf-8") as handle:
        try:
            if schema_path.suffix.lower() == ".json":
                data = json.load(handle)
            else:
                data = yaml.safe_load(handle)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise SchemaLoadError(f"Cannot parse schema file {path}: {exc}") from exc

    if data is None:
        raise SchemaLoadError(f"Schema file is empty: {path}")

    return schema_from_dict(data)
