"""In-memory schema graph.

Entities are built once by :mod:`td_core.loader` (or by hand in tests) and are
treated as read-only by the renderers and the diff engine.

``to_dict`` produces the same shape :func:`td_core.loader.schema_from_dict`
accepts, with relations kept at schema level and referring to tables and
columns by name so the graph serializes without cycles.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from td_core.errors import NotFoundError


@dataclass
class Column:
    name: str
    type: str
    nullable: bool = True
    default: Optional[str] = None
    comment: str = ""
    extra_def: str = ""
    child_relations: List["Relation"] = field(default_factory=list, repr=False, compare=False)
    parent_relations: List["Relation"] = field(default_factory=list, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "nullable": self.nullable,
            "default": self.default,
        }
        if self.extra_def:
            data["extra_def"] = self.extra_def
        data["comment"] = self.comment
        return data


@dataclass
class Constraint:
    name: str
    type: str = ""
    definition: str = ""
    table: str = ""
    referenced_table: str = ""
    columns: List[str] = field(default_factory=list)
    referenced_columns: List[str] = field(default_factory=list)
    comment: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "def": self.definition,
            "table": self.table,
        }
        if self.referenced_table:
            data["referenced_table"] = self.referenced_table
        data["columns"] = list(self.columns)
        if self.referenced_columns:
            data["referenced_columns"] = list(self.referenced_columns)
        data["comment"] = self.comment
        return data


@dataclass
class Index:
    name: str
    definition: str = ""
    table: str = ""
    columns: List[str] = field(default_factory=list)
    comment: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "def": self.definition,
            "table": self.table,
            "columns": list(self.columns),
            "comment": self.comment,
        }


@dataclass
class Trigger:
    name: str
    definition: str = ""
    comment: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "def": self.definition, "comment": self.comment}


@dataclass
class Table:
    name: str
    type: str = "BASE TABLE"
    comment: str = ""
    columns: List[Column] = field(default_factory=list)
    constraints: List[Constraint] = field(default_factory=list)
    indexes: List[Index] = field(default_factory=list)
    triggers: List[Trigger] = field(default_factory=list)
    definition: str = ""
    referenced_tables: List["Table"] = field(default_factory=list, repr=False, compare=False)
    external: bool = False

    def has_column_with_extra_def(self) -> bool:
        return any(column.extra_def for column in self.columns)

    def find_column_by_name(self, name: str) -> Column:
        for column in self.columns:
            if column.name == name:
                return column
        raise NotFoundError(f"Column not found: {self.name}.{name}")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "comment": self.comment,
            "columns": [column.to_dict() for column in self.columns],
            "indexes": [index.to_dict() for index in self.indexes],
            "constraints": [constraint.to_dict() for constraint in self.constraints],
            "triggers": [trigger.to_dict() for trigger in self.triggers],
            "def": self.definition,
        }
        if self.referenced_tables:
            data["referenced_tables"] = [t.name for t in self.referenced_tables]
        return data


@dataclass
class Relation:
    table: Table
    columns: List[Column]
    parent_table: Table
    parent_columns: List[Column]
    definition: str = ""
    virtual: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "table": self.table.name,
            "columns": [c.name for c in self.columns],
            "parent_table": self.parent_table.name,
            "parent_columns": [c.name for c in self.parent_columns],
            "def": self.definition,
        }
        if self.virtual:
            data["virtual"] = True
        return data


@dataclass
class Driver:
    name: str
    database_version: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "database_version": self.database_version}


@dataclass
class Schema:
    name: str
    desc: str = ""
    tables: List[Table] = field(default_factory=list)
    relations: List[Relation] = field(default_factory=list, repr=False, compare=False)
    driver: Optional[Driver] = None

    def find_table_by_name(self, name: str) -> Table:
        for table in self.tables:
            if table.name == name:
                return table
        raise NotFoundError(f"Table not found: {name}")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "desc": self.desc,
            "tables": [table.to_dict() for table in self.tables],
            "relations": [relation.to_dict() for relation in self.relations],
        }
        if self.driver is not None:
            data["driver"] = self.driver.to_dict()
        return data
