"""Row matrices for the Markdown renderer.

Every matrix starts with a header row and a dash separator row. Matrices are
format-agnostic lists of cell strings; the template decides how to lay them
out and :func:`td_core.align.adjust_table` optionally pads them.
"""

from dataclasses import dataclass, field
from typing import ClassVar, List

from td_core.align import adjust_table
from td_core.config import Dictionary
from td_core.model import Column, Schema, Table

_SEPARATOR = "----"


def _escape_md(text: str) -> str:
    return text.replace("`", "\\`")


def table_link(name: str, base_url: str) -> str:
    return f"[{name}]({base_url}{name}.md)"


def _separator(headers: List[str]) -> List[str]:
    return [_SEPARATOR for _ in headers]


@dataclass
class Rows:
    rows: List[List[str]] = field(default_factory=list)

    @property
    def header(self) -> List[str]:
        return self.rows[0]

    @property
    def body(self) -> List[List[str]]:
        return self.rows[2:]

    def __len__(self) -> int:
        return len(self.body)

    def adjusted(self) -> "Rows":
        return type(self)(adjust_table(self.rows))


@dataclass
class ColumnsPlain(Rows):
    """Column rows without the Extra Definition cell."""

    arity: ClassVar[int] = 7


@dataclass
class ColumnsWithExtraDef(Rows):
    """Column rows with Extra Definition between Nullable and Children."""

    arity: ClassVar[int] = 8


@dataclass
class TableRows:
    columns: Rows
    constraints: Rows
    indexes: Rows
    triggers: Rows
    referenced_tables: List[str]

    def adjusted(self) -> "TableRows":
        return TableRows(
            columns=self.columns.adjusted(),
            constraints=self.constraints.adjusted(),
            indexes=self.indexes.adjusted(),
            triggers=self.triggers.adjusted(),
            referenced_tables=list(self.referenced_tables),
        )


def build_schema_rows(schema: Schema, dictionary: Dictionary, base_url: str = "") -> Rows:
    headers = [dictionary.lookup(label) for label in ("Name", "Columns", "Comment", "Type")]
    rows = [headers, _separator(headers)]
    for table in schema.tables:
        rows.append(
            [
                table_link(table.name, base_url),
                str(len(table.columns)),
                table.comment,
                table.type,
            ]
        )
    return Rows(rows)


def _relation_links(names: List[str], base_url: str) -> str:
    seen = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return " ".join(table_link(name, base_url) for name in seen)


def _column_row(column: Column, base_url: str, with_extra_def: bool) -> List[str]:
    children = _relation_links([r.table.name for r in column.child_relations], base_url)
    parents = _relation_links([r.parent_table.name for r in column.parent_relations], base_url)
    row = [
        column.name,
        column.type,
        column.default if column.default is not None else "",
        "true" if column.nullable else "false",
    ]
    if with_extra_def:
        row.append(_escape_md(column.extra_def))
    row.extend([children, parents, column.comment])
    return row


def build_column_rows(table: Table, dictionary: Dictionary, base_url: str = "") -> Rows:
    with_extra_def = table.has_column_with_extra_def()
    labels = ["Name", "Type", "Default", "Nullable"]
    if with_extra_def:
        labels.append("Extra Definition")
    labels.extend(["Children", "Parents", "Comment"])

    headers = [dictionary.lookup(label) for label in labels]
    rows = [headers, _separator(headers)]
    rows.extend(_column_row(c, base_url, with_extra_def) for c in table.columns)
    if with_extra_def:
        return ColumnsWithExtraDef(rows)
    return ColumnsPlain(rows)


def _commented_rows(labels: List[str], items: List[List[str]], comments: List[str], dictionary: Dictionary) -> Rows:
    with_comment = any(comments)
    if with_comment:
        labels = labels + ["Comment"]
    headers = [dictionary.lookup(label) for label in labels]
    rows = [headers, _separator(headers)]
    for cells, comment in zip(items, comments):
        rows.append(cells + [comment] if with_comment else cells)
    return Rows(rows)


def build_table_rows(table: Table, dictionary: Dictionary, base_url: str = "") -> TableRows:
    constraints = _commented_rows(
        ["Name", "Type", "Definition"],
        [[c.name, c.type, c.definition] for c in table.constraints],
        [c.comment for c in table.constraints],
        dictionary,
    )
    indexes = _commented_rows(
        ["Name", "Definition"],
        [[i.name, i.definition] for i in table.indexes],
        [i.comment for i in table.indexes],
        dictionary,
    )
    triggers = _commented_rows(
        ["Name", "Definition"],
        [[t.name, t.definition] for t in table.triggers],
        [t.comment for t in table.triggers],
        dictionary,
    )

    referenced_tables = []
    for referenced in table.referenced_tables:
        if referenced.external:
            referenced_tables.append(referenced.name)
        else:
            referenced_tables.append(table_link(referenced.name, base_url))

    return TableRows(
        columns=build_column_rows(table, dictionary, base_url),
        constraints=constraints,
        indexes=indexes,
        triggers=triggers,
        referenced_tables=referenced_tables,
    )
