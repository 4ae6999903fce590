from td_core.align import adjust_table, display_width
from td_core.config import Config, Dictionary, config_from_dict, load_config
from td_core.diffing import DiffEntry, DiffReport, diff_schema_and_docs, diff_schemas
from td_core.documents import DocumentSet, write_markdown_docs
from td_core.errors import (
    ConfigurationError,
    ConflictError,
    DocumentIOError,
    NotFoundError,
    RenderError,
    SchemaLoadError,
    SerializationError,
    TdError,
)
from td_core.loader import load_schema_file, schema_from_dict
from td_core.model import Column, Constraint, Driver, Index, Relation, Schema, Table, Trigger
from td_core.output import JSONRenderer, MarkdownRenderer, Renderer, YAMLRenderer, get_serial_renderer
from td_core.table_data import (
    ColumnsPlain,
    ColumnsWithExtraDef,
    Rows,
    TableRows,
    build_schema_rows,
    build_table_rows,
)

__all__ = [
    "adjust_table",
    "build_schema_rows",
    "build_table_rows",
    "Column",
    "ColumnsPlain",
    "ColumnsWithExtraDef",
    "Config",
    "config_from_dict",
    "ConfigurationError",
    "ConflictError",
    "Constraint",
    "Dictionary",
    "DiffEntry",
    "DiffReport",
    "diff_schema_and_docs",
    "diff_schemas",
    "display_width",
    "DocumentIOError",
    "DocumentSet",
    "Driver",
    "get_serial_renderer",
    "Index",
    "JSONRenderer",
    "load_config",
    "load_schema_file",
    "MarkdownRenderer",
    "NotFoundError",
    "Relation",
    "Renderer",
    "RenderError",
    "Rows",
    "Schema",
    "schema_from_dict",
    "SchemaLoadError",
    "SerializationError",
    "Table",
    "TableRows",
    "TdError",
    "Trigger",
    "write_markdown_docs",
    "YAMLRenderer",
]
