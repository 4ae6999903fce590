"""Markdown output.

Renders the whole-schema index (``README.md``) and one document per table
through Jinja2 templates. The packaged templates live in
``td_core/templates``; either can be replaced by a user template configured
under ``templates.md`` in the config file.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, TextIO

import jinja2

from td_core.config import Config
from td_core.errors import ConfigurationError, RenderError
from td_core.model import Schema, Table
from td_core.table_data import build_schema_rows, build_table_rows

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
INDEX_TEMPLATE = "index.md.j2"
TABLE_TEMPLATE = "table.md.j2"

_LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")


def nl2br(text: str) -> str:
    return _LINE_BREAK_RE.sub("<br>", str(text))


def nl2mdnl(text: str) -> str:
    return _LINE_BREAK_RE.sub("  \n", str(text))


def nl2space(text: str) -> str:
    return _LINE_BREAK_RE.sub(" ", str(text))


def escape_nl(text: str) -> str:
    return _LINE_BREAK_RE.sub("\\\\n", str(text))


def _read_template(override: str, default_name: str) -> str:
    if override:
        logger.debug("Using template override %s", override)
        try:
            return Path(override).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Cannot read template {override}: {exc}") from exc
    return (TEMPLATE_DIR / default_name).read_text(encoding="utf-8")


class MarkdownRenderer:
    """Render schema and table documents as Markdown.

    ``er`` tells the templates whether an ER diagram image sits next to the
    document being rendered.
    """

    def __init__(self, config: Config, er: bool = False) -> None:
        self.config = config
        self.er = er
        self.dictionary = config.dictionary
        self._env = jinja2.Environment(
            autoescape=False,
            undefined=jinja2.StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters.update(
            {
                "lookup": self.dictionary.lookup,
                "nl2br": nl2br,
                "nl2mdnl": nl2mdnl,
                "nl2space": nl2space,
                "escape_nl": escape_nl,
            }
        )

    def _template(self, override: str, default_name: str) -> jinja2.Template:
        source = _read_template(override, default_name)
        try:
            return self._env.from_string(source)
        except jinja2.TemplateSyntaxError as exc:
            where = override or default_name
            raise ConfigurationError(f"Malformed template {where} (line {exc.lineno}): {exc.message}") from exc

    def _render(self, template: jinja2.Template, context: Dict[str, Any], name: str) -> str:
        context.update(
            {
                "er": self.er,
                "er_format": self.config.er_format,
                "base_url": self.config.base_url,
            }
        )
        try:
            return template.render(context)
        except jinja2.TemplateError as exc:
            raise RenderError(f"Failed to render {name}: {exc}") from exc

    def schema_context(self, schema: Schema) -> Dict[str, Any]:
        rows = build_schema_rows(schema, self.dictionary, self.config.base_url)
        if self.config.adjust:
            rows = rows.adjusted()
        return {"schema": schema, "tables": rows}

    def table_context(self, table: Table) -> Dict[str, Any]:
        rows = build_table_rows(table, self.dictionary, self.config.base_url)
        if self.config.adjust:
            rows = rows.adjusted()
        return {
            "table": table,
            "columns": rows.columns,
            "constraints": rows.constraints,
            "indexes": rows.indexes,
            "triggers": rows.triggers,
            "referenced_tables": rows.referenced_tables,
        }

    def render_schema(self, schema: Schema) -> str:
        template = self._template(self.config.index_template, INDEX_TEMPLATE)
        return self._render(template, self.schema_context(schema), "schema index")

    def render_table(self, table: Table) -> str:
        template = self._template(self.config.table_template, TABLE_TEMPLATE)
        return self._render(template, self.table_context(table), f"table {table.name}")

    def render_procedure(self, procedure: Any) -> str:
        # Procedures are not documented yet.
        return ""

    def output_schema(self, stream: TextIO, schema: Schema) -> None:
        stream.write(self.render_schema(schema))

    def output_table(self, stream: TextIO, table: Table) -> None:
        stream.write(self.render_table(table))
