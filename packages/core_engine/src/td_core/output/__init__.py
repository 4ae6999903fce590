"""Output formats.

Every renderer offers the same capabilities: ``render_schema``,
``render_table`` and ``render_procedure`` (reserved, renders nothing yet).
Markdown renders text; the serial formats render UTF-8 bytes.
"""

from typing import Any, Protocol, Union

from td_core.model import Schema, Table
from td_core.output.md import MarkdownRenderer
from td_core.output.serial import JSONRenderer, YAMLRenderer, get_serial_renderer


class Renderer(Protocol):
    def render_schema(self, schema: Schema) -> Union[str, bytes]:
        ...

    def render_table(self, table: Table) -> Union[str, bytes]:
        ...

    def render_procedure(self, procedure: Any) -> Union[str, bytes]:
        ...


__all__ = [
    "JSONRenderer",
    "MarkdownRenderer",
    "Renderer",
    "YAMLRenderer",
    "get_serial_renderer",
]
