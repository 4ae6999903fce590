"""YAML and JSON output of whole entities, no templates involved."""

import json
from typing import Any, BinaryIO, Dict

import yaml

from td_core.errors import ConfigurationError, SerializationError
from td_core.model import Schema, Table


class _SerialRenderer:
    format_name = ""

    def _encode(self, data: Dict[str, Any]) -> str:
        raise NotImplementedError

    def _dump(self, data: Dict[str, Any]) -> bytes:
        try:
            return self._encode(data).encode("utf-8")
        except (yaml.YAMLError, TypeError, ValueError) as exc:
            raise SerializationError(f"Cannot encode {self.format_name}: {exc}") from exc

    def render_schema(self, schema: Schema) -> bytes:
        return self._dump(schema.to_dict())

    def render_table(self, table: Table) -> bytes:
        return self._dump(table.to_dict())

    def render_procedure(self, procedure: Any) -> bytes:
        return b""

    def output_schema(self, stream: BinaryIO, schema: Schema) -> None:
        stream.write(self.render_schema(schema))

    def output_table(self, stream: BinaryIO, table: Table) -> None:
        stream.write(self.render_table(table))


class YAMLRenderer(_SerialRenderer):
    format_name = "yaml"

    def _encode(self, data: Dict[str, Any]) -> str:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


class JSONRenderer(_SerialRenderer):
    format_name = "json"

    def _encode(self, data: Dict[str, Any]) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


SERIAL_RENDERERS = {
    YAMLRenderer.format_name: YAMLRenderer,
    JSONRenderer.format_name: JSONRenderer,
}


def get_serial_renderer(format_name: str) -> _SerialRenderer:
    try:
        return SERIAL_RENDERERS[format_name]()
    except KeyError:
        supported = ", ".join(sorted(SERIAL_RENDERERS))
        raise ConfigurationError(f"Unsupported output format: {format_name} (supported: {supported})") from None
