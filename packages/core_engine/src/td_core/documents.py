"""On-disk layout of a documentation directory.

A directory documents one schema::

    <doc_path>/README.md         whole-schema index
    <doc_path>/<table>.md        one per table
    <doc_path>/schema.<er>       optional ER diagram for the index
    <doc_path>/<table>.<er>      optional ER diagram per table

Any other ``*.md`` file is an orphan: documentation for a table that no
longer exists in the schema.
"""

import logging
from pathlib import Path
from typing import List, Union

from td_core.config import Config
from td_core.errors import ConflictError, DocumentIOError
from td_core.model import Schema, Table
from td_core.output.md import MarkdownRenderer

logger = logging.getLogger(__name__)

INDEX_FILE = "README.md"
DOC_SUFFIX = ".md"
SCHEMA_ER_NAME = "schema"


class DocumentSet:
    def __init__(self, doc_path: Union[str, Path], er_format: str) -> None:
        self.doc_path = Path(doc_path)
        self.er_format = er_format

    @property
    def index_path(self) -> Path:
        return self.doc_path / INDEX_FILE

    def table_path(self, table: Table) -> Path:
        return self.doc_path / f"{table.name}{DOC_SUFFIX}"

    def er_path(self, name: str) -> Path:
        return self.doc_path / f"{name}.{self.er_format}"

    def has_er(self, name: str) -> bool:
        return self.er_path(name).exists()

    def expected_paths(self, schema: Schema) -> List[Path]:
        return [self.index_path] + [self.table_path(t) for t in schema.tables]

    def existing_paths(self, schema: Schema) -> List[Path]:
        return [path for path in self.expected_paths(schema) if path.exists()]

    def orphans(self, schema: Schema) -> List[Path]:
        """Markdown files in the directory that belong to no entity of ``schema``, sorted by name."""
        if not self.doc_path.is_dir():
            return []
        known = {path.name for path in self.expected_paths(schema)}
        orphans = [
            path
            for path in sorted(self.doc_path.iterdir(), key=lambda p: p.name)
            if path.suffix == DOC_SUFFIX and path.name not in known and path.is_file()
        ]
        for path in orphans:
            logger.debug("Orphan document: %s", path)
        return orphans

    def _read_text(self, path: Path) -> str:
        # newline="" keeps line endings exactly as _write_one wrote them.
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()

    def read(self, path: Path) -> str:
        """Return the document text, or an empty string when the file does not exist."""
        try:
            return self._read_text(path)
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentIOError(f"Cannot read {path}: {exc}", path) from exc

    def read_existing(self, path: Path) -> str:
        """Like :meth:`read`, but a missing file is an error too."""
        try:
            return self._read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentIOError(f"Cannot read {path}: {exc}", path) from exc

    def _write_one(self, path: Path, text: str) -> None:
        try:
            with path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(text)
        except OSError as exc:
            raise DocumentIOError(f"Cannot write {path}: {exc}", path) from exc
        logger.info("Wrote %s", path)

    def write(self, schema: Schema, config: Config, force: bool = False) -> List[Path]:
        """Write the index and every table document; returns the written paths in order.

        Refuses with :class:`ConflictError` before touching anything when a
        target file exists and ``force`` is false. A failure part way through
        leaves already written files in place.
        """
        existing = self.existing_paths(schema)
        if existing and not force:
            names = ", ".join(path.name for path in existing)
            raise ConflictError(f"Destination not empty: {self.doc_path} already contains {names}")

        try:
            self.doc_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DocumentIOError(f"Cannot create {self.doc_path}: {exc}", self.doc_path) from exc

        written: List[Path] = []
        renderer = MarkdownRenderer(config, er=self.has_er(SCHEMA_ER_NAME))
        self._write_one(self.index_path, renderer.render_schema(schema))
        written.append(self.index_path)

        for table in schema.tables:
            renderer = MarkdownRenderer(config, er=self.has_er(table.name))
            path = self.table_path(table)
            self._write_one(path, renderer.render_table(table))
            written.append(path)

        return written


def write_markdown_docs(schema: Schema, config: Config, force: bool = False) -> List[Path]:
    """Write Markdown docs into ``config.doc_path``. Returns the written paths."""
    return DocumentSet(config.doc_path, config.er_format).write(schema, config, force=force)
