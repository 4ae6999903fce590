import difflib
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from td_core.config import Config
from td_core.documents import SCHEMA_ER_NAME, DocumentSet
from td_core.errors import NotFoundError
from td_core.model import Schema
from td_core.output.md import MarkdownRenderer

logger = logging.getLogger(__name__)

CONTEXT_LINES = 3


@dataclass(frozen=True)
class DiffEntry:
    from_label: str
    to_label: str
    text: str

    def to_text(self) -> str:
        return f"diff '{self.from_label}' '{self.to_label}'\n{self.text}"


@dataclass
class DiffReport:
    entries: List[DiffEntry] = field(default_factory=list)

    def add(self, a_text: str, b_text: str, from_label: str, to_label: str) -> None:
        text = unified_diff(a_text, b_text, from_label, to_label)
        if text:
            self.entries.append(DiffEntry(from_label, to_label, text))

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        return "".join(entry.to_text() for entry in self.entries)


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only; every returned line ends with ``\\n``.

    Other characters ``str.splitlines`` treats as breaks (``\\r``, ``\\x0c``,
    ``\\u2028`` ...) stay inside the line.
    """
    pieces = text.split("\n")
    if pieces[-1] == "":
        pieces.pop()
    return [piece + "\n" for piece in pieces]


def unified_diff(a_text: str, b_text: str, fromfile: str, tofile: str) -> str:
    return "".join(
        difflib.unified_diff(
            split_lines(a_text),
            split_lines(b_text),
            fromfile=fromfile,
            tofile=tofile,
            n=CONTEXT_LINES,
        )
    )


def diff_schemas(a: Schema, b: Schema, config: Config, other_config: Optional[Config] = None) -> DiffReport:
    """Compare the rendered documents of two schemas.

    Tables only in ``a`` diff against empty text, tables only in ``b`` are
    appended after all tables of ``a``.
    """
    other_config = other_config or config
    report = DiffReport()
    renderer = MarkdownRenderer(config)
    other_renderer = MarkdownRenderer(other_config)
    masked_a = config.masked_dsn()
    masked_b = other_config.masked_dsn()

    report.add(
        renderer.render_schema(a),
        other_renderer.render_schema(b),
        f"td doc {masked_a}",
        f"td doc {masked_b}",
    )

    diffed: Set[str] = set()
    for table in a.tables:
        diffed.add(table.name)
        try:
            other_text = other_renderer.render_table(b.find_table_by_name(table.name))
        except NotFoundError:
            other_text = ""
        report.add(
            renderer.render_table(table),
            other_text,
            f"{masked_a} {table.name}",
            f"{masked_b} {table.name}",
        )

    for table in b.tables:
        if table.name in diffed:
            continue
        report.add("", other_renderer.render_table(table), f"{masked_a} {table.name}", f"{masked_b} {table.name}")

    logger.debug("Schema diff produced %d entries", len(report))
    return report


def diff_schema_and_docs(schema: Schema, config: Config, doc_path: Optional[str] = None) -> DiffReport:
    """Compare on-disk documents (from) with freshly rendered ones (to)."""
    doc_path = doc_path or config.doc_path
    documents = DocumentSet(doc_path, config.er_format)
    masked = config.masked_dsn()
    report = DiffReport()

    renderer = MarkdownRenderer(config, er=documents.has_er(SCHEMA_ER_NAME))
    report.add(
        documents.read(documents.index_path),
        renderer.render_schema(schema),
        str(documents.index_path),
        f"td doc {masked}",
    )

    for table in schema.tables:
        renderer = MarkdownRenderer(config, er=documents.has_er(table.name))
        path = documents.table_path(table)
        report.add(
            documents.read(path),
            renderer.render_table(table),
            str(path),
            f"{masked} {table.name}",
        )

    for path in documents.orphans(schema):
        report.add(
            documents.read_existing(path),
            "",
            str(path),
            f"{masked} {path.stem}",
        )

    logger.debug("Document diff produced %d entries", len(report))
    return report
