import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from td_core import (
    Config,
    DocumentIOError,
    MarkdownRenderer,
    TdError,
    diff_schema_and_docs,
    diff_schemas,
    get_serial_renderer,
    load_config,
    load_schema_file,
    write_markdown_docs,
)


def _load_config(args: argparse.Namespace, schema_path: str) -> Config:
    config = load_config(args.config)
    if not config.dsn and not config.name:
        config.name = schema_path
    if getattr(args, "out", None) and args.command in ("doc", "diff"):
        config.doc_path = args.out
    if getattr(args, "adjust_table", False):
        config.adjust = True
    if getattr(args, "base_url", None) is not None:
        config.base_url = args.base_url
    if getattr(args, "er_format", None):
        config.er_format = args.er_format
    return config


def cmd_doc(args: argparse.Namespace) -> int:
    config = _load_config(args, args.schema)
    schema = load_schema_file(args.schema)
    for path in write_markdown_docs(schema, config, force=args.force):
        print(path)
    return 0


def cmd_diff(args: argparse.Namespace) -> int:
    config = _load_config(args, args.schema)
    schema = load_schema_file(args.schema)

    if args.other:
        other_config = load_config(args.other_config) if args.other_config else load_config(args.config)
        if not other_config.dsn and not other_config.name:
            other_config.name = args.other
        if args.adjust_table:
            other_config.adjust = True
        report = diff_schemas(schema, load_schema_file(args.other), config, other_config)
    else:
        report = diff_schema_and_docs(schema, config)

    if not report:
        return 0
    sys.stdout.write(str(report))
    return 1


def cmd_out(args: argparse.Namespace) -> int:
    config = _load_config(args, args.schema)
    schema = load_schema_file(args.schema)
    table = schema.find_table_by_name(args.table) if args.table else None

    if args.format == "md":
        renderer = MarkdownRenderer(config)
        text = renderer.render_table(table) if table else renderer.render_schema(schema)
        payload = text.encode("utf-8")
    else:
        serial = get_serial_renderer(args.format)
        payload = serial.render_table(table) if table else serial.render_schema(schema)

    if args.out:
        try:
            Path(args.out).write_bytes(payload)
        except OSError as exc:
            raise DocumentIOError(f"Cannot write {args.out}: {exc}", args.out) from exc
        print(f"Wrote {args.format} output: {args.out}")
    else:
        sys.stdout.write(payload.decode("utf-8"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="td", description="Render and diff database schema documents")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    doc_parser = sub.add_parser("doc", help="Write Markdown documents for a schema snapshot")
    doc_parser.add_argument("schema", help="Path to schema snapshot (YAML or JSON)")
    doc_parser.add_argument("--config", help="Path to config YAML (default: .td.yml)")
    doc_parser.add_argument("--out", help="Output directory (overrides doc_path)")
    doc_parser.add_argument("--force", action="store_true", help="Overwrite existing documents")
    doc_parser.add_argument("--adjust-table", action="store_true", help="Align Markdown table columns")
    doc_parser.add_argument("--base-url", help="Prefix for links between documents")
    doc_parser.add_argument("--er-format", help="ER diagram file extension to link")
    doc_parser.set_defaults(func=cmd_doc)

    diff_parser = sub.add_parser("diff", help="Diff a schema against its documents or another schema")
    diff_parser.add_argument("schema", help="Path to schema snapshot (YAML or JSON)")
    diff_parser.add_argument("other", nargs="?", help="Second schema snapshot to compare against")
    diff_parser.add_argument("--config", help="Path to config YAML (default: .td.yml)")
    diff_parser.add_argument("--other-config", help="Config YAML for the second schema")
    diff_parser.add_argument("--out", help="Documents directory (overrides doc_path)")
    diff_parser.add_argument("--adjust-table", action="store_true", help="Align Markdown table columns")
    diff_parser.set_defaults(func=cmd_diff)

    out_parser = sub.add_parser("out", help="Render a schema or one table to stdout or a file")
    out_parser.add_argument("schema", help="Path to schema snapshot (YAML or JSON)")
    out_parser.add_argument("-t", "--format", default="md", choices=["md", "yaml", "json"], help="Output format")
    out_parser.add_argument("--table", help="Render only this table")
    out_parser.add_argument("--config", help="Path to config YAML (default: .td.yml)")
    out_parser.add_argument("--out", help="Output file path")
    out_parser.set_defaults(func=cmd_out)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (TdError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
