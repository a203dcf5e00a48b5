"""Docstore CLI entry points.
This module exposes read, find, count, and collections commands over a
store seeded from a JSON/YAML file. It maps argparse commands onto
MemoryStore calls and prints results as JSON lines.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from pathlib import Path
from typing import Any, Sequence

from core.config import DocStoreConfig
from query.query_spec import load_query_spec
from store.memory_store import MemoryStore


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="docstore", description="In-memory document store CLI")
    parser.add_argument("--seed", help="Override DOCSTORE_SEED_PATH for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_read_command(subparsers)
    _add_find_command(subparsers)
    _add_count_command(subparsers)
    _add_collections_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the docstore CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    store = _build_store(args.seed)
    if args.command == "read":
        return _run_read_command(store, args)
    if args.command == "find":
        return _run_find_command(store, args)
    if args.command == "count":
        return _run_count_command(store, args)
    if args.command == "collections":
        return _run_collections_command(store)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_store(seed_path: str | None) -> MemoryStore:
    """Build a store with optional seed-path override.

    Args:
        seed_path: Optional override path.

    Returns:
        Seeded store.
    """
    config = DocStoreConfig.from_env()
    if seed_path:
        config = replace(config, seed_path=Path(seed_path).expanduser().resolve())
    return MemoryStore.from_config(config)


def _run_read_command(store: MemoryStore, args: argparse.Namespace) -> int:
    """Handle read command.

    Args:
        store: Seeded store.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when the document is absent.
    """
    identifier_value = _parse_identifier_value(args.id_value)
    document = store.read_document(
        collection_name=args.collection,
        identifier_descriptor={args.id_field: identifier_value},
    )
    if document is None:
        return 1
    print(_render_document(document))
    return 0


def _run_find_command(store: MemoryStore, args: argparse.Namespace) -> int:
    spec = load_query_spec(args.query_file)
    for document in store.run_query(spec.collection_name, spec.query):
        print(_render_document(document))
    return 0


def _run_count_command(store: MemoryStore, args: argparse.Namespace) -> int:
    spec = load_query_spec(args.query_file)
    count = store.count_documents(
        collection_name=spec.collection_name,
        expressions=spec.query.expressions,
    )
    print(count)
    return 0


def _run_collections_command(store: MemoryStore) -> int:
    for name in store.collection_names():
        print(name)
    return 0


def _parse_identifier_value(raw_value: str) -> Any:
    """Decode a CLI identifier as JSON, falling back to the raw string.

    Args:
        raw_value: Value passed on the command line.

    Returns:
        Decoded scalar, e.g. ``7`` for "7" and ``"abc"`` for "abc".
    """
    try:
        return json.loads(raw_value)
    except json.JSONDecodeError:
        return raw_value


def _render_document(document: dict[str, Any]) -> str:
    return json.dumps(document, sort_keys=True, default=str)


def _add_read_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("read", help="Read one document by identifier")
    parser.add_argument("--collection", required=True, help="Collection name")
    parser.add_argument("--id-field", default="id", help="Identifier field name")
    parser.add_argument("--id-value", required=True, help="Identifier value (JSON or string)")


def _add_find_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("find", help="Run a query file and print matches")
    parser.add_argument("query_file", help="JSON or YAML query file")


def _add_count_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("count", help="Count documents matching a query file")
    parser.add_argument("query_file", help="JSON or YAML query file")


def _add_collections_command(subparsers: Any) -> None:
    subparsers.add_parser("collections", help="List seeded collection names")
