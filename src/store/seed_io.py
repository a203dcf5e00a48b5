"""Seed collection file loading.

This module reads initial collections from JSON or YAML files so a
store can start from fixture data instead of an empty registry.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, cast

import yaml

from core.constants import SEED_FILE_SUFFIXES
from core.errors import DocStoreSeedError
from core.logging_config import get_logger
from core.types import Collection

_LOGGER = get_logger(__name__)


def load_seed_collections(seed_path: str | Path) -> dict[str, Collection]:
    """Load a {collection_name: [documents...]} mapping from disk.

    Args:
        seed_path: JSON (.json) or YAML (.yaml/.yml) file path.

    Returns:
        Mapping of collection name to document list.

    Raises:
        DocStoreSeedError: If the file is missing, unreadable, or malformed.
    """
    seed_file = Path(seed_path).expanduser().resolve()
    payload = _read_seed_payload(seed_file)
    collections = _parse_collections(payload, seed_file)
    _LOGGER.info(
        "seed_collections_loaded",
        seed_path=str(seed_file),
        collection_count=len(collections),
        document_count=sum(len(documents) for documents in collections.values()),
    )
    return collections


def _read_seed_payload(seed_file: Path) -> object:
    suffix = seed_file.suffix.lower()
    if suffix not in SEED_FILE_SUFFIXES:
        raise DocStoreSeedError(
            f"Unsupported seed file type '{suffix}' at {seed_file}. "
            f"Use one of: {', '.join(SEED_FILE_SUFFIXES)}."
        )
    if not seed_file.exists():
        raise DocStoreSeedError(f"Seed file does not exist at {seed_file}.")
    try:
        raw_text = seed_file.read_text(encoding="utf-8")
    except OSError as error:
        raise DocStoreSeedError(f"Failed to read seed file at {seed_file}: {error}.") from error
    try:
        if suffix == ".json":
            return cast(object, json.loads(raw_text))
        return cast(object, yaml.safe_load(raw_text))
    except (json.JSONDecodeError, yaml.YAMLError) as error:
        raise DocStoreSeedError(f"Failed to parse seed file at {seed_file}: {error}.") from error


def _parse_collections(payload: object, seed_file: Path) -> dict[str, Collection]:
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise DocStoreSeedError(
            f"Seed file {seed_file} must contain a mapping of collection names "
            f"to document lists, got {type(payload).__name__}."
        )
    collections: dict[str, Collection] = {}
    for name, documents in payload.items():
        if not isinstance(name, str) or not isinstance(documents, list):
            raise DocStoreSeedError(
                f"Seed file {seed_file}: collection {name!r} must map a string name "
                "to a list of documents."
            )
        for position, document in enumerate(documents):
            if not isinstance(document, dict):
                raise DocStoreSeedError(
                    f"Seed file {seed_file}: document #{position + 1} in collection "
                    f"'{name}' must be a mapping, got {type(document).__name__}."
                )
        collections[name] = cast(list[dict[str, Any]], documents)
    return collections
