"""Unit tests for seed collection loading."""

from __future__ import annotations

import pytest

from core.errors import DocStoreSeedError
from store.seed_io import load_seed_collections


def test_load_json_seed(fixtures_root) -> None:
    """JSON seed files map collection names to document lists."""
    collections = load_seed_collections(fixtures_root / "seed" / "articles.json")

    assert [document["id"] for document in collections["Article"]] == ["a1", "a2", "a3"]


def test_load_yaml_seed(fixtures_root) -> None:
    """YAML seed files are supported too."""
    collections = load_seed_collections(fixtures_root / "seed" / "users.yaml")

    assert collections["User"][0]["roles"] == ["admin", "author"]


def test_missing_seed_file_raises(tmp_path) -> None:
    """A missing seed file is an error."""
    with pytest.raises(DocStoreSeedError):
        load_seed_collections(tmp_path / "missing.json")


def test_unsupported_suffix_raises(tmp_path) -> None:
    """Only JSON and YAML files are accepted."""
    seed_path = tmp_path / "seed.csv"
    seed_path.write_text("id\n1\n", encoding="utf-8")

    with pytest.raises(DocStoreSeedError):
        load_seed_collections(seed_path)


def test_non_mapping_document_raises(tmp_path) -> None:
    """Each document must be a mapping."""
    seed_path = tmp_path / "seed.json"
    seed_path.write_text('{"Article": [1, 2]}', encoding="utf-8")

    with pytest.raises(DocStoreSeedError):
        load_seed_collections(seed_path)


def test_invalid_json_raises(tmp_path) -> None:
    """Syntax errors are reported as seed errors."""
    seed_path = tmp_path / "seed.json"
    seed_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(DocStoreSeedError):
        load_seed_collections(seed_path)


def test_empty_yaml_seed_is_empty(tmp_path) -> None:
    """An empty YAML file seeds no collections."""
    seed_path = tmp_path / "seed.yaml"
    seed_path.write_text("", encoding="utf-8")

    assert load_seed_collections(seed_path) == {}
