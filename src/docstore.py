"""Public SDK surface for docstore.

This module provides a stable import path for library users.
It re-exports the store facade, typed query models, and errors.
"""

from __future__ import annotations

from core.config import DocStoreConfig
from core.errors import (
    DocStoreConfigError,
    DocStoreError,
    DocStorePatchError,
    DocStoreQueryError,
    DocStoreQuerySpecError,
    DocStoreSeedError,
)
from core.types import DocumentPatch, Expression, FindQuery
from query.expression_evaluator import document_matches
from query.query_spec import QuerySpec, load_query_spec
from store.memory_store import MemoryStore
from store.seed_io import load_seed_collections

__all__ = [
    "DocStoreConfig",
    "DocStoreConfigError",
    "DocStoreError",
    "DocStorePatchError",
    "DocStoreQueryError",
    "DocStoreQuerySpecError",
    "DocStoreSeedError",
    "DocumentPatch",
    "Expression",
    "FindQuery",
    "MemoryStore",
    "QuerySpec",
    "document_matches",
    "load_query_spec",
    "load_seed_collections",
]
