"""Public in-memory store facade.

This module exposes create, read, update, delete, find, and count over
named collections. Every call holds one store-wide lock for its whole
duration, so a scan and the mutation that follows it never interleave
with another operation.
"""

from __future__ import annotations

import copy
import threading
from typing import Any, Mapping, Sequence

from core.config import DocStoreConfig
from core.types import (
    Collection,
    Document,
    DocumentPatch,
    FindQuery,
    IdentifierDescriptor,
    SortDescriptor,
    coerce_expressions,
)
from query.result_pipeline import count_matching, run_pipeline
from store.collection_store import CollectionStore
from store.seed_io import load_seed_collections


class MemoryStore:
    """Embedded document store backed by in-memory collections."""

    def __init__(
        self,
        initial_collections: Mapping[str, Collection] | None = None,
        copy_on_read: bool = False,
    ) -> None:
        """Create a store.

        Args:
            initial_collections: Optional collections to start from.
            copy_on_read: Return deep copies from read and find.
        """
        self._collections = CollectionStore(initial_collections)
        self._copy_on_read = copy_on_read
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: DocStoreConfig | None = None) -> "MemoryStore":
        """Build a store from runtime configuration.

        Args:
            config: Optional runtime configuration, read from env when omitted.

        Returns:
            Store seeded from ``config.seed_path`` when set.

        Raises:
            DocStoreSeedError: If the seed file cannot be loaded.
        """
        resolved_config = config or DocStoreConfig.from_env()
        initial_collections = None
        if resolved_config.seed_path is not None:
            initial_collections = load_seed_collections(resolved_config.seed_path)
        return cls(initial_collections, copy_on_read=resolved_config.copy_on_read)

    def collection_names(self) -> tuple[str, ...]:
        """Return known collection names."""
        with self._lock:
            return self._collections.collection_names()

    def create_document(
        self,
        *,
        collection_name: str,
        identifier_descriptor: IdentifierDescriptor,
        document: Document,
    ) -> bool:
        """Store a new document.

        Args:
            collection_name: Target collection name.
            identifier_descriptor: Single-entry {field: value} mapping.
            document: Document to store.

        Returns:
            False if the identifier is already taken.
        """
        with self._lock:
            return self._collections.create_document(
                collection_name, identifier_descriptor, document
            )

    def read_document(
        self,
        *,
        collection_name: str,
        identifier_descriptor: IdentifierDescriptor,
    ) -> Document | None:
        """Read one document by identifier.

        Args:
            collection_name: Collection name.
            identifier_descriptor: Single-entry {field: value} mapping.

        Returns:
            Document or None when absent.
        """
        with self._lock:
            document = self._collections.read_document(collection_name, identifier_descriptor)
            return self._export(document)

    def update_document(
        self,
        *,
        collection_name: str,
        identifier_descriptor: IdentifierDescriptor,
        document_patch: DocumentPatch | Mapping[str, Any],
    ) -> bool:
        """Patch one stored document in place.

        Args:
            collection_name: Collection name.
            identifier_descriptor: Single-entry {field: value} mapping.
            document_patch: Patch instance or {"$set", "$unset"} mapping.

        Returns:
            False if no document matches.
        """
        with self._lock:
            return self._collections.update_document(
                collection_name, identifier_descriptor, document_patch
            )

    def delete_document(
        self,
        *,
        collection_name: str,
        identifier_descriptor: IdentifierDescriptor,
    ) -> bool:
        """Delete one document.

        Args:
            collection_name: Collection name.
            identifier_descriptor: Single-entry {field: value} mapping.

        Returns:
            False if no document matches.
        """
        with self._lock:
            return self._collections.delete_document(collection_name, identifier_descriptor)

    def find_documents(
        self,
        *,
        collection_name: str,
        expressions: Sequence[object] | None = None,
        sort: SortDescriptor | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> list[Document]:
        """Query a collection.

        Args:
            collection_name: Collection name.
            expressions: Top-level expressions, implicitly ANDed.
            sort: Optional ordered sort descriptor.
            skip: Optional number of leading results to drop.
            limit: Optional maximum number of results.

        Returns:
            Matching documents after sort, skip, and limit.

        Raises:
            DocStoreQueryError: If the query uses an unsupported operator or
                invalid sort, skip, or limit values.
        """
        query = FindQuery(
            expressions=coerce_expressions(expressions),
            sort=sort,
            skip=skip,
            limit=limit,
        )
        return self.run_query(collection_name, query)

    def run_query(self, collection_name: str, query: FindQuery) -> list[Document]:
        """Run a prepared find query against a collection.

        Args:
            collection_name: Collection name.
            query: Prepared query.

        Returns:
            Matching documents after sort, skip, and limit.
        """
        with self._lock:
            collection = self._collections.resolve_collection(collection_name)
            documents = run_pipeline(collection, query)
            return [self._export(document) for document in documents]

    def count_documents(
        self,
        *,
        collection_name: str,
        expressions: Sequence[object] | None = None,
    ) -> int:
        """Count matching documents, ignoring sort, skip, and limit.

        Args:
            collection_name: Collection name.
            expressions: Top-level expressions, implicitly ANDed.

        Returns:
            Number of matching documents.
        """
        normalized_expressions = coerce_expressions(expressions)
        with self._lock:
            collection = self._collections.resolve_collection(collection_name)
            return count_matching(collection, normalized_expressions)

    def _export(self, document: Any) -> Any:
        if self._copy_on_read and document is not None:
            return copy.deepcopy(document)
        return document
