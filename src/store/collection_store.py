"""Named in-memory collections with single-document CRUD.

This module owns the collection registry and addresses documents by a
single-field identifier descriptor. Lookups are linear scans with value
equality on the identifier field; there is no index.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping

from core.logging_config import get_logger
from core.types import (
    Collection,
    Document,
    DocumentPatch,
    IdentifierDescriptor,
    coerce_document_patch,
    split_identifier_descriptor,
)
from query.expression_evaluator import values_equal
from store.document_paths import set_path, unset_path

_LOGGER = get_logger(__name__)


class CollectionStore:
    """Registry of named, lazily created collections.

    Collections are plain lists of documents. Documents are stored and
    returned by reference; callers that need isolation copy them.
    """

    def __init__(self, initial_collections: Mapping[str, Collection] | None = None) -> None:
        """Create a collection store.

        Args:
            initial_collections: Optional collections to start from. The
                lists are adopted as-is, not copied.
        """
        self._collections: dict[str, Collection] = dict(initial_collections or {})

    def resolve_collection(self, name: str) -> Collection:
        """Return a collection by name, creating an empty one if missing.

        Args:
            name: Collection name.

        Returns:
            The live collection list.
        """
        collection = self._collections.get(name)
        if collection is None:
            collection = []
            self._collections[name] = collection
            _LOGGER.info("collection_created", collection_name=name)
        return collection

    def collection_names(self) -> tuple[str, ...]:
        """Return registered collection names in creation order."""
        return tuple(self._collections)

    def collection_size(self, name: str) -> int:
        """Return the number of documents in a collection."""
        return len(self.resolve_collection(name))

    def create_document(
        self,
        collection_name: str,
        identifier_descriptor: IdentifierDescriptor,
        document: Document,
    ) -> bool:
        """Append a document unless its identifier is already taken.

        Args:
            collection_name: Target collection name.
            identifier_descriptor: Single-entry {field: value} mapping.
            document: Document to store.

        Returns:
            False if a document with the same identifier exists, True otherwise.
        """
        collection = self.resolve_collection(collection_name)
        if _find_document(collection, identifier_descriptor) is not None:
            _LOGGER.info(
                "document_create_conflict",
                collection_name=collection_name,
                identifier=_describe_identifier(identifier_descriptor),
            )
            return False
        collection.append(document)
        _LOGGER.info(
            "document_created",
            collection_name=collection_name,
            identifier=_describe_identifier(identifier_descriptor),
            collection_size=len(collection),
        )
        return True

    def read_document(
        self,
        collection_name: str,
        identifier_descriptor: IdentifierDescriptor,
    ) -> Document | None:
        """Return the first document whose identifier field matches.

        Args:
            collection_name: Collection name.
            identifier_descriptor: Single-entry {field: value} mapping.

        Returns:
            Stored document, or None when absent.
        """
        collection = self.resolve_collection(collection_name)
        return _find_document(collection, identifier_descriptor)

    def update_document(
        self,
        collection_name: str,
        identifier_descriptor: IdentifierDescriptor,
        document_patch: DocumentPatch | Mapping[str, Any],
    ) -> bool:
        """Apply ``$set`` then ``$unset`` entries to one stored document.

        Args:
            collection_name: Collection name.
            identifier_descriptor: Single-entry {field: value} mapping.
            document_patch: Patch instance or {"$set": ..., "$unset": ...} mapping.

        Returns:
            False if no document matches, True after the patch is applied.

        Raises:
            DocStorePatchError: If the patch is malformed or a path conflicts. The
                stored document is left unchanged in that case.
        """
        patch = coerce_document_patch(document_patch)
        collection = self.resolve_collection(collection_name)
        document = _find_document(collection, identifier_descriptor)
        if document is None:
            return False
        # A failing path must leave the stored document untouched.
        patched = copy.deepcopy(document)
        for path, value in patch.set.items():
            set_path(patched, path, value)
        for path, flag in patch.unset.items():
            if flag:
                unset_path(patched, path)
        document.clear()
        document.update(patched)
        _LOGGER.info(
            "document_updated",
            collection_name=collection_name,
            identifier=_describe_identifier(identifier_descriptor),
            set_paths=list(patch.set),
            unset_paths=[path for path, flag in patch.unset.items() if flag],
        )
        return True

    def delete_document(
        self,
        collection_name: str,
        identifier_descriptor: IdentifierDescriptor,
    ) -> bool:
        """Remove one document, keeping the order of the others.

        Args:
            collection_name: Collection name.
            identifier_descriptor: Single-entry {field: value} mapping.

        Returns:
            False if no document matches, True after removal.
        """
        collection = self.resolve_collection(collection_name)
        document = _find_document(collection, identifier_descriptor)
        if document is None:
            return False
        # Remove by identity; equal-valued documents elsewhere stay put.
        position = next(index for index, item in enumerate(collection) if item is document)
        del collection[position]
        _LOGGER.info(
            "document_deleted",
            collection_name=collection_name,
            identifier=_describe_identifier(identifier_descriptor),
            collection_size=len(collection),
        )
        return True


def _find_document(
    collection: Collection,
    identifier_descriptor: IdentifierDescriptor,
) -> Document | None:
    identifier_name, identifier_value = split_identifier_descriptor(identifier_descriptor)
    for document in collection:
        if identifier_name in document and values_equal(
            document[identifier_name], identifier_value
        ):
            return document
    return None


def _describe_identifier(identifier_descriptor: IdentifierDescriptor) -> str:
    identifier_name, identifier_value = split_identifier_descriptor(identifier_descriptor)
    return f"{identifier_name}={identifier_value!r}"
