"""Docstore exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Soft negatives (missing or duplicate documents) are booleans, not errors.
"""

from __future__ import annotations


class DocStoreError(Exception):
    """Base exception for all docstore failures."""


class DocStoreConfigError(DocStoreError):
    """Raised for invalid runtime configuration."""


class DocStoreQueryError(DocStoreError):
    """Raised for malformed queries and unsupported operators."""


class DocStorePatchError(DocStoreError):
    """Raised when a document patch cannot be applied to a path."""


class DocStoreSeedError(DocStoreError):
    """Raised for unreadable or malformed seed collection files."""


class DocStoreQuerySpecError(DocStoreError):
    """Raised for invalid declarative query files."""
