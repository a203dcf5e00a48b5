"""Shared typed models.

This module defines the immutable query and patch models used by the
evaluator, result pipeline, collection store, and SDK facade. Callers may
pass plain tuples and mappings; the coerce helpers normalize them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from core.constants import PATCH_SET_KEY, PATCH_UNSET_KEY
from core.errors import DocStorePatchError, DocStoreQueryError

Document = dict[str, Any]
Collection = list[Document]
IdentifierDescriptor = Mapping[str, Any]
SortDescriptor = Mapping[str, str]


@dataclass(frozen=True)
class Expression:
    """One (path, operator, operand) test.

    Attributes:
        path: Dotted/indexed path, or "" for the current value.
        operator: Operator name such as "$equal" or "$some".
        operand: Operator argument; sub-expression lists for nested operators.
    """

    path: str
    operator: str
    operand: Any = None


@dataclass(frozen=True)
class DocumentPatch:
    """In-place update instructions for one document.

    Attributes:
        set: Ordered path to value assignments.
        unset: Ordered path to removal flag entries.
    """

    set: Mapping[str, Any] = field(default_factory=dict)
    unset: Mapping[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class FindQuery:
    """Arguments for one find or count call.

    Attributes:
        expressions: Top-level expressions, implicitly ANDed.
        sort: Optional ordered sort descriptor.
        skip: Optional number of leading results to drop.
        limit: Optional maximum number of results.
    """

    expressions: tuple[Expression, ...] = ()
    sort: SortDescriptor | None = None
    skip: int | None = None
    limit: int | None = None


def coerce_expression(value: object) -> Expression:
    """Normalize an expression given as a dataclass or a 3-item sequence.

    Args:
        value: Expression instance or (path, operator, operand) sequence.

    Returns:
        Expression instance.

    Raises:
        DocStoreQueryError: If value has the wrong shape.
    """
    if isinstance(value, Expression):
        return value
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        if len(value) == 3:
            path, operator, operand = value
            if isinstance(path, str) and isinstance(operator, str):
                return Expression(path=path, operator=operator, operand=operand)
    raise DocStoreQueryError(
        f"Invalid expression {value!r}: expected (path, operator, operand) "
        "with string path and operator."
    )


def coerce_expressions(values: Sequence[object] | None) -> tuple[Expression, ...]:
    """Normalize a top-level expression list.

    Args:
        values: Sequence of expressions or None.

    Returns:
        Tuple of expressions, empty when values is None.

    Raises:
        DocStoreQueryError: If values is not a sequence of expressions.
    """
    if values is None:
        return ()
    if isinstance(values, (str, bytes, bytearray)) or not isinstance(values, Sequence):
        raise DocStoreQueryError(
            f"Invalid expression list: expected sequence, got {type(values).__name__}."
        )
    return tuple(coerce_expression(value) for value in values)


def coerce_document_patch(value: DocumentPatch | Mapping[str, Any]) -> DocumentPatch:
    """Normalize a patch given as a dataclass or a {"$set", "$unset"} mapping.

    Args:
        value: Patch instance or mapping.

    Returns:
        DocumentPatch instance.

    Raises:
        DocStorePatchError: If value has unknown keys or non-mapping parts.
    """
    if isinstance(value, DocumentPatch):
        return value
    if not isinstance(value, Mapping):
        raise DocStorePatchError(
            f"Invalid document patch: expected mapping, got {type(value).__name__}."
        )
    unknown_keys = sorted(set(value) - {PATCH_SET_KEY, PATCH_UNSET_KEY})
    if unknown_keys:
        raise DocStorePatchError(
            f"Document patch contains unknown fields: {', '.join(unknown_keys)}."
        )
    set_entries = value.get(PATCH_SET_KEY) or {}
    unset_entries = value.get(PATCH_UNSET_KEY) or {}
    if not isinstance(set_entries, Mapping) or not isinstance(unset_entries, Mapping):
        raise DocStorePatchError(
            f"Document patch '{PATCH_SET_KEY}' and '{PATCH_UNSET_KEY}' must be mappings."
        )
    return DocumentPatch(set=dict(set_entries), unset=dict(unset_entries))


def split_identifier_descriptor(identifier_descriptor: IdentifierDescriptor) -> tuple[str, Any]:
    """Return the (field, value) pair that addresses one document.

    Only the first entry is consulted.

    Args:
        identifier_descriptor: Single-entry {field: value} mapping.

    Returns:
        Identifier field name and value.

    Raises:
        DocStoreQueryError: If descriptor is not a non-empty mapping.
    """
    if not isinstance(identifier_descriptor, Mapping) or not identifier_descriptor:
        raise DocStoreQueryError(
            f"Invalid identifier descriptor {identifier_descriptor!r}: "
            "expected a non-empty {field: value} mapping."
        )
    identifier_name, identifier_value = next(iter(identifier_descriptor.items()))
    return str(identifier_name), identifier_value
