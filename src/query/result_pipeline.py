"""Filter, sort, skip, and limit stages for find and count.

Stages always run in that order and each one is skipped when its
parameter is absent. Sorting is stable so repeated queries over the same
collection order return the same result order.
"""

from __future__ import annotations

from functools import cmp_to_key
import math
from typing import Any, Sequence

from core.constants import SORT_DESCENDING, SUPPORTED_SORT_DIRECTIONS
from core.errors import DocStoreQueryError
from core.types import Document, FindQuery, SortDescriptor
from query.expression_evaluator import document_matches, normalize_value
from store.document_paths import get_path


def run_pipeline(documents: Sequence[Document], query: FindQuery) -> list[Document]:
    """Run all result stages over a document sequence.

    Args:
        documents: Collection documents in stored order.
        query: Expressions plus optional sort, skip, and limit.

    Returns:
        Matching documents after sort, skip, and limit.

    Raises:
        DocStoreQueryError: If any stage receives invalid parameters.
    """
    results = filter_documents(documents, query.expressions)
    results = sort_documents(results, query.sort)
    results = skip_documents(results, query.skip)
    return limit_documents(results, query.limit)


def count_matching(documents: Sequence[Document], expressions: Sequence[object]) -> int:
    """Count documents matching an expression list.

    Args:
        documents: Collection documents.
        expressions: Top-level expressions, implicitly ANDed.

    Returns:
        Number of matching documents.
    """
    return len(filter_documents(documents, expressions))


def filter_documents(
    documents: Sequence[Document],
    expressions: Sequence[object],
) -> list[Document]:
    """Keep documents matching all top-level expressions.

    Args:
        documents: Input documents.
        expressions: Top-level expressions.

    Returns:
        Matching documents in input order.
    """
    if len(expressions) == 0:
        return list(documents)
    return [document for document in documents if document_matches(document, expressions)]


def sort_documents(
    documents: list[Document],
    sort: SortDescriptor | None,
) -> list[Document]:
    """Stable multi-key sort by resolved path values.

    Absent and NaN values rank after every present value, so they come
    last in ascending order and first in descending order.

    Args:
        documents: Input documents.
        sort: Ordered mapping of path to "asc"/"desc", primary key first.

    Returns:
        New sorted list; the input list is left untouched.

    Raises:
        DocStoreQueryError: If a direction is unknown or values are unordered.
    """
    if not sort:
        return documents
    sort_keys = [(path, _parse_direction(path, direction)) for path, direction in sort.items()]

    def compare_documents(left: Document, right: Document) -> int:
        for path, descending in sort_keys:
            result = _compare_sort_values(get_path(left, path), get_path(right, path), path)
            if result != 0:
                return -result if descending else result
        return 0

    return sorted(documents, key=cmp_to_key(compare_documents))


def skip_documents(documents: list[Document], skip: int | None) -> list[Document]:
    """Drop the first ``skip`` documents."""
    if skip is None:
        return documents
    _require_non_negative("skip", skip)
    return documents[skip:]


def limit_documents(documents: list[Document], limit: int | None) -> list[Document]:
    """Keep at most ``limit`` documents."""
    if limit is None:
        return documents
    _require_non_negative("limit", limit)
    return documents[:limit]


def _parse_direction(path: str, direction: object) -> bool:
    if isinstance(direction, str):
        normalized_direction = direction.strip().lower()
        if normalized_direction in SUPPORTED_SORT_DIRECTIONS:
            return normalized_direction == SORT_DESCENDING
    raise DocStoreQueryError(
        f"Unsupported sort direction {direction!r} for path '{path}'. "
        f"Use one of: {', '.join(SUPPORTED_SORT_DIRECTIONS)}."
    )


def _compare_sort_values(left: Any, right: Any, path: str) -> int:
    left_absent = _is_unranked(left)
    right_absent = _is_unranked(right)
    if left_absent or right_absent:
        return left_absent - right_absent
    left = normalize_value(left)
    right = normalize_value(right)
    try:
        if left == right:
            return 0
        return -1 if left < right else 1
    except TypeError as error:
        raise DocStoreQueryError(
            f"Cannot sort on path '{path}': {type(left).__name__} and "
            f"{type(right).__name__} values are not ordered."
        ) from error


def _is_unranked(value: Any) -> bool:
    value = normalize_value(value)
    return value is None or (isinstance(value, float) and math.isnan(value))


def _require_non_negative(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DocStoreQueryError(f"Query '{name}' must be a non-negative integer, got {value!r}.")
