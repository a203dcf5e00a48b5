"""Unit tests for filter, sort, skip, and limit stages."""

from __future__ import annotations

import pytest

from core.errors import DocStoreQueryError
from core.types import Expression, FindQuery
from query.result_pipeline import (
    count_matching,
    filter_documents,
    limit_documents,
    run_pipeline,
    skip_documents,
    sort_documents,
)


def _ids(documents: list[dict[str, object]]) -> list[object]:
    return [document["id"] for document in documents]


def test_sort_ascending_by_score(score_documents) -> None:
    """Ascending sort should order by the resolved value."""
    results = run_pipeline(score_documents, FindQuery(sort={"score": "asc"}))

    assert _ids(results) == ["2", "3", "1"]


def test_sort_then_skip_and_limit(score_documents) -> None:
    """Skip and limit apply after sorting."""
    query = FindQuery(sort={"score": "asc"}, skip=1, limit=1)

    results = run_pipeline(score_documents, query)

    assert _ids(results) == ["3"]


def test_sort_descending_is_case_insensitive(score_documents) -> None:
    """DESC should reverse the key."""
    results = sort_documents(score_documents, {"score": "DESC"})

    assert _ids(results) == ["1", "3", "2"]


def test_sort_is_stable_for_equal_keys() -> None:
    """Documents with equal keys keep their input order."""
    documents = [
        {"id": "a", "group": 1},
        {"id": "b", "group": 0},
        {"id": "c", "group": 1},
        {"id": "d", "group": 0},
    ]

    results = sort_documents(documents, {"group": "desc"})

    assert _ids(results) == ["a", "c", "b", "d"]


def test_sort_uses_later_keys_for_ties() -> None:
    """Secondary keys only break ties of the primary key."""
    documents = [
        {"id": "a", "group": 1, "rank": 2},
        {"id": "b", "group": 0, "rank": 5},
        {"id": "c", "group": 1, "rank": 1},
    ]

    results = sort_documents(documents, {"group": "asc", "rank": "desc"})

    assert _ids(results) == ["b", "a", "c"]


def test_sort_places_missing_values_last_when_ascending() -> None:
    """Absent values rank after present ones."""
    documents = [{"id": "a"}, {"id": "b", "score": 2}, {"id": "c", "score": 1}]

    ascending = sort_documents(documents, {"score": "asc"})
    descending = sort_documents(documents, {"score": "desc"})

    assert _ids(ascending) == ["c", "b", "a"]
    assert _ids(descending) == ["a", "b", "c"]


def test_sort_ranks_nan_with_missing_values() -> None:
    """NaN sorts like an absent value instead of breaking the order."""
    documents = [
        {"id": "a", "score": float("nan")},
        {"id": "b", "score": 2},
        {"id": "c", "score": 1},
        {"id": "d"},
    ]

    ascending = sort_documents(documents, {"score": "asc"})
    descending = sort_documents(documents, {"score": "desc"})

    assert _ids(ascending) == ["c", "b", "a", "d"]
    assert _ids(descending) == ["a", "d", "b", "c"]


def test_sort_by_nested_path() -> None:
    """Sort keys may be dotted paths."""
    documents = [{"id": "a", "author": {"name": "Grace"}}, {"id": "b", "author": {"name": "Ada"}}]

    results = sort_documents(documents, {"author.name": "asc"})

    assert _ids(results) == ["b", "a"]


def test_sort_rejects_unknown_direction(score_documents) -> None:
    """Only asc and desc are valid directions."""
    with pytest.raises(DocStoreQueryError):
        sort_documents(score_documents, {"score": "up"})


def test_sort_rejects_unordered_values() -> None:
    """Mixed value types on a sort key fail clearly."""
    documents = [{"id": "a", "score": "high"}, {"id": "b", "score": 2}]

    with pytest.raises(DocStoreQueryError):
        sort_documents(documents, {"score": "asc"})


def test_sort_leaves_input_untouched(score_documents) -> None:
    """Sorting returns a new list."""
    sort_documents(score_documents, {"score": "asc"})

    assert _ids(score_documents) == ["1", "2", "3"]


def test_skip_beyond_length_is_empty(score_documents) -> None:
    """Skipping past the end yields no documents."""
    assert skip_documents(score_documents, 10) == []


def test_absent_skip_and_limit_return_everything(score_documents) -> None:
    """Missing parameters disable their stage."""
    assert len(limit_documents(skip_documents(score_documents, None), None)) == 3


def test_limit_zero_is_empty(score_documents) -> None:
    """A zero limit returns nothing."""
    assert limit_documents(score_documents, 0) == []


def test_negative_skip_raises(score_documents) -> None:
    """Skip must be non-negative."""
    with pytest.raises(DocStoreQueryError):
        skip_documents(score_documents, -1)


def test_filter_keeps_input_order(score_documents) -> None:
    """Filtering does not reorder documents."""
    results = filter_documents(score_documents, [Expression("score", "$greaterThan", 1)])

    assert _ids(results) == ["1", "3"]


def test_count_ignores_sort_skip_and_limit(score_documents) -> None:
    """Count equals the length of the filter stage."""
    expressions = [("score", "$lessThanOrEqual", 2)]
    query = FindQuery(expressions=tuple(Expression(*row) for row in expressions))

    assert count_matching(score_documents, expressions) == len(run_pipeline(score_documents, query))
    assert count_matching(score_documents, expressions) == 2
