"""Unit tests for query file parsing."""

from __future__ import annotations

import re

import pytest

from core.errors import DocStoreQuerySpecError
from core.types import Expression
from query.query_spec import load_query_spec, parse_query_spec


def test_load_yaml_query_spec(fixtures_root) -> None:
    """YAML query files parse into expressions and sort."""
    spec = load_query_spec(str(fixtures_root / "queries" / "published_by_views.yaml"))

    assert spec.collection_name == "Article"
    assert spec.query.expressions[0] == Expression("published", "$equal", True)
    assert spec.query.sort == {"views": "desc"}


def test_load_json_query_spec_compiles_patterns(fixtures_root) -> None:
    """$matches operands are compiled into patterns."""
    spec = load_query_spec(str(fixtures_root / "queries" / "titles_matching.json"))

    assert isinstance(spec.query.expressions[0].operand, re.Pattern)
    assert (spec.query.skip, spec.query.limit) == (1, 1)


def test_nested_expressions_are_parsed() -> None:
    """Sub-expression lists under $some and $or become Expression tuples."""
    spec = parse_query_spec(
        {
            "collection": "Article",
            "expressions": [
                ["tags", "$some", [["", "$equal", "x"]]],
                ["", "$or", [[["views", "$greaterThan", 1]], [["draft", "$equal", True]]]],
            ],
        }
    )

    some_expression, or_expression = spec.query.expressions
    assert some_expression.operand == (Expression("", "$equal", "x"),)
    assert or_expression.operand[1] == (Expression("draft", "$equal", True),)


def test_unknown_operator_is_rejected() -> None:
    """Query files only accept supported operators."""
    with pytest.raises(DocStoreQuerySpecError, match=r"\$near"):
        parse_query_spec({"collection": "Article", "expressions": [["loc", "$near", 1]]})


def test_missing_collection_is_rejected() -> None:
    """The collection field is required."""
    with pytest.raises(DocStoreQuerySpecError):
        parse_query_spec({"expressions": []})


def test_unknown_root_field_is_rejected() -> None:
    """Unknown root fields are reported."""
    with pytest.raises(DocStoreQuerySpecError, match="offset"):
        parse_query_spec({"collection": "Article", "offset": 3})


def test_negative_limit_is_rejected() -> None:
    """Limit must be a non-negative integer."""
    with pytest.raises(DocStoreQuerySpecError):
        parse_query_spec({"collection": "Article", "limit": -1})


def test_invalid_sort_direction_is_rejected() -> None:
    """Sort directions are asc or desc."""
    with pytest.raises(DocStoreQuerySpecError):
        parse_query_spec({"collection": "Article", "sort": {"views": "down"}})


def test_missing_query_file_raises(tmp_path) -> None:
    """A missing file is reported as a query spec error."""
    with pytest.raises(DocStoreQuerySpecError):
        load_query_spec(str(tmp_path / "missing.yaml"))
