"""Core constants used across docstore modules.

This module centralizes operator names and configuration defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

SEED_PATH_ENV_VAR = "DOCSTORE_SEED_PATH"
COPY_ON_READ_ENV_VAR = "DOCSTORE_COPY_ON_READ"
DEFAULT_COPY_ON_READ = False
TRUE_ENV_VALUES = ("1", "true", "yes", "on")
FALSE_ENV_VALUES = ("0", "false", "no", "off", "")

PATCH_SET_KEY = "$set"
PATCH_UNSET_KEY = "$unset"

SORT_ASCENDING = "asc"
SORT_DESCENDING = "desc"
SUPPORTED_SORT_DIRECTIONS = (SORT_ASCENDING, SORT_DESCENDING)

BASIC_OPERATORS = (
    "$equal",
    "$notEqual",
    "$greaterThan",
    "$greaterThanOrEqual",
    "$lessThan",
    "$lessThanOrEqual",
    "$any",
)
STRING_OPERATORS = ("$includes", "$startsWith", "$endsWith", "$matches")
ARRAY_OPERATORS = ("$some", "$every", "$length")
LOGICAL_OPERATORS = ("$not", "$and", "$or", "$nor")
SUPPORTED_OPERATORS = BASIC_OPERATORS + STRING_OPERATORS + ARRAY_OPERATORS + LOGICAL_OPERATORS

SEED_FILE_SUFFIXES = (".json", ".yaml", ".yml")
