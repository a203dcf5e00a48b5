"""Runtime configuration model for docstore.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    COPY_ON_READ_ENV_VAR,
    DEFAULT_COPY_ON_READ,
    FALSE_ENV_VALUES,
    SEED_PATH_ENV_VAR,
    TRUE_ENV_VALUES,
)
from core.errors import DocStoreConfigError


@dataclass(frozen=True)
class DocStoreConfig:
    """Validated runtime configuration.

    Attributes:
        seed_path: Optional JSON/YAML file with initial collections.
        copy_on_read: Return deep copies from read and find operations.
    """

    seed_path: Path | None = None
    copy_on_read: bool = DEFAULT_COPY_ON_READ

    @classmethod
    def from_env(cls) -> "DocStoreConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            DocStoreConfigError: If environment values are invalid.
        """
        seed_path_value = os.getenv(SEED_PATH_ENV_VAR)
        seed_path = None
        if seed_path_value:
            seed_path = Path(seed_path_value).expanduser().resolve()
        copy_on_read = _parse_bool_flag(
            COPY_ON_READ_ENV_VAR,
            os.getenv(COPY_ON_READ_ENV_VAR),
            DEFAULT_COPY_ON_READ,
        )
        return cls(seed_path=seed_path, copy_on_read=copy_on_read)


def _parse_bool_flag(env_name: str, raw_value: str | None, default: bool) -> bool:
    """Parse a boolean environment flag.

    Args:
        env_name: Environment variable name, used in error messages.
        raw_value: Raw string from environment, None when unset.
        default: Value used when the variable is unset.

    Returns:
        Parsed boolean flag.

    Raises:
        DocStoreConfigError: If value is not a recognized boolean token.
    """
    if raw_value is None:
        return default
    normalized_value = raw_value.strip().lower()
    if normalized_value in TRUE_ENV_VALUES:
        return True
    if normalized_value in FALSE_ENV_VALUES:
        return False
    raise DocStoreConfigError(
        f"Invalid {env_name} value: "
        f"expected one of {', '.join(TRUE_ENV_VALUES + FALSE_ENV_VALUES[:-1])}, "
        f"got '{raw_value}'."
    )
