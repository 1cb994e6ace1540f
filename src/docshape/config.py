"""Runtime options for docshape validation."""

import logging
import os

from pydantic import Field

from docshape.models import DocshapeBaseModel

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256


def get_env_flag(env_var: str, default: bool = False) -> bool:
    """Get a boolean flag from an environment variable.

    Args:
        env_var: Name of the environment variable
        default: Default value if environment variable is not set

    Returns:
        True if the environment variable is set to "1", "true", or "yes" (case insensitive)
        False otherwise
    """
    value = os.environ.get(env_var, "").lower()
    return value in ("1", "true", "yes") if value else default


class ValidationOptions(DocshapeBaseModel):
    """Options controlling a validation run.

    Attributes:
        max_depth: Maximum nesting depth the engine descends into before
            reporting a ``depth_exceeded`` violation.
        fail_fast: Stop at the first violation instead of collecting all.

    Example:
        >>> options = ValidationOptions(max_depth=32, fail_fast=True)
        >>> options = ValidationOptions.from_env()
    """

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    fail_fast: bool = False

    @classmethod
    def from_env(cls) -> "ValidationOptions":
        """Build options from ``DOCSHAPE_MAX_DEPTH`` and ``DOCSHAPE_FAIL_FAST``."""
        max_depth = DEFAULT_MAX_DEPTH
        raw_depth = os.environ.get("DOCSHAPE_MAX_DEPTH")
        if raw_depth:
            try:
                max_depth = int(raw_depth)
            except ValueError:
                logger.warning(
                    f"Ignoring non-integer DOCSHAPE_MAX_DEPTH={raw_depth!r}, "
                    f"using {DEFAULT_MAX_DEPTH}"
                )
        return cls(max_depth=max_depth, fail_fast=get_env_flag("DOCSHAPE_FAIL_FAST"))
