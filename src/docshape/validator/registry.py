"""Registry of named document validators.

A schema may list validator names in ``Schema.validators``. These refer to
rules that the structural model cannot express (uniqueness across items,
sums that must balance...). docshape does not ship any such rule; callers
register their own and hand the registry to `ShapeValidator`.

Example:
    >>> from docshape.validator import NamedValidator, ValidatorRegistry
    >>>
    >>> class UniqueIds(NamedValidator):
    ...     @property
    ...     def name(self) -> str:
    ...         return "unique_ids"
    ...
    ...     def validate(self, document):
    ...         ids = [item["id"] for item in document["items"]]
    ...         return [] if len(ids) == len(set(ids)) else ["duplicate item ids"]
    >>>
    >>> registry = ValidatorRegistry()
    >>> registry.register(UniqueIds())
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from docshape.errors import SchemaDefinitionError

from .models import Violation

logger = logging.getLogger(__name__)

ValidatorResult = Iterable[str | Violation]


class NamedValidator(ABC):
    """Base class for validators referenced by name from a schema.

    Implementations return the problems they found: plain strings are
    reported at the document root, `Violation` instances are kept as given.
    An empty result means the document passes. The document must not be
    modified.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name used in ``Schema.validators``."""

    @abstractmethod
    def validate(self, document: Any) -> ValidatorResult:
        """Check the whole document."""


class CallableValidator(NamedValidator):
    """Adapts a plain function to `NamedValidator`."""

    def __init__(self, name: str, func: Callable[[Any], ValidatorResult]):
        self._name = name
        self._func = func

    @property
    def name(self) -> str:
        return self._name

    def validate(self, document: Any) -> ValidatorResult:
        return self._func(document)


class ValidatorRegistry:
    """Registry for managing named validators."""

    def __init__(self) -> None:
        self._validators: dict[str, NamedValidator] = {}

    def register(self, validator: NamedValidator) -> None:
        """Register a validator, replacing any previous one with the same name."""
        if validator.name in self._validators:
            logger.warning(f"Replacing already registered validator: {validator.name}")
        self._validators[validator.name] = validator
        logger.debug(f"Registered validator: {validator.name}")

    def register_function(self, name: str, func: Callable[[Any], ValidatorResult]) -> None:
        """Register a plain function as a named validator."""
        self.register(CallableValidator(name, func))

    def unregister(self, name: str) -> None:
        self._validators.pop(name, None)

    def get(self, name: str) -> NamedValidator | None:
        """Get a validator by name."""
        return self._validators.get(name)

    def list_validators(self) -> list[str]:
        """List all registered validator names."""
        return list(self._validators.keys())

    def resolve(self, names: Sequence[str]) -> list[NamedValidator]:
        """Look up validators in the given order.

        Raises:
            SchemaDefinitionError: If a name is not registered
        """
        resolved = []
        for index, name in enumerate(names):
            validator = self._validators.get(name)
            if validator is None:
                raise SchemaDefinitionError(
                    f"unknown validator {name!r}, registered: {self.list_validators()}",
                    path=f"validators.{index}",
                )
            resolved.append(validator)
        return resolved

    def __contains__(self, name: object) -> bool:
        return name in self._validators


# Global registry instance
_default_registry = ValidatorRegistry()


def get_default_registry() -> ValidatorRegistry:
    """Get the process-wide validator registry."""
    return _default_registry


def register_validator(validator: NamedValidator) -> None:
    """Register a validator with the process-wide registry."""
    _default_registry.register(validator)
