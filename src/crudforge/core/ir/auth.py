"""
Access-control types for crudforge IR.

An AuthPolicy assigns an auth level to each of the six CRUD operations.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CrudOperation(str, Enum):
    """
    The six generated CRUD operations, in emission order.

    Values are the operation keys used in ``@crudAuth:`` annotations.
    """

    READ_MANY = "readMany"
    COUNT = "count"
    READ_ONE = "readOne"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def attribute(self) -> str:
        """Name of the matching AuthPolicy attribute."""
        return _POLICY_ATTRIBUTES[self]


_POLICY_ATTRIBUTES = {
    CrudOperation.READ_MANY: "read_many",
    CrudOperation.COUNT: "count",
    CrudOperation.READ_ONE: "read_one",
    CrudOperation.CREATE: "create",
    CrudOperation.UPDATE: "update",
    CrudOperation.DELETE: "delete",
}


class AuthLevel(str, Enum):
    """Well-known auth levels. Any other string is a custom role."""

    PUBLIC = "public"
    USER = "user"
    ADMIN = "admin"

    @classmethod
    def lookup(cls, level: str) -> AuthLevel | None:
        """Find the well-known level for a string, case-insensitively."""
        try:
            return cls(level.lower())
        except ValueError:
            return None


class AuthPolicy(BaseModel):
    """
    Per-operation auth levels for one model.

    Every operation always has a level; unset ones are ``admin``. Field
    aliases are the annotation keys, so a policy validates directly from a
    parsed ``@crudAuth:`` object.
    """

    read_one: str = Field(default=AuthLevel.ADMIN.value, alias="readOne")
    read_many: str = Field(default=AuthLevel.ADMIN.value, alias="readMany")
    count: str = AuthLevel.ADMIN.value
    create: str = AuthLevel.ADMIN.value
    update: str = AuthLevel.ADMIN.value
    delete: str = AuthLevel.ADMIN.value

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def level_for(self, operation: CrudOperation) -> str:
        """Get the auth level of one operation."""
        return getattr(self, operation.attribute)

    def merged(self, overrides: Mapping[str, Any]) -> AuthPolicy:
        """
        Shallow-merge annotation keys over this policy.

        Args:
            overrides: Mapping keyed by operation key (``readOne``, ...)

        Returns:
            New policy; keys absent from ``overrides`` keep this policy's level
        """
        updates = {
            CrudOperation(key).attribute: value
            for key, value in overrides.items()
            if key in OPERATION_KEYS
        }
        return self.model_copy(update=updates)

    def as_annotation(self) -> dict[str, str]:
        """Policy keyed by operation key, in emission order."""
        return {op.value: self.level_for(op) for op in CrudOperation}


OPERATION_KEYS = frozenset(op.value for op in CrudOperation)

DEFAULT_AUTH_POLICY = AuthPolicy()
