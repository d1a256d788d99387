"""
crudforge Intermediate Representation (IR) types.

All IR types are re-exported from this package.
"""

from .auth import (
    DEFAULT_AUTH_POLICY,
    OPERATION_KEYS,
    AuthLevel,
    AuthPolicy,
    CrudOperation,
)
from .fields import STRING_SCALAR, ModelField
from .models import ModelRecord

__all__ = [
    # Auth
    "AuthLevel",
    "AuthPolicy",
    "CrudOperation",
    "DEFAULT_AUTH_POLICY",
    "OPERATION_KEYS",
    # Fields
    "ModelField",
    "STRING_SCALAR",
    # Models
    "ModelRecord",
]
