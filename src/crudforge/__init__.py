"""
crudforge - CRUD resolver generation from Prisma schemas.

Extracts models from a schema, resolves each model's per-operation access
policy from ``@crudAuth:`` documentation annotations, and synthesizes guarded
GraphQL resolver sources plus the module that wires them together.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core import ir
from .core.annotations import resolve_auth_for_model
from .core.errors import (
    AnnotationError,
    ConfigError,
    CrudforgeError,
    SchemaParseError,
    SchemaUnreadableError,
)
from .core.extractor import build_models, extract_models
from .generate.guards import guard_for
from .generate.module import synthesize_index, synthesize_module
from .generate.resolver import synthesize_resolver


def _get_version() -> str:
    """Get version from installed package metadata."""
    try:
        return _metadata_version("crudforge")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    # Errors
    "CrudforgeError",
    "SchemaParseError",
    "SchemaUnreadableError",
    "AnnotationError",
    "ConfigError",
    # Engine
    "extract_models",
    "build_models",
    "resolve_auth_for_model",
    "guard_for",
    "synthesize_resolver",
    "synthesize_module",
    "synthesize_index",
]
