"""
Access-control annotations on schema models.

A model's documentation comments may carry a single-line policy fragment:

    /// @crudAuth: { "create": "user", "readMany": "public" }
    model User { ... }

Resolution is a single line-oriented pass over the schema text. Each line is
first classified (model start, documentation, other) and the
documentation buffer is driven by those classes only, so boundary detection
never depends on string prefixes of model names.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import AnnotationError
from .ir import DEFAULT_AUTH_POLICY, OPERATION_KEYS, AuthPolicy

logger = logging.getLogger(__name__)

DOC_MARKER = "///"
CRUD_AUTH_MARKER = "@crudAuth:"

_CRUD_AUTH_PATTERN = re.compile(r"@crudAuth:\s*(\{.*\})")
_MODEL_DECLARATION = re.compile(r"^model\s+([A-Za-z_][A-Za-z0-9_]*)(?=[\s{]|$)")


class LineKind(Enum):
    """Classification of one schema line."""

    MODEL_START = "model_start"
    DOCUMENTATION = "documentation"
    OTHER = "other"


@dataclass(frozen=True)
class SchemaLine:
    """
    One classified schema line.

    Attributes:
        kind: Line classification
        text: Stripped line text
        number: Line number (1-indexed)
        model_name: Declared model name, for MODEL_START lines
        depth: Brace depth at the start of the line
    """

    kind: LineKind
    text: str
    number: int
    model_name: str | None = None
    depth: int = 0


def classify_line(text: str) -> tuple[LineKind, str | None]:
    """
    Classify a single stripped line.

    ``model Foo``, ``model Foo {`` and ``model Foo{`` all declare ``Foo``;
    ``model FooBar`` never declares ``Foo``.
    """
    if text.startswith(DOC_MARKER):
        return LineKind.DOCUMENTATION, None
    match = _MODEL_DECLARATION.match(text)
    if match:
        return LineKind.MODEL_START, match.group(1)
    return LineKind.OTHER, None


def _brace_delta(text: str) -> int:
    """Net change in brace depth over one line, ignoring strings and comments."""
    delta = 0
    in_string = False
    escaped = False
    for index, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "/" and text[index + 1 : index + 2] == "/":
            break
        elif ch == "{":
            delta += 1
        elif ch == "}":
            delta -= 1
    return delta


def iter_schema_lines(schema_text: str) -> Iterator[SchemaLine]:
    """Yield every line of the schema with its classification and brace depth."""
    depth = 0
    for number, raw in enumerate(schema_text.split("\n"), start=1):
        text = raw.strip()
        kind, model_name = classify_line(text)
        if kind == LineKind.MODEL_START and depth > 0:
            # a field called "model" inside a block body
            kind, model_name = LineKind.OTHER, None
        yield SchemaLine(kind=kind, text=text, number=number, model_name=model_name, depth=depth)
        if kind != LineKind.DOCUMENTATION:
            depth = max(0, depth + _brace_delta(text))


def collect_model_documentation(schema_text: str, model_name: str) -> list[str] | None:
    """
    Collect the documentation lines that precede a model declaration.

    Documentation accumulates at the top level and is cleared by every model
    declaration. Lines nested inside a block body document fields and are
    not collected.

    Returns:
        The model's documentation lines, or None if the model is not declared
    """
    pending: list[str] = []
    for line in iter_schema_lines(schema_text):
        if line.kind == LineKind.MODEL_START:
            if line.model_name == model_name:
                return pending
            pending = []
        elif line.kind == LineKind.DOCUMENTATION and line.depth == 0:
            pending.append(line.text)
    return None


def parse_crud_auth(line: str, model_name: str | None = None) -> dict[str, Any] | None:
    """
    Extract the policy fragment from one documentation line.

    Args:
        line: Documentation line text
        model_name: Model the line documents (for error messages)

    Returns:
        The parsed object, or None if the line carries no ``@crudAuth:`` object

    Raises:
        AnnotationError: If the fragment is not a JSON object of strings
    """
    match = _CRUD_AUTH_PATTERN.search(line)
    if not match:
        if CRUD_AUTH_MARKER in line:
            raise AnnotationError(
                f"@crudAuth: must be followed by a JSON object on the same line: {line!r}",
                model_name,
            )
        return None

    try:
        fragment = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise AnnotationError(
            f"Invalid @crudAuth: JSON ({e.msg}): {match.group(1)}", model_name
        ) from e

    if not isinstance(fragment, dict):
        raise AnnotationError("@crudAuth: fragment must be a JSON object", model_name)

    for key, value in fragment.items():
        if not isinstance(value, str):
            raise AnnotationError(
                f"@crudAuth: level for {key!r} must be a string, got {value!r}",
                model_name,
            )
    return fragment


def resolve_auth_for_model(
    schema_text: str,
    model_name: str,
    defaults: AuthPolicy = DEFAULT_AUTH_POLICY,
) -> AuthPolicy:
    """
    Resolve the per-operation auth policy of one model.

    Args:
        schema_text: Complete schema text
        model_name: Target model name
        defaults: Policy for operations the annotation leaves unset

    Returns:
        ``defaults`` with the annotation's keys merged over it; ``defaults``
        unchanged when the model is absent, unannotated, or its annotation is
        malformed. Never raises.
    """
    documentation = collect_model_documentation(schema_text, model_name)
    if documentation is None:
        logger.debug("Model %s not found while resolving @crudAuth", model_name)
        return defaults

    auth_line = next((line for line in documentation if CRUD_AUTH_MARKER in line), None)
    if auth_line is None:
        return defaults

    try:
        fragment = parse_crud_auth(auth_line, model_name)
    except AnnotationError as e:
        logger.warning("Ignoring @crudAuth on model %s: %s", model_name, e.message)
        return defaults

    if fragment is None:
        return defaults

    unknown = sorted(set(fragment) - OPERATION_KEYS)
    if unknown:
        logger.warning(
            "Ignoring unknown @crudAuth keys on model %s: %s",
            model_name,
            ", ".join(unknown),
        )

    return defaults.merged(fragment)
