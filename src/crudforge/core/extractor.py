"""
Schema model extraction.

Reshapes the structural data model into ModelRecords carrying the derived
names generation needs (plural, camelCase property names, primary display
field). Structural parsing itself is delegated to a parser callable so other
schema front ends can be plugged in.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .annotations import resolve_auth_for_model
from .errors import SchemaParseError
from .ir import DEFAULT_AUTH_POLICY, AuthPolicy, ModelField, ModelRecord
from .schema_parser import DataModel, DatamodelModel, parse_datamodel
from .strings import lower_first, plural_name

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_FIELD = "name"

SchemaParserFn = Callable[[str], DataModel]


def select_primary_field(fields: tuple[ModelField, ...]) -> str:
    """First non-id string field in declaration order, ``"name"`` if none."""
    for f in fields:
        if not f.is_id and f.is_string:
            return f.name
    return DEFAULT_PRIMARY_FIELD


def to_model_record(model: DatamodelModel) -> ModelRecord:
    """Convert one parsed model into a ModelRecord (without auth)."""
    fields = tuple(
        ModelField(
            name=f.name,
            type=f.type,
            kind=f.kind,
            is_id=f.is_id,
            is_required=f.is_required,
            is_list=f.is_list,
            is_unique=f.is_unique,
            is_read_only=f.is_read_only,
            is_generated=f.is_generated,
            is_updated_at=f.is_updated_at,
            documentation=f.documentation,
            relation_name=f.relation_name,
            relation_to_fields=f.relation_to_fields,
            relation_on_delete=f.relation_on_delete,
        )
        for f in model.fields
    )
    plural = plural_name(model.name)
    return ModelRecord(
        name=model.name,
        plural_name=plural,
        fields=fields,
        primary_field=select_primary_field(fields),
        model_property_name=lower_first(model.name),
        plural_model_property_name=lower_first(plural),
        documentation=model.documentation,
    )


def extract_models(
    schema_text: str,
    parse: SchemaParserFn = parse_datamodel,
) -> list[ModelRecord]:
    """
    Extract model records from schema text.

    Args:
        schema_text: Complete (concatenated) schema text
        parse: Structural parser returning a DataModel

    Returns:
        Models in declaration order. Empty when the schema is empty or
        cannot be parsed; the failure is logged, never raised.
    """
    if not schema_text or not schema_text.strip():
        logger.error("Schema text is empty")
        return []

    try:
        datamodel = parse(schema_text)
    except SchemaParseError as e:
        logger.error("Error parsing schema: %s", e)
        return []

    records = []
    for model in datamodel.models:
        if not model.name or not model.fields:
            logger.warning("Skipping model %r: it declares no fields", model.name)
            continue
        records.append(to_model_record(model))
    return records


def build_models(
    schema_text: str,
    default_policy: AuthPolicy = DEFAULT_AUTH_POLICY,
    parse: SchemaParserFn = parse_datamodel,
) -> list[ModelRecord]:
    """
    Extract models and attach each model's resolved auth policy.

    Args:
        schema_text: Complete (concatenated) schema text
        default_policy: Policy for operations no annotation sets
        parse: Structural parser returning a DataModel

    Returns:
        Models in declaration order, each with ``auth`` set
    """
    models = extract_models(schema_text, parse)
    for model in models:
        model.auth = resolve_auth_for_model(schema_text, model.name, default_policy)
    return models
