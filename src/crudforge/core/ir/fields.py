"""
Field definitions for crudforge IR.

A ModelField is the closed, immutable record of one schema-declared field.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

STRING_SCALAR = "String"


class ModelField(BaseModel):
    """
    Specification for a single field of a model.

    Attributes:
        name: Field identifier
        type: Scalar type name, enum name, or referenced model name
        kind: "scalar", "enum", "object", or "unsupported"
        is_id: Field is the primary key
        is_required: Field is not optional
        is_list: Field is a list (``Type[]``)
        is_unique: Field has a unique constraint
        is_read_only: Field is a foreign-key column backing a relation
        is_generated: Field is generated by the database engine
        is_updated_at: Field is stamped on every update
        documentation: Text of the ``///`` lines preceding the field
        relation_name: Name of the relation for object fields
        relation_to_fields: Referenced fields on the other side
        relation_on_delete: Referential action on delete
    """

    name: str
    type: str
    kind: str = "scalar"
    is_id: bool = False
    is_required: bool = True
    is_list: bool = False
    is_unique: bool = False
    is_read_only: bool = False
    is_generated: bool = False
    is_updated_at: bool = False
    documentation: str | None = None
    relation_name: str | None = None
    relation_to_fields: tuple[str, ...] = ()
    relation_on_delete: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_relation(self) -> bool:
        """Check if field references another model."""
        return self.kind == "object"

    @property
    def is_string(self) -> bool:
        """Check if field is the string scalar."""
        return self.kind == "scalar" and self.type == STRING_SCALAR
