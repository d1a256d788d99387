"""
Model records for crudforge IR.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .auth import AuthPolicy, CrudOperation
from .fields import ModelField


class ModelRecord(BaseModel):
    """
    One schema-declared model, reshaped for generation.

    Attributes:
        name: PascalCase model name
        plural_name: Plural of the name (``List``-suffixed when uncountable)
        fields: Fields in declaration order
        primary_field: First non-id string field, ``"name"`` if none
        model_property_name: camelCase singular (``blogPost``)
        plural_model_property_name: camelCase plural (``blogPosts``)
        documentation: Text of the ``///`` lines preceding the model
        auth: Resolved policy, set once after annotation parsing
    """

    name: str
    plural_name: str
    fields: tuple[ModelField, ...] = Field(default_factory=tuple)
    primary_field: str = "name"
    model_property_name: str
    plural_model_property_name: str
    documentation: str | None = None
    auth: AuthPolicy | None = None

    def level_for(self, operation: CrudOperation) -> str | None:
        """Auth level for one operation, None if no policy is attached."""
        if self.auth is None:
            return None
        return self.auth.level_for(operation)

    def get_field(self, name: str) -> ModelField | None:
        """Get field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None
