"""
Naming conventions for generated code.

Operation names must match what the data-access service exposes, so they
are derived from the model's names by one fixed table.
"""

from __future__ import annotations

from crudforge.core.ir import CrudOperation, ModelRecord
from crudforge.core.strings import kebab_case

RESOLVER_CLASS_PREFIX = "Generated"
RESOLVER_SUFFIX = ".resolver"


def operation_name(model: ModelRecord, operation: CrudOperation) -> str:
    """
    Generated method name of one operation.

    readMany  -> plural property name     (``users``)
    count     -> plural property + Count  (``usersCount``)
    readOne   -> singular property name   (``user``)
    mutations -> verb + model name        (``createUser``)
    """
    if operation is CrudOperation.READ_MANY:
        return model.plural_model_property_name
    if operation is CrudOperation.COUNT:
        return f"{model.plural_model_property_name}Count"
    if operation is CrudOperation.READ_ONE:
        return model.model_property_name
    return f"{operation.value}{model.name}"


def operation_names(model: ModelRecord) -> dict[CrudOperation, str]:
    """All six operation names of a model, in emission order."""
    return {op: operation_name(model, op) for op in CrudOperation}


def resolver_class_name(model: ModelRecord) -> str:
    return f"{RESOLVER_CLASS_PREFIX}{model.name}Resolver"


def resolver_module_name(model: ModelRecord) -> str:
    """File stem of a model's resolver (``user-profile.resolver``)."""
    return f"{kebab_case(model.name)}{RESOLVER_SUFFIX}"


def id_argument_name(model: ModelRecord) -> str:
    return f"{model.model_property_name}Id"
