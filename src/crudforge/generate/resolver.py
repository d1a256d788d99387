"""
GraphQL resolver synthesis.

Generates one NestJS resolver per model exposing the six CRUD operations,
each wrapped in the guard its auth level resolves to and delegating to the
shared data-access service.
"""

from __future__ import annotations

from crudforge.core.ir import CrudOperation, ModelRecord

from .config import CrudConfig
from .guards import guard_for
from .naming import id_argument_name, operation_name, resolver_class_name

DATA_ACCESS_SERVICE = "ApiCrudDataAccessService"

_INFO_PARAM = "@Info() info: GraphQLResolveInfo"


def resolve_guards(model: ModelRecord, config: CrudConfig) -> dict[CrudOperation, str | None]:
    """Guard token per operation, None where the operation is public."""
    return {op: guard_for(model.level_for(op), config.guards) for op in CrudOperation}


def collect_guards(guards: dict[CrudOperation, str | None]) -> list[str]:
    """Distinct guard tokens in use, sorted."""
    return sorted({guard for guard in guards.values() if guard})


def _operation_parts(
    model: ModelRecord, operation: CrudOperation
) -> tuple[str, list[str], list[str]]:
    """Decorator, parameter list, and service call arguments of one operation."""
    name = model.name
    id_arg = id_argument_name(model)
    list_input = f"List{name}Input"
    list_param = (
        f"@Args({{ name: 'input', type: () => {list_input}, nullable: true }}) "
        f"input?: {list_input}"
    )
    id_param = f"@Args('{id_arg}') {id_arg}: string"

    if operation is CrudOperation.READ_MANY:
        return f"Query(() => [{name}], {{ nullable: true }})", [_INFO_PARAM, list_param], [
            "info",
            "input",
        ]
    if operation is CrudOperation.COUNT:
        return "Query(() => CorePaging, { nullable: true })", [list_param], ["input"]
    if operation is CrudOperation.READ_ONE:
        return f"Query(() => {name}, {{ nullable: true }})", [_INFO_PARAM, id_param], [
            "info",
            id_arg,
        ]
    if operation is CrudOperation.CREATE:
        return (
            f"Mutation(() => {name}, {{ nullable: true }})",
            [_INFO_PARAM, f"@Args('input') input: Create{name}Input"],
            ["info", "input"],
        )
    if operation is CrudOperation.UPDATE:
        return (
            f"Mutation(() => {name}, {{ nullable: true }})",
            [_INFO_PARAM, id_param, f"@Args('input') input: Update{name}Input"],
            ["info", id_arg, "input"],
        )
    return f"Mutation(() => {name}, {{ nullable: true }})", [id_param], [id_arg]


def render_operation(model: ModelRecord, operation: CrudOperation, guard: str | None) -> str:
    """
    Render one resolver method.

    The guard decorator line is omitted entirely when ``guard`` is None.
    """
    method = operation_name(model, operation)
    decorator, params, call_args = _operation_parts(model, operation)

    lines = [f"  @{decorator}"]
    if guard:
        lines.append(f"  @UseGuards({guard})")
    lines.append(f"  {method}(")
    lines.extend(f"    {param}," for param in params)
    lines.append("  ) {")
    lines.append(f"    return this.service.{method}({', '.join(call_args)})")
    lines.append("  }")
    return "\n".join(lines)


def synthesize_resolver(model: ModelRecord, config: CrudConfig | None = None) -> str:
    """
    Generate the resolver source of one model.

    Operations are emitted in the fixed order readMany, count, readOne,
    create, update, delete, so unchanged input gives byte-identical output.

    Args:
        model: Model with resolved auth (``admin`` everywhere if unset)
        config: Generation configuration (defaults if None)

    Returns:
        TypeScript source text
    """
    config = config or CrudConfig()
    name = model.name
    guards = resolve_guards(model, config)
    used_guards = collect_guards(guards)

    imports = ["import { Args, Info, Mutation, Query, Resolver } from '@nestjs/graphql'"]
    if used_guards:
        imports.append("import { UseGuards } from '@nestjs/common'")
    imports.extend(
        [
            "import type { GraphQLResolveInfo } from 'graphql'",
            f"import {{ CorePaging }} from '{config.core_data_access_import_path}'",
            f"import {{ {name} }} from '{config.models_import_path}'",
            "import {",
            f"  {DATA_ACCESS_SERVICE},",
            f"  Create{name}Input,",
            f"  List{name}Input,",
            f"  Update{name}Input,",
            f"}} from '{config.data_access_import_path}'",
        ]
    )
    if used_guards:
        imports.append(f"import {{ {', '.join(used_guards)} }} from '{config.guard_import_path}'")

    operations = "\n\n".join(render_operation(model, op, guards[op]) for op in CrudOperation)

    parts = [
        "\n".join(imports),
        "",
        f"@Resolver(() => {name})",
        f"export class {resolver_class_name(model)} {{",
        f"  constructor(private readonly service: {DATA_ACCESS_SERVICE}) {{}}",
        "",
        operations,
        "}",
        "",
    ]
    return "\n".join(parts)
