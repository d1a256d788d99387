"""
Feature module and barrel generation.

The aggregate module registers every generated resolver as a provider; the
index re-exports the module and each resolver. Both follow the input model
order.
"""

from __future__ import annotations

from collections.abc import Sequence

from crudforge.core.ir import ModelRecord

from .config import CrudConfig
from .naming import resolver_class_name, resolver_module_name

DATA_ACCESS_MODULE = "ApiCrudDataAccessModule"

GENERATED_HEADER = "// Generated by crudforge - DO NOT EDIT."


def synthesize_module(models: Sequence[ModelRecord], config: CrudConfig | None = None) -> str:
    """
    Generate the aggregate feature module.

    Args:
        models: Models in schema declaration order
        config: Generation configuration (defaults if None)

    Returns:
        TypeScript source text
    """
    config = config or CrudConfig()

    lines = [
        GENERATED_HEADER,
        "import { Module } from '@nestjs/common'",
        f"import {{ {DATA_ACCESS_MODULE} }} from '{config.data_access_import_path}'",
    ]
    lines.extend(
        f"import {{ {resolver_class_name(m)} }} from './{resolver_module_name(m)}'" for m in models
    )
    lines.append("")
    lines.append("@Module({")
    lines.append(f"  imports: [{DATA_ACCESS_MODULE}],")
    if models:
        lines.append("  providers: [")
        lines.extend(f"    {resolver_class_name(m)}," for m in models)
        lines.append("  ],")
    else:
        lines.append("  providers: [],")
    lines.append("})")
    lines.append(f"export class {config.feature_module_class} {{}}")
    lines.append("")
    return "\n".join(lines)


def synthesize_index(models: Sequence[ModelRecord], config: CrudConfig | None = None) -> str:
    """Generate the barrel re-exporting the module and every resolver."""
    config = config or CrudConfig()
    lines = [GENERATED_HEADER, f"export * from './lib/{config.feature_module_name}'"]
    lines.extend(f"export * from './lib/{resolver_module_name(m)}'" for m in models)
    lines.append("")
    return "\n".join(lines)
