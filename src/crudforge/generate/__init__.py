"""
crudforge generation: guard resolution, resolver and module synthesis.

Usage:
    crudforge generate              # Generate into libs/api/generated-crud
    crudforge generate --dry-run    # Preview without writing
"""

from .config import (
    CrudConfig,
    OutputConfig,
    load_crud_config,
    resolve_project_config,
)
from .generator import (
    CompositeGenerator,
    CrudGenerator,
    GeneratedFile,
    Generator,
    GeneratorResult,
    ModuleGenerator,
    ResolverGenerator,
)
from .guards import DEFAULT_GUARD_NAMING, GuardNaming, guard_for
from .module import synthesize_index, synthesize_module
from .resolver import synthesize_resolver
from .runner import CrudRunner, RunResult, WriteReport, write_result

__all__ = [
    # Config
    "CrudConfig",
    "OutputConfig",
    "load_crud_config",
    "resolve_project_config",
    # Guards
    "GuardNaming",
    "DEFAULT_GUARD_NAMING",
    "guard_for",
    # Synthesis
    "synthesize_resolver",
    "synthesize_module",
    "synthesize_index",
    # Generator
    "Generator",
    "GeneratorResult",
    "GeneratedFile",
    "CompositeGenerator",
    "ResolverGenerator",
    "ModuleGenerator",
    "CrudGenerator",
    # Runner
    "CrudRunner",
    "RunResult",
    "WriteReport",
    "write_result",
]
