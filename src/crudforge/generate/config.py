"""
Generation configuration models.

Parses the [crud] section from crudforge.toml and provides typed
configuration for the generators. Project facts an Nx workspace
keeps in package.json (npm scope, schema location) are detected from there
when the TOML leaves them unset.
"""

from __future__ import annotations

import json
import re
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from crudforge.core.errors import ConfigError
from crudforge.core.ir import AuthPolicy
from crudforge.core.strings import pascal_case

from .guards import GuardNaming

CONFIG_FILE_NAME = "crudforge.toml"
DEFAULT_LIBRARY_NAME = "generated-crud"
DEFAULT_NPM_SCOPE = "app"
DEFAULT_SCHEMA_PATH = "prisma/schema.prisma"

_LIBRARY_NAME = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")
_NPM_SCOPE = re.compile(r"^@([^/]+)/")


class OutputConfig(BaseModel):
    """Output configuration."""

    directory: str = "libs/api"
    overwrite: bool = False


class CrudConfig(BaseModel):
    """Complete generation configuration."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = DEFAULT_LIBRARY_NAME
    npm_scope: str | None = None
    schema_path: str | None = Field(default=None, alias="schema")
    guard_import: str = "@{scope}/api/custom"
    guards: GuardNaming = Field(default_factory=GuardNaming)
    default_auth: AuthPolicy = Field(default_factory=AuthPolicy)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Library names are kebab-case."""
        if not _LIBRARY_NAME.match(v):
            raise ValueError(f"library name {v!r} must be kebab-case (e.g. 'generated-crud')")
        return v

    @property
    def scope(self) -> str:
        """npm scope without the leading ``@``."""
        return (self.npm_scope or DEFAULT_NPM_SCOPE).lstrip("@")

    @property
    def guard_import_path(self) -> str:
        return self.guard_import.replace("{scope}", self.scope)

    @property
    def data_access_import_path(self) -> str:
        return f"@{self.scope}/api/{self.name}/data-access"

    @property
    def core_data_access_import_path(self) -> str:
        return f"@{self.scope}/api/core/data-access"

    @property
    def models_import_path(self) -> str:
        return f"@{self.scope}/api/core/models"

    @property
    def feature_module_class(self) -> str:
        """Aggregate module class (``ApiGeneratedCrudFeatureModule``)."""
        return f"Api{pascal_case(self.name)}FeatureModule"

    @property
    def feature_module_name(self) -> str:
        """Aggregate module file stem (``api-generated-crud-feature.module``)."""
        return f"api-{self.name}-feature.module"

    def get_feature_root(self, project_root: Path) -> Path:
        """Root directory of the generated feature library."""
        output_dir = Path(self.output.directory)
        if not output_dir.is_absolute():
            output_dir = project_root / output_dir
        return output_dir / self.name / "feature"


def load_crud_config(toml_path: Path) -> CrudConfig:
    """
    Load generation configuration from crudforge.toml.

    Args:
        toml_path: Path to crudforge.toml file

    Returns:
        CrudConfig with parsed values or defaults

    Raises:
        ConfigError: If the file is not valid TOML or the section is invalid
    """
    if not toml_path.exists():
        return CrudConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {toml_path}: {e}") from e

    crud_data = data.get("crud", {})
    if not crud_data:
        return CrudConfig()

    try:
        return CrudConfig.model_validate(crud_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid [crud] configuration in {toml_path}:\n{e}") from e


def read_package_json(project_root: Path) -> dict[str, Any]:
    """Parsed package.json of the project, empty if absent or unreadable."""
    package_json = project_root / "package.json"
    if not package_json.exists():
        return {}
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def detect_npm_scope(project_root: Path) -> str | None:
    """npm scope from the package.json name (``@acme/source`` -> ``acme``)."""
    name = read_package_json(project_root).get("name")
    if not isinstance(name, str):
        return None
    match = _NPM_SCOPE.match(name)
    return match.group(1) if match else None


def detect_schema_path(project_root: Path) -> Path:
    """Schema location from package.json ``prisma.schema``, else the default."""
    prisma = read_package_json(project_root).get("prisma")
    if isinstance(prisma, dict) and isinstance(prisma.get("schema"), str):
        return project_root / prisma["schema"]
    return project_root / DEFAULT_SCHEMA_PATH


def resolve_project_config(project_root: Path, config: CrudConfig | None = None) -> CrudConfig:
    """
    Load the project's configuration and fill in detected values.

    Args:
        project_root: Project root directory
        config: Explicit configuration (crudforge.toml is read if None)

    Returns:
        Configuration with ``npm_scope`` and ``schema_path`` always set
    """
    if config is None:
        config = load_crud_config(project_root / CONFIG_FILE_NAME)

    updates: dict[str, Any] = {}
    if config.npm_scope is None:
        updates["npm_scope"] = detect_npm_scope(project_root) or DEFAULT_NPM_SCOPE
    if config.schema_path is None:
        updates["schema_path"] = str(detect_schema_path(project_root))
    return config.model_copy(update=updates) if updates else config


def get_schema_path(project_root: Path, config: CrudConfig) -> Path:
    """Absolute schema path for a configuration."""
    if config.schema_path is None:
        return detect_schema_path(project_root)
    path = Path(config.schema_path)
    return path if path.is_absolute() else project_root / path
