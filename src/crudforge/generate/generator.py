"""
Base generator classes for CRUD code generation.

Generators build file contents in memory; writing them out is left to the
runner so that dry runs and overwrite policy live in one place:
- ResolverGenerator produces one resolver per model
- ModuleGenerator produces the aggregate module and index barrel
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from crudforge.core.ir import ModelRecord

from .config import CrudConfig
from .module import synthesize_index, synthesize_module
from .naming import resolver_module_name
from .resolver import synthesize_resolver

TS_SUFFIX = ".ts"


@dataclass(frozen=True)
class GeneratedFile:
    """
    One generated file.

    Attributes:
        path: Destination path
        content: File text
        always_write: Rewrite even when the file exists (aggregate files)
    """

    path: Path
    content: str
    always_write: bool = False


@dataclass
class GeneratorResult:
    """
    Result from a generator execution.

    Attributes:
        files: Files to write, in generation order
        artifacts: Data to share with other generators or the caller
        errors: Any errors encountered
        warnings: Any warnings to display to user
    """

    files: list[GeneratedFile] = field(default_factory=list)
    artifacts: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Whether generation succeeded (no errors)."""
        return len(self.errors) == 0

    def add_file(self, path: Path, content: str, always_write: bool = False) -> None:
        """Record a file to be written."""
        self.files.append(GeneratedFile(path, content, always_write))

    def get_file(self, path: Path) -> str | None:
        """Content of a generated file, None if not generated."""
        for f in self.files:
            if f.path == path:
                return f.content
        return None

    def add_artifact(self, key: str, value: Any) -> None:
        """Add an artifact for other generators or the caller."""
        self.artifacts[key] = value

    def add_error(self, error: str) -> None:
        """Record an error."""
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        """Record a warning."""
        self.warnings.append(warning)

    def merge(self, other: GeneratorResult) -> None:
        """Merge another result into this one."""
        self.files.extend(other.files)
        self.artifacts.update(other.artifacts)
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


class Generator(ABC):
    """
    Base class for all generators.

    A generator creates files from the extracted model list.
    """

    def __init__(self, models: Sequence[ModelRecord], config: CrudConfig, feature_root: Path):
        """
        Initialize generator.

        Args:
            models: Models with resolved auth, in schema declaration order
            config: Generation configuration
            feature_root: Root directory of the feature library
        """
        self.models = list(models)
        self.config = config
        self.feature_root = feature_root

    @property
    def src_dir(self) -> Path:
        return self.feature_root / "src"

    @property
    def lib_dir(self) -> Path:
        return self.src_dir / "lib"

    @abstractmethod
    def generate(self) -> GeneratorResult:
        """
        Generate artifacts.

        Returns:
            GeneratorResult with files and artifacts
        """
        pass


class CompositeGenerator(Generator):
    """Generator that runs multiple sub-generators and merges their results."""

    @abstractmethod
    def get_generators(self) -> list[Generator]:
        """Get the list of sub-generators to run."""
        pass

    def generate(self) -> GeneratorResult:
        combined = GeneratorResult()

        for generator in self.get_generators():
            result = generator.generate()
            combined.merge(result)

            # Stop if a generator had errors
            if not result.success:
                break

        return combined


class ResolverGenerator(Generator):
    """Generates one resolver file per model."""

    def generate(self) -> GeneratorResult:
        result = GeneratorResult()
        policies: dict[str, dict[str, str]] = {}

        for model in self.models:
            path = self.lib_dir / f"{resolver_module_name(model)}{TS_SUFFIX}"
            result.add_file(path, synthesize_resolver(model, self.config))
            if model.auth is None:
                result.add_warning(f"Model {model.name} has no resolved auth; using admin")
            else:
                policies[model.name] = model.auth.as_annotation()

        result.add_artifact("policies", policies)
        return result


class ModuleGenerator(Generator):
    """Generates the aggregate feature module and the index barrel."""

    def generate(self) -> GeneratorResult:
        result = GeneratorResult()
        result.add_file(
            self.lib_dir / f"{self.config.feature_module_name}{TS_SUFFIX}",
            synthesize_module(self.models, self.config),
            always_write=True,
        )
        result.add_file(
            self.src_dir / f"index{TS_SUFFIX}",
            synthesize_index(self.models, self.config),
            always_write=True,
        )
        return result


class CrudGenerator(CompositeGenerator):
    """
    Generates the complete feature library for a model list.

    An empty model list is an error and produces no files.
    """

    def get_generators(self) -> list[Generator]:
        return [
            ResolverGenerator(self.models, self.config, self.feature_root),
            ModuleGenerator(self.models, self.config, self.feature_root),
        ]

    def generate(self) -> GeneratorResult:
        if not self.models:
            result = GeneratorResult()
            result.add_error("No models found in schema; nothing to generate")
            return result

        result = super().generate()
        result.add_artifact("models", [m.name for m in self.models])
        return result
