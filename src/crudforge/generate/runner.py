"""
Generation runner - orchestrates schema loading, generation and writing.

The CrudRunner reads the project's schema, extracts models with their
resolved auth, runs the CrudGenerator and writes the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from crudforge.core.errors import SchemaUnreadableError
from crudforge.core.extractor import build_models
from crudforge.core.fileset import load_schema_text
from crudforge.core.ir import ModelRecord

from .config import CrudConfig, get_schema_path, resolve_project_config
from .generator import CrudGenerator, GeneratorResult

logger = logging.getLogger(__name__)


@dataclass
class WriteReport:
    """Paths written and skipped by write_result."""

    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


def write_result(result: GeneratorResult, overwrite: bool = False) -> WriteReport:
    """
    Write generated files to disk.

    Existing resolver files are left alone unless ``overwrite`` is set;
    files marked ``always_write`` are rewritten every time.

    Args:
        result: Generation result
        overwrite: Replace existing files too

    Returns:
        WriteReport listing written and skipped paths
    """
    report = WriteReport()
    for generated in result.files:
        if generated.path.exists() and not (overwrite or generated.always_write):
            logger.info("Skipping existing file %s", generated.path)
            report.skipped.append(generated.path)
            continue
        generated.path.parent.mkdir(parents=True, exist_ok=True)
        generated.path.write_text(generated.content, encoding="utf-8")
        logger.debug("Wrote %s", generated.path)
        report.written.append(generated.path)
    return report


@dataclass
class RunResult:
    """
    Result of a generation run.

    Attributes:
        generation: Generated files, artifacts, errors and warnings
        models: Extracted models
        report: What was written (None on dry runs and failed runs)
    """

    generation: GeneratorResult
    models: list[ModelRecord] = field(default_factory=list)
    report: WriteReport | None = None

    @property
    def success(self) -> bool:
        return self.generation.success

    @property
    def errors(self) -> list[str]:
        return self.generation.errors

    @property
    def warnings(self) -> list[str]:
        return self.generation.warnings


class CrudRunner:
    """Orchestrates one generation run for a project."""

    def __init__(
        self,
        project_root: Path,
        config: CrudConfig | None = None,
        schema_path: Path | None = None,
    ):
        """
        Initialize the runner.

        Args:
            project_root: Root directory of the workspace
            config: Optional configuration (loaded from crudforge.toml if not provided)
            schema_path: Schema file or directory overriding the configured one

        Raises:
            ConfigError: If crudforge.toml is invalid
        """
        self.project_root = project_root
        self.config = resolve_project_config(project_root, config)
        self.schema_path = schema_path or get_schema_path(project_root, self.config)
        self.feature_root = self.config.get_feature_root(project_root)

    def load_models(self) -> list[ModelRecord]:
        """
        Read the schema and extract models with resolved auth.

        Raises:
            SchemaUnreadableError: If the schema cannot be read
        """
        schema_text = load_schema_text(self.schema_path)
        return build_models(schema_text, self.config.default_auth)

    def run(self, dry_run: bool = False, overwrite: bool | None = None) -> RunResult:
        """
        Run generation.

        Args:
            dry_run: Generate in memory without writing
            overwrite: Replace existing resolvers (uses config if None)

        Returns:
            RunResult with generated files and any errors
        """
        try:
            models = self.load_models()
        except SchemaUnreadableError as e:
            generation = GeneratorResult()
            generation.add_error(str(e))
            return RunResult(generation)

        logger.info("Extracted %d models from %s", len(models), self.schema_path)
        generation = CrudGenerator(models, self.config, self.feature_root).generate()
        run_result = RunResult(generation, models)

        if dry_run or not generation.success:
            return run_result

        should_overwrite = overwrite if overwrite is not None else self.config.output.overwrite
        run_result.report = write_result(generation, should_overwrite)
        return run_result
