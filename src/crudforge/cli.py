"""
crudforge command line interface.

Commands:
- generate: Generate guarded CRUD resolvers for every schema model
- models: Show extracted models and their resolved auth
- guard: Show the guard token for an auth level
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from crudforge import __version__
from crudforge.core.errors import ConfigError, SchemaUnreadableError
from crudforge.core.ir import CrudOperation
from crudforge.generate.config import CrudConfig, load_crud_config
from crudforge.generate.guards import guard_for
from crudforge.generate.runner import CrudRunner

LOG_LEVEL_ENV = "CRUDFORGE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

app = typer.Typer(
    help="Generate guarded GraphQL CRUD resolvers from a Prisma schema",
    no_args_is_help=True,
)

console = Console()

ProjectOption = Annotated[
    Path,
    typer.Option("--project", "-p", help="Workspace root (default: current directory)"),
]
SchemaOption = Annotated[
    Path | None,
    typer.Option("--schema", "-s", help="Schema file or directory of .prisma files"),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Configuration file (default: <project>/crudforge.toml)"),
]


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging from the environment, DEBUG when verbose."""
    level_name = "DEBUG" if verbose else os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format=LOG_FORMAT,
        force=True,
    )


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"crudforge {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """crudforge CLI main callback for global options."""
    pass


def _build_runner(project: Path, schema: Path | None, config_path: Path | None) -> CrudRunner:
    """Create a runner, exiting with code 1 on configuration problems."""
    project_path = project.resolve()
    config: CrudConfig | None = None
    try:
        if config_path is not None:
            if not config_path.exists():
                raise ConfigError(f"Configuration file not found: {config_path}")
            config = load_crud_config(config_path)
        return CrudRunner(project_path, config, schema.resolve() if schema else None)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def _display_path(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


@app.command()
def generate(
    project: ProjectOption = Path("."),
    schema: SchemaOption = None,
    config_path: ConfigOption = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory (overrides crudforge.toml)"),
    ] = None,
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Replace existing resolver files"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Preview without writing files"),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """
    Generate resolvers, the feature module and the index barrel.

    Existing resolvers are kept unless --overwrite is given; the module and
    index are always regenerated.

    Examples:
        crudforge generate                     # Use crudforge.toml / package.json
        crudforge generate -s prisma/schema    # Directory of .prisma files
        crudforge generate --dry-run           # Preview changes
    """
    configure_logging(verbose)
    runner = _build_runner(project, schema, config_path)
    if output is not None:
        runner.config = runner.config.model_copy(
            update={"output": runner.config.output.model_copy(update={"directory": str(output)})}
        )
        runner.feature_root = runner.config.get_feature_root(runner.project_root)

    result = runner.run(dry_run=dry_run, overwrite=overwrite or None)

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
    if not result.success:
        for error in result.errors:
            console.print(f"[red]Error:[/red] {escape(error)}")
        raise typer.Exit(code=1)

    root = runner.project_root
    console.print(f"[bold]{len(result.models)} model(s)[/bold] from {runner.schema_path}")

    if dry_run:
        for generated in result.generation.files:
            console.print(f"  would write {_display_path(generated.path, root)}")
        console.print("[dim]No files were written (dry run mode)[/dim]")
        return

    report = result.report
    if report is None:
        return
    for path in report.written:
        console.print(f"  [green]wrote[/green] {_display_path(path, root)}")
    for path in report.skipped:
        console.print(f"  [dim]kept[/dim] {_display_path(path, root)}")


@app.command()
def models(
    project: ProjectOption = Path("."),
    schema: SchemaOption = None,
    config_path: ConfigOption = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the models extracted from the schema and their resolved auth."""
    configure_logging()
    runner = _build_runner(project, schema, config_path)
    try:
        records = runner.load_models()
    except SchemaUnreadableError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if output_json:
        data = [
            {
                "name": m.name,
                "pluralName": m.plural_name,
                "primaryField": m.primary_field,
                "auth": m.auth.as_annotation() if m.auth else None,
            }
            for m in records
        ]
        console.print_json(json.dumps(data))
        return

    if not records:
        console.print("[dim]No models found.[/dim]")
        raise typer.Exit(code=1)

    table = Table(title="Models")
    table.add_column("Model", style="bold", no_wrap=True)
    table.add_column("Plural", no_wrap=True)
    table.add_column("Primary", no_wrap=True)
    table.add_column("Auth")

    for m in records:
        auth = ", ".join(f"{op.value}={m.level_for(op) or 'admin'}" for op in CrudOperation)
        table.add_row(m.name, m.plural_name, m.primary_field, auth)

    console.print(table)


@app.command()
def guard(
    level: Annotated[str, typer.Argument(help="Auth level: public, user, admin, or a role")],
    config_path: ConfigOption = None,
) -> None:
    """Show the guard token an auth level resolves to."""
    naming = CrudConfig().guards
    if config_path is not None:
        try:
            naming = load_crud_config(config_path).guards
        except ConfigError as e:
            console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
            raise typer.Exit(code=1)
    typer.echo(guard_for(level, naming) or "(none)")


def main() -> None:
    app(standalone_mode=True)
