"""Tests for CLI commands."""

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from crudforge import __version__
from crudforge.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the root logger configuration the commands apply."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def lib_dir(project_dir: Path) -> Path:
    return project_dir / "libs" / "api" / "generated-crud" / "feature" / "src" / "lib"


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_generate_command(cli_runner: CliRunner, project_dir: Path, lib_dir: Path):
    """Test generate writes resolvers, module and index."""
    result = cli_runner.invoke(app, ["generate", "--project", str(project_dir)])
    assert result.exit_code == 0, result.output
    assert "3 model(s)" in result.stdout
    assert (lib_dir / "user.resolver.ts").exists()
    assert (lib_dir / "equipment.resolver.ts").exists()
    assert (lib_dir.parent / "index.ts").exists()


def test_generate_dry_run(cli_runner: CliRunner, project_dir: Path, lib_dir: Path):
    result = cli_runner.invoke(app, ["generate", "-p", str(project_dir), "--dry-run"])
    assert result.exit_code == 0, result.output
    assert "No files were written" in result.stdout
    assert not lib_dir.exists()


def test_generate_output_override(cli_runner: CliRunner, project_dir: Path):
    result = cli_runner.invoke(
        app, ["generate", "-p", str(project_dir), "-o", str(project_dir / "out")]
    )
    assert result.exit_code == 0, result.output
    assert (project_dir / "out" / "generated-crud" / "feature" / "src" / "index.ts").exists()


def test_generate_keeps_resolvers_unless_overwrite(
    cli_runner: CliRunner, project_dir: Path, lib_dir: Path
):
    cli_runner.invoke(app, ["generate", "-p", str(project_dir)])
    resolver = lib_dir / "post.resolver.ts"
    resolver.write_text("// customized")

    cli_runner.invoke(app, ["generate", "-p", str(project_dir)])
    assert resolver.read_text() == "// customized"

    result = cli_runner.invoke(app, ["generate", "-p", str(project_dir), "--overwrite"])
    assert result.exit_code == 0, result.output
    assert "GeneratedPostResolver" in resolver.read_text()


def test_generate_schema_option(cli_runner: CliRunner, tmp_path: Path):
    schema = tmp_path / "schema.prisma"
    schema.write_text("model Widget {\n  id Int @id\n  label String\n}\n")
    result = cli_runner.invoke(app, ["generate", "-p", str(tmp_path), "-s", str(schema)])
    assert result.exit_code == 0, result.output
    lib = tmp_path / "libs" / "api" / "generated-crud" / "feature" / "src" / "lib"
    assert "@app/api/custom" in (lib / "widget.resolver.ts").read_text()


def test_generate_missing_schema_fails(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(app, ["generate", "-p", str(tmp_path)])
    assert result.exit_code == 1
    assert "Error" in result.stdout


def test_generate_empty_model_list_fails(cli_runner: CliRunner, tmp_path: Path):
    schema = tmp_path / "schema.prisma"
    schema.write_text('enum Role {\n  Admin\n}\n')
    result = cli_runner.invoke(app, ["generate", "-p", str(tmp_path), "-s", str(schema)])
    assert result.exit_code == 1
    assert "No models found" in result.stdout


def test_generate_non_utf8_schema_fails(cli_runner: CliRunner, tmp_path: Path):
    schema = tmp_path / "schema.prisma"
    schema.write_bytes(b'model A {\n  name String @default("\xff")\n}\n')
    result = cli_runner.invoke(app, ["generate", "-p", str(tmp_path), "-s", str(schema)])
    assert result.exit_code == 1
    assert "not valid UTF-8" in result.stdout


def test_generate_malformed_number_fails(cli_runner: CliRunner, tmp_path: Path):
    schema = tmp_path / "schema.prisma"
    schema.write_text("model A {\n  id Int @id @default(1.2.3)\n}\n")
    result = cli_runner.invoke(app, ["generate", "-p", str(tmp_path), "-s", str(schema)])
    assert result.exit_code == 1
    assert "No models found" in result.stdout


def test_generate_invalid_config_fails(cli_runner: CliRunner, project_dir: Path):
    (project_dir / "crudforge.toml").write_text('[crud]\nname = "Bad Name"\n')
    result = cli_runner.invoke(app, ["generate", "-p", str(project_dir)])
    assert result.exit_code == 1
    assert "Configuration error" in result.stdout


def test_generate_missing_config_file_fails(cli_runner: CliRunner, project_dir: Path):
    result = cli_runner.invoke(
        app, ["generate", "-p", str(project_dir), "-c", str(project_dir / "nope.toml")]
    )
    assert result.exit_code == 1


def test_models_table(cli_runner: CliRunner, project_dir: Path):
    result = cli_runner.invoke(app, ["models", "-p", str(project_dir)])
    assert result.exit_code == 0, result.output
    assert "User" in result.stdout
    assert "Equipment" in result.stdout
    assert "EquipmentList" in result.stdout
    assert "username" in result.stdout
    assert "create=content_editor" in result.stdout
    assert "…" not in result.stdout


def test_models_json(cli_runner: CliRunner, project_dir: Path):
    result = cli_runner.invoke(app, ["models", "-p", str(project_dir), "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [m["name"] for m in data] == ["User", "Post", "Equipment"]
    assert data[0]["auth"]["create"] == "content_editor"
    assert data[2]["pluralName"] == "EquipmentList"


@pytest.mark.parametrize(
    "level,expected",
    [
        ("public", "(none)"),
        ("user", "GqlAuthGuard"),
        ("admin", "GqlAuthAdminGuard"),
        ("content_editor", "GqlAuthContentEditorGuard"),
    ],
)
def test_guard_command(cli_runner: CliRunner, level: str, expected: str):
    result = cli_runner.invoke(app, ["guard", level])
    assert result.exit_code == 0
    assert result.stdout.strip() == expected


def test_guard_command_with_config(cli_runner: CliRunner, tmp_path: Path):
    config = tmp_path / "crudforge.toml"
    config.write_text('[crud.guards]\nuser = "JwtGuard"\n')
    result = cli_runner.invoke(app, ["guard", "user", "-c", str(config)])
    assert result.stdout.strip() == "JwtGuard"
