"""Shared pytest fixtures for crudforge tests."""

from pathlib import Path
from textwrap import dedent

import pytest

from crudforge.core.ir import AuthPolicy, ModelRecord

SAMPLE_SCHEMA = dedent(
    """\
    datasource db {
      provider = "postgresql"
      url      = env("DATABASE_URL")
    }

    generator client {
      provider = "prisma-client-js"
    }

    /// A registered account
    /// @crudAuth: { "readOne": "public", "readMany": "user", "create": "content_editor" }
    model User {
      id        String   @id @default(cuid())
      createdAt DateTime @default(now())
      updatedAt DateTime @updatedAt
      username  String   @unique
      email     String?
      role      Role     @default(User)
      posts     Post[]
    }

    model Post {
      id       String  @id @default(cuid())
      title    String
      author   User?   @relation(fields: [authorId], references: [id], onDelete: Cascade)
      authorId String?
    }

    /// @crudAuth: {"readOne":"public","readMany":"public","count":"public","create":"public","update":"public","delete":"public"}
    model Equipment {
      id    Int    @id @default(autoincrement())
      label String
    }

    enum Role {
      Admin
      User
    }
    """
)


@pytest.fixture
def sample_schema() -> str:
    """Return a schema with annotated and unannotated models."""
    return SAMPLE_SCHEMA


@pytest.fixture
def make_model():
    """Return a factory for ModelRecords with derived names filled in."""

    def _make(name: str, auth: AuthPolicy | None = None, plural: str | None = None) -> ModelRecord:
        plural = plural or f"{name}s"
        return ModelRecord(
            name=name,
            plural_name=plural,
            model_property_name=name[0].lower() + name[1:],
            plural_model_property_name=plural[0].lower() + plural[1:],
            auth=auth,
        )

    return _make


@pytest.fixture
def project_dir(tmp_path: Path, sample_schema: str) -> Path:
    """Create a workspace with package.json and a schema file."""
    (tmp_path / "package.json").write_text(
        '{"name": "@acme/source", "prisma": {"schema": "libs/api/prisma/schema.prisma"}}'
    )
    schema_file = tmp_path / "libs" / "api" / "prisma" / "schema.prisma"
    schema_file.parent.mkdir(parents=True)
    schema_file.write_text(sample_schema)
    return tmp_path
