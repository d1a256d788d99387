"""Tests for the aggregate module and index barrel."""

from crudforge.generate.config import CrudConfig
from crudforge.generate.module import synthesize_index, synthesize_module


def test_module_registers_every_resolver(make_model):
    models = [make_model("User"), make_model("UserProfile"), make_model("Post")]
    text = synthesize_module(models)

    assert "import { Module } from '@nestjs/common'" in text
    assert "import { ApiCrudDataAccessModule } from '@app/api/generated-crud/data-access'" in text
    assert "import { GeneratedUserProfileResolver } from './user-profile.resolver'" in text
    assert "  imports: [ApiCrudDataAccessModule],\n" in text
    assert (
        "  providers: [\n"
        "    GeneratedUserResolver,\n"
        "    GeneratedUserProfileResolver,\n"
        "    GeneratedPostResolver,\n"
        "  ],\n"
    ) in text
    assert text.endswith("export class ApiGeneratedCrudFeatureModule {}\n")


def test_module_keeps_input_order(make_model):
    text = synthesize_module([make_model("Zebra"), make_model("Apple")])
    assert text.index("GeneratedZebraResolver") < text.index("GeneratedAppleResolver")


def test_module_without_models(make_model):
    assert "  providers: [],\n" in synthesize_module([])


def test_index_lines(make_model):
    text = synthesize_index([make_model("User"), make_model("BlogPost")])
    lines = text.splitlines()
    assert lines[1:] == [
        "export * from './lib/api-generated-crud-feature.module'",
        "export * from './lib/user.resolver'",
        "export * from './lib/blog-post.resolver'",
    ]


def test_configured_library_name(make_model):
    config = CrudConfig(name="admin-crud", npm_scope="acme")
    module = synthesize_module([make_model("User")], config)
    index = synthesize_index([make_model("User")], config)
    assert "export class ApiAdminCrudFeatureModule {}" in module
    assert "from '@acme/api/admin-crud/data-access'" in module
    assert "export * from './lib/api-admin-crud-feature.module'" in index


def test_deterministic(make_model):
    models = [make_model("User"), make_model("Post")]
    assert synthesize_module(models) == synthesize_module(models)
    assert synthesize_index(models) == synthesize_index(models)
