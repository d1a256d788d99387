"""
Unit tests for resolver synthesis.

Tests operation order, guard placement and imports, and that output is
deterministic for unchanged input.
"""

import pytest

from crudforge.core.extractor import build_models
from crudforge.core.ir import AuthPolicy, CrudOperation
from crudforge.generate.config import CrudConfig
from crudforge.generate.resolver import render_operation, synthesize_resolver


def _methods_in_order(source: str, names: list[str]) -> bool:
    positions = [source.index(f"  {name}(\n") for name in names]
    return positions == sorted(positions)


class TestSynthesizeResolver:
    """Tests for synthesize_resolver()."""

    @pytest.fixture
    def user_source(self, sample_schema: str) -> str:
        user = build_models(sample_schema)[0]
        return synthesize_resolver(user)

    def test_class_and_imports(self, user_source: str) -> None:
        assert "@Resolver(() => User)\nexport class GeneratedUserResolver {" in user_source
        assert "import { User } from '@app/api/core/models'" in user_source
        assert "import { CorePaging } from '@app/api/core/data-access'" in user_source
        assert "} from '@app/api/generated-crud/data-access'" in user_source
        assert "  CreateUserInput,\n  ListUserInput,\n  UpdateUserInput,\n" in user_source
        assert user_source.endswith("}\n")

    def test_operations_in_fixed_order(self, user_source: str) -> None:
        assert _methods_in_order(
            user_source, ["users", "usersCount", "user", "createUser", "updateUser", "deleteUser"]
        )

    def test_guard_imports_sorted_and_distinct(self, user_source: str) -> None:
        assert (
            "import { GqlAuthAdminGuard, GqlAuthContentEditorGuard, GqlAuthGuard } "
            "from '@app/api/custom'"
        ) in user_source

    def test_guards_per_operation(self, user_source: str) -> None:
        assert user_source.count("@UseGuards(GqlAuthAdminGuard)") == 3
        assert user_source.count("@UseGuards(GqlAuthGuard)") == 1
        assert user_source.count("@UseGuards(GqlAuthContentEditorGuard)") == 1
        assert "@UseGuards(GqlAuthContentEditorGuard)\n  createUser(" in user_source

    def test_public_operation_has_no_guard_line(self, user_source: str) -> None:
        assert "@Query(() => User, { nullable: true })\n  user(\n" in user_source

    def test_fully_public_model_imports_no_guards(self, sample_schema: str) -> None:
        equipment = build_models(sample_schema)[2]
        source = synthesize_resolver(equipment)
        assert "UseGuards" not in source
        assert "@app/api/custom" not in source
        assert "  equipmentList(\n" in source
        assert "  equipmentListCount(\n" in source

    def test_model_without_auth_is_admin_everywhere(self, make_model) -> None:
        source = synthesize_resolver(make_model("Post"))
        assert source.count("@UseGuards(GqlAuthAdminGuard)") == 6
        assert "import { GqlAuthAdminGuard } from '@app/api/custom'" in source

    def test_deterministic(self, sample_schema: str) -> None:
        first = [synthesize_resolver(m) for m in build_models(sample_schema)]
        second = [synthesize_resolver(m) for m in build_models(sample_schema)]
        assert first == second

    def test_config_paths(self, make_model) -> None:
        config = CrudConfig(
            name="crud",
            npm_scope="acme",
            guard_import="@{scope}/api/auth/guards",
        )
        source = synthesize_resolver(make_model("Post"), config)
        assert "from '@acme/api/crud/data-access'" in source
        assert "from '@acme/api/auth/guards'" in source
        assert "from '@acme/api/core/models'" in source

    def test_custom_guard_naming(self, make_model) -> None:
        config = CrudConfig.model_validate({"guards": {"admin": "AdminOnlyGuard"}})
        source = synthesize_resolver(make_model("Post"), config)
        assert "@UseGuards(AdminOnlyGuard)" in source


class TestRenderOperation:
    """Tests for single-operation rendering."""

    def test_read_many(self, make_model) -> None:
        text = render_operation(make_model("Post"), CrudOperation.READ_MANY, "GqlAuthGuard")
        assert text.split("\n") == [
            "  @Query(() => [Post], { nullable: true })",
            "  @UseGuards(GqlAuthGuard)",
            "  posts(",
            "    @Info() info: GraphQLResolveInfo,",
            "    @Args({ name: 'input', type: () => ListPostInput, nullable: true }) input?: ListPostInput,",
            "  ) {",
            "    return this.service.posts(info, input)",
            "  }",
        ]

    def test_count(self, make_model) -> None:
        text = render_operation(make_model("Post"), CrudOperation.COUNT, None)
        assert text.startswith("  @Query(() => CorePaging, { nullable: true })\n  postsCount(\n")
        assert "return this.service.postsCount(input)" in text
        assert "@Info()" not in text

    def test_update(self, make_model) -> None:
        text = render_operation(make_model("BlogPost"), CrudOperation.UPDATE, "GqlAuthAdminGuard")
        assert "  @Mutation(() => BlogPost, { nullable: true })\n" in text
        assert "    @Args('blogPostId') blogPostId: string,\n" in text
        assert "    @Args('input') input: UpdateBlogPostInput,\n" in text
        assert "return this.service.updateBlogPost(info, blogPostId, input)" in text

    def test_delete(self, make_model) -> None:
        text = render_operation(make_model("Post"), CrudOperation.DELETE, None)
        assert "  deletePost(\n    @Args('postId') postId: string,\n  ) {" in text
        assert "return this.service.deletePost(postId)" in text

    def test_policy_merge_keeps_default_levels(self, make_model) -> None:
        """Operations the annotation omits keep the admin guard."""
        policy = AuthPolicy().merged({"readOne": "public"})
        source = synthesize_resolver(make_model("Post", auth=policy))
        assert source.count("@UseGuards(GqlAuthAdminGuard)") == 5
