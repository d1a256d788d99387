"""Tests for generated identifier naming."""

from crudforge.core.ir import CrudOperation
from crudforge.generate.naming import (
    id_argument_name,
    operation_names,
    resolver_class_name,
    resolver_module_name,
)


def test_operation_names(make_model):
    names = operation_names(make_model("BlogPost"))
    assert list(names) == list(CrudOperation)
    assert list(names.values()) == [
        "blogPosts",
        "blogPostsCount",
        "blogPost",
        "createBlogPost",
        "updateBlogPost",
        "deleteBlogPost",
    ]


def test_uncountable_operation_names(make_model):
    names = operation_names(make_model("Equipment", plural="EquipmentList"))
    assert names[CrudOperation.READ_MANY] == "equipmentList"
    assert names[CrudOperation.COUNT] == "equipmentListCount"
    assert names[CrudOperation.READ_ONE] == "equipment"


def test_resolver_names(make_model):
    model = make_model("UserProfile")
    assert resolver_class_name(model) == "GeneratedUserProfileResolver"
    assert resolver_module_name(model) == "user-profile.resolver"
    assert id_argument_name(model) == "userProfileId"
