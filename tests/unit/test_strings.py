"""Tests for pluralization and case conversion."""

import pytest

from crudforge.core.strings import (
    is_uncountable,
    kebab_case,
    lower_first,
    pascal_case,
    plural_name,
    pluralize,
)


class TestPluralize:
    """Tests for pluralize()."""

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("Task", "Tasks"),
            ("Policy", "Policies"),
            ("Key", "Keys"),
            ("Box", "Boxes"),
            ("Leaf", "Leaves"),
            ("Person", "People"),
            ("BlogPost", "BlogPosts"),
            ("ProductCategory", "ProductCategories"),
            ("Address", "Addresses"),
        ],
    )
    def test_plural_forms(self, word: str, expected: str) -> None:
        assert pluralize(word) == expected

    def test_uncountable_unchanged(self) -> None:
        """Uncountable nouns keep their form, also as the last CamelCase word."""
        assert pluralize("Equipment") == "Equipment"
        assert pluralize("UserEquipment") == "UserEquipment"
        assert is_uncountable("SensorData")
        assert pluralize("SensorData") == "SensorData"

    def test_empty(self) -> None:
        assert pluralize("") == ""


class TestPluralName:
    """Tests for plural_name()."""

    def test_regular(self) -> None:
        assert plural_name("User") == "Users"

    def test_uncountable_gets_list_suffix(self) -> None:
        assert plural_name("Equipment") == "EquipmentList"
        assert plural_name("News") == "NewsList"

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            plural_name("")


class TestCaseConversion:
    """Tests for case helpers."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("User", "user"),
            ("UserProfile", "user-profile"),
            ("OAuthToken", "oauth-token"),
            ("Post2Tag", "post2-tag"),
        ],
    )
    def test_kebab_case(self, name: str, expected: str) -> None:
        assert kebab_case(name) == expected

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("editor", "Editor"),
            ("content_editor", "ContentEditor"),
            ("content-editor", "ContentEditor"),
            ("EDITOR", "Editor"),
            ("  billing  team ", "BillingTeam"),
            ("___", ""),
        ],
    )
    def test_pascal_case(self, name: str, expected: str) -> None:
        assert pascal_case(name) == expected

    def test_lower_first(self) -> None:
        assert lower_first("BlogPost") == "blogPost"
        assert lower_first("") == ""
