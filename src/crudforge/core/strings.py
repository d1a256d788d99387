"""
String utility functions for crudforge.

Provides the pluralization policy and the case conversions used to derive
generated identifiers and file names from model names.
"""

from __future__ import annotations

import re

# Irregular plurals that don't follow standard rules
_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "foot": "feet",
    "tooth": "teeth",
    "goose": "geese",
    "mouse": "mice",
    "ox": "oxen",
    "datum": "data",
    "medium": "media",
    "criterion": "criteria",
    "phenomenon": "phenomena",
    "index": "indices",
    "appendix": "appendices",
    "matrix": "matrices",
    "vertex": "vertices",
    # Common domain-specific terms
    "status": "statuses",
    "address": "addresses",
}

# Nouns whose plural is the singular
_UNCOUNTABLE = frozenset(
    {
        "aircraft",
        "data",
        "deer",
        "equipment",
        "feedback",
        "fish",
        "furniture",
        "hardware",
        "information",
        "knowledge",
        "luggage",
        "media",
        "metadata",
        "money",
        "moose",
        "news",
        "police",
        "rice",
        "series",
        "sheep",
        "software",
        "species",
        "staff",
        "traffic",
    }
)

_WORD_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")
_KEBAB_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def is_uncountable(word: str) -> bool:
    """Check whether the last word of a (CamelCase) name is uncountable."""
    camel_match = re.match(r"^(.+)([A-Z][a-z]+)$", word)
    if camel_match:
        word = camel_match.group(2)
    return word.lower() in _UNCOUNTABLE


def pluralize(word: str) -> str:
    """
    Convert a singular English word to its plural form.

    Handles common English pluralization rules including:
    - Words ending in -y (policy -> policies, but key -> keys)
    - Words ending in -s, -x, -z, -ch, -sh (bus -> buses)
    - Words ending in -f/-fe (leaf -> leaves)
    - Irregular plurals (person -> people)
    - Uncountable nouns, returned unchanged (equipment -> equipment)

    Args:
        word: Singular word to pluralize

    Returns:
        Plural form of the word

    Examples:
        >>> pluralize("Task")
        'Tasks'
        >>> pluralize("Policy")
        'Policies'
        >>> pluralize("UserEquipment")
        'UserEquipment'
    """
    if not word:
        return word

    lower_word = word.lower()

    if is_uncountable(word):
        return word

    if lower_word in _IRREGULAR_PLURALS:
        plural = _IRREGULAR_PLURALS[lower_word]
        # Preserve original capitalization pattern
        if word[0].isupper():
            return plural.capitalize()
        return plural

    # Handle CamelCase - pluralize only the last word
    # e.g., BlogPost -> Blog + Post -> Blog + Posts
    camel_match = re.match(r"^(.+)([A-Z][a-z]+)$", word)
    if camel_match:
        prefix, last_word = camel_match.groups()
        if prefix and last_word != word:
            return prefix + pluralize(last_word)

    if lower_word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    elif lower_word.endswith("y"):
        if len(word) > 1 and lower_word[-2] in "aeiou":
            # key -> keys, day -> days
            return word + "s"
        return word[:-1] + "ies"
    elif lower_word.endswith("f"):
        if lower_word.endswith(("elf", "alf", "olf", "eaf", "oaf", "arf")):
            return word[:-1] + "ves"
        return word + "s"
    elif lower_word.endswith("fe"):
        return word[:-2] + "ves"
    elif lower_word.endswith("o"):
        if lower_word.endswith(("hero", "potato", "tomato", "echo", "veto")):
            return word + "es"
        return word + "s"
    else:
        return word + "s"


def plural_name(name: str) -> str:
    """
    Plural form used for generated list identifiers.

    When the plural equals the singular the name gets a ``List`` suffix so
    the list operation never collides with the single-item one.

    Examples:
        >>> plural_name("User")
        'Users'
        >>> plural_name("Equipment")
        'EquipmentList'
    """
    if not name:
        raise ValueError("plural_name: name must be a non-empty string")
    plural = pluralize(name)
    return name + "List" if plural == name else plural


def lower_first(name: str) -> str:
    """Lowercase the first character (``BlogPost`` -> ``blogPost``)."""
    return name[:1].lower() + name[1:]


def pascal_case(name: str) -> str:
    """
    Convert a separated or single word to PascalCase.

    Any run of non-alphanumeric characters separates words.

    Each part is lowercased before its first letter is capitalized.

    Examples:
        >>> pascal_case("content_editor")
        'ContentEditor'
        >>> pascal_case("EDITOR")
        'Editor'
    """
    return "".join(part.capitalize() for part in _WORD_SEPARATORS.split(name) if part)


def kebab_case(name: str) -> str:
    """
    Convert PascalCase/camelCase to kebab-case.

    Examples:
        >>> kebab_case("UserProfile")
        'user-profile'
    """
    return _KEBAB_BOUNDARY.sub(r"\1-\2", name).lower()
