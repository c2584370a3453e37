"""
Name variant derivation for templates.

Every generated file is rendered with the same set of casing and
pluralization variants of the entity name given on the command line.
Pluralization rules come from the ``inflection`` package; word splitting
and case conversion are done here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import inflection

_SEPARATOR_PATTERN = re.compile(r"[\W_]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots, spaces) to single spaces."""
    return _SEPARATOR_PATTERN.sub(" ", text)


def _split_camel_case(chunk: str) -> list[str]:
    """Split one separator-free chunk at its case boundaries.

    A word starts at an uppercase letter that follows a lowercase letter or a
    digit, or at the last capital of an acronym run ("HTTPServer" -> "HTTP",
    "Server"). Digits stay attached to the word they follow ("oauth2Client" ->
    "oauth2", "Client").
    """
    words = []
    start = 0
    for i in range(1, len(chunk)):
        if not chunk[i].isupper():
            continue
        previous = chunk[i - 1]
        following = chunk[i + 1 : i + 2]
        if previous.islower() or previous.isdigit() or (previous.isupper() and following.islower()):
            words.append(chunk[start:i])
            start = i
    words.append(chunk[start:])
    return words


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return [word for chunk in _normalize_separators(text).split() for word in _split_camel_case(chunk)]


def pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case, camelCase or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "foo-bar" -> "FooBar"
        "fooBar" -> "FooBar"
        "foo_barBaz" -> "FooBarBaz"
        "HTTPServer" -> "HttpServer"
    """
    return "".join(word.capitalize() for word in _split_into_words(text))


def camel_case(text: str) -> str:
    """Convert any casing style to lowerCamelCase ("foo_bar" -> "fooBar")."""
    words = _split_into_words(text)
    if not words:
        return ""
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def param_case(text: str) -> str:
    """Convert any casing style to hyphenated lower case ("FooBar" -> "foo-bar")."""
    return "-".join(word.lower() for word in _split_into_words(text))


def constant_case(text: str) -> str:
    """Convert any casing style to upper snake case ("FooBar" -> "FOO_BAR")."""
    return "_".join(word.upper() for word in _split_into_words(text))


def pluralize(text: str) -> str:
    if not text:
        return ""
    return inflection.pluralize(text)


def singularize(text: str) -> str:
    if not text:
        return ""
    return inflection.singularize(text)


@dataclass(frozen=True)
class NameVariants:
    """Casing and pluralization variants of one entity name.

    For the name "fooBar":

        pascal_name: FooBar
        camel_name: fooBar
        singular_pascal_name: FooBar
        plural_pascal_name: FooBars
        singular_camel_name: fooBar
        plural_camel_name: fooBars
        singular_param_name: foo-bar
        plural_param_name: foo-bars
        singular_constant_name: FOO_BAR
        plural_constant_name: FOO_BARS
    """

    pascal_name: str
    camel_name: str
    singular_pascal_name: str
    plural_pascal_name: str
    singular_camel_name: str
    plural_camel_name: str
    singular_param_name: str
    plural_param_name: str
    singular_constant_name: str
    plural_constant_name: str

    def to_dict(self) -> dict[str, str]:
        """Return the variants keyed by the names templates refer to."""
        return {
            "pascalName": self.pascal_name,
            "camelName": self.camel_name,
            "singularPascalName": self.singular_pascal_name,
            "pluralPascalName": self.plural_pascal_name,
            "singularCamelName": self.singular_camel_name,
            "pluralCamelName": self.plural_camel_name,
            "singularParamName": self.singular_param_name,
            "pluralParamName": self.plural_param_name,
            "singularConstantName": self.singular_constant_name,
            "pluralConstantName": self.plural_constant_name,
        }


def name_variants(name: str) -> NameVariants:
    """Derive every name variant used by the templates.

    The name is first normalized to its singular PascalCase form, so that
    "user_profiles", "userProfile" and "user-profile" all share the same
    singular and plural variants. Only ``pascal_name`` and ``camel_name`` are
    derived from the name exactly as given.

    Args:
        name: Entity name in any casing style, singular or plural

    Returns:
        The ten name variants (all empty strings for an empty name)
    """
    normalized_name = pascal_case(param_case(singularize(name)))
    plural_name = pluralize(normalized_name)

    return NameVariants(
        pascal_name=pascal_case(name),
        camel_name=camel_case(name),
        singular_pascal_name=normalized_name,
        plural_pascal_name=plural_name,
        singular_camel_name=camel_case(normalized_name),
        plural_camel_name=camel_case(plural_name),
        singular_param_name=param_case(normalized_name),
        plural_param_name=param_case(plural_name),
        singular_constant_name=constant_case(normalized_name),
        plural_constant_name=constant_case(plural_name),
    )
