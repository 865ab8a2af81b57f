"""Naming helpers used to derive JavaScript identifiers from collection names."""

from __future__ import annotations

import json
import re

COLLECTION_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")

_SEPARATORS = re.compile(r"[-\s_]+")
_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def to_identifier_case(text: str) -> str:
    """Convert separator-delimited text to lowerCamelCase.

    Everything is lowercased before the tokens after the first are
    re-capitalised, so internal capitals are *not* preserved::

        to_identifier_case("client-submissions") -> "clientSubmissions"
        to_identifier_case("Client Submissions") -> "clientSubmissions"
        to_identifier_case("Products")           -> "products"

    The empty string maps to itself.
    """
    tokens = _SEPARATORS.split(text.strip().lower())
    return "".join(
        token if i == 0 else capitalize_first(token)
        for i, token in enumerate(tokens)
    )


def capitalize_first(text: str) -> str:
    """Upper-case the first character and leave the rest untouched.

    Unlike ``str.capitalize`` this keeps internal capitals:
    ``capitalize_first("clientSubmissions") == "ClientSubmissions"``.
    """
    return text[:1].upper() + text[1:]


def collection_suffix(name: str) -> str:
    """PascalCase suffix used to build every member name of a collection."""
    return capitalize_first(to_identifier_case(name))


def is_valid_collection_name(name: str) -> bool:
    """Return ``True`` if *name* is an identifier-safe collection name."""
    return bool(COLLECTION_NAME_PATTERN.match(name))


def js_property_key(name: str) -> str:
    """Render *name* as an object-literal key, quoting it when required."""
    if _JS_IDENTIFIER.match(name):
        return name
    return js_string(name)


def js_string(value: str) -> str:
    """Render *value* as a single-quoted JavaScript string literal."""
    inner = json.dumps(value, ensure_ascii=False)[1:-1]
    return "'" + inner.replace("\\\"", "\"").replace("'", "\\'") + "'"


def to_pascal_case(text: str) -> str:
    """Join separator-delimited tokens, capitalising each one.

    Internal capitals survive: ``to_pascal_case("appStore") == "AppStore"``
    and ``to_pascal_case("my-shop") == "MyShop"``.
    """
    return "".join(capitalize_first(token) for token in _SEPARATORS.split(text.strip()))
