"""Pydantic v2 models describing one store generation run.

A run is a ``StoreRequest``: the store name, the ordered list of
``CollectionSpec`` entries and the ``GenerationFlags`` shared by every
composer.  Every model is frozen; composers receive them and produce
``ComposedModule`` values without mutating anything.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storegen.config import DEFAULT_AUTH_COLLECTION_NOUNS
from storegen.errors import InputError, InvalidCollectionNameError
from storegen.naming import (
    collection_suffix,
    is_valid_collection_name,
    to_identifier_case,
    to_pascal_case,
)


SHARED_STATE_KEYS: frozenset[str] = frozenset(
    {
        "loading",
        "error",
        "authInitialized",
        "currentUser",
        "emailVerificationSent",
        "recentActivity",
    }
)
"""Store-wide state fields in state.js; a collection may not reuse one as its key."""


# ---------------------------------------------------------------------------
# Auth collection classification
# ---------------------------------------------------------------------------


class AuthCollectionClassifier:
    """Decides whether a collection holds authenticated principals.

    The vocabulary is injectable so projects with their own naming (e.g.
    ``"members"``) can opt in without touching the generators.  Matching is
    case-insensitive and exact.
    """

    def __init__(self, nouns: Iterable[str] | None = None) -> None:
        source = DEFAULT_AUTH_COLLECTION_NOUNS if nouns is None else nouns
        self.nouns = frozenset(n.strip().lower() for n in source if n.strip())

    def __call__(self, name: str) -> bool:
        return name.strip().lower() in self.nouns


# ---------------------------------------------------------------------------
# Collection and flags
# ---------------------------------------------------------------------------


class CollectionSpec(BaseModel):
    """One Firestore collection to generate actions for."""

    model_config = ConfigDict(frozen=True)

    raw_name: str = Field(..., description="Collection name exactly as used in Firestore")
    is_auth_collection: bool = Field(default=False)

    @field_validator("raw_name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not is_valid_collection_name(value):
            raise InvalidCollectionNameError(value)
        return value

    @property
    def suffix(self) -> str:
        """PascalCase suffix shared by every member generated for the collection."""
        return collection_suffix(self.raw_name)

    @property
    def binding(self) -> str:
        """Name of the action-set variable in the store index (``productsActions``)."""
        return f"{to_identifier_case(self.raw_name)}Actions"

    @property
    def factory_name(self) -> str:
        """Exported factory of the per-collection module (``useProductsActions``)."""
        return f"use{self.suffix}Actions"


class GenerationFlags(BaseModel):
    """Switches shared by every composer in a run."""

    model_config = ConfigDict(frozen=True)

    add_activity_logging: bool = Field(default=False)
    roles: tuple[str, ...] = Field(default=())

    @field_validator("roles")
    @classmethod
    def _dedupe_roles(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for role in value:
            role = role.strip()
            if role:
                seen.setdefault(role, None)
        return tuple(seen)


# ---------------------------------------------------------------------------
# Run description
# ---------------------------------------------------------------------------


class StoreRequest(BaseModel):
    """Everything needed to generate one store."""

    model_config = ConfigDict(frozen=True)

    store_name: str
    collections: tuple[CollectionSpec, ...]
    flags: GenerationFlags = Field(default_factory=GenerationFlags)

    @field_validator("store_name")
    @classmethod
    def _check_store_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise InputError("Store name is required")
        if not is_valid_collection_name(value):
            raise InputError(f"Invalid store name: {value!r}")
        return value

    @field_validator("collections")
    @classmethod
    def _check_collections(
        cls, value: tuple[CollectionSpec, ...]
    ) -> tuple[CollectionSpec, ...]:
        if not value:
            raise InputError("At least one collection is required")
        names = [c.raw_name for c in value]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise InputError(f"Duplicate collection name: {', '.join(duplicates)}")

        reserved = [n for n in names if n in SHARED_STATE_KEYS]
        if reserved:
            raise InputError(
                f"Collection name clashes with shared store state: {', '.join(reserved)}"
            )

        # Case and separator style fold into one suffix, so these would
        # redeclare the same bindings in index.js.
        by_suffix: dict[str, list[str]] = {}
        for spec in value:
            by_suffix.setdefault(spec.suffix, []).append(spec.raw_name)
        clashes = [group for group in by_suffix.values() if len(group) > 1]
        if clashes:
            detail = "; ".join(", ".join(group) for group in clashes)
            raise InputError(f"Collections map to the same generated names: {detail}")
        return value

    @classmethod
    def build(
        cls,
        store_name: str,
        collection_names: Iterable[str],
        *,
        roles: Iterable[str] = (),
        add_activity_logging: bool = False,
        classifier: Optional[Callable[[str], bool]] = None,
    ) -> "StoreRequest":
        """Validate raw answers and assemble a request.

        Every invalid collection name is reported at once, before anything
        is generated.
        """
        classify = classifier or AuthCollectionClassifier()
        names = [n.strip() for n in collection_names if n.strip()]
        invalid = [n for n in names if not is_valid_collection_name(n)]
        if invalid:
            raise InvalidCollectionNameError(invalid)

        collections = tuple(
            CollectionSpec(raw_name=n, is_auth_collection=classify(n)) for n in names
        )
        has_auth = any(c.is_auth_collection for c in collections)
        flags = GenerationFlags(
            roles=tuple(roles) if has_auth else (),
            add_activity_logging=add_activity_logging and has_auth,
        )
        return cls(store_name=store_name, collections=collections, flags=flags)

    # -- Derived views ----------------------------------------------------

    @property
    def auth_collections(self) -> list[CollectionSpec]:
        """Auth collections, in input order."""
        return [c for c in self.collections if c.is_auth_collection]

    @property
    def primary_auth_collection(self) -> Optional[CollectionSpec]:
        """First auth collection; backs profile merges during auth flows."""
        auth = self.auth_collections
        return auth[0] if auth else None

    @property
    def store_pascal(self) -> str:
        """PascalCase store name used in exported identifiers."""
        return to_pascal_case(self.store_name)


# ---------------------------------------------------------------------------
# Output artifact
# ---------------------------------------------------------------------------


class ComposedModule(BaseModel):
    """A fully composed file, relative to the store directory."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
