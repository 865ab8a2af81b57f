"""The action descriptor table.

Each ``OperationDescriptor`` names one capability of the shared Firestore
actions factory and knows how to derive, for any collection, the exported
member name and its documentation.  The per-collection composer, the store
index composer and the store guide all read this table; adding a capability
means adding one entry here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class OperationDescriptor:
    """One forwarded capability of a collection action set."""

    key: str
    name_template: Callable[[str], str]
    doc_template: Callable[[str], str]
    signature: str = "()"
    guide_note: str = ""
    auth_only: bool = False

    def member_name(self, suffix: str) -> str:
        """Exported member name for the PascalCase collection *suffix*."""
        return self.name_template(suffix)

    def summary(self, collection_name: str) -> str:
        """One-line documentation mentioning *collection_name*."""
        return self.doc_template(collection_name)


ACTION_DESCRIPTORS: tuple[OperationDescriptor, ...] = (
    OperationDescriptor(
        key="fetchInitialPage",
        name_template=lambda s: f"fetchInitialPage{s}",
        doc_template=lambda n: f"Fetches the first page of {n} with optional filters and sorting.",
        signature="(options)",
        guide_note="Initial query (uses Firestore's `query()`)",
    ),
    OperationDescriptor(
        key="fetchNextPage",
        name_template=lambda s: f"fetchNextPage{s}",
        doc_template=lambda n: f"Fetches the next page of {n} (pagination).",
        guide_note="Pagination (uses `startAfter()`)",
    ),
    OperationDescriptor(
        key="applyFilters",
        name_template=lambda s: f"apply{s}Filters",
        doc_template=lambda n: f"Applies filters to the {n} collection query.",
        signature="(filters)",
        guide_note="Converts to Firestore `where()` clauses",
    ),
    OperationDescriptor(
        key="changeSorting",
        name_template=lambda s: f"change{s}Sorting",
        doc_template=lambda n: f"Changes the sorting of the {n} collection.",
        signature="(field, direction)",
        guide_note="Updates `orderBy()`",
    ),
    OperationDescriptor(
        key="add",
        name_template=lambda s: f"add{s}",
        doc_template=lambda n: f"Adds a new {n} document to the collection.",
        signature="(data)",
        guide_note="Uses Firestore `addDoc()` (`setDoc()` keyed by uid for auth collections)",
    ),
    OperationDescriptor(
        key="get",
        name_template=lambda s: f"get{s}",
        doc_template=lambda n: f"Gets a {n} document by ID.",
        signature="(id)",
        guide_note="Uses Firestore `getDoc()`",
    ),
    OperationDescriptor(
        key="getWhere",
        name_template=lambda s: f"getWhere{s}",
        doc_template=lambda n: f"Gets {n} documents matching a condition, e.g. clientId == 'xxx'.",
        signature="(field, operator, value)",
        guide_note="Uses Firestore `where()`; results land in `specificItems`",
    ),
    OperationDescriptor(
        key="update",
        name_template=lambda s: f"update{s}",
        doc_template=lambda n: f"Updates an existing {n} document.",
        signature="(id, data)",
        guide_note="Uses Firestore `updateDoc()`",
    ),
    OperationDescriptor(
        key="search",
        name_template=lambda s: f"search{s}",
        doc_template=lambda n: f"Searches {n} documents by a term and optional field.",
        signature="(term, field)",
        guide_note="Prefix search with `where()` range constraints",
    ),
    OperationDescriptor(
        key="clearSearch",
        name_template=lambda s: f"clear{s}Search",
        doc_template=lambda n: f"Clears the current {n} search results.",
        guide_note="Resets the local search state",
    ),
    OperationDescriptor(
        key="remove",
        name_template=lambda s: f"delete{s}",
        doc_template=lambda n: f"Deletes a {n} document by ID.",
        signature="(id)",
        guide_note="Uses Firestore `deleteDoc()`",
    ),
    OperationDescriptor(
        key="assignRoles",
        name_template=lambda s: f"assign{s}Roles",
        doc_template=lambda n: f"Assigns roles to a {n.lower()} user.",
        signature="(userId, roles)",
        guide_note="Replaces the user's `roles` array",
        auth_only=True,
    ),
    OperationDescriptor(
        key="revokeRoles",
        name_template=lambda s: f"revoke{s}Roles",
        doc_template=lambda n: f"Revokes roles from a {n.lower()} user.",
        signature="(userId, roles)",
        guide_note="Removes the given entries from the user's `roles` array",
        auth_only=True,
    ),
)

DESCRIPTORS_BY_KEY: dict[str, OperationDescriptor] = {d.key: d for d in ACTION_DESCRIPTORS}


def descriptors_for(is_auth_collection: bool) -> list[OperationDescriptor]:
    """Descriptors that apply to a collection, in table order."""
    return [d for d in ACTION_DESCRIPTORS if is_auth_collection or not d.auth_only]


def member_name(key: str, suffix: str) -> str:
    """Exported member name of capability *key* for collection *suffix*."""
    return DESCRIPTORS_BY_KEY[key].member_name(suffix)
