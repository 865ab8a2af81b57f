"""Tests for the action descriptor table."""

from __future__ import annotations

import pytest

from storegen.scaffolder.descriptors import (
    ACTION_DESCRIPTORS,
    DESCRIPTORS_BY_KEY,
    descriptors_for,
    member_name,
)

pytestmark = pytest.mark.unit


class TestDescriptorTable:
    def test_keys_are_unique(self):
        keys = [d.key for d in ACTION_DESCRIPTORS]
        assert len(keys) == len(set(keys)) == len(DESCRIPTORS_BY_KEY)

    def test_only_role_operations_are_auth_only(self):
        auth_only = {d.key for d in ACTION_DESCRIPTORS if d.auth_only}
        assert auth_only == {"assignRoles", "revokeRoles"}

    def test_plain_collection_gets_eleven_operations(self):
        assert len(descriptors_for(False)) == 11

    def test_auth_collection_gets_every_operation_in_table_order(self):
        assert descriptors_for(True) == list(ACTION_DESCRIPTORS)

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("fetchInitialPage", "fetchInitialPageProducts"),
            ("fetchNextPage", "fetchNextPageProducts"),
            ("applyFilters", "applyProductsFilters"),
            ("changeSorting", "changeProductsSorting"),
            ("add", "addProducts"),
            ("get", "getProducts"),
            ("getWhere", "getWhereProducts"),
            ("update", "updateProducts"),
            ("search", "searchProducts"),
            ("clearSearch", "clearProductsSearch"),
            ("remove", "deleteProducts"),
            ("assignRoles", "assignProductsRoles"),
            ("revokeRoles", "revokeProductsRoles"),
        ],
    )
    def test_member_names(self, key, expected):
        assert member_name(key, "Products") == expected

    def test_summary_mentions_collection(self):
        assert "client-submissions" in DESCRIPTORS_BY_KEY["add"].summary("client-submissions")

    def test_role_summary_lowercases_collection(self):
        assert DESCRIPTORS_BY_KEY["assignRoles"].summary("Users") == "Assigns roles to a users user."

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            member_name("archive", "Products")
