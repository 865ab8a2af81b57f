"""Tests for the store request models.

Covers:
- AuthCollectionClassifier default and injected vocabularies
- CollectionSpec derived names and validation
- GenerationFlags role de-duplication
- StoreRequest.build validation and auth gating of flags
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from storegen.errors import InputError, InvalidCollectionNameError
from storegen.scaffolder.models import (
    AuthCollectionClassifier,
    CollectionSpec,
    GenerationFlags,
    StoreRequest,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# AuthCollectionClassifier
# ---------------------------------------------------------------------------


class TestAuthCollectionClassifier:
    @pytest.mark.parametrize("name", ["users", "Users", "customers", "admin", " accounts "])
    def test_default_vocabulary(self, name):
        assert AuthCollectionClassifier()(name)

    @pytest.mark.parametrize("name", ["products", "userProfiles", "orders"])
    def test_non_auth(self, name):
        assert not AuthCollectionClassifier()(name)

    def test_injected_vocabulary_replaces_default(self):
        classify = AuthCollectionClassifier(["members"])
        assert classify("Members")
        assert not classify("users")

    def test_empty_vocabulary(self):
        assert not AuthCollectionClassifier([])("users")


# ---------------------------------------------------------------------------
# CollectionSpec
# ---------------------------------------------------------------------------


class TestCollectionSpec:
    def test_derived_names(self):
        spec = CollectionSpec(raw_name="client-submissions")
        assert spec.suffix == "ClientSubmissions"
        assert spec.binding == "clientSubmissionsActions"
        assert spec.factory_name == "useClientSubmissionsActions"

    def test_invalid_name(self):
        with pytest.raises(InvalidCollectionNameError) as exc_info:
            CollectionSpec(raw_name="bad name")
        assert exc_info.value.names == ["bad name"]

    def test_frozen(self):
        spec = CollectionSpec(raw_name="products")
        with pytest.raises(ValidationError):
            spec.raw_name = "orders"


class TestGenerationFlags:
    def test_defaults(self):
        flags = GenerationFlags()
        assert flags.roles == ()
        assert flags.add_activity_logging is False

    def test_roles_deduplicated_in_order(self):
        flags = GenerationFlags(roles=("admin", " editor", "admin", "", "user"))
        assert flags.roles == ("admin", "editor", "user")


# ---------------------------------------------------------------------------
# StoreRequest
# ---------------------------------------------------------------------------


class TestStoreRequestBuild:
    def test_plain_request(self, shop_request):
        assert shop_request.store_name == "shop"
        assert [c.raw_name for c in shop_request.collections] == ["products", "orders"]
        assert shop_request.auth_collections == []
        assert shop_request.primary_auth_collection is None
        assert shop_request.store_pascal == "Shop"

    def test_auth_request(self, auth_request):
        assert [c.raw_name for c in auth_request.auth_collections] == ["users"]
        assert auth_request.primary_auth_collection.raw_name == "users"
        assert auth_request.flags.roles == ("admin", "editor")
        assert auth_request.flags.add_activity_logging is True
        assert auth_request.store_pascal == "AppStore"

    def test_flags_dropped_without_auth_collection(self):
        request = StoreRequest.build(
            "shop", ["products"], roles=["admin"], add_activity_logging=True
        )
        assert request.flags.roles == ()
        assert request.flags.add_activity_logging is False

    def test_primary_auth_is_first_in_input_order(self):
        request = StoreRequest.build("crm", ["products", "clients", "users"])
        assert request.primary_auth_collection.raw_name == "clients"

    def test_custom_classifier(self):
        request = StoreRequest.build(
            "club", ["members", "users"], classifier=AuthCollectionClassifier(["members"])
        )
        assert [c.raw_name for c in request.auth_collections] == ["members"]

    def test_blank_entries_skipped(self):
        request = StoreRequest.build("shop", [" products ", "", "  "])
        assert [c.raw_name for c in request.collections] == ["products"]

    def test_all_invalid_names_reported_at_once(self):
        with pytest.raises(InvalidCollectionNameError) as exc_info:
            StoreRequest.build("shop", ["products", "bad name", "2fast"])
        assert exc_info.value.names == ["bad name", "2fast"]
        assert "'bad name'" in str(exc_info.value)

    def test_missing_store_name(self):
        with pytest.raises(InputError, match="Store name is required"):
            StoreRequest.build("  ", ["products"])

    def test_invalid_store_name(self):
        with pytest.raises(InputError, match="Invalid store name"):
            StoreRequest.build("my store", ["products"])

    def test_no_collections(self):
        with pytest.raises(InputError, match="At least one collection"):
            StoreRequest.build("shop", [])

    def test_duplicate_collections(self):
        with pytest.raises(InputError, match="Duplicate collection name: products"):
            StoreRequest.build("shop", ["products", "orders", "products"])

    @pytest.mark.parametrize(
        ("names", "clash"),
        [
            (["Products", "products"], "Products, products"),
            (["client-submissions", "orders", "client_submissions"], "client-submissions, client_submissions"),
        ],
    )
    def test_collections_folding_to_same_suffix(self, names, clash):
        with pytest.raises(InputError, match="map to the same generated names") as exc_info:
            StoreRequest.build("shop", names)
        assert clash in str(exc_info.value)

    def test_every_clashing_group_reported(self):
        with pytest.raises(InputError) as exc_info:
            StoreRequest.build("shop", ["Users", "users", "order-items", "order_items"])
        assert str(exc_info.value).endswith("Users, users; order-items, order_items")

    @pytest.mark.parametrize(
        "name",
        ["loading", "error", "authInitialized", "currentUser", "emailVerificationSent", "recentActivity"],
    )
    def test_shared_state_key_rejected(self, name):
        with pytest.raises(InputError, match=f"clashes with shared store state: {name}"):
            StoreRequest.build("shop", ["products", name])

    def test_shared_state_key_check_is_case_sensitive(self):
        request = StoreRequest.build("shop", ["Loading", "errors"])
        assert [c.raw_name for c in request.collections] == ["Loading", "errors"]
