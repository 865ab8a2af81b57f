"""Integration tests for the prompt-then-generate store pipeline.

These tests drive the real prompt session with scripted answers, run the
generator against a temporary output root and inspect the written store
directory.  No browser, Firebase project or network access is required.
"""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from storegen.cli import run_store
from storegen.prompts import ask_store_request
from storegen.scaffolder import StoreGenerator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _generate(config, scripted, answers: list[str]) -> Path:
    """Run the store session and return the generated store root."""
    request = ask_store_request(scripted(answers))
    await StoreGenerator(config).generate(request)
    return config.store_path(request.store_name)


def _relative_files(root: Path) -> list[str]:
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


def _log_calls(source: str) -> list[str]:
    """Argument blocks of every ``logActivity(...)`` call in *source*."""
    return re.findall(r"await logActivity\((.*?)\n\s*\);", source, re.DOTALL)


# ---------------------------------------------------------------------------
# Plain store: shop with products and orders
# ---------------------------------------------------------------------------


class TestShopStore:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_file_layout(self, config, scripted):
        root = await _generate(config, scripted, ["shop", "products, orders"])
        assert root == config.output_dir / "stores" / "shop"
        assert _relative_files(root) == [
            "STORE_GUIDE.md",
            "actions/orders.js",
            "actions/products.js",
            "index.js",
            "state.js",
            "useFirestoreCollectionActions.js",
        ]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_no_auth_flow_block(self, config, scripted):
        root = await _generate(config, scripted, ["shop", "products, orders"])
        index = (root / "index.js").read_text(encoding="utf-8")
        for flow in ("login(", "signUp(", "logout(", "fetchUser(", "onAuthStateChanged"):
            assert flow not in index
        assert "...productsActions," in index
        assert "...ordersActions" in index

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_modules_reference_each_other(self, config, scripted):
        root = await _generate(config, scripted, ["shop", "products, orders"])
        index = (root / "index.js").read_text(encoding="utf-8")
        for spec in ("products", "orders"):
            module = (root / "actions" / f"{spec}.js").read_text(encoding="utf-8")
            factory = f"use{spec.capitalize()}Actions"
            assert f"export function {factory}(state)" in module
            assert f"import {{ {factory} }} from './actions/{spec}.js';" in index
            assert "from '../useFirestoreCollectionActions.js';" in module

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_regeneration_is_byte_identical(self, config, scripted):
        from datetime import datetime

        request = ask_store_request(scripted(["shop", "products, orders"]))
        generator = StoreGenerator(config)
        now = datetime(2024, 1, 1, 9, 0)

        await generator.generate(request, now=now)
        root = config.store_path("shop")
        first = {name: (root / name).read_bytes() for name in _relative_files(root)}

        await generator.generate(request, now=now)
        second = {name: (root / name).read_bytes() for name in _relative_files(root)}
        assert first == second


# ---------------------------------------------------------------------------
# Authenticated store: users and products with roles and logging
# ---------------------------------------------------------------------------


class TestAuthStore:
    ANSWERS = ["appStore", "users, products", "admin,editor", "y"]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_file_layout(self, config, scripted):
        root = await _generate(config, scripted, self.ANSWERS)
        assert _relative_files(root) == [
            "STORE_GUIDE.md",
            "actions/products.js",
            "actions/users.js",
            "activityLogger.js",
            "index.js",
            "state.js",
            "useFirestoreCollectionActions.js",
        ]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_role_members_only_on_auth_collection(self, config, scripted):
        root = await _generate(config, scripted, self.ANSWERS)
        users = (root / "actions" / "users.js").read_text(encoding="utf-8")
        products = (root / "actions" / "products.js").read_text(encoding="utf-8")

        assert users.count("assignUsersRoles(...args) {") == 1
        assert users.count("revokeUsersRoles(...args) {") == 1
        assert "Roles(...args)" not in products

        index = (root / "index.js").read_text(encoding="utf-8")
        assert "...usersActions," in index
        assert "const primaryAuthActions = usersActions;" in index

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_every_activity_log_carries_actor_type(self, config, scripted):
        root = await _generate(config, scripted, self.ANSWERS)
        util = (root / "useFirestoreCollectionActions.js").read_text(encoding="utf-8")

        calls = _log_calls(util)
        assert len(calls) == 5
        for call in calls:
            assert "actorType" in call

        logger = (root / "activityLogger.js").read_text(encoding="utf-8")
        assert "actorType: activity.actorType || SYSTEM_ACTOR.actorType," in logger
        assert "actorType: 'System'," in logger

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_admin_role_gates_destructive_operations(self, config, scripted):
        root = await _generate(config, scripted, self.ANSWERS)
        util = (root / "useFirestoreCollectionActions.js").read_text(encoding="utf-8")
        assert util.count("this._checkRole('admin');") == 3

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_guide_documents_auth_and_logging(self, config, scripted):
        root = await _generate(config, scripted, self.ANSWERS)
        guide = (root / "STORE_GUIDE.md").read_text(encoding="utf-8")
        assert "## 🔐 Firebase Authentication" in guide
        assert "## 📝 Activity Logging" in guide
        assert "`USERS_ROLES_ASSIGNED`" in guide
        assert "`PRODUCTS_ROLES_ASSIGNED`" not in guide


# ---------------------------------------------------------------------------
# Failure before any write
# ---------------------------------------------------------------------------


class TestValidationBeforeWrite:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_invalid_collection_leaves_no_files(self, config, scripted):
        from storegen.errors import InvalidCollectionNameError

        with pytest.raises(InvalidCollectionNameError) as exc_info:
            await run_store(config, scripted(["shop", "products, bad name, 9lives"]))
        assert exc_info.value.names == ["bad name", "9lives"]
        assert list(config.output_dir.iterdir()) == []
