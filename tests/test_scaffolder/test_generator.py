"""Tests for the store generation orchestrator.

Covers:
- Module order and optional activity logger
- Files written under the configured store directory
- Custom file extension
- Composition failures leave the disk untouched
- Regeneration overwrites the previous output
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from storegen.config import Config
from storegen.errors import CompositionError
from storegen.scaffolder.generator import StoreGenerator


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# compose
# ---------------------------------------------------------------------------


class TestCompose:
    def test_plain_order(self, config, shop_request, fixed_now):
        modules = StoreGenerator(config).compose(shop_request, now=fixed_now)
        assert [m.path for m in modules] == [
            "state.js",
            "useFirestoreCollectionActions.js",
            "actions/products.js",
            "actions/orders.js",
            "index.js",
            "STORE_GUIDE.md",
        ]

    def test_auth_order_includes_logger(self, config, auth_request, fixed_now):
        modules = StoreGenerator(config).compose(auth_request, now=fixed_now)
        assert [m.path for m in modules] == [
            "state.js",
            "useFirestoreCollectionActions.js",
            "actions/users.js",
            "actions/products.js",
            "index.js",
            "activityLogger.js",
            "STORE_GUIDE.md",
        ]

    def test_custom_extension(self, output_dir, shop_request, fixed_now):
        config = Config(output_dir=output_dir, file_extension="ts")
        modules = StoreGenerator(config).compose(shop_request, now=fixed_now)
        paths = [m.path for m in modules]
        assert "state.ts" in paths
        assert "actions/products.ts" in paths
        index = next(m for m in modules if m.path == "index.ts")
        assert "import useShopState from './state.ts';" in index.content

    def test_deterministic(self, config, auth_request, fixed_now):
        generator = StoreGenerator(config)
        assert generator.compose(auth_request, now=fixed_now) == generator.compose(
            auth_request, now=fixed_now
        )


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


class TestGenerate:
    @pytest.mark.asyncio
    async def test_writes_every_module(self, config, shop_request, fixed_now):
        written = await StoreGenerator(config).generate(shop_request, now=fixed_now)
        store_root = config.output_dir / "stores" / "shop"
        assert written[0] == store_root / "state.js"
        assert written[-1] == store_root / "STORE_GUIDE.md"
        for path in written:
            assert path.is_file()
            assert path.read_text(encoding="utf-8").endswith("\n")
            assert not path.read_text(encoding="utf-8").endswith("\n\n")

    @pytest.mark.asyncio
    async def test_writes_sequentially_in_order(self, config, shop_request, fixed_now):
        calls = []

        async def fake_write(path, content):
            calls.append(path.name)
            return path

        with patch("storegen.scaffolder.generator.write_text_async", side_effect=fake_write):
            await StoreGenerator(config).generate(shop_request, now=fixed_now)

        assert calls == [
            "state.js",
            "useFirestoreCollectionActions.js",
            "products.js",
            "orders.js",
            "index.js",
            "STORE_GUIDE.md",
        ]

    @pytest.mark.asyncio
    async def test_composition_failure_writes_nothing(self, config, shop_request):
        renderer = MagicMock()
        renderer.render.side_effect = RuntimeError("boom")
        writer = AsyncMock()

        with patch("storegen.scaffolder.generator.write_text_async", writer):
            with pytest.raises(CompositionError, match=r"\[state.js\] boom"):
                await StoreGenerator(config, renderer=renderer).generate(shop_request)

        writer.assert_not_awaited()
        assert not (config.output_dir / "stores").exists()

    @pytest.mark.asyncio
    async def test_regeneration_overwrites(self, config, fixed_now):
        from storegen.scaffolder.models import StoreRequest

        generator = StoreGenerator(config)
        await generator.generate(StoreRequest.build("shop", ["products"]), now=fixed_now)
        await generator.generate(StoreRequest.build("shop", ["orders"]), now=fixed_now)

        state = (config.store_path("shop") / "state.js").read_text(encoding="utf-8")
        assert "orders: ref({" in state
        assert "products: ref({" not in state
        # Stale per-collection modules are left in place
        assert (config.store_path("shop") / "actions" / "products.js").exists()
