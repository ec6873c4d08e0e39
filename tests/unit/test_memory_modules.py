"""Unit tests for the in-memory registry, access controller and providers."""
from __future__ import annotations

import pytest

from vault_view.errors import MissingRole, ModuleNotFound
from vault_view.keys import ACTION_ADMIN, ACTION_VIEW_USER_DATA, KEY_HEALTH_VIEW, KEY_STATS
from vault_view.models import GlobalStatistics, HealthRecord
from vault_view.modules.memory import (
    InMemoryAccessController,
    InMemoryRegistry,
    StaticHealthView,
    StaticPositionView,
    StaticPriceOracle,
    StaticStatisticsView,
)


class TestInMemoryRegistry:
    @pytest.mark.asyncio
    async def test_resolve_registered(self) -> None:
        reg = InMemoryRegistry()
        module = object()
        reg.set_module(KEY_HEALTH_VIEW, module)
        assert await reg.resolve(KEY_HEALTH_VIEW) is module

    @pytest.mark.asyncio
    async def test_resolve_missing_raises(self) -> None:
        reg = InMemoryRegistry()
        with pytest.raises(ModuleNotFound) as exc_info:
            await reg.resolve(KEY_STATS)
        assert exc_info.value.key == KEY_STATS
        assert "VAULT_STATISTICS" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_set_none_unregisters(self) -> None:
        reg = InMemoryRegistry()
        reg.set_module(KEY_STATS, object())
        reg.set_module(KEY_STATS, None)
        assert reg.get_module(KEY_STATS) is None
        with pytest.raises(ModuleNotFound):
            await reg.resolve(KEY_STATS)

    def test_remove_missing_is_noop(self) -> None:
        InMemoryRegistry().remove_module(KEY_STATS)


class TestInMemoryAccessController:
    @pytest.mark.asyncio
    async def test_grant_and_require(self) -> None:
        acm = InMemoryAccessController()
        acm.grant_role(ACTION_VIEW_USER_DATA, "0x1")
        await acm.require_role(ACTION_VIEW_USER_DATA, "0x1")
        assert acm.has_role(ACTION_VIEW_USER_DATA, "0x1")
        assert not acm.has_role(ACTION_ADMIN, "0x1")

    @pytest.mark.asyncio
    async def test_missing_role(self) -> None:
        acm = InMemoryAccessController()
        with pytest.raises(MissingRole, match="requireRole: MissingRole"):
            await acm.require_role(ACTION_ADMIN, "0x1")

    @pytest.mark.asyncio
    async def test_revoke(self) -> None:
        acm = InMemoryAccessController()
        acm.grant_role(ACTION_ADMIN, "0x1")
        acm.revoke_role(ACTION_ADMIN, "0x1")
        acm.revoke_role(ACTION_VIEW_USER_DATA, "0x1")
        with pytest.raises(MissingRole):
            await acm.require_role(ACTION_ADMIN, "0x1")


class TestStaticProviders:
    @pytest.mark.asyncio
    async def test_unknown_user_health(self) -> None:
        assert await StaticHealthView().get_user_health_factor("0x1") == HealthRecord(0, False)

    @pytest.mark.asyncio
    async def test_position_round_trip(self) -> None:
        view = StaticPositionView()
        view.set_position("0x1", "0xX", 10, 3)
        assert await view.get_user_position("0x1", "0xX") == (10, 3)
        assert await view.get_user_position("0x1", "0xY") == (0, 0)

    def test_negative_position_rejected(self) -> None:
        with pytest.raises(ValueError):
            StaticPositionView().set_position("0x1", "0xX", -1, 0)

    @pytest.mark.asyncio
    async def test_statistics_default_zero(self) -> None:
        assert await StaticStatisticsView().get_global_statistics() == GlobalStatistics()

    @pytest.mark.asyncio
    async def test_price_oracle_omits_unpriced(self) -> None:
        oracle = StaticPriceOracle({"0xX": 5})
        oracle.set_price("0xY", 7)
        assert await oracle.fetch_prices(["0xX", "0xY", "0xZ"]) == {"0xX": 5, "0xY": 7}
