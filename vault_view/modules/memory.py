"""In-memory registry, access controller and data providers.

These back the facade when it runs from a YAML snapshot (CLI) and in tests.
They hold the state the facade only ever reads.
"""
from __future__ import annotations

import logging
from typing import Any

from ..errors import MissingRole, ModuleNotFound
from ..keys import ActionId, ModuleKey
from ..models import GlobalStatistics, HealthRecord

logger = logging.getLogger(__name__)


class InMemoryRegistry:
    """Module directory keyed by ``ModuleKey``."""

    def __init__(self) -> None:
        self._modules: dict[ModuleKey, Any] = {}

    def set_module(self, key: ModuleKey, module: Any) -> None:
        if module is None:
            self._modules.pop(key, None)
            return
        self._modules[key] = module
        logger.debug("Registered module %s -> %r", key, module)

    def remove_module(self, key: ModuleKey) -> None:
        self._modules.pop(key, None)

    def get_module(self, key: ModuleKey) -> Any | None:
        return self._modules.get(key)

    async def resolve(self, key: ModuleKey) -> Any:
        try:
            return self._modules[key]
        except KeyError:
            raise ModuleNotFound(key) from None


class InMemoryAccessController:
    """Role table: action -> set of callers."""

    def __init__(self) -> None:
        self._roles: dict[ActionId, set[str]] = {}

    def grant_role(self, action: ActionId, caller: str) -> None:
        self._roles.setdefault(action, set()).add(caller)

    def revoke_role(self, action: ActionId, caller: str) -> None:
        self._roles.get(action, set()).discard(caller)

    def has_role(self, action: ActionId, caller: str) -> bool:
        return caller in self._roles.get(action, set())

    async def require_role(self, action: ActionId, caller: str) -> None:
        if not self.has_role(action, caller):
            raise MissingRole(action, caller)


class StaticHealthView:
    """Health records set explicitly; unknown users read as (0, invalid)."""

    def __init__(self) -> None:
        self._health: dict[str, HealthRecord] = {}

    def set_user_health(self, user: str, health_factor: int, cache_valid: bool) -> None:
        self._health[user] = HealthRecord(health_factor, cache_valid)

    async def get_user_health_factor(self, user: str) -> HealthRecord:
        return self._health.get(user, HealthRecord(0, False))


class StaticPositionView:
    def __init__(self) -> None:
        self._positions: dict[tuple[str, str], tuple[int, int]] = {}

    def set_position(self, user: str, asset: str, collateral: int, debt: int) -> None:
        if collateral < 0 or debt < 0:
            raise ValueError("Collateral and debt must be non-negative")
        self._positions[(user, asset)] = (collateral, debt)

    async def get_user_position(self, user: str, asset: str) -> tuple[int, int]:
        return self._positions.get((user, asset), (0, 0))


class StaticStatisticsView:
    def __init__(self, statistics: GlobalStatistics | None = None) -> None:
        self._statistics = statistics or GlobalStatistics()

    def set_global_statistics(self, statistics: GlobalStatistics) -> None:
        self._statistics = statistics

    async def get_global_statistics(self) -> GlobalStatistics:
        return self._statistics


class StaticPriceOracle:
    """Fixed prices; unpriced assets are left out of the result."""

    def __init__(self, prices: dict[str, int] | None = None) -> None:
        self._prices: dict[str, int] = dict(prices or {})

    def set_price(self, asset: str, price: int) -> None:
        self._prices[asset] = price

    async def fetch_prices(self, assets: list[str]) -> dict[str, int]:
        return {a: self._prices[a] for a in assets if a in self._prices}
