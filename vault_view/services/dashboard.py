"""Dashboard aggregation logic — read-only facade over the vault view modules.

Every entry point runs the same sequence: validate input, check the caller's
role through the access controller, resolve the provider(s) from the
registry, then call them. Registry lookups are repeated on every call so a
re-pointed module takes effect immediately. Errors raised by the registry
and the access controller propagate unchanged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from ..errors import (
    AlreadyInitialized,
    ArrayLengthMismatch,
    BatchTooLarge,
    EmptyArray,
    NotInitialized,
    ZeroAddress,
)
from ..interfaces.access_control import AccessController
from ..interfaces.price_oracle import PriceOracle
from ..interfaces.providers import HealthProvider, PositionProvider, StatisticsProvider
from ..interfaces.registry import Registry
from ..keys import (
    ACTION_ADMIN,
    ACTION_VIEW_PRICE_DATA,
    ACTION_VIEW_SYSTEM_DATA,
    ACTION_VIEW_USER_DATA,
    KEY_ACCESS_CONTROL,
    KEY_HEALTH_VIEW,
    KEY_POSITION_VIEW,
    KEY_PRICE_ORACLE,
    KEY_STATS,
    ActionId,
    ModuleKey,
)
from ..models import (
    AssetBreakdownItem,
    AssetPriceItem,
    GlobalStatistics,
    HealthFactorItem,
    HealthRecord,
    PositionRecord,
    UserOverview,
    UserSummary,
)

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 100
RISK_THRESHOLD_BPS = 11_000


@dataclass
class FacadeState:
    """Everything the facade owns. Survives logic upgrades."""

    registry: Registry | None = None


class DashboardLogic:
    """First version of the facade behaviour.

    Instances are stateless apart from the shared ``FacadeState`` they are
    bound to; ``UpgradeableFacade`` swaps the class, never the state.
    """

    MAX_BATCH_SIZE = MAX_BATCH_SIZE
    RISK_THRESHOLD_BPS = RISK_THRESHOLD_BPS

    def __init__(self, state: FacadeState) -> None:
        self._state = state

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, registry: Registry | None) -> None:
        """Store the registry reference. Callable once."""
        if self._state.registry is not None:
            raise AlreadyInitialized()
        if registry is None:
            raise ZeroAddress("Registry reference must not be null")
        self._state.registry = registry
        logger.info("Facade initialized with registry %r", registry)

    @property
    def registry_address(self) -> Registry | None:
        return self._state.registry

    async def authorize_upgrade(self, caller: str, new_logic: type | None) -> None:
        """Gate for ``UpgradeableFacade.upgrade_to``."""
        if new_logic is None:
            raise ZeroAddress("New logic target must not be null")
        await self._require_role(ACTION_ADMIN, caller)

    # ------------------------------------------------------------------
    # Registry / access-control glue
    # ------------------------------------------------------------------

    def _registry(self) -> Registry:
        if self._state.registry is None:
            raise NotInitialized()
        return self._state.registry

    async def _resolve(self, key: ModuleKey) -> Any:
        module = await self._registry().resolve(key)
        logger.debug("Resolved %s -> %r", key, module)
        return module

    async def _require_role(self, action: ActionId, caller: str) -> None:
        acm: AccessController = await self._resolve(KEY_ACCESS_CONTROL)
        await acm.require_role(action, caller)

    # ------------------------------------------------------------------
    # Input bounds
    # ------------------------------------------------------------------

    def _check_batch(self, items: Sequence[Any], name: str) -> None:
        if not items:
            raise EmptyArray(name)
        self._check_bound(items)

    def _check_bound(self, items: Sequence[Any]) -> None:
        if len(items) > self.MAX_BATCH_SIZE:
            raise BatchTooLarge(len(items), self.MAX_BATCH_SIZE)

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    async def get_user_health_factor(self, caller: str, user: str) -> HealthRecord:
        await self._require_role(ACTION_VIEW_USER_DATA, caller)
        health: HealthProvider = await self._resolve(KEY_HEALTH_VIEW)
        return await health.get_user_health_factor(user)

    async def batch_get_user_health_factors(
        self, caller: str, users: Sequence[str]
    ) -> tuple[list[int], list[bool]]:
        """Health factors and validity flags, index-aligned with ``users``."""
        self._check_batch(users, "users")
        await self._require_role(ACTION_VIEW_USER_DATA, caller)
        health: HealthProvider = await self._resolve(KEY_HEALTH_VIEW)

        factors: list[int] = []
        flags: list[bool] = []
        for user in users:
            record = await health.get_user_health_factor(user)
            factors.append(record.health_factor)
            flags.append(record.cache_valid)

        logger.debug("Batch health lookup for %d users", len(users))
        return factors, flags

    async def batch_get_health_factors(
        self, caller: str, users: Sequence[str]
    ) -> list[HealthFactorItem]:
        """Same lookup as ``batch_get_user_health_factors``, one item per user."""
        factors, flags = await self.batch_get_user_health_factors(caller, users)
        return [
            HealthFactorItem(user=user, health_factor=hf, is_valid=valid)
            for user, hf, valid in zip(users, factors, flags)
        ]

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    async def get_user_position(
        self, caller: str, user: str, asset: str
    ) -> PositionRecord:
        await self._require_role(ACTION_VIEW_USER_DATA, caller)
        positions: PositionProvider = await self._resolve(KEY_POSITION_VIEW)
        collateral, debt = await positions.get_user_position(user, asset)
        return PositionRecord(user=user, asset=asset, collateral=collateral, debt=debt)

    async def batch_get_user_positions(
        self, caller: str, users: Sequence[str], assets: Sequence[str]
    ) -> list[PositionRecord]:
        self._check_batch(users, "users")
        self._check_batch(assets, "assets")
        if len(users) != len(assets):
            raise ArrayLengthMismatch(len(users), len(assets))
        await self._require_role(ACTION_VIEW_USER_DATA, caller)
        positions: PositionProvider = await self._resolve(KEY_POSITION_VIEW)

        records: list[PositionRecord] = []
        for user, asset in zip(users, assets):
            collateral, debt = await positions.get_user_position(user, asset)
            records.append(
                PositionRecord(user=user, asset=asset, collateral=collateral, debt=debt)
            )

        logger.debug("Batch position lookup for %d pairs", len(records))
        return records

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def get_user_summary(
        self, caller: str, user: str, tracked_assets: Sequence[str]
    ) -> UserSummary:
        """Collateral/debt summed over ``tracked_assets`` plus the user's health.

        An empty asset list is allowed and yields zero totals.
        """
        self._check_bound(tracked_assets)
        await self._require_role(ACTION_VIEW_USER_DATA, caller)
        positions: PositionProvider = await self._resolve(KEY_POSITION_VIEW)
        health: HealthProvider = await self._resolve(KEY_HEALTH_VIEW)

        total_collateral = 0
        total_debt = 0
        for asset in tracked_assets:
            collateral, debt = await positions.get_user_position(user, asset)
            total_collateral += collateral
            total_debt += debt

        record = await health.get_user_health_factor(user)
        return UserSummary(
            total_collateral=total_collateral,
            total_debt=total_debt,
            health_factor=record.health_factor,
            cache_valid=record.cache_valid,
        )

    async def get_user_overview(
        self, caller: str, user: str, tracked_assets: Sequence[str]
    ) -> UserOverview:
        summary = await self.get_user_summary(caller, user, tracked_assets)
        # An invalid health record is never reported as risky.
        is_risky = (
            summary.cache_valid and summary.health_factor < self.RISK_THRESHOLD_BPS
        )
        return UserOverview(
            total_collateral=summary.total_collateral,
            total_debt=summary.total_debt,
            health_factor=summary.health_factor,
            health_factor_valid=summary.cache_valid,
            is_risky=is_risky,
        )

    async def get_user_asset_breakdown(
        self, caller: str, user: str, assets: Sequence[str]
    ) -> list[AssetBreakdownItem]:
        """Per-asset collateral/debt with the oracle price (0 when unavailable)."""
        self._check_bound(assets)
        await self._require_role(ACTION_VIEW_USER_DATA, caller)
        positions: PositionProvider = await self._resolve(KEY_POSITION_VIEW)
        if not assets:
            return []

        prices = await self._fetch_prices(assets)

        items: list[AssetBreakdownItem] = []
        for asset in assets:
            collateral, debt = await positions.get_user_position(user, asset)
            items.append(
                AssetBreakdownItem(
                    asset=asset,
                    collateral=collateral,
                    debt=debt,
                    price=int(prices.get(asset, 0)),
                )
            )
        return items

    async def batch_get_asset_prices(
        self, caller: str, assets: Sequence[str]
    ) -> list[AssetPriceItem]:
        """Oracle price per asset, index-aligned with ``assets``; 0 when unknown."""
        self._check_batch(assets, "assets")
        await self._require_role(ACTION_VIEW_PRICE_DATA, caller)
        prices = await self._fetch_prices(assets)
        return [AssetPriceItem(asset=a, price=int(prices.get(a, 0))) for a in assets]

    async def _fetch_prices(self, assets: Sequence[str]) -> dict[str, int]:
        """Prices from the optional oracle module; degrades to no prices."""
        try:
            oracle: PriceOracle = await self._resolve(KEY_PRICE_ORACLE)
        except LookupError:
            logger.warning("No price oracle registered, breakdown prices default to 0")
            return {}

        try:
            return await oracle.fetch_prices(list(assets))
        except Exception as e:
            logger.warning("Price oracle failed, breakdown prices default to 0: %s", e)
            return {}

    # ------------------------------------------------------------------
    # System
    # ------------------------------------------------------------------

    async def get_system_stats(self, caller: str) -> GlobalStatistics:
        await self._require_role(ACTION_VIEW_SYSTEM_DATA, caller)
        stats: StatisticsProvider = await self._resolve(KEY_STATS)
        return await stats.get_global_statistics()
