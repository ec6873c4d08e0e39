"""Build a facade and its in-memory collaborators from configuration."""
from __future__ import annotations

import logging
from typing import Any, Callable

from ..config import AppConfig, PriceOracleConfig
from ..keys import (
    ACTIONS,
    KEY_ACCESS_CONTROL,
    KEY_HEALTH_VIEW,
    KEY_POSITION_VIEW,
    KEY_PRICE_ORACLE,
    KEY_STATS,
    MODULE_KEYS,
)
from ..modules.memory import (
    InMemoryAccessController,
    InMemoryRegistry,
    StaticHealthView,
    StaticPositionView,
    StaticPriceOracle,
    StaticStatisticsView,
)
from ..oracles.pyth import PythOracle
from .proxy import UpgradeableFacade

logger = logging.getLogger(__name__)

# Price oracle factories keyed by provider name.
_ORACLE_FACTORIES: dict[str, Callable[[PriceOracleConfig], Any]] = {
    "static": lambda cfg: StaticPriceOracle(cfg.static),
    "pyth": lambda cfg: PythOracle(cfg.pyth),
}


def build_registry(config: AppConfig) -> InMemoryRegistry:
    """Create collaborators and register those listed under ``registry.modules``."""
    acm = InMemoryAccessController()
    for caller, actions in config.access_control.grants.items():
        for action in actions:
            acm.grant_role(ACTIONS[action], caller)

    health = StaticHealthView()
    for user, record in config.snapshot.health.items():
        health.set_user_health(user, record.health_factor, record.cache_valid)

    positions = StaticPositionView()
    for p in config.snapshot.positions:
        positions.set_position(p.user, p.asset, p.collateral, p.debt)

    stats = StaticStatisticsView(config.snapshot.statistics)

    oracle_factory = _ORACLE_FACTORIES.get(config.price_oracle.provider)
    oracle = oracle_factory(config.price_oracle) if oracle_factory else None
    if oracle is None:
        logger.warning(
            "No oracle factory for provider '%s'", config.price_oracle.provider
        )

    available: dict[Any, Any] = {
        KEY_ACCESS_CONTROL: acm,
        KEY_HEALTH_VIEW: health,
        KEY_POSITION_VIEW: positions,
        KEY_STATS: stats,
        KEY_PRICE_ORACLE: oracle,
    }

    registry = InMemoryRegistry()
    for name in config.registry.modules:
        registry.set_module(MODULE_KEYS[name], available[MODULE_KEYS[name]])
    logger.info("Registry built with modules: %s", ", ".join(config.registry.modules))
    return registry


def build_facade(config: AppConfig) -> UpgradeableFacade:
    """Deploy an initialized facade over a registry built from ``config``."""
    return UpgradeableFacade.deploy(build_registry(config))
