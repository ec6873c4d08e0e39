"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from vault_view.keys import (
    ACTION_ADMIN,
    ACTION_VIEW_PRICE_DATA,
    ACTION_VIEW_SYSTEM_DATA,
    ACTION_VIEW_USER_DATA,
    KEY_ACCESS_CONTROL,
    KEY_HEALTH_VIEW,
    KEY_POSITION_VIEW,
    KEY_PRICE_ORACLE,
    KEY_STATS,
)
from vault_view.models import GlobalStatistics
from vault_view.modules.memory import (
    InMemoryAccessController,
    InMemoryRegistry,
    StaticHealthView,
    StaticPositionView,
    StaticPriceOracle,
    StaticStatisticsView,
)
from vault_view.services.proxy import UpgradeableFacade

from tests.sample_ids import ADMIN, ASSET_X, ASSET_Y, ASSET_Z, USER_A, USER_B, USER_C, VIEWER


# ---------------------------------------------------------------------------
# Collaborator fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def acm() -> InMemoryAccessController:
    controller = InMemoryAccessController()
    for action in (
        ACTION_ADMIN,
        ACTION_VIEW_USER_DATA,
        ACTION_VIEW_SYSTEM_DATA,
        ACTION_VIEW_PRICE_DATA,
    ):
        controller.grant_role(action, ADMIN)
    controller.grant_role(ACTION_VIEW_USER_DATA, VIEWER)
    controller.grant_role(ACTION_VIEW_SYSTEM_DATA, VIEWER)
    controller.grant_role(ACTION_VIEW_PRICE_DATA, VIEWER)
    return controller


@pytest.fixture()
def health_view() -> StaticHealthView:
    view = StaticHealthView()
    view.set_user_health(USER_A, 1800, True)
    view.set_user_health(USER_B, 1200, True)
    view.set_user_health(USER_C, 950, False)
    return view


@pytest.fixture()
def position_view() -> StaticPositionView:
    view = StaticPositionView()
    view.set_position(USER_A, ASSET_X, 1000, 100)
    view.set_position(USER_A, ASSET_Y, 500, 0)
    view.set_position(USER_A, ASSET_Z, 200, 50)
    view.set_position(USER_B, ASSET_X, 800, 200)
    return view


@pytest.fixture()
def stats_view() -> StaticStatisticsView:
    return StaticStatisticsView(
        GlobalStatistics(
            total_users=42,
            active_users=21,
            total_collateral=1_234_000,
            total_debt=456_000,
            last_update_time=9999,
        )
    )


@pytest.fixture()
def price_oracle() -> StaticPriceOracle:
    return StaticPriceOracle(
        {ASSET_X: 2 * 10**18, ASSET_Y: 1 * 10**18, ASSET_Z: 3 * 10**18}
    )


@pytest.fixture()
def registry(
    acm: InMemoryAccessController,
    health_view: StaticHealthView,
    position_view: StaticPositionView,
    stats_view: StaticStatisticsView,
    price_oracle: StaticPriceOracle,
) -> InMemoryRegistry:
    reg = InMemoryRegistry()
    reg.set_module(KEY_ACCESS_CONTROL, acm)
    reg.set_module(KEY_HEALTH_VIEW, health_view)
    reg.set_module(KEY_POSITION_VIEW, position_view)
    reg.set_module(KEY_STATS, stats_view)
    reg.set_module(KEY_PRICE_ORACLE, price_oracle)
    return reg


@pytest.fixture()
def bare_registry(acm: InMemoryAccessController) -> InMemoryRegistry:
    """Registry holding only the access controller."""
    reg = InMemoryRegistry()
    reg.set_module(KEY_ACCESS_CONTROL, acm)
    return reg


@pytest.fixture()
def facade(registry: InMemoryRegistry) -> UpgradeableFacade:
    return UpgradeableFacade.deploy(registry)


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    registry:
      modules: [ACCESS_CONTROL_MANAGER, HEALTH_VIEW, POSITION_VIEW, VAULT_STATISTICS, PRICE_ORACLE]
    access_control:
      grants:
        "0xADMIN": [ACTION_ADMIN, VIEW_USER_DATA, VIEW_SYSTEM_DATA, VIEW_PRICE_DATA]
        "0xVIEWER": [VIEW_USER_DATA]
    snapshot:
      health:
        "0xA": {health_factor: 1800, cache_valid: true}
        "0xB": {health_factor: 950, cache_valid: false}
      positions:
        - {user: "0xA", asset: "X", collateral: 1000, debt: 100}
        - {user: "0xA", asset: "Y", collateral: 500, debt: 0}
      statistics:
        total_users: 42
        active_users: 21
        total_collateral: 1234000
        total_debt: 456000
        last_update_time: 9999
    price_oracle:
      provider: static
      static: {X: 2000000000000000000}
      pyth:
        hermes_url: "https://hermes.example.com"
        feeds: {X: "0xaaa"}
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
