"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthRecord:
    """Health factor of a single user as reported by the health provider.

    ``cache_valid`` belongs to the provider and is passed through untouched.
    """

    health_factor: int
    cache_valid: bool


@dataclass(frozen=True)
class PositionRecord:
    """Collateral and debt of one user in one asset."""

    user: str
    asset: str
    collateral: int
    debt: int


@dataclass(frozen=True)
class GlobalStatistics:
    """System-wide snapshot from the statistics provider."""

    total_users: int = 0
    active_users: int = 0
    total_collateral: int = 0
    total_debt: int = 0
    last_update_time: int = 0


@dataclass(frozen=True)
class UserSummary:
    """Collateral/debt totals over a set of assets plus the user's health."""

    total_collateral: int
    total_debt: int
    health_factor: int
    cache_valid: bool


@dataclass(frozen=True)
class UserOverview:
    total_collateral: int
    total_debt: int
    health_factor: int
    health_factor_valid: bool
    is_risky: bool


@dataclass(frozen=True)
class HealthFactorItem:
    user: str
    health_factor: int
    is_valid: bool


@dataclass(frozen=True)
class AssetBreakdownItem:
    """Single asset within a user breakdown; ``price`` is 0 when unknown."""

    asset: str
    collateral: int
    debt: int
    price: int = 0


@dataclass(frozen=True)
class AssetPriceItem:
    asset: str
    price: int = 0
