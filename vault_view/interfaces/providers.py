"""Data provider protocols — health, positions and system statistics."""
from typing import Protocol

from ..models import GlobalStatistics, HealthRecord


class HealthProvider(Protocol):
    """Per-user health factor with its cache-validity flag."""

    async def get_user_health_factor(self, user: str) -> HealthRecord: ...


class PositionProvider(Protocol):
    """Collateral/debt ledger keyed by (user, asset)."""

    async def get_user_position(self, user: str, asset: str) -> tuple[int, int]: ...


class StatisticsProvider(Protocol):
    async def get_global_statistics(self) -> GlobalStatistics: ...
