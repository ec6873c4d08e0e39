"""Price oracle protocol — price feed abstraction."""
from typing import Protocol


class PriceOracle(Protocol):
    """Abstract interface for fetching asset prices (18-decimal integers)."""

    async def fetch_prices(self, assets: list[str]) -> dict[str, int]: ...
