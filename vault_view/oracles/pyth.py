"""Pyth Network price oracle — Hermes HTTP feed, 18-decimal integer prices."""
from __future__ import annotations

import logging
import ssl

import aiohttp
import certifi

from ..config import PythConfig

logger = logging.getLogger(__name__)

PRICE_DECIMALS = 18


def _normalize_feed_id(feed_id: str) -> str:
    # Hermes answers without the 0x prefix regardless of how ids were sent.
    feed_id = feed_id.lower()
    return feed_id[2:] if feed_id.startswith("0x") else feed_id


def scale_price(price_raw: int, expo: int, decimals: int = PRICE_DECIMALS) -> int:
    """Convert ``price_raw * 10**expo`` to an integer with ``decimals`` places.

    Excess precision is truncated toward zero.
    """
    shift = decimals + expo
    if shift >= 0:
        return price_raw * 10**shift
    scaled = abs(price_raw) // 10**-shift
    return scaled if price_raw >= 0 else -scaled


class PythOracle:
    """Fetch asset prices from the Pyth Network oracle."""

    def __init__(self, config: PythConfig) -> None:
        self.hermes_url = config.hermes_url
        self.timeout = config.timeout
        self.price_feeds = {
            asset: _normalize_feed_id(feed) for asset, feed in config.feeds.items()
        }

    async def fetch_prices(self, assets: list[str]) -> dict[str, int]:
        """Fetch current prices for ``assets``.

        Assets without a configured feed, or missing from the response, are
        left out. HTTP failures are logged and yield an empty mapping.
        """
        prices: dict[str, int] = {}

        feeds = {a: self.price_feeds[a] for a in assets if a in self.price_feeds}
        if not feeds:
            return prices

        id_to_assets: dict[str, list[str]] = {}
        for asset, feed_id in feeds.items():
            id_to_assets.setdefault(feed_id, []).append(asset)

        query_params = "&".join(f"ids[]={fid}" for fid in sorted(id_to_assets))
        url = f"{self.hermes_url}?{query_params}"

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status != 200:
                        logger.error(
                            "Error fetching prices from Pyth: HTTP %s", response.status
                        )
                        return prices

                    data = await response.json()

            for item in data.get("parsed", []):
                feed_id = _normalize_feed_id(str(item.get("id", "")))
                if feed_id not in id_to_assets:
                    continue
                price_data = item.get("price", {})
                price = scale_price(
                    int(price_data.get("price", 0)), int(price_data.get("expo", 0))
                )
                for asset in id_to_assets[feed_id]:
                    prices[asset] = price

            logger.debug("Fetched %d prices from Pyth Network", len(prices))

        except Exception as e:
            logger.error("Error fetching prices from Pyth: %s", e)

        return prices
