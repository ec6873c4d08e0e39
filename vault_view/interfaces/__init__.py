"""Protocol interfaces for the collaborators behind the facade."""
from .access_control import AccessController
from .price_oracle import PriceOracle
from .providers import HealthProvider, PositionProvider, StatisticsProvider
from .registry import Registry

__all__ = [
    "AccessController",
    "HealthProvider",
    "PositionProvider",
    "PriceOracle",
    "Registry",
    "StatisticsProvider",
]
