"""In-memory collaborator modules."""
from .memory import (
    InMemoryAccessController,
    InMemoryRegistry,
    StaticHealthView,
    StaticPositionView,
    StaticPriceOracle,
    StaticStatisticsView,
)

__all__ = [
    "InMemoryAccessController",
    "InMemoryRegistry",
    "StaticHealthView",
    "StaticPositionView",
    "StaticPriceOracle",
    "StaticStatisticsView",
]
