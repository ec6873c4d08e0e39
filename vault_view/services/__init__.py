"""Service modules"""
from .dashboard import MAX_BATCH_SIZE, RISK_THRESHOLD_BPS, DashboardLogic, FacadeState
from .proxy import UpgradeableFacade
from .wiring import build_facade, build_registry

__all__ = [
    "DashboardLogic",
    "FacadeState",
    "MAX_BATCH_SIZE",
    "RISK_THRESHOLD_BPS",
    "UpgradeableFacade",
    "build_facade",
    "build_registry",
]
