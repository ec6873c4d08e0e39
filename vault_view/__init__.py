"""Read-only, access-controlled dashboard facade over vault view modules."""
from .errors import (
    AlreadyInitialized,
    ArrayLengthMismatch,
    BatchTooLarge,
    EmptyArray,
    MissingRole,
    ModuleNotFound,
    NotInitialized,
    VaultViewError,
    ZeroAddress,
)
from .services import DashboardLogic, UpgradeableFacade

__version__ = "0.1.0"

__all__ = [
    "AlreadyInitialized",
    "ArrayLengthMismatch",
    "BatchTooLarge",
    "DashboardLogic",
    "EmptyArray",
    "MissingRole",
    "ModuleNotFound",
    "NotInitialized",
    "UpgradeableFacade",
    "VaultViewError",
    "ZeroAddress",
]
