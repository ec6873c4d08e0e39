"""Exceptions raised by the facade and by the collaborators it consumes."""
from __future__ import annotations

from typing import Any


class VaultViewError(Exception):
    """Base class for facade errors."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ZeroAddress(VaultViewError):
    """A required reference (registry, logic target) was null."""


class AlreadyInitialized(VaultViewError):
    def __init__(self) -> None:
        super().__init__("Facade is already initialized")


class NotInitialized(VaultViewError):
    def __init__(self) -> None:
        super().__init__("Facade has not been initialized with a registry")


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class EmptyArray(VaultViewError, ValueError):
    def __init__(self, name: str = "input") -> None:
        super().__init__(f"Empty {name} array")
        self.name = name


class ArrayLengthMismatch(VaultViewError, ValueError):
    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"Array length mismatch: {left} != {right}")
        self.left = left
        self.right = right


class BatchTooLarge(VaultViewError, ValueError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Batch of {size} exceeds the limit of {limit}")
        self.size = size
        self.limit = limit


# ---------------------------------------------------------------------------
# Collaborator errors. Raised by the registry or access controller and
# propagated by the facade unchanged.
# ---------------------------------------------------------------------------


class MissingRole(Exception):
    def __init__(self, action: Any, caller: str) -> None:
        super().__init__(f"requireRole: MissingRole {action} for {caller}")
        self.action = action
        self.caller = caller


class ModuleNotFound(LookupError):
    def __init__(self, key: Any) -> None:
        super().__init__(f"Registry: module not found {key}")
        self.key = key
