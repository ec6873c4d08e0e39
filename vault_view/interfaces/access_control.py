"""Access controller protocol — capability checks."""
from typing import Protocol

from ..keys import ActionId


class AccessController(Protocol):
    """Abstract interface for role enforcement."""

    async def require_role(self, action: ActionId, caller: str) -> None: ...
