"""Upgradeable facade — stable identity in front of swappable logic."""
from __future__ import annotations

import logging
from typing import Any

from ..errors import ZeroAddress
from ..interfaces.registry import Registry
from .dashboard import DashboardLogic, FacadeState

logger = logging.getLogger(__name__)


class UpgradeableFacade:
    """Holds ``FacadeState`` and forwards entry points to the active logic.

    Upgrading replaces the logic class; the state object (and therefore the
    registry reference) is handed to the new logic as-is.
    """

    def __init__(self, logic: type[DashboardLogic] = DashboardLogic) -> None:
        if logic is None:
            raise ZeroAddress("Logic target must not be null")
        self._state = FacadeState()
        self._logic_cls = logic
        self._logic = logic(self._state)

    @classmethod
    def deploy(
        cls, registry: Registry | None, logic: type[DashboardLogic] = DashboardLogic
    ) -> "UpgradeableFacade":
        """Create and initialize in one step."""
        facade = cls(logic)
        facade.initialize(registry)
        return facade

    @property
    def implementation(self) -> type[DashboardLogic]:
        return self._logic_cls

    def initialize(self, registry: Registry | None) -> None:
        self._logic.initialize(registry)

    async def upgrade_to(self, caller: str, new_logic: type[DashboardLogic] | None) -> None:
        """Swap the active logic after the current logic authorizes it."""
        await self._logic.authorize_upgrade(caller, new_logic)
        logic = new_logic(self._state)
        previous = self._logic_cls
        self._logic, self._logic_cls = logic, new_logic
        logger.info(
            "Facade logic upgraded %s -> %s by %s",
            previous.__name__,
            new_logic.__name__,
            caller,
        )

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._logic, name)
