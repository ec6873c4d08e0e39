"""Module keys and action identifiers — keccak256 of a fixed name."""
from __future__ import annotations

from dataclasses import dataclass, field

from web3 import Web3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class SymbolicId:
    """Opaque identifier derived deterministically from a human-readable name.

    Equality and hashing use the digest only, so two ids built from the same
    name are interchangeable wherever they are used as dict keys.
    """

    name: str = field(compare=False)
    digest: bytes

    @classmethod
    def from_name(cls, name: str) -> "SymbolicId":
        if not name:
            raise ValueError("Identifier name must be non-empty")
        return cls(name=name, digest=bytes(Web3.keccak(text=name)))

    @property
    def hex(self) -> str:
        return Web3.to_hex(self.digest)

    def __str__(self) -> str:
        return self.name


class ModuleKey(SymbolicId):
    """Registry lookup key."""


class ActionId(SymbolicId):
    """Capability guarded by the access controller."""


# Registry keys
KEY_ACCESS_CONTROL = ModuleKey.from_name("ACCESS_CONTROL_MANAGER")
KEY_HEALTH_VIEW = ModuleKey.from_name("HEALTH_VIEW")
KEY_POSITION_VIEW = ModuleKey.from_name("POSITION_VIEW")
KEY_STATS = ModuleKey.from_name("VAULT_STATISTICS")
KEY_PRICE_ORACLE = ModuleKey.from_name("PRICE_ORACLE")

MODULE_KEYS: dict[str, ModuleKey] = {
    k.name: k
    for k in (
        KEY_ACCESS_CONTROL,
        KEY_HEALTH_VIEW,
        KEY_POSITION_VIEW,
        KEY_STATS,
        KEY_PRICE_ORACLE,
    )
}

# Actions
ACTION_VIEW_USER_DATA = ActionId.from_name("VIEW_USER_DATA")
ACTION_VIEW_SYSTEM_DATA = ActionId.from_name("VIEW_SYSTEM_DATA")
ACTION_VIEW_PRICE_DATA = ActionId.from_name("VIEW_PRICE_DATA")
ACTION_ADMIN = ActionId.from_name("ACTION_ADMIN")

ACTIONS: dict[str, ActionId] = {
    a.name: a
    for a in (
        ACTION_VIEW_USER_DATA,
        ACTION_VIEW_SYSTEM_DATA,
        ACTION_VIEW_PRICE_DATA,
        ACTION_ADMIN,
    )
}
