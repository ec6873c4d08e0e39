"""Registry protocol — symbolic module lookup."""
from typing import Any, Protocol

from ..keys import ModuleKey


class Registry(Protocol):
    """Maps a module key to the module object registered under it.

    ``resolve`` raises the registry's own not-found error for unset keys.
    """

    async def resolve(self, key: ModuleKey) -> Any: ...
