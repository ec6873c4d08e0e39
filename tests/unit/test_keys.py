"""Unit tests for module keys and action identifiers."""
from __future__ import annotations

import pytest

from vault_view.keys import (
    ACTIONS,
    KEY_ACCESS_CONTROL,
    KEY_STATS,
    MODULE_KEYS,
    ActionId,
    ModuleKey,
)


class TestSymbolicId:
    def test_keccak_digest(self) -> None:
        assert KEY_STATS.hex == (
            "0x81e10853f6ca1239c67be9009513f05a266a0dc86f0901f26f5d74ddf7616ff3"
        )
        assert len(KEY_STATS.digest) == 32

    def test_deterministic(self) -> None:
        assert ModuleKey.from_name("ACCESS_CONTROL_MANAGER") == KEY_ACCESS_CONTROL
        assert hash(ModuleKey.from_name("ACCESS_CONTROL_MANAGER")) == hash(KEY_ACCESS_CONTROL)

    def test_distinct_names_distinct_keys(self) -> None:
        digests = {k.digest for k in MODULE_KEYS.values()}
        assert len(digests) == len(MODULE_KEYS)

    def test_str_is_name(self) -> None:
        assert str(KEY_STATS) == "VAULT_STATISTICS"

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError):
            ActionId.from_name("")

    def test_usable_as_dict_key(self) -> None:
        table = {ModuleKey.from_name("HEALTH_VIEW"): "health"}
        assert table[MODULE_KEYS["HEALTH_VIEW"]] == "health"


class TestTables:
    def test_module_names(self) -> None:
        assert set(MODULE_KEYS) == {
            "ACCESS_CONTROL_MANAGER",
            "HEALTH_VIEW",
            "POSITION_VIEW",
            "VAULT_STATISTICS",
            "PRICE_ORACLE",
        }

    def test_action_names(self) -> None:
        assert set(ACTIONS) == {
            "VIEW_USER_DATA",
            "VIEW_SYSTEM_DATA",
            "VIEW_PRICE_DATA",
            "ACTION_ADMIN",
        }
        assert all(isinstance(a, ActionId) for a in ACTIONS.values())
