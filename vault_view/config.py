"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .keys import ACTIONS, MODULE_KEYS
from .models import GlobalStatistics, HealthRecord, PositionRecord

logger = logging.getLogger(__name__)

PRICE_PROVIDERS = ("static", "pyth")

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RegistryConfig:
    modules: tuple[str, ...] = tuple(MODULE_KEYS)


@dataclass(frozen=True)
class AccessControlConfig:
    grants: dict[str, tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class SnapshotConfig:
    health: dict[str, HealthRecord] = field(default_factory=dict)
    positions: tuple[PositionRecord, ...] = ()
    statistics: GlobalStatistics = field(default_factory=GlobalStatistics)


@dataclass(frozen=True)
class PythConfig:
    hermes_url: str = "https://hermes.pyth.network/v2/updates/price/latest"
    timeout: int = 30
    feeds: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PriceOracleConfig:
    provider: str = "static"
    static: dict[str, int] = field(default_factory=dict)
    pyth: PythConfig = field(default_factory=PythConfig)


@dataclass(frozen=True)
class AppConfig:
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    access_control: AccessControlConfig = field(default_factory=AccessControlConfig)
    snapshot: SnapshotConfig = field(default_factory=SnapshotConfig)
    price_oracle: PriceOracleConfig = field(default_factory=PriceOracleConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {_interpolate_env(k): _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _identity(value: Any, where: str) -> str:
    # YAML 1.1 reads an unquoted 0x... scalar as an int.
    if not isinstance(value, str):
        raise ValueError(f"{where} must be a quoted string, got {value!r}")
    return value


def _build_registry(raw: dict[str, Any]) -> RegistryConfig:
    if "modules" not in raw:
        return RegistryConfig()
    return RegistryConfig(modules=tuple(raw.get("modules") or []))


def _build_access_control(raw: dict[str, Any]) -> AccessControlConfig:
    grants: dict[str, tuple[str, ...]] = {}
    for caller, actions in (raw.get("grants") or {}).items():
        grants[_identity(caller, "Grant caller")] = tuple(actions or [])
    return AccessControlConfig(grants=grants)


def _build_snapshot(raw: dict[str, Any]) -> SnapshotConfig:
    health: dict[str, HealthRecord] = {}
    for user, rec in (raw.get("health") or {}).items():
        health[_identity(user, "Health user")] = HealthRecord(
            health_factor=int(rec.get("health_factor", 0)),
            cache_valid=bool(rec.get("cache_valid", False)),
        )

    positions: list[PositionRecord] = []
    for p in raw.get("positions") or []:
        positions.append(
            PositionRecord(
                user=_identity(p.get("user", ""), "Position user"),
                asset=_identity(p.get("asset", ""), "Position asset"),
                collateral=int(p.get("collateral", 0)),
                debt=int(p.get("debt", 0)),
            )
        )

    stats = raw.get("statistics") or {}
    return SnapshotConfig(
        health=health,
        positions=tuple(positions),
        statistics=GlobalStatistics(
            total_users=int(stats.get("total_users", 0)),
            active_users=int(stats.get("active_users", 0)),
            total_collateral=int(stats.get("total_collateral", 0)),
            total_debt=int(stats.get("total_debt", 0)),
            last_update_time=int(stats.get("last_update_time", 0)),
        ),
    )


def _build_price_oracle(raw: dict[str, Any]) -> PriceOracleConfig:
    pyth_raw = raw.get("pyth") or {}
    return PriceOracleConfig(
        provider=raw.get("provider", "static"),
        static={
            _identity(k, "Static price asset"): int(v)
            for k, v in (raw.get("static") or {}).items()
        },
        pyth=PythConfig(
            hermes_url=pyth_raw.get("hermes_url", PythConfig.hermes_url),
            timeout=int(pyth_raw.get("timeout", 30)),
            feeds={
                _identity(k, "Pyth feed asset"): _identity(v, "Pyth feed id")
                for k, v in (pyth_raw.get("feeds") or {}).items()
            },
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        registry=_build_registry(raw.get("registry") or {}),
        access_control=_build_access_control(raw.get("access_control") or {}),
        snapshot=_build_snapshot(raw.get("snapshot") or {}),
        price_oracle=_build_price_oracle(raw.get("price_oracle") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    for name in cfg.registry.modules:
        if name not in MODULE_KEYS:
            raise ValueError(f"Registry references unknown module '{name}'")

    for caller, actions in cfg.access_control.grants.items():
        for action in actions:
            if action not in ACTIONS:
                raise ValueError(
                    f"Grant for '{caller}' references unknown action '{action}'"
                )

    for pos in cfg.snapshot.positions:
        if pos.collateral < 0 or pos.debt < 0:
            raise ValueError(
                f"Position {pos.user}/{pos.asset} has a negative amount"
            )

    if cfg.price_oracle.provider not in PRICE_PROVIDERS:
        raise ValueError(
            f"Unknown price oracle provider '{cfg.price_oracle.provider}'"
        )
