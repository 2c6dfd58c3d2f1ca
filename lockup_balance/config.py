"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .errors import SnapshotDecodeError
from .formatting import NEAR_NOMINATION_EXP, parse_amount
from .models import BalanceBreakdown, ContractVersion
from .snapshot import parse_contract_version
from .storage import DEFAULT_POLICY, DEFAULT_RESERVATIONS, StorageReservationPolicy

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TokenConfig:
    symbol: str = "NEAR"
    nomination_exp: int = NEAR_NOMINATION_EXP


@dataclass(frozen=True)
class DisplayConfig:
    default_decimals: int = 2
    field_decimals: dict[str, int] = field(default_factory=lambda: {"total": 5})


@dataclass(frozen=True)
class StorageConfig:
    reservations: dict[str, str] = field(
        default_factory=lambda: {v.value: s for v, s in DEFAULT_RESERVATIONS.items()}
    )


@dataclass(frozen=True)
class AppConfig:
    token: TokenConfig = field(default_factory=TokenConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _mapping(raw: dict[str, Any], key: str, where: str = "") -> dict[str, Any]:
    """Return the mapping under ``key``; an empty or missing key gives ``{}``."""
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(
            f"Config section '{where}{key}' must be a mapping, got {type(value).__name__}"
        )
    return value


def _build_token(raw: dict[str, Any]) -> TokenConfig:
    return TokenConfig(
        symbol=str(raw.get("symbol", "NEAR")),
        nomination_exp=int(raw.get("nomination_exp", NEAR_NOMINATION_EXP)),
    )


def _build_display(raw: dict[str, Any]) -> DisplayConfig:
    field_decimals = (
        _mapping(raw, "field_decimals", "display.")
        if "field_decimals" in raw
        else {"total": 5}
    )
    return DisplayConfig(
        default_decimals=int(raw.get("default_decimals", 2)),
        field_decimals={str(k): int(v) for k, v in field_decimals.items()},
    )


def _build_storage(raw: dict[str, Any]) -> StorageConfig:
    reservations = StorageConfig().reservations
    # YAML turns bare numbers into floats; keep the text so 3.5 stays exact
    configured = _mapping(raw, "reservations", "storage.")
    reservations.update({str(k).lower(): str(v) for k, v in configured.items()})
    return StorageConfig(reservations=reservations)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root; built-in defaults apply when that file is absent.
    """
    load_dotenv()

    if config_path is None:
        default_path = Path(__file__).resolve().parent.parent / "config.yaml"
        if not default_path.exists():
            logger.info("No config.yaml found, using built-in defaults")
            cfg = AppConfig()
            _validate(cfg)
            return cfg
        config_path = default_path
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        token=_build_token(_mapping(raw, "token")),
        display=_build_display(_mapping(raw, "display")),
        storage=_build_storage(_mapping(raw, "storage")),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def build_policy(cfg: AppConfig) -> StorageReservationPolicy:
    """Storage reservation policy with the configured table over the defaults."""
    overrides: dict[ContractVersion, int] = {}
    for name, text in cfg.storage.reservations.items():
        overrides[parse_contract_version(name)] = parse_amount(
            text, cfg.token.nomination_exp
        )
    return DEFAULT_POLICY.with_overrides(overrides)


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    exp = cfg.token.nomination_exp
    if not 0 <= exp <= 38:
        raise ValueError(f"token.nomination_exp must be in 0..38, got {exp}")
    if not cfg.token.symbol:
        raise ValueError("token.symbol must not be empty")

    known_fields = {f.name for f in fields(BalanceBreakdown)}
    for name in cfg.display.field_decimals:
        if name not in known_fields:
            raise ValueError(
                f"display.field_decimals names unknown field '{name}'; "
                f"expected one of {sorted(known_fields)}"
            )

    decimals = {"default_decimals": cfg.display.default_decimals}
    decimals.update(cfg.display.field_decimals)
    for name, value in decimals.items():
        if not 0 <= value <= exp:
            raise ValueError(
                f"Display decimals for '{name}' must be in 0..{exp}, got {value}"
            )

    for name, text in cfg.storage.reservations.items():
        try:
            parse_contract_version(name)
        except SnapshotDecodeError:
            raise ValueError(
                f"Storage reservation references unknown contract version '{name}'"
            ) from None
        try:
            parse_amount(text, exp)
        except (ValueError, OverflowError) as e:
            raise ValueError(
                f"Storage reservation for '{name}' is not a valid amount: {e}"
            ) from None
