"""Config manager — load JSON → apply env overrides → validate → DeckConfig."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from vscsdeck.core.models.config import DeckConfig

_log = logging.getLogger(__name__)

# Default config file, shipped inside the config package.
_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "vscsdeck_config.json"

# Environment variable → config field mapping.
# Keys are env-var names; values are ``(section, field, type)`` tuples.
_ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "VSCSDECK_LOG_LEVEL": ("system", "log_level", str),
    "VSCSDECK_DEV_MODE": ("system", "dev_mode", bool),
    "VSCSDECK_BRIDGE_PORT": ("bridge", "port", int),
    "VSCSDECK_BRIDGE_URL": ("client", "base_url", str),
    "VSCSDECK_PROFILE": ("client", "profile", str),
}


def _coerce(value: str, target_type: type) -> object:
    """Coerce a string env-var value to the expected Python type."""
    if target_type is bool:
        return value.strip().lower() in ("1", "true", "yes")
    return target_type(value)


def load_config(config_path: Path | str | None = None) -> DeckConfig:
    """Load, override, and validate the vscsdeck configuration.

    Args:
        config_path: Path to ``vscsdeck_config.json``.  When *None*, falls
            back to the ``VSCSDECK_CONFIG_FILE`` env-var and then the default
            location next to this module.

    Returns:
        A fully-validated :class:`DeckConfig` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If the merged config is invalid.
    """
    path = _resolve_config_path(config_path)
    _log.info("Loading config from %s", path)

    raw = json.loads(path.read_text(encoding="utf-8"))

    # Apply env overrides ------------------------------------------------
    for env_key, (section, field, typ) in _ENV_OVERRIDES.items():
        env_val = os.environ.get(env_key)
        if env_val is not None:
            raw.setdefault(section, {})[field] = _coerce(env_val, typ)
            _log.debug("Env override: %s → %s.%s = %r", env_key, section, field, env_val)

    config = DeckConfig(**raw)
    config.bridge.seed_file = _resolve_seed_path(config.bridge.seed_file, path.parent)
    return config


def _resolve_config_path(config_path: Path | str | None) -> Path:
    if config_path is not None:
        p = Path(config_path)
    else:
        env = os.environ.get("VSCSDECK_CONFIG_FILE")
        p = Path(env) if env else _DEFAULT_CONFIG_PATH
    if not p.is_file():
        raise FileNotFoundError(
            f"Config file not found: {p}\n"
            "Create vscsdeck_config.json or set VSCSDECK_CONFIG_FILE to a valid path."
        )
    return p


def _resolve_seed_path(seed_file: str | None, base: Path) -> str | None:
    """Relative seed paths are relative to the config file's directory."""
    if not seed_file:
        return None
    p = Path(seed_file)
    if not p.is_absolute():
        p = base / p
    return str(p)
