"""Configuration Pydantic models: DeckConfig, BridgeConfig, ClientConfig, SystemConfig."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BridgeConfig(BaseModel):
    """Loopback listener settings for the bridge process."""

    model_config = ConfigDict(extra="forbid")

    host: str = Field(default="127.0.0.1", description="Listen address (loopback only)")
    port: int = Field(default=18084, ge=1, le=65535, description="Listen port")
    seed_file: str | None = Field(
        default=None,
        description="JSON file seeding the in-memory host (frequencies, lines, toggles)",
    )


class ButtonConfig(BaseModel):
    """One simulated deck button: its context id, kind, and initial settings."""

    model_config = ConfigDict(extra="forbid")

    context_id: str
    kind: str = Field(default="line", description="line | frequency | toggle")
    settings: dict[str, Any] = Field(default_factory=dict)


class ClientConfig(BaseModel):
    """Deck-side polling and presentation settings."""

    model_config = ConfigDict(extra="forbid")

    base_url: str = Field(default="http://127.0.0.1:18084", description="Bridge base URL")
    request_timeout: float = Field(default=2.0, gt=0, description="Per-request timeout in seconds")
    profile: str = Field(default="vatsys", description="Presentation profile: vatsys | classic")
    retain_slots_on_disappear: bool = Field(
        default=True,
        description="Keep a hidden button's auto slot in the assignment ordering",
    )
    location_aliases: dict[str, dict[str, str]] = Field(
        default_factory=lambda: {
            "MUN": {"code": "MUN", "label": "Mungo"},
            "SY": {"label": "Sydney"},
        },
        description="Station-code overrides keyed by location token",
    )
    buttons: list[ButtonConfig] = Field(
        default_factory=list,
        description="Button layout for the deck simulator",
    )
    grid_columns: int = Field(default=5, ge=1, description="Simulator grid width")


class SystemConfig(BaseModel):
    """Non-deck runtime settings."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str = Field(default="logs", description="Directory for rotating log files")
    webui_port: int = Field(default=8090, description="NiceGUI deck simulator port")
    dev_mode: bool = Field(default=False, description="Force DEBUG logging, including per-request bridge logs")


class DeckConfig(BaseModel):
    """Top-level configuration loaded from ``vscsdeck_config.json``."""

    model_config = ConfigDict(extra="forbid")

    bridge: BridgeConfig = Field(default_factory=BridgeConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)
