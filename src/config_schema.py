"""Pydantic schema for configuration validation.

All config values are validated at startup. Typos and invalid values
fail fast with clear error messages.

Usage:
    from config_schema import load_validated_config, AppConfig
    config = load_validated_config("config/config.yaml")
    # config is now a validated AppConfig instance
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# BASE MODEL WITH STRICT VALIDATION
# =============================================================================

class StrictModel(BaseModel):
    """Base model that rejects unknown fields (catches typos)."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# COLLECTION MODEL
# =============================================================================

class CollectionConfig(StrictModel):
    """Parameters fixed at collection initialization.

    cost and max_mint_per_call can later be changed by the owner;
    max_supply cannot.
    """

    name: str = Field(default="Dapp Punks", description="Collection name")
    symbol: str = Field(default="DP", description="Collection ticker symbol")
    owner: str = Field(
        default="owner",
        min_length=1,
        description="Identity allowed to administer the collection"
    )
    cost: int = Field(
        default=10,
        ge=0,
        description="Price per token in the smallest currency unit"
    )
    max_supply: int = Field(default=25, ge=0, description="Hard cap on tokens ever minted")
    max_mint_per_call: int = Field(
        default=5,
        ge=0,
        description="Most tokens a single mint call may request"
    )
    activation_time: int = Field(
        default=0,
        ge=0,
        description="Unix timestamp before which minting is rejected"
    )
    base_uri: str = Field(default="", description="Prefix for token metadata URIs")
    uri_extension: str = Field(default=".json", description="Suffix for token metadata URIs")

    @model_validator(mode="after")
    def per_call_limit_within_supply(self) -> "CollectionConfig":
        if self.max_mint_per_call > self.max_supply:
            raise ValueError(
                f"max_mint_per_call ({self.max_mint_per_call}) cannot exceed "
                f"max_supply ({self.max_supply})"
            )
        return self


# =============================================================================
# WHITELIST MODEL
# =============================================================================

class WhitelistConfig(StrictModel):
    """Initial allow-list state."""

    enabled: bool = Field(
        default=False,
        description="Start with whitelist-only minting switched on"
    )
    addresses: list[str] = Field(
        default_factory=list,
        description="Addresses on the allow-list at initialization"
    )


# =============================================================================
# LOGGING MODEL
# =============================================================================

class LoggingConfig(StrictModel):
    """Event log and diagnostic logging configuration."""

    output_file: str = Field(default="events.jsonl", description="Single-file event log path")
    default_recent: int = Field(
        default=50,
        gt=0,
        description="Events returned by read_recent when no count is given"
    )
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Level for the standard library logging root"
    )


# =============================================================================
# ROOT CONFIG
# =============================================================================

class AppConfig(StrictModel):
    """Root configuration model."""

    collection: CollectionConfig = Field(default_factory=CollectionConfig)
    whitelist: WhitelistConfig = Field(default_factory=WhitelistConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# LOADING FUNCTIONS
# =============================================================================

def load_validated_config(config_path: str | Path = "config/config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to config YAML file.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid (with detailed error message).
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    return AppConfig.model_validate(raw_config)


def validate_config_dict(config_dict: dict[str, Any]) -> AppConfig:
    """Validate a configuration dictionary.

    Raises:
        pydantic.ValidationError: If config is invalid.
    """
    return AppConfig.model_validate(config_dict)


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "AppConfig",
    "CollectionConfig",
    "WhitelistConfig",
    "LoggingConfig",
    "load_validated_config",
    "validate_config_dict",
]
