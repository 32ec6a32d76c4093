"""Configuration system for free-usdc-transfer.

Loads server config from an optional YAML file, supports environment
variable expansion, and falls back to the ``CDP_API_KEY_NAME`` /
``CDP_API_KEY_PRIVATE_KEY`` environment variables for the credentials.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from free_usdc_transfer.errors import ConfigError
from free_usdc_transfer.wallet.networks import NETWORKS, list_network_names


CONFIG_ENV_VAR = "FREE_USDC_CONFIG"
API_KEY_NAME_ENV_VAR = "CDP_API_KEY_NAME"
PRIVATE_KEY_ENV_VAR = "CDP_API_KEY_PRIVATE_KEY"


# ---------------------------------------------------------------------------
# Environment-variable expansion helper
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def _expand_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with their environment values.

    If the variable is not set the placeholder is replaced with an empty
    string so that :meth:`CdpConfig.missing` reports it.
    """

    def _replace(match: re.Match) -> str:
        return os.environ.get(match.group(1), "")

    return _ENV_VAR_RE.sub(_replace, value)


def _expand_env_recursive(obj: object) -> object:
    """Walk an arbitrary nested structure and expand env vars in strings."""
    if isinstance(obj, str):
        return _expand_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _expand_env_recursive(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_recursive(item) for item in obj]
    return obj


# ---------------------------------------------------------------------------
# Pydantic v2 models
# ---------------------------------------------------------------------------


class CdpConfig(BaseModel):
    """Coinbase Developer Platform API credentials."""

    api_key_name: str = ""
    private_key: str = ""

    def missing(self) -> list[str]:
        """Return the environment variable names of unset credentials."""
        missing = []
        if not self.api_key_name.strip():
            missing.append(API_KEY_NAME_ENV_VAR)
        if not self.private_key.strip():
            missing.append(PRIVATE_KEY_ENV_VAR)
        return missing


class WalletConfig(BaseModel):
    """Custodial wallet settings."""

    network: str = "base-mainnet"
    state_file: str = "mpc_info.json"

    @field_validator("network")
    @classmethod
    def _known_network(cls, value: str) -> str:
        if value not in NETWORKS:
            raise ValueError(f"unknown network '{value}', expected one of {list_network_names()}")
        return value


class ResolverConfig(BaseModel):
    """ENS name resolution settings. ENS lives on Ethereum mainnet."""

    rpc_url: str = "https://eth.llamarpc.com"


class ServerConfig(BaseModel):
    """Root configuration object for the MCP server."""

    name: str = "free-usdc-transfer"
    cdp: CdpConfig = Field(default_factory=CdpConfig)
    wallet: WalletConfig = Field(default_factory=WalletConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    provider_timeout_seconds: float = Field(default=60.0, gt=0)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def require_credentials(self) -> None:
        """Raise :class:`ConfigError` unless both CDP credentials are set."""
        missing = self.cdp.missing()
        if missing:
            raise ConfigError(
                f"Missing required credentials: {', '.join(missing)}",
                details={"missing": missing},
            )


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def _normalize_private_key(key: str) -> str:
    """PEM keys pasted into a single env var often carry literal ``\\n``."""
    return key.replace("\\n", "\n")


def resolve_config_path(path: Path | None = None) -> Path | None:
    """Return the explicit path, else ``$FREE_USDC_CONFIG``, else ``None``."""
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else None


def load_config(path: Path | None = None) -> ServerConfig:
    """Load and validate the server configuration.

    When *path* (or ``$FREE_USDC_CONFIG``) names a YAML file it is read and
    ``${VAR}`` placeholders are expanded before validation. Credentials left
    empty by the file are taken from the environment.

    Raises
    ------
    ConfigError
        If an explicitly named config file does not exist or the config
        does not validate.
    """
    config_path = resolve_config_path(path)
    raw_data: dict = {}
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        raw_data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}

    try:
        config = ServerConfig.model_validate(_expand_env_recursive(raw_data))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(f"Invalid config: {problems}") from exc

    if not config.cdp.api_key_name:
        config.cdp.api_key_name = os.environ.get(API_KEY_NAME_ENV_VAR, "")
    if not config.cdp.private_key:
        config.cdp.private_key = os.environ.get(PRIVATE_KEY_ENV_VAR, "")
    config.cdp.private_key = _normalize_private_key(config.cdp.private_key)

    if "LOG_LEVEL" in os.environ and "log_level" not in raw_data:
        config.log_level = os.environ["LOG_LEVEL"]
    return config
