"""DigitalOcean provider configuration.

``DigitalOcean`` is an immutable config dataclass. It can be built directly
or loaded from TOML: ``~/.docloud/defaults.toml`` (global) merged with
``docloud.toml`` (project), read from their ``[digitalocean]`` tables.

Example:
    >>> from docloud.config import DigitalOcean
    >>> instances = DigitalOcean(token="dop_v1_...").build()
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from docloud.client import MAX_PER_PAGE, DropletClient
from docloud.exceptions import ConfigurationError
from docloud.logging import LogConfig, setup_logging
from docloud.metadata import DROPLET_ID_METADATA_URL

if TYPE_CHECKING:
    from docloud.instances import DropletInstances

type RawConfig = dict[str, Any]

GLOBAL_CONFIG_PATH = Path.home() / ".docloud" / "defaults.toml"
PROJECT_CONFIG_NAME = "docloud.toml"
TOKEN_ENV_VAR = "DIGITALOCEAN_TOKEN"


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class DigitalOcean:
    """DigitalOcean provider configuration.

    Args:
        token: API token. Falls back to the DIGITALOCEAN_TOKEN env var.
        metadata_url: Metadata endpoint returning the current droplet's ID.
        per_page: Page size for droplet listings (API maximum is 200).
        metadata_timeout: Timeout in seconds for metadata requests. None waits indefinitely.
        logging: Enable docloud logging on ``build()``. True uses LogConfig defaults.
    """

    token: str | None = None
    metadata_url: str = DROPLET_ID_METADATA_URL
    per_page: int = MAX_PER_PAGE
    metadata_timeout: float | None = None
    logging: LogConfig | bool = False

    def __post_init__(self) -> None:
        if self.token is not None and not isinstance(self.token, str):
            raise ConfigurationError(f"token must be a string, got {type(self.token).__name__}")
        if not isinstance(self.metadata_url, str):
            raise ConfigurationError(
                f"metadata_url must be a string, got {type(self.metadata_url).__name__}"
            )
        if isinstance(self.per_page, bool) or not isinstance(self.per_page, int):
            raise ConfigurationError(
                f"per_page must be an integer, got {type(self.per_page).__name__}"
            )
        if not 1 <= self.per_page <= MAX_PER_PAGE:
            raise ConfigurationError(
                f"per_page must be between 1 and {MAX_PER_PAGE}, got {self.per_page}"
            )
        match self.metadata_timeout:
            case None:
                pass
            case bool() | str():
                raise ConfigurationError(
                    "metadata_timeout must be a number, "
                    f"got {type(self.metadata_timeout).__name__}"
                )
            case int() | float() as t if t <= 0:
                raise ConfigurationError(f"metadata_timeout must be positive, got {t}")
            case int() | float():
                pass
            case other:
                raise ConfigurationError(
                    f"metadata_timeout must be a number, got {type(other).__name__}"
                )
        if not isinstance(self.logging, LogConfig | bool):
            raise ConfigurationError(
                f"logging must be a boolean or LogConfig, got {type(self.logging).__name__}"
            )

    def build(self) -> DropletInstances:
        """Create an instance resolver from this configuration.

        When logging is enabled, the resolver owns the log handlers and
        removes them on ``close()``.
        """
        from docloud.instances import DropletInstances

        instances = DropletInstances(
            DropletClient.from_token(self.token or get_token()),
            metadata_url=self.metadata_url,
            metadata_timeout=self.metadata_timeout,
            per_page=self.per_page,
        )
        if self.logging:
            log_config = LogConfig() if self.logging is True else self.logging
            instances.log_handler_ids = setup_logging(log_config)
        return instances


def get_token() -> str:
    """Get DigitalOcean API token from environment."""
    token = os.environ.get(TOKEN_ENV_VAR)
    if not token:
        raise ConfigurationError(
            "DigitalOcean API token not found. "
            f"Set {TOKEN_ENV_VAR} environment variable."
        )
    return token


# =============================================================================
# TOML Loading
# =============================================================================


def _deep_merge(base: RawConfig, override: RawConfig) -> RawConfig:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_toml(path: Path) -> RawConfig:
    if not path.is_file():
        return {}
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e


def load_config(
    *,
    project_dir: Path | None = None,
    global_path: Path | None = None,
) -> RawConfig:
    global_cfg = _read_toml(global_path or GLOBAL_CONFIG_PATH)
    project_path = (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME
    project_cfg = _read_toml(project_path)

    merged = _deep_merge(global_cfg, project_cfg)
    merged.setdefault("digitalocean", {})
    return merged


def resolve_provider(
    *,
    project_dir: Path | None = None,
    global_path: Path | None = None,
) -> DigitalOcean:
    """Build a DigitalOcean config from the merged TOML files."""
    raw = load_config(project_dir=project_dir, global_path=global_path)["digitalocean"]

    known = {f.name for f in fields(DigitalOcean)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown digitalocean settings: {', '.join(unknown)}. "
            f"Valid: {', '.join(sorted(known))}"
        )

    raw = dict(raw)
    if isinstance(raw.get("logging"), dict):
        raw["logging"] = _build_log_config(raw["logging"])
    return DigitalOcean(**raw)


def _build_log_config(raw: RawConfig) -> LogConfig:
    known = {f.name for f in fields(LogConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown digitalocean.logging settings: {', '.join(unknown)}. "
            f"Valid: {', '.join(sorted(known))}"
        )
    return LogConfig(**raw)


__all__ = [
    "DigitalOcean",
    "get_token",
    "load_config",
    "resolve_provider",
]
