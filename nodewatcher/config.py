from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Final

import yaml
from pydantic_settings import BaseSettings

from nodewatcher import __version__

logger = logging.getLogger(__name__)

# --- wire constants ---
NODEWATCHER_VERSION: Final = f"gnw-{__version__}"
FIRMWARE_VERSION: Final = "Generic"
PROTOCOL_VERSION: Final = "64"  # top-level key of the report envelope
DEFAULT_COLLECTOR_URL: Final = "https://monitoring.freifunk-franken.de/api/alfred"
LOOPBACK_INTERFACE: Final = "lo"

DEFAULT_CONFIG_FILE = Path("/etc/nodewatcher.yaml")


class Settings(BaseSettings):
    # --- node identity ---
    hostname: str = ""
    description: str = ""
    contact: str = ""
    hood: str = ""
    distname: str = ""
    distversion: str = ""
    lat: float = 0.0
    lng: float = 0.0

    # --- run flags ---
    debug: bool = False
    dry_run: bool = False

    # --- routing daemon ---
    babel_host: str = "::1"
    babel_port: int = 33123
    babel_timeout: float = 5.0  # seconds, bounds connect and the dump read

    # --- link inventory ---
    ip_command: str = "ip"

    # --- delivery ---
    collector_url: str = DEFAULT_COLLECTOR_URL
    http_timeout: float = 10.0

    model_config = {"env_prefix": "NODEWATCHER_"}


def read_config_file(path: str | Path) -> dict[str, Any]:
    """Load a YAML mapping of settings. A missing file yields no values."""
    path = Path(path)
    if not path.exists():
        logger.debug("No config file at %s", path)
        return {}
    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"{path}: invalid YAML: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping of settings, got {type(raw).__name__}")
    return raw


def load_settings(config_file: str | Path | None = None, **overrides: Any) -> Settings:
    """Build settings from defaults, environment, the YAML file and ``overrides``.

    Later sources win. ``None`` overrides are ignored so unset CLI flags
    don't mask file or environment values.
    """
    values = read_config_file(config_file) if config_file is not None else {}
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
