"""Configuration constants, env getters and the YAML settings file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .core import logger
from .models import RenderOptions

# Configuration constants
ETH_DECIMALS = 18
MAX_WEI = 2**256 - 1
DEFAULT_SCHEME = "ethereum"
DEFAULT_SETTINGS_PATH = "ethqr.yml"
DEFAULT_OUTPUT_DIR = "."
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

# Env var -> RenderOptions field
_RENDER_ENV = {
    "QR_WIDTH": "width",
    "QR_MARGIN": "margin",
    "QR_DARK": "dark",
    "QR_LIGHT": "light",
    "QR_ERROR": "error",
}
_INT_FIELDS = {"width", "margin"}


@dataclass
class Settings:
    render: RenderOptions = field(default_factory=RenderOptions)
    scheme: str = DEFAULT_SCHEME
    checksum_address: bool = False

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Settings":
        """Load settings from YAML, then apply environment overrides.

        Missing file means defaults. Environment wins over the file.
        """
        path_obj = Path(path or get_settings_path())
        raw: Dict[str, Any] = {}
        if path_obj.exists():
            with path_obj.open("r", encoding="utf-8") as handle:
                raw = yaml.safe_load(handle) or {}
        render_raw = dict(raw.get("render", {}) or {})
        render_raw.update(_render_overrides_from_env())
        checksum = raw.get("checksum_address", False)
        env_checksum = os.getenv("ETHQR_CHECKSUM_ADDRESS")
        if env_checksum is not None:
            checksum = env_checksum.lower() in ("1", "true", "yes")
        return cls(
            render=RenderOptions(**render_raw),
            scheme=str(raw.get("scheme", DEFAULT_SCHEME)),
            checksum_address=bool(checksum),
        )


def _render_overrides_from_env() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_name, field_name in _RENDER_ENV.items():
        value = os.getenv(env_name)
        if value is None or value == "":
            continue
        if field_name in _INT_FIELDS:
            try:
                overrides[field_name] = int(value)
            except ValueError:
                logger.warning(f"Invalid {env_name} value: {value}")
                continue
        else:
            overrides[field_name] = value
    return overrides


def get_settings_path() -> str:
    """Get settings file path."""
    return os.getenv("ETHQR_CONFIG", DEFAULT_SETTINGS_PATH)


def get_output_dir() -> str:
    """Get directory where downloaded QR images are written."""
    return os.getenv("ETHQR_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)


def get_log_level() -> str:
    """Get logging level from environment."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_server_config() -> dict:
    """Get web server configuration."""
    port_env = os.getenv("ETHQR_PORT")
    port = DEFAULT_PORT
    if port_env:
        try:
            port = int(port_env)
        except ValueError:
            logger.warning(f"Invalid ETHQR_PORT value: {port_env}")
    return {
        "host": os.getenv("ETHQR_HOST", DEFAULT_HOST),
        "port": port,
        "log_level": os.getenv("ETHQR_LOG_LEVEL", "info"),
    }
