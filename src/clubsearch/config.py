"""Configuration helpers: YAML connection settings and the shared CLI parser."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_FILENAME = "config.yaml"
CONFIG_ENV_VAR = "CLUBSEARCH_CONFIG"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ElasticSearchSettings:
    """Resolved connection settings for the search engine."""

    address: str
    username: Optional[str] = None
    password: Optional[str] = None
    api_key: Optional[str] = None
    verify_tls: bool = True
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        # Keep credentials out of progress output.
        return (
            f"ElasticSearchSettings(address={self.address!r}, username={self.username!r}, "
            f"password={'***' if self.password else None}, verify_tls={self.verify_tls}, "
            f"timeout={self.timeout})"
        )


def default_config_path() -> Path:
    return Path(os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILENAME)


def read_config_file(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Load the YAML configuration file; raise ConfigError when unusable."""

    config_path = Path(path).expanduser() if path else default_config_path()
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed config file {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return data


def settings_from_dict(data: Dict[str, Any]) -> ElasticSearchSettings:
    """Build settings from the ``ElasticSearch`` section of a parsed config."""

    section = data.get("ElasticSearch")
    if not isinstance(section, dict):
        raise ConfigError("Missing 'ElasticSearch' section in config")
    address = section.get("Address")
    if not isinstance(address, str) or not address.strip():
        raise ConfigError("Missing 'ElasticSearch.Address' in config")

    try:
        timeout = float(section.get("Timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid 'ElasticSearch.Timeout': {section.get('Timeout')!r}") from exc
    if not timeout > 0:
        raise ConfigError(f"'ElasticSearch.Timeout' must be positive, got {timeout}")

    verify_tls = section.get("VerifyTLS", True)
    if not isinstance(verify_tls, bool):
        raise ConfigError(f"'ElasticSearch.VerifyTLS' must be true or false, got {verify_tls!r}")

    return ElasticSearchSettings(
        address=address.strip(),
        username=section.get("Username") or None,
        password=section.get("Password") or None,
        api_key=section.get("ApiKey") or None,
        verify_tls=verify_tls,
        timeout=timeout,
    )


def load_config(path: Optional[str | Path] = None) -> ElasticSearchSettings:
    """Read the config file once and return immutable connection settings."""

    return settings_from_dict(read_config_file(path))


def build_arg_parser(description: str = "Club info search client.") -> argparse.ArgumentParser:
    """Return the CLI parser shared by the entry points."""

    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", default=None, help="Path to the YAML config file.")
    return parser


__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "CONFIG_ENV_VAR",
    "ElasticSearchSettings",
    "default_config_path",
    "read_config_file",
    "settings_from_dict",
    "load_config",
    "build_arg_parser",
]
