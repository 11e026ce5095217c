"""Runtime configuration for the CLI.

Settings are layered with increasing precedence: built-in defaults from
``Constants``, an optional YAML config file, environment variables, then CLI
flags. Loading never raises; bad input logs a warning and keeps the lower
layer's value.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Resolved runtime settings for one invocation."""

    registry_url: str = Constants.REGISTRY_URL_NPM
    request_timeout: int = Constants.REQUEST_TIMEOUT
    log_level: Optional[str] = None


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML (or JSON, which YAML accepts) config file.

    Returns:
        The top-level mapping, or an empty dict when the file is absent,
        unreadable or not a mapping.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config: %s", e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file without a top-level mapping: %s", config_path)
        return {}
    return data


def _coerce_timeout(value: Any, source: str) -> Optional[int]:
    try:
        timeout = int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid request timeout from %s: %r", source, value)
        return None
    if timeout <= 0:
        logger.warning("Ignoring non-positive request timeout from %s: %r", source, value)
        return None
    return timeout


def _apply(settings: Settings, values: Dict[str, Any], source: str) -> None:
    registry_url = values.get("registry_url")
    if registry_url:
        settings.registry_url = str(registry_url)
    if values.get("request_timeout") is not None:
        timeout = _coerce_timeout(values["request_timeout"], source)
        if timeout is not None:
            settings.request_timeout = timeout
    log_level = values.get("log_level")
    if log_level:
        settings.log_level = str(log_level).upper()


def resolve_settings(args: Any, environ: Optional[Dict[str, str]] = None) -> Settings:
    """Build Settings from defaults, config file, environment and CLI args."""
    env = os.environ if environ is None else environ
    settings = Settings()

    config_path = getattr(args, "CONFIG", None) or env.get(Constants.ENV_CONFIG)
    _apply(settings, load_config_file(config_path), "config file")

    _apply(
        settings,
        {
            "registry_url": env.get(Constants.ENV_REGISTRY_URL),
            "request_timeout": env.get(Constants.ENV_REQUEST_TIMEOUT),
            "log_level": env.get(Constants.ENV_LOG_LEVEL),
        },
        "environment",
    )

    _apply(
        settings,
        {
            "registry_url": getattr(args, "REGISTRY", None),
            "log_level": getattr(args, "LOG_LEVEL", None),
        },
        "command line",
    )
    return settings
