"""Application settings from defaults, an optional YAML file and env vars."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "JSON_EXTRACTOR_"


@dataclass(frozen=True)
class AppConfig:
    moli_mode: bool = False
    indent: int = 2
    log_level: str = "INFO"
    server_name: str = "127.0.0.1"
    server_port: int = 7860
    export_dir: Optional[str] = None
    preview_rows: int = 200


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def load_yaml_config(path: Optional[str]) -> Dict[str, Any]:
    """Load settings from a YAML file. Returns an empty dict if there is none."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s, using defaults: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Build AppConfig; environment variables override the YAML file."""
    env = os.environ if environ is None else environ
    yaml_data = load_yaml_config(path or env.get(f"{ENV_PREFIX}CONFIG"))

    def setting(name: str, default: Any) -> Any:
        env_value = env.get(f"{ENV_PREFIX}{name.upper()}")
        if env_value is not None:
            return env_value
        return yaml_data.get(name, default)

    defaults = AppConfig()
    export_dir = setting("export_dir", defaults.export_dir)
    return AppConfig(
        moli_mode=_to_bool(setting("moli_mode", defaults.moli_mode)),
        indent=int(setting("indent", defaults.indent)),
        log_level=str(setting("log_level", defaults.log_level)).upper(),
        server_name=str(setting("server_name", defaults.server_name)),
        server_port=int(setting("server_port", defaults.server_port)),
        export_dir=str(export_dir) if export_dir else None,
        preview_rows=int(setting("preview_rows", defaults.preview_rows)),
    )
