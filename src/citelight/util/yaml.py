import os
import re
from pathlib import Path
from typing import Any, cast

import structlog
import yaml  # type: ignore[import-untyped]

logger = structlog.get_logger()

# $(VAR) or $(VAR:-fallback)
_ENV_PATTERN = re.compile(r"\$\(([A-Za-z_][A-Za-z0-9_]*)(?::-([^)]*))?\)")


def _resolve_env_vars(
    value: Any,
    required_vars: set[str] | None = None,
) -> Any:
    """Recursively resolve ``$(VAR)`` placeholders to environment variables.

    ``$(VAR:-fallback)`` uses *fallback* when ``VAR`` is unset or empty.
    Names listed in *required_vars* raise :class:`ValueError` when they are
    missing and carry no fallback.
    """

    def _replace(match: re.Match[str]) -> str:
        var_name, fallback = match.group(1), match.group(2)
        env_value = os.getenv(var_name)
        if env_value:
            return env_value
        if fallback is not None:
            return fallback
        if required_vars and var_name in required_vars:
            msg = f"Missing required environment variable: {var_name}"
            raise ValueError(msg)
        return ""

    if isinstance(value, str):
        return _ENV_PATTERN.sub(_replace, value)
    if isinstance(value, dict):
        return {k: _resolve_env_vars(v, required_vars) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_env_vars(item, required_vars) for item in value]
    return value


def load_yaml_config(
    config_path: Path,
    defaults: dict[str, Any] | None = None,
    required_vars: set[str] | None = None,
) -> dict[str, Any]:
    """Load a YAML mapping and resolve its ``$(VAR)`` placeholders.

    Args:
        config_path: Path to the YAML file.
        defaults: Returned when the file does not exist.
        required_vars: Environment variables that must be set.
    """
    if not config_path.exists():
        logger.warning("config_not_found", path=str(config_path))
        return defaults or {}

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    return cast(dict[str, Any], _resolve_env_vars(raw, required_vars))
