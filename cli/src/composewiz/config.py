"""Settings loading and validation for composewiz."""

import copy
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from composewiz.dialogs import backend_names

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


DEFAULT_SETTINGS: Dict[str, Any] = {
    # Relative paths are resolved against the working directory.
    "env_file": ".env",
    "backend": "auto",
    "backup": True,
}


def config_dir() -> Path:
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "composewiz"


def default_settings_path() -> Path:
    """Return the default settings file path."""
    return config_dir() / "config.yaml"


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _expand_env_vars(obj):
    """Recursively expand ${VAR} references in string values."""
    if isinstance(obj, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), m.group(0)), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load settings from a YAML file, merged over :data:`DEFAULT_SETTINGS`.

    A missing file yields the defaults.  ``${VAR}`` references in string
    values are expanded from the environment; unset variables are left as-is.
    """
    path = path or default_settings_path()
    if not path.exists():
        return copy.deepcopy(DEFAULT_SETTINGS)
    with open(path, "r") as f:
        user_settings = yaml.safe_load(f) or {}
    if not isinstance(user_settings, dict):
        raise ValueError(f"{path} must contain a YAML mapping")
    merged = deep_merge(DEFAULT_SETTINGS, user_settings)
    return _expand_env_vars(merged)


def validate_settings(settings: Dict[str, Any]) -> list:
    """Validate settings and return a list of error strings (empty = valid)."""
    errors = []

    env_file = settings.get("env_file")
    if not isinstance(env_file, str) or not env_file.strip():
        errors.append("env_file must be a non-empty path string")

    backend = settings.get("backend")
    valid = backend_names()
    if backend not in valid:
        errors.append(f"backend must be one of: {', '.join(valid)} — got '{backend}'")

    if not isinstance(settings.get("backup"), bool):
        errors.append("backup must be true or false")

    return errors
