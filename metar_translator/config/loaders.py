"""
Translator configuration file loading.

This module handles:
- Path resolution (relative paths resolve against the working directory)
- YAML loading with ${VAR} / ${VAR:-default} environment expansion
- Optional ``*.local.yaml`` overrides deep-merged over the base file
"""

import os
import re
from typing import Optional

import yaml

from ..logging_config import get_logger

logger = get_logger(__name__)

# ${VAR}, ${VAR:-default} or ${VAR:=default}
_ENV_VAR_PATTERN = re.compile(r'\$\{([^}:]+)(:-|:=)?([^}]*)?\}')


def expand_env_vars(text: str) -> str:
    """
    Expand environment variable references with shell-style defaults.

    ``${VAR:-default}`` and ``${VAR:=default}`` fall back to the default when VAR
    is unset or empty. ``${VAR}`` without an operator is left untouched when VAR
    is unset. Remaining ``$VAR`` references go through ``os.path.expandvars``.
    """
    def replace_match(match):
        var_name = match.group(1)
        operator = match.group(2)
        default_value = match.group(3) or ""
        env_value = os.environ.get(var_name)

        if operator in (":-", ":="):
            return default_value if not env_value else env_value
        return env_value if env_value is not None else match.group(0)

    return os.path.expandvars(_ENV_VAR_PATTERN.sub(replace_match, text))


def resolve_config_path(path: str, base_dir: Optional[str] = None) -> str:
    if os.path.isabs(path):
        return path
    return os.path.abspath(os.path.join(base_dir or os.getcwd(), path))


def load_yaml_with_env_expansion(path: str) -> dict:
    """
    Load a YAML mapping after environment variable expansion.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed mapping (empty dict for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If the document is not a mapping
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    try:
        data = yaml.safe_load(expand_env_vars(text))
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Error parsing YAML configuration {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping, got {type(data).__name__}")
    return data


def deep_merge_dicts(base: dict, override: dict) -> dict:
    """
    Recursively merge *override* into a copy of *base*.

    Nested dicts merge key by key; an explicit ``None`` in *override* removes the
    key; any other value replaces the base value. Neither input is mutated.
    """
    merged = dict(base)
    for key, override_val in override.items():
        if override_val is None:
            merged.pop(key, None)
            continue
        base_val = merged.get(key)
        if isinstance(base_val, dict) and isinstance(override_val, dict):
            merged[key] = deep_merge_dicts(base_val, override_val)
        else:
            merged[key] = override_val
    return merged


def load_yaml_with_local_override(path: str) -> dict:
    """
    Load ``translator.yaml`` and deep-merge a sibling ``translator.local.yaml``.

    The base file is required. A local file that fails to load or is not a
    mapping is ignored with a warning.
    """
    base_data = load_yaml_with_env_expansion(path)

    stem, ext = os.path.splitext(path)
    local_path = f"{stem}.local{ext}"
    if not os.path.isfile(local_path):
        return base_data

    try:
        local_data = load_yaml_with_env_expansion(local_path)
    except (yaml.YAMLError, ValueError) as exc:
        logger.warning(
            "Failed to load local config override; using base config only",
            local_path=local_path,
            error=str(exc),
        )
        return base_data

    logger.info("Merging local config override", local_path=local_path)
    return deep_merge_dicts(base_data, local_data)
