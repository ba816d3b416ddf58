from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..aviation.report import NEWLINE_SEPARATOR
from ..aviation.tables import DEFAULT_LANGUAGE, get_phrasebook
from .loaders import load_yaml_with_local_override, resolve_config_path

ENV_PREFIX = "METAR_TRANSLATOR_"


@dataclass(frozen=True)
class TranslatorSettings:
    language: str = DEFAULT_LANGUAGE
    separator: str = NEWLINE_SEPARATOR
    log_level: str = "INFO"
    log_format: str = "console"


def unescape_separator(value: str) -> str:
    # "\n" and "\t" escapes are accepted.
    return value.replace("\\n", "\n").replace("\\t", "\t")


def load_settings(
    path: Optional[str] = None,
    *,
    language: Optional[str] = None,
    separator: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> TranslatorSettings:
    """Resolve settings: explicit arguments, then environment, then the YAML file, then defaults."""
    env = os.environ if environ is None else environ
    raw: Dict[str, Any] = {}
    if path:
        raw = load_yaml_with_local_override(resolve_config_path(path))
    section = raw.get("translator") if isinstance(raw.get("translator"), dict) else {}

    def _pick(arg: Optional[str], key: str, default: str) -> str:
        if arg is not None:
            return arg
        env_val = env.get(ENV_PREFIX + key.upper())
        if env_val:
            return env_val
        file_val = section.get(key)
        if file_val is not None:
            return str(file_val)
        return default

    lang = _pick(language, "language", DEFAULT_LANGUAGE).strip().lower()
    get_phrasebook(lang)  # raises ValueError for unsupported languages

    sep = unescape_separator(_pick(separator, "separator", NEWLINE_SEPARATOR))
    if not sep:
        raise ValueError("separator must not be empty")

    return TranslatorSettings(
        language=lang,
        separator=sep,
        log_level=_pick(log_level, "log_level", "INFO").strip().upper(),
        log_format=_pick(log_format, "log_format", "console").strip().lower(),
    )
