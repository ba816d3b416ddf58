from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from metar_translator.config.loaders import (
    deep_merge_dicts,
    expand_env_vars,
    load_yaml_with_env_expansion,
    load_yaml_with_local_override,
)
from metar_translator.config.settings import TranslatorSettings, load_settings


def _write(path, text: str) -> str:
    path.write_text(text, encoding="utf-8")
    return str(path)


@pytest.mark.unit
def test_expand_env_vars_defaults(monkeypatch) -> None:
    monkeypatch.setenv("WX_SET", "fr")
    monkeypatch.setenv("WX_EMPTY", "")
    monkeypatch.delenv("WX_UNSET", raising=False)
    assert expand_env_vars("${WX_SET:-en}") == "fr"
    assert expand_env_vars("${WX_EMPTY:-en}") == "en"
    assert expand_env_vars("${WX_UNSET:=en}") == "en"
    assert expand_env_vars("${WX_UNSET}") == "${WX_UNSET}"


@pytest.mark.unit
def test_deep_merge_dicts_does_not_mutate_inputs() -> None:
    base = {"translator": {"language": "en", "separator": "\n"}, "keep": 1}
    override = {"translator": {"language": "fr"}, "keep": None}
    merged = deep_merge_dicts(base, override)
    assert merged == {"translator": {"language": "fr", "separator": "\n"}}
    assert base["translator"]["language"] == "en"


@pytest.mark.unit
def test_load_yaml_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_yaml_with_env_expansion(str(tmp_path / "missing.yaml"))


@pytest.mark.unit
def test_load_yaml_rejects_non_mapping(tmp_path) -> None:
    path = _write(tmp_path / "translator.yaml", "- a\n- b\n")
    with pytest.raises(ValueError):
        load_yaml_with_env_expansion(path)


@pytest.mark.unit
def test_load_yaml_invalid(tmp_path) -> None:
    path = _write(tmp_path / "translator.yaml", "translator: [unclosed\n")
    with pytest.raises(yaml.YAMLError):
        load_yaml_with_env_expansion(path)


@pytest.mark.unit
def test_local_override_is_merged(tmp_path) -> None:
    base = _write(tmp_path / "translator.yaml", "translator:\n  language: en\n  log_level: INFO\n")
    _write(tmp_path / "translator.local.yaml", "translator:\n  language: fr\n")
    assert load_yaml_with_local_override(base) == {"translator": {"language": "fr", "log_level": "INFO"}}


@pytest.mark.unit
def test_broken_local_override_is_ignored(tmp_path) -> None:
    base = _write(tmp_path / "translator.yaml", "translator:\n  language: en\n")
    _write(tmp_path / "translator.local.yaml", "- not a mapping\n")
    assert load_yaml_with_local_override(base) == {"translator": {"language": "en"}}


@pytest.mark.unit
def test_load_settings_defaults() -> None:
    assert load_settings(environ={}) == TranslatorSettings()


@pytest.mark.unit
def test_load_settings_precedence(tmp_path) -> None:
    path = _write(
        tmp_path / "translator.yaml",
        'translator:\n  language: fr\n  separator: "<br>"\n  log_level: debug\n',
    )
    from_file = load_settings(path, environ={})
    assert from_file == TranslatorSettings(language="fr", separator="<br>", log_level="DEBUG", log_format="console")

    from_env = load_settings(path, environ={"METAR_TRANSLATOR_LANGUAGE": "en", "METAR_TRANSLATOR_SEPARATOR": "\\n"})
    assert from_env.language == "en"
    assert from_env.separator == "\n"

    from_args = load_settings(path, language="fr", environ={"METAR_TRANSLATOR_LANGUAGE": "en"})
    assert from_args.language == "fr"


@pytest.mark.unit
def test_load_settings_env_expansion_in_file(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("METAR_LANGUAGE", "fr")
    path = _write(tmp_path / "translator.yaml", "translator:\n  language: ${METAR_LANGUAGE:-en}\n")
    assert load_settings(path, environ={}).language == "fr"


@pytest.mark.unit
def test_load_settings_rejects_bad_values() -> None:
    with pytest.raises(ValueError):
        load_settings(language="klingon", environ={})
    with pytest.raises(ValueError):
        load_settings(separator="", environ={})


SHIPPED_CONFIG = str(Path(__file__).resolve().parents[1] / "config" / "translator.yaml")


@pytest.mark.unit
def test_shipped_config_language_follows_translator_env_var(monkeypatch) -> None:
    monkeypatch.delenv("METAR_TRANSLATOR_LANGUAGE", raising=False)
    assert load_settings(SHIPPED_CONFIG, environ={}).language == "en"

    monkeypatch.setenv("METAR_TRANSLATOR_LANGUAGE", "fr")
    assert load_settings(SHIPPED_CONFIG, environ={}).language == "fr"
