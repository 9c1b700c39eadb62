# tests/core/config/test_loader.py
"""
Testes do loader de configurações da engine.

Os testes asseguram que:
- os defaults embutidos são sempre a base
- o arquivo local (YAML ou JSON) sobrescreve os defaults via deep-merge
- arquivo local ausente é tolerado; inválido não
- valores inválidos são rejeitados com `InvalidSettingError`

Limites explícitos:
    - Não valida o contrato (ver tests/core/contract)
"""

from pathlib import Path

import pytest

from configuard.core.config.errors import (
    ConfigError,
    InvalidConfigRootTypeError,
    InvalidSettingError,
    UnsupportedConfigFormatError,
)
from configuard.core.config.loader import load_settings
from configuard.core.config.settings import (
    DEFAULT_SETTINGS,
    EngineSettings,
    default_settings,
    normalize_verbosity,
)


def test_defaults_only():
    settings = load_settings()

    assert settings.verbosity == "normal"
    assert settings.redaction_marker == "<redacted>"
    assert settings.default_contract_path == "configuard.contract.json"
    assert not settings.detailed
    assert not settings.quiet
    assert settings == default_settings()


def test_missing_local_is_ok(tmp_path: Path):
    settings = load_settings(local_path=tmp_path / "configuard.local.yaml")
    assert settings == default_settings()


def test_yaml_local_overrides_defaults(tmp_path: Path):
    local = tmp_path / "configuard.local.yaml"
    local.write_text("output:\n  verbosity: Detailed\n", encoding="utf-8")

    settings = load_settings(local_path=local)

    assert settings.verbosity == "detailed"
    assert settings.detailed
    assert settings.redaction_marker == "<redacted>"
    assert settings.settings_hash != default_settings().settings_hash


def test_json_local_overrides_defaults(tmp_path: Path):
    local = tmp_path / "configuard.local.json"
    local.write_text('{"output": {"redaction_marker": "***"}}', encoding="utf-8")

    settings = load_settings(local_path=local)

    assert settings.redaction_marker == "***"
    assert settings.verbosity == "normal"


def test_empty_local_file_is_defaults(tmp_path: Path):
    local = tmp_path / "configuard.local.yml"
    local.write_text("", encoding="utf-8")
    assert load_settings(local_path=local) == default_settings()


def test_defaults_are_never_mutated(tmp_path: Path):
    local = tmp_path / "configuard.local.yaml"
    local.write_text("output:\n  verbosity: quiet\n", encoding="utf-8")

    load_settings(local_path=local)

    assert DEFAULT_SETTINGS["output"]["verbosity"] == "normal"


def test_invalid_root_type_raises(tmp_path: Path):
    local = tmp_path / "configuard.local.yaml"
    local.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(InvalidConfigRootTypeError):
        load_settings(local_path=local)


def test_unsupported_extension_raises(tmp_path: Path):
    local = tmp_path / "configuard.local.toml"
    local.write_text("verbosity = 'quiet'\n", encoding="utf-8")

    with pytest.raises(UnsupportedConfigFormatError) as ei:
        load_settings(local_path=local)
    assert isinstance(ei.value, ConfigError)


def test_unsupported_verbosity_raises(tmp_path: Path):
    local = tmp_path / "configuard.local.yaml"
    local.write_text("output:\n  verbosity: loud\n", encoding="utf-8")

    with pytest.raises(InvalidSettingError) as ei:
        load_settings(local_path=local)
    assert "Unsupported verbosity 'loud'" in str(ei.value)


@pytest.mark.parametrize("value,expected", [(None, "normal"), ("  ", "normal"), (" QUIET ", "quiet")])
def test_normalize_verbosity(value, expected):
    assert normalize_verbosity(value) == expected


def test_blank_redaction_marker_is_rejected():
    with pytest.raises(InvalidSettingError):
        EngineSettings.from_dict(
            {"output": {"verbosity": "normal", "redaction_marker": " "}, "contract": {"default_path": "c.json"}}
        )
