# tests/core/contract/test_contract_loader.py
"""
Testes do loader canônico de contrato (JSON/YAML).

Os testes asseguram que:
- contratos JSON e YAML válidos produzem o mesmo `ContractDocument`
- falhas de leitura são tipadas (arquivo ausente, formato, parsing)
- o hash do contrato é registrado no CommandContext

Limites explícitos:
    - Regras semânticas de schema são cobertas em test_schema.py
"""

import json

import pytest
import yaml

from configuard.core.config.settings import EngineSettings
from configuard.core.context import STEP_CONTRACT_LOAD, CommandContext
from configuard.core.contract.errors import (
    ContractError,
    ContractFileNotFoundError,
    ContractParseError,
    ContractValidationError,
    UnsupportedContractFormatError,
)
from configuard.core.contract.loader import contract_base_directory, load_contract
from configuard.core.contract.models import DEFAULT_SOURCE_ORDER, SourceKind


def test_load_json_contract(workspace, contract_data):
    contract = workspace.load(contract_data)

    assert contract.version == "1"
    assert contract.environments == ("staging", "production")
    assert len(contract.keys) == 1

    rule = contract.keys[0]
    assert rule.path == "Api:Key"
    assert rule.type == "string"
    assert rule.required_in == ("staging",)
    assert rule.constraints.min_length == 10
    assert rule.source_order == DEFAULT_SOURCE_ORDER

    assert contract.sources.appsettings.environment_file("staging") == "appsettings.staging.json"
    assert contract.sources.dotenv is not None
    assert contract.sources.dotenv.optional is True
    assert contract.sources.env_snapshot is None


def test_yaml_and_json_produce_equal_documents(workspace, contract_data):
    """
    Verifica que YAML é uma grafia alternativa do mesmo contrato.

    Invariantes:
        - Regras, ambientes e stores são idênticos entre os formatos
        - O hash canônico não depende do formato de origem
    """
    from_json = workspace.load(contract_data, "contract.json")
    workspace.write_text("contract.yaml", yaml.safe_dump(contract_data))
    from_yaml = load_contract(workspace.root / "contract.yaml")

    assert from_yaml.keys == from_json.keys
    assert from_yaml.sources == from_json.sources
    assert from_yaml.contract_hash == from_json.contract_hash


def test_missing_contract_file_raises(tmp_path):
    with pytest.raises(ContractFileNotFoundError) as ei:
        load_contract(tmp_path / "nope.json")
    assert "not found" in str(ei.value)
    assert ei.value.details["path"].endswith("nope.json")


def test_unsupported_extension_raises(workspace, contract_data):
    path = workspace.write_text("contract.toml", json.dumps(contract_data))
    with pytest.raises(UnsupportedContractFormatError):
        load_contract(path)


@pytest.mark.parametrize(
    "name,text",
    [
        ("broken.json", "{ not json"),
        ("empty.json", "   "),
        ("list.json", "[1, 2]"),
        ("broken.yaml", "version: [unclosed"),
        ("scalar.yml", "just a string"),
    ],
)
def test_unreadable_documents_raise_parse_error(workspace, name, text):
    path = workspace.write_text(name, text)
    with pytest.raises(ContractParseError):
        load_contract(path)


def test_schema_violation_surfaces_as_contract_error(workspace, contract_data):
    contract_data["version"] = "2"
    with pytest.raises(ContractValidationError) as ei:
        workspace.load(contract_data)

    assert isinstance(ei.value, ContractError)
    assert str(ei.value) == "Unsupported contract version '2'. Expected '1'."


def test_load_records_hash_and_event(workspace, contract_data, dummy_ctx):
    path = workspace.write_contract(contract_data)
    contract = load_contract(path, ctx=dummy_ctx)

    assert dummy_ctx.contract_hash == contract.contract_hash
    events = dummy_ctx.events_for(STEP_CONTRACT_LOAD)
    assert len(events) == 1
    assert events[0]["keys_count"] == 1
    assert events[0]["run_id"] == "run-test-001"


def test_load_without_path_uses_default_contract_path(workspace, contract_data, monkeypatch):
    workspace.write_contract(contract_data)
    monkeypatch.chdir(workspace.root)

    contract = load_contract()

    assert contract.environments == ("staging", "production")


def test_default_contract_path_comes_from_settings(workspace, contract_data, monkeypatch):
    workspace.write_contract(contract_data, "custom.contract.yaml")
    settings = EngineSettings.from_dict(
        {
            "output": {"verbosity": "normal", "redaction_marker": "<redacted>"},
            "contract": {"default_path": "custom.contract.yaml"},
        }
    )
    monkeypatch.chdir(workspace.root)

    contract = load_contract(ctx=CommandContext.create(settings=settings))

    assert contract.keys[0].path == "Api:Key"


def test_contract_base_directory_is_absolute_parent(workspace, contract_data):
    path = workspace.write_contract(contract_data, "nested/contract.json")
    base = contract_base_directory(path)

    assert base.is_absolute()
    assert base == (workspace.root / "nested").resolve()


def test_source_preference_is_canonicalized(workspace, contract_data):
    contract_data["keys"][0]["sourcePreference"] = [" AppSettings ", "DOTENV"]
    contract = workspace.load(contract_data)

    rule = contract.keys[0]
    assert rule.source_preference == ("appsettings", "dotenv")
    assert rule.source_order == (SourceKind.APPSETTINGS, SourceKind.DOTENV)
