# tests/core/policy/test_validate.py
"""
Testes do Policy Engine — validate.

Os testes asseguram que:
- a ordem de decisão (ausência, proibição, tipo, restrições) é respeitada
- issues carregam ambiente, caminho, código e mensagem estáveis
- warnings de contrato são calculados uma vez e nunca mudam o veredito
- a validação é determinística para as mesmas entradas

Limites explícitos:
    - Regras de schema do contrato são cobertas em tests/core/contract
"""

import pytest

from configuard.core.context import STEP_POLICY_VALIDATE
from configuard.core.contract.models import (
    AppSettingsSource,
    ContractDocument,
    ContractSources,
    KeyRule,
)
from configuard.core.exit_codes import ExitCode, exit_code_for
from configuard.core.policy.models import (
    CONSTRAINT_MIN_LENGTH,
    FORBIDDEN_PRESENT,
    MISSING_REQUIRED,
    TYPE_MISMATCH,
    UNKNOWN_SOURCE_PREFERENCE,
)
from configuard.core.policy.validate import collect_contract_warnings, validate
from configuard.core.sources.errors import SourceFileNotFoundError


def test_missing_required_key(workspace, contract_data):
    """Sem seção `Api` no appsettings base: exatamente uma issue missing_required."""
    workspace.write_json("appsettings.json", {"Logging": {"Level": "Info"}})
    contract = workspace.load(contract_data)

    result = validate(contract, workspace.root, ["staging"])

    assert not result.is_success
    assert len(result.issues) == 1
    issue = result.issues[0]
    assert issue.code == MISSING_REQUIRED
    assert issue.path == "Api:Key"
    assert issue.environment == "staging"
    assert issue.message == "Required key not found."


def test_min_length_violation(workspace, contract_data):
    workspace.write_json("appsettings.json", {"Api": {"Key": "abc"}})
    contract = workspace.load(contract_data)

    result = validate(contract, workspace.root, ["staging"])

    assert [i.code for i in result.issues] == [CONSTRAINT_MIN_LENGTH]
    assert result.issues[0].message == "String length is 3, minimum is 10."


def test_forbidden_key_present_via_dotenv_overlay(workspace, contract_data):
    """
    Chave proibida em produção, definida apenas no overlay dotenv.

    Sem `sourcePreference`, a ordem padrão consulta dotenv antes de
    appsettings; a issue aponta para o arquivo dotenv de produção.
    """
    contract_data["keys"] = [{"path": "Features:UseMockPayments", "type": "bool", "forbiddenIn": ["production"]}]
    workspace.write_json("appsettings.json", {"Features": {"UseMockPayments": False}})
    env_file = workspace.write_text(".env.production", "FEATURES__USEMOCKPAYMENTS=true\n")
    contract = workspace.load(contract_data)

    result = validate(contract, workspace.root, ["production"])

    assert len(result.issues) == 1
    issue = result.issues[0]
    assert issue.code == FORBIDDEN_PRESENT
    assert issue.environment == "production"
    assert issue.message.startswith("Forbidden key is present via 'Features:UseMockPayments' (dotenv: ")
    assert str(env_file.resolve()) in issue.message


def test_absent_optional_key_is_not_an_issue(workspace, contract_data):
    workspace.write_json("appsettings.json", {})
    contract = workspace.load(contract_data)

    result = validate(contract, workspace.root, ["production"])

    assert result.is_success
    assert result.issues == []


def test_type_mismatch_short_circuits_constraints(workspace, contract_data):
    workspace.write_json("appsettings.json", {"Api": {"Key": 12345}})
    contract = workspace.load(contract_data)

    result = validate(contract, workspace.root, ["staging"])

    assert [i.code for i in result.issues] == [TYPE_MISMATCH]
    assert result.issues[0].message == "Expected type 'string', got 'number'."


def test_integral_float_from_dotenv_satisfies_int(workspace, contract_data):
    contract_data["keys"] = [{"path": "Server:Port", "type": "int", "requiredIn": ["staging"]}]
    workspace.write_json("appsettings.json", {})
    workspace.write_text(".env", "SERVER__PORT=8080.0\n")
    contract = workspace.load(contract_data)

    result = validate(contract, workspace.root, ["staging"])

    assert result.is_success


def test_all_declared_environments_by_default(workspace, contract_data):
    contract_data["keys"][0]["requiredIn"] = ["staging", "production"]
    workspace.write_json("appsettings.json", {})
    workspace.write_json("appsettings.production.json", {"Api": {"Key": "long-enough-key"}})
    contract = workspace.load(contract_data)

    result = validate(contract, workspace.root)

    assert [(i.environment, i.code) for i in result.issues] == [("staging", MISSING_REQUIRED)]


def test_issues_follow_environment_then_rule_order(workspace, contract_data):
    contract_data["keys"] = [
        {"path": "A", "requiredIn": ["staging", "production"]},
        {"path": "B", "requiredIn": ["staging", "production"]},
    ]
    workspace.write_json("appsettings.json", {})
    contract = workspace.load(contract_data)

    result = validate(contract, workspace.root, ["production", "staging"])

    assert [(i.environment, i.path) for i in result.issues] == [
        ("production", "A"),
        ("production", "B"),
        ("staging", "A"),
        ("staging", "B"),
    ]


def test_validate_is_deterministic(workspace, contract_data):
    workspace.write_json("appsettings.json", {"Api": {"Key": "abc"}})
    contract = workspace.load(contract_data)

    first = validate(contract, workspace.root)
    second = validate(contract, workspace.root)

    assert first.to_dict() == second.to_dict()


def test_missing_required_store_aborts(workspace, contract_data):
    contract = workspace.load(contract_data)
    with pytest.raises(SourceFileNotFoundError):
        validate(contract, workspace.root, ["staging"])


def test_alias_satisfies_required_key(workspace, contract_data):
    contract_data["keys"][0]["aliases"] = ["Legacy__ApiKey"]
    workspace.write_json("appsettings.json", {"Legacy": {"ApiKey": "0123456789abc"}})
    contract = workspace.load(contract_data)

    assert validate(contract, workspace.root, ["staging"]).is_success


def _programmatic_contract(rule):
    return ContractDocument(
        version="1",
        environments=("staging",),
        sources=ContractSources(
            appsettings=AppSettingsSource(base="appsettings.json", environment_pattern="appsettings.{env}.json")
        ),
        keys=(rule,),
    )


def test_unknown_source_preference_is_a_warning_only(workspace):
    rule = KeyRule(path="Api:Key", source_preference=("vault", "Vault", "appsettings"))
    contract = _programmatic_contract(rule)
    workspace.write_json("appsettings.json", {"Api": {"Key": "value"}})

    result = validate(contract, workspace.root)

    assert result.is_success
    assert len(result.warnings) == 1
    warning = result.warnings[0]
    assert warning.code == UNKNOWN_SOURCE_PREFERENCE
    assert warning.message == "Unknown sourcePreference value 'vault' for key 'Api:Key'."
    assert exit_code_for(result) is ExitCode.SUCCESS


def test_warnings_are_independent_of_environment():
    rule = KeyRule(path="X", source_preference=("consul",))
    contract = _programmatic_contract(rule)
    assert len(collect_contract_warnings(contract)) == 1


def test_validate_logs_and_collects_warnings(workspace, dummy_ctx):
    rule = KeyRule(path="Api:Key", required_in=("staging",), source_preference=("vault",))
    contract = _programmatic_contract(rule)
    workspace.write_json("appsettings.json", {})

    result = validate(contract, workspace.root, ctx=dummy_ctx)

    assert exit_code_for(result) is ExitCode.POLICY_FAILURE
    assert dummy_ctx.warnings[STEP_POLICY_VALIDATE] == [result.warnings[0].message]
    final = dummy_ctx.events_for(STEP_POLICY_VALIDATE)[-1]
    assert final["level"] == "ERROR"
    assert final["issues"] == 1


def test_result_serialization(workspace, contract_data):
    workspace.write_json("appsettings.json", {})
    contract = workspace.load(contract_data)

    payload = validate(contract, workspace.root, ["staging"]).to_dict()

    assert payload["result"] == "fail"
    assert payload["issues"] == [
        {
            "environment": "staging",
            "path": "Api:Key",
            "code": "missing_required",
            "message": "Required key not found.",
        }
    ]
    assert payload["warnings"] == []
