"""
Policy Engine — validate.

Aplica regras de presença, tipo e restrições de cada chave do contrato a um
ou mais ambientes e produz um relatório PASS/FAIL com warnings consultivos.

Ordem de decisão por (ambiente, regra), com curto-circuito:
    (a) obrigatória e ausente              → missing_required
    (b) proibida e presente                → forbidden_present
    (c) ausente, nem obrigatória nem proibida → sem issue
    (d) presente → tipo (type_mismatch encerra) → todas as restrições

Invariantes:
    - PASS sse nenhuma issue foi acumulada em nenhum ambiente
    - Warnings de contrato são calculados uma vez, independentes de ambiente
    - Os mapas de store são reconstruídos para cada ambiente visitado
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Set, Tuple, Union

from configuard.core.context import STEP_POLICY_VALIDATE, CommandContext, log_event
from configuard.core.contract.models import ContractDocument, KeyRule
from configuard.core.sources.models import SourceMaps
from configuard.core.sources.resolver import resolve_sources

from .evaluation import evaluate_constraints, matches_type, value_kind
from .models import (
    FORBIDDEN_PRESENT,
    MISSING_REQUIRED,
    TYPE_MISMATCH,
    UNKNOWN_SOURCE_PREFERENCE,
    ValidationIssue,
    ValidationResult,
    ValidationWarning,
)
from .resolution import resolve_rule


def collect_contract_warnings(contract: ContractDocument) -> List[ValidationWarning]:
    """Warnings de `sourcePreference` desconhecida, sem repetição por (regra, valor)."""
    seen: Set[Tuple[str, str]] = set()
    warnings: List[ValidationWarning] = []
    for rule in contract.keys:
        for invalid in rule.invalid_source_preferences():
            token = (rule.path.casefold(), invalid)
            if token in seen:
                continue
            seen.add(token)
            warnings.append(
                ValidationWarning(
                    path=rule.path,
                    code=UNKNOWN_SOURCE_PREFERENCE,
                    message=f"Unknown sourcePreference value '{invalid}' for key '{rule.path}'.",
                )
            )
    return warnings


def evaluate_rule(rule: KeyRule, environment: str, maps: SourceMaps) -> List[ValidationIssue]:
    resolution = resolve_rule(maps, rule)

    if resolution is None:
        if rule.is_required_in(environment):
            return [ValidationIssue(environment, rule.path, MISSING_REQUIRED, "Required key not found.")]
        return []

    if rule.is_forbidden_in(environment):
        return [
            ValidationIssue(
                environment,
                rule.path,
                FORBIDDEN_PRESENT,
                f"Forbidden key is present via '{resolution.matched_path}' "
                f"({resolution.resolved.source_kind.value}: {resolution.resolved.source_file}).",
            )
        ]

    value = resolution.value
    if not matches_type(rule.type, value):
        return [
            ValidationIssue(
                environment,
                rule.path,
                TYPE_MISMATCH,
                f"Expected type '{rule.type}', got '{value_kind(value)}'.",
            )
        ]

    return evaluate_constraints(environment, rule.path, value, rule.constraints)


def validate_environment(contract: ContractDocument, environment: str, maps: SourceMaps) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for rule in contract.keys:
        issues.extend(evaluate_rule(rule, environment, maps))
    return issues


def validate(
    contract: ContractDocument,
    base_dir: Union[str, Path],
    environments: Optional[Sequence[str]] = None,
    *,
    ctx: Optional[CommandContext] = None,
) -> ValidationResult:
    """Valida `environments` (ou todos os declarados) contra o contrato."""
    result = ValidationResult()
    result.warnings.extend(collect_contract_warnings(contract))
    if ctx is not None:
        for warning in result.warnings:
            ctx.add_warning(step_id=STEP_POLICY_VALIDATE, message=warning.message)

    targets = list(environments) if environments else list(contract.environments)

    for environment in targets:
        maps = resolve_sources(base_dir, contract.sources, environment, ctx=ctx)
        env_issues = validate_environment(contract, environment, maps)
        result.issues.extend(env_issues)
        log_event(
            ctx,
            step_id=STEP_POLICY_VALIDATE,
            level="INFO",
            message="environment validated",
            environment=environment,
            issues=len(env_issues),
        )

    log_event(
        ctx,
        step_id=STEP_POLICY_VALIDATE,
        level="INFO" if result.is_success else "ERROR",
        message="validation passed" if result.is_success else "validation failed",
        environments=targets,
        issues=len(result.issues),
        warnings=len(result.warnings),
    )
    return result
