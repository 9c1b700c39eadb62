"""Explain Engine — resolução e veredito único de uma chave.

A correspondência de regra prioriza aliases: todas as regras são varridas
por alias antes de qualquer comparação com o caminho canônico. Sem regra
correspondente, o resultado é `None` ("not found") e não um veredito.

A sequência de decisão é a mesma do validate, mas para no primeiro desfecho
decisivo: forbidden_present, missing_required, optional_missing (pass),
type_mismatch, primeira violação de restrição, ou pass.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple, Union

from configuard.core.context import STEP_POLICY_EXPLAIN, CommandContext, log_event
from configuard.core.contract.models import ContractDocument, KeyRule
from configuard.core.contract.paths import identifier_key
from configuard.core.sources.resolver import resolve_sources

from .evaluation import evaluate_constraints, matches_type, value_kind
from .models import (
    FORBIDDEN_PRESENT,
    MATCHED_BY_ALIAS,
    MATCHED_BY_PATH,
    MISSING_REQUIRED,
    OPTIONAL_MISSING,
    PASS,
    TYPE_MISMATCH,
    ExplainResult,
)
from .resolution import Resolution, candidate_paths, effective_source_order, resolve_rule


DEFAULT_REDACTION_MARKER = "<redacted>"


def find_rule(rules: Iterable[KeyRule], requested_key: str) -> Optional[Tuple[KeyRule, str]]:
    """Devolve (regra, estratégia) ou None. Aliases têm precedência sobre caminhos."""
    rules = list(rules)
    wanted = identifier_key(requested_key)

    for rule in rules:
        if any(identifier_key(alias) == wanted for alias in rule.aliases):
            return rule, MATCHED_BY_ALIAS

    for rule in rules:
        if identifier_key(rule.path) == wanted:
            return rule, MATCHED_BY_PATH

    return None


def display_value(value: Any, *, sensitive: bool, redaction_marker: str = DEFAULT_REDACTION_MARKER) -> str:
    if sensitive:
        return redaction_marker
    return json.dumps(value, ensure_ascii=False)


def explain(
    contract: ContractDocument,
    base_dir: Union[str, Path],
    environment: str,
    requested_key: str,
    *,
    ctx: Optional[CommandContext] = None,
) -> Optional[ExplainResult]:
    match = find_rule(contract.keys, requested_key)
    if match is None:
        log_event(
            ctx,
            step_id=STEP_POLICY_EXPLAIN,
            level="WARNING",
            message="requested key not found in contract",
            requested_key=requested_key,
        )
        return None

    rule, matched_by = match
    marker = ctx.settings.redaction_marker if ctx is not None else DEFAULT_REDACTION_MARKER
    detailed = ctx.settings.detailed if ctx is not None else False

    maps = resolve_sources(base_dir, contract.sources, environment, ctx=ctx)
    resolution = resolve_rule(maps, rule)

    def verdict(code: str, message: str, *, passed: bool, found: Optional[Resolution] = None) -> ExplainResult:
        resolved = found.resolved if found is not None else None
        return ExplainResult(
            environment=environment,
            requested_key=requested_key,
            rule_path=rule.path,
            rule_type=rule.type,
            is_pass=passed,
            decision_code=code,
            decision_message=message,
            resolved_path=found.matched_path if found is not None else None,
            resolved_source=resolved.source_kind.value if resolved is not None else None,
            resolved_from=resolved.source_file if resolved is not None else None,
            resolved_value_display=(
                display_value(resolved.value, sensitive=rule.sensitive, redaction_marker=marker)
                if resolved is not None
                else None
            ),
            matched_rule_by=matched_by,
            source_order_used=tuple(kind.value for kind in effective_source_order(rule)),
            candidate_paths=candidate_paths(rule),
            detailed=detailed,
        )

    if resolution is not None and rule.is_forbidden_in(environment):
        result = verdict(
            FORBIDDEN_PRESENT,
            f"Key is forbidden in environment '{environment}' but is present.",
            passed=False,
            found=resolution,
        )
    elif resolution is None and rule.is_required_in(environment):
        result = verdict(
            MISSING_REQUIRED,
            f"Key is required in environment '{environment}' but was not found.",
            passed=False,
        )
    elif resolution is None:
        result = verdict(OPTIONAL_MISSING, "Key is optional in this environment and not present.", passed=True)
    elif not matches_type(rule.type, resolution.value):
        result = verdict(
            TYPE_MISMATCH,
            f"Expected type '{rule.type}', got '{value_kind(resolution.value)}'.",
            passed=False,
            found=resolution,
        )
    else:
        violations = evaluate_constraints(environment, rule.path, resolution.value, rule.constraints)
        if violations:
            result = verdict(violations[0].code, violations[0].message, passed=False, found=resolution)
        else:
            result = verdict(PASS, "Key satisfies all applicable rules.", passed=True, found=resolution)

    log_event(
        ctx,
        step_id=STEP_POLICY_EXPLAIN,
        level="INFO",
        message="key explained",
        environment=environment,
        requested_key=requested_key,
        rule_path=rule.path,
        decision=result.decision_code,
    )
    return result
