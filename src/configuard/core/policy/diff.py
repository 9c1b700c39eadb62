"""Diff Engine — divergência de valores resolvidos entre dois ambientes.

Classificação por regra:
  - presente em um lado e ausente no outro → missing
  - presente nos dois, tipo estrutural diferente → typeChanged
  - mesmo tipo, forma serializada canônica diferente → changed

A igualdade é sintática: `1.0` e `1` são diferentes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from configuard.core.context import STEP_POLICY_DIFF, CommandContext, log_event
from configuard.core.contract.models import ContractDocument
from configuard.core.hashing import canonical_json
from configuard.core.sources.resolver import resolve_sources

from .evaluation import value_kind
from .models import DiffIssue, DiffKind, DiffResult
from .resolution import resolve_rule


def diff(
    contract: ContractDocument,
    base_dir: Union[str, Path],
    left_environment: str,
    right_environment: str,
    *,
    ctx: Optional[CommandContext] = None,
) -> DiffResult:
    result = DiffResult(left_environment=left_environment, right_environment=right_environment)

    left_maps = resolve_sources(base_dir, contract.sources, left_environment, ctx=ctx)
    right_maps = resolve_sources(base_dir, contract.sources, right_environment, ctx=ctx)

    for rule in contract.keys:
        left = resolve_rule(left_maps, rule)
        right = resolve_rule(right_maps, rule)

        def issue(kind: DiffKind, message: str) -> DiffIssue:
            return DiffIssue(rule.path, kind, left_environment, right_environment, message)

        if left is None and right is None:
            continue

        if right is None:
            result.issues.append(
                issue(
                    DiffKind.MISSING,
                    f"Present in {left_environment} via '{left.matched_path}', missing in {right_environment}.",
                )
            )
            continue

        if left is None:
            result.issues.append(
                issue(
                    DiffKind.MISSING,
                    f"Missing in {left_environment}, present in {right_environment} via '{right.matched_path}'.",
                )
            )
            continue

        left_kind, right_kind = value_kind(left.value), value_kind(right.value)
        if left_kind != right_kind:
            result.issues.append(issue(DiffKind.TYPE_CHANGED, f"Type differs: {left_kind} vs {right_kind}."))
            continue

        if canonical_json(left.value) != canonical_json(right.value):
            result.issues.append(
                issue(DiffKind.CHANGED, f"Value differs between {left_environment} and {right_environment}.")
            )

    log_event(
        ctx,
        step_id=STEP_POLICY_DIFF,
        level="INFO",
        message="environments compared",
        left=left_environment,
        right=right_environment,
        issues=len(result.issues),
    )
    return result
