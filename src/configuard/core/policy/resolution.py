"""Caminhos candidatos, ordem efetiva de stores e resolução do valor vencedor.

Algoritmo: store (externo) × candidato (interno). O primeiro par com entrada
presente vence; a posição do candidato decide empates, não a proximidade.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from configuard.core.contract.models import KeyRule, SourceKind
from configuard.core.sources.models import ResolvedValue, SourceMaps


@dataclass(frozen=True)
class Resolution:
    matched_path: str
    resolved: ResolvedValue

    @property
    def value(self):
        return self.resolved.value


def candidate_paths(rule: KeyRule) -> Tuple[str, ...]:
    """[caminho canônico normalizado] + [aliases normalizados, na ordem declarada]."""
    return rule.candidate_paths


def effective_source_order(rule: KeyRule) -> Tuple[SourceKind, ...]:
    """`sourcePreference` filtrada e sem repetição, ou envSnapshot → dotenv → appsettings."""
    return rule.source_order


def resolve_rule(maps: SourceMaps, rule: KeyRule) -> Optional[Resolution]:
    for kind in effective_source_order(rule):
        for candidate in candidate_paths(rule):
            found = maps.lookup(kind, candidate)
            if found is not None:
                return Resolution(matched_path=candidate, resolved=found)
    return None
