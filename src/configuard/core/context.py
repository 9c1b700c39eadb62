"""
Contexto de execução de um comando (validate, diff, explain).

Este módulo define o `CommandContext`, a estrutura canônica usada para
registrar eventos estruturados e warnings não fatais durante uma invocação.
Não existe logger global: cada comando possui seu próprio contexto, e o
colaborador externo (CLI, CI) decide como exibir os eventos.

Invariantes:
    - Eventos sempre incluem `run_id`, `step_id`, `level`, `message`, `timestamp`
    - Warnings são agrupados por `step_id`
    - Com verbosidade `quiet`, só eventos WARNING e ERROR são registrados
    - O contexto nunca influencia o veredito de uma política

Limites explícitos:
    - Não persiste eventos (sem histórico de resolução)
    - Não decide políticas
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from configuard.core.config.settings import EngineSettings, default_settings


STEP_CONTRACT_LOAD = "contract.load"
STEP_SOURCES_RESOLVE = "sources.resolve"
STEP_POLICY_VALIDATE = "policy.validate"
STEP_POLICY_DIFF = "policy.diff"
STEP_POLICY_EXPLAIN = "policy.explain"

_QUIET_SUPPRESSED_LEVELS = ("DEBUG", "INFO")


@dataclass
class CommandContext:
    """
    Contexto de uma invocação de comando.

    Consolida:
        - identidade da execução (run_id, created_at)
        - configurações efetivas da engine
        - hash do contrato carregado (quando houver)
        - log estruturado de eventos e warnings por step
    """

    run_id: str
    created_at: datetime
    settings: EngineSettings = field(default_factory=default_settings)
    contract_hash: Optional[str] = None

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def create(cls, *, settings: Optional[EngineSettings] = None, run_id: Optional[str] = None) -> "CommandContext":
        return cls(
            run_id=run_id or uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            settings=settings or default_settings(),
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        if self.settings.quiet and level in _QUIET_SUPPRESSED_LEVELS:
            return
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)

    def events_for(self, step_id: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("step_id") == step_id]


def log_event(ctx: Optional[CommandContext], *, step_id: str, level: str, message: str, **extra: Any) -> None:
    """Registra um evento quando há contexto; sem contexto é um no-op."""
    if ctx is not None:
        ctx.log(step_id=step_id, level=level, message=message, **extra)
