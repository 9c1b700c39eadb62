# src/configuard/core/config/settings.py
"""
Configurações efetivas da engine do Configuard.

Este módulo define os defaults canônicos e a materialização imutável das
configurações após o deep-merge com o arquivo local.

Chaves reconhecidas (v1):
    - output.verbosity        → quiet | normal | detailed
    - output.redaction_marker → texto exibido no lugar de valores sensíveis
    - contract.default_path   → nome do contrato quando nenhum é informado

Invariantes:
    - `DEFAULT_SETTINGS` é sempre a base completa
    - `EngineSettings` é imutável e carrega o hash da configuração efetiva
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from configuard.core.hashing import compute_hash

from .errors import InvalidSettingError


VERBOSITY_QUIET = "quiet"
VERBOSITY_NORMAL = "normal"
VERBOSITY_DETAILED = "detailed"
SUPPORTED_VERBOSITIES = (VERBOSITY_QUIET, VERBOSITY_NORMAL, VERBOSITY_DETAILED)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "output": {
        "verbosity": VERBOSITY_NORMAL,
        "redaction_marker": "<redacted>",
    },
    "contract": {
        "default_path": "configuard.contract.json",
    },
}


def normalize_verbosity(value: Any) -> str:
    """Normaliza verbosidade (trim + minúsculas); vazio vira `normal`."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return VERBOSITY_NORMAL
    if not isinstance(value, str):
        raise InvalidSettingError(
            f"output.verbosity must be a string, got {type(value).__name__}",
            details={"key": "output.verbosity"},
        )
    normalized = value.strip().lower()
    if normalized not in SUPPORTED_VERBOSITIES:
        raise InvalidSettingError(
            f"Unsupported verbosity '{value}'. Supported: {', '.join(SUPPORTED_VERBOSITIES)}.",
            details={"key": "output.verbosity", "received": value},
        )
    return normalized


@dataclass(frozen=True)
class EngineSettings:
    """Configurações da engine já validadas."""

    verbosity: str
    redaction_marker: str
    default_contract_path: str
    settings_hash: str

    @property
    def detailed(self) -> bool:
        return self.verbosity == VERBOSITY_DETAILED

    @property
    def quiet(self) -> bool:
        return self.verbosity == VERBOSITY_QUIET

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineSettings":
        output = data.get("output") or {}
        contract = data.get("contract") or {}
        if not isinstance(output, dict) or not isinstance(contract, dict):
            raise InvalidSettingError("settings sections 'output' and 'contract' must be mappings")

        marker = output.get("redaction_marker")
        if not isinstance(marker, str) or not marker.strip():
            raise InvalidSettingError(
                "output.redaction_marker must be a non-empty string",
                details={"key": "output.redaction_marker"},
            )

        default_path = contract.get("default_path")
        if not isinstance(default_path, str) or not default_path.strip():
            raise InvalidSettingError(
                "contract.default_path must be a non-empty string",
                details={"key": "contract.default_path"},
            )

        return cls(
            verbosity=normalize_verbosity(output.get("verbosity")),
            redaction_marker=marker,
            default_contract_path=default_path.strip(),
            settings_hash=compute_hash(data),
        )


def default_settings() -> EngineSettings:
    return EngineSettings.from_dict(DEFAULT_SETTINGS)
