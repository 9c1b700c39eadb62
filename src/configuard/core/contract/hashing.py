"""Hashing canônico do contrato.

O hash do contrato serve para rastreabilidade dos eventos de um comando e
para detectar que duas invocações avaliaram o mesmo documento.
"""

from __future__ import annotations

from typing import Any, Dict

from configuard.core.hashing import compute_hash


def compute_contract_hash(contract: Dict[str, Any]) -> str:
    """Computa SHA-256 do contrato bruto em formato canônico."""
    return compute_hash(contract)
