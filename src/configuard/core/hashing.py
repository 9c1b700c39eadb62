"""Serialização JSON canônica e hashing (rastreabilidade).

A mesma forma canônica é usada para:
- hash do contrato (identidade estrutural por invocação)
- hash das configurações efetivas da engine
- comparação sintática de valores resolvidos (diff e fallback de enum)

Decisão: JSON canônico = sort_keys, separadores compactos, UTF-8 sem escape.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def canonical_json(value: Any) -> str:
    """Serializa qualquer valor JSON em sua forma textual canônica."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_hash(value: Any) -> str:
    """SHA-256 hexadecimal (64 caracteres) da forma canônica de `value`."""
    return hashlib.sha256(canonical_json(value).encode("utf-8")).hexdigest()
