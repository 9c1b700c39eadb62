"""Códigos de saída estáveis expostos aos colaboradores (CLI, CI)."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    KEY_NOT_FOUND = 1
    INPUT_ERROR = 2
    POLICY_FAILURE = 3
    INTERNAL_ERROR = 4


def exit_code_for(result: object) -> ExitCode:
    """Mapeia um resultado de política (ou sua ausência) para o código de saída.

    - None (explain sem regra correspondente) → KEY_NOT_FOUND
    - resultado aprovado → SUCCESS
    - resultado reprovado → POLICY_FAILURE
    """
    if result is None:
        return ExitCode.KEY_NOT_FOUND

    for attr in ("is_success", "is_clean", "is_pass"):
        if hasattr(result, attr):
            return ExitCode.SUCCESS if getattr(result, attr) else ExitCode.POLICY_FAILURE

    raise TypeError(f"unsupported result type: {type(result).__name__}")
