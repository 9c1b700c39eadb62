"""
Configuard — Exceções de entrada (v1)

Este módulo define a raiz da hierarquia de exceções tipadas do Configuard.

Existem duas camadas estritamente separadas de falha:
    - erros de entrada (input errors): contrato malformado, arquivo de store
      obrigatório ausente, caminho fora do diretório do contrato, configuração
      de engine inválida. São fatais para o comando atual.
    - resultados de política (issues/warnings): nunca são exceções, sempre
      resultados estruturados.

Regras:
    - Toda exceção de entrada herda de `ConfiguardInputError`
    - Exceções carregam apenas dados estruturados e serializáveis em `details`
    - A mensagem é curta e direcionada ao operador
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ConfiguardInputError(Exception):
    """Base de todos os erros de entrada fatais para um comando."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        return self.message
