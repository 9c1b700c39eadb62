# src/configuard/__init__.py
"""
Configuard — governança de configuração de aplicações entre ambientes.

Um contrato declarativo define, por chave, seu tipo, em quais ambientes ela
é obrigatória ou proibida, restrições de valor e quais stores devem ser
consultados e em que ordem. Três operações consomem o contrato:

    - validate → verifica um ou mais ambientes contra o contrato
    - diff     → compara valores resolvidos de dois ambientes
    - explain  → explica a resolução e o veredito de uma chave

Arquitetura em alto nível:
    - core.contract → loader e modelo imutável do contrato
    - core.sources  → achatamento de stores com proveniência
    - core.policy   → resolução, avaliação e as três operações
"""

from .core.context import CommandContext
from .core.contract import ContractDocument, KeyRule, contract_base_directory, load_contract
from .core.exceptions import ConfiguardInputError
from .core.policy import DiffResult, ExplainResult, ValidationResult, diff, explain, validate

__version__ = "0.1.0"

__all__ = [
    "CommandContext",
    "ConfiguardInputError",
    "ContractDocument",
    "DiffResult",
    "ExplainResult",
    "KeyRule",
    "ValidationResult",
    "contract_base_directory",
    "diff",
    "explain",
    "load_contract",
    "validate",
]
