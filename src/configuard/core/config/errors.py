# src/configuard/core/config/errors.py
"""
Exceções canônicas da camada de configuração da engine do Configuard.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, a mesclagem e a materialização das configurações da engine
(verbosidade, marcador de redação, caminho padrão do contrato).

As exceções aqui definidas representam **violações estruturais
explícitas** das configurações, e não resultados de política.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - `ConfigError` pertence à camada de erros de entrada

Limites explícitos:
    - Não representa issues de validação de contrato
    - Não realiza fallback ou recovery
"""

from configuard.core.exceptions import ConfiguardInputError


class ConfigError(ConfiguardInputError):
    """
    Exceção base para erros relacionados às configurações da engine.

    Permite captura genérica de falhas de configuração sem confundi-las
    com erros de contrato ou de stores.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração local possui
    extensão não suportada.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz do arquivo de configuração
    não é um dicionário (`dict`).

    Invariantes:
        - O loader só opera sobre estruturas do tipo dicionário
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"output": {"verbosity": "normal"}}
        - override: {"output": "detailed"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingError(ConfigError):
    """
    Exceção levantada quando um valor de configuração já mesclado
    não respeita o domínio permitido (ex.: verbosidade desconhecida).
    """
