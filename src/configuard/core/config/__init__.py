# src/configuard/core/config/__init__.py

"""
Camada de configuração da engine do Configuard.

Este pacote carrega, mescla e valida as configurações que controlam o
comportamento ambiente da engine (verbosidade, redação de valores sensíveis,
caminho padrão do contrato). Não confundir com os stores de configuração
das aplicações governadas pelo contrato.

Princípios fundamentais:
    - Configuração não contém lógica de política
    - Overrides são sempre explícitos
    - A mesma entrada sempre produz a mesma configuração final
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    InvalidSettingError,
    UnsupportedConfigFormatError,
)
from .loader import load_settings  # noqa: F401
from .merge import deep_merge  # noqa: F401
from .settings import DEFAULT_SETTINGS, EngineSettings, default_settings  # noqa: F401
