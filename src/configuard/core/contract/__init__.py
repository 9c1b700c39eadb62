"""Configuard — Contract (core).

Componentes canônicos do **Contract v1**:
 - parsing (JSON/YAML)
 - validação estrutural e semântica (fail-fast)
 - modelo imutável com dados derivados por regra
 - normalização de caminhos
 - hashing canônico (rastreabilidade)
"""

from .errors import (  # noqa: F401
    ContractError,
    ContractFileNotFoundError,
    ContractParseError,
    UnsupportedContractFormatError,
    ContractValidationError,
)

from .hashing import compute_contract_hash  # noqa: F401
from .loader import contract_base_directory, load_contract, read_contract_document  # noqa: F401
from .models import (  # noqa: F401
    DEFAULT_SOURCE_ORDER,
    SUPPORTED_TYPES,
    AppSettingsSource,
    ContractDocument,
    ContractSources,
    DotEnvSource,
    EnvSnapshotSource,
    KeyConstraints,
    KeyRule,
    SourceKind,
)
from .paths import identifier_key, normalize_path  # noqa: F401
from .schema import validate_contract_v1  # noqa: F401
