"""
Schema canônico — Contract v1.

Valida a boa formação estrutural e semântica do documento de contrato e
materializa um `ContractDocument` imutável.

A validação é um portão, não um relatório: a primeira violação encontrada
levanta `ContractValidationError` e nada é acumulado.

Ordem de verificação:
    1. version
    2. environments (não vazio, valores não vazios, únicos após trim/case-fold)
    3. keys (não vazio)
    4. sources (appsettings obrigatório; dotenv/envSnapshot quando declarados)
    5. cada regra, na ordem declarada (path, type, unicidade de path/aliases,
       requiredIn/forbiddenIn, sourcePreference, constraints)
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Set, Tuple

from .errors import ContractValidationError
from .models import (
    SUPPORTED_TYPES,
    SUPPORTED_VERSION,
    AppSettingsSource,
    ContractDocument,
    ContractSources,
    DotEnvSource,
    EnvSnapshotSource,
    KeyConstraints,
    KeyRule,
    SourceKind,
    has_env_placeholder,
)
from .paths import environment_key, identifier_key, normalize_path


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x)


def _expect(cond: bool, msg: str, **details: Any) -> None:
    if not cond:
        raise ContractValidationError(msg, details=details)


def _string_list(value: Any, label: str) -> List[str]:
    if value is None:
        return []
    _expect(isinstance(value, list), f"{label} must be a list")
    _expect(all(isinstance(v, str) for v in value), f"{label} values must be strings")
    return list(value)


# ---------------------------------------------------------------------------
# environments
# ---------------------------------------------------------------------------

def _validate_environments(raw: Any) -> Tuple[str, ...]:
    environments = _string_list(raw, "environments")
    _expect(bool(environments), "Contract must define at least one environment in 'environments'.")

    seen: Set[str] = set()
    out: List[str] = []
    for environment in environments:
        canonical = environment.strip()
        _expect(bool(canonical), "environments[] values must not be empty or whitespace.")
        _expect(
            environment_key(canonical) not in seen,
            f"Duplicate environment '{canonical}' is not allowed.",
            environment=canonical,
        )
        seen.add(environment_key(canonical))
        out.append(canonical)
    return tuple(out)


# ---------------------------------------------------------------------------
# sources
# ---------------------------------------------------------------------------

def _optional_flag(section: Dict[str, Any], label: str) -> bool:
    flag = section.get("optional", False)
    _expect(isinstance(flag, bool), f"{label}.optional must be a boolean")
    return flag


def _validate_sources(raw: Any) -> ContractSources:
    sources = raw if raw is not None else {}
    _expect(isinstance(sources, dict), "sources must be a mapping")

    app = sources.get("appsettings")
    _expect(app is not None, "Missing required source configuration: sources.appsettings")
    _expect(isinstance(app, dict), "sources.appsettings must be a mapping")
    _expect(
        _is_non_empty_str(app.get("base")) and _is_non_empty_str(app.get("environmentPattern")),
        "sources.appsettings.base and sources.appsettings.environmentPattern are required.",
    )
    _expect(
        has_env_placeholder(app["environmentPattern"]),
        "sources.appsettings.environmentPattern must include '{env}' placeholder.",
    )
    appsettings = AppSettingsSource(base=app["base"].strip(), environment_pattern=app["environmentPattern"].strip())

    dotenv: Optional[DotEnvSource] = None
    raw_dotenv = sources.get("dotenv")
    if raw_dotenv is not None:
        _expect(isinstance(raw_dotenv, dict), "sources.dotenv must be a mapping")
        _expect(
            _is_non_empty_str(raw_dotenv.get("base")) and _is_non_empty_str(raw_dotenv.get("environmentPattern")),
            "sources.dotenv.base and sources.dotenv.environmentPattern are required when dotenv source is configured.",
        )
        _expect(
            has_env_placeholder(raw_dotenv["environmentPattern"]),
            "sources.dotenv.environmentPattern must include '{env}' placeholder.",
        )
        dotenv = DotEnvSource(
            base=raw_dotenv["base"].strip(),
            environment_pattern=raw_dotenv["environmentPattern"].strip(),
            optional=_optional_flag(raw_dotenv, "sources.dotenv"),
        )

    env_snapshot: Optional[EnvSnapshotSource] = None
    raw_snapshot = sources.get("envSnapshot")
    if raw_snapshot is not None:
        _expect(isinstance(raw_snapshot, dict), "sources.envSnapshot must be a mapping")
        _expect(
            _is_non_empty_str(raw_snapshot.get("environmentPattern")),
            "sources.envSnapshot.environmentPattern is required when envSnapshot source is configured.",
        )
        _expect(
            has_env_placeholder(raw_snapshot["environmentPattern"]),
            "sources.envSnapshot.environmentPattern must include '{env}' placeholder.",
        )
        env_snapshot = EnvSnapshotSource(
            environment_pattern=raw_snapshot["environmentPattern"].strip(),
            optional=_optional_flag(raw_snapshot, "sources.envSnapshot"),
        )

    return ContractSources(appsettings=appsettings, dotenv=dotenv, env_snapshot=env_snapshot)


# ---------------------------------------------------------------------------
# keys
# ---------------------------------------------------------------------------

def _validate_rule_environments(
    key_path: str,
    prop: str,
    values: List[str],
    declared: Set[str],
) -> Tuple[str, ...]:
    seen: Set[str] = set()
    out: List[str] = []
    for environment in values:
        canonical = environment.strip()
        _expect(bool(canonical), f"Key '{key_path}' contains an empty '{prop}' environment.", key=key_path)
        _expect(
            environment_key(canonical) in declared,
            f"Key '{key_path}' references undeclared environment '{canonical}' in '{prop}'.",
            key=key_path,
            environment=canonical,
        )
        _expect(
            environment_key(canonical) not in seen,
            f"Key '{key_path}' contains duplicate environment '{canonical}' in '{prop}'.",
            key=key_path,
            environment=canonical,
        )
        seen.add(environment_key(canonical))
        out.append(canonical)
    return tuple(out)


def _validate_source_preference(key_path: str, values: List[str]) -> Tuple[str, ...]:
    seen: Set[SourceKind] = set()
    out: List[str] = []
    for source in values:
        canonical = source.strip().lower()
        _expect(bool(canonical), f"Key '{key_path}' contains an empty 'sourcePreference' entry.", key=key_path)
        kind = SourceKind.parse(canonical)
        _expect(
            kind is not None,
            f"Key '{key_path}' contains unsupported sourcePreference '{canonical}'.",
            key=key_path,
            source=canonical,
        )
        _expect(
            kind not in seen,
            f"Key '{key_path}' contains duplicate sourcePreference '{canonical}'.",
            key=key_path,
            source=canonical,
        )
        seen.add(kind)  # type: ignore[arg-type]
        out.append(canonical)
    return tuple(out)


def _validate_bound_pair(
    key_path: str,
    constraints: Dict[str, Any],
    min_prop: str,
    max_prop: str,
    *,
    integers_only: bool,
) -> None:
    if min_prop not in constraints or max_prop not in constraints:
        return
    low, high = constraints[min_prop], constraints[max_prop]
    if integers_only:
        _expect(
            _is_int(low) and _is_int(high),
            f"Key '{key_path}' has non-integer '{min_prop}'/'{max_prop}' values.",
            key=key_path,
        )
    else:
        _expect(
            _is_number(low) and _is_number(high),
            f"Key '{key_path}' has non-numeric '{min_prop}'/'{max_prop}' values.",
            key=key_path,
        )
    _expect(
        low <= high,
        f"Key '{key_path}' has invalid constraints: '{min_prop}' cannot be greater than '{max_prop}'.",
        key=key_path,
    )


def _validate_non_negative_int(key_path: str, constraints: Dict[str, Any], prop: str) -> Optional[int]:
    if prop not in constraints:
        return None
    value = constraints[prop]
    _expect(_is_int(value), f"Key '{key_path}' has invalid '{prop}' constraint. Expected an integer.", key=key_path)
    _expect(value >= 0, f"Key '{key_path}' has invalid '{prop}' constraint. Value must be >= 0.", key=key_path)
    return value


def _validate_number(key_path: str, constraints: Dict[str, Any], prop: str) -> Optional[float]:
    if prop not in constraints:
        return None
    value = constraints[prop]
    _expect(_is_number(value), f"Key '{key_path}' has invalid '{prop}' constraint. Expected a number.", key=key_path)
    return value


def _validate_constraints(key_path: str, raw: Any) -> KeyConstraints:
    if raw is None:
        return KeyConstraints()
    _expect(
        isinstance(raw, dict),
        f"Key '{key_path}' has invalid 'constraints' shape. Expected an object.",
        key=key_path,
    )

    _validate_bound_pair(key_path, raw, "minLength", "maxLength", integers_only=True)
    min_length = _validate_non_negative_int(key_path, raw, "minLength")
    max_length = _validate_non_negative_int(key_path, raw, "maxLength")
    min_items = _validate_non_negative_int(key_path, raw, "minItems")
    max_items = _validate_non_negative_int(key_path, raw, "maxItems")
    _validate_bound_pair(key_path, raw, "minimum", "maximum", integers_only=False)
    _validate_bound_pair(key_path, raw, "minItems", "maxItems", integers_only=True)
    minimum = _validate_number(key_path, raw, "minimum")
    maximum = _validate_number(key_path, raw, "maximum")

    pattern = raw.get("pattern")
    _expect(
        pattern is None or isinstance(pattern, str),
        f"Key '{key_path}' has invalid 'pattern' constraint. Expected a string.",
        key=key_path,
    )

    enum: Optional[Tuple[Any, ...]] = None
    if "enum" in raw:
        values = raw["enum"]
        _expect(
            isinstance(values, list),
            f"Key '{key_path}' has invalid 'enum' constraint. Expected an array.",
            key=key_path,
        )
        _expect(
            len(values) > 0,
            f"Key '{key_path}' has invalid 'enum' constraint. Array must not be empty.",
            key=key_path,
        )
        enum = tuple(values)

    return KeyConstraints(
        min_length=min_length,
        max_length=max_length,
        pattern=pattern,
        minimum=minimum,
        maximum=maximum,
        min_items=min_items,
        max_items=max_items,
        enum=enum,
    )


def _validate_key_rule(
    index: int,
    raw: Any,
    declared_environments: Set[str],
    seen_identifiers: Dict[str, str],
) -> KeyRule:
    _expect(isinstance(raw, dict), f"keys[{index}] must be a mapping")

    path = raw.get("path")
    _expect(isinstance(path, str) and bool(normalize_path(path).strip()), "keys[].path must not be empty.")

    key_type = raw.get("type", "string")
    _expect(
        _is_non_empty_str(key_type),
        f"Key '{path}' must define a non-empty 'type'.",
        key=path,
    )
    canonical_type = key_type.strip().lower()
    _expect(
        canonical_type in SUPPORTED_TYPES,
        f"Key '{path}' has unsupported type '{key_type.strip()}'.",
        key=path,
    )

    # unicidade global: path e aliases disputam o mesmo espaço de identificadores
    canonical_path = identifier_key(path)
    _expect(
        canonical_path not in seen_identifiers,
        f"Duplicate key path or alias '{normalize_path(path).strip()}' conflicts with '{seen_identifiers.get(canonical_path)}'.",
        key=path,
    )
    seen_identifiers[canonical_path] = path

    aliases = _string_list(raw.get("aliases"), f"Key '{path}' aliases")
    for alias in aliases:
        canonical_alias = identifier_key(alias)
        _expect(bool(canonical_alias), f"Key '{path}' contains an empty alias.", key=path)
        _expect(
            canonical_alias not in seen_identifiers,
            f"Duplicate key path or alias '{normalize_path(alias).strip()}' conflicts with '{seen_identifiers.get(canonical_alias)}'.",
            key=path,
            alias=alias,
        )
        seen_identifiers[canonical_alias] = path

    required_raw = _string_list(raw.get("requiredIn"), f"Key '{path}' requiredIn")
    forbidden_raw = _string_list(raw.get("forbiddenIn"), f"Key '{path}' forbiddenIn")

    forbidden_keys = {environment_key(e) for e in forbidden_raw}
    for environment in required_raw:
        _expect(
            environment_key(environment) not in forbidden_keys,
            f"Key '{path}' cannot be both required and forbidden in environment '{environment.strip()}'.",
            key=path,
            environment=environment.strip(),
        )

    required_in = _validate_rule_environments(path, "requiredIn", required_raw, declared_environments)
    forbidden_in = _validate_rule_environments(path, "forbiddenIn", forbidden_raw, declared_environments)

    source_preference = _validate_source_preference(
        path, _string_list(raw.get("sourcePreference"), f"Key '{path}' sourcePreference")
    )

    sensitive = raw.get("sensitive", False)
    _expect(isinstance(sensitive, bool), f"Key '{path}' has invalid 'sensitive' flag. Expected a boolean.", key=path)

    constraints = _validate_constraints(path, raw.get("constraints"))

    return KeyRule(
        path=path,
        aliases=tuple(aliases),
        type=canonical_type,
        required_in=required_in,
        forbidden_in=forbidden_in,
        sensitive=sensitive,
        source_preference=source_preference,
        constraints=constraints,
    )


def validate_contract_v1(data: Any) -> ContractDocument:
    """Valida e materializa um contrato v1 (falha na primeira violação)."""
    _expect(isinstance(data, dict), "Contract root must be a mapping/dict")

    version = data.get("version")
    if version is None:
        received = "'(null)'"
    elif isinstance(version, str):
        received = f"'{version}'"
    else:
        # só texto é aceito: 1 (int) não equivale a "1"
        received = f"'{version}' ({type(version).__name__})"
    _expect(
        isinstance(version, str) and version == SUPPORTED_VERSION,
        f"Unsupported contract version {received}. Expected '{SUPPORTED_VERSION}'.",
    )

    environments = _validate_environments(data.get("environments"))

    raw_keys = data.get("keys")
    _expect(raw_keys is None or isinstance(raw_keys, list), "keys must be a list")
    _expect(bool(raw_keys), "Contract must define at least one key rule in 'keys'.")

    sources = _validate_sources(data.get("sources"))

    declared = {environment_key(e) for e in environments}
    seen_identifiers: Dict[str, str] = {}
    keys = [_validate_key_rule(i, raw, declared, seen_identifiers) for i, raw in enumerate(raw_keys)]

    return ContractDocument(
        version=version,
        environments=environments,
        sources=sources,
        keys=tuple(keys),
        raw=dict(data),
    )
