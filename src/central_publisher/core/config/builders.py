# src/central_publisher/core/config/builders.py
"""
Construção explícita de configuração de publicação.

Este módulo fornece o `ConfigBuilder`, um builder mutável que acumula
valores por seção (ou por field path) e produz uma `PublisherConfig`
imutável em `build()`. É a forma idiomática de montar configuração
explícita (DSL) em código, e também a base dos loaders que agrupam
entradas externas por seção.

Também fornece `config_from_mapping`, a conversão estrita de um
mapeamento aninhado (camelCase, como em `PublisherConfig.to_dict()`)
para `PublisherConfig`.

Decisões arquiteturais:
    - O builder é o único ponto mutável; o resultado de `build()` é congelado
    - Setters por seção são derivados do registro de field paths (sem reflexão)
    - Conversão de mapeamento é estrita: chaves desconhecidas e tipos
      incompatíveis levantam `ConfigError`
    - `None` em qualquer campo significa "não mencionado"

Invariantes:
    - Duas chamadas a `build()` produzem instâncias iguais e independentes
    - Valores de conjunto são normalizados para `frozenset`
    - A lista de developers é normalizada para `tuple`

Limites explícitos:
    - Não interpreta strings externas (booleanos textuais são papel dos loaders)
    - Não valida formato (URLs, e-mails)
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from .errors import (
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnknownConfigKeyError,
)
from .fields import (
    DEVELOPER_ATTRS,
    FIELD_SPECS,
    KIND_BOOL,
    KIND_DEVELOPERS,
    KIND_SET,
    KIND_STR,
    FieldSpec,
    field_spec,
    write,
)
from .model import ConfigurationMetadata, ConfigurationSource, DeveloperConfig, PublisherConfig

_SECTIONS: Dict[str, Tuple[str, ...]] = {
    "credentials": ("credentials",),
    "project_info": ("project_info",),
    "scm": ("project_info", "scm"),
    "license": ("project_info", "license"),
    "issue_management": ("project_info", "issue_management"),
    "signing": ("signing",),
    "publishing": ("publishing",),
    "validation": ("validation",),
    "auto_detection": ("auto_detection",),
}

# section -> {atributo snake_case -> field path}
_SECTION_PATHS: Dict[str, Dict[str, str]] = {
    section: {
        spec.attrs[-1]: spec.path
        for spec in FIELD_SPECS
        if spec.attrs[:-1] == prefix
    }
    for section, prefix in _SECTIONS.items()
}

_DEVELOPER_KEYS = {**DEVELOPER_ATTRS, **{v: v for v in DEVELOPER_ATTRS.values()}}


def coerce_developer(value: Any, *, where: str = "developer") -> DeveloperConfig:
    if isinstance(value, DeveloperConfig):
        return value
    if not isinstance(value, Mapping):
        raise InvalidConfigValueError(
            f"{where}: esperado mapeamento, recebido {type(value).__name__}"
        )
    kwargs: Dict[str, str] = {}
    for key, item in value.items():
        attr = _DEVELOPER_KEYS.get(key)
        if attr is None:
            raise UnknownConfigKeyError(f"Chave desconhecida em {where}: {key}")
        if item is None:
            continue
        if not isinstance(item, str):
            raise InvalidConfigValueError(
                f"{where}.{key}: esperado str, recebido {type(item).__name__}"
            )
        kwargs[attr] = item
    return DeveloperConfig(**kwargs)


def coerce_value(spec: FieldSpec, value: Any) -> Any:
    """Normaliza `value` para o tipo lógico do campo ou levanta `InvalidConfigValueError`."""
    if value is None:
        return None

    if spec.kind == KIND_STR:
        if not isinstance(value, str):
            raise InvalidConfigValueError(
                f"{spec.path}: esperado str, recebido {type(value).__name__}"
            )
        return value

    if spec.kind == KIND_BOOL:
        if not isinstance(value, bool):
            raise InvalidConfigValueError(
                f"{spec.path}: esperado bool, recebido {type(value).__name__}"
            )
        return value

    if spec.kind == KIND_SET:
        if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
            raise InvalidConfigValueError(
                f"{spec.path}: esperado lista de str, recebido {type(value).__name__}"
            )
        items = list(value)
        for item in items:
            if not isinstance(item, str):
                raise InvalidConfigValueError(
                    f"{spec.path}: itens devem ser str, recebido {type(item).__name__}"
                )
        return frozenset(item for item in items if item.strip())

    if spec.kind == KIND_DEVELOPERS:
        if isinstance(value, (str, Mapping)) or not isinstance(value, (list, tuple)):
            raise InvalidConfigValueError(
                f"{spec.path}: esperado lista de developers, recebido {type(value).__name__}"
            )
        return tuple(
            coerce_developer(item, where=f"{spec.path}[{i}]") for i, item in enumerate(value)
        )

    raise InvalidConfigValueError(f"{spec.path}: tipo de campo não suportado ({spec.kind})")


class ConfigBuilder:
    """
    Builder mutável de `PublisherConfig`.

    Exemplo:
        config = (
            ConfigBuilder()
            .credentials(username="alice")
            .project_info(name="my-lib", url="https://example.com/my-lib")
            .developer(id="alice", email="alice@example.com")
            .publishing(auto_publish=True)
            .build()
        )
    """

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}
        self._developers: List[DeveloperConfig] = []
        self._sources: Set[ConfigurationSource] = set()

    # -----------------------------
    # Setters genéricos
    # -----------------------------
    def set(self, path: str, value: Any) -> "ConfigBuilder":
        spec = field_spec(path)
        coerced = coerce_value(spec, value)
        if spec.kind == KIND_DEVELOPERS:
            self._developers = list(coerced or ())
        elif coerced is None:
            self._values.pop(path, None)
        else:
            self._values[path] = coerced
        return self

    def _section(self, section: str, values: Dict[str, Any]) -> "ConfigBuilder":
        paths = _SECTION_PATHS[section]
        for attr, value in values.items():
            if attr not in paths:
                raise TypeError(f"{section}() got an unexpected keyword argument '{attr}'")
            self.set(paths[attr], value)
        return self

    # -----------------------------
    # Setters por seção
    # -----------------------------
    def credentials(self, **values: Any) -> "ConfigBuilder":
        return self._section("credentials", values)

    def project_info(self, **values: Any) -> "ConfigBuilder":
        return self._section("project_info", values)

    def scm(self, **values: Any) -> "ConfigBuilder":
        return self._section("scm", values)

    def license(self, **values: Any) -> "ConfigBuilder":
        return self._section("license", values)

    def issue_management(self, **values: Any) -> "ConfigBuilder":
        return self._section("issue_management", values)

    def signing(self, **values: Any) -> "ConfigBuilder":
        return self._section("signing", values)

    def publishing(self, **values: Any) -> "ConfigBuilder":
        return self._section("publishing", values)

    def validation(self, **values: Any) -> "ConfigBuilder":
        return self._section("validation", values)

    def auto_detection(self, **values: Any) -> "ConfigBuilder":
        return self._section("auto_detection", values)

    def developer(self, **attrs: Any) -> "ConfigBuilder":
        """Acrescenta um developer ao final da lista (ordem de declaração preservada)."""
        developer = coerce_developer(attrs)
        if not developer.is_empty():
            self._developers.append(developer)
        return self

    def with_source(self, source: ConfigurationSource) -> "ConfigBuilder":
        self._sources.add(source)
        return self

    # -----------------------------
    # Build
    # -----------------------------
    def build(self) -> PublisherConfig:
        config = PublisherConfig()
        for path, value in self._values.items():
            config = write(config, path, value)
        if self._developers:
            config = write(config, "projectInfo.developers", tuple(self._developers))
        if self._sources:
            config = config.with_metadata(sources=frozenset(self._sources))
        return config


# ---------------------------------------------------------------------------
# Mapeamento aninhado -> PublisherConfig
# ---------------------------------------------------------------------------

def _build_key_tree() -> Dict[str, Any]:
    tree: Dict[str, Any] = {}
    for spec in FIELD_SPECS:
        parts = spec.path.split(".")
        node = tree
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = spec
    return tree


_KEY_TREE = _build_key_tree()


def _walk(builder: ConfigBuilder, node: Mapping[str, Any], tree: Dict[str, Any], prefix: str) -> None:
    for key, value in node.items():
        location = f"{prefix}{key}"
        expected = tree.get(key)
        if expected is None:
            raise UnknownConfigKeyError(f"Chave desconhecida: {location}")
        if isinstance(expected, FieldSpec):
            builder.set(expected.path, value)
            continue
        if value is None:
            continue
        if not isinstance(value, Mapping):
            raise InvalidConfigValueError(
                f"{location}: esperado mapeamento, recebido {type(value).__name__}"
            )
        _walk(builder, value, expected, f"{location}.")


def _metadata_from_mapping(data: Any) -> ConfigurationMetadata:
    if not isinstance(data, Mapping):
        raise InvalidConfigValueError(
            f"metadata: esperado mapeamento, recebido {type(data).__name__}"
        )
    unknown = set(data) - {"sources", "lastModified", "schemaVersion"}
    if unknown:
        raise UnknownConfigKeyError(f"Chave desconhecida: metadata.{sorted(unknown)[0]}")

    sources = set()
    for name in data.get("sources") or ():
        try:
            sources.add(ConfigurationSource[name])
        except KeyError:
            raise InvalidConfigValueError(f"metadata.sources: fonte desconhecida {name!r}") from None

    last_modified: Optional[datetime] = None
    raw_ts = data.get("lastModified")
    if raw_ts:
        try:
            last_modified = datetime.fromisoformat(raw_ts)
        except (TypeError, ValueError):
            raise InvalidConfigValueError(
                f"metadata.lastModified: timestamp inválido {raw_ts!r}"
            ) from None

    return ConfigurationMetadata(
        sources=frozenset(sources),
        last_modified=last_modified,
        schema_version=data.get("schemaVersion") or ConfigurationMetadata().schema_version,
    )


def config_from_mapping(data: Any) -> PublisherConfig:
    """
    Converte um mapeamento aninhado (camelCase) em `PublisherConfig`.

    Args:
        data: Mapeamento no formato de `PublisherConfig.to_dict()`.

    Returns:
        PublisherConfig: Configuração construída.

    Raises:
        InvalidConfigRootTypeError: Se `data` não for um mapeamento.
        UnknownConfigKeyError: Se existir chave fora do formato fixo.
        InvalidConfigValueError: Se algum valor tiver tipo incompatível.
    """
    if not isinstance(data, Mapping):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    body = dict(data)
    metadata_raw = body.pop("metadata", None)

    builder = ConfigBuilder()
    _walk(builder, body, _KEY_TREE, "")
    config = builder.build()

    if metadata_raw is not None:
        config = replace(config, metadata=_metadata_from_mapping(metadata_raw))
    return config
