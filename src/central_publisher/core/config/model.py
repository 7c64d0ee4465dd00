# src/central_publisher/core/config/model.py
"""
Modelo canônico de configuração de publicação.

Este módulo define os tipos de valor imutáveis que representam a
configuração de publicação de artefatos assinados: credenciais,
metadados do projeto (POM), assinatura, opções de publicação, toggles
de validação e de auto-detecção, além dos metadados de proveniência.

Também define `ConfigurationSource`, o enum de fontes com ordem de
precedência fixa e total:

    DEFAULTS < SMART_DEFAULTS < AUTO_DETECTED < ENVIRONMENT < PROPERTIES < DSL

Responsabilidades do módulo:
    - Declarar as seções da configuração como dataclasses congeladas
    - Expor leitura por field path (`PublisherConfig.get`)
    - Materializar defaults de tipo na configuração final (`with_defaults`)
    - Serializar e desserializar a configuração (dict / JSON)
    - Produzir cópias com segredos mascarados (`redacted`)

Decisões arquiteturais:
    - Strings têm default vazio; credenciais nunca têm default
    - Booleanos são tri-state (`Optional[bool]`) até a materialização final,
      para distinguir "não mencionado" de "explicitamente False"
    - Coleções são imutáveis (`tuple` / `frozenset`)
    - Metadados não são field paths e não participam do merge

Invariantes:
    - Instâncias nunca são mutadas após a construção
    - `get(path)` nunca retorna `None`
    - `to_dict()` preserva o estado tri-state (round-trip sem perda)

Limites explícitos:
    - Não carrega fontes externas
    - Não resolve precedência entre fontes
    - Não valida semântica (ver `core.validation`)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from .fields import (
    FIELD_PATHS,
    FIELD_SPECS,
    KIND_BOOL,
    KIND_DEVELOPERS,
    KIND_SET,
    SECRET_PATHS,
    is_set,
    mask_secret,
    read,
    read_raw,
    write,
)

SCHEMA_VERSION = "1.0.0"


class ConfigurationSource(Enum):
    """Fontes de configuração; o valor é o rank de precedência (maior vence)."""

    DEFAULTS = 0
    SMART_DEFAULTS = 1
    AUTO_DETECTED = 2
    ENVIRONMENT = 3
    PROPERTIES = 4
    DSL = 5

    @property
    def precedence(self) -> int:
        return self.value


# Maior precedência primeiro.
PRECEDENCE_ORDER: Tuple[ConfigurationSource, ...] = tuple(
    sorted(ConfigurationSource, key=lambda s: s.precedence, reverse=True)
)

# Ordem em que o resolver aplica as fontes sobre o acumulador.
APPLICATION_ORDER: Tuple[ConfigurationSource, ...] = (
    ConfigurationSource.AUTO_DETECTED,
    ConfigurationSource.SMART_DEFAULTS,
    ConfigurationSource.ENVIRONMENT,
    ConfigurationSource.PROPERTIES,
    ConfigurationSource.DSL,
)


# ---------------------------------------------------------------------------
# Seções
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CredentialsConfig:
    username: str = ""
    password: str = field(default="", repr=False)


@dataclass(frozen=True)
class ScmConfig:
    url: str = ""
    connection: str = ""
    developer_connection: str = ""


@dataclass(frozen=True)
class LicenseConfig:
    name: str = ""
    url: str = ""
    distribution: str = ""


@dataclass(frozen=True)
class IssueManagementConfig:
    system: str = ""
    url: str = ""


@dataclass(frozen=True)
class DeveloperConfig:
    """Developer do POM. A lista de developers é indexada por posição, não por id."""

    id: str = ""
    name: str = ""
    email: str = ""
    organization: str = ""
    organization_url: str = ""

    def is_empty(self) -> bool:
        return not any(
            is_set(v)
            for v in (self.id, self.name, self.email, self.organization, self.organization_url)
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "organization": self.organization,
            "organizationUrl": self.organization_url,
        }


@dataclass(frozen=True)
class ProjectInfoConfig:
    name: str = ""
    description: str = ""
    url: str = ""
    scm: ScmConfig = field(default_factory=ScmConfig)
    license: LicenseConfig = field(default_factory=LicenseConfig)
    issue_management: IssueManagementConfig = field(default_factory=IssueManagementConfig)
    developers: Tuple[DeveloperConfig, ...] = ()


@dataclass(frozen=True)
class SigningConfig:
    key_id: str = field(default="", repr=False)
    password: str = field(default="", repr=False)
    secret_key_ring_file: str = ""
    use_gpg_agent: Optional[bool] = None


@dataclass(frozen=True)
class PublishingConfig:
    auto_publish: Optional[bool] = None
    aggregation: Optional[bool] = None
    dry_run: Optional[bool] = None
    publications: FrozenSet[str] = frozenset()
    exclude_modules: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class ValidationConfig:
    enabled: Optional[bool] = None
    strict_mode: Optional[bool] = None
    skip_on_error: Optional[bool] = None


@dataclass(frozen=True)
class AutoDetectionConfig:
    project_info: Optional[bool] = None
    git_info: Optional[bool] = None
    credentials: Optional[bool] = None
    signing: Optional[bool] = None


@dataclass(frozen=True)
class ConfigurationMetadata:
    """
    Metadados de proveniência da configuração.

    - sources: fontes que definiram ao menos um campo
    - last_modified: instante (UTC) da resolução que produziu a instância
    - schema_version: versão do formato de configuração
    """

    sources: FrozenSet[ConfigurationSource] = frozenset()
    last_modified: Optional[datetime] = None
    schema_version: str = SCHEMA_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sources": [s.name for s in PRECEDENCE_ORDER if s in self.sources],
            "lastModified": self.last_modified.isoformat() if self.last_modified else None,
            "schemaVersion": self.schema_version,
        }


# ---------------------------------------------------------------------------
# Raiz
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PublisherConfig:
    """
    Configuração completa (ou parcial) de publicação.

    A mesma classe representa tanto a configuração parcial produzida por
    um loader quanto a configuração final resolvida. A diferença é apenas
    de conteúdo: parciais possuem campos não definidos; a configuração
    final tem os defaults de tipo materializados via `with_defaults()`.

    Invariantes:
        - Instâncias são imutáveis (`frozen=True`)
        - Operações de transformação sempre retornam novas instâncias
    """

    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)
    project_info: ProjectInfoConfig = field(default_factory=ProjectInfoConfig)
    signing: SigningConfig = field(default_factory=SigningConfig)
    publishing: PublishingConfig = field(default_factory=PublishingConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    auto_detection: AutoDetectionConfig = field(default_factory=AutoDetectionConfig)
    metadata: ConfigurationMetadata = field(default_factory=ConfigurationMetadata)

    # -----------------------------
    # Leitura por field path
    # -----------------------------
    def get(self, path: str) -> Any:
        """Valor efetivo do campo: o definido por alguma fonte ou o default de tipo."""
        return read(self, path)

    def get_raw(self, path: str) -> Any:
        return read_raw(self, path)

    def is_field_set(self, path: str) -> bool:
        return is_set(read_raw(self, path))

    def set_paths(self) -> List[str]:
        """Field paths definidos nesta instância, na ordem canônica."""
        return [p for p in FIELD_PATHS if is_set(read_raw(self, p))]

    def is_empty(self) -> bool:
        return not any(is_set(read_raw(self, p)) for p in FIELD_PATHS)

    # -----------------------------
    # Transformações (sempre retornam nova instância)
    # -----------------------------
    def with_value(self, path: str, value: Any) -> "PublisherConfig":
        return write(self, path, value)

    def with_defaults(self) -> "PublisherConfig":
        """Materializa os defaults de booleanos tri-state não mencionados."""
        config = self
        for spec in FIELD_SPECS:
            if spec.kind == KIND_BOOL and read_raw(config, spec.path) is None:
                config = write(config, spec.path, spec.default)
        return config

    def with_metadata(
        self,
        *,
        sources: Optional[FrozenSet[ConfigurationSource]] = None,
        last_modified: Optional[datetime] = None,
    ) -> "PublisherConfig":
        metadata = self.metadata
        if sources is not None:
            metadata = replace(metadata, sources=frozenset(sources))
        if last_modified is not None:
            metadata = replace(metadata, last_modified=last_modified)
        return replace(self, metadata=metadata)

    def redacted(self) -> "PublisherConfig":
        """Cópia com todos os campos sensíveis mascarados (para logs e relatórios)."""
        config = self
        for path in SECRET_PATHS:
            raw = read_raw(config, path)
            if is_set(raw):
                config = write(config, path, mask_secret(raw))
        return config

    # -----------------------------
    # Serialização
    # -----------------------------
    def to_dict(self, *, include_metadata: bool = True) -> Dict[str, Any]:
        """
        Serializa a configuração em dicionário com chaves camelCase.

        O estado tri-state é preservado (`None` para booleanos não
        mencionados). Conjuntos são serializados como listas ordenadas
        para garantir saída determinística.
        """
        out: Dict[str, Any] = {}
        for spec in FIELD_SPECS:
            raw = read_raw(self, spec.path)
            if spec.kind == KIND_SET:
                raw = sorted(raw)
            elif spec.kind == KIND_DEVELOPERS:
                raw = [d.to_dict() for d in raw]
            parts = spec.path.split(".")
            node = out
            for part in parts[:-1]:
                node = node.setdefault(part, {})
            node[parts[-1]] = raw
        if include_metadata:
            out["metadata"] = self.metadata.to_dict()
        return out

    def to_json(self, *, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PublisherConfig":
        from .builders import config_from_mapping

        return config_from_mapping(data)

    @classmethod
    def from_json(cls, text: str) -> "PublisherConfig":
        return cls.from_dict(json.loads(text))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
