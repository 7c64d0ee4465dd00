# src/central_publisher/core/config/fields.py
"""
Registro canônico de field paths da configuração de publicação.

Este módulo declara, de forma tabular, todos os campos folha da
configuração (`credentials.username`, `projectInfo.scm.url`, ...) e
fornece o despacho genérico de leitura e escrita por field path.

Um field path é o identificador pontuado (camelCase) compartilhado com
o wizard, com a tabela de mapeamento de properties e com o registro de
diagnósticos. O atributo Python correspondente (snake_case) é resolvido
exclusivamente por este registro, sem reflexão dinâmica.

Responsabilidades do módulo:
    - Declarar cada campo folha, seu tipo lógico e seu default de tipo
    - Definir a semântica de "campo definido" (set) usada pelo merge
    - Ler e escrever valores por field path sem mutar a instância original
    - Identificar campos sensíveis e mascarar seus valores

Decisões arquiteturais:
    - Booleanos são tri-state: `None` significa "não mencionado"
    - Strings em branco são equivalentes a "não definido"
    - Coleções vazias são equivalentes a "não definido"
    - A lista de developers é uma única folha (`projectInfo.developers`)

Invariantes:
    - Todo field path do registro aponta para exatamente um atributo
    - `read` nunca retorna `None`: campos não definidos retornam o default de tipo
    - `write` sempre produz uma nova instância (dataclasses congeladas)

Limites explícitos:
    - Não realiza merge entre fontes
    - Não converte strings externas (isso é papel dos loaders)
    - Não valida formato de valores
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, FrozenSet, Tuple

from .errors import UnknownFieldPathError

KIND_STR = "str"
KIND_BOOL = "bool"
KIND_SET = "set"
KIND_DEVELOPERS = "developers"


@dataclass(frozen=True)
class FieldSpec:
    """Declaração de um campo folha: path externo, atributos internos e default."""

    path: str
    attrs: Tuple[str, ...]
    kind: str = KIND_STR
    default: Any = ""
    secret: bool = False


FIELD_SPECS: Tuple[FieldSpec, ...] = (
    # Credentials
    FieldSpec("credentials.username", ("credentials", "username")),
    FieldSpec("credentials.password", ("credentials", "password"), secret=True),
    # Project info
    FieldSpec("projectInfo.name", ("project_info", "name")),
    FieldSpec("projectInfo.description", ("project_info", "description")),
    FieldSpec("projectInfo.url", ("project_info", "url")),
    FieldSpec("projectInfo.scm.url", ("project_info", "scm", "url")),
    FieldSpec("projectInfo.scm.connection", ("project_info", "scm", "connection")),
    FieldSpec(
        "projectInfo.scm.developerConnection",
        ("project_info", "scm", "developer_connection"),
    ),
    FieldSpec("projectInfo.license.name", ("project_info", "license", "name")),
    FieldSpec("projectInfo.license.url", ("project_info", "license", "url")),
    FieldSpec(
        "projectInfo.license.distribution",
        ("project_info", "license", "distribution"),
    ),
    FieldSpec(
        "projectInfo.issueManagement.system",
        ("project_info", "issue_management", "system"),
    ),
    FieldSpec(
        "projectInfo.issueManagement.url",
        ("project_info", "issue_management", "url"),
    ),
    FieldSpec(
        "projectInfo.developers",
        ("project_info", "developers"),
        kind=KIND_DEVELOPERS,
        default=(),
    ),
    # Signing
    FieldSpec("signing.keyId", ("signing", "key_id"), secret=True),
    FieldSpec("signing.password", ("signing", "password"), secret=True),
    FieldSpec("signing.secretKeyRingFile", ("signing", "secret_key_ring_file")),
    FieldSpec("signing.useGpgAgent", ("signing", "use_gpg_agent"), kind=KIND_BOOL, default=True),
    # Publishing
    FieldSpec("publishing.autoPublish", ("publishing", "auto_publish"), kind=KIND_BOOL, default=False),
    FieldSpec("publishing.aggregation", ("publishing", "aggregation"), kind=KIND_BOOL, default=True),
    FieldSpec("publishing.dryRun", ("publishing", "dry_run"), kind=KIND_BOOL, default=False),
    FieldSpec(
        "publishing.publications",
        ("publishing", "publications"),
        kind=KIND_SET,
        default=frozenset(),
    ),
    FieldSpec(
        "publishing.excludeModules",
        ("publishing", "exclude_modules"),
        kind=KIND_SET,
        default=frozenset(),
    ),
    # Validation toggles
    FieldSpec("validation.enabled", ("validation", "enabled"), kind=KIND_BOOL, default=True),
    FieldSpec("validation.strictMode", ("validation", "strict_mode"), kind=KIND_BOOL, default=False),
    FieldSpec("validation.skipOnError", ("validation", "skip_on_error"), kind=KIND_BOOL, default=False),
    # Auto-detection toggles
    FieldSpec("autoDetection.projectInfo", ("auto_detection", "project_info"), kind=KIND_BOOL, default=True),
    FieldSpec("autoDetection.gitInfo", ("auto_detection", "git_info"), kind=KIND_BOOL, default=True),
    FieldSpec("autoDetection.credentials", ("auto_detection", "credentials"), kind=KIND_BOOL, default=True),
    FieldSpec("autoDetection.signing", ("auto_detection", "signing"), kind=KIND_BOOL, default=True),
)

FIELDS: Dict[str, FieldSpec] = {spec.path: spec for spec in FIELD_SPECS}

# Ordem de declaração = ordem canônica de iteração (relatórios, diagnósticos).
FIELD_PATHS: Tuple[str, ...] = tuple(FIELDS)

SECRET_PATHS: FrozenSet[str] = frozenset(s.path for s in FIELD_SPECS if s.secret)

# Alvos de mapeamento que constroem um único developer (POM_DEVELOPER_*).
DEVELOPER_PREFIX = "projectInfo.developer."
DEVELOPER_ATTRS: Dict[str, str] = {
    "id": "id",
    "name": "name",
    "email": "email",
    "organization": "organization",
    "organizationUrl": "organization_url",
}


def field_spec(path: str) -> FieldSpec:
    try:
        return FIELDS[path]
    except KeyError:
        raise UnknownFieldPathError(f"Field path desconhecido: {path}") from None


def is_known_target(path: str) -> bool:
    """Indica se `path` é um alvo válido em tabelas de mapeamento."""
    if path in FIELDS:
        return True
    if path.startswith(DEVELOPER_PREFIX):
        return path[len(DEVELOPER_PREFIX):] in DEVELOPER_ATTRS
    return False


def is_set(value: Any) -> bool:
    """
    Define quando um valor conta como "definido" por uma fonte.

    Regras:
        - None              → não definido
        - str               → definido se não estiver em branco
        - bool              → sempre definido (inclusive `False`)
        - tuple/frozenset   → definido se não estiver vazio
    """
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, bool):
        return True
    if isinstance(value, (tuple, list, set, frozenset)):
        return len(value) > 0
    return True


def read_raw(config: Any, path: str) -> Any:
    """Retorna o valor armazenado (tri-state preservado) no field path."""
    value = config
    for attr in field_spec(path).attrs:
        value = getattr(value, attr)
    return value


def read(config: Any, path: str) -> Any:
    """Retorna o valor efetivo: o armazenado quando definido, senão o default de tipo."""
    spec = field_spec(path)
    value = read_raw(config, path)
    return value if is_set(value) else spec.default


def _replace_nested(obj: Any, attrs: Tuple[str, ...], value: Any) -> Any:
    head = attrs[0]
    if len(attrs) == 1:
        return replace(obj, **{head: value})
    return replace(obj, **{head: _replace_nested(getattr(obj, head), attrs[1:], value)})


def write(config: Any, path: str, value: Any) -> Any:
    """Retorna uma nova instância com `value` no field path (sem mutar `config`)."""
    return _replace_nested(config, field_spec(path).attrs, value)


def mask_secret(value: Any) -> str:
    """Mascara um valor sensível mantendo apenas um prefixo curto para identificação."""
    text = "" if value is None else str(value)
    if not text:
        return ""
    if len(text) <= 4:
        return "****"
    return text[:2] + "*" * (len(text) - 2)


def display_value(path: str, value: Any) -> Any:
    """Valor seguro para logs e relatórios (segredos mascarados)."""
    if path in SECRET_PATHS:
        return mask_secret(value)
    return value
