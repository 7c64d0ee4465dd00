"""
Central Publisher — Canonical Load Warnings (v1)

Este módulo define o padrão canônico de sinais **não fatais** emitidos
durante o carregamento de fontes de configuração.

Fontes de configuração são opcionais por definição: um arquivo de
properties ilegível, um booleano malformado ou um detector que falha
não interrompem a resolução. Em vez disso, produzem um `LoadWarning`
estruturado, que o chamador (wizard, task layer) pode exibir ou
promover a erro.

Taxonomia:
- MissingSource: fonte ausente → parcial vazia, **nenhum** warning
- MALFORMED_ENTRY: valor não interpretável (ex.: booleano) → campo não definido
- SOURCE_UNREADABLE: falha de I/O (permissão, diretório, encoding) → parcial vazia
- DETECTOR_FAILED / DETECTOR_WARNING: falha ou aviso de auto-detector
- PROVIDER_FAILED: falha de provedor de smart defaults

Nenhum warning carrega valores sensíveis.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoadWarning:
    """
    Warning canônico de carregamento.

    Campos:
    - code: código estável do warning (não é texto livre)
    - source: nome da fonte (`ConfigurationSource.name`) que o emitiu
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    code: str
    source: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do warning."""
        return asdict(self)

    def __str__(self) -> str:
        return f"[{self.source}] {self.code}: {self.message}"


# ---------------------------------------------------------------------------
# Catálogo canônico de códigos (v1)
# ---------------------------------------------------------------------------

MALFORMED_ENTRY = "MALFORMED_ENTRY"
SOURCE_UNREADABLE = "SOURCE_UNREADABLE"
DETECTOR_FAILED = "DETECTOR_FAILED"
DETECTOR_WARNING = "DETECTOR_WARNING"
PROVIDER_FAILED = "PROVIDER_FAILED"
ENCODING_FALLBACK = "ENCODING_FALLBACK"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def malformed_entry(
    *,
    source: str,
    key: str,
    field_path: str,
    expected: str,
    hint: str = "Use 'true' ou 'false' (sem diferenciar maiúsculas).",
) -> LoadWarning:
    return LoadWarning(
        code=MALFORMED_ENTRY,
        source=source,
        message=f"Valor inválido para '{key}': esperado {expected}; campo ignorado",
        details={"key": key, "field": field_path, "expected": expected},
        hint=hint,
    )


def source_unreadable(
    *,
    source: str,
    location: str,
    reason: str,
    hint: str = "Verifique se o caminho aponta para um arquivo regular legível em UTF-8.",
) -> LoadWarning:
    return LoadWarning(
        code=SOURCE_UNREADABLE,
        source=source,
        message=f"Não foi possível ler {location}: {reason}",
        details={"location": location, "reason": reason},
        hint=hint,
    )


def detector_failed(*, detector: str, reason: str) -> LoadWarning:
    return LoadWarning(
        code=DETECTOR_FAILED,
        source="AUTO_DETECTED",
        message=f"Detector '{detector}' falhou: {reason}",
        details={"detector": detector, "reason": reason},
    )


def detector_warning(*, detector: str, message: str) -> LoadWarning:
    return LoadWarning(
        code=DETECTOR_WARNING,
        source="AUTO_DETECTED",
        message=message,
        details={"detector": detector},
    )


def provider_failed(*, provider: str, reason: str) -> LoadWarning:
    return LoadWarning(
        code=PROVIDER_FAILED,
        source="SMART_DEFAULTS",
        message=f"Provedor '{provider}' falhou: {reason}",
        details={"provider": provider, "reason": reason},
    )


def encoding_fallback(*, source: str, location: str, encoding: str) -> LoadWarning:
    return LoadWarning(
        code=ENCODING_FALLBACK,
        source=source,
        message=f"{location} não é UTF-8 válido; lido como {encoding}",
        details={"location": location, "encoding": encoding},
        hint="Salve o arquivo em UTF-8 ou use escapes \\uXXXX para caracteres não ASCII.",
    )
