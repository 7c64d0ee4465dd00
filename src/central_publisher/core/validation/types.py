# src/central_publisher/core/validation/types.py
"""
Tipos canônicos de validação de configuração.

Define violações estruturadas, severidades, opções de validação e o
relatório agregado consumido pelo wizard e pela task layer.

Decisões arquiteturais:
    - Violações são valores (dataclasses congeladas), nunca exceções
    - O código de cada violação é estável e serve como identificador
    - `ERROR` bloqueia publicação; `WARNING` só bloqueia em modo estrito
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ValidationSeverity(Enum):
    ERROR = "ERROR"  # bloqueia publicação
    WARNING = "WARNING"  # pode causar problemas
    INFO = "INFO"


@dataclass(frozen=True)
class ValidationViolation:
    """
    Violação de uma regra de validação.

    Campos:
    - field: field path afetado (ex.: `projectInfo.url`)
    - message: mensagem curta e humana
    - code: código estável (ex.: `FMT-PROJECT_URL`)
    - severity: severidade da violação
    - suggestion: ação sugerida ao operador
    """

    field: str
    message: str
    code: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["severity"] = self.severity.value
        return out


@dataclass(frozen=True)
class ValidationOptions:
    """Contexto da ação do chamador que altera quais regras se aplicam."""

    require_credentials: bool = True


@dataclass(frozen=True)
class ValidationReport:
    """Resultado agregado de uma validação completa."""

    violations: Tuple[ValidationViolation, ...] = ()
    strict: bool = False
    validators_run: Tuple[str, ...] = field(default=())

    def _by(self, severity: ValidationSeverity) -> List[ValidationViolation]:
        return [v for v in self.violations if v.severity == severity]

    @property
    def errors(self) -> List[ValidationViolation]:
        return self._by(ValidationSeverity.ERROR)

    @property
    def warnings(self) -> List[ValidationViolation]:
        return self._by(ValidationSeverity.WARNING)

    @property
    def infos(self) -> List[ValidationViolation]:
        return self._by(ValidationSeverity.INFO)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def info_count(self) -> int:
        return len(self.infos)

    def blocking(self) -> List[ValidationViolation]:
        """Violações que impedem publicação (warnings incluídos em modo estrito)."""
        if self.strict:
            return self.errors + self.warnings
        return self.errors

    @property
    def is_valid(self) -> bool:
        return not self.blocking()

    def for_field(self, path: str) -> List[ValidationViolation]:
        return [v for v in self.violations if v.field == path]

    def format_report(self) -> str:
        lines = [
            "Configuration validation passed" if self.is_valid else "Configuration validation failed",
            f"Summary: {self.error_count} errors, {self.warning_count} warnings, {self.info_count} info",
        ]
        for severity, header in (
            (ValidationSeverity.ERROR, "Errors"),
            (ValidationSeverity.WARNING, "Warnings"),
            (ValidationSeverity.INFO, "Information"),
        ):
            group = self._by(severity)
            if not group:
                continue
            lines.append("")
            lines.append(header)
            for v in group:
                lines.append(f"  {v.code}: {v.message}")
                if v.suggestion:
                    lines.append(f"    -> {v.suggestion}")
        return "\n".join(lines)
