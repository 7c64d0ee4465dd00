# src/central_publisher/core/validation/engine.py
"""
Engine de validação da configuração final.

Este módulo orquestra os validadores registrados e produz violações
estruturadas. A validação é uma função pura da configuração: não lê
fontes, não possui estado entre chamadas e **nunca levanta** por conta
de violações. Decidir se uma violação é fatal é responsabilidade do
chamador (task layer, wizard).

Responsabilidades do módulo:
    - Manter a lista ordenada de validadores (built-in + customizados)
    - Executar todos os validadores e agregar violações na ordem de registro
    - Expor `validate()` (lista) e `validate_report()` (relatório agregado)
    - Converter violações bloqueantes em falha dura sob demanda

Invariantes:
    - A ordem das violações segue a ordem de registro dos validadores
    - A mesma configuração sempre produz as mesmas violações

Limites explícitos:
    - Não altera a configuração
    - Não registra diagnósticos de proveniência
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Type

from ..config.errors import AggregatedConfigurationError
from ..config.model import PublisherConfig
from .rules import ConfigurationValidator, RequiredFieldValidator, UrlFormatValidator
from .types import ValidationOptions, ValidationReport, ValidationViolation

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Executa validadores registrados sobre uma `PublisherConfig`."""

    def __init__(self, validators: Optional[Sequence[ConfigurationValidator]] = None):
        if validators is None:
            validators = (RequiredFieldValidator(), UrlFormatValidator())
        self._validators: List[ConfigurationValidator] = list(validators)

    @property
    def validators(self) -> List[ConfigurationValidator]:
        return list(self._validators)

    def add_validator(self, validator: ConfigurationValidator) -> None:
        self._validators.append(validator)

    def remove_validator(self, validator_class: Type[ConfigurationValidator]) -> None:
        self._validators = [v for v in self._validators if type(v) is not validator_class]

    def validate(
        self, config: PublisherConfig, *, require_credentials: bool = True
    ) -> List[ValidationViolation]:
        options = ValidationOptions(require_credentials=require_credentials)
        violations: List[ValidationViolation] = []
        for validator in self._validators:
            violations.extend(validator.validate(config, options))
        logger.debug(
            "validation finished: %d violation(s) from %d validator(s)",
            len(violations),
            len(self._validators),
        )
        return violations

    def validate_report(
        self,
        config: PublisherConfig,
        *,
        require_credentials: bool = True,
        strict: bool = False,
    ) -> ValidationReport:
        return ValidationReport(
            violations=tuple(self.validate(config, require_credentials=require_credentials)),
            strict=strict,
            validators_run=tuple(v.name for v in self._validators),
        )


_DEFAULT_ENGINE = ValidationEngine()


def validate(
    config: PublisherConfig, *, require_credentials: bool = True
) -> List[ValidationViolation]:
    """
    Valida a configuração com as regras built-in.

    Args:
        config: Configuração (tipicamente a final, já resolvida).
        require_credentials: Se a ação do chamador exige credenciais.

    Returns:
        Lista de violações (vazia quando a configuração é válida).
    """
    return _DEFAULT_ENGINE.validate(config, require_credentials=require_credentials)


def raise_for_violations(violations: Iterable[ValidationViolation]) -> None:
    """Levanta `AggregatedConfigurationError` se houver ao menos uma violação."""
    violations = list(violations)
    if violations:
        raise AggregatedConfigurationError(violations)
