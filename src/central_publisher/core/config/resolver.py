# src/central_publisher/core/config/resolver.py
"""
Engine de resolução em camadas da configuração de publicação.

Este módulo é o ponto de entrada da camada de configuração. Ele executa
cada loader, combina as parciais em ordem crescente de precedência,
registra diagnósticos de proveniência, valida opcionalmente o resultado
e devolve um `ResolvedConfig`.

Algoritmo (v1):
    1. Parte da configuração vazia
    2. Aplica as fontes em ordem crescente de precedência:
           AUTO_DETECTED → SMART_DEFAULTS → ENVIRONMENT → PROPERTIES → DSL
       ignorando fontes cuja parcial esteja inteiramente vazia
    3. Cada aplicação é um merge campo a campo (`merge_configs`)
    4. Smart defaults recebem a configuração acumulada e só preenchem
       campos ainda não definidos
    5. Materializa os defaults de tipo e registra em `metadata` as fontes
       que contribuíram e o instante da resolução (UTC)

Responsabilidades do módulo:
    - Orquestrar loaders, merge, diagnósticos e validação
    - Agregar warnings de carga e violações de `validate_on_load`
    - Calcular o hash estrutural da configuração final

Decisões arquiteturais:
    - Cada `ConfigurationResolver` possui seu próprio `FileCache` por default;
      a função `resolve()` de módulo usa o cache de processo
    - A validação apenas reporta; `raise_for_errors()` é a falha dura opcional
    - Auto-detecção e smart defaults exigem um `ProjectContext`

Invariantes:
    - `config.get(p) == diagnostics.final_value(p)` para todo field path
    - `metadata.sources` é exatamente o conjunto de fontes que definiram
      ao menos um campo
    - A mesma entrada (fontes inalteradas) sempre produz a mesma configuração

Limites explícitos:
    - Não executa publicação, assinatura ou upload
    - Não implementa heurísticas de auto-detecção
    - Não persiste a configuração resolvida

Este módulo existe para dar respostas determinísticas e explicáveis
sobre a configuração efetiva de publicação.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import (
    Iterator,
    List,
    Mapping as MappingType,
    Optional,
    Sequence,
    Set,
    Tuple,
    Union,
)

from ..autodetection.detector import AutoDetectionManager, AutoDetector
from ..defaults.providers import SmartDefaultManager, SmartDefaultProvider
from ..errors import LoadWarning
from ..project_context import ProjectContext
from ..traceability.diagnostics import ConfigurationDiagnostics
from ..validation.engine import ValidationEngine, raise_for_violations
from ..validation.types import ValidationReport, ValidationViolation
from .cache import FileCache, default_file_cache
from .hashing import compute_config_hash
from .mappings import DEFAULT_PROPERTY_MAPPINGS, ENVIRONMENT_MAPPINGS, Mapping
from .merge import merge_configs
from .model import ConfigurationSource, PublisherConfig, utc_now
from .sources import (
    AutoDetectionLoader,
    EnvironmentLoader,
    ExplicitConfigLoader,
    LoadResult,
    PropertiesFileLoader,
    SmartDefaultsLoader,
)

logger = logging.getLogger(__name__)

ExplicitInput = Union[PublisherConfig, str, Path, None]


@dataclass(frozen=True)
class ResolvedConfig:
    """
    Resultado de uma resolução.

    Desempacota como `(config, diagnostics, errors)`:

        config, diagnostics, errors = resolver.resolve(explicit)

    Campos:
    - config: configuração final (defaults materializados, metadados preenchidos)
    - diagnostics: registro de proveniência desta resolução
    - errors: violações de validação da configuração final
    - report: relatório agregado (None quando a validação não foi executada)
    - warnings: warnings não fatais emitidos pelos loaders
    - load_violations: violações registradas por `validate_on_load`
    - config_hash: hash SHA-256 da configuração (sem metadados)
    """

    config: PublisherConfig
    diagnostics: ConfigurationDiagnostics
    errors: Tuple[ValidationViolation, ...] = ()
    report: Optional[ValidationReport] = None
    warnings: Tuple[LoadWarning, ...] = ()
    load_violations: Tuple[ValidationViolation, ...] = ()
    config_hash: str = ""

    def __iter__(self) -> Iterator[object]:
        yield self.config
        yield self.diagnostics
        yield list(self.errors)

    @property
    def is_valid(self) -> bool:
        return self.report is None or self.report.is_valid

    def raise_for_errors(self) -> None:
        """Levanta `AggregatedConfigurationError` com todas as violações bloqueantes."""
        if self.report is not None:
            raise_for_violations(self.report.blocking())


class ConfigurationResolver:
    """
    Resolve a configuração de publicação a partir de todas as fontes.

    Exemplo:
        resolver = ConfigurationResolver(project=ProjectContext.from_directory("."))
        resolved = resolver.resolve(explicit, properties_path="gradle.properties")
        config, diagnostics, errors = resolved
    """

    def __init__(
        self,
        *,
        project: Optional[ProjectContext] = None,
        file_cache: Optional[FileCache] = None,
        property_mappings: Mapping = DEFAULT_PROPERTY_MAPPINGS,
        environment_mappings: Mapping = ENVIRONMENT_MAPPINGS,
        environ: Optional[MappingType[str, str]] = None,
        detectors: Sequence[AutoDetector] = (),
        smart_default_providers: Optional[Sequence[SmartDefaultProvider]] = None,
        validation_engine: Optional[ValidationEngine] = None,
        validate_on_load: bool = False,
        require_credentials: bool = True,
    ):
        self.project = project
        self.file_cache = file_cache if file_cache is not None else FileCache()
        self.validation_engine = validation_engine if validation_engine is not None else ValidationEngine()
        self.require_credentials = require_credentials

        self._explicit_loader = ExplicitConfigLoader()
        self._properties_loader = PropertiesFileLoader(
            property_mappings,
            cache=self.file_cache,
            validate_on_load=validate_on_load,
            validation_engine=self.validation_engine,
        )
        self._environment_loader = EnvironmentLoader(environment_mappings, environ=environ)
        self._auto_detection_loader = AutoDetectionLoader(AutoDetectionManager(detectors))
        self._smart_defaults_loader = SmartDefaultsLoader(SmartDefaultManager(smart_default_providers))

    def resolve(
        self,
        explicit: ExplicitInput = None,
        properties_path: Union[str, Path, None] = None,
        enable_auto_detection: bool = True,
        *,
        validate: bool = True,
    ) -> ResolvedConfig:
        """
        Executa uma resolução completa.

        Args:
            explicit: Configuração explícita (DSL) ou caminho de declaração YAML/JSON.
            properties_path: Arquivo de properties (ausente → fonte ignorada).
            enable_auto_detection: Executa os detectores registrados.
            validate: Valida a configuração final.

        Returns:
            ResolvedConfig: Configuração final, diagnósticos e violações.

        Raises:
            ConfigError: Apenas para declaração explícita inválida (arquivo
                inexistente, formato, chave ou valor inválido).
        """
        dsl = self._explicit_loader.load(explicit)

        diagnostics = ConfigurationDiagnostics()
        accumulator = PublisherConfig()
        contributing: Set[ConfigurationSource] = set()
        warnings: List[LoadWarning] = []
        load_violations: List[ValidationViolation] = []

        def apply(result: LoadResult) -> None:
            nonlocal accumulator
            warnings.extend(result.warnings)
            load_violations.extend(result.violations)
            if result.is_empty:
                logger.debug("source %s contributed nothing", result.source.name)
                return
            accumulator = merge_configs(accumulator, result.config)
            count = diagnostics.record_partial(result.config, result.source)
            contributing.add(result.source)
            logger.debug("source %s contributed %d field(s)", result.source.name, count)

        if enable_auto_detection:
            # toggles `autoDetection.*` só podem vir da declaração explícita
            apply(self._auto_detection_loader.load(self.project, toggles=dsl.config))
        apply(self._smart_defaults_loader.load(accumulator, self.project))
        apply(self._environment_loader.load())
        apply(self._properties_loader.load(properties_path))
        apply(dsl)

        final = accumulator.with_defaults().with_metadata(
            sources=frozenset(contributing),
            last_modified=utc_now(),
        )

        report: Optional[ValidationReport] = None
        errors: Tuple[ValidationViolation, ...] = ()
        if validate and final.get("validation.enabled"):
            report = self.validation_engine.validate_report(
                final,
                require_credentials=self.require_credentials,
                strict=final.get("validation.strictMode"),
            )
            errors = report.violations

        logger.info(
            "configuration resolved: sources=%s, %d violation(s), %d warning(s)",
            ",".join(s.name for s in sorted(contributing, key=lambda s: s.precedence)) or "-",
            len(errors),
            len(warnings),
        )
        return ResolvedConfig(
            config=final,
            diagnostics=diagnostics,
            errors=errors,
            report=report,
            warnings=tuple(warnings),
            load_violations=tuple(load_violations),
            config_hash=compute_config_hash(final),
        )


def resolve(
    explicit_config: ExplicitInput = None,
    properties_path: Union[str, Path, None] = None,
    enable_auto_detection: bool = True,
    *,
    project: Optional[ProjectContext] = None,
    environ: Optional[MappingType[str, str]] = None,
    detectors: Sequence[AutoDetector] = (),
    smart_default_providers: Optional[Sequence[SmartDefaultProvider]] = None,
    validate: bool = True,
    validate_on_load: bool = False,
    require_credentials: bool = True,
) -> ResolvedConfig:
    """Resolve a configuração usando o `FileCache` de processo."""
    resolver = ConfigurationResolver(
        project=project,
        file_cache=default_file_cache(),
        environ=environ,
        detectors=detectors,
        smart_default_providers=smart_default_providers,
        validate_on_load=validate_on_load,
        require_credentials=require_credentials,
    )
    return resolver.resolve(
        explicit_config,
        properties_path,
        enable_auto_detection,
        validate=validate,
    )
