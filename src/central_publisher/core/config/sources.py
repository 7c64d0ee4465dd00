# src/central_publisher/core/config/sources.py
"""
Loaders canônicos de fontes de configuração.

Cada loader converte uma entrada crua (configuração explícita, arquivo
de properties, variáveis de ambiente, resultado de auto-detecção,
smart defaults) em uma configuração **parcial** e a entrega em um
`LoadResult` etiquetado com a sua `ConfigurationSource`.

Contrato comum:
    load(...) -> LoadResult(config, source, warnings, violations)

Princípios fundamentais:
    - Ausência rotineira de entrada nunca levanta exceção:
      arquivo inexistente ou variáveis não definidas → parcial vazia, sem warnings
    - Entradas malformadas viram `LoadWarning` e o campo fica não definido
    - Valores em branco equivalem a "não definido"
    - Chaves sem mapeamento são ignoradas

Responsabilidades do módulo:
    - Interpretar tabelas `(chave externa, field path)` com um único despacho
    - Converter booleanos textuais (`true` / `false`)
    - Construir o developer único a partir de `projectInfo.developer.*`
    - Ler arquivos de properties através do `FileCache`

Decisões arquiteturais:
    - Loaders não decidem precedência (papel do resolver)
    - O cache armazena o parse cru do arquivo; o mapeamento é reaplicado
      a cada carga, de modo que tabelas customizadas compartilham a entrada
    - A validação na carga (`validate_on_load`) registra violações sem levantar

Limites explícitos:
    - Não realiza merge entre fontes
    - Não registra diagnósticos
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping as MappingType, Optional, Tuple, Union

from ..autodetection.detector import AutoDetectionManager
from ..defaults.providers import SmartDefaultManager
from ..errors import LoadWarning, encoding_fallback, malformed_entry, source_unreadable
from ..project_context import ProjectContext
from ..validation.engine import ValidationEngine
from ..validation.types import ValidationViolation
from .builders import ConfigBuilder
from .cache import FileCache, default_file_cache
from .fields import (
    DEVELOPER_ATTRS,
    DEVELOPER_PREFIX,
    KIND_BOOL,
    KIND_DEVELOPERS,
    KIND_SET,
    field_spec,
)
from .loader import load_explicit_file
from .mappings import DEFAULT_PROPERTY_MAPPINGS, ENVIRONMENT_MAPPINGS, Mapping, check_mapping
from .model import ConfigurationSource, PublisherConfig
from .properties import read_properties_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """Parcial produzida por um loader, com warnings e violações de carga."""

    config: PublisherConfig
    source: ConfigurationSource
    warnings: Tuple[LoadWarning, ...] = ()
    violations: Tuple[ValidationViolation, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.config.is_empty()

    @classmethod
    def empty(cls, source: ConfigurationSource, *warnings: LoadWarning) -> "LoadResult":
        return cls(config=PublisherConfig(), source=source, warnings=tuple(warnings))


def parse_bool(text: str) -> Optional[bool]:
    """`true` / `false` sem diferenciar maiúsculas; qualquer outro valor → None."""
    normalized = text.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return None


def apply_mapping(
    values: MappingType[str, str],
    mapping: Mapping,
    source: ConfigurationSource,
) -> Tuple[PublisherConfig, List[LoadWarning]]:
    """
    Constrói uma parcial a partir de entradas cruas e de uma tabela de mapeamento.

    Args:
        values: Entradas cruas (chave externa → texto).
        mapping: Pares `(chave externa, field path)`.
        source: Fonte usada para etiquetar warnings.

    Returns:
        Tupla `(parcial, warnings)`.
    """
    builder = ConfigBuilder()
    developer: Dict[str, str] = {}
    warnings: List[LoadWarning] = []

    for key, path in mapping:
        raw = values.get(key)
        if raw is None or not raw.strip():
            continue

        if path.startswith(DEVELOPER_PREFIX):
            developer[DEVELOPER_ATTRS[path[len(DEVELOPER_PREFIX):]]] = raw.strip()
            continue

        spec = field_spec(path)
        if spec.kind == KIND_BOOL:
            flag = parse_bool(raw)
            if flag is None:
                logger.warning("%s: malformed boolean for %s (field left unset)", source.name, key)
                warnings.append(
                    malformed_entry(source=source.name, key=key, field_path=path, expected="boolean")
                )
                continue
            builder.set(path, flag)
        elif spec.kind == KIND_SET:
            builder.set(path, [item.strip() for item in raw.split(",")])
        elif spec.kind == KIND_DEVELOPERS:
            warnings.append(
                malformed_entry(
                    source=source.name,
                    key=key,
                    field_path=path,
                    expected="developer attributes",
                    hint=f"Mapeie para {DEVELOPER_PREFIX}<atributo>.",
                )
            )
        else:
            builder.set(path, raw.strip())

    if developer:
        builder.developer(**developer)
    return builder.build(), warnings


class ExplicitConfigLoader:
    """Fonte `DSL`: repassa a configuração explícita do chamador sem alterações."""

    source = ConfigurationSource.DSL

    def load(self, explicit: Union[PublisherConfig, str, Path, None] = None) -> LoadResult:
        if explicit is None:
            return LoadResult.empty(self.source)
        if isinstance(explicit, (str, Path)):
            explicit = load_explicit_file(explicit)
        if not isinstance(explicit, PublisherConfig):
            raise TypeError(
                f"Configuração explícita deve ser PublisherConfig, recebido: {type(explicit).__name__}"
            )
        return LoadResult(config=explicit, source=self.source)


class PropertiesFileLoader:
    """Fonte `PROPERTIES`: arquivo `key=value` (ex.: `gradle.properties`)."""

    source = ConfigurationSource.PROPERTIES

    def __init__(
        self,
        mapping: Mapping = DEFAULT_PROPERTY_MAPPINGS,
        *,
        cache: Optional[FileCache] = None,
        validate_on_load: bool = False,
        validation_engine: Optional[ValidationEngine] = None,
    ):
        self._mapping = check_mapping(mapping)
        self._cache = cache
        self._validate_on_load = validate_on_load
        self._engine = validation_engine

    @property
    def cache(self) -> FileCache:
        return self._cache if self._cache is not None else default_file_cache()

    def _unreadable(self, location: Path, reason: str) -> LoadResult:
        logger.warning("properties file %s is unreadable: %s", location, reason)
        return LoadResult.empty(
            self.source,
            source_unreadable(source=self.source.name, location=str(location), reason=reason),
        )

    def load(self, path: Union[str, Path, None]) -> LoadResult:
        if path is None:
            return LoadResult.empty(self.source)

        location = Path(path).expanduser()
        try:
            # `exists` pode levantar PermissionError (diretório pai sem permissão)
            if not location.exists():
                logger.debug("properties file %s not found; skipping", location)
                return LoadResult.empty(self.source)
            if not location.is_file():
                return self._unreadable(location, "not a regular file")
            parsed = self.cache.get_or_load(location, read_properties_file)
        except FileNotFoundError:
            # removido entre a verificação e a leitura
            return LoadResult.empty(self.source)
        except OSError as exc:
            return self._unreadable(location, exc.strerror or str(exc))

        config, warnings = apply_mapping(parsed.entries, self._mapping, self.source)
        if parsed.used_fallback_encoding:
            logger.warning("properties file %s is not valid UTF-8; read as %s", location, parsed.encoding)
            warnings.insert(
                0,
                encoding_fallback(
                    source=self.source.name, location=str(location), encoding=parsed.encoding
                ),
            )

        violations: Tuple[ValidationViolation, ...] = ()
        if self._validate_on_load:
            engine = self._engine if self._engine is not None else ValidationEngine()
            violations = tuple(engine.validate(config))
            if violations:
                logger.info("properties file %s: %d violation(s) on load", location, len(violations))

        logger.debug("properties file %s: %d field(s) loaded", location, len(config.set_paths()))
        return LoadResult(
            config=config,
            source=self.source,
            warnings=tuple(warnings),
            violations=violations,
        )


class EnvironmentLoader:
    """Fonte `ENVIRONMENT`: variáveis de ambiente mapeadas (ou um mapeamento injetado)."""

    source = ConfigurationSource.ENVIRONMENT

    def __init__(
        self,
        mapping: Mapping = ENVIRONMENT_MAPPINGS,
        *,
        environ: Optional[MappingType[str, str]] = None,
    ):
        self._mapping = check_mapping(mapping)
        self._environ = environ

    def load(self) -> LoadResult:
        environ = self._environ if self._environ is not None else os.environ
        config, warnings = apply_mapping(environ, self._mapping, self.source)
        logger.debug("environment: %d field(s) loaded", len(config.set_paths()))
        return LoadResult(config=config, source=self.source, warnings=tuple(warnings))


class AutoDetectionLoader:
    """Fonte `AUTO_DETECTED`: combinação dos detectores em ordem de declaração."""

    source = ConfigurationSource.AUTO_DETECTED

    def __init__(self, manager: Optional[AutoDetectionManager] = None):
        self._manager = manager if manager is not None else AutoDetectionManager()

    def load(
        self,
        project: Optional[ProjectContext],
        toggles: Optional[PublisherConfig] = None,
    ) -> LoadResult:
        if project is None:
            return LoadResult.empty(self.source)
        summary = self._manager.detect_configuration(project, toggles)
        return LoadResult(config=summary.config, source=self.source, warnings=summary.warnings)


class SmartDefaultsLoader:
    """Fonte `SMART_DEFAULTS`: fallbacks para campos ainda não definidos."""

    source = ConfigurationSource.SMART_DEFAULTS

    def __init__(self, manager: Optional[SmartDefaultManager] = None):
        self._manager = manager if manager is not None else SmartDefaultManager()

    def load(self, existing: PublisherConfig, project: Optional[ProjectContext]) -> LoadResult:
        if project is None:
            return LoadResult.empty(self.source)
        partial, warnings = self._manager.compute_defaults(project, existing)
        return LoadResult(config=partial, source=self.source, warnings=warnings)
