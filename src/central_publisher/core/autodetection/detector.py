# src/central_publisher/core/autodetection/detector.py
"""
Contrato de auto-detecção de configuração.

Este módulo define o contrato consumido pela engine de resolução para
obter configuração inferida do projeto (arquivos de build, repositório
git, etc.). As heurísticas concretas de detecção são colaboradores
externos; a engine conhece apenas o contrato `AutoDetector` e o formato
do resultado (`DetectionResult`).

Responsabilidades do módulo:
    - Declarar o contrato `AutoDetector` e os tipos de resultado
    - Executar detectores em ordem de declaração (`AutoDetectionManager`)
    - Combinar as parciais com "definido vence, posterior sobrescreve anterior"
    - Agregar valores detectados mantendo a maior confiança por field path
    - Converter falhas de detectores em `LoadWarning` estruturados

Decisões arquiteturais:
    - Um detector que levanta exceção não interrompe a resolução
    - Detectores desabilitados por default, ou cuja categoria está
      explicitamente desligada em `autoDetection.*`, não são executados
    - `detect()` pode retornar `None` quando não há nada útil a informar

Limites explícitos:
    - Não implementa heurísticas (git remote, inferência de licença)
    - Não decide precedência frente a outras fontes (papel do resolver)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from ..config.merge import merge_configs
from ..config.model import PublisherConfig
from ..errors import LoadWarning, detector_failed, detector_warning
from ..project_context import ProjectContext

logger = logging.getLogger(__name__)

# Categorias reconhecidas; cada uma corresponde a um toggle `autoDetection.<categoria>`.
CATEGORIES: Tuple[str, ...] = ("projectInfo", "gitInfo", "credentials", "signing")


class Confidence(Enum):
    """Nível de confiança de um valor detectado (HIGH é o mais confiável)."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        return {"HIGH": 3, "MEDIUM": 2, "LOW": 1}[self.value]


@dataclass(frozen=True)
class DetectedValue:
    path: str
    value: str
    origin: str  # ex.: "build.gradle.kts", ".git/config"
    confidence: Confidence


@dataclass(frozen=True)
class DetectionResult:
    config: PublisherConfig
    detected_values: Dict[str, DetectedValue] = field(default_factory=dict)
    warnings: Tuple[str, ...] = ()


class AutoDetector:
    """
    Contrato de um detector de configuração.

    Atributos:
    - name: nome do detector (diagnóstico e warnings)
    - category: toggle `autoDetection.*` que habilita o detector (ou None)
    - enabled_by_default: detectores desabilitados nunca são executados
    """

    name: str = ""
    category: Optional[str] = None
    enabled_by_default: bool = True

    def detect(self, project: ProjectContext) -> Optional[DetectionResult]:
        raise NotImplementedError


@dataclass(frozen=True)
class AutoDetectionSummary:
    config: PublisherConfig
    detected_values: Dict[str, DetectedValue]
    warnings: Tuple[LoadWarning, ...]
    detectors_run: Tuple[str, ...]

    @property
    def has_detected_values(self) -> bool:
        return bool(self.detected_values)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def by_confidence(self, confidence: Confidence) -> Dict[str, DetectedValue]:
        return {p: v for p, v in self.detected_values.items() if v.confidence == confidence}


def is_enabled(detector: AutoDetector, toggles: Optional[PublisherConfig] = None) -> bool:
    if not detector.enabled_by_default:
        return False
    if detector.category is None or toggles is None:
        return True
    # apenas um `False` explícito desliga a categoria
    return toggles.get_raw(f"autoDetection.{detector.category}") is not False


class AutoDetectionManager:
    """Executa detectores em ordem de declaração e combina os resultados."""

    def __init__(self, detectors: Sequence[AutoDetector] = ()):
        self._detectors: Tuple[AutoDetector, ...] = tuple(detectors)

    @property
    def detectors(self) -> Tuple[AutoDetector, ...]:
        return self._detectors

    def detect_configuration(
        self,
        project: ProjectContext,
        toggles: Optional[PublisherConfig] = None,
    ) -> AutoDetectionSummary:
        config = PublisherConfig()
        detected: Dict[str, DetectedValue] = {}
        warnings: List[LoadWarning] = []
        run: List[str] = []

        for detector in self._detectors:
            if not is_enabled(detector, toggles):
                logger.debug("auto-detection: skipping disabled detector %s", detector.name)
                continue
            run.append(detector.name)
            try:
                result = detector.detect(project)
            except Exception as exc:  # noqa: BLE001
                logger.warning("auto-detection: detector %s failed: %s", detector.name, exc)
                warnings.append(detector_failed(detector=detector.name, reason=str(exc)))
                continue
            if result is None:
                continue

            config = merge_configs(config, result.config)
            for path, value in result.detected_values.items():
                existing = detected.get(path)
                if existing is None or value.confidence.rank > existing.confidence.rank:
                    detected[path] = value
            warnings.extend(
                detector_warning(detector=detector.name, message=message)
                for message in result.warnings
            )

        logger.debug(
            "auto-detection: %d detector(s) run, %d field(s) detected",
            len(run),
            len(config.set_paths()),
        )
        return AutoDetectionSummary(
            config=config,
            detected_values=detected,
            warnings=tuple(warnings),
            detectors_run=tuple(run),
        )
