# src/central_publisher/__init__.py
"""
Central Publisher — resolução em camadas da configuração de publicação.

Este pacote raiz define o namespace público da engine que configura a
publicação de artefatos assinados em um repositório de pacotes (Maven
Central), combinando configuração explícita, arquivos de properties,
variáveis de ambiente, valores auto-detectados e smart defaults.

Princípios centrais:
    - Precedência fixa e total entre fontes (exatamente um vencedor por campo)
    - Configuração imutável; merge nunca muta entradas
    - Toda decisão de resolução é explicável (diagnósticos por campo)
    - Validação reporta; a falha dura é decisão do chamador

Arquitetura em alto nível:
    - core.config        → modelo, loaders, cache, merge, resolver e hashing
    - core.autodetection → contrato de detectores de configuração
    - core.defaults      → provedores de smart defaults
    - core.validation    → regras e engine de validação
    - core.traceability  → diagnósticos de proveniência

Limites explícitos:
    - Não implementa o wizard interativo nem tasks de build
    - Não assina nem envia artefatos
"""
# src/central_publisher/__init__.py
import logging

from .core.config.builders import ConfigBuilder
from .core.config.errors import AggregatedConfigurationError, ConfigError
from .core.config.model import ConfigurationSource, PublisherConfig
from .core.config.resolver import ConfigurationResolver, ResolvedConfig, resolve
from .core.project_context import ProjectContext
from .core.validation.engine import validate

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AggregatedConfigurationError",
    "ConfigBuilder",
    "ConfigError",
    "ConfigurationResolver",
    "ConfigurationSource",
    "ProjectContext",
    "PublisherConfig",
    "ResolvedConfig",
    "resolve",
    "validate",
]
