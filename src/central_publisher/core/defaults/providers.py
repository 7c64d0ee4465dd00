# src/central_publisher/core/defaults/providers.py
"""
Provedores de smart defaults.

Smart defaults são fallbacks conservadores aplicados quando nenhuma
outra fonte forneceu o valor. São sensíveis ao contexto: recebem a
configuração já combinada até o momento e o `ProjectContext`, e podem,
por exemplo, inferir o nome do projeto a partir do diretório.

Regras (v1):
    - Provedores executam do menor para o maior `priority`; o de maior
      prioridade sobrescreve valores do de menor prioridade
    - Apenas campos ainda não definidos na configuração de entrada são
      retornados
    - Credenciais e segredos de assinatura nunca são preenchidos, mesmo
      que um provedor os retorne

Prioridades usuais:
    - 100: defaults de framework
    - 50: defaults de linguagem
    - 10: defaults genéricos
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence, Tuple, Union

from ..config.builders import ConfigBuilder
from ..config.merge import merge_configs, missing_from
from ..config.model import PublisherConfig
from ..errors import LoadWarning, provider_failed
from ..project_context import ProjectContext

logger = logging.getLogger(__name__)

# Campos que nenhum smart default pode preencher.
PROTECTED_PATHS: FrozenSet[str] = frozenset(
    {
        "credentials.username",
        "credentials.password",
        "signing.keyId",
        "signing.password",
    }
)

DEFAULT_DESCRIPTION = "A library for publishing to Maven Central"
DEFAULT_LICENSE_NAME = "Apache License 2.0"
DEFAULT_LICENSE_URL = "https://www.apache.org/licenses/LICENSE-2.0.txt"
DEFAULT_LICENSE_DISTRIBUTION = "repo"


class SmartDefaultProvider:
    """Contrato de um provedor de defaults sensíveis ao contexto."""

    name: str = ""
    priority: int = 0

    def can_provide_defaults(self, project: ProjectContext) -> bool:
        raise NotImplementedError

    def provide_defaults(
        self, project: ProjectContext, existing: PublisherConfig
    ) -> PublisherConfig:
        raise NotImplementedError


def infer_project_name(project: ProjectContext) -> str:
    """
    Nome do projeto a partir do contexto.

    - subprojeto de um build multi-projeto → `<raiz>-<subprojeto>`
    - projeto raiz com nome → nome da raiz (ou do projeto)
    - sem nomes → nome do diretório
    """
    root = project.root_name.strip()
    name = project.name.strip()
    if root and name and name != "root" and name != root:
        return f"{root}-{name}"
    if root:
        return root
    if name:
        return name
    return project.directory_name


class GenericProjectDefaultProvider(SmartDefaultProvider):
    """Fallback genérico para qualquer projeto (menor prioridade)."""

    name = "GenericProjectDefaults"
    priority = 10

    def __init__(self, home: Optional[Union[str, Path]] = None):
        self._home = Path(home) if home is not None else None

    def default_keyring_path(self) -> str:
        home = self._home if self._home is not None else Path.home()
        return str(home / ".gnupg" / "secring.gpg")

    def can_provide_defaults(self, project: ProjectContext) -> bool:
        return True

    def provide_defaults(
        self, project: ProjectContext, existing: PublisherConfig
    ) -> PublisherConfig:
        return (
            ConfigBuilder()
            .project_info(name=infer_project_name(project), description=DEFAULT_DESCRIPTION)
            .license(
                name=DEFAULT_LICENSE_NAME,
                url=DEFAULT_LICENSE_URL,
                distribution=DEFAULT_LICENSE_DISTRIBUTION,
            )
            .signing(secret_key_ring_file=self.default_keyring_path())
            .publishing(auto_publish=False, aggregation=True, dry_run=False)
            .build()
        )


class SmartDefaultManager:
    """Aplica provedores em ordem de prioridade sobre a configuração existente."""

    def __init__(self, providers: Optional[Sequence[SmartDefaultProvider]] = None):
        if providers is None:
            providers = (GenericProjectDefaultProvider(),)
        # menor prioridade primeiro: os de maior prioridade sobrescrevem
        self._providers: Tuple[SmartDefaultProvider, ...] = tuple(
            sorted(providers, key=lambda p: p.priority)
        )

    @property
    def providers(self) -> Tuple[SmartDefaultProvider, ...]:
        return self._providers

    def active_providers(self, project: ProjectContext) -> List[SmartDefaultProvider]:
        return [p for p in self._providers if p.can_provide_defaults(project)]

    def compute_defaults(
        self, project: ProjectContext, existing: PublisherConfig
    ) -> Tuple[PublisherConfig, Tuple[LoadWarning, ...]]:
        """
        Calcula a parcial de smart defaults para `existing`.

        Returns:
            Tupla `(parcial, warnings)`. A parcial contém apenas campos ainda
            não definidos em `existing` e nunca contém campos protegidos.
        """
        combined = PublisherConfig()
        warnings: List[LoadWarning] = []
        for provider in self._providers:
            try:
                if not provider.can_provide_defaults(project):
                    continue
                defaults = provider.provide_defaults(project, existing)
            except Exception as exc:  # noqa: BLE001
                logger.warning("smart defaults: provider %s failed: %s", provider.name, exc)
                warnings.append(provider_failed(provider=provider.name, reason=str(exc)))
                continue
            combined = merge_configs(combined, defaults)

        partial = missing_from(existing, combined, exclude=PROTECTED_PATHS)
        logger.debug("smart defaults: %d field(s) filled", len(partial.set_paths()))
        return partial, tuple(warnings)
