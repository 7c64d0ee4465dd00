# tests/conftest.py
"""
Fixtures compartilhados para testes do Central Publisher.

Este módulo define fixtures reutilizáveis que fornecem:
- arquivos de properties escritos em diretórios temporários
- ambientes injetados (sem depender de `os.environ`)
- caches de arquivo isolados por teste
- contexto de projeto (ProjectContext) determinístico
- detectores dummy para o contrato de auto-detecção

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Nenhuma fixture lê o ambiente real do processo
    - Cada teste recebe seu próprio `FileCache`
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

import os

import pytest


@pytest.fixture
def write_properties(tmp_path):
    """
    Fixture factory que escreve um arquivo `gradle.properties` temporário.

    Uso:
        path = write_properties("SONATYPE_USERNAME=alice\\n")
        path = write_properties("...", name="other.properties", mtime=1_700_000_000)

    Returns:
        Callable[..., Path]: Função que escreve o conteúdo e retorna o caminho.
    """

    def _write(content: str, *, name: str = "gradle.properties", mtime=None):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _write


@pytest.fixture
def empty_environ() -> dict:
    return {}


@pytest.fixture
def file_cache():
    from central_publisher.core.config.cache import FileCache

    return FileCache()


@pytest.fixture
def project_ctx(tmp_path):
    """Subprojeto `core` de um build multi-projeto chamado `acme`."""
    from central_publisher.core.project_context import ProjectContext

    project_dir = tmp_path / "core"
    project_dir.mkdir()
    return ProjectContext(name="core", project_dir=project_dir, root_name="acme")


@pytest.fixture
def valid_config():
    """Configuração explícita mínima que passa em todas as regras built-in."""
    from central_publisher.core.config.builders import ConfigBuilder

    return (
        ConfigBuilder()
        .credentials(username="publisher", password="s3cret-passw0rd")
        .project_info(name="acme-core", url="https://github.com/acme/core")
        .scm(url="https://github.com/acme/core")
        .build()
    )


@pytest.fixture
def StaticDetector():
    """
    Fixture factory que fornece um detector dummy com resultado fixo.

    O detector retorna a configuração recebida (ou levanta `error`, se
    informado), permitindo exercitar a combinação de detectores sem
    depender de heurísticas reais.
    """
    from central_publisher.core.autodetection.detector import AutoDetector, DetectionResult

    class _StaticDetector(AutoDetector):
        def __init__(
            self,
            name,
            config=None,
            *,
            category=None,
            detected_values=None,
            warnings=(),
            error=None,
            enabled_by_default=True,
        ):
            self.name = name
            self.category = category
            self.enabled_by_default = enabled_by_default
            self._config = config
            self._detected_values = detected_values or {}
            self._warnings = tuple(warnings)
            self._error = error
            self.calls = 0

        def detect(self, project):
            self.calls += 1
            if self._error is not None:
                raise self._error
            if self._config is None:
                return None
            return DetectionResult(
                config=self._config,
                detected_values=self._detected_values,
                warnings=self._warnings,
            )

    return _StaticDetector
