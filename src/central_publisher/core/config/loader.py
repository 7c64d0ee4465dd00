# src/central_publisher/core/config/loader.py
"""
Loader de declarações explícitas de configuração de publicação.

Este módulo carrega uma declaração explícita (equivalente ao bloco DSL)
a partir de um arquivo YAML ou JSON e a converte em `PublisherConfig`.
O resultado é tratado pelo resolver como fonte `DSL`, a de maior
precedência.

Formato esperado (camelCase, mesmo formato de `PublisherConfig.to_dict()`):

    credentials:
      username: alice
    projectInfo:
      name: my-lib
      url: https://github.com/alice/my-lib
      developers:
        - id: alice
          email: alice@example.com
    publishing:
      autoPublish: false

Princípios fundamentais:
    - A declaração explícita é fornecida pelo chamador e deve existir
    - Erros estruturais são falhas fatais (diferente de fontes opcionais)
    - Nenhuma coerção implícita de tipos é aplicada

Invariantes:
    - O retorno é sempre uma `PublisherConfig`
    - Arquivos vazios produzem uma configuração vazia

Limites explícitos:
    - Não realiza merge com outras fontes
    - Não valida semântica de domínio (URLs, credenciais)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml  # PyYAML

from .builders import config_from_mapping
from .errors import ExplicitConfigNotFoundError, UnsupportedConfigFormatError
from .model import PublisherConfig

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")


def _read_document(path: Path) -> Any:
    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)

    if suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            text = f.read()
        return json.loads(text) if text.strip() else None

    raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix or '(sem extensão)'}")


def load_explicit_file(path: Union[str, Path]) -> PublisherConfig:
    """
    Carrega uma declaração explícita de configuração.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Args:
        path: Caminho do arquivo de declaração.

    Returns:
        PublisherConfig: Configuração declarada (parcial).

    Raises:
        ExplicitConfigNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um mapeamento.
        UnknownConfigKeyError: Se houver chave fora do formato fixo.
        InvalidConfigValueError: Se algum valor tiver tipo incompatível.
    """
    file = Path(path).expanduser()
    if not file.is_file():
        raise ExplicitConfigNotFoundError(f"Arquivo de configuração explícita não encontrado: {file}")

    data = _read_document(file)
    if data is None:
        data = {}

    config = config_from_mapping(data)
    logger.debug("explicit config loaded from %s: %d field(s)", file, len(config.set_paths()))
    return config
