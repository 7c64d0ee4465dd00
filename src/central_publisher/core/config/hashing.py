# src/central_publisher/core/config/hashing.py
"""
Hashing canônico da configuração resolvida.

O hash representa a **identidade estrutural** da configuração efetiva e
permite detectar, entre duas resoluções, se algo mudou (ex.: decidir se
uma tarefa de publicação está atualizada).

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Metadados de proveniência (fontes, timestamp) não participam do hash
    - Codificação UTF-8, algoritmo SHA-256

Invariantes:
    - Configurações com os mesmos valores produzem o mesmo hash,
      independentemente de quais fontes os forneceram
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, Union

from .model import PublisherConfig


def compute_config_hash(config: Union[PublisherConfig, Dict[str, Any]]) -> str:
    """
    Gera o hash SHA-256 determinístico de uma configuração.

    Args:
        config: `PublisherConfig` (metadados excluídos) ou dicionário já serializado.

    Returns:
        str: Hash hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto não for `PublisherConfig` nem `dict`.
    """
    if isinstance(config, PublisherConfig):
        payload: Dict[str, Any] = config.to_dict(include_metadata=False)
    elif isinstance(config, dict):
        payload = config
    else:
        raise TypeError(
            f"Config para hashing deve ser PublisherConfig ou dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
