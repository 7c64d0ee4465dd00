# src/central_publisher/core/config/merge.py
"""
Utilitário canônico de merge de configuração por campo.

Este módulo implementa a política oficial de merge utilizada pela engine
de resolução para combinar configurações parciais produzidas por fontes
distintas (auto-detecção, smart defaults, ambiente, properties, DSL).

Política de merge (v1):
    - campo escalar (str) → sobrescrito se o override estiver definido (não em branco)
    - campo booleano      → sobrescrito se o override for `True` ou `False` (tri-state)
    - conjunto / lista    → substituição total se o override não estiver vazio
                            (sem merge elemento a elemento, sem concatenação)
    - campo não definido  → o valor da base é preservado

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - A definição de "campo definido" é única (`fields.is_set`) e compartilhada
      com o registro de diagnósticos

Invariantes:
    - A mesma entrada sempre produz a mesma saída
    - Campos não definidos no override são preservados da base
    - `merge_configs(x, PublisherConfig())` preserva todos os campos de `x`

Limites explícitos:
    - Não decide a ordem das fontes (papel do resolver)
    - Não valida semântica de domínio
    - Não carrega fontes externas
"""

from __future__ import annotations

from typing import AbstractSet, Iterable

from .fields import FIELD_SPECS, is_set, read_raw, write
from .model import PublisherConfig


def merge_configs(base: PublisherConfig, override: PublisherConfig) -> PublisherConfig:
    """
    Combina `override` sobre `base` campo a campo.

    Política:
        - override definido  → vence
        - override não definido → base preservada
        - listas e conjuntos → substituição total quando não vazios
        - metadata.sources → união das fontes declaradas por ambos

    Args:
        base (PublisherConfig): Configuração acumulada até o momento.
        override (PublisherConfig): Configuração parcial de maior prioridade.

    Returns:
        PublisherConfig: Nova configuração resultante.

    Raises:
        TypeError: Se algum dos argumentos não for `PublisherConfig`.
    """
    if not isinstance(base, PublisherConfig) or not isinstance(override, PublisherConfig):
        raise TypeError(
            f"Merge requer PublisherConfig, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result = base
    for spec in FIELD_SPECS:
        value = read_raw(override, spec.path)
        if is_set(value):
            result = write(result, spec.path, value)

    sources = base.metadata.sources | override.metadata.sources
    if sources != result.metadata.sources:
        result = result.with_metadata(sources=sources)
    return result


def merge_all(configs: Iterable[PublisherConfig]) -> PublisherConfig:
    """Aplica `merge_configs` em sequência; posteriores sobrescrevem anteriores."""
    result = PublisherConfig()
    for config in configs:
        result = merge_configs(result, config)
    return result


def missing_from(
    base: PublisherConfig,
    candidate: PublisherConfig,
    *,
    exclude: AbstractSet[str] = frozenset(),
) -> PublisherConfig:
    """
    Parcial contendo apenas os campos de `candidate` ainda não definidos em `base`.

    Usado por fontes de fallback (smart defaults), que nunca podem
    substituir um valor já fornecido por uma fonte anterior.
    """
    partial = PublisherConfig()
    for spec in FIELD_SPECS:
        if spec.path in exclude or is_set(read_raw(base, spec.path)):
            continue
        value = read_raw(candidate, spec.path)
        if is_set(value):
            partial = write(partial, spec.path, value)
    return partial
