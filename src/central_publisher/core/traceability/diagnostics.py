# src/central_publisher/core/traceability/diagnostics.py
"""
Diagnósticos de proveniência da configuração resolvida.

Este módulo define o `ConfigurationDiagnostics`, o registro canônico de
rastreabilidade de uma resolução de configuração. Ele responde, de forma
determinística, à pergunta "por que este campo vale X?".

O registro consolida:
    - cada tripla `(field_path, valor, fonte)` observada durante o carregamento
    - o conjunto de fontes que participaram da resolução

Princípios fundamentais:
    - Nenhuma entrada é registrada implicitamente
    - A ordem de chegada é preservada; a precedência é aplicada apenas na leitura
    - O vencedor de um campo é sempre o de maior precedência, nunca o mais recente

Responsabilidades do módulo:
    - Registrar valores por fonte (`record_value`, `record_partial`)
    - Responder qual é o valor final e quem o forneceu
    - Produzir explicações humanas com segredos mascarados
    - Serializar o registro em dict / JSON determinístico

Decisões arquiteturais:
    - Um registro por chamada de resolução (sem estado global)
    - A lista de developers é diagnosticada como uma única folha
    - Campos sem registro retornam o default de tipo do campo

Invariantes:
    - `final_value(p)` == `ResolvedConfig.config.get(p)` para todo field path
    - `values_for(p)` preserva a ordem de chegada
    - `to_dict()` e `explain()` nunca expõem segredos em claro

Limites explícitos:
    - Não carrega fontes
    - Não realiza merge
    - Não valida semântica

Este módulo existe para tornar a resolução explicável e auditável.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from ..config.fields import FIELD_PATHS, field_spec, display_value, is_set, read_raw
from ..config.model import ConfigurationSource, PublisherConfig


@dataclass(frozen=True)
class DiagnosticEntry:
    """Valor observado para um field path, com a fonte que o forneceu."""

    path: str
    value: Any
    source: ConfigurationSource
    sequence: int


def _jsonable(value: Any) -> Any:
    if isinstance(value, frozenset):
        return sorted(value)
    if isinstance(value, tuple):
        return [v.to_dict() if hasattr(v, "to_dict") else v for v in value]
    return value


class ConfigurationDiagnostics:
    """Registro de proveniência de uma única resolução."""

    def __init__(self) -> None:
        self._entries: Dict[str, List[DiagnosticEntry]] = {}
        self._sources: Set[ConfigurationSource] = set()
        self._sequence = 0

    # -----------------------------
    # Registro
    # -----------------------------
    def record_source(self, source: ConfigurationSource) -> None:
        self._sources.add(source)

    def record_value(self, path: str, value: Any, source: ConfigurationSource) -> None:
        field_spec(path)  # rejeita field paths desconhecidos
        self._entries.setdefault(path, []).append(
            DiagnosticEntry(path=path, value=value, source=source, sequence=self._sequence)
        )
        self._sequence += 1
        self._sources.add(source)

    def record_partial(self, config: PublisherConfig, source: ConfigurationSource) -> int:
        """Registra todos os campos definidos em `config`. Retorna quantos."""
        count = 0
        for path in FIELD_PATHS:
            value = read_raw(config, path)
            if is_set(value):
                self.record_value(path, value, source)
                count += 1
        return count

    # -----------------------------
    # Consulta
    # -----------------------------
    def sources_used(self) -> FrozenSet[ConfigurationSource]:
        return frozenset(self._sources)

    def recorded_paths(self) -> List[str]:
        return [p for p in FIELD_PATHS if p in self._entries]

    def values_for(self, path: str) -> List[Tuple[Any, ConfigurationSource]]:
        return [(e.value, e.source) for e in self._entries.get(path, ())]

    def _winner(self, path: str) -> Optional[DiagnosticEntry]:
        entries = self._entries.get(path)
        if not entries:
            return None
        # maior precedência primeiro; empate resolvido pela chegada mais recente
        return sorted(entries, key=lambda e: (e.source.precedence, e.sequence), reverse=True)[0]

    def final_value(self, path: str) -> Any:
        """
        Valor final do campo segundo a precedência de fontes.

        Args:
            path: Field path canônico (ex.: `credentials.username`).

        Returns:
            O valor da fonte de maior precedência que definiu o campo,
            ou o default de tipo do campo quando nenhuma fonte o definiu.

        Raises:
            UnknownFieldPathError: Se `path` não existir no registro.
        """
        spec = field_spec(path)
        winner = self._winner(path)
        return spec.default if winner is None else winner.value

    def winning_source(self, path: str) -> ConfigurationSource:
        field_spec(path)
        winner = self._winner(path)
        return ConfigurationSource.DEFAULTS if winner is None else winner.source

    def explain(self, path: str) -> str:
        """Linha humana de proveniência, ex.: `credentials.username = 'x' (from DSL; overrides ENVIRONMENT)`."""
        final = display_value(path, _jsonable(self.final_value(path)))
        winner = self._winner(path)
        if winner is None:
            return f"{path} = {final!r} (default)"
        overridden = []
        for entry in self._entries[path]:
            if entry is not winner and entry.source.name not in overridden:
                overridden.append(entry.source.name)
        line = f"{path} = {final!r} (from {winner.source.name}"
        if overridden:
            line += f"; overrides {', '.join(overridden)}"
        return line + ")"

    # -----------------------------
    # Serialização
    # -----------------------------
    def to_dict(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {}
        for path in self.recorded_paths():
            fields[path] = {
                "final": display_value(path, _jsonable(self.final_value(path))),
                "source": self.winning_source(path).name,
                "history": [
                    {"source": e.source.name, "value": display_value(path, _jsonable(e.value))}
                    for e in self._entries[path]
                ],
            }
        return {
            "sources": sorted(s.name for s in self._sources),
            "fields": fields,
        }

    def to_json(self, *, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True, ensure_ascii=False)

    def explain_all(self, paths: Optional[Iterable[str]] = None) -> str:
        return "\n".join(self.explain(p) for p in (paths or self.recorded_paths()))
