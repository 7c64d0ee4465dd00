# src/central_publisher/core/config/cache.py
"""
Cache de fontes de configuração baseadas em arquivo.

Este módulo implementa o `FileCache`, que memoiza o resultado do parse
de arquivos de configuração (ex.: `gradle.properties`) indexado pelo
caminho absoluto e invalidado pelo mtime do arquivo.

O cache é o **único recurso mutável compartilhado** da engine de
resolução. Builds multi-projeto podem resolver a configuração de
vários subprojetos em paralelo no mesmo processo; por isso o cache é
seguro para chamadores concorrentes.

Política de cache (v1):
    - Chave: namespace + caminho absoluto
    - Hit: existe entrada com `mtime_cacheado >= mtime_atual`
    - Miss: parse completo, armazenamento de `(valor, mtime)`
    - Um único parse em andamento por chave (load-or-wait)

Decisões arquiteturais:
    - Um lock global protege o mapa e os contadores
    - Um lock por chave serializa parses da mesma chave
    - O mtime é lido **antes** do parse; uma modificação concorrente é
      detectada na próxima chamada
    - Erros de `stat` e do parser são propagados ao chamador

Invariantes:
    - Nenhum chamador observa um parse parcial
    - `hit_count + miss_count` = número de chamadas bem-sucedidas
    - Entradas só são substituídas por parses mais recentes

Limites explícitos:
    - Não interpreta o conteúdo dos arquivos (o parser é injetado)
    - Não observa o filesystem em background
    - Não possui limite de tamanho (o conjunto de arquivos é pequeno e fixo)

Ciclo de vida:
    - `default_file_cache()` cria a instância de processo no primeiro uso
    - A instância vive pelo processo; entradas são invalidadas por mtime
    - Testes devem construir `FileCache()` próprios para isolamento
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _CacheEntry:
    value: Any
    mtime_ns: int


class FileCache:
    """Cache thread-safe de parses de arquivo, invalidado por mtime."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[str, _CacheEntry] = {}
        self._key_locks: Dict[str, threading.Lock] = {}
        self._hits = 0
        self._misses = 0

    @staticmethod
    def cache_key(path: Union[str, Path], namespace: str = "props") -> str:
        return f"{namespace}:{Path(path).expanduser().resolve()}"

    def _lookup(self, key: str, mtime_ns: int) -> Optional[_CacheEntry]:
        # chamado com self._lock adquirido
        entry = self._entries.get(key)
        if entry is not None and entry.mtime_ns >= mtime_ns:
            self._hits += 1
            return entry
        return None

    def get_or_load(
        self,
        path: Union[str, Path],
        parse: Callable[[Path], T],
        *,
        namespace: str = "props",
    ) -> T:
        """
        Retorna o parse cacheado de `path` ou executa `parse(path)`.

        Args:
            path: Caminho do arquivo (relativo ou absoluto).
            parse: Função pura que interpreta o arquivo.
            namespace: Separa caches de parsers distintos sobre o mesmo arquivo.

        Returns:
            O valor produzido por `parse` (possivelmente cacheado).

        Raises:
            OSError: Se o arquivo não puder ser inspecionado (`stat`).
            Exception: Qualquer erro levantado por `parse` (nada é cacheado).
        """
        resolved = Path(path).expanduser().resolve()
        key = self.cache_key(resolved, namespace)

        mtime_ns = os.stat(resolved).st_mtime_ns
        with self._lock:
            entry = self._lookup(key, mtime_ns)
            if entry is not None:
                logger.debug("cache hit: %s", key)
                return entry.value
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            # outro chamador pode ter concluído o parse enquanto esperávamos
            mtime_ns = os.stat(resolved).st_mtime_ns
            with self._lock:
                entry = self._lookup(key, mtime_ns)
                if entry is not None:
                    logger.debug("cache hit after wait: %s", key)
                    return entry.value

            value = parse(resolved)

            with self._lock:
                current = self._entries.get(key)
                if current is None or current.mtime_ns <= mtime_ns:
                    self._entries[key] = _CacheEntry(value=value, mtime_ns=mtime_ns)
                self._misses += 1
            logger.debug("cache miss: %s (mtime_ns=%d)", key, mtime_ns)
            return value

    def invalidate(self, path: Union[str, Path], namespace: Optional[str] = None) -> int:
        """Remove entradas de `path` (de um namespace ou de todos). Retorna quantas."""
        suffix = f":{Path(path).expanduser().resolve()}"
        with self._lock:
            keys = [
                k for k in self._entries
                if k.endswith(suffix) and (namespace is None or k == f"{namespace}{suffix}")
            ]
            for k in keys:
                del self._entries[k]
        return len(keys)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    @property
    def hit_count(self) -> int:
        with self._lock:
            return self._hits

    @property
    def miss_count(self) -> int:
        with self._lock:
            return self._misses

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_default_cache: Optional[FileCache] = None
_default_cache_lock = threading.Lock()


def default_file_cache() -> FileCache:
    """Instância de processo do `FileCache`, criada preguiçosamente no primeiro uso."""
    global _default_cache
    if _default_cache is None:
        with _default_cache_lock:
            if _default_cache is None:
                _default_cache = FileCache()
    return _default_cache
