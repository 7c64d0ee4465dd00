# src/central_publisher/core/config/properties.py
"""
Leitura de arquivos no formato de `gradle.properties` (Java properties).

Regras suportadas (v1), as mesmas de `java.util.Properties.load`:
    - uma entrada por linha lógica: `chave=valor`, `chave: valor` ou `chave valor`
    - o separador é o primeiro `=`, `:` ou espaço não escapado
    - comentários iniciados por `#` ou `!` (primeiro caractere não branco)
    - linhas em branco ignoradas
    - continuação de linha com número ímpar de barras invertidas finais;
      espaços iniciais da linha seguinte são descartados
    - escapes decodificados em chave e valor: `\\t`, `\\n`, `\\r`, `\\f`,
      `\\uXXXX` e `\\<c>` → `<c>` (ex.: `\\\\`, `\\:`, `\\=`, `\\ `)
    - chave repetida: a última ocorrência vence

Decisões arquiteturais:
    - O arquivo é lido como UTF-8; bytes inválidos fazem a leitura cair
      para ISO-8859-1 (a codificação do Java e do Gradle) em vez de descartar
      o arquivo. A codificação usada acompanha o resultado.
    - `\\u` malformado é mantido literalmente (sem a barra), sem erro

Limites explícitos:
    - Não mapeia chaves para field paths (papel de `sources`)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Tuple

UTF8 = "utf-8"
LATIN1 = "iso-8859-1"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_HEX = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class PropertiesFile:
    """Conteúdo interpretado de um arquivo de properties."""

    entries: Dict[str, str]
    encoding: str = UTF8

    @property
    def used_fallback_encoding(self) -> bool:
        return self.encoding != UTF8


def _logical_lines(text: str) -> Iterator[str]:
    pending = ""
    continuing = False
    for raw in _LINE_BREAK.split(text):
        line = raw.lstrip(_WHITESPACE)
        if not continuing and (not line or line[0] in "#!"):
            continue
        # número ímpar de barras finais = continuação
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continuing = True
            continue
        yield pending + line
        pending = ""
        continuing = False
    if pending:
        yield pending


def unescape(text: str) -> str:
    """Decodifica os escapes de Java properties em `text`."""
    out = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= n:
            break
        nxt = text[i + 1]
        if nxt == "u":
            digits = text[i + 2:i + 6]
            if len(digits) == 4 and all(d in _HEX for d in digits):
                out.append(chr(int(digits, 16)))
                i += 6
                continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_entry(line: str) -> Tuple[str, str]:
    n = len(line)
    i = 0
    while i < n:
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in "=:" or ch in _WHITESPACE:
            break
        i += 1
    key = line[:i]

    j = i
    while j < n and line[j] in _WHITESPACE:
        j += 1
    if j < n and line[j] in "=:":
        j += 1
        while j < n and line[j] in _WHITESPACE:
            j += 1
    return unescape(key), unescape(line[j:])


def parse_properties(text: str) -> Dict[str, str]:
    """Converte o conteúdo textual em dicionário chave → valor (escapes decodificados)."""
    entries: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        if key:
            entries[key] = value
    return entries


def decode_properties(data: bytes) -> Tuple[str, str]:
    """Decodifica bytes como UTF-8 (BOM tolerado) ou, se inválidos, ISO-8859-1."""
    try:
        return data.decode("utf-8-sig"), UTF8
    except UnicodeDecodeError:
        return data.decode(LATIN1), LATIN1


def read_properties_file(path: Path) -> PropertiesFile:
    """
    Lê e interpreta um arquivo de properties.

    Raises:
        OSError: Em falhas de I/O (inexistente, permissão, diretório).
    """
    text, encoding = decode_properties(Path(path).read_bytes())
    return PropertiesFile(entries=parse_properties(text), encoding=encoding)
