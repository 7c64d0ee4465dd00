# src/central_publisher/core/config/errors.py
"""
Exceções canônicas da camada de configuração de publicação.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a construção explícita de configuração, a leitura de declarações em
arquivo e a conversão de violações de validação em falha dura.

As exceções aqui definidas representam **erros do chamador**, e não
ausência rotineira de fontes: arquivos de properties ausentes, variáveis
de ambiente não definidas ou entradas malformadas em fontes opcionais
nunca levantam exceção (viram `LoadWarning`, ver `core.errors`).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Entrada explícita inválida falha cedo e de forma clara
    - Validação apenas reporta; a falha dura é decisão do chamador

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - `AggregatedConfigurationError` carrega todas as violações, não apenas a primeira

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de loaders, resolver ou diagnósticos
"""

from __future__ import annotations

from typing import Any, Iterable, Tuple


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração de publicação.

    Permite captura genérica de qualquer falha levantada pela camada de
    configuração, distinguindo-a de erros de I/O ou de execução de tarefas.
    """


class UnknownFieldPathError(ConfigError):
    """
    Exceção levantada quando um field path não existe no registro canônico.

    Ocorre tipicamente em tabelas de mapeamento customizadas que apontam
    para um campo inexistente (ex.: `projectInfo.homepage`).
    """


class ExplicitConfigNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de declaração explícita não existe.

    Decisões arquiteturais:
        - A declaração explícita é fornecida pelo chamador e, portanto, obrigatória
        - Diferente do arquivo de properties, sua ausência é um erro
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de declaração explícita
    não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz de uma declaração explícita
    não é um mapeamento (`dict`).
    """


class UnknownConfigKeyError(ConfigError):
    """
    Exceção levantada quando uma declaração explícita contém uma chave
    que não pertence ao formato fixo de configuração.

    Decisões arquiteturais:
        - O formato é fixo; chaves desconhecidas indicam erro de digitação
        - Nenhuma chave é ignorada silenciosamente em entrada explícita
    """


class InvalidConfigValueError(ConfigError):
    """
    Exceção levantada quando o valor de um campo explícito possui tipo
    incompatível com o campo (ex.: `autoPublish: "sim"`).

    Limites explícitos:
        - Não realiza coerção implícita de tipos
    """


class AggregatedConfigurationError(ConfigError):
    """
    Falha dura que agrega todas as violações de validação de uma resolução.

    Esta exceção nunca é levantada pela engine por conta própria: apenas
    chamadores que precisam interromper o fluxo (task layer, wizard) a
    produzem via `ResolvedConfig.raise_for_errors()` ou `raise_for_violations`.

    Invariantes:
        - `errors` preserva a ordem original das violações
        - A mensagem contém uma linha por violação
    """

    def __init__(self, errors: Iterable[Any]):
        self.errors: Tuple[Any, ...] = tuple(errors)
        lines = [f"- {getattr(e, 'field', '?')}: {getattr(e, 'message', e)}" for e in self.errors]
        super().__init__("Configuration validation failed:\n" + "\n".join(lines))
