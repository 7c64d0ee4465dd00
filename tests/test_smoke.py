# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Central Publisher.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o pacote é importável
- o namespace público expõe os pontos de entrada documentados
- o ambiente de testes (pytest) está funcional

Limites explícitos:
    - Não testar lógica de resolução
    - Não acumular asserts funcionais
"""

import logging


def test_smoke():
    import central_publisher

    for name in central_publisher.__all__:
        assert hasattr(central_publisher, name), name


def test_package_logger_has_null_handler():
    import central_publisher  # noqa: F401

    handlers = logging.getLogger("central_publisher").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
