# src/central_publisher/core/validation/__init__.py
"""
Validação da configuração de publicação.

Regras puras sobre a configuração final (campos obrigatórios e formato
de URLs), produzindo violações estruturadas em vez de exceções.
"""
