# src/central_publisher/core/traceability/__init__.py
"""
Rastreabilidade da resolução de configuração (diagnósticos por campo).
"""
