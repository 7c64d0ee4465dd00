# src/central_publisher/core/autodetection/__init__.py
"""
Contrato de auto-detecção de configuração.

As heurísticas concretas (git remote, arquivos de build) são externas;
este pacote define apenas o contrato e a combinação dos resultados.
"""
