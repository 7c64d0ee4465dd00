# src/central_publisher/core/__init__.py
"""
Core do Central Publisher.

Este pacote reúne a implementação canônica da engine de resolução de
configuração, independente de build tool, wizard ou transporte.

Componentes principais:
    - config        → modelo, loaders de fonte, cache, merge e resolver
    - autodetection → contrato consumido de detectores externos
    - defaults      → fallbacks sensíveis ao contexto do projeto
    - validation    → violações estruturadas sobre a configuração final
    - traceability  → proveniência por campo ("por que este campo vale X?")

Limites explícitos:
    - Não depende de Gradle, de rede ou de GPG
"""
