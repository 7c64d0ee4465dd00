# src/central_publisher/core/config/__init__.py

"""
Camada de configuração do Central Publisher.

Este pacote contém as estruturas e utilitários responsáveis por carregar
configuração parcial de cada fonte, combiná-las sob precedência estrita,
cachear fontes baseadas em arquivo e identificar a configuração final.

Responsabilidades do pacote:
    - Modelo imutável e registro de field paths
    - Loaders (DSL, properties, ambiente, auto-detecção, smart defaults)
    - Cache de arquivos invalidado por mtime
    - Merge campo a campo e resolver em camadas
    - Hash canônico da configuração resolvida

Invariantes:
    - A mesma entrada sempre produz a mesma configuração final
    - Nenhuma fonte opcional ausente interrompe a resolução
"""
