# src/central_publisher/core/defaults/__init__.py
"""
Smart defaults: fallbacks conservadores para campos não definidos.
"""
