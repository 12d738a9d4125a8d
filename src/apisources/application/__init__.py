# src/apisources/application/__init__.py
"""
Application Layer - Facade and Registry

This package contains the SourceClient facade and the registry it routes
through. Adapters are reached only through their capability methods.
"""

from apisources.application.registry import RegisteredSource, SourceRegistry, resolve_family
from apisources.application.source_client import SourceClient

__all__ = [
    "RegisteredSource",
    "SourceRegistry",
    "resolve_family",
    "SourceClient",
]
