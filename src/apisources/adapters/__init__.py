# src/apisources/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (Twelve Data, Open-Meteo, Google News)
"""

__all__ = []
