# src/apisources/__init__.py
"""
apisources - One Client for Quotes, Weather and News

A small facade over three unrelated third-party data APIs (Twelve Data,
Open-Meteo and Google News RSS) that dispatches a loosely-typed query to
the matching adapter and returns normalized records.
"""

from apisources.application.source_client import SourceClient

__version__ = "1.0.0"

__all__ = ["SourceClient"]
