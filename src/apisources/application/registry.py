# src/apisources/application/registry.py
"""
Source Registry - Named Adapters Tagged by Family

This module keeps the mapping from lower-case source name to adapter.
Each entry is tagged with its SourceFamily when it is registered, so the
facade never has to inspect names or adapters again on a call.

Files that USE this module:
- apisources.application.source_client (SourceClient owns a SourceRegistry)
- tests.test_source_client (registration tests)

Files that this module USES:
- apisources.adapters.providers.base (capability interfaces)
- apisources.domain (SourceFamily and InvalidArgumentError)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
from dataclasses import dataclass  # Decorator for creating data classes
from typing import Any, Dict, List, Optional, Union  # Type hints

from apisources.adapters.providers.base import CAPABILITIES  # Capability interface per family
from apisources.domain.errors import InvalidArgumentError  # Raised for bad registrations
from apisources.domain.models import SourceFamily  # Family tag

log = logging.getLogger(__name__)

_PRIMITIVES = (str, bytes, int, float, complex, bool, list, tuple, dict, set)


@dataclass(frozen=True)
class RegisteredSource:
    """An adapter registered under a name, with its family resolved."""
    name: str
    family: SourceFamily
    adapter: Any


def resolve_family(adapter: Any, family: Union[SourceFamily, str, None] = None) -> SourceFamily:
    """
    Work out which family an adapter belongs to.

    An explicit family is checked against the adapter's methods. Without one,
    the first family whose capability the adapter provides wins, in the order
    quote, weather, news, custom.

    Args:
        adapter: Adapter object
        family: Optional explicit family (SourceFamily or its value, e.g. "news")

    Returns:
        The resolved SourceFamily

    Raises:
        InvalidArgumentError: If the family is unknown or the adapter lacks its methods
    """
    if family is not None:
        try:
            family = SourceFamily(family.lower() if isinstance(family, str) else family)
        except ValueError:
            valid = ", ".join(f.value for f in SourceFamily)
            raise InvalidArgumentError(f"Unknown source family: {family!r}. Expected one of: {valid}")
        if not isinstance(adapter, CAPABILITIES[family]):
            raise InvalidArgumentError(
                f"API instance does not provide the {family.value} capability "
                f"({', '.join(_capability_methods(family))})"
            )
        return family

    for candidate, capability in CAPABILITIES.items():
        if isinstance(adapter, capability):
            return candidate

    raise InvalidArgumentError(
        "API instance must provide get_current_price/get_quote, get_current, get_headlines or fetch"
    )


def _capability_methods(family: SourceFamily) -> List[str]:
    capability = CAPABILITIES[family]
    return sorted(name for name in vars(capability) if not name.startswith("_") and callable(getattr(capability, name)))


class SourceRegistry:
    """
    Insertion-ordered registry of source adapters.

    Entries can be added or overwritten but never removed. Registration
    happens during setup; lookups are not synchronized against it.
    """

    def __init__(self):
        self._sources: Dict[str, RegisteredSource] = {}

    def register(
        self,
        name: str,
        adapter: Any,
        family: Union[SourceFamily, str, None] = None,
    ) -> RegisteredSource:
        """
        Register (or overwrite) an adapter under a lower-cased name.

        Args:
            name: Source name
            adapter: Adapter object
            family: Optional explicit family; inferred from the adapter's methods when omitted

        Returns:
            The stored RegisteredSource

        Raises:
            InvalidArgumentError: If the name is empty, the adapter is not an object,
                or it lacks the methods of its family
        """
        if not name or not isinstance(name, str):
            raise InvalidArgumentError("Source name must be a non-empty string")

        if adapter is None or isinstance(adapter, _PRIMITIVES):
            raise InvalidArgumentError("API instance must be an object")

        key = name.lower()
        entry = RegisteredSource(name=key, family=resolve_family(adapter, family), adapter=adapter)
        if key in self._sources:
            log.info("Replacing source %r (%s)", key, entry.family.value)
        else:
            log.debug("Registered source %r (%s)", key, entry.family.value)
        self._sources[key] = entry
        return entry

    def lookup(self, name: str) -> Optional[RegisteredSource]:
        """Return the entry for a name (case-insensitive), or None."""
        return self._sources.get(name.lower())

    def names(self) -> List[str]:
        """Registered names in insertion order."""
        return list(self._sources)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._sources

    def __len__(self) -> int:
        return len(self._sources)
