"""Abstract base class for cache service providers.

Defines the key-value contract behind each of the three resolver caches
(artist lookup, artist details, artist discography).  The in-memory
implementation lives in ``jukebox/providers/cache/memory_cache.py``; a
shared backend could be swapped in without touching the resolver.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async to allow for network-backed stores without
    blocking the event loop.  Implementations must insert values
    atomically: a reader either sees the whole value or a miss.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Retrieve the value stored under *key*.

        Parameters
        ----------
        key:
            The cache key to look up.

        Returns
        -------
        Any or None
            The cached value if present and not expired; ``None`` otherwise.
        """

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any existing entry.

        Parameters
        ----------
        key:
            The cache key.
        value:
            The value to store.  The cache holds a reference; callers pass
            immutable objects.
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove the entry stored under *key*.

        Parameters
        ----------
        key:
            The cache key to delete.

        Returns
        -------
        bool
            ``True`` if a live entry was removed, ``False`` if the key was
            absent.
        """

    @abstractmethod
    def size(self) -> int:
        """Return the number of live entries."""
