"""Abstract key-value storage interface."""

from abc import ABC, abstractmethod
from typing import Optional


class Database(ABC):
    """Abstract key-value store holding one serialized payload per key.

    Every write replaces the whole value stored under a key.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the payload stored under key, or None if nothing is stored."""
        pass

    @abstractmethod
    def write(self, key: str, payload: str) -> None:
        """Replace the payload stored under key."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the payload stored under key. No-op if absent."""
        pass
