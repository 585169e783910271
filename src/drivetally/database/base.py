"""Abstract database interface."""

import json
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, TypeVar

import structlog

T = TypeVar("T")

logger = structlog.get_logger(__name__)


class Database(ABC):
    """Abstract key-value store for drivetally.

    Each key holds one whole JSON document. Values are always read and written
    in full; there are no partial updates and no transactions across keys.
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
    def get_value(self, key: str) -> Optional[str]:
        """Get the raw stored text for a key, or None if unset."""
        pass

    @abstractmethod
    def set_value(self, key: str, value: str) -> None:
        """Store raw text under a key, replacing any previous value."""
        pass

    @abstractmethod
    def delete_value(self, key: str) -> None:
        """Remove a key. Removing a missing key is not an error."""
        pass

    def load(
        self,
        key: str,
        default: T,
        decode: Optional[Callable[[Any], T]] = None,
    ) -> T:
        """Load and decode a value, falling back to ``default``.

        A value that is not valid JSON, or that ``decode`` rejects, is deleted
        and the default returned.

        Args:
            key: Storage key
            default: Value returned when the key is unset or corrupt
            decode: Optional function turning the parsed JSON into a domain value

        Returns:
            The decoded value or the default
        """
        raw = self.get_value(key)
        if raw is None:
            return default
        try:
            payload = json.loads(raw)
            return decode(payload) if decode is not None else payload
        except (ValueError, TypeError, KeyError) as e:
            logger.warning("discarding_corrupt_value", key=key, error=str(e))
            self.delete_value(key)
            return default

    def save(
        self,
        key: str,
        value: T,
        encode: Optional[Callable[[T], Any]] = None,
    ) -> None:
        """Encode a value as JSON and store it under ``key``."""
        payload = encode(value) if encode is not None else value
        self.set_value(key, json.dumps(payload))
