"""Serialized collections stored in the key-value database."""

import json
import logging
from typing import Any, Callable, Generic, Iterable, TypeVar

from invoicepulse.database.base import Database

logger = logging.getLogger(__name__)

T = TypeVar("T")

CLIENTS_KEY = "invoicePulseClients"
PRODUCTS_KEY = "invoicePulseProducts"
INVOICES_KEY = "invoicePulseInvoices"
SETTINGS_KEY = "invoicePulseSettings"

# Errors raised while decoding a payload that does not match the expected shape
DECODE_ERRORS = (ValueError, TypeError, KeyError, AttributeError)


class Collection(Generic[T]):
    """A list of records stored as one JSON array under a single key.

    ``load`` never raises on bad data: a missing or malformed payload yields an
    empty list. ``save`` replaces the whole stored array.
    """

    def __init__(
        self,
        db: Database,
        key: str,
        decode: Callable[[dict[str, Any]], T],
        encode: Callable[[T], dict[str, Any]],
    ):
        """Initialize collection.

        Args:
            db: Database instance
            key: Storage key of the collection
            decode: Converts a stored record to an entity
            encode: Converts an entity to a stored record
        """
        self.db = db
        self.key = key
        self.decode = decode
        self.encode = encode

    def load(self) -> list[T]:
        """Load all records, or an empty list if nothing usable is stored."""
        payload = self.db.read(self.key)
        if payload is None:
            return []

        try:
            records = json.loads(payload)
            if not isinstance(records, list):
                raise ValueError(f"expected a JSON array, got {type(records).__name__}")
            return [self.decode(record) for record in records]
        except DECODE_ERRORS as e:
            logger.warning("Ignoring malformed data stored under '%s': %s", self.key, e)
            return []

    def save(self, records: Iterable[T]) -> None:
        """Replace the stored collection with records."""
        payload = json.dumps([self.encode(record) for record in records])
        self.db.write(self.key, payload)


class StoredRecord(Generic[T]):
    """A single record stored as a JSON object under a key, with a default."""

    def __init__(
        self,
        db: Database,
        key: str,
        decode: Callable[[dict[str, Any]], T],
        encode: Callable[[T], dict[str, Any]],
        default: T,
    ):
        self.db = db
        self.key = key
        self.decode = decode
        self.encode = encode
        self.default = default

    def load(self) -> T:
        """Load the record, or the default if nothing usable is stored."""
        payload = self.db.read(self.key)
        if payload is None:
            return self.default

        try:
            record = json.loads(payload)
            if not isinstance(record, dict):
                raise ValueError(f"expected a JSON object, got {type(record).__name__}")
            return self.decode(record)
        except DECODE_ERRORS as e:
            logger.warning("Ignoring malformed data stored under '%s': %s", self.key, e)
            return self.default

    def save(self, value: T) -> None:
        """Replace the stored record."""
        self.db.write(self.key, json.dumps(self.encode(value)))
