"""Company settings domain service."""

import dataclasses
import logging
from typing import Optional

from invoicepulse.database.base import Database
from invoicepulse.database.mappers import settings_from_record, settings_to_record
from invoicepulse.database.store import SETTINGS_KEY, StoredRecord
from invoicepulse.domain.entities import DEFAULT_SETTINGS, CompanySettings

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for reading and writing the company settings singleton."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db
        self.record = StoredRecord(
            db, SETTINGS_KEY, settings_from_record, settings_to_record, DEFAULT_SETTINGS
        )

    def get_settings(self) -> CompanySettings:
        """Return stored settings, or the defaults if none are stored."""
        return self.record.load()

    def save_settings(self, settings: CompanySettings) -> None:
        """Replace the stored settings."""
        self.record.save(settings)
        logger.info("Saved company settings")

    def update_settings(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        currency: Optional[str] = None,
        logo: Optional[str] = None,
    ) -> CompanySettings:
        """Update individual settings fields. Fields left as None are kept."""
        fields = {
            "name": name,
            "email": email,
            "address": address,
            "phone": phone,
            "currency": currency,
            "logo": logo,
        }
        changes = {key: value for key, value in fields.items() if value is not None}
        settings = dataclasses.replace(self.get_settings(), **changes)
        self.save_settings(settings)
        return settings
