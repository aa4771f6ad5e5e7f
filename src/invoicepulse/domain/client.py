"""Client domain service."""

import dataclasses
import logging
from typing import Optional

from invoicepulse.database.base import Database
from invoicepulse.database.mappers import client_from_record, client_to_record
from invoicepulse.database.store import CLIENTS_KEY, Collection
from invoicepulse.domain.entities import Client
from invoicepulse.domain.errors import NotFoundError, client_not_found
from invoicepulse.utils.ids import generate_id

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT_NAME = "Unknown Client"


class ClientService:
    """Service for managing clients."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db
        self.clients = Collection(db, CLIENTS_KEY, client_from_record, client_to_record)

    def create_client(self, name: str, email: str, address: str, phone: str) -> Client:
        """Create a new client.

        Returns:
            The stored client with its generated ID
        """
        clients = self.clients.load()
        client = Client(id=generate_id(), name=name, email=email, address=address, phone=phone)
        clients.append(client)
        self.clients.save(clients)
        logger.info("Created client %s (%s)", client.id, client.name)
        return client

    def get_client(self, client_id: str) -> Optional[Client]:
        """Get client by ID, or None if not found."""
        for client in self.clients.load():
            if client.id == client_id:
                return client
        return None

    def list_clients(self) -> list[Client]:
        """List all clients in creation order."""
        return self.clients.load()

    def client_name(self, client_id: str) -> str:
        """Return the client's name, or a placeholder if the client was deleted."""
        client = self.get_client(client_id)
        return client.name if client is not None else UNKNOWN_CLIENT_NAME

    def update_client(
        self,
        client_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Client:
        """Update client fields. Fields left as None are kept.

        Raises:
            NotFoundError: If client doesn't exist
        """
        clients = self.clients.load()
        for index, client in enumerate(clients):
            if client.id != client_id:
                continue
            changes = {
                key: value
                for key, value in (("name", name), ("email", email), ("address", address), ("phone", phone))
                if value is not None
            }
            updated = dataclasses.replace(client, **changes)
            clients[index] = updated
            self.clients.save(clients)
            logger.info("Updated client %s", client_id)
            return updated

        raise NotFoundError(client_not_found(client_id))

    def delete_client(self, client_id: str) -> None:
        """Delete a client. Invoices referencing it are left untouched."""
        clients = self.clients.load()
        remaining = [c for c in clients if c.id != client_id]
        if len(remaining) == len(clients):
            return
        self.clients.save(remaining)
        logger.info("Deleted client %s", client_id)
