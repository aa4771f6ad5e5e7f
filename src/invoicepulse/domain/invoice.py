"""Invoice domain service."""

import dataclasses
import logging
from datetime import date
from typing import Optional, Sequence

from invoicepulse.database.base import Database
from invoicepulse.database.mappers import invoice_from_record, invoice_to_record
from invoicepulse.database.store import INVOICES_KEY, Collection
from invoicepulse.domain.alerts import get_alerts
from invoicepulse.domain.entities import Invoice, InvoiceAlert, InvoiceItem
from invoicepulse.domain.errors import (
    NotFoundError,
    invoice_not_found,
    product_not_found,
)
from invoicepulse.domain.line_items import consolidate_items, pick_product
from invoicepulse.domain.product import ProductService
from invoicepulse.domain.totals import compute_totals
from invoicepulse.utils.ids import generate_id

logger = logging.getLogger(__name__)


def _with_totals(invoice: Invoice) -> Invoice:
    """Return the invoice with totals recomputed from its items and tax rate."""
    totals = compute_totals(invoice.items, invoice.tax_rate)
    return dataclasses.replace(
        invoice,
        subtotal=totals.subtotal,
        tax_amount=totals.tax_amount,
        total=totals.total,
    )


class InvoiceService:
    """Service for managing invoices.

    Totals are never accepted from callers: every write recomputes them.
    """

    def __init__(self, db: Database):
        """Initialize invoice service.

        Args:
            db: Database instance
        """
        self.db = db
        self.invoices = Collection(db, INVOICES_KEY, invoice_from_record, invoice_to_record)

    def create_invoice(
        self,
        client_id: str,
        invoice_number: str,
        issue_date: date,
        due_date: date,
        items: Sequence[InvoiceItem],
        tax_rate: float,
        is_paid: bool = False,
        notes: Optional[str] = None,
    ) -> Invoice:
        """Create an invoice.

        The client is not required to exist and the invoice number is not
        checked for uniqueness.

        Args:
            client_id: Client ID
            invoice_number: Display invoice number
            issue_date: Issue date
            due_date: Payment due date
            items: Line items
            tax_rate: Fractional tax rate (0.05 means 5%)
            is_paid: Whether the invoice is already paid
            notes: Optional notes

        Returns:
            The stored invoice with its generated ID and computed totals
        """
        invoices = self.invoices.load()
        invoice = _with_totals(
            Invoice(
                id=generate_id(),
                client_id=client_id,
                invoice_number=invoice_number,
                issue_date=issue_date,
                due_date=due_date,
                items=tuple(items),
                tax_rate=tax_rate,
                subtotal=0.0,
                tax_amount=0.0,
                total=0.0,
                is_paid=is_paid,
                notes=notes,
            )
        )
        invoices.append(invoice)
        self.invoices.save(invoices)
        logger.info("Created invoice %s (%s), total %.2f", invoice.id, invoice.invoice_number, invoice.total)
        return invoice

    def get_invoice(self, invoice_id: str) -> Optional[Invoice]:
        """Get invoice by ID, or None if not found."""
        for invoice in self.invoices.load():
            if invoice.id == invoice_id:
                return invoice
        return None

    def find_by_number(self, invoice_number: str) -> list[Invoice]:
        """Return all invoices carrying an invoice number."""
        return [i for i in self.invoices.load() if i.invoice_number == invoice_number]

    def list_invoices(
        self,
        client_id: Optional[str] = None,
        paid: Optional[bool] = None,
    ) -> list[Invoice]:
        """List invoices with optional filters.

        Args:
            client_id: Only invoices for this client
            paid: If set, only paid (True) or unpaid (False) invoices

        Returns:
            Invoices ordered by issue date, newest first
        """
        invoices = self.invoices.load()
        if client_id is not None:
            invoices = [i for i in invoices if i.client_id == client_id]
        if paid is not None:
            invoices = [i for i in invoices if i.is_paid == paid]
        return sorted(invoices, key=lambda i: i.issue_date, reverse=True)

    def update_invoice(
        self,
        invoice_id: str,
        client_id: Optional[str] = None,
        invoice_number: Optional[str] = None,
        issue_date: Optional[date] = None,
        due_date: Optional[date] = None,
        items: Optional[Sequence[InvoiceItem]] = None,
        tax_rate: Optional[float] = None,
        is_paid: Optional[bool] = None,
        notes: Optional[str] = None,
        clear_notes: bool = False,
    ) -> Invoice:
        """Update invoice fields and recompute its totals.

        Fields left as None are kept. ``clear_notes`` removes the notes.

        Raises:
            NotFoundError: If invoice doesn't exist
        """
        invoices = self.invoices.load()
        for index, invoice in enumerate(invoices):
            if invoice.id != invoice_id:
                continue

            changes: dict = {
                "client_id": client_id,
                "invoice_number": invoice_number,
                "issue_date": issue_date,
                "due_date": due_date,
                "items": tuple(items) if items is not None else None,
                "tax_rate": tax_rate,
                "is_paid": is_paid,
                "notes": notes,
            }
            changes = {key: value for key, value in changes.items() if value is not None}
            if clear_notes:
                changes["notes"] = None

            updated = _with_totals(dataclasses.replace(invoice, **changes))
            invoices[index] = updated
            self.invoices.save(invoices)
            logger.info("Updated invoice %s, total %.2f", invoice_id, updated.total)
            return updated

        raise NotFoundError(invoice_not_found(invoice_id))

    def mark_paid(self, invoice_id: str, paid: bool = True) -> Invoice:
        """Set the paid flag of an invoice.

        Raises:
            NotFoundError: If invoice doesn't exist
        """
        return self.update_invoice(invoice_id, is_paid=paid)

    def add_catalog_item(self, invoice_id: str, product_id: str, quantity: float = 1) -> Invoice:
        """Add a catalog product to an invoice.

        A new line holding ``quantity`` is appended and the product attached to
        it; if the invoice already has a line for the product at its default
        price, the quantity is merged into that line instead.

        Raises:
            NotFoundError: If invoice or product doesn't exist
        """
        invoice = self.get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_id))

        product = ProductService(self.db).get_product(product_id)
        if product is None:
            raise NotFoundError(product_not_found(product_id))

        draft = InvoiceItem(id=generate_id(), description="", quantity=quantity, unit_price=0.0, discount=0.0)
        items = list(invoice.items) + [draft]
        items = pick_product(items, len(items) - 1, product)
        return self.update_invoice(invoice_id, items=items)

    def consolidate_items(self, invoice_id: str) -> tuple[Invoice, int]:
        """Merge identical lines of an invoice.

        Returns:
            Tuple of (updated invoice, number of lines removed)

        Raises:
            NotFoundError: If invoice doesn't exist
        """
        invoice = self.get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_id))

        items = consolidate_items(invoice.items)
        removed = len(invoice.items) - len(items)
        updated = self.update_invoice(invoice_id, items=items)
        logger.info("Consolidated invoice %s: %d line(s) merged", invoice_id, removed)
        return updated, removed

    def delete_invoice(self, invoice_id: str) -> None:
        """Delete an invoice. No-op if it doesn't exist."""
        invoices = self.invoices.load()
        remaining = [i for i in invoices if i.id != invoice_id]
        if len(remaining) == len(invoices):
            return
        self.invoices.save(remaining)
        logger.info("Deleted invoice %s", invoice_id)

    def get_alerts(self, today: Optional[date] = None) -> list[InvoiceAlert]:
        """Derive overdue and upcoming payment alerts from stored invoices.

        Args:
            today: Reference date (defaults to today)
        """
        return get_alerts(self.invoices.load(), today or date.today())
