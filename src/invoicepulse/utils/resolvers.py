"""Resolve user-supplied names or numbers to stored entities."""

from typing import Optional

from invoicepulse.domain.client import ClientService
from invoicepulse.domain.entities import Client, Invoice, Product
from invoicepulse.domain.errors import NotFoundError
from invoicepulse.domain.invoice import InvoiceService
from invoicepulse.domain.product import ProductService


def resolve_client(client_service: ClientService, client: str) -> Client:
    """Resolve a client ID or exact name to a client.

    Raises:
        NotFoundError: If no client matches
    """
    found = client_service.get_client(client)
    if found is not None:
        return found

    for candidate in client_service.list_clients():
        if candidate.name == client:
            return candidate

    raise NotFoundError(f"Client '{client}' not found")


def resolve_product(
    product_service: ProductService, product: str, category: Optional[str] = None
) -> Product:
    """Resolve a product ID or name to a product.

    Names match case-insensitively; ``category`` narrows the match when the
    same name exists in several categories.

    Raises:
        NotFoundError: If no product matches
    """
    found = product_service.get_product(product)
    if found is not None:
        return found

    wanted = product.strip().lower()
    for candidate in product_service.list_products(category=category):
        if candidate.name.strip().lower() == wanted:
            return candidate

    raise NotFoundError(f"Product '{product}' not found")


def resolve_invoice(invoice_service: InvoiceService, invoice: str) -> Invoice:
    """Resolve an invoice ID or invoice number to an invoice.

    Raises:
        NotFoundError: If no invoice matches
    """
    found = invoice_service.get_invoice(invoice)
    if found is not None:
        return found

    matches = invoice_service.find_by_number(invoice)
    if matches:
        return matches[0]

    raise NotFoundError(f"Invoice '{invoice}' not found")
