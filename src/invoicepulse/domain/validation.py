"""Input validation for the caller layer.

The calculation engines and services compute over whatever they are given;
commands call these checks before handing input to them.
"""

import re
from typing import Optional, Sequence

from invoicepulse.domain.entities import InvoiceItem
from invoicepulse.domain.errors import ValidationError

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def _raise_if_any(problems: list[str]) -> None:
    if problems:
        raise ValidationError("; ".join(problems))


def validate_client(name: str, email: str, address: str, phone: str) -> None:
    """Check client fields.

    Raises:
        ValidationError: Listing every failed check
    """
    problems = []
    if not name.strip():
        problems.append("Client name is required")
    if not email.strip():
        problems.append("Email is required")
    elif not EMAIL_PATTERN.search(email):
        problems.append("Email is invalid")
    if not address.strip():
        problems.append("Address is required")
    if not phone.strip():
        problems.append("Phone number is required")
    _raise_if_any(problems)


def validate_product(name: str, category: str, default_price: float, default_discount: Optional[float] = None) -> None:
    """Check product fields.

    Raises:
        ValidationError: Listing every failed check
    """
    problems = []
    if not name.strip():
        problems.append("Product name is required")
    if not category.strip():
        problems.append("Category is required")
    if default_price < 0:
        problems.append("Price cannot be negative")
    if default_discount is not None and not 0 <= default_discount <= 100:
        problems.append("Discount must be between 0 and 100")
    _raise_if_any(problems)


def validate_items(items: Sequence[InvoiceItem]) -> None:
    """Check invoice line items.

    Raises:
        ValidationError: Listing every failed check
    """
    problems = []
    if not items:
        problems.append("At least one item is required")
    for position, item in enumerate(items, start=1):
        if not item.description.strip():
            problems.append(f"Item {position}: description is required")
        if item.quantity <= 0:
            problems.append(f"Item {position}: quantity must be greater than 0")
        if item.unit_price < 0:
            problems.append(f"Item {position}: price cannot be negative")
        if item.discount is not None and not 0 <= item.discount <= 100:
            problems.append(f"Item {position}: discount must be between 0 and 100")
    _raise_if_any(problems)


def validate_invoice(client_id: str, invoice_number: str, items: Sequence[InvoiceItem]) -> None:
    """Check the fields required to save an invoice.

    Raises:
        ValidationError: Listing every failed check
    """
    problems = []
    if not client_id:
        problems.append("Client is required")
    if not invoice_number.strip():
        problems.append("Invoice number is required")
    _raise_if_any(problems)
    validate_items(items)
