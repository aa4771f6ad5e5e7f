"""Mapper functions to convert between domain entities and stored records.

Stored records are JSON-compatible dicts using camelCase field names, so the
collections stay readable by other tools working on the same data.
"""

from datetime import date
from typing import Any, Optional

from invoicepulse.domain import entities as domain


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


_REQUIRED = object()


def _text(record: dict[str, Any], key: str, default: Any = _REQUIRED) -> str:
    """Return a string field, raising TypeError when it holds anything else."""
    value = record[key] if default is _REQUIRED else record.get(key, default)
    if not isinstance(value, str):
        raise TypeError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_text(record: dict[str, Any], key: str) -> Optional[str]:
    value = record.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


def _text_list(record: dict[str, Any], key: str) -> tuple[str, ...]:
    values = record.get(key) or ()
    if not isinstance(values, (list, tuple)) or not all(isinstance(value, str) for value in values):
        raise TypeError(f"Field '{key}' must hold strings only")
    return tuple(values)


def client_to_record(client: domain.Client) -> dict[str, Any]:
    """Convert Client entity to a stored record."""
    return {
        "id": client.id,
        "name": client.name,
        "email": client.email,
        "address": client.address,
        "phone": client.phone,
    }


def client_from_record(record: dict[str, Any]) -> domain.Client:
    """Convert a stored record to a Client entity."""
    return domain.Client(
        id=str(record["id"]),
        name=_text(record, "name"),
        email=_text(record, "email", ""),
        address=_text(record, "address", ""),
        phone=_text(record, "phone", ""),
    )


def product_to_record(product: domain.Product) -> dict[str, Any]:
    """Convert Product entity to a stored record."""
    record: dict[str, Any] = {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "subCategories": list(product.sub_categories),
        "description": product.description,
        "defaultPrice": product.default_price,
    }
    if product.default_discount is not None:
        record["defaultDiscount"] = product.default_discount
    if product.image is not None:
        record["image"] = product.image
    return record


def product_from_record(record: dict[str, Any]) -> domain.Product:
    """Convert a stored record to a Product entity."""
    return domain.Product(
        id=str(record["id"]),
        name=_text(record, "name"),
        category=_text(record, "category", ""),
        sub_categories=_text_list(record, "subCategories"),
        description=_optional_text(record, "description") or "",
        default_price=float(record.get("defaultPrice", 0)),
        default_discount=_optional_float(record.get("defaultDiscount")),
        image=_optional_text(record, "image"),
    )


def item_to_record(item: domain.InvoiceItem) -> dict[str, Any]:
    """Convert InvoiceItem entity to a stored record."""
    record: dict[str, Any] = {
        "id": item.id,
        "description": item.description,
        "quantity": item.quantity,
        "unitPrice": item.unit_price,
    }
    if item.discount is not None:
        record["discount"] = item.discount
    return record


def item_from_record(record: dict[str, Any]) -> domain.InvoiceItem:
    """Convert a stored record to an InvoiceItem entity."""
    return domain.InvoiceItem(
        id=str(record["id"]),
        description=_text(record, "description", ""),
        quantity=float(record["quantity"]),
        unit_price=float(record["unitPrice"]),
        discount=_optional_float(record.get("discount")),
    )


def invoice_to_record(invoice: domain.Invoice) -> dict[str, Any]:
    """Convert Invoice entity to a stored record."""
    record: dict[str, Any] = {
        "id": invoice.id,
        "clientId": invoice.client_id,
        "invoiceNumber": invoice.invoice_number,
        "issueDate": invoice.issue_date.isoformat(),
        "dueDate": invoice.due_date.isoformat(),
        "items": [item_to_record(item) for item in invoice.items],
        "subtotal": invoice.subtotal,
        "taxRate": invoice.tax_rate,
        "taxAmount": invoice.tax_amount,
        "total": invoice.total,
        "isPaid": invoice.is_paid,
    }
    if invoice.notes is not None:
        record["notes"] = invoice.notes
    return record


def invoice_from_record(record: dict[str, Any]) -> domain.Invoice:
    """Convert a stored record to an Invoice entity."""
    return domain.Invoice(
        id=str(record["id"]),
        client_id=_text(record, "clientId", ""),
        invoice_number=_text(record, "invoiceNumber", ""),
        issue_date=date.fromisoformat(record["issueDate"]),
        due_date=date.fromisoformat(record["dueDate"]),
        items=tuple(item_from_record(item) for item in record.get("items", [])),
        tax_rate=float(record.get("taxRate", 0)),
        subtotal=float(record.get("subtotal", 0)),
        tax_amount=float(record.get("taxAmount", 0)),
        total=float(record.get("total", 0)),
        is_paid=bool(record.get("isPaid", False)),
        notes=_optional_text(record, "notes"),
    )


def settings_to_record(settings: domain.CompanySettings) -> dict[str, Any]:
    """Convert CompanySettings entity to a stored record."""
    record: dict[str, Any] = {
        "name": settings.name,
        "email": settings.email,
        "address": settings.address,
        "phone": settings.phone,
        "currency": settings.currency,
    }
    if settings.logo is not None:
        record["logo"] = settings.logo
    return record


def settings_from_record(record: dict[str, Any]) -> domain.CompanySettings:
    """Convert a stored record to a CompanySettings entity."""
    defaults = domain.DEFAULT_SETTINGS
    return domain.CompanySettings(
        name=_text(record, "name", defaults.name),
        email=_text(record, "email", defaults.email),
        address=_text(record, "address", defaults.address),
        phone=_text(record, "phone", defaults.phone),
        currency=_text(record, "currency", defaults.currency),
        logo=_optional_text(record, "logo"),
    )
