"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a duplicate catalog entry."""


def client_not_found(client_id: str) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def product_not_found(product_id: str) -> str:
    """Return message for missing product."""
    return f"Product {product_id} not found"


def invoice_not_found(invoice_id: str) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def duplicate_product(name: str, category: str) -> str:
    """Return message when a product already exists in a category."""
    return f"A product named '{name.strip()}' already exists in category '{category.strip()}'"


def invoice_number_in_use(invoice_number: str, count: int) -> str:
    """Return message when an invoice number is already used."""
    return (
        f"Invoice number '{invoice_number}' is already used by "
        f"{count} other invoice{'s' if count != 1 else ''}"
    )
