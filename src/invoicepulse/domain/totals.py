"""Invoice financial calculation."""

from typing import Iterable

from invoicepulse.domain.entities import InvoiceItem, InvoiceTotals


def line_total(item: InvoiceItem) -> float:
    """Return the net amount of one line after its discount.

    Args:
        item: Invoice line item

    Returns:
        quantity * unit_price, reduced by the line's discount percentage
    """
    base = item.quantity * item.unit_price
    discount_amount = base * ((item.discount or 0) / 100)
    return base - discount_amount


def compute_totals(items: Iterable[InvoiceItem], tax_rate: float) -> InvoiceTotals:
    """Compute subtotal, tax and total for a sequence of line items.

    No rounding is applied; amounts are rounded only when displayed. Degenerate
    input (negative quantities or prices) is computed as given.

    Args:
        items: Invoice line items
        tax_rate: Fractional tax rate (0.05 means 5%)

    Returns:
        InvoiceTotals for the items
    """
    subtotal = sum((line_total(item) for item in items), 0.0)
    tax_amount = subtotal * tax_rate
    return InvoiceTotals(subtotal=subtotal, tax_amount=tax_amount, total=subtotal + tax_amount)
