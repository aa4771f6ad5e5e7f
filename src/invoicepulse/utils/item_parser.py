"""Parsing of line items given on the command line."""

from invoicepulse.domain.entities import InvoiceItem
from invoicepulse.utils.amount_parser import parse_amount
from invoicepulse.utils.ids import generate_id

ITEM_SEPARATOR = "|"


def parse_item(item_str: str) -> InvoiceItem:
    """Parse ``description|quantity|unit_price[|discount]`` into a line item.

    Args:
        item_str: Line item specification

    Returns:
        InvoiceItem with a freshly generated ID

    Raises:
        ValueError: If the specification is malformed
    """
    parts = [p.strip() for p in item_str.split(ITEM_SEPARATOR)]
    if len(parts) not in (3, 4):
        raise ValueError(
            f"Invalid item '{item_str}': expected 'description|quantity|unit_price[|discount]'"
        )

    description, quantity, unit_price = parts[:3]
    discount = parse_amount(parts[3]) if len(parts) == 4 and parts[3] else 0.0

    return InvoiceItem(
        id=generate_id(),
        description=description,
        quantity=parse_amount(quantity),
        unit_price=parse_amount(unit_price),
        discount=discount,
    )
