"""Invoice line-item duplicate detection and merging."""

import dataclasses
from typing import Sequence

from invoicepulse.domain.entities import InvoiceItem, Product
from invoicepulse.utils.ids import generate_id


def blank_item() -> InvoiceItem:
    """Return an empty line item ready for editing."""
    return InvoiceItem(id=generate_id(), description="", quantity=1, unit_price=0.0, discount=0.0)


def compose_description(product: Product) -> str:
    """Build the line description for a catalog product.

    The product name is followed by its sub-categories in brackets and, on a
    new line, its description.
    """
    text = product.name
    if product.sub_categories:
        text += f" [{', '.join(product.sub_categories)}]"
    if product.description:
        text += "\n" + product.description
    return text


def pick_product(items: Sequence[InvoiceItem], index: int, product: Product) -> list[InvoiceItem]:
    """Attach a catalog product to the line at ``index``.

    If another line already holds the same product at the same price, the
    quantity of the picked line is added to it and the picked line is removed.
    Otherwise the picked line takes the product's description, price and
    discount.

    Args:
        items: Current line items
        index: Position of the line the product is attached to
        product: Catalog product

    Returns:
        New list of line items (the input is not modified)

    Raises:
        IndexError: If index is out of range
    """
    result = list(items)
    current = result[index]
    full_description = compose_description(product)

    for i, item in enumerate(result):
        if i == index:
            continue
        if item.description in (full_description, product.name) and item.unit_price == product.default_price:
            result[i] = dataclasses.replace(item, quantity=item.quantity + current.quantity)
            del result[index]
            if not result:
                result.append(blank_item())
            return result

    result[index] = dataclasses.replace(
        current,
        description=full_description,
        unit_price=product.default_price,
        discount=product.default_discount or 0.0,
    )
    return result


def consolidate_items(items: Sequence[InvoiceItem]) -> list[InvoiceItem]:
    """Merge identical lines by summing their quantities.

    Lines are identical when trimmed description, unit price and discount
    (missing counts as 0) match. The merged line keeps the first occurrence's
    fields.
    """
    consolidated: dict[tuple[str, float, float], InvoiceItem] = {}
    for item in items:
        key = (item.description.strip(), item.unit_price, item.discount or 0)
        if key in consolidated:
            existing = consolidated[key]
            consolidated[key] = dataclasses.replace(existing, quantity=existing.quantity + item.quantity)
        else:
            consolidated[key] = item
    return list(consolidated.values())


def has_possible_duplicates(items: Sequence[InvoiceItem]) -> bool:
    """Return True if two lines share a trimmed description and unit price.

    Discount is ignored, so this may report lines that ``consolidate_items``
    would keep apart.
    """
    pairs = {(item.description.strip(), item.unit_price) for item in items}
    return len(pairs) != len(items)
