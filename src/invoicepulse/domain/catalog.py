"""Product catalog duplicate detection and consolidation."""

import dataclasses
from typing import Iterable, Optional

from invoicepulse.domain.entities import Product


def catalog_key(name: str, category: str) -> tuple[str, str]:
    """Return the case and whitespace insensitive identity of a catalog entry."""
    return (name.strip().lower(), category.strip().lower())


def find_duplicate(
    products: Iterable[Product], name: str, category: str, exclude_id: Optional[str] = None
) -> Optional[Product]:
    """Find a product with the same name and category.

    Args:
        products: Products to search
        name: Product name
        category: Product category
        exclude_id: Optional product ID to skip (the product being edited)

    Returns:
        First matching product or None
    """
    key = catalog_key(name, category)
    for product in products:
        if product.id == exclude_id:
            continue
        if catalog_key(product.name, product.category) == key:
            return product
    return None


def merge_products(base: Product, duplicate: Product) -> Product:
    """Fold a later duplicate into the base product.

    The base keeps its image unless it has none and takes the longer
    description. Price always comes from the later entry, discount only when
    the later entry has a non-zero one.
    """
    image = base.image
    if not image and duplicate.image:
        image = duplicate.image
    description = base.description
    if len(duplicate.description) > len(base.description):
        description = duplicate.description
    default_discount = duplicate.default_discount or base.default_discount

    return dataclasses.replace(
        base,
        image=image,
        description=description,
        default_price=duplicate.default_price,
        default_discount=default_discount,
    )


def consolidate_products(products: Iterable[Product]) -> tuple[list[Product], int]:
    """Merge catalog entries sharing a name and category.

    Args:
        products: Products in catalog order

    Returns:
        Tuple of (deduplicated products in first-seen order, number of records removed)
    """
    merged: dict[tuple[str, str], Product] = {}
    removed = 0

    for product in products:
        key = catalog_key(product.name, product.category)
        if key in merged:
            merged[key] = merge_products(merged[key], product)
            removed += 1
        else:
            merged[key] = product

    return list(merged.values()), removed
