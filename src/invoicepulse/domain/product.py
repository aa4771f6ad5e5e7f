"""Product catalog domain service."""

import dataclasses
import logging
from typing import Optional, Sequence

from invoicepulse.database.base import Database
from invoicepulse.database.mappers import product_from_record, product_to_record
from invoicepulse.database.store import PRODUCTS_KEY, Collection
from invoicepulse.domain.catalog import consolidate_products, find_duplicate
from invoicepulse.domain.entities import Product
from invoicepulse.domain.errors import NotFoundError, product_not_found
from invoicepulse.utils.ids import generate_id

logger = logging.getLogger(__name__)


class ProductService:
    """Service for managing the product catalog."""

    def __init__(self, db: Database):
        """Initialize product service.

        Args:
            db: Database instance
        """
        self.db = db
        self.products = Collection(db, PRODUCTS_KEY, product_from_record, product_to_record)

    def create_product(
        self,
        name: str,
        category: str,
        sub_categories: Sequence[str] = (),
        description: str = "",
        default_price: float = 0.0,
        default_discount: Optional[float] = None,
        image: Optional[str] = None,
    ) -> Product:
        """Add a product to the catalog.

        Duplicates are not rejected here; callers check ``find_duplicate`` first.

        Returns:
            The stored product with its generated ID
        """
        products = self.products.load()
        product = Product(
            id=generate_id(),
            name=name,
            category=category,
            sub_categories=tuple(s for s in sub_categories if s.strip()),
            description=description,
            default_price=default_price,
            default_discount=default_discount,
            image=image,
        )
        products.append(product)
        self.products.save(products)
        logger.info("Created product %s (%s / %s)", product.id, product.name, product.category)
        return product

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get product by ID, or None if not found."""
        for product in self.products.load():
            if product.id == product_id:
                return product
        return None

    def list_products(self, category: Optional[str] = None) -> list[Product]:
        """List products, optionally only those in a category (case-insensitive)."""
        products = self.products.load()
        if category is None:
            return products
        wanted = category.strip().lower()
        return [p for p in products if p.category.strip().lower() == wanted]

    def find_duplicate(
        self, name: str, category: str, exclude_id: Optional[str] = None
    ) -> Optional[Product]:
        """Find a stored product with the same name and category.

        Args:
            name: Product name
            category: Product category
            exclude_id: Product being edited, which never counts as its own duplicate
        """
        return find_duplicate(self.products.load(), name, category, exclude_id=exclude_id)

    def update_product(
        self,
        product_id: str,
        name: Optional[str] = None,
        category: Optional[str] = None,
        sub_categories: Optional[Sequence[str]] = None,
        description: Optional[str] = None,
        default_price: Optional[float] = None,
        default_discount: Optional[float] = None,
        image: Optional[str] = None,
        clear_discount: bool = False,
        clear_image: bool = False,
    ) -> Product:
        """Update product fields. Fields left as None are kept.

        Args:
            clear_discount: If True, remove the default discount
            clear_image: If True, remove the image

        Raises:
            NotFoundError: If product doesn't exist
        """
        products = self.products.load()
        for index, product in enumerate(products):
            if product.id != product_id:
                continue

            changes: dict = {}
            if name is not None:
                changes["name"] = name
            if category is not None:
                changes["category"] = category
            if sub_categories is not None:
                changes["sub_categories"] = tuple(s for s in sub_categories if s.strip())
            if description is not None:
                changes["description"] = description
            if default_price is not None:
                changes["default_price"] = default_price
            if clear_discount:
                changes["default_discount"] = None
            elif default_discount is not None:
                changes["default_discount"] = default_discount
            if clear_image:
                changes["image"] = None
            elif image is not None:
                changes["image"] = image

            updated = dataclasses.replace(product, **changes)
            products[index] = updated
            self.products.save(products)
            logger.info("Updated product %s", product_id)
            return updated

        raise NotFoundError(product_not_found(product_id))

    def delete_product(self, product_id: str) -> None:
        """Delete a product. No-op if it doesn't exist."""
        products = self.products.load()
        remaining = [p for p in products if p.id != product_id]
        if len(remaining) == len(products):
            return
        self.products.save(remaining)
        logger.info("Deleted product %s", product_id)

    def consolidate_catalog(self) -> int:
        """Merge duplicate catalog entries and store the result.

        Returns:
            Number of product records removed
        """
        merged, removed = consolidate_products(self.products.load())
        if removed:
            self.products.save(merged)
        logger.info("Consolidated catalog: %d duplicate product(s) merged", removed)
        return removed
