"""Dashboard revenue metrics domain service."""

from collections import defaultdict
from datetime import date, timedelta
from typing import Optional, Sequence

from invoicepulse.database.base import Database
from invoicepulse.domain.entities import DashboardSummary, Invoice, InvoiceItem, Product
from invoicepulse.domain.invoice import InvoiceService
from invoicepulse.domain.product import ProductService

NOT_AVAILABLE = "N/A"
WEEK_DAYS = 7


def item_name(item: InvoiceItem) -> str:
    """Return the first line of an item's description, trimmed."""
    return item.description.split("\n")[0].strip()


def _top_key(totals: dict[str, float]) -> str:
    """Return the key with the largest value, first-seen on ties."""
    if not totals:
        return NOT_AVAILABLE
    return max(totals.items(), key=lambda entry: entry[1])[0]


class DashboardService:
    """Service computing revenue metrics over stored invoices."""

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_summary(self, today: Optional[date] = None) -> DashboardSummary:
        """Build dashboard metrics from current invoices and catalog.

        Args:
            today: Reference date (defaults to today)
        """
        today = today or date.today()
        invoices = InvoiceService(self.db).list_invoices()
        products = ProductService(self.db).list_products()
        return self.summarize(invoices, products, today)

    def summarize(
        self, invoices: Sequence[Invoice], products: Sequence[Product], today: date
    ) -> DashboardSummary:
        """Compute metrics for the given invoices and products."""
        paid = [inv for inv in invoices if inv.is_paid]

        today_revenue = sum((inv.total for inv in paid if inv.issue_date == today), 0.0)
        month_revenue = sum(
            (
                inv.total
                for inv in paid
                if inv.issue_date.year == today.year and inv.issue_date.month == today.month
            ),
            0.0,
        )
        total_revenue = sum((inv.total for inv in paid), 0.0)
        outstanding = sum((inv.total for inv in invoices if not inv.is_paid), 0.0)

        item_counts: dict[str, float] = defaultdict(float)
        category_totals: dict[str, float] = defaultdict(float)
        for inv in invoices:
            for item in inv.items:
                name = item_name(item)
                item_counts[name] += item.quantity

                # Attribute to the first catalog product whose name prefixes the item
                product = next((p for p in products if name.startswith(p.name)), None)
                if product is not None:
                    category_totals[product.category] += item.quantity * item.unit_price

        weekly = []
        for offset in range(WEEK_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            weekly.append((day, sum((inv.total for inv in paid if inv.issue_date == day), 0.0)))

        return DashboardSummary(
            today_revenue=today_revenue,
            month_revenue=month_revenue,
            total_revenue=total_revenue,
            outstanding_amount=outstanding,
            most_used_item=_top_key(item_counts),
            top_category=_top_key(category_totals),
            weekly_revenue=tuple(weekly),
        )
