"""Domain model entities for invoicepulse.

These are pure data classes representing business concepts, independent of
how they are serialized into storage. Services produce modified copies with
``dataclasses.replace`` rather than mutating records in place.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Client:
    """Client domain entity."""

    id: str
    name: str
    email: str
    address: str
    phone: str


@dataclass(frozen=True)
class Product:
    """Catalog product domain entity."""

    id: str
    name: str
    category: str
    sub_categories: tuple[str, ...] = ()
    description: str = ""
    default_price: float = 0.0
    default_discount: Optional[float] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class InvoiceItem:
    """Invoice line item.

    ``discount`` is a percentage (10 means 10% off) applied to this line only.
    """

    id: str
    description: str
    quantity: float
    unit_price: float
    discount: Optional[float] = None


@dataclass(frozen=True)
class InvoiceTotals:
    """Derived financial totals of an invoice."""

    subtotal: float
    tax_amount: float
    total: float


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity.

    ``subtotal``, ``tax_amount`` and ``total`` are derived from ``items`` and
    ``tax_rate`` by the invoice service on every write.
    """

    id: str
    client_id: str
    invoice_number: str
    issue_date: date
    due_date: date
    items: tuple[InvoiceItem, ...]
    tax_rate: float
    subtotal: float
    tax_amount: float
    total: float
    is_paid: bool = False
    notes: Optional[str] = None


@dataclass(frozen=True)
class CompanySettings:
    """Company settings singleton."""

    name: str
    email: str
    address: str
    phone: str
    currency: str = "$"
    logo: Optional[str] = None


DEFAULT_SETTINGS = CompanySettings(
    name="Your Company Name",
    email="hello@yourcompany.com",
    address="123 Business Way, Suite 100\nCity, State, Zip",
    phone="(555) 000-0000",
    currency="$",
)


class AlertKind(str, Enum):
    """Kind of payment alert."""

    OVERDUE = "overdue"
    UPCOMING = "upcoming"


@dataclass(frozen=True)
class InvoiceAlert:
    """Payment alert for an unpaid invoice."""

    invoice: Invoice
    kind: AlertKind
    days_left: Optional[int] = None


@dataclass(frozen=True)
class DashboardSummary:
    """Revenue metrics shown on the dashboard."""

    today_revenue: float
    month_revenue: float
    total_revenue: float
    outstanding_amount: float
    most_used_item: str
    top_category: str
    weekly_revenue: tuple[tuple[date, float], ...] = field(default_factory=tuple)
