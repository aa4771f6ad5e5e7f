"""Overdue and upcoming payment alerts."""

from datetime import date, datetime
from typing import Iterable

from invoicepulse.domain.entities import AlertKind, Invoice, InvoiceAlert

# Unpaid invoices due within this many days (inclusive) are upcoming
UPCOMING_WINDOW_DAYS = 3


def days_until(due_date: date, today: date) -> int:
    """Return whole days from today to the due date, ignoring time of day."""
    if isinstance(due_date, datetime):
        due_date = due_date.date()
    if isinstance(today, datetime):
        today = today.date()
    return (due_date - today).days


def get_alerts(invoices: Iterable[Invoice], today: date) -> list[InvoiceAlert]:
    """Derive payment alerts from unpaid invoices.

    Args:
        invoices: Invoices to inspect
        today: Current date

    Returns:
        Overdue alerts followed by upcoming alerts, each ordered by due date
    """
    alerts = []
    for invoice in invoices:
        if invoice.is_paid:
            continue

        days_left = days_until(invoice.due_date, today)
        if days_left < 0:
            alerts.append(InvoiceAlert(invoice=invoice, kind=AlertKind.OVERDUE))
        elif days_left <= UPCOMING_WINDOW_DAYS:
            alerts.append(InvoiceAlert(invoice=invoice, kind=AlertKind.UPCOMING, days_left=days_left))

    return sorted(
        alerts,
        key=lambda alert: (alert.kind != AlertKind.OVERDUE, alert.invoice.due_date),
    )
