"""Tests for dashboard metrics."""

from datetime import date

import pytest

from invoicepulse.domain.dashboard import NOT_AVAILABLE, DashboardService
from invoicepulse.domain.entities import Invoice, InvoiceItem, Product

TODAY = date(2024, 6, 10)


def _invoice(id, issue_date, total, is_paid, items=()):
    return Invoice(
        id=id,
        client_id="c1",
        invoice_number=id,
        issue_date=issue_date,
        due_date=issue_date,
        items=tuple(items),
        tax_rate=0.0,
        subtotal=total,
        tax_amount=0.0,
        total=total,
        is_paid=is_paid,
    )


def test_revenue_metrics(temp_db):
    invoices = [
        _invoice("a", TODAY, 100.0, True),
        _invoice("b", date(2024, 6, 2), 50.0, True),
        _invoice("c", date(2024, 5, 30), 25.0, True),
        _invoice("d", TODAY, 40.0, False),
    ]
    summary = DashboardService(temp_db).summarize(invoices, [], TODAY)

    assert summary.today_revenue == pytest.approx(100)
    assert summary.month_revenue == pytest.approx(150)
    assert summary.total_revenue == pytest.approx(175)
    assert summary.outstanding_amount == pytest.approx(40)


def test_weekly_revenue(temp_db):
    invoices = [
        _invoice("a", TODAY, 100.0, True),
        _invoice("b", date(2024, 6, 4), 30.0, True),
        _invoice("c", date(2024, 6, 3), 999.0, True),
        _invoice("d", date(2024, 6, 8), 40.0, False),
    ]
    summary = DashboardService(temp_db).summarize(invoices, [], TODAY)

    assert len(summary.weekly_revenue) == 7
    assert summary.weekly_revenue[0] == (date(2024, 6, 4), pytest.approx(30))
    assert summary.weekly_revenue[-1] == (TODAY, pytest.approx(100))
    assert summary.weekly_revenue[4][1] == 0


def test_most_used_item_and_top_category(temp_db):
    items_a = [
        InvoiceItem(id="1", description="Widget [Blue]\nnotes", quantity=3, unit_price=10.0),
        InvoiceItem(id="2", description="Hammer", quantity=1, unit_price=100.0),
    ]
    items_b = [InvoiceItem(id="3", description="Widget [Blue]", quantity=2, unit_price=10.0)]
    products = [
        Product(id="p1", name="Widget", category="Goods"),
        Product(id="p2", name="Hammer", category="Tools"),
    ]
    invoices = [_invoice("a", TODAY, 0, False, items_a), _invoice("b", TODAY, 0, False, items_b)]

    summary = DashboardService(temp_db).summarize(invoices, products, TODAY)

    assert summary.most_used_item == "Widget [Blue]"
    assert summary.top_category == "Tools"


def test_empty_dashboard(temp_db):
    summary = DashboardService(temp_db).build_summary(today=TODAY)
    assert summary.total_revenue == 0
    assert summary.most_used_item == NOT_AVAILABLE
    assert summary.top_category == NOT_AVAILABLE
