"""Tests for invoice total calculation."""

import pytest

from invoicepulse.domain.entities import InvoiceItem
from invoicepulse.domain.totals import compute_totals, line_total


def _item(quantity, unit_price, discount=None, description="Item"):
    return InvoiceItem(id="x", description=description, quantity=quantity, unit_price=unit_price, discount=discount)


def test_empty_items_are_zero():
    """Test that no items give zero totals."""
    totals = compute_totals([], 0.2)
    assert totals.subtotal == 0
    assert totals.tax_amount == 0
    assert totals.total == 0


def test_single_discounted_item():
    """Test a discounted line with tax."""
    totals = compute_totals([_item(2, 50, 10)], 0.05)
    assert totals.subtotal == pytest.approx(90)
    assert totals.tax_amount == pytest.approx(4.5)
    assert totals.total == pytest.approx(94.5)


def test_missing_discount_counts_as_zero():
    """Test that a line without discount is charged in full."""
    assert line_total(_item(3, 12.5)) == pytest.approx(37.5)
    assert line_total(_item(3, 12.5, 0)) == pytest.approx(37.5)


def test_multiple_items_sum():
    """Test subtotal over several lines."""
    items = [_item(1, 100), _item(4, 2.5, 50), _item(0.5, 10)]
    totals = compute_totals(items, 0.1)
    assert totals.subtotal == pytest.approx(100 + 5 + 5)
    assert totals.tax_amount == pytest.approx(11)
    assert totals.total == pytest.approx(121)


@pytest.mark.parametrize("tax_rate", [0, 0.05, 0.19, 1.0])
def test_total_is_subtotal_plus_tax(tax_rate):
    """Test the relation between subtotal, tax and total."""
    items = [_item(3, 19.99, 7.5), _item(1, 0.01), _item(12, 3.333)]
    totals = compute_totals(items, tax_rate)
    assert totals.tax_amount == pytest.approx(totals.subtotal * tax_rate)
    assert totals.total == pytest.approx(totals.subtotal + totals.tax_amount)


def test_no_rounding_per_line():
    """Test that line amounts keep full precision."""
    items = [_item(1, 0.333) for _ in range(3)]
    totals = compute_totals(items, 0)
    assert totals.subtotal == pytest.approx(0.999)
    assert totals.subtotal != pytest.approx(0.99)


def test_degenerate_input_is_computed():
    """Test that negative quantities and prices are not rejected."""
    totals = compute_totals([_item(-2, 10), _item(1, -5)], 0.1)
    assert totals.subtotal == pytest.approx(-25)
    assert totals.total == pytest.approx(-27.5)
