"""Tests for caller-side validation."""

import pytest

from invoicepulse.domain.entities import InvoiceItem
from invoicepulse.domain.errors import DomainError, ValidationError
from invoicepulse.domain.validation import (
    validate_client,
    validate_invoice,
    validate_items,
    validate_product,
)


def _item(description="Work", quantity=1, unit_price=10.0, discount=None):
    return InvoiceItem(id="x", description=description, quantity=quantity, unit_price=unit_price, discount=discount)


def test_valid_client():
    validate_client("Acme", "a@acme.test", "1 Road", "555")


@pytest.mark.parametrize(
    "fields, message",
    [
        (("", "a@acme.test", "r", "1"), "name is required"),
        (("Acme", "not-an-email", "r", "1"), "Email is invalid"),
        (("Acme", "", "r", "1"), "Email is required"),
        (("Acme", "a@acme.test", " ", "1"), "Address is required"),
        (("Acme", "a@acme.test", "r", ""), "Phone number is required"),
    ],
)
def test_invalid_client(fields, message):
    with pytest.raises(ValidationError, match=message):
        validate_client(*fields)


def test_validation_error_is_domain_error():
    with pytest.raises(DomainError):
        validate_product("", "", -1)


def test_invalid_product():
    with pytest.raises(ValidationError) as exc_info:
        validate_product(" ", "Goods", -1.0, 120)
    message = str(exc_info.value)
    assert "Product name is required" in message
    assert "Price cannot be negative" in message
    assert "Discount must be between 0 and 100" in message


def test_items_rules():
    validate_items([_item()])
    with pytest.raises(ValidationError, match="At least one item"):
        validate_items([])
    with pytest.raises(ValidationError, match="quantity must be greater than 0"):
        validate_items([_item(quantity=0)])
    with pytest.raises(ValidationError, match="price cannot be negative"):
        validate_items([_item(unit_price=-1)])
    with pytest.raises(ValidationError, match="description is required"):
        validate_items([_item(description="  ")])


def test_invoice_requires_client_and_number():
    with pytest.raises(ValidationError, match="Client is required"):
        validate_invoice("", "INV-1", [_item()])
    with pytest.raises(ValidationError, match="Invoice number is required"):
        validate_invoice("c1", " ", [_item()])
