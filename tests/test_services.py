"""Tests for entity services."""

import dataclasses
from datetime import date

import pytest

from invoicepulse.domain.entities import DEFAULT_SETTINGS, InvoiceItem
from invoicepulse.domain.errors import NotFoundError
from invoicepulse.domain.client import UNKNOWN_CLIENT_NAME


class TestClientService:
    """Tests for ClientService."""

    def test_create_and_get(self, client_service):
        client = client_service.create_client("Acme", "a@acme.test", "1 Road", "555")
        assert len(client.id) == 9
        assert client_service.get_client(client.id) == client
        assert client.name == "Acme"

    def test_list_in_creation_order(self, client_service):
        first = client_service.create_client("B", "b@x.co", "r", "1")
        second = client_service.create_client("A", "a@x.co", "r", "2")
        assert client_service.list_clients() == [first, second]

    def test_update(self, client_service, sample_client):
        updated = client_service.update_client(sample_client.id, phone="555-0199")
        assert updated.phone == "555-0199"
        assert updated.name == sample_client.name
        assert client_service.get_client(sample_client.id) == updated

    def test_update_missing_raises(self, client_service):
        with pytest.raises(NotFoundError):
            client_service.update_client("nope", name="X")

    def test_delete_is_idempotent(self, client_service, sample_client):
        client_service.delete_client(sample_client.id)
        client_service.delete_client(sample_client.id)
        assert client_service.get_client(sample_client.id) is None

    def test_deleted_client_leaves_invoice(self, client_service, invoice_service, sample_invoice):
        client_service.delete_client(sample_invoice.client_id)
        assert invoice_service.get_invoice(sample_invoice.id) is not None
        assert client_service.client_name(sample_invoice.client_id) == UNKNOWN_CLIENT_NAME


class TestProductService:
    """Tests for ProductService."""

    def test_create_and_get(self, product_service, sample_product):
        assert product_service.get_product(sample_product.id) == sample_product
        assert sample_product.sub_categories == ("Small", "Blue")

    def test_blank_sub_categories_dropped(self, product_service):
        product = product_service.create_product("Bolt", "Hardware", sub_categories=["M4", " ", ""])
        assert product.sub_categories == ("M4",)

    def test_find_duplicate(self, product_service):
        stored = product_service.create_product(" widget ", "goods", default_price=1.0)
        assert product_service.find_duplicate("Widget", "Goods") == stored
        assert product_service.find_duplicate("Widget", "Goods", exclude_id=stored.id) is None

    def test_list_by_category(self, product_service, sample_product):
        product_service.create_product("Hammer", "Tools")
        assert product_service.list_products(category=" GOODS") == [sample_product]

    def test_update_and_clear_discount(self, product_service, sample_product):
        updated = product_service.update_product(sample_product.id, default_price=60.0)
        assert updated.default_price == 60.0
        assert updated.default_discount == 10.0

        cleared = product_service.update_product(sample_product.id, clear_discount=True)
        assert cleared.default_discount is None

    def test_update_missing_raises(self, product_service):
        with pytest.raises(NotFoundError):
            product_service.update_product("nope", name="X")

    def test_delete_missing_is_noop(self, product_service, sample_product):
        product_service.delete_product("nope")
        assert product_service.list_products() == [sample_product]

    def test_consolidate_catalog(self, product_service):
        product_service.create_product("Widget", "Goods", description="a", default_price=10)
        product_service.create_product("widget ", "GOODS", description="longer description", default_price=20)
        product_service.create_product("Gadget", "Goods", default_price=5)

        assert product_service.consolidate_catalog() == 1

        products = product_service.list_products()
        assert len(products) == 2
        widget = products[0]
        assert widget.name == "Widget"
        assert widget.default_price == 20
        assert widget.description == "longer description"

    def test_consolidate_clean_catalog(self, product_service, sample_product):
        assert product_service.consolidate_catalog() == 0
        assert product_service.list_products() == [sample_product]


class TestInvoiceService:
    """Tests for InvoiceService."""

    def test_create_computes_totals(self, invoice_service, sample_invoice):
        assert sample_invoice.subtotal == pytest.approx(90)
        assert sample_invoice.tax_amount == pytest.approx(4.5)
        assert sample_invoice.total == pytest.approx(94.5)

    def test_round_trip(self, invoice_service, sample_invoice):
        assert invoice_service.get_invoice(sample_invoice.id) == sample_invoice

    def test_update_recomputes_totals(self, invoice_service, sample_invoice):
        items = list(sample_invoice.items) + [
            InvoiceItem(id="line2", description="Travel", quantity=1, unit_price=10.0)
        ]
        updated = invoice_service.update_invoice(sample_invoice.id, items=items, tax_rate=0.1)
        assert updated.subtotal == pytest.approx(100)
        assert updated.tax_amount == pytest.approx(10)
        assert updated.total == pytest.approx(110)
        assert invoice_service.get_invoice(sample_invoice.id) == updated

    def test_stale_stored_totals_are_replaced(self, invoice_service, sample_invoice):
        """Test that totals stored by other means are recomputed on update."""
        invoices = invoice_service.invoices.load()
        invoices[0] = dataclasses.replace(invoices[0], subtotal=1.0, tax_amount=1.0, total=999.0)
        invoice_service.invoices.save(invoices)

        updated = invoice_service.update_invoice(sample_invoice.id, notes="recheck")
        assert updated.total == pytest.approx(94.5)

    def test_update_missing_raises(self, invoice_service):
        with pytest.raises(NotFoundError):
            invoice_service.update_invoice("nope", notes="x")

    def test_clear_notes(self, invoice_service, sample_invoice):
        invoice_service.update_invoice(sample_invoice.id, notes="Net 14")
        kept = invoice_service.update_invoice(sample_invoice.id, tax_rate=0.1)
        assert kept.notes == "Net 14"

        cleared = invoice_service.update_invoice(sample_invoice.id, clear_notes=True)
        assert cleared.notes is None
        assert invoice_service.get_invoice(sample_invoice.id).notes is None

    def test_mark_paid(self, invoice_service, sample_invoice):
        assert invoice_service.mark_paid(sample_invoice.id).is_paid
        assert not invoice_service.mark_paid(sample_invoice.id, paid=False).is_paid

    def test_delete_is_idempotent(self, invoice_service, sample_invoice):
        invoice_service.delete_invoice(sample_invoice.id)
        invoice_service.delete_invoice(sample_invoice.id)
        assert invoice_service.list_invoices() == []

    def test_list_filters_and_order(self, invoice_service, sample_client, sample_invoice):
        later = invoice_service.create_invoice(
            client_id=sample_client.id,
            invoice_number="INV-1002",
            issue_date=date(2024, 7, 1),
            due_date=date(2024, 7, 15),
            items=[],
            tax_rate=0,
            is_paid=True,
        )
        invoice_service.create_invoice(
            client_id="other",
            invoice_number="INV-1003",
            issue_date=date(2024, 5, 1),
            due_date=date(2024, 5, 15),
            items=[],
            tax_rate=0,
        )
        assert [i.id for i in invoice_service.list_invoices(client_id=sample_client.id)] == [
            later.id,
            sample_invoice.id,
        ]
        assert invoice_service.list_invoices(paid=True) == [later]

    def test_duplicate_numbers_allowed(self, invoice_service, sample_invoice):
        invoice_service.create_invoice(
            client_id=sample_invoice.client_id,
            invoice_number=sample_invoice.invoice_number,
            issue_date=date(2024, 6, 2),
            due_date=date(2024, 6, 16),
            items=[],
            tax_rate=0,
        )
        assert len(invoice_service.find_by_number(sample_invoice.invoice_number)) == 2

    def test_add_catalog_item_appends_line(self, invoice_service, sample_invoice, sample_product):
        updated = invoice_service.add_catalog_item(sample_invoice.id, sample_product.id, quantity=2)
        assert len(updated.items) == 2
        line = updated.items[-1]
        assert line.description == "Widget [Small, Blue]\nA fine widget"
        assert line.quantity == 2
        assert line.unit_price == 50.0
        assert line.discount == 10.0
        # 90 from the first line, 2 * 50 * 0.9 from the new one
        assert updated.subtotal == pytest.approx(180)

    def test_add_catalog_item_merges_existing_line(self, invoice_service, sample_invoice, sample_product):
        invoice_service.add_catalog_item(sample_invoice.id, sample_product.id, quantity=2)
        updated = invoice_service.add_catalog_item(sample_invoice.id, sample_product.id, quantity=3)
        assert len(updated.items) == 2
        assert updated.items[-1].quantity == 5

    def test_add_catalog_item_missing_product(self, invoice_service, sample_invoice):
        with pytest.raises(NotFoundError):
            invoice_service.add_catalog_item(sample_invoice.id, "nope")

    def test_consolidate_items(self, invoice_service, sample_invoice):
        line = sample_invoice.items[0]
        items = [line, dataclasses.replace(line, id="line2", quantity=3)]
        invoice_service.update_invoice(sample_invoice.id, items=items)

        updated, removed = invoice_service.consolidate_items(sample_invoice.id)
        assert removed == 1
        assert len(updated.items) == 1
        assert updated.items[0].quantity == 5
        assert updated.subtotal == pytest.approx(225)

    def test_get_alerts(self, invoice_service, sample_invoice):
        alerts = invoice_service.get_alerts(today=date(2024, 6, 14))
        assert len(alerts) == 1
        assert alerts[0].days_left == 1
        assert invoice_service.get_alerts(today=date(2024, 6, 1)) == []


class TestSettingsService:
    """Tests for SettingsService."""

    def test_defaults_when_empty(self, settings_service):
        assert settings_service.get_settings() == DEFAULT_SETTINGS

    def test_update_keeps_other_fields(self, settings_service):
        settings = settings_service.update_settings(name="Pulse Studio", currency="€")
        assert settings.name == "Pulse Studio"
        assert settings.currency == "€"
        assert settings.email == DEFAULT_SETTINGS.email
        assert settings_service.get_settings() == settings

    def test_save_settings(self, settings_service):
        settings = dataclasses.replace(DEFAULT_SETTINGS, logo="aGVsbG8=")
        settings_service.save_settings(settings)
        assert settings_service.get_settings().logo == "aGVsbG8="
