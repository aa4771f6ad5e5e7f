"""Shared pytest fixtures for invoicepulse tests."""

import tempfile
import os
from datetime import date
import pytest

from invoicepulse.database.factories import create_sqlite_database
from invoicepulse.domain.client import ClientService
from invoicepulse.domain.entities import InvoiceItem
from invoicepulse.domain.invoice import InvoiceService
from invoicepulse.domain.product import ProductService
from invoicepulse.domain.settings import SettingsService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def product_service(temp_db):
    """Create a ProductService with a temporary database."""
    return ProductService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """Create a sample client for testing."""
    return client_service.create_client(
        name="Acme Corp",
        email="billing@acme.test",
        address="1 Main Street",
        phone="555-0100",
    )


@pytest.fixture
def sample_product(product_service):
    """Create a sample catalog product."""
    return product_service.create_product(
        name="Widget",
        category="Goods",
        sub_categories=["Small", "Blue"],
        description="A fine widget",
        default_price=50.0,
        default_discount=10.0,
    )


@pytest.fixture
def sample_invoice(invoice_service, sample_client):
    """Create a sample unpaid invoice with one line."""
    return invoice_service.create_invoice(
        client_id=sample_client.id,
        invoice_number="INV-1001",
        issue_date=date(2024, 6, 1),
        due_date=date(2024, 6, 15),
        items=[InvoiceItem(id="line1", description="Consulting", quantity=2, unit_price=50.0, discount=10.0)],
        tax_rate=0.05,
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
