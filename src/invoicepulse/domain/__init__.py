"""Domain layer for invoicepulse application."""

from invoicepulse.domain.client import ClientService
from invoicepulse.domain.product import ProductService
from invoicepulse.domain.invoice import InvoiceService
from invoicepulse.domain.settings import SettingsService
from invoicepulse.domain.dashboard import DashboardService

__all__ = [
    "ClientService",
    "ProductService",
    "InvoiceService",
    "SettingsService",
    "DashboardService",
]
