"""Utility functions for invoicepulse."""

from invoicepulse.utils.date_parser import parse_date
from invoicepulse.utils.amount_parser import parse_amount
from invoicepulse.utils.ids import generate_id, generate_invoice_number

__all__ = ["parse_date", "parse_amount", "generate_id", "generate_invoice_number"]
