"""Identifier and invoice number generation."""

import random
import secrets
import string
import time

_ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def generate_id() -> str:
    """Generate an opaque record identifier (9 base-36 characters)."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(ID_LENGTH))


def generate_invoice_number() -> str:
    """Generate a display invoice number such as ``INV-4821093``.

    The number is built from the last four digits of the millisecond clock
    followed by a zero-padded random suffix. Uniqueness is not guaranteed.
    """
    timestamp = str(int(time.time() * 1000))[-4:]
    suffix = f"{random.randint(0, 999):03d}"
    return f"INV-{timestamp}{suffix}"
