"""Ticket ID generation."""

import secrets
import string
from typing import Callable

ALPHABET = string.ascii_letters + string.digits
TICKET_ID_LENGTH = 5


def generate_id(length: int = TICKET_ID_LENGTH) -> str:
    """Return a random alphanumeric token.

    Collisions are not checked here; see unique_id.
    """
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def unique_id(exists: Callable[[str], bool], length: int = TICKET_ID_LENGTH) -> str:
    """Generate IDs until one is not taken according to exists()."""
    candidate = generate_id(length)
    while exists(candidate):
        candidate = generate_id(length)
    return candidate
