"""Transaction identifier generation."""

import uuid

from payment_service.config import settings

TRANSACTION_ID_BODY_LENGTH = 16


def generate_transaction_id(prefix: str | None = None) -> str:
    """Generate an external transaction reference.

    Args:
        prefix: Identifier prefix, defaults to the configured one

    Returns:
        str: Reference like 'TXN_9F86D081884C7D65'
    """
    body = uuid.uuid4().hex[:TRANSACTION_ID_BODY_LENGTH].upper()
    return f"{prefix if prefix is not None else settings.transaction_id_prefix}{body}"
