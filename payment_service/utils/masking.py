"""Display masking for payment instrument data."""

import re

from payment_service.schemas.payment import PaymentDetails

MASK = "****"

# Five or more digits, optionally split by spaces or dashes as card numbers are typed
_DIGIT_RUN = re.compile(r"\d(?:[\s-]*\d){4,}")


def mask_card_number(card_number: str | None) -> str | None:
    """Mask a card number down to its last 4 characters.

    Args:
        card_number: Raw card number

    Returns:
        str: Masked number like '****1111', or None when there are not
        enough characters to hide anything
    """
    if not card_number:
        return None
    cleaned = "".join(card_number.split())
    if len(cleaned) <= 4:
        return None
    return f"{MASK}{cleaned[-4:]}"


def mask_payment_details(details: PaymentDetails | None) -> str | None:
    """Build the display-safe representation stored with a payment.

    Only the card's last 4 digits and the holder name survive. Expiry,
    CVV and billing address are dropped.

    Args:
        details: Raw instrument details from the request

    Returns:
        str: e.g. 'Card: ****1111, Holder: Jane Doe', or None if nothing
        displayable was supplied
    """
    if details is None:
        return None

    fragments: list[str] = []
    masked_number = mask_card_number(details.card_number)
    if masked_number:
        fragments.append(f"Card: {masked_number}")
    holder = _DIGIT_RUN.sub(MASK, details.card_holder or "").strip()
    if holder:
        fragments.append(f"Holder: {holder}")

    return ", ".join(fragments) or None
