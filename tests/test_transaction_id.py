"""Tests for transaction identifier generation."""
import re

from payment_service.utils.transaction_id import generate_transaction_id

TRANSACTION_ID_PATTERN = re.compile(r"^TXN_[0-9A-F]{16}$")


def test_format() -> None:
    assert TRANSACTION_ID_PATTERN.match(generate_transaction_id())


def test_custom_prefix() -> None:
    assert generate_transaction_id(prefix="PAY-").startswith("PAY-")


def test_no_collisions_across_many_draws() -> None:
    ids = {generate_transaction_id() for _ in range(10_000)}

    assert len(ids) == 10_000
