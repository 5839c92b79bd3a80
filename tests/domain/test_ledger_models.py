"""Tests for ledger domain models."""

from decimal import Decimal

import pytest

from finboard.domain.models import (
    AccountSide,
    AccountType,
    ExchangeRateCacheEntry,
    InvoiceStatus,
    account_side,
)


def test_every_account_type_has_a_side() -> None:
    """The side mapping should cover every account type."""
    for account_type in AccountType:
        assert account_side(account_type) in set(AccountSide)


def test_liability_types_are_credit_card_and_loan() -> None:
    """Only credit cards and loans should be liabilities."""
    liabilities = {
        account_type
        for account_type in AccountType
        if account_side(account_type) is AccountSide.LIABILITY
    }

    assert liabilities == {AccountType.CREDIT_CARD, AccountType.LOAN}


def test_account_side_accepts_raw_values_and_rejects_unknown() -> None:
    """Raw strings should map, unknown values should raise."""
    assert account_side("loan") is AccountSide.LIABILITY
    with pytest.raises(ValueError):
        account_side("mortgage")


def test_only_paid_and_void_invoices_are_terminal() -> None:
    """Paid and void should be the only terminal statuses."""
    terminal = {status for status in InvoiceStatus if status.is_terminal}

    assert terminal == {InvoiceStatus.PAID, InvoiceStatus.VOID}


def test_cache_entry_freshness_boundary() -> None:
    """An entry should expire exactly when its age reaches the TTL."""
    entry = ExchangeRateCacheEntry(base="USD", rates={}, timestamp=1_000)

    assert entry.is_fresh(1_000 + 3_599_999, 3_600_000)
    assert not entry.is_fresh(1_000 + 3_600_000, 3_600_000)


def test_cache_entry_json_keeps_document_shape() -> None:
    """Serialized entries should use the base/rates/timestamp document."""
    entry = ExchangeRateCacheEntry(
        base="USD",
        rates={"EUR": Decimal("0.9"), "INR": Decimal("83.5")},
        timestamp=1_700_000_000_000,
    )

    parsed = ExchangeRateCacheEntry.from_json(entry.to_json())

    assert parsed.base == "USD"
    assert parsed.rates == {"EUR": Decimal("0.9"), "INR": Decimal("83.5")}
    assert parsed.timestamp == 1_700_000_000_000


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[]",
        '{"base": "USD", "timestamp": 1}',
        '{"base": "USD", "rates": [], "timestamp": 1}',
        '{"base": "USD", "rates": {"EUR": "abc"}, "timestamp": 1}',
    ],
)
def test_cache_entry_rejects_malformed_documents(raw: str) -> None:
    """Malformed documents should raise ValueError."""
    with pytest.raises(ValueError):
        ExchangeRateCacheEntry.from_json(raw)
