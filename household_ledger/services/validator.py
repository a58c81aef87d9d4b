"""
Ledger validator.

Pure checks run on a proposed transaction before anything
is written. Accepts any objects exposing `direction` and
`amount_minor` (ORM rows, request schemas, dataclasses);
`currency` is compared when present.

All arithmetic is on Python ints, so sums never lose
precision regardless of size.
"""

from typing import Iterable, Protocol

from household_ledger.models.enums import EntryDirection
from household_ledger.services.exceptions import (
    CurrencyMismatch,
    EmptyTransaction,
    InvalidAmount,
    Unbalanced,
)


class EntryLike(Protocol):
    direction: EntryDirection | str
    amount_minor: int


def _is_debit(entry: EntryLike) -> bool:
    return EntryDirection(entry.direction) == EntryDirection.DEBIT


def signed_amount(entry: EntryLike) -> int:
    """+amount for a debit, -amount for a credit."""
    return entry.amount_minor if _is_debit(entry) else -entry.amount_minor


def balance_of(entries: Iterable[EntryLike]) -> int:
    """
    Debits minus credits, in minor units.

    Zero for a balanced transaction. Never raises on the amount
    values, so it can be shown in a UI before submission.
    """
    return sum(signed_amount(e) for e in entries)


def validate(entries: Iterable[EntryLike]) -> None:
    """
    Raise a ValidationFailed subclass unless entries are postable.

    Checks run in order: non-empty, every amount a positive
    integer, one currency, debits equal credits. The residual
    carried by Unbalanced is exactly balance_of(entries).
    """
    entries = list(entries)
    if not entries:
        raise EmptyTransaction()

    for index, entry in enumerate(entries):
        amount = entry.amount_minor
        # bool is an int subclass; True is not a cent
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmount(index, amount)

    currencies = {
        e.currency for e in entries
        if getattr(e, "currency", None) is not None
    }
    if len(currencies) > 1:
        raise CurrencyMismatch(currencies)

    residual = balance_of(entries)
    if residual != 0:
        raise Unbalanced(residual)
