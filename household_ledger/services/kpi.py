"""
KPI aggregator.

Pure functions that turn already-consistent ledger state
into dashboard metrics. Every division guards a non-positive
denominator by returning 0, so callers never see NaN or
Infinity.

Minor units are converted to major units exactly once, at
the end of a sum, with ROUND_HALF_UP (ties away from zero).
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from household_ledger.schemas.kpi import BalanceRow, Transfer

MINOR_PER_MAJOR = 100

Amount = Decimal | int | float


def minor_to_major(amount_minor: int) -> int:
    """Convert cents to whole currency units, rounding half-up."""
    major = Decimal(amount_minor) / MINOR_PER_MAJOR
    return int(major.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def net_worth(balances: Iterable[BalanceRow]) -> int:
    """Sum of balances across a person's accounts, in major units."""
    total_minor = sum(row.balance_minor for row in balances)
    return minor_to_major(total_minor)


def consolidate(balances: Iterable[BalanceRow]) -> int:
    """
    Sum of balances across a household's accounts, in major units.

    Same arithmetic as net_worth. Rows must already be one per
    account; duplicates would be counted twice.
    """
    return net_worth(balances)


def cash_flow(income: Amount, expenses: Amount) -> Amount:
    return income - expenses


def savings_rate(income: Amount, expenses: Amount) -> Amount:
    """Percentage of income kept. 0 when there is no income."""
    if income <= 0:
        return 0
    return (income - expenses) / income * 100


def transfer_outflows(transfers: Iterable[Transfer]) -> Decimal | int:
    """
    Total leaving the measured context.

    Only negative amounts count, as absolute values. The matching
    inflow on the other side is ignored so a personal-to-shared
    contribution is not counted twice.
    """
    return sum((abs(t.amount) for t in transfers if t.amount < 0), 0)


def cash_flow_change_percent(
    cash_flow_now: Amount, expenses_now: Amount
) -> Amount:
    """Cash flow relative to expenses. 0 when there are no expenses."""
    if expenses_now <= 0:
        return 0
    return cash_flow_now / expenses_now * 100
