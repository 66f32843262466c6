"""
The pricing module holds the arithmetic for everything the system charges:
rental fees from elapsed time and the vehicle's daily rate, and maintenance
costs from technician labor and parts.

All amounts are :class:`~decimal.Decimal` and are rounded half-up to
two places (centavos) at the points noted on each function.
"""

from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple, Optional

CENTS = Decimal("0.01")
INTERMEDIATE_PRECISION = Decimal("0.0000000001")
"""Division results are carried at 10 decimal places before the final rounding."""

HOURS_PER_DAY = Decimal(24)
SECONDS_PER_HOUR = Decimal(3600)

MINIMUM_HOURS = Decimal("1.0")
"""Every rental is charged for at least an hour."""

ZERO = Decimal("0.00")


def round_money(amount: Decimal) -> Decimal:
    """Rounds an amount half-up to two decimal places."""
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def elapsed_hours(start: datetime, end: datetime) -> Decimal:
    """The fractional hours between two times."""
    delta: timedelta = end - start
    return Decimal(str(delta.total_seconds())) / SECONDS_PER_HOUR


def get_rental_fee(start: datetime, end: datetime, daily_rate: Decimal) -> Decimal:
    """
    Given the pickup and return times of a rental, returns its fee.

    The rental is billed pro-rata on the daily rate, with a minimum of one hour:
    ``round(max(hours, 1) / 24 * daily_rate, 2)``.

    :return: The fee, rounded half-up to two places.
    """
    hours = max(elapsed_hours(start, end), MINIMUM_HOURS)
    days = (hours / HOURS_PER_DAY).quantize(INTERMEDIATE_PRECISION, rounding=ROUND_HALF_UP)
    return round_money(days * Decimal(daily_rate))


def get_labor_cost(hours_worked: Optional[Decimal], rate: Optional[Decimal]) -> Decimal:
    """The technician's hours times their hourly rate, or zero if either is unknown."""
    if hours_worked is None or rate is None:
        return ZERO
    return round_money(Decimal(hours_worked) * Decimal(rate))


def get_parts_cost(line_items: Iterable[Tuple[Decimal, int]]) -> Decimal:
    """
    Sums the cost of the parts used on a job.

    :param line_items: Pairs of unit price and quantity used.
    :return: The sum of each line rounded to two places.
    """
    total = ZERO
    for price, quantity in line_items:
        total += round_money(Decimal(price) * quantity)
    return total
