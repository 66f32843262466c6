from datetime import datetime, timedelta, timezone
from decimal import Decimal

from uvr.pricing import get_rental_fee, get_labor_cost, get_parts_cost, round_money, elapsed_hours

START = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def test_rental_fee_is_pro_rata():
    """Assert that a rental is billed for the fraction of a day it lasted."""
    fee = get_rental_fee(START, START + timedelta(hours=2, minutes=45), Decimal("50.00"))
    assert fee == Decimal("5.73")


def test_rental_fee_full_day():
    assert get_rental_fee(START, START + timedelta(days=1), Decimal("1500.00")) == Decimal("1500.00")


def test_rental_fee_minimum_hour():
    """Assert that a rental shorter than an hour is charged for a whole hour."""
    short = get_rental_fee(START, START + timedelta(minutes=5), Decimal("2400.00"))
    hour = get_rental_fee(START, START + timedelta(hours=1), Decimal("2400.00"))
    assert short == hour == Decimal("100.00")


def test_labor_cost():
    assert get_labor_cost(Decimal("3.5"), Decimal("350.00")) == Decimal("1225.00")


def test_labor_cost_unknown():
    """Assert that labor costs nothing without hours or a rate."""
    assert get_labor_cost(None, Decimal("350.00")) == Decimal("0.00")
    assert get_labor_cost(Decimal("2"), None) == Decimal("0.00")


def test_parts_cost():
    assert get_parts_cost([(Decimal("150.00"), 2), (Decimal("95.00"), 1)]) == Decimal("395.00")


def test_round_money_half_up():
    assert round_money(Decimal("2.345")) == Decimal("2.35")
    assert round_money(Decimal("2.344")) == Decimal("2.34")


def test_elapsed_hours():
    assert elapsed_hours(START, START + timedelta(minutes=90)) == Decimal("1.5")
