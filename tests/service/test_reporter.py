from datetime import timedelta
from decimal import Decimal

import pytest
from tortoise import timezone

from uvr.service import ValidationError
from uvr.service.access.rentals import update_rental
from uvr.service.reporter import get_period


@pytest.fixture
async def completed_rental(rental_manager, random_customer, random_vehicle, random_location):
    """A day long rental picked up and returned today."""
    rental = await rental_manager.book(random_customer, random_vehicle, random_location, timezone.now())
    rental = await rental_manager.start(rental)
    await update_rental(rental, start_datetime=timezone.now() - timedelta(days=1))
    await rental_manager.complete(rental)
    return rental


def test_get_period():
    start, end = get_period(2024, 12)
    assert (start.isoformat(), end.isoformat()) == ("2024-12-01", "2025-01-01")

    start, end = get_period("2024")
    assert (start.isoformat(), end.isoformat()) == ("2024-01-01", "2025-01-01")


def test_get_period_bad_month():
    with pytest.raises(ValidationError):
        get_period(2024, 13)


async def test_revenue_report(reporter, completed_rental):
    today = timezone.now().date()

    report = await reporter.revenue_report(today.year, today.month)

    assert report["total_rentals"] == 1
    assert report["total_revenue"] == Decimal("1500.00")
    assert report["months"][0]["month"] == today.replace(day=1)


async def test_revenue_report_empty(reporter):
    report = await reporter.revenue_report(1999)
    assert report == {"months": [], "total_rentals": 0, "total_revenue": Decimal("0.00")}


async def test_defective_vehicle_report(reporter, maintenance_manager, completed_rental, random_technician):
    """Assert that a maintained vehicle is listed with the rentals before its first repair."""
    await maintenance_manager.schedule(completed_rental.vehicle_id, random_technician, "Flat tyre")

    report = await reporter.defective_vehicle_report()

    assert len(report) == 1
    assert report[0]["plate_id"] == completed_rental.vehicle_id
    assert report[0]["times_maintained"] == 1
    assert report[0]["rentals_before_maintenance"] == 1
    assert report[0]["rentals_after_maintenance"] == 0
    assert report[0]["rental_revenue"] == Decimal("1500.00")


async def test_location_frequency_report(reporter, completed_rental, random_location):
    report = await reporter.location_frequency_report(timezone.now().year)

    assert report == [{"location_id": random_location.location_id, "name": random_location.name, "rentals": 1}]


async def test_customer_rental_report(reporter, completed_rental, random_customer):
    report = await reporter.customer_rental_report(timezone.now().year)

    assert len(report) == 1
    entry = report[0]
    assert entry["customer_id"] == random_customer.customer_id
    assert entry["rentals"] == 1
    assert entry["total_paid"] == Decimal("1500.00")
    assert entry["total_hours"] == Decimal("24.00")
    assert entry["penalties"] == 0
