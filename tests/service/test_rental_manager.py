from datetime import timedelta
from decimal import Decimal

import pytest
from tortoise import timezone

from uvr.models import Vehicle, Payment, Rental
from uvr.models.util import RentalState, VehicleStatus, RecordStatus
from uvr.service import InvalidStateError, NotFoundError, ValidationError, PersistenceError
from uvr.service.access.customers import deactivate_customer
from uvr.service.access.penalties import create_penalty
from uvr.service.access.rentals import get_rental, update_rental


async def test_book(rental_manager, random_customer, random_vehicle, random_location):
    """Assert that booking creates a booked rental with a placeholder payment of zero."""
    rental = await rental_manager.book(
        random_customer, random_vehicle, random_location, timezone.now() + timedelta(hours=3)
    )

    assert rental.state == RentalState.BOOKED
    assert rental.customer_id == random_customer.customer_id

    payment = await Payment.get(rental_id=rental.rental_id)
    assert payment.amount == Decimal("0.00")
    assert payment.status == RecordStatus.ACTIVE


async def test_book_missing_pick_up(rental_manager, random_customer, random_vehicle, random_location):
    with pytest.raises(ValidationError):
        await rental_manager.book(random_customer, random_vehicle, random_location, None)


async def test_book_missing_vehicle(rental_manager, random_customer, random_location):
    """Assert that booking a vehicle that does not exist fails without creating anything."""
    with pytest.raises(NotFoundError):
        await rental_manager.book(random_customer, "NOPE-000", random_location, timezone.now())

    assert not await Payment.all()


async def test_book_inactive_customer(rental_manager, random_customer, random_vehicle, random_location):
    await deactivate_customer(random_customer)

    with pytest.raises(InvalidStateError):
        await rental_manager.book(random_customer, random_vehicle, random_location, timezone.now())


async def test_book_unavailable_vehicle(rental_manager, random_customer, random_vehicle_factory, random_location):
    """Assert that a vehicle under maintenance cannot be booked."""
    vehicle = await random_vehicle_factory(status=VehicleStatus.MAINTENANCE)

    with pytest.raises(InvalidStateError):
        await rental_manager.book(random_customer, vehicle, random_location, timezone.now())


async def test_book_with_unpaid_penalty(rental_manager, random_rental, random_customer, random_vehicle_factory,
                                        random_location):
    """Assert that a customer with an unpaid penalty may not book."""
    await create_penalty(random_rental, Decimal("500.00"), timezone.now().date())
    vehicle = await random_vehicle_factory()

    with pytest.raises(InvalidStateError):
        await rental_manager.book(random_customer, vehicle, random_location, timezone.now())


async def test_start(rental_manager, random_booking):
    """Assert that starting a rental takes the vehicle."""
    rental = await rental_manager.start(random_booking)

    assert rental.state == RentalState.ACTIVE
    assert rental.start_datetime is not None

    vehicle = await Vehicle.get(plate_id=rental.vehicle_id)
    assert vehicle.status == VehicleStatus.IN_USE


async def test_start_twice(rental_manager, random_rental):
    with pytest.raises(InvalidStateError):
        await rental_manager.start(random_rental)


async def test_start_vehicle_taken(rental_manager, random_booking, monkeypatch):
    """Assert that a rental stays booked when its vehicle cannot be taken."""

    async def vehicle_taken(*args, **kwargs):
        return False

    monkeypatch.setattr("uvr.service.manager.rental_manager.update_vehicle_status", vehicle_taken)

    with pytest.raises(PersistenceError):
        await rental_manager.start(random_booking)

    rental = await Rental.get(rental_id=random_booking.rental_id)
    assert rental.start_datetime is None
    assert rental.state == RentalState.BOOKED


async def test_complete(rental_manager, random_rental):
    """Assert that completing a rental settles its payment and frees the vehicle."""
    await update_rental(random_rental, start_datetime=timezone.now() - timedelta(hours=12))

    fee = await rental_manager.complete(random_rental)

    assert fee == Decimal("750.00")
    rental = await get_rental(random_rental.rental_id)
    assert rental.state == RentalState.COMPLETED

    payment = await Payment.get(rental_id=rental.rental_id)
    assert payment.amount == fee

    vehicle = await Vehicle.get(plate_id=rental.vehicle_id)
    assert vehicle.status == VehicleStatus.AVAILABLE


async def test_complete_twice(rental_manager, random_rental):
    """Assert that a rental cannot be completed twice."""
    await rental_manager.complete(random_rental)

    with pytest.raises(InvalidStateError):
        await rental_manager.complete(random_rental)


async def test_complete_booking(rental_manager, random_booking):
    """Assert that a rental that was never picked up cannot be completed."""
    with pytest.raises(InvalidStateError):
        await rental_manager.complete(random_booking)


async def test_complete_during_maintenance(rental_manager, maintenance_manager, random_rental, random_technician):
    """Assert that returning a vehicle that was sent for maintenance leaves it in maintenance."""
    await maintenance_manager.schedule(random_rental.vehicle_id, random_technician, "Scratched door")

    await rental_manager.complete(random_rental)

    vehicle = await Vehicle.get(plate_id=random_rental.vehicle_id)
    assert vehicle.status == VehicleStatus.MAINTENANCE


async def test_cancel(rental_manager, random_booking):
    """Assert that cancelling a booking deactivates it and its payment."""
    await rental_manager.cancel(random_booking)

    rental = await get_rental(random_booking.rental_id)
    assert rental.state == RentalState.CANCELLED

    payment = await Payment.get(rental_id=rental.rental_id)
    assert payment.status == RecordStatus.INACTIVE


async def test_cancel_active(rental_manager, random_rental):
    """Assert that a rental in progress cannot be cancelled."""
    with pytest.raises(InvalidStateError):
        await rental_manager.cancel(random_rental)

    rental = await get_rental(random_rental.rental_id)
    assert rental.state == RentalState.ACTIVE


async def test_rental_history(rental_manager, random_customer, random_booking):
    """Assert that the history includes cancelled bookings."""
    await rental_manager.cancel(random_booking)

    history = await rental_manager.rental_history(random_customer)
    assert [rental.rental_id for rental in history] == [random_booking.rental_id]


async def test_active_and_booked_rentals(rental_manager, random_rental, random_customer, random_vehicle_factory,
                                         random_location):
    booking = await rental_manager.book(
        random_customer, await random_vehicle_factory(), random_location, timezone.now() + timedelta(days=2)
    )

    assert [rental.rental_id for rental in await rental_manager.active_rentals()] == [random_rental.rental_id]
    assert [rental.rental_id for rental in await rental_manager.booked_rentals()] == [booking.rental_id]


async def test_check_vehicle_availability(rental_manager, random_vehicle, random_customer, random_location):
    """Assert that a vehicle held by a booking is not available to others."""
    assert await rental_manager.check_vehicle_availability(random_vehicle)

    await rental_manager.book(random_customer, random_vehicle, random_location, timezone.now())

    assert not await rental_manager.check_vehicle_availability(random_vehicle)
