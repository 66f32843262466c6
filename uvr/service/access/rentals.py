"""
Rentals
-------
"""
from datetime import datetime
from typing import Union, Optional, List

from uvr.models import Rental, Customer, Vehicle, Location
from uvr.models.util import RecordStatus, resolve_id
from uvr.service.access.util import next_identifier


async def get_rentals(*, customer: Union[Customer, str] = None, vehicle: Union[Vehicle, str] = None,
                      location: Union[Location, str] = None, include_inactive=False) -> List[Rental]:
    """
    Gets the rentals for either the given customer, vehicle or location.

    :param include_inactive: Whether to include cancelled bookings.
    """
    options = {}

    if customer is not None:
        options["customer_id"] = resolve_id(customer)
    if vehicle is not None:
        options["vehicle_id"] = resolve_id(vehicle)
    if location is not None:
        options["location_id"] = resolve_id(location)
    if not include_inactive:
        options["status"] = RecordStatus.ACTIVE

    return await Rental.filter(**options).order_by("pick_up_datetime", "rental_id")


async def get_rental(rental_id: str) -> Optional[Rental]:
    return await Rental.filter(rental_id=rental_id).first()


async def get_active_rentals() -> List[Rental]:
    """Gets the rentals whose vehicle has been picked up but not yet returned."""
    return await Rental.filter(
        status=RecordStatus.ACTIVE, start_datetime__not_isnull=True, end_datetime__isnull=True
    ).order_by("start_datetime")


async def get_booked_rentals() -> List[Rental]:
    """Gets the bookings whose vehicle is still waiting to be picked up."""
    return await Rental.filter(
        status=RecordStatus.ACTIVE, start_datetime__isnull=True, end_datetime__isnull=True
    ).order_by("pick_up_datetime")


async def get_ongoing_rentals_for_vehicle(vehicle: Union[Vehicle, str]) -> List[Rental]:
    """Gets the bookings and active rentals holding a vehicle."""
    return await Rental.filter(
        vehicle_id=resolve_id(vehicle), status=RecordStatus.ACTIVE, end_datetime__isnull=True
    )


async def create_rental(customer: Union[Customer, str], vehicle: Union[Vehicle, str],
                        location: Union[Location, str], pick_up_datetime: datetime,
                        rental_id: str = None) -> Rental:
    if rental_id is None:
        rental_id = await next_identifier(Rental, "RNT")

    return await Rental.create(
        rental_id=rental_id, customer_id=resolve_id(customer), vehicle_id=resolve_id(vehicle),
        location_id=resolve_id(location), pick_up_datetime=pick_up_datetime
    )


async def update_rental(rental: Rental, **kwargs) -> Rental:
    rental.update_from_dict(kwargs)
    await rental.save()
    return rental


async def deactivate_rental(rental: Union[Rental, str]) -> bool:
    updated = await Rental.filter(rental_id=resolve_id(rental)).update(status=RecordStatus.INACTIVE)
    if isinstance(rental, Rental) and updated:
        rental.status = RecordStatus.INACTIVE
    return updated > 0
