"""
Vehicles
--------

Handles the CRUD for the fleet. Deactivating a vehicle retires it by
setting its status to inactive; reactivating returns it as available.
"""
from decimal import Decimal
from typing import Optional, List, Union

from uvr.models import Vehicle
from uvr.models.util import VehicleStatus, resolve_id


async def get_vehicles(*, status: VehicleStatus = None, include_inactive=False) -> List[Vehicle]:
    """Gets the vehicles in the fleet, optionally only those with a given status."""
    query = Vehicle.all()

    if status is not None:
        query = query.filter(status=status)
    elif not include_inactive:
        query = query.filter(status__not=VehicleStatus.INACTIVE)

    return await query.order_by("plate_id")


async def get_vehicle(plate_id: str) -> Optional[Vehicle]:
    """Gets a vehicle by its plate, whatever its status."""
    return await Vehicle.filter(plate_id=plate_id).first()


async def create_vehicle(plate_id: str, vehicle_type: str, rental_price: Decimal, vehicle_model: str = "",
                         status: VehicleStatus = VehicleStatus.AVAILABLE) -> Vehicle:
    return await Vehicle.create(
        plate_id=plate_id, vehicle_type=vehicle_type, vehicle_model=vehicle_model,
        rental_price=rental_price, status=status
    )


async def update_vehicle(vehicle: Vehicle, **kwargs) -> Vehicle:
    vehicle.update_from_dict(kwargs)
    await vehicle.save()
    return vehicle


async def update_vehicle_status(vehicle: Union[Vehicle, str], status: VehicleStatus, *,
                                expected: VehicleStatus = None) -> bool:
    """
    Sets the status of a vehicle.

    :param expected: If given, the update only applies while the vehicle still has this status.
    :return: Whether a row was updated.
    """
    query = Vehicle.filter(plate_id=resolve_id(vehicle))
    if expected is not None:
        query = query.filter(status=expected)

    updated = await query.update(status=status)

    if isinstance(vehicle, Vehicle) and updated:
        vehicle.status = status
    return updated > 0


async def deactivate_vehicle(vehicle: Union[Vehicle, str]) -> bool:
    return await update_vehicle_status(vehicle, VehicleStatus.INACTIVE)


async def reactivate_vehicle(vehicle: Union[Vehicle, str]) -> bool:
    return await update_vehicle_status(vehicle, VehicleStatus.AVAILABLE, expected=VehicleStatus.INACTIVE)
