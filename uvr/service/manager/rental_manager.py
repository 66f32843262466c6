"""
Rental Manager
--------------

This module is what handles all the rentals in the system.

Responsibilities
================

This object handles everything needed for vehicle rentals.

- booking a vehicle
- starting, completing and cancelling rentals
- checking vehicle availability
- getting a customer's history and the rentals in progress
"""

from datetime import datetime
from decimal import Decimal
from typing import Union, List

from tortoise import timezone
from tortoise.transactions import in_transaction

from uvr import logger
from uvr.models import Rental, Customer, Vehicle, Location
from uvr.models.util import RentalState, VehicleStatus, PenaltyStatus, aware
from uvr.pricing import ZERO
from uvr.service.access.customers import get_customer
from uvr.service.access.locations import get_location
from uvr.service.access.payments import create_payment, get_payment_for_rental, deactivate_payment
from uvr.service.access.penalties import get_penalties_for_customer
from uvr.service.access.rentals import get_rental, create_rental, update_rental, deactivate_rental, get_rentals, \
    get_active_rentals, get_booked_rentals, get_ongoing_rentals_for_vehicle
from uvr.service.access.vehicles import get_vehicle, update_vehicle_status
from uvr.service.errors import InvalidStateError, PersistenceError, ValidationError
from uvr.service.manager.payment_manager import PaymentManager
from uvr.service.manager.util import require, rejected


class RentalManager:
    """
    Handles the lifecycle of rentals. A rental is booked with a
    placeholder payment of zero, started when the vehicle is picked
    up, and completed when it is returned at which point the fee
    is settled on that payment.
    """

    def __init__(self, payment_manager: PaymentManager):
        self._payment_manager = payment_manager

    async def book(self, customer: Union[Customer, str], vehicle: Union[Vehicle, str],
                   location: Union[Location, str], pick_up_datetime: datetime) -> Rental:
        """
        Books a vehicle for a customer.

        :raises NotFoundError: If the customer, vehicle or location does not exist.
        :raises InvalidStateError: If any of them is inactive, the vehicle is not available,
         or the customer has unpaid penalties.
        """
        if pick_up_datetime is None:
            raise rejected(ValidationError("A booking needs a pick up time."))

        customer = await require(get_customer, customer, "Customer")
        if not customer.is_active:
            raise rejected(InvalidStateError(f"Customer {customer.customer_id} is inactive."))

        if await get_penalties_for_customer(customer, penalty_status=PenaltyStatus.UNPAID):
            raise rejected(InvalidStateError(
                f"Customer {customer.customer_id} has unpaid penalties.", customer_id=customer.customer_id
            ))

        vehicle = await require(get_vehicle, vehicle, "Vehicle")
        if not vehicle.is_active:
            raise rejected(InvalidStateError(f"Vehicle {vehicle.plate_id} is inactive."))
        if not vehicle.is_available:
            raise rejected(InvalidStateError(
                f"Vehicle {vehicle.plate_id} is not available ({vehicle.status.value}).", status=vehicle.status
            ))

        location = await require(get_location, location, "Location")
        if not location.is_active:
            raise rejected(InvalidStateError(f"Location {location.location_id} is inactive."))

        async with in_transaction():
            rental = await create_rental(customer, vehicle, location, aware(pick_up_datetime))
            await create_payment(rental, ZERO, timezone.now().date())

        logger.info("Booked %s for %s as %s", vehicle.plate_id, customer.customer_id, rental.rental_id)
        return rental

    async def start(self, rental: Union[Rental, str]) -> Rental:
        """
        Starts a booked rental when the vehicle is picked up.

        The vehicle is only taken if it is still available when the
        update is applied, otherwise nothing is changed.

        :raises InvalidStateError: If the rental is not booked or the vehicle is no longer available.
        :raises PersistenceError: If the vehicle was taken between the check and the update.
        """
        async with in_transaction():
            rental = await require(get_rental, rental, "Rental")
            if rental.state != RentalState.BOOKED:
                raise rejected(InvalidStateError(
                    f"Rental {rental.rental_id} cannot be started, it is {rental.state.value}.", state=rental.state
                ))

            vehicle = await require(get_vehicle, rental.vehicle_id, "Vehicle")
            if not vehicle.is_available:
                raise rejected(InvalidStateError(
                    f"Vehicle {vehicle.plate_id} is not available ({vehicle.status.value}).", status=vehicle.status
                ))

            await update_rental(rental, start_datetime=timezone.now())
            if not await update_vehicle_status(vehicle, VehicleStatus.IN_USE, expected=VehicleStatus.AVAILABLE):
                raise rejected(PersistenceError(f"Vehicle {vehicle.plate_id} could not be marked in use."))

        logger.info("Started rental %s on %s", rental.rental_id, vehicle.plate_id)
        return rental

    async def complete(self, rental: Union[Rental, str]) -> Decimal:
        """
        Completes an active rental when the vehicle is returned,
        settling its payment and freeing the vehicle.

        :return: The fee charged for the rental.
        :raises InvalidStateError: If the rental was never picked up, is cancelled, or is already complete.
        """
        async with in_transaction():
            rental = await require(get_rental, rental, "Rental")
            if rental.state != RentalState.ACTIVE:
                raise rejected(InvalidStateError(
                    f"Rental {rental.rental_id} cannot be completed, it is {rental.state.value}.", state=rental.state
                ))

            await update_rental(rental, end_datetime=timezone.now())
            fee = await self._payment_manager.calculate_rental_fee(rental)
            await self._payment_manager.finalize_payment_for_rental(rental, fee)

            if not await update_vehicle_status(rental.vehicle_id, VehicleStatus.AVAILABLE,
                                               expected=VehicleStatus.IN_USE):
                logger.warning("Vehicle %s was not in use, leaving its status", rental.vehicle_id)

        logger.info("Completed rental %s for %s", rental.rental_id, fee)
        return fee

    async def cancel(self, rental: Union[Rental, str]) -> Rental:
        """
        Cancels a booking that has not been picked up, along with its placeholder payment.

        :raises InvalidStateError: If the rental has already started, completed or been cancelled.
        """
        async with in_transaction():
            rental = await require(get_rental, rental, "Rental")
            if rental.state != RentalState.BOOKED:
                raise rejected(InvalidStateError(
                    f"Rental {rental.rental_id} cannot be cancelled, it is {rental.state.value}.", state=rental.state
                ))

            payment = await get_payment_for_rental(rental)
            if payment is not None:
                await deactivate_payment(payment)
            await deactivate_rental(rental)

        logger.info("Cancelled rental %s", rental.rental_id)
        return rental

    async def rental_history(self, customer: Union[Customer, str]) -> List[Rental]:
        """Gets every rental a customer has made, including cancelled bookings."""
        customer = await require(get_customer, customer, "Customer")
        return await get_rentals(customer=customer, include_inactive=True)

    async def active_rentals(self) -> List[Rental]:
        return await get_active_rentals()

    async def booked_rentals(self) -> List[Rental]:
        return await get_booked_rentals()

    async def rentals_for_vehicle(self, vehicle: Union[Vehicle, str]) -> List[Rental]:
        vehicle = await require(get_vehicle, vehicle, "Vehicle")
        return await get_rentals(vehicle=vehicle, include_inactive=True)

    async def check_vehicle_availability(self, vehicle: Union[Vehicle, str]) -> bool:
        """A vehicle can be booked if it is available and not held by another booking or rental."""
        vehicle = await require(get_vehicle, vehicle, "Vehicle")
        if not vehicle.is_available:
            return False
        return not await get_ongoing_rentals_for_vehicle(vehicle)
