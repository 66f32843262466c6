"""
Maintenance Manager
-------------------

Handles maintenance jobs on vehicles and the parts they consume.

Responsibilities
================

- scheduling and completing maintenance
- flagging defective vehicles
- keeping the parts inventory in step with the parts used on each job
- costing a job from technician labor and parts
"""
from collections import OrderedDict
from datetime import datetime
from decimal import Decimal
from typing import Union, Optional, Iterable, Tuple, List

from tortoise import timezone
from tortoise.transactions import in_transaction

from uvr import logger
from uvr.models import Maintenance, MaintenanceCheque, Vehicle, Technician, Part
from uvr.models.util import VehicleStatus, RecordStatus, aware, resolve_id
from uvr.pricing import get_labor_cost, get_parts_cost, elapsed_hours, round_money, ZERO
from uvr.service.access.maintenance import get_maintenance, create_maintenance, update_maintenance, get_cheques, \
    get_cheque, create_cheque, update_cheque, get_maintenance_records
from uvr.service.access.parts import get_part, decrement_part_quantity, increment_part_quantity
from uvr.service.access.technicians import get_technician
from uvr.service.access.vehicles import get_vehicle, update_vehicle_status
from uvr.service.errors import InvalidStateError, ValidationError, PersistenceError, NotFoundError
from uvr.service.manager.util import require, rejected


class MaintenanceManager:
    """
    Runs maintenance jobs. The cost of a job is cached in its
    ``total_cost`` and is recalculated after every change to the
    parts used, so it always equals labor plus parts.
    """

    async def schedule(self, vehicle: Union[Vehicle, str], technician: Union[Technician, str], notes: str = "",
                       start_datetime: datetime = None, *, maintenance_id: str = None) -> Maintenance:
        """
        Schedules maintenance on a vehicle, taking it out of service.

        :raises NotFoundError: If the vehicle or technician does not exist.
        :raises InvalidStateError: If either is inactive.
        """
        vehicle = await self._active_vehicle(vehicle)
        technician = await self._active_technician(technician)
        return await self._open(vehicle, technician, notes, start_datetime, maintenance_id)

    async def flag_vehicle_as_defective(self, vehicle: Union[Vehicle, str], notes: str,
                                        technician: Union[Technician, str] = None,
                                        start_datetime: datetime = None) -> Maintenance:
        """Opens a maintenance job for a defective vehicle, with or without a technician."""
        vehicle = await self._active_vehicle(vehicle)
        if technician is not None:
            technician = await self._active_technician(technician)

        maintenance = await self._open(vehicle, technician, notes, start_datetime, None)
        logger.info("Flagged %s as defective: %s", vehicle.plate_id, notes)
        return maintenance

    async def complete(self, maintenance: Union[Maintenance, str], end_datetime: datetime = None,
                       parts_used: Iterable[Tuple[str, int]] = None,
                       hours_worked: Decimal = None) -> Maintenance:
        """
        Completes a maintenance job and returns the vehicle to service.

        :param parts_used: Pairs of part id and quantity consumed by the job.
        :param hours_worked: The hours billed, defaults to the time between start and end.
        :raises InvalidStateError: If the job is already complete.
        :raises ValidationError: If a part quantity is not positive or there is too little stock.
        """
        requested = OrderedDict()
        for part_id, quantity in parts_used or ():
            if quantity is None or quantity <= 0:
                raise rejected(ValidationError(f"Quantity of {part_id} must be positive, not {quantity}."))
            requested[part_id] = requested.get(part_id, 0) + quantity

        async with in_transaction():
            maintenance = await require(get_maintenance, maintenance, "Maintenance")
            if maintenance.is_completed:
                raise rejected(InvalidStateError(f"Maintenance {maintenance.maintenance_id} is already completed."))

            start = aware(maintenance.start_datetime)
            end = aware(end_datetime) if end_datetime is not None else timezone.now()
            if end < start:
                raise rejected(ValidationError(
                    f"Maintenance {maintenance.maintenance_id} cannot end before it starts."
                ))

            for part_id, quantity in requested.items():
                part = await require(get_part, part_id, "Part")
                if not part.is_active:
                    raise rejected(InvalidStateError(f"Part {part_id} is inactive."))
                if part.quantity < quantity:
                    raise rejected(ValidationError(
                        f"Only {part.quantity} of {part_id} in stock, {quantity} requested.",
                        part_id=part_id, available=part.quantity, requested=quantity
                    ))

            for part_id, quantity in requested.items():
                cheque = await get_cheque(maintenance, part_id)
                if cheque is None:
                    await create_cheque(maintenance, part_id, quantity)
                elif cheque.is_active:
                    await update_cheque(cheque, quantity_used=cheque.quantity_used + quantity)
                else:
                    await update_cheque(cheque, quantity_used=quantity, status=RecordStatus.ACTIVE)

                if not await decrement_part_quantity(part_id, quantity):
                    raise rejected(PersistenceError(f"Stock of {part_id} changed while completing maintenance."))

            if hours_worked is None:
                hours_worked = round_money(elapsed_hours(start, end))

            await update_maintenance(maintenance, end_datetime=end, hours_worked=Decimal(str(hours_worked)))
            maintenance.total_cost = await self.recalculate_maintenance_cost(maintenance)

            if not await update_vehicle_status(maintenance.vehicle_id, VehicleStatus.AVAILABLE,
                                               expected=VehicleStatus.MAINTENANCE):
                logger.warning("Vehicle %s was not under maintenance, leaving its status", maintenance.vehicle_id)

        logger.info("Completed maintenance %s for %s", maintenance.maintenance_id, maintenance.total_cost)
        return maintenance

    async def calculate_labor_cost(self, maintenance: Union[Maintenance, str]) -> Decimal:
        """The hours worked times the technician's rate, or zero if either is missing."""
        maintenance = await require(get_maintenance, maintenance, "Maintenance")
        if maintenance.hours_worked is None or maintenance.technician_id is None:
            return ZERO

        technician = await get_technician(maintenance.technician_id)
        if technician is None:
            return ZERO
        return get_labor_cost(maintenance.hours_worked, technician.rate)

    async def calculate_parts_cost(self, maintenance: Union[Maintenance, str]) -> Decimal:
        maintenance = await require(get_maintenance, maintenance, "Maintenance")
        cheques = await get_cheques(maintenance)
        return get_parts_cost((cheque.part.price, cheque.quantity_used) for cheque in cheques if cheque.part)

    async def recalculate_maintenance_cost(self, maintenance: Union[Maintenance, str]) -> Decimal:
        """Stores labor plus parts as the cost of the job."""
        maintenance = await require(get_maintenance, maintenance, "Maintenance")
        total = await self.calculate_labor_cost(maintenance) + await self.calculate_parts_cost(maintenance)
        await Maintenance.filter(maintenance_id=maintenance.maintenance_id).update(total_cost=total)
        logger.debug("Cost of %s is now %s", maintenance.maintenance_id, total)
        return total

    async def add_part(self, maintenance: Union[Maintenance, str], part: Union[Part, str],
                       quantity: int) -> MaintenanceCheque:
        """
        Records a part used on a job, taking it out of stock.

        :raises InvalidStateError: If the part is inactive or already on the job.
        :raises ValidationError: If the quantity is not positive or there is too little stock.
        """
        self._check_quantity(quantity)

        async with in_transaction():
            maintenance = await require(get_maintenance, maintenance, "Maintenance")
            part = await require(get_part, part, "Part")
            if not part.is_active:
                raise rejected(InvalidStateError(f"Part {part.part_id} is inactive."))

            cheque = await get_cheque(maintenance, part)
            if cheque is not None and cheque.is_active:
                raise rejected(InvalidStateError(
                    f"Part {part.part_id} is already used on {maintenance.maintenance_id}."
                ))

            await self._take_stock(part, quantity)
            if cheque is None:
                cheque = await create_cheque(maintenance, part, quantity)
            else:
                await update_cheque(cheque, quantity_used=quantity, status=RecordStatus.ACTIVE)

            await self.recalculate_maintenance_cost(maintenance)

        logger.info("Added %s x%s to %s", part.part_id, quantity, maintenance.maintenance_id)
        return cheque

    async def update_part_quantity(self, maintenance: Union[Maintenance, str], part: Union[Part, str],
                                   quantity: int) -> MaintenanceCheque:
        """
        Changes the quantity of a part used on a job, taking the
        difference out of stock or returning it.
        """
        self._check_quantity(quantity)

        async with in_transaction():
            maintenance, cheque = await self._get_cheque(maintenance, part)
            if not cheque.is_active:
                raise rejected(InvalidStateError(
                    f"Part {cheque.part_id} was removed from {maintenance.maintenance_id}."
                ))

            difference = quantity - cheque.quantity_used
            if difference > 0:
                await self._take_stock(cheque.part_id, difference)
            elif difference < 0:
                await increment_part_quantity(cheque.part_id, -difference)

            await update_cheque(cheque, quantity_used=quantity)
            await self.recalculate_maintenance_cost(maintenance)

        return cheque

    async def deactivate_part(self, maintenance: Union[Maintenance, str], part: Union[Part, str]) -> MaintenanceCheque:
        """Removes a part from a job, returning it to stock."""
        async with in_transaction():
            maintenance, cheque = await self._get_cheque(maintenance, part)
            if not cheque.is_active:
                raise rejected(InvalidStateError(f"Part {cheque.part_id} was already removed."))

            await increment_part_quantity(cheque.part_id, cheque.quantity_used)
            await update_cheque(cheque, status=RecordStatus.INACTIVE)
            await self.recalculate_maintenance_cost(maintenance)

        return cheque

    async def reactivate_part(self, maintenance: Union[Maintenance, str], part: Union[Part, str]) -> MaintenanceCheque:
        """Puts a removed part back on a job, taking it out of stock again."""
        async with in_transaction():
            maintenance, cheque = await self._get_cheque(maintenance, part)
            if cheque.is_active:
                raise rejected(InvalidStateError(f"Part {cheque.part_id} is already in use."))

            await self._take_stock(cheque.part_id, cheque.quantity_used)
            await update_cheque(cheque, status=RecordStatus.ACTIVE)
            await self.recalculate_maintenance_cost(maintenance)

        return cheque

    async def assign_technician(self, maintenance: Union[Maintenance, str],
                                technician: Union[Technician, str]) -> Maintenance:
        maintenance = await require(get_maintenance, maintenance, "Maintenance")
        if maintenance.is_completed:
            raise rejected(InvalidStateError(f"Maintenance {maintenance.maintenance_id} is already completed."))

        technician = await self._active_technician(technician)
        maintenance.technician_id = technician.technician_id
        await maintenance.save()
        logger.info("Assigned %s to %s", technician.technician_id, maintenance.maintenance_id)
        return maintenance

    async def maintenance_history(self, vehicle: Union[Vehicle, str]) -> List[Maintenance]:
        vehicle = await require(get_vehicle, vehicle, "Vehicle")
        return await get_maintenance_records(vehicle=vehicle)

    async def technician_workload(self, technician: Union[Technician, str]) -> List[Maintenance]:
        """Gets the jobs a technician has in progress."""
        technician = await require(get_technician, technician, "Technician")
        return await get_maintenance_records(technician=technician, in_progress=True)

    async def parts_used(self, maintenance: Union[Maintenance, str]) -> List[MaintenanceCheque]:
        maintenance = await require(get_maintenance, maintenance, "Maintenance")
        return await get_cheques(maintenance)

    async def vehicle_total_maintenance_cost(self, vehicle: Union[Vehicle, str]) -> Decimal:
        records = await self.maintenance_history(vehicle)
        return sum((record.total_cost for record in records), ZERO)

    async def _open(self, vehicle: Vehicle, technician: Optional[Technician], notes: str,
                    start_datetime: Optional[datetime], maintenance_id: Optional[str]) -> Maintenance:
        if maintenance_id is not None and await get_maintenance(maintenance_id) is not None:
            raise rejected(ValidationError(f"Maintenance {maintenance_id} already exists.", id=maintenance_id))

        async with in_transaction():
            maintenance = await create_maintenance(
                vehicle, aware(start_datetime) if start_datetime is not None else timezone.now(),
                notes or "", technician, maintenance_id=maintenance_id
            )
            await update_vehicle_status(vehicle, VehicleStatus.MAINTENANCE)

        logger.info("Opened maintenance %s on %s", maintenance.maintenance_id, vehicle.plate_id)
        return maintenance

    async def _get_cheque(self, maintenance, part) -> Tuple[Maintenance, MaintenanceCheque]:
        maintenance = await require(get_maintenance, maintenance, "Maintenance")
        part = await require(get_part, part, "Part")
        cheque = await get_cheque(maintenance, part)
        if cheque is None:
            raise rejected(NotFoundError(f"Part {part.part_id} is not used on {maintenance.maintenance_id}."))
        return maintenance, cheque

    @staticmethod
    async def _take_stock(part: Union[Part, str], quantity: int):
        if not await decrement_part_quantity(part, quantity):
            raise rejected(ValidationError(
                f"Not enough stock of {resolve_id(part)} for {quantity} more.", requested=quantity
            ))

    @staticmethod
    def _check_quantity(quantity: int):
        if quantity is None or quantity <= 0:
            raise rejected(ValidationError(f"Quantity must be positive, not {quantity}."))

    @staticmethod
    async def _active_vehicle(vehicle: Union[Vehicle, str]) -> Vehicle:
        vehicle = await require(get_vehicle, vehicle, "Vehicle")
        if not vehicle.is_active:
            raise rejected(InvalidStateError(f"Vehicle {vehicle.plate_id} is inactive."))
        return vehicle

    @staticmethod
    async def _active_technician(technician: Union[Technician, str]) -> Technician:
        technician = await require(get_technician, technician, "Technician")
        if not technician.is_active:
            raise rejected(InvalidStateError(f"Technician {technician.technician_id} is inactive."))
        return technician
