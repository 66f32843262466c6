"""
Penalty Manager
---------------

Charges customers for the damage found on vehicles they rented.
A penalty is priced from the maintenance job that repaired the
damage, and an unpaid penalty prevents the customer from booking.
"""
from datetime import date
from decimal import Decimal
from typing import Union, Dict, List

from tortoise import timezone

from uvr import logger
from uvr.models import Penalty, Rental, Maintenance, Customer
from uvr.models.util import PenaltyStatus, RecordStatus
from uvr.pricing import ZERO
from uvr.service.access.customers import get_customer
from uvr.service.access.maintenance import get_maintenance
from uvr.service.access.penalties import get_penalty, create_penalty, deactivate_penalty, update_penalty, \
    get_penalties, get_penalties_for_customer, is_maintenance_linked
from uvr.service.access.rentals import get_rental
from uvr.service.errors import ValidationError, InvalidStateError
from uvr.service.manager.maintenance_manager import MaintenanceManager
from uvr.service.manager.util import require, rejected


class PenaltyManager:

    def __init__(self, maintenance_manager: MaintenanceManager):
        self._maintenance_manager = maintenance_manager

    async def get_maintenance_cost(self, maintenance: Union[Maintenance, str]) -> Decimal:
        """
        The cost of a maintenance job: the stored total if there is one,
        otherwise labor plus parts, calculated without being saved.
        """
        maintenance = await require(get_maintenance, maintenance, "Maintenance")
        if maintenance.total_cost is not None and maintenance.total_cost > 0:
            return maintenance.total_cost
        return (await self.get_maintenance_cost_breakdown(maintenance))["total_cost"]

    async def get_maintenance_cost_breakdown(self, maintenance: Union[Maintenance, str]) -> Dict[str, Decimal]:
        labor_cost = await self._maintenance_manager.calculate_labor_cost(maintenance)
        parts_cost = await self._maintenance_manager.calculate_parts_cost(maintenance)
        return {
            "labor_cost": labor_cost,
            "parts_cost": parts_cost,
            "total_cost": labor_cost + parts_cost,
        }

    async def create_penalty_from_maintenance(self, rental: Union[Rental, str], maintenance: Union[Maintenance, str],
                                              date_issued: date = None, *, penalty_id: str = None) -> Penalty:
        """
        Issues an unpaid penalty on a rental for the cost of a maintenance job.

        :raises NotFoundError: If the rental or maintenance does not exist.
        :raises ValidationError: If the job cost nothing, was already charged, or the penalty id is taken.
        """
        rental = await require(get_rental, rental, "Rental")
        maintenance = await require(get_maintenance, maintenance, "Maintenance")

        if penalty_id is not None and await get_penalty(penalty_id) is not None:
            raise rejected(ValidationError(f"Penalty {penalty_id} already exists.", id=penalty_id))

        if await is_maintenance_linked(maintenance):
            raise rejected(ValidationError(
                f"Maintenance {maintenance.maintenance_id} has already been charged.", id=maintenance.maintenance_id
            ))

        cost = await self.get_maintenance_cost(maintenance)
        if cost <= 0:
            raise rejected(ValidationError(
                f"Maintenance {maintenance.maintenance_id} has no cost to charge.", cost=cost
            ))

        penalty = await create_penalty(
            rental, cost, date_issued or timezone.now().date(), maintenance=maintenance, penalty_id=penalty_id
        )
        logger.info("Issued penalty %s of %s on %s", penalty.penalty_id, cost, rental.rental_id)
        return penalty

    async def cancel_penalty(self, penalty: Union[Penalty, str]) -> Penalty:
        penalty = await require(get_penalty, penalty, "Penalty")
        if not penalty.is_active:
            raise rejected(InvalidStateError(f"Penalty {penalty.penalty_id} is already cancelled."))

        await deactivate_penalty(penalty)
        penalty.status = RecordStatus.INACTIVE
        logger.info("Cancelled penalty %s", penalty.penalty_id)
        return penalty

    async def update_penalty_payment(self, penalty: Union[Penalty, str], penalty_status: PenaltyStatus) -> Penalty:
        """Marks a penalty as paid or unpaid."""
        penalty = await require(get_penalty, penalty, "Penalty")
        if not penalty.is_active:
            raise rejected(InvalidStateError(f"Penalty {penalty.penalty_id} is cancelled."))

        await update_penalty(penalty, penalty_status=PenaltyStatus(penalty_status))
        logger.info("Penalty %s is now %s", penalty.penalty_id, penalty.penalty_status.value)
        return penalty

    async def penalties_for_rental(self, rental: Union[Rental, str]) -> List[Penalty]:
        rental = await require(get_rental, rental, "Rental")
        return await get_penalties(rental=rental)

    async def unpaid_penalties_for_customer(self, customer: Union[Customer, str]) -> List[Penalty]:
        customer = await require(get_customer, customer, "Customer")
        return await get_penalties_for_customer(customer, penalty_status=PenaltyStatus.UNPAID)

    async def has_unpaid_penalties(self, customer: Union[Customer, str]) -> bool:
        return bool(await self.unpaid_penalties_for_customer(customer))

    async def total_penalty_amount(self, customer: Union[Customer, str]) -> Decimal:
        """The sum of a customer's unpaid penalties."""
        return sum((penalty.total_penalty for penalty in await self.unpaid_penalties_for_customer(customer)), ZERO)
