"""
Penalties
---------
"""
from datetime import date
from decimal import Decimal
from typing import Union, Optional, List

from uvr.models import Penalty, Rental, Maintenance, Customer
from uvr.models.util import RecordStatus, PenaltyStatus, resolve_id
from uvr.service.access.util import next_identifier


async def get_penalties(*, rental: Union[Rental, str] = None, maintenance: Union[Maintenance, str] = None,
                        penalty_status: PenaltyStatus = None, include_inactive=False) -> List[Penalty]:
    """
    Gets the penalties for either the given rental, the given maintenance job, or both.

    :param penalty_status: Only return penalties which are paid or unpaid.
    """
    options = {}

    if rental is not None:
        options["rental_id"] = resolve_id(rental)
    if maintenance is not None:
        options["maintenance_id"] = resolve_id(maintenance)
    if penalty_status is not None:
        options["penalty_status"] = penalty_status
    if not include_inactive:
        options["status"] = RecordStatus.ACTIVE

    return await Penalty.filter(**options).order_by("-date_issued", "penalty_id")


async def get_penalties_for_customer(customer: Union[Customer, str], *,
                                     penalty_status: PenaltyStatus = None) -> List[Penalty]:
    """Gets the active penalties issued on any of a customer's rentals."""
    query = Penalty.filter(rental__customer__customer_id=resolve_id(customer), status=RecordStatus.ACTIVE)
    if penalty_status is not None:
        query = query.filter(penalty_status=penalty_status)
    return await query.order_by("date_issued", "penalty_id")


async def get_penalty(penalty_id: str) -> Optional[Penalty]:
    return await Penalty.filter(penalty_id=penalty_id).first()


async def is_maintenance_linked(maintenance: Union[Maintenance, str]) -> bool:
    """Checks whether a maintenance job has already been charged to a customer."""
    return await Penalty.filter(maintenance_id=resolve_id(maintenance), status=RecordStatus.ACTIVE).exists()


async def create_penalty(rental: Union[Rental, str], total_penalty: Decimal, date_issued: date,
                         maintenance: Union[Maintenance, str] = None, penalty_id: str = None) -> Penalty:
    if penalty_id is None:
        penalty_id = await next_identifier(Penalty, "PEN")

    return await Penalty.create(
        penalty_id=penalty_id, rental_id=resolve_id(rental), total_penalty=total_penalty,
        maintenance_id=resolve_id(maintenance) if maintenance is not None else None,
        date_issued=date_issued
    )


async def update_penalty(penalty: Penalty, **kwargs) -> Penalty:
    penalty.update_from_dict(kwargs)
    await penalty.save()
    return penalty


async def deactivate_penalty(penalty: Union[Penalty, str]) -> bool:
    return await Penalty.filter(penalty_id=resolve_id(penalty)).update(status=RecordStatus.INACTIVE) > 0


async def reactivate_penalty(penalty: Union[Penalty, str]) -> bool:
    return await Penalty.filter(penalty_id=resolve_id(penalty)).update(status=RecordStatus.ACTIVE) > 0
