"""
Technicians
-----------
"""
from decimal import Decimal
from typing import Optional, List, Union

from uvr.models import Technician
from uvr.models.util import RecordStatus, resolve_id
from uvr.service.access.util import next_identifier


async def get_technicians(*, specialization_id: str = None, include_inactive=False) -> List[Technician]:
    query = Technician.all()

    if specialization_id is not None:
        query = query.filter(specialization_id=specialization_id)
    if not include_inactive:
        query = query.filter(status=RecordStatus.ACTIVE)

    return await query.order_by("technician_id")


async def get_technician(technician_id: str) -> Optional[Technician]:
    return await Technician.filter(technician_id=technician_id).first()


async def create_technician(first_name: str, last_name: str, rate: Decimal, specialization_id: str = None,
                            contact_number: str = None, technician_id: str = None) -> Technician:
    if technician_id is None:
        technician_id = await next_identifier(Technician, "TECH")

    return await Technician.create(
        technician_id=technician_id, first_name=first_name, last_name=last_name, rate=rate,
        specialization_id=specialization_id, contact_number=contact_number
    )


async def update_technician(technician: Technician, **kwargs) -> Technician:
    technician.update_from_dict(kwargs)
    await technician.save()
    return technician


async def deactivate_technician(technician: Union[Technician, str]) -> bool:
    return await Technician.filter(technician_id=resolve_id(technician)).update(status=RecordStatus.INACTIVE) > 0


async def reactivate_technician(technician: Union[Technician, str]) -> bool:
    return await Technician.filter(technician_id=resolve_id(technician)).update(status=RecordStatus.ACTIVE) > 0
