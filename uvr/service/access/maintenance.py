"""
Maintenance
-----------

Maintenance jobs and the parts used on them (the cheques).
"""
from datetime import datetime
from typing import Union, Optional, List

from uvr.models import Maintenance, MaintenanceCheque, Vehicle, Technician, Part
from uvr.models.util import RecordStatus, resolve_id
from uvr.service.access.util import next_identifier


async def get_maintenance_records(*, vehicle: Union[Vehicle, str] = None,
                                  technician: Union[Technician, str] = None,
                                  in_progress: bool = None, include_inactive=False) -> List[Maintenance]:
    """
    Gets the maintenance jobs for either the given vehicle, the given technician, or both.

    :param in_progress: If true, only jobs that are not completed. False means only completed jobs.
    """
    options = {}

    if vehicle is not None:
        options["vehicle_id"] = resolve_id(vehicle)
    if technician is not None:
        options["technician_id"] = resolve_id(technician)
    if in_progress is not None:
        options["end_datetime__isnull"] = in_progress
    if not include_inactive:
        options["status"] = RecordStatus.ACTIVE

    return await Maintenance.filter(**options).order_by("start_datetime", "maintenance_id")


async def get_maintenance(maintenance_id: str) -> Optional[Maintenance]:
    return await Maintenance.filter(maintenance_id=maintenance_id).first()


async def create_maintenance(vehicle: Union[Vehicle, str], start_datetime: datetime, notes: str = "",
                             technician: Union[Technician, str] = None, maintenance_id: str = None) -> Maintenance:
    if maintenance_id is None:
        maintenance_id = await next_identifier(Maintenance, "MAINT")

    return await Maintenance.create(
        maintenance_id=maintenance_id, vehicle_id=resolve_id(vehicle),
        technician_id=resolve_id(technician) if technician is not None else None,
        start_datetime=start_datetime, notes=notes
    )


async def update_maintenance(maintenance: Maintenance, **kwargs) -> Maintenance:
    maintenance.update_from_dict(kwargs)
    await maintenance.save()
    return maintenance


async def deactivate_maintenance(maintenance: Union[Maintenance, str]) -> bool:
    return await Maintenance.filter(maintenance_id=resolve_id(maintenance)) \
        .update(status=RecordStatus.INACTIVE) > 0


async def reactivate_maintenance(maintenance: Union[Maintenance, str]) -> bool:
    return await Maintenance.filter(maintenance_id=resolve_id(maintenance)) \
        .update(status=RecordStatus.ACTIVE) > 0


async def get_cheques(maintenance: Union[Maintenance, str], *, include_inactive=False) -> List[MaintenanceCheque]:
    """Gets the parts used on a maintenance job, with their part records."""
    query = MaintenanceCheque.filter(maintenance_id=resolve_id(maintenance))
    if not include_inactive:
        query = query.filter(status=RecordStatus.ACTIVE)
    return await query.order_by("part_id").prefetch_related("part")


async def get_cheques_for_part(part: Union[Part, str]) -> List[MaintenanceCheque]:
    return await MaintenanceCheque.filter(part_id=resolve_id(part), status=RecordStatus.ACTIVE)


async def get_cheque(maintenance: Union[Maintenance, str], part: Union[Part, str]) -> Optional[MaintenanceCheque]:
    """Gets the line item for a part on a job, whatever its status."""
    return await MaintenanceCheque.filter(
        maintenance_id=resolve_id(maintenance), part_id=resolve_id(part)
    ).first()


async def create_cheque(maintenance: Union[Maintenance, str], part: Union[Part, str],
                        quantity_used: int) -> MaintenanceCheque:
    return await MaintenanceCheque.create(
        maintenance_id=resolve_id(maintenance), part_id=resolve_id(part), quantity_used=quantity_used
    )


async def update_cheque(cheque: MaintenanceCheque, **kwargs) -> MaintenanceCheque:
    cheque.update_from_dict(kwargs)
    await cheque.save()
    return cheque
