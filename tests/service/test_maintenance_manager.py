from datetime import timedelta
from decimal import Decimal

import pytest
from tortoise import timezone

from uvr.models import Vehicle, Part, MaintenanceCheque
from uvr.models.util import VehicleStatus, RecordStatus
from uvr.service import InvalidStateError, ValidationError, NotFoundError
from uvr.service.access.maintenance import get_maintenance
from uvr.service.access.technicians import deactivate_technician


@pytest.fixture
async def brake_pads(random_part_factory):
    return await random_part_factory(price=Decimal("150.00"), quantity=10)


@pytest.fixture
async def oil_filter(random_part_factory):
    return await random_part_factory(price=Decimal("95.00"), quantity=5)


@pytest.fixture
async def random_maintenance(maintenance_manager, random_vehicle, random_technician):
    return await maintenance_manager.schedule(
        random_vehicle, random_technician, "Brake inspection", timezone.now() - timedelta(hours=4)
    )


async def test_schedule(maintenance_manager, random_vehicle, random_technician):
    """Assert that scheduling maintenance takes the vehicle out of service."""
    maintenance = await maintenance_manager.schedule(random_vehicle, random_technician, "Oil change")

    assert maintenance.is_in_progress
    assert maintenance.technician_id == random_technician.technician_id

    vehicle = await Vehicle.get(plate_id=random_vehicle.plate_id)
    assert vehicle.status == VehicleStatus.MAINTENANCE


async def test_schedule_duplicate_id(maintenance_manager, random_vehicle, random_technician):
    await maintenance_manager.schedule(random_vehicle, random_technician, maintenance_id="MAINT-100")

    with pytest.raises(ValidationError):
        await maintenance_manager.schedule(random_vehicle, random_technician, maintenance_id="MAINT-100")


async def test_schedule_inactive_technician(maintenance_manager, random_vehicle, random_technician):
    await deactivate_technician(random_technician)

    with pytest.raises(InvalidStateError):
        await maintenance_manager.schedule(random_vehicle, random_technician)


async def test_flag_vehicle_as_defective(maintenance_manager, random_vehicle):
    """Assert that a vehicle can be flagged as defective without a technician."""
    maintenance = await maintenance_manager.flag_vehicle_as_defective(random_vehicle, "Cracked windshield")

    assert maintenance.technician_id is None
    assert maintenance.notes == "Cracked windshield"
    assert (await Vehicle.get(plate_id=random_vehicle.plate_id)).status == VehicleStatus.MAINTENANCE


async def test_complete(maintenance_manager, random_maintenance, brake_pads, oil_filter):
    """Assert that a completed job is costed from labor and parts and consumes the stock."""
    maintenance = await maintenance_manager.complete(
        random_maintenance, parts_used=[(brake_pads.part_id, 2), (oil_filter.part_id, 1)],
        hours_worked=Decimal("3.5")
    )

    assert maintenance.is_completed
    assert maintenance.total_cost == Decimal("1620.00")
    assert (await get_maintenance(maintenance.maintenance_id)).total_cost == Decimal("1620.00")

    assert (await Part.get(part_id=brake_pads.part_id)).quantity == 8
    assert (await Part.get(part_id=oil_filter.part_id)).quantity == 4
    assert (await Vehicle.get(plate_id=maintenance.vehicle_id)).status == VehicleStatus.AVAILABLE


async def test_complete_default_hours(maintenance_manager, random_maintenance):
    """Assert that the hours worked default to the length of the job."""
    end = random_maintenance.start_datetime + timedelta(hours=2)

    maintenance = await maintenance_manager.complete(random_maintenance, end_datetime=end)

    assert maintenance.hours_worked == Decimal("2.00")
    assert maintenance.total_cost == Decimal("700.00")


async def test_complete_insufficient_stock(maintenance_manager, random_maintenance, random_part_factory):
    """Assert that a job needing more parts than are in stock changes nothing."""
    part = await random_part_factory(quantity=1)

    with pytest.raises(ValidationError):
        await maintenance_manager.complete(random_maintenance, parts_used=[(part.part_id, 2)])

    assert (await Part.get(part_id=part.part_id)).quantity == 1
    assert not await MaintenanceCheque.all()
    assert (await get_maintenance(random_maintenance.maintenance_id)).is_in_progress
    assert (await Vehicle.get(plate_id=random_maintenance.vehicle_id)).status == VehicleStatus.MAINTENANCE


async def test_complete_missing_part(maintenance_manager, random_maintenance):
    with pytest.raises(NotFoundError):
        await maintenance_manager.complete(random_maintenance, parts_used=[("PART-999", 1)])


async def test_complete_negative_quantity(maintenance_manager, random_maintenance, brake_pads):
    with pytest.raises(ValidationError):
        await maintenance_manager.complete(random_maintenance, parts_used=[(brake_pads.part_id, 0)])


async def test_complete_twice(maintenance_manager, random_maintenance):
    await maintenance_manager.complete(random_maintenance)

    with pytest.raises(InvalidStateError):
        await maintenance_manager.complete(random_maintenance)


async def test_complete_before_start(maintenance_manager, random_maintenance):
    with pytest.raises(ValidationError):
        await maintenance_manager.complete(
            random_maintenance, end_datetime=random_maintenance.start_datetime - timedelta(hours=1)
        )


async def test_add_part(maintenance_manager, random_maintenance, brake_pads):
    """Assert that adding a part takes it from stock and updates the cost of the job."""
    await maintenance_manager.add_part(random_maintenance, brake_pads, 3)

    assert (await Part.get(part_id=brake_pads.part_id)).quantity == 7
    assert (await get_maintenance(random_maintenance.maintenance_id)).total_cost == Decimal("450.00")


async def test_add_part_twice(maintenance_manager, random_maintenance, brake_pads):
    await maintenance_manager.add_part(random_maintenance, brake_pads, 1)

    with pytest.raises(InvalidStateError):
        await maintenance_manager.add_part(random_maintenance, brake_pads, 1)


async def test_add_part_insufficient_stock(maintenance_manager, random_maintenance, brake_pads):
    with pytest.raises(ValidationError):
        await maintenance_manager.add_part(random_maintenance, brake_pads, 11)

    assert (await Part.get(part_id=brake_pads.part_id)).quantity == 10


async def test_update_part_quantity(maintenance_manager, random_maintenance, brake_pads):
    """Assert that lowering the quantity used returns the difference to stock."""
    await maintenance_manager.add_part(random_maintenance, brake_pads, 4)

    cheque = await maintenance_manager.update_part_quantity(random_maintenance, brake_pads, 1)

    assert cheque.quantity_used == 1
    assert (await Part.get(part_id=brake_pads.part_id)).quantity == 9
    assert (await get_maintenance(random_maintenance.maintenance_id)).total_cost == Decimal("150.00")


async def test_deactivate_and_reactivate_part(maintenance_manager, random_maintenance, brake_pads):
    await maintenance_manager.add_part(random_maintenance, brake_pads, 2)

    cheque = await maintenance_manager.deactivate_part(random_maintenance, brake_pads)
    assert cheque.status == RecordStatus.INACTIVE
    assert (await Part.get(part_id=brake_pads.part_id)).quantity == 10
    assert (await get_maintenance(random_maintenance.maintenance_id)).total_cost == Decimal("0.00")

    cheque = await maintenance_manager.reactivate_part(random_maintenance, brake_pads)
    assert cheque.status == RecordStatus.ACTIVE
    assert (await Part.get(part_id=brake_pads.part_id)).quantity == 8
    assert (await get_maintenance(random_maintenance.maintenance_id)).total_cost == Decimal("300.00")


async def test_deactivate_unused_part(maintenance_manager, random_maintenance, brake_pads):
    with pytest.raises(NotFoundError):
        await maintenance_manager.deactivate_part(random_maintenance, brake_pads)


async def test_assign_technician(maintenance_manager, random_vehicle, random_technician):
    maintenance = await maintenance_manager.flag_vehicle_as_defective(random_vehicle, "Engine noise")

    maintenance = await maintenance_manager.assign_technician(maintenance, random_technician)

    assert (await get_maintenance(maintenance.maintenance_id)).technician_id == random_technician.technician_id


async def test_technician_workload(maintenance_manager, random_maintenance, random_technician):
    """Assert that the workload only includes jobs in progress."""
    assert len(await maintenance_manager.technician_workload(random_technician)) == 1

    await maintenance_manager.complete(random_maintenance)

    assert not await maintenance_manager.technician_workload(random_technician)


async def test_vehicle_total_maintenance_cost(maintenance_manager, random_maintenance, random_vehicle, brake_pads):
    await maintenance_manager.complete(
        random_maintenance, parts_used=[(brake_pads.part_id, 1)], hours_worked=Decimal("1")
    )

    assert await maintenance_manager.vehicle_total_maintenance_cost(random_vehicle) == Decimal("500.00")
