from decimal import Decimal

import pytest

from uvr.models import Part
from uvr.models.util import VehicleStatus
from uvr.service.access.customers import create_customer, deactivate_customer, get_customers, reactivate_customer
from uvr.service.access.parts import decrement_part_quantity, increment_part_quantity, get_low_stock_parts, \
    create_part
from uvr.service.access.util import next_identifier
from uvr.service.access.vehicles import update_vehicle_status, get_vehicles, deactivate_vehicle


async def test_identifiers_are_sequential(database):
    """Assert that generated ids count up from the highest existing one."""
    first = await create_customer("Juan", "Dela Cruz")
    second = await create_customer("Maria", "Clara")

    assert first.customer_id == "CUST-001"
    assert second.customer_id == "CUST-002"


async def test_identifiers_skip_custom_ids(database):
    await create_customer("Jose", "Rizal", customer_id="CUST-041")
    await create_customer("Andres", "Bonifacio", customer_id="VIP")

    assert await next_identifier(Part, "PART") == "PART-001"
    assert (await create_customer("Emilio", "Aguinaldo")).customer_id == "CUST-042"


async def test_identifiers_never_reused(database):
    """Assert that the id of a deactivated record is not handed out again."""
    customer = await create_customer("Apolinario", "Mabini")
    await deactivate_customer(customer)

    assert (await create_customer("Gabriela", "Silang")).customer_id == "CUST-002"


async def test_deactivate_customer(random_customer):
    await deactivate_customer(random_customer)
    assert not await get_customers()
    assert len(await get_customers(include_inactive=True)) == 1

    await reactivate_customer(random_customer)
    assert len(await get_customers()) == 1


async def test_decrement_part_quantity(random_part):
    assert await decrement_part_quantity(random_part, 4)
    assert (await Part.get(part_id=random_part.part_id)).quantity == 6


async def test_part_stock_never_negative(random_part):
    """Assert that taking more than is in stock leaves the stock untouched."""
    assert not await decrement_part_quantity(random_part, 11)
    assert (await Part.get(part_id=random_part.part_id)).quantity == 10


async def test_increment_part_quantity(random_part):
    assert await increment_part_quantity(random_part, 5)
    assert (await Part.get(part_id=random_part.part_id)).quantity == 15


async def test_negative_stock_changes(random_part):
    with pytest.raises(ValueError):
        await decrement_part_quantity(random_part, -1)
    with pytest.raises(ValueError):
        await create_part("Wiper", Decimal("10.00"), -3)


async def test_low_stock_parts(random_part_factory):
    low = await random_part_factory(quantity=2)
    await random_part_factory(quantity=50)

    assert [part.part_id for part in await get_low_stock_parts(5)] == [low.part_id]


async def test_update_vehicle_status_expected(random_vehicle):
    """Assert that a conditional status update only applies from the expected status."""
    assert not await update_vehicle_status(random_vehicle, VehicleStatus.AVAILABLE, expected=VehicleStatus.IN_USE)
    assert await update_vehicle_status(random_vehicle, VehicleStatus.IN_USE, expected=VehicleStatus.AVAILABLE)
    assert random_vehicle.status == VehicleStatus.IN_USE


async def test_inactive_vehicles_hidden(random_vehicle):
    await deactivate_vehicle(random_vehicle)

    assert not await get_vehicles()
    assert await get_vehicles(include_inactive=True)
