from decimal import Decimal

import pytest
from aiohttp.test_utils import TestClient

from uvr.models import Part, Vehicle
from uvr.models.util import VehicleStatus


@pytest.fixture
async def random_maintenance(maintenance_manager, random_vehicle, random_technician):
    return await maintenance_manager.schedule(random_vehicle, random_technician, "Tune up")


class TestMaintenanceRecordsView:

    async def test_schedule(self, client: TestClient, random_vehicle, random_technician):
        """Assert that scheduling maintenance takes the vehicle out of service."""
        response = await client.post('/api/v1/maintenance', json={
            "plate_id": random_vehicle.plate_id,
            "technician_id": random_technician.technician_id,
            "notes": "Change the oil",
        })
        response_data = await response.json()

        assert response.status == 201
        assert response_data["data"]["maintenance"]["plate_id"] == random_vehicle.plate_id
        assert response_data["data"]["maintenance"]["total_cost"] == "0.00"
        assert (await Vehicle.get(plate_id=random_vehicle.plate_id)).status == VehicleStatus.MAINTENANCE

    async def test_schedule_missing_vehicle(self, client: TestClient, random_technician):
        response = await client.post('/api/v1/maintenance', json={
            "plate_id": "NOPE-000",
            "technician_id": random_technician.technician_id,
        })
        assert response.status == 404

    async def test_get_in_progress(self, client: TestClient, random_maintenance):
        response = await client.get('/api/v1/maintenance', params={"in_progress": "true"})
        response_data = await response.json()

        ids = [m["maintenance_id"] for m in response_data["data"]["maintenance"]]
        assert ids == [random_maintenance.maintenance_id]


class TestMaintenanceCompleteView:

    async def test_complete(self, client: TestClient, random_maintenance, random_part_factory):
        """Assert that completing a job costs it and takes the parts out of stock."""
        brake_pads = await random_part_factory(price=Decimal("150.00"), quantity=10)
        oil_filter = await random_part_factory(price=Decimal("95.00"), quantity=5)

        response = await client.patch(f'/api/v1/maintenance/{random_maintenance.maintenance_id}/complete', json={
            "hours_worked": "3.5",
            "parts_used": [
                {"part_id": brake_pads.part_id, "quantity": 2},
                {"part_id": oil_filter.part_id, "quantity": 1},
            ],
        })
        response_data = await response.json()

        assert response.status == 200
        assert response_data["data"]["maintenance"]["total_cost"] == "1620.00"
        assert response_data["data"]["maintenance"]["completed"] is True
        assert (await Part.get(part_id=brake_pads.part_id)).quantity == 8

        response = await client.get(f'/api/v1/maintenance/{random_maintenance.maintenance_id}/cost')
        assert (await response.json())["data"]["cost"] == {
            "labor_cost": "1225.00",
            "parts_cost": "395.00",
            "total_cost": "1620.00",
        }

    async def test_complete_insufficient_stock(self, client: TestClient, random_maintenance, random_part_factory):
        """Assert that asking for more parts than are in stock is rejected and changes nothing."""
        part = await random_part_factory(quantity=1)

        response = await client.patch(f'/api/v1/maintenance/{random_maintenance.maintenance_id}/complete', json={
            "parts_used": [{"part_id": part.part_id, "quantity": 3}],
        })
        response_data = await response.json()

        assert response.status == 400
        assert response_data["data"]["available"] == "1"
        assert (await Part.get(part_id=part.part_id)).quantity == 1

    async def test_complete_twice(self, client: TestClient, random_maintenance):
        url = f'/api/v1/maintenance/{random_maintenance.maintenance_id}/complete'
        await client.patch(url, json={})

        response = await client.patch(url, json={})
        assert response.status == 409


class TestMaintenancePartsView:

    async def test_add_and_remove_part(self, client: TestClient, random_maintenance, random_part):
        """Assert that parts can be added to a job and taken back off it."""
        response = await client.post(f'/api/v1/maintenance/{random_maintenance.maintenance_id}/parts', json={
            "part_id": random_part.part_id,
            "quantity": 2,
        })
        response_data = await response.json()

        assert response.status == 201
        assert response_data["data"]["parts"][0]["part_name"] == random_part.part_name
        assert response_data["data"]["parts"][0]["quantity_used"] == 2
        assert (await Part.get(part_id=random_part.part_id)).quantity == 8

        response = await client.patch(
            f'/api/v1/maintenance/{random_maintenance.maintenance_id}/parts/{random_part.part_id}',
            json={"active": False}
        )

        assert response.status == 200
        assert (await response.json())["data"]["parts"] == []
        assert (await Part.get(part_id=random_part.part_id)).quantity == 10

    async def test_update_unused_part(self, client: TestClient, random_maintenance, random_part):
        """Assert that changing a part that is not on the job 404s."""
        response = await client.patch(
            f'/api/v1/maintenance/{random_maintenance.maintenance_id}/parts/{random_part.part_id}',
            json={"quantity": 1}
        )
        assert response.status == 404

    async def test_update_needs_one_change(self, client: TestClient, random_maintenance, random_part,
                                           maintenance_manager):
        await maintenance_manager.add_part(random_maintenance, random_part, 1)

        response = await client.patch(
            f'/api/v1/maintenance/{random_maintenance.maintenance_id}/parts/{random_part.part_id}',
            json={"quantity": 2, "active": True}
        )
        assert response.status == 400


class TestMaintenanceTechnicianView:

    async def test_assign(self, client: TestClient, random_vehicle, random_technician, maintenance_manager):
        maintenance = await maintenance_manager.flag_vehicle_as_defective(random_vehicle, "Squeaky brakes")

        response = await client.put(
            f'/api/v1/maintenance/{maintenance.maintenance_id}/technician',
            json={"technician_id": random_technician.technician_id}
        )

        assert response.status == 200
        assert (await response.json())["data"]["maintenance"]["technician_id"] == random_technician.technician_id
