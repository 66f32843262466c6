from decimal import Decimal

import pytest
from aiohttp.test_utils import TestClient

from uvr.models.util import PenaltyStatus
from uvr.serializer import JSendSchema
from uvr.serializer.models import PenaltySchema


@pytest.fixture
async def completed_maintenance(maintenance_manager, random_rental, random_technician):
    maintenance = await maintenance_manager.schedule(random_rental.vehicle_id, random_technician, "Body work")
    return await maintenance_manager.complete(maintenance, hours_worked=Decimal("2"))


@pytest.fixture
async def random_penalty(penalty_manager, random_rental, completed_maintenance):
    return await penalty_manager.create_penalty_from_maintenance(random_rental, completed_maintenance)


class TestPenaltiesView:

    async def test_issue_penalty(self, client: TestClient, random_rental, completed_maintenance):
        """Assert that a penalty is issued for the cost of the maintenance job."""
        response = await client.post('/api/v1/penalties', json={
            "rental_id": random_rental.rental_id,
            "maintenance_id": completed_maintenance.maintenance_id,
        })
        response_data = JSendSchema.of(penalty=PenaltySchema()).load(await response.json())

        assert response.status == 201
        assert response_data["data"]["penalty"]["total_penalty"] == Decimal("700.00")
        assert response_data["data"]["penalty"]["penalty_status"] == PenaltyStatus.UNPAID

    async def test_issue_penalty_twice(self, client: TestClient, random_penalty, random_rental,
                                       completed_maintenance):
        response = await client.post('/api/v1/penalties', json={
            "rental_id": random_rental.rental_id,
            "maintenance_id": completed_maintenance.maintenance_id,
        })
        assert response.status == 400

    async def test_get_unpaid(self, client: TestClient, random_penalty):
        response = await client.get('/api/v1/penalties', params={"status": "unpaid"})
        response_data = await response.json()

        assert [p["penalty_id"] for p in response_data["data"]["penalties"]] == [random_penalty.penalty_id]


class TestPenaltyView:

    async def test_pay_penalty(self, client: TestClient, random_penalty):
        url = f'/api/v1/penalties/{random_penalty.penalty_id}'
        response = await client.patch(url, json={"penalty_status": "PAID"})

        assert response.status == 200
        assert (await response.json())["data"]["penalty"]["penalty_status"] == "PAID"

    async def test_pay_penalty_bad_status(self, client: TestClient, random_penalty):
        url = f'/api/v1/penalties/{random_penalty.penalty_id}'
        response = await client.patch(url, json={"penalty_status": "MAYBE"})
        assert response.status == 400

    async def test_cancel_penalty(self, client: TestClient, random_penalty):
        """Assert that a cancelled penalty cannot be cancelled again."""
        response = await client.delete(f'/api/v1/penalties/{random_penalty.penalty_id}')
        assert response.status == 200
        assert (await response.json())["data"]["penalty"]["status"] == "Inactive"

        response = await client.delete(f'/api/v1/penalties/{random_penalty.penalty_id}')
        assert response.status == 409

    async def test_customer_penalties(self, client: TestClient, random_penalty, random_customer):
        response = await client.get(f'/api/v1/customers/{random_customer.customer_id}/penalties')
        response_data = await response.json()

        assert response.status == 200
        assert response_data["data"]["penalties"][0]["penalty_id"] == random_penalty.penalty_id
