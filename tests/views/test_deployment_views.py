from aiohttp.test_utils import TestClient

from uvr.models.util import DeploymentStatus
from uvr.serializer import JSendSchema
from uvr.serializer.models import DeploymentSchema
from uvr.service.access.locations import create_location


class TestDeploymentsView:

    async def test_deploy(self, client: TestClient, random_vehicle, random_location):
        response = await client.post('/api/v1/deployments', json={
            "plate_id": random_vehicle.plate_id,
            "location_id": random_location.location_id,
        })
        response_data = JSendSchema.of(deployment=DeploymentSchema()).load(await response.json())

        assert response.status == 201
        assert response_data["data"]["deployment"]["location_id"] == random_location.location_id
        assert response_data["data"]["deployment"]["status"] == DeploymentStatus.ACTIVE

    async def test_redeploy(self, client: TestClient, random_vehicle, random_location):
        """Assert that redeploying a vehicle leaves only the new deployment current."""
        other_location = await create_location("Davao")
        for location in (random_location, other_location):
            await client.post('/api/v1/deployments', json={
                "plate_id": random_vehicle.plate_id,
                "location_id": location.location_id,
            })

        response = await client.get('/api/v1/deployments', params={"current": "true"})
        deployments = (await response.json())["data"]["deployments"]
        assert [d["location_id"] for d in deployments] == [other_location.location_id]

        response = await client.get(f'/api/v1/vehicles/{random_vehicle.plate_id}/deployments')
        response_data = await response.json()
        assert len(response_data["data"]["deployments"]) == 2
        assert response_data["data"]["current"]["location_id"] == other_location.location_id

    async def test_deploy_twice(self, client: TestClient, random_vehicle, random_location):
        """Assert that deploying a vehicle where it already is is a conflict."""
        data = {"plate_id": random_vehicle.plate_id, "location_id": random_location.location_id}
        await client.post('/api/v1/deployments', json=data)

        response = await client.post('/api/v1/deployments', json=data)
        assert response.status == 409


class TestDeploymentActionView:

    async def test_complete(self, client: TestClient, deployment_manager, random_vehicle, random_location):
        deployment = await deployment_manager.deploy_vehicle(random_vehicle, random_location)

        response = await client.patch(f'/api/v1/deployments/{deployment.deployment_id}/complete')
        response_data = await response.json()

        assert response.status == 200
        assert response_data["data"]["deployment"]["status"] == DeploymentStatus.COMPLETED.value
        assert response_data["data"]["deployment"]["end_date"] is not None

    async def test_cancel_completed(self, client: TestClient, deployment_manager, random_vehicle, random_location):
        deployment = await deployment_manager.deploy_vehicle(random_vehicle, random_location)
        await deployment_manager.complete_deployment(deployment)

        response = await client.patch(f'/api/v1/deployments/{deployment.deployment_id}/cancel')
        assert response.status == 409

    async def test_invalid_action(self, client: TestClient, deployment_manager, random_vehicle, random_location):
        deployment = await deployment_manager.deploy_vehicle(random_vehicle, random_location)

        response = await client.patch(f'/api/v1/deployments/{deployment.deployment_id}/extend')
        assert response.status == 404
