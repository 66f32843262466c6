"""
Deployment Manager
------------------

Tracks which location each vehicle is stationed at. A vehicle
has at most one current deployment, so moving it closes the
deployment at its old location before opening the new one.
"""
from typing import Union, List, Optional

from tortoise import timezone
from tortoise.transactions import in_transaction

from uvr import logger
from uvr.models import Deployment, Vehicle, Location
from uvr.models.util import DeploymentStatus
from uvr.service.access.deployments import get_current_deployment, update_deployment, create_deployment, \
    get_deployment, get_deployments
from uvr.service.access.locations import get_location
from uvr.service.access.vehicles import get_vehicle
from uvr.service.errors import InvalidStateError
from uvr.service.manager.util import require, rejected


class DeploymentManager:

    async def deploy_vehicle(self, vehicle: Union[Vehicle, str], location: Union[Location, str]) -> Deployment:
        """
        Deploys a vehicle to a location, closing its current deployment elsewhere.

        :raises NotFoundError: If the vehicle or location does not exist.
        :raises InvalidStateError: If either is inactive or the vehicle is already deployed there.
        """
        vehicle = await require(get_vehicle, vehicle, "Vehicle")
        if not vehicle.is_active:
            raise rejected(InvalidStateError(f"Vehicle {vehicle.plate_id} is inactive."))

        location = await require(get_location, location, "Location")
        if not location.is_active:
            raise rejected(InvalidStateError(f"Location {location.location_id} is inactive."))

        today = timezone.now().date()

        async with in_transaction():
            current = await get_current_deployment(vehicle)
            if current is not None:
                if current.location_id == location.location_id:
                    raise rejected(InvalidStateError(
                        f"Vehicle {vehicle.plate_id} is already deployed at {location.location_id}.",
                        deployment_id=current.deployment_id
                    ))
                await update_deployment(current, end_date=today, status=DeploymentStatus.COMPLETED)
                logger.info("Closed deployment %s of %s at %s", current.deployment_id, vehicle.plate_id,
                            current.location_id)

            deployment = await create_deployment(vehicle, location, today)

        logger.info("Deployed %s to %s as %s", vehicle.plate_id, location.location_id, deployment.deployment_id)
        return deployment

    async def complete_deployment(self, deployment: Union[Deployment, str]) -> Deployment:
        """Closes a current deployment as of today."""
        deployment = await self._current(deployment)
        await update_deployment(deployment, end_date=timezone.now().date(), status=DeploymentStatus.COMPLETED)
        logger.info("Completed deployment %s", deployment.deployment_id)
        return deployment

    async def cancel_deployment(self, deployment: Union[Deployment, str]) -> Deployment:
        deployment = await self._current(deployment)
        await update_deployment(deployment, status=DeploymentStatus.CANCELLED)
        logger.info("Cancelled deployment %s", deployment.deployment_id)
        return deployment

    async def vehicle_deployment_history(self, vehicle: Union[Vehicle, str]) -> List[Deployment]:
        vehicle = await require(get_vehicle, vehicle, "Vehicle")
        return await get_deployments(vehicle=vehicle)

    async def active_deployments(self) -> List[Deployment]:
        return await get_deployments(status=DeploymentStatus.ACTIVE)

    async def deployments_for_location(self, location: Union[Location, str]) -> List[Deployment]:
        location = await require(get_location, location, "Location")
        return await get_deployments(location=location)

    async def current_deployment(self, vehicle: Union[Vehicle, str]) -> Optional[Deployment]:
        vehicle = await require(get_vehicle, vehicle, "Vehicle")
        return await get_current_deployment(vehicle)

    @staticmethod
    async def _current(deployment: Union[Deployment, str]) -> Deployment:
        deployment = await require(get_deployment, deployment, "Deployment")
        if not deployment.is_current:
            raise rejected(InvalidStateError(
                f"Deployment {deployment.deployment_id} is already {deployment.status.value.lower()}."
            ))
        return deployment
