"""
Deployments
-----------
"""
from datetime import date
from typing import Union, Optional, List

from uvr.models import Deployment, Vehicle, Location
from uvr.models.util import DeploymentStatus, resolve_id
from uvr.service.access.util import next_identifier


async def get_deployments(*, vehicle: Union[Vehicle, str] = None, location: Union[Location, str] = None,
                          status: DeploymentStatus = None) -> List[Deployment]:
    options = {}

    if vehicle is not None:
        options["vehicle_id"] = resolve_id(vehicle)
    if location is not None:
        options["location_id"] = resolve_id(location)
    if status is not None:
        options["status"] = status

    return await Deployment.filter(**options).order_by("start_date", "deployment_id")


async def get_deployment(deployment_id: str) -> Optional[Deployment]:
    return await Deployment.filter(deployment_id=deployment_id).first()


async def get_current_deployment(vehicle: Union[Vehicle, str]) -> Optional[Deployment]:
    """Gets the open deployment for a vehicle, if it has one."""
    return await Deployment.filter(
        vehicle_id=resolve_id(vehicle), end_date__isnull=True, status=DeploymentStatus.ACTIVE
    ).order_by("-start_date").first()


async def create_deployment(vehicle: Union[Vehicle, str], location: Union[Location, str], start_date: date,
                            deployment_id: str = None) -> Deployment:
    if deployment_id is None:
        deployment_id = await next_identifier(Deployment, "DEP")

    return await Deployment.create(
        deployment_id=deployment_id, vehicle_id=resolve_id(vehicle),
        location_id=resolve_id(location), start_date=start_date
    )


async def update_deployment(deployment: Deployment, **kwargs) -> Deployment:
    deployment.update_from_dict(kwargs)
    await deployment.save()
    return deployment
