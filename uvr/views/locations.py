"""
Location Related Views
-------------------------

Handles the CRUD of the branches vehicles are rented from and deployed to.
"""
from http import HTTPStatus

from aiohttp import web
from aiohttp_apispec import docs

from uvr.models import Location
from uvr.serializer import JSendSchema, JSendStatus, Many
from uvr.serializer.decorators import returns, expects
from uvr.serializer.misc import LocationCreateSchema
from uvr.serializer.models import LocationSchema, DeploymentSchema
from uvr.service.access.locations import get_locations, get_location, create_location, update_location, \
    deactivate_location
from uvr.views.base import BaseView
from uvr.views.decorators import match_getter
from uvr.views.utils import query_flag


class LocationsView(BaseView):
    url = "/locations"
    name = "locations"

    @docs(summary="Get All Locations")
    @returns(JSendSchema.of(locations=Many(LocationSchema())))
    async def get(self):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"locations": await get_locations(include_inactive=query_flag(self.request, "include_inactive"))}
        }

    @docs(summary="Add A Location")
    @expects(LocationCreateSchema())
    @returns(JSendSchema.of(location=LocationSchema()), HTTPStatus.CREATED)
    async def post(self):
        location = await create_location(self.request["data"]["name"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"location": location}
        }


class LocationView(BaseView):
    url = "/locations/{location_id}"
    name = "location"
    with_location = match_getter(get_location, "location", location_id="location_id")

    @with_location
    @docs(summary="Get A Location")
    @returns(JSendSchema.of(location=LocationSchema()))
    async def get(self, location: Location):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"location": location}
        }

    @with_location
    @docs(summary="Rename A Location")
    @expects(LocationCreateSchema())
    @returns(JSendSchema.of(location=LocationSchema()))
    async def patch(self, location: Location):
        location = await update_location(location, name=self.request["data"]["name"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"location": location}
        }

    @with_location
    @docs(summary="Close A Location")
    async def delete(self, location: Location):
        await deactivate_location(location)
        raise web.HTTPNoContent


class LocationDeploymentsView(BaseView):
    """
    Gets the vehicles that have been deployed to a location.
    """
    url = "/locations/{location_id}/deployments"
    with_location = match_getter(get_location, "location", location_id="location_id")

    @with_location
    @docs(summary="Get Deployments For Location")
    @returns(JSendSchema.of(deployments=Many(DeploymentSchema())))
    async def get(self, location: Location):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"deployments": await self.deployment_manager.deployments_for_location(location)}
        }
