"""
Technician Related Views
-------------------------

Handles the technician CRUD, and the jobs each technician is working on.
"""
from http import HTTPStatus

from aiohttp import web
from aiohttp_apispec import docs

from uvr.models import Technician
from uvr.serializer import JSendSchema, JSendStatus, Many
from uvr.serializer.decorators import returns, expects
from uvr.serializer.misc import TechnicianCreateSchema, TechnicianUpdateSchema
from uvr.serializer.models import TechnicianSchema, MaintenanceSchema
from uvr.service.access.technicians import get_technicians, get_technician, create_technician, update_technician, \
    deactivate_technician
from uvr.views.base import BaseView
from uvr.views.decorators import match_getter
from uvr.views.utils import query_flag


class TechniciansView(BaseView):
    url = "/technicians"
    name = "technicians"

    @docs(summary="Get All Technicians")
    @returns(JSendSchema.of(technicians=Many(TechnicianSchema())))
    async def get(self):
        """Gets the technicians, optionally those of one specialization with ``?specialization=``."""
        technicians = await get_technicians(
            specialization_id=self.request.query.get("specialization"),
            include_inactive=query_flag(self.request, "include_inactive")
        )
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"technicians": technicians}
        }

    @docs(summary="Add A Technician")
    @expects(TechnicianCreateSchema())
    @returns(JSendSchema.of(technician=TechnicianSchema()), HTTPStatus.CREATED)
    async def post(self):
        technician = await create_technician(**self.request["data"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"technician": technician}
        }


class TechnicianView(BaseView):
    url = "/technicians/{technician_id}"
    name = "technician"
    with_technician = match_getter(get_technician, "technician", technician_id="technician_id")

    @with_technician
    @docs(summary="Get A Technician")
    @returns(JSendSchema.of(technician=TechnicianSchema()))
    async def get(self, technician: Technician):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"technician": technician}
        }

    @with_technician
    @docs(summary="Update A Technician")
    @expects(TechnicianUpdateSchema())
    @returns(JSendSchema.of(technician=TechnicianSchema()))
    async def patch(self, technician: Technician):
        technician = await update_technician(technician, **self.request["data"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"technician": technician}
        }

    @with_technician
    @docs(summary="Deactivate A Technician")
    async def delete(self, technician: Technician):
        await deactivate_technician(technician)
        raise web.HTTPNoContent


class TechnicianMaintenanceView(BaseView):
    """
    Gets the maintenance jobs a technician has in progress.
    """
    url = "/technicians/{technician_id}/maintenance"
    with_technician = match_getter(get_technician, "technician", technician_id="technician_id")

    @with_technician
    @docs(summary="Get Workload For Technician")
    @returns(JSendSchema.of(maintenance=Many(MaintenanceSchema())))
    async def get(self, technician: Technician):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"maintenance": await self.maintenance_manager.technician_workload(technician)}
        }
