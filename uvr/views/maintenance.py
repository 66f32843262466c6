"""
Maintenance Related Views
---------------------------

Handles scheduling and completing maintenance, and the parts used on each job.
"""
from http import HTTPStatus

from aiohttp_apispec import docs
from marshmallow import Schema
from marshmallow.fields import String

from uvr.models import Maintenance
from uvr.serializer import JSendSchema, JSendStatus, Many
from uvr.serializer.decorators import returns, expects
from uvr.serializer.misc import MaintenanceScheduleSchema, MaintenanceCompleteSchema, PartUsedSchema, \
    PartUpdateOnJobSchema
from uvr.serializer.models import MaintenanceSchema, MaintenanceChequeSchema, CostBreakdownSchema
from uvr.service import ServiceError
from uvr.service.access.maintenance import get_maintenance, get_maintenance_records, get_cheque
from uvr.views.base import BaseView
from uvr.views.decorators import match_getter
from uvr.views.utils import FAILURES, service_failure, query_flag


class TechnicianAssignmentSchema(Schema):
    technician_id = String(required=True)


class MaintenanceRecordsView(BaseView):
    """
    Gets the maintenance jobs, or schedules a new one.
    """
    url = "/maintenance"
    name = "maintenance"

    @docs(summary="Get All Maintenance")
    @returns(JSendSchema.of(maintenance=Many(MaintenanceSchema())))
    async def get(self):
        """Gets the maintenance jobs, or only those still open with ``?in_progress=true``."""
        records = await get_maintenance_records(in_progress=True if query_flag(self.request, "in_progress") else None)
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"maintenance": records}
        }

    @docs(summary="Schedule Maintenance")
    @expects(MaintenanceScheduleSchema())
    @returns(scheduled=(JSendSchema.of(maintenance=MaintenanceSchema()), HTTPStatus.CREATED), **FAILURES)
    async def post(self):
        data = self.request["data"]
        try:
            maintenance = await self.maintenance_manager.schedule(
                data["plate_id"], data["technician_id"], data["notes"], data.get("start_datetime"),
                maintenance_id=data.get("maintenance_id")
            )
        except ServiceError as error:
            return service_failure(error)

        return "scheduled", {
            "status": JSendStatus.SUCCESS,
            "data": {"maintenance": maintenance}
        }


class MaintenanceView(BaseView):
    url = "/maintenance/{maintenance_id}"
    name = "maintenance_job"
    with_maintenance = match_getter(get_maintenance, "maintenance", maintenance_id="maintenance_id")

    @with_maintenance
    @docs(summary="Get A Maintenance Job")
    @returns(JSendSchema.of(maintenance=MaintenanceSchema()))
    async def get(self, maintenance: Maintenance):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"maintenance": maintenance}
        }


class MaintenanceCompleteView(BaseView):
    url = "/maintenance/{maintenance_id}/complete"
    with_maintenance = match_getter(get_maintenance, "maintenance", maintenance_id="maintenance_id")

    @with_maintenance
    @docs(summary="Complete A Maintenance Job")
    @expects(MaintenanceCompleteSchema())
    @returns(completed=JSendSchema.of(maintenance=MaintenanceSchema()), **FAILURES)
    async def patch(self, maintenance: Maintenance):
        """
        Completes a job, taking the parts used out of stock and
        returning the vehicle to service. If any part is short
        of stock, nothing is changed.
        """
        data = self.request["data"]
        try:
            maintenance = await self.maintenance_manager.complete(
                maintenance, data.get("end_datetime"),
                [(part["part_id"], part["quantity"]) for part in data["parts_used"]],
                data.get("hours_worked")
            )
        except ServiceError as error:
            return service_failure(error)

        return "completed", {
            "status": JSendStatus.SUCCESS,
            "data": {"maintenance": maintenance}
        }


class MaintenanceTechnicianView(BaseView):
    url = "/maintenance/{maintenance_id}/technician"
    with_maintenance = match_getter(get_maintenance, "maintenance", maintenance_id="maintenance_id")

    @with_maintenance
    @docs(summary="Assign A Technician")
    @expects(TechnicianAssignmentSchema())
    @returns(assigned=JSendSchema.of(maintenance=MaintenanceSchema()), **FAILURES)
    async def put(self, maintenance: Maintenance):
        try:
            maintenance = await self.maintenance_manager.assign_technician(
                maintenance, self.request["data"]["technician_id"]
            )
        except ServiceError as error:
            return service_failure(error)

        return "assigned", {
            "status": JSendStatus.SUCCESS,
            "data": {"maintenance": maintenance}
        }


class MaintenancePartsView(BaseView):
    """
    Gets the parts used on a job, or adds one.
    """
    url = "/maintenance/{maintenance_id}/parts"
    with_maintenance = match_getter(get_maintenance, "maintenance", maintenance_id="maintenance_id")

    @with_maintenance
    @docs(summary="Get Parts Used On A Job")
    @returns(JSendSchema.of(parts=Many(MaintenanceChequeSchema())))
    async def get(self, maintenance: Maintenance):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"parts": await self.maintenance_manager.parts_used(maintenance)}
        }

    @with_maintenance
    @docs(summary="Add A Part To A Job")
    @expects(PartUsedSchema())
    @returns(added=(JSendSchema.of(parts=Many(MaintenanceChequeSchema())), HTTPStatus.CREATED), **FAILURES)
    async def post(self, maintenance: Maintenance):
        data = self.request["data"]
        try:
            await self.maintenance_manager.add_part(maintenance, data["part_id"], data["quantity"])
        except ServiceError as error:
            return service_failure(error)

        return "added", {
            "status": JSendStatus.SUCCESS,
            "data": {"parts": await self.maintenance_manager.parts_used(maintenance)}
        }


class MaintenancePartView(BaseView):
    """
    Changes a part used on a job.
    """
    url = "/maintenance/{maintenance_id}/parts/{part_id}"
    with_cheque = match_getter(get_cheque, "cheque", maintenance="maintenance_id", part="part_id")

    @with_cheque
    @docs(summary="Update A Part On A Job")
    @expects(PartUpdateOnJobSchema())
    @returns(updated=JSendSchema.of(parts=Many(MaintenanceChequeSchema())), **FAILURES)
    async def patch(self, cheque):
        """
        Send ``{"quantity": 3}`` to change how many were used,
        or ``{"active": false}`` to take the part off the job and back into stock.
        """
        data = self.request["data"]
        try:
            if "quantity" in data:
                await self.maintenance_manager.update_part_quantity(cheque.maintenance_id, cheque.part_id,
                                                                    data["quantity"])
            elif data["active"]:
                await self.maintenance_manager.reactivate_part(cheque.maintenance_id, cheque.part_id)
            else:
                await self.maintenance_manager.deactivate_part(cheque.maintenance_id, cheque.part_id)
        except ServiceError as error:
            return service_failure(error)

        return "updated", {
            "status": JSendStatus.SUCCESS,
            "data": {"parts": await self.maintenance_manager.parts_used(cheque.maintenance_id)}
        }


class MaintenanceCostView(BaseView):
    url = "/maintenance/{maintenance_id}/cost"
    with_maintenance = match_getter(get_maintenance, "maintenance", maintenance_id="maintenance_id")

    @with_maintenance
    @docs(summary="Get The Cost Of A Job")
    @returns(JSendSchema.of(cost=CostBreakdownSchema()))
    async def get(self, maintenance: Maintenance):
        """Breaks the cost of a job down into labor and parts."""
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"cost": await self.penalty_manager.get_maintenance_cost_breakdown(maintenance)}
        }
