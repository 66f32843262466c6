"""
Vehicle Related Views
-------------------------

Handles all the vehicle CRUD, and the history of each vehicle.
"""
from http import HTTPStatus

from aiohttp import web
from aiohttp_apispec import docs
from marshmallow.fields import Boolean, Nested

from uvr.models import Vehicle
from uvr.models.util import VehicleStatus
from uvr.serializer import JSendSchema, JSendStatus, Many, Money
from uvr.serializer.decorators import returns, expects
from uvr.serializer.misc import VehicleCreateSchema, VehicleUpdateSchema, DefectSchema
from uvr.serializer.models import VehicleSchema, RentalSchema, MaintenanceSchema, DeploymentSchema
from uvr.service import ServiceError
from uvr.service.access.vehicles import get_vehicles, get_vehicle, create_vehicle, update_vehicle, deactivate_vehicle
from uvr.views.base import BaseView
from uvr.views.decorators import match_getter
from uvr.views.utils import FAILURES, service_failure, query_flag


class VehiclesView(BaseView):
    """
    Gets the vehicles, or adds a new vehicle.
    """
    url = "/vehicles"
    name = "vehicles"

    @docs(summary="Get All Vehicles")
    @returns(
        bad_status=(JSendSchema(), HTTPStatus.BAD_REQUEST),
        vehicles=JSendSchema.of(vehicles=Many(VehicleSchema()))
    )
    async def get(self):
        """
        Gets the vehicles in the system. Filter them with
        ``?status=Available`` or include retired ones with ``?include_inactive=true``.
        """
        status = self.request.query.get("status")
        if status is not None:
            try:
                status = VehicleStatus(status)
            except ValueError:
                return "bad_status", {
                    "status": JSendStatus.FAIL,
                    "data": {
                        "message": f"Invalid status. Pick between {', '.join(s.value for s in VehicleStatus)}.",
                    }
                }

        vehicles = await get_vehicles(status=status, include_inactive=query_flag(self.request, "include_inactive"))
        return "vehicles", {
            "status": JSendStatus.SUCCESS,
            "data": {"vehicles": vehicles}
        }

    @docs(summary="Add A Vehicle")
    @expects(VehicleCreateSchema())
    @returns(
        vehicle_exists=(JSendSchema(), HTTPStatus.CONFLICT),
        created=(JSendSchema.of(vehicle=VehicleSchema()), HTTPStatus.CREATED)
    )
    async def post(self):
        data = self.request["data"]

        if await get_vehicle(data["plate_id"]) is not None:
            return "vehicle_exists", {
                "status": JSendStatus.FAIL,
                "data": {"message": f"Vehicle {data['plate_id']} is already registered."}
            }

        vehicle = await create_vehicle(**data)
        return "created", {
            "status": JSendStatus.SUCCESS,
            "data": {"vehicle": vehicle}
        }


class VehicleView(BaseView):
    """
    Gets, updates or retires a single vehicle.
    """
    url = "/vehicles/{plate_id}"
    name = "vehicle"
    with_vehicle = match_getter(get_vehicle, "vehicle", plate_id="plate_id")

    @with_vehicle
    @docs(summary="Get A Vehicle")
    @returns(JSendSchema.of(vehicle=VehicleSchema()))
    async def get(self, vehicle: Vehicle):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"vehicle": vehicle}
        }

    @with_vehicle
    @docs(summary="Update A Vehicle")
    @expects(VehicleUpdateSchema())
    @returns(JSendSchema.of(vehicle=VehicleSchema()))
    async def patch(self, vehicle: Vehicle):
        vehicle = await update_vehicle(vehicle, **self.request["data"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"vehicle": vehicle}
        }

    @with_vehicle
    @docs(summary="Retire A Vehicle")
    async def delete(self, vehicle: Vehicle):
        """Marks a vehicle inactive, taking it out of every workflow."""
        await deactivate_vehicle(vehicle)
        raise web.HTTPNoContent


class VehicleAvailabilityView(BaseView):
    """
    Checks whether a vehicle can be booked.
    """
    url = "/vehicles/{plate_id}/availability"
    with_vehicle = match_getter(get_vehicle, "vehicle", plate_id="plate_id")

    @with_vehicle
    @docs(summary="Check Vehicle Availability")
    @returns(JSendSchema.of(available=Boolean()))
    async def get(self, vehicle: Vehicle):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"available": await self.rental_manager.check_vehicle_availability(vehicle)}
        }


class VehicleRentalsView(BaseView):
    """
    Gets the rentals of a vehicle.
    """
    url = "/vehicles/{plate_id}/rentals"
    with_vehicle = match_getter(get_vehicle, "vehicle", plate_id="plate_id")

    @with_vehicle
    @docs(summary="Get Rentals For Vehicle")
    @returns(JSendSchema.of(rentals=Many(RentalSchema())))
    async def get(self, vehicle: Vehicle):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"rentals": [
                rental.serialize(self.request.app.router)
                for rental in await self.rental_manager.rentals_for_vehicle(vehicle)
            ]}
        }


class VehicleMaintenanceView(BaseView):
    """
    Gets the maintenance history of a vehicle.
    """
    url = "/vehicles/{plate_id}/maintenance"
    with_vehicle = match_getter(get_vehicle, "vehicle", plate_id="plate_id")

    @with_vehicle
    @docs(summary="Get Maintenance For Vehicle")
    @returns(JSendSchema.of(maintenance=Many(MaintenanceSchema()), total_cost=Money()))
    async def get(self, vehicle: Vehicle):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {
                "maintenance": await self.maintenance_manager.maintenance_history(vehicle),
                "total_cost": await self.maintenance_manager.vehicle_total_maintenance_cost(vehicle),
            }
        }


class VehicleDeploymentsView(BaseView):
    """
    Gets where a vehicle has been deployed, and where it is now.
    """
    url = "/vehicles/{plate_id}/deployments"
    with_vehicle = match_getter(get_vehicle, "vehicle", plate_id="plate_id")

    @with_vehicle
    @docs(summary="Get Deployments For Vehicle")
    @returns(JSendSchema.of(
        deployments=Many(DeploymentSchema()),
        current=Nested(DeploymentSchema(), allow_none=True)
    ))
    async def get(self, vehicle: Vehicle):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {
                "deployments": await self.deployment_manager.vehicle_deployment_history(vehicle),
                "current": await self.deployment_manager.current_deployment(vehicle),
            }
        }


class VehicleDefectView(BaseView):
    """
    Reports a vehicle as defective, taking it in for maintenance.
    """
    url = "/vehicles/{plate_id}/defect"
    with_vehicle = match_getter(get_vehicle, "vehicle", plate_id="plate_id")

    @with_vehicle
    @docs(summary="Flag Vehicle As Defective")
    @expects(DefectSchema())
    @returns(flagged=(JSendSchema.of(maintenance=MaintenanceSchema()), HTTPStatus.CREATED), **FAILURES)
    async def post(self, vehicle: Vehicle):
        data = self.request["data"]
        try:
            maintenance = await self.maintenance_manager.flag_vehicle_as_defective(
                vehicle, data["notes"], data.get("technician_id"), data.get("start_datetime")
            )
        except ServiceError as error:
            return service_failure(error)

        return "flagged", {
            "status": JSendStatus.SUCCESS,
            "data": {"maintenance": maintenance}
        }
