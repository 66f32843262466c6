"""
Model Serializers
-----------------

Defines serializers for the various models in the system. The schemas
dump the models directly, except for rentals which are serialized
through :meth:`~uvr.models.rental.Rental.serialize` first.
"""

from marshmallow import Schema
from marshmallow.fields import String, Email, DateTime, Date, Integer, Boolean, Url, Decimal

from uvr.models.util import VehicleStatus, RecordStatus, RentalState, PenaltyStatus, DeploymentStatus
from .fields import EnumField, Money


class VehicleSchema(Schema):
    """The schema corresponding to the :class:`~uvr.models.vehicle.Vehicle` model."""

    plate_id = String(required=True)
    vehicle_type = String(required=True)
    vehicle_model = String()
    rental_price = Money(required=True)
    status = EnumField(VehicleStatus)
    available = Boolean(attribute="is_available")


class CustomerSchema(Schema):
    customer_id = String(required=True)
    first_name = String(required=True)
    last_name = String(required=True)
    contact_number = String(allow_none=True)
    email_address = Email(allow_none=True)
    status = EnumField(RecordStatus)


class LocationSchema(Schema):
    location_id = String(required=True)
    name = String(required=True)
    status = EnumField(RecordStatus)


class TechnicianSchema(Schema):
    technician_id = String(required=True)
    first_name = String(required=True)
    last_name = String(required=True)
    specialization_id = String(allow_none=True)
    contact_number = String(allow_none=True)
    rate = Money(required=True)
    status = EnumField(RecordStatus)


class PartSchema(Schema):
    part_id = String(required=True)
    part_name = String(required=True)
    quantity = Integer(required=True)
    price = Money(required=True)
    status = EnumField(RecordStatus)


class RentalSchema(Schema):
    """The schema of :meth:`~uvr.models.rental.Rental.serialize`."""

    rental_id = String(required=True)

    customer_id = String(required=True)
    customer_url = Url(relative=True)

    plate_id = String(required=True)
    vehicle_url = Url(relative=True)

    location_id = String(required=True)

    pick_up_datetime = DateTime(required=True)
    start_datetime = DateTime(allow_none=True)
    end_datetime = DateTime(allow_none=True)
    state = EnumField(RentalState)
    status = EnumField(RecordStatus)


class PaymentSchema(Schema):
    payment_id = String(required=True)
    rental_id = String(required=True)
    amount = Money(required=True)
    payment_date = Date(required=True)
    status = EnumField(RecordStatus)


class MaintenanceSchema(Schema):
    maintenance_id = String(required=True)
    plate_id = String(attribute="vehicle_id", required=True)
    technician_id = String(allow_none=True)
    start_datetime = DateTime(required=True)
    end_datetime = DateTime(allow_none=True)
    notes = String()
    hours_worked = Decimal(places=2, as_string=True, allow_none=True)
    total_cost = Money()
    completed = Boolean(attribute="is_completed")
    status = EnumField(RecordStatus)


class MaintenanceChequeSchema(Schema):
    """A part used on a maintenance job. Dumped from cheques fetched with their part."""

    maintenance_id = String(required=True)
    part_id = String(required=True)
    part_name = String(attribute="part.part_name")
    price = Money(attribute="part.price")
    quantity_used = Integer(required=True)
    status = EnumField(RecordStatus)


class CostBreakdownSchema(Schema):
    labor_cost = Money(required=True)
    parts_cost = Money(required=True)
    total_cost = Money(required=True)


class PenaltySchema(Schema):
    penalty_id = String(required=True)
    rental_id = String(required=True)
    maintenance_id = String(allow_none=True)
    total_penalty = Money(required=True)
    penalty_status = EnumField(PenaltyStatus)
    date_issued = Date(required=True)
    status = EnumField(RecordStatus)


class DeploymentSchema(Schema):
    deployment_id = String(required=True)
    plate_id = String(attribute="vehicle_id", required=True)
    location_id = String(required=True)
    start_date = Date(required=True)
    end_date = Date(allow_none=True)
    status = EnumField(DeploymentStatus)
