"""
Request Serializers
-------------------

The schemas of the bodies accepted by the API.
"""

from marshmallow import Schema, validates_schema, ValidationError
from marshmallow.fields import String, Email, DateTime, Date, Integer, Boolean, Nested, Decimal
from marshmallow.validate import Range, Length

from uvr.models.util import PenaltyStatus
from .fields import EnumField, Money

POSITIVE = Range(min=0, min_inclusive=False)


class VehicleCreateSchema(Schema):
    plate_id = String(required=True, validate=Length(min=1, max=16), metadata={"description": "The licence plate."})
    vehicle_type = String(required=True)
    vehicle_model = String(load_default="")
    rental_price = Money(required=True, validate=POSITIVE, metadata={"description": "The daily rate."})


class VehicleUpdateSchema(Schema):
    vehicle_type = String()
    vehicle_model = String()
    rental_price = Money(validate=POSITIVE)


class CustomerCreateSchema(Schema):
    first_name = String(required=True)
    last_name = String(required=True)
    contact_number = String(allow_none=True)
    email_address = Email(allow_none=True)


class CustomerUpdateSchema(Schema):
    first_name = String()
    last_name = String()
    contact_number = String(allow_none=True)
    email_address = Email(allow_none=True)


class LocationCreateSchema(Schema):
    name = String(required=True, validate=Length(min=1))


class PartCreateSchema(Schema):
    part_id = String(validate=Length(min=1, max=16))
    part_name = String(required=True)
    price = Money(required=True, validate=POSITIVE)
    quantity = Integer(load_default=0, validate=Range(min=0))


class PartUpdateSchema(Schema):
    part_name = String()
    price = Money(validate=POSITIVE)
    quantity = Integer(validate=Range(min=0))


class TechnicianCreateSchema(Schema):
    first_name = String(required=True)
    last_name = String(required=True)
    rate = Money(required=True, validate=POSITIVE, metadata={"description": "The hourly rate."})
    specialization_id = String(allow_none=True)
    contact_number = String(allow_none=True)


class TechnicianUpdateSchema(Schema):
    first_name = String()
    last_name = String()
    rate = Money(validate=POSITIVE)
    specialization_id = String(allow_none=True)
    contact_number = String(allow_none=True)


class BookingSchema(Schema):
    """The schema of a booking request."""
    customer_id = String(required=True)
    plate_id = String(required=True)
    location_id = String(required=True)
    pick_up_datetime = DateTime(required=True)


class PaymentCreateSchema(Schema):
    payment_id = String(validate=Length(min=1, max=32))
    rental_id = String(required=True)
    amount = Money(required=True, validate=POSITIVE)
    payment_date = Date()


class MaintenanceScheduleSchema(Schema):
    maintenance_id = String(validate=Length(min=1, max=16))
    plate_id = String(required=True)
    technician_id = String(required=True)
    notes = String(load_default="")
    start_datetime = DateTime()


class DefectSchema(Schema):
    notes = String(required=True)
    technician_id = String(allow_none=True)
    start_datetime = DateTime()


class PartUsedSchema(Schema):
    part_id = String(required=True)
    quantity = Integer(required=True, validate=Range(min=1))


class MaintenanceCompleteSchema(Schema):
    end_datetime = DateTime()
    hours_worked = Decimal(places=2, validate=Range(min=0))
    parts_used = Nested(PartUsedSchema, many=True, load_default=list)


class PartUpdateOnJobSchema(Schema):
    """Changes the quantity of a part used on a job, or takes it off or puts it back on the job."""
    quantity = Integer(validate=Range(min=1))
    active = Boolean()

    @validates_schema
    def assert_one_change(self, data, **kwargs):
        if len(data) != 1:
            raise ValidationError("Send exactly one of quantity or active.")


class PenaltyCreateSchema(Schema):
    penalty_id = String(validate=Length(min=1, max=16))
    rental_id = String(required=True)
    maintenance_id = String(required=True)
    date_issued = Date()


class PenaltyUpdateSchema(Schema):
    penalty_status = EnumField(PenaltyStatus, required=True)


class DeploymentCreateSchema(Schema):
    plate_id = String(required=True)
    location_id = String(required=True)
