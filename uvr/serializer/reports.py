"""
Report Serializers
------------------
"""

from marshmallow import Schema
from marshmallow.fields import String, Date, DateTime, Integer, Nested, Decimal

from .fields import Money


class MonthlyRevenueSchema(Schema):
    month = Date(required=True)
    completed_rentals = Integer(required=True)
    revenue = Money(required=True)


class RevenueReportSchema(Schema):
    months = Nested(MonthlyRevenueSchema, many=True)
    total_rentals = Integer(required=True)
    total_revenue = Money(required=True)


class DefectiveVehicleSchema(Schema):
    plate_id = String(required=True)
    times_maintained = Integer(required=True)
    total_maintenance_cost = Money(required=True)
    first_maintenance = DateTime(required=True)
    rentals_before_maintenance = Integer(required=True)
    rentals_after_maintenance = Integer(required=True)
    rental_revenue = Money(required=True)


class LocationFrequencySchema(Schema):
    location_id = String(required=True)
    name = String(allow_none=True)
    rentals = Integer(required=True)


class CustomerRentalSchema(Schema):
    customer_id = String(required=True)
    name = String(required=True)
    rentals = Integer(required=True)
    total_paid = Money(required=True)
    total_hours = Decimal(places=2, as_string=True, required=True)
    penalties = Integer(required=True)
    total_penalties = Money(required=True)
