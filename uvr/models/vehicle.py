"""
Vehicle
-------------------------

Represents a rentable vehicle, keyed by its plate. The vehicle status
tracks where it is in the fleet: free to rent, out with a customer,
in the workshop, or retired from circulation altogether.
"""
from tortoise import Model, fields

from uvr.models.util import VehicleStatus


class Vehicle(Model):
    plate_id = fields.CharField(max_length=16, pk=True)
    vehicle_type = fields.CharField(max_length=64)
    vehicle_model = fields.CharField(max_length=128, default="")
    status = fields.CharEnumField(VehicleStatus, max_length=16, default=VehicleStatus.AVAILABLE)

    rental_price = fields.DecimalField(max_digits=10, decimal_places=2)
    """The daily rental rate."""

    class Meta:
        table = "vehicles"

    @property
    def is_active(self) -> bool:
        """Inactive vehicles are excluded from every workflow."""
        return self.status != VehicleStatus.INACTIVE

    @property
    def is_available(self) -> bool:
        return self.status == VehicleStatus.AVAILABLE

    def __str__(self):
        return f"[{self.vehicle_type}] {self.plate_id}"
