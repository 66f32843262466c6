"""
Rental
---------------------------

A rental moves through its lifecycle purely by its timestamps:
it is booked with only a pick up time, becomes active once the
vehicle is picked up (``start_datetime``), and completes when it
is returned (``end_datetime``). Cancelled bookings are retained
with their status set to inactive.
"""

from datetime import datetime
from typing import Dict, Any, Optional

from tortoise import Model, fields

from uvr.models.util import RecordStatus, RentalState


class Rental(Model):
    rental_id = fields.CharField(max_length=16, pk=True)
    customer = fields.ForeignKeyField("models.Customer", related_name="rentals")
    vehicle = fields.ForeignKeyField("models.Vehicle", related_name="rentals")
    location = fields.ForeignKeyField("models.Location", related_name="rentals")

    pick_up_datetime: datetime = fields.DatetimeField()
    start_datetime: Optional[datetime] = fields.DatetimeField(null=True)
    end_datetime: Optional[datetime] = fields.DatetimeField(null=True)
    status = fields.CharEnumField(RecordStatus, max_length=16, default=RecordStatus.ACTIVE)

    class Meta:
        table = "rentals"

    @property
    def state(self) -> RentalState:
        if self.end_datetime is not None:
            return RentalState.COMPLETED
        elif self.status == RecordStatus.INACTIVE:
            return RentalState.CANCELLED
        elif self.start_datetime is None:
            return RentalState.BOOKED
        else:
            return RentalState.ACTIVE

    @property
    def is_ongoing(self) -> bool:
        """A rental is ongoing between booking and return."""
        return self.state in (RentalState.BOOKED, RentalState.ACTIVE)

    def serialize(self, router=None) -> Dict[str, Any]:
        data = {
            "rental_id": self.rental_id,
            "customer_id": self.customer_id,
            "plate_id": self.vehicle_id,
            "location_id": self.location_id,
            "pick_up_datetime": self.pick_up_datetime,
            "start_datetime": self.start_datetime,
            "end_datetime": self.end_datetime,
            "state": self.state,
            "status": self.status,
        }

        if router is not None:
            data["vehicle_url"] = router["vehicle"].url_for(plate_id=str(self.vehicle_id)).path
            data["customer_url"] = router["customer"].url_for(customer_id=str(self.customer_id)).path

        return data

    def __str__(self):
        return f"{self.rental_id} [{self.state.value}]"
