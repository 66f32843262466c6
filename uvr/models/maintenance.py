"""
Maintenance
---------------------------

A maintenance job on a vehicle, and the parts consumed by it.
The total cost is cached on the job and must be recalculated
whenever the parts used change.
"""
from datetime import datetime
from typing import Optional

from tortoise import Model, fields

from uvr.models.util import RecordStatus


class Maintenance(Model):
    maintenance_id = fields.CharField(max_length=16, pk=True)
    vehicle = fields.ForeignKeyField("models.Vehicle", related_name="maintenance")
    technician = fields.ForeignKeyField("models.Technician", related_name="maintenance", null=True)

    start_datetime: datetime = fields.DatetimeField()
    end_datetime: Optional[datetime] = fields.DatetimeField(null=True)
    notes = fields.TextField(default="")
    hours_worked = fields.DecimalField(max_digits=10, decimal_places=2, null=True)
    total_cost = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    status = fields.CharEnumField(RecordStatus, max_length=16, default=RecordStatus.ACTIVE)

    class Meta:
        table = "maintenance"

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.end_datetime is not None

    @property
    def is_in_progress(self) -> bool:
        return self.end_datetime is None

    def __str__(self):
        return f"{self.maintenance_id} on {self.vehicle_id}"


class MaintenanceCheque(Model):
    """A single part used on a maintenance job."""

    id = fields.IntField(pk=True)
    maintenance = fields.ForeignKeyField("models.Maintenance", related_name="cheques")
    part = fields.ForeignKeyField("models.Part", related_name="cheques")
    quantity_used = fields.IntField()
    status = fields.CharEnumField(RecordStatus, max_length=16, default=RecordStatus.ACTIVE)

    class Meta:
        table = "maintenance_cheque"
        unique_together = (("maintenance", "part"),)

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    def __str__(self):
        return f"{self.maintenance_id}: {self.part_id} x{self.quantity_used}"
