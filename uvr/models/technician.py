"""
Technician
---------------------------
"""
from tortoise import Model, fields

from uvr.models.util import RecordStatus


class Technician(Model):
    technician_id = fields.CharField(max_length=16, pk=True)
    first_name = fields.CharField(max_length=64)
    last_name = fields.CharField(max_length=64)
    specialization_id = fields.CharField(max_length=16, null=True)
    contact_number = fields.CharField(max_length=32, null=True)
    status = fields.CharEnumField(RecordStatus, max_length=16, default=RecordStatus.ACTIVE)

    rate = fields.DecimalField(max_digits=10, decimal_places=2)
    """The hourly labor rate."""

    class Meta:
        table = "technicians"

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    def __str__(self):
        return f"{self.technician_id} ({self.first_name} {self.last_name})"
