"""
Location
---------------------------

A branch that vehicles are rented from and deployed to.
"""
from tortoise import Model, fields

from uvr.models.util import RecordStatus


class Location(Model):
    location_id = fields.CharField(max_length=16, pk=True)
    name = fields.CharField(max_length=128)
    status = fields.CharEnumField(RecordStatus, max_length=16, default=RecordStatus.ACTIVE)

    class Meta:
        table = "locations"

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    def __str__(self):
        return f"{self.location_id} ({self.name})"
