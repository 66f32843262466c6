"""
Part
---------------------------

An inventory line. The quantity is the number of units on hand
and is only ever changed through conditional updates so that it
cannot drop below zero.
"""
from tortoise import Model, fields

from uvr.models.util import RecordStatus


class Part(Model):
    part_id = fields.CharField(max_length=16, pk=True)
    part_name = fields.CharField(max_length=128)
    quantity = fields.IntField(default=0)
    price = fields.DecimalField(max_digits=10, decimal_places=2)
    status = fields.CharEnumField(RecordStatus, max_length=16, default=RecordStatus.ACTIVE)

    class Meta:
        table = "parts"

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    def __str__(self):
        return f"{self.part_id} ({self.part_name} x{self.quantity})"
