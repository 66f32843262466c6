"""
Customer
---------------------------
"""
from tortoise import Model, fields

from uvr.models.util import RecordStatus


class Customer(Model):
    customer_id = fields.CharField(max_length=16, pk=True)
    first_name = fields.CharField(max_length=64)
    last_name = fields.CharField(max_length=64)
    contact_number = fields.CharField(max_length=32, null=True)
    email_address = fields.CharField(max_length=255, null=True)
    status = fields.CharEnumField(RecordStatus, max_length=16, default=RecordStatus.ACTIVE)

    class Meta:
        table = "customers"

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self):
        return f"{self.customer_id} ({self.full_name})"
