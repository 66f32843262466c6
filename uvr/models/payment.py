"""
Payment
---------------------------
"""
from tortoise import Model, fields

from uvr.models.util import RecordStatus


class Payment(Model):
    payment_id = fields.CharField(max_length=32, pk=True)
    rental = fields.ForeignKeyField("models.Rental", related_name="payments")
    amount = fields.DecimalField(max_digits=10, decimal_places=2, default=0)
    payment_date = fields.DateField()
    status = fields.CharEnumField(RecordStatus, max_length=16, default=RecordStatus.ACTIVE)

    class Meta:
        table = "payments"

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    def __str__(self):
        return f"{self.payment_id} ({self.amount} for {self.rental_id})"
