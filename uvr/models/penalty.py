"""
Penalty
---------------------------

A charge levied against the customer of a rental, priced
from the maintenance job that repaired the damage.
"""
from tortoise import Model, fields

from uvr.models.util import RecordStatus, PenaltyStatus


class Penalty(Model):
    penalty_id = fields.CharField(max_length=16, pk=True)
    rental = fields.ForeignKeyField("models.Rental", related_name="penalties")
    maintenance = fields.ForeignKeyField("models.Maintenance", related_name="penalties", null=True)

    total_penalty = fields.DecimalField(max_digits=12, decimal_places=2)
    """Copied from the maintenance cost when issued and never recalculated."""

    penalty_status = fields.CharEnumField(PenaltyStatus, max_length=8, default=PenaltyStatus.UNPAID)
    date_issued = fields.DateField()
    status = fields.CharEnumField(RecordStatus, max_length=16, default=RecordStatus.ACTIVE)

    class Meta:
        table = "penalty"

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    @property
    def is_paid(self) -> bool:
        return self.penalty_status == PenaltyStatus.PAID

    def __str__(self):
        return f"{self.penalty_id} ({self.total_penalty}, {self.penalty_status.value})"
