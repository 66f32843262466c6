"""
Deployment
---------------------------

Records which branch a vehicle is stationed at, as a start
and end date. A deployment with no end date is the current one.
"""
from datetime import date
from typing import Optional

from tortoise import Model, fields

from uvr.models.util import DeploymentStatus


class Deployment(Model):
    deployment_id = fields.CharField(max_length=16, pk=True)
    vehicle = fields.ForeignKeyField("models.Vehicle", related_name="deployments")
    location = fields.ForeignKeyField("models.Location", related_name="deployments")
    start_date: date = fields.DateField()
    end_date: Optional[date] = fields.DateField(null=True)
    status = fields.CharEnumField(DeploymentStatus, max_length=16, default=DeploymentStatus.ACTIVE)

    class Meta:
        table = "deployments"

    @property
    def is_current(self) -> bool:
        return self.end_date is None and self.status == DeploymentStatus.ACTIVE

    def __str__(self):
        return f"{self.deployment_id}: {self.vehicle_id} at {self.location_id}"
