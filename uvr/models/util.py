from datetime import datetime
from enum import Enum
from typing import Union

from tortoise import Model, timezone


class RecordStatus(str, Enum):
    """The soft-delete flag carried by every table. We subclass string to make json serialization work."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class VehicleStatus(str, Enum):
    AVAILABLE = "Available"
    IN_USE = "In Use"
    MAINTENANCE = "Maintenance"
    INACTIVE = "Inactive"


class RentalState(str, Enum):
    """The lifecycle state of a rental, derived from its timestamps and status."""
    BOOKED = "booked"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PenaltyStatus(str, Enum):
    UNPAID = "UNPAID"
    PAID = "PAID"


class DeploymentStatus(str, Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @staticmethod
    def terminating_types():
        """The statuses that close a deployment."""
        return DeploymentStatus.COMPLETED, DeploymentStatus.CANCELLED


def resolve_id(target: Union[Model, str]) -> str:
    if isinstance(target, Model):
        return target.pk
    elif isinstance(target, str):
        return target
    else:
        raise TypeError(f"Target {target} is neither a Model or a str.")


def aware(value: datetime) -> datetime:
    """Attaches the default timezone to naive datetimes so they compare with the ones from the database."""
    if value is not None and timezone.is_naive(value):
        return timezone.make_aware(value)
    return value
