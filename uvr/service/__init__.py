"""
.. autoclasstree:: uvr.service

The service layer for the system. Acts as the internal API.
The REST API uses the service layer to implement its logic.

The service layer implements the use cases for the system, such
that they may be reused by any program that needs to access it.
It is designed to represent the business logic.
"""

from .errors import ServiceError, NotFoundError, InvalidStateError, ValidationError, PersistenceError
from .manager.deployment_manager import DeploymentManager
from .manager.maintenance_manager import MaintenanceManager
from .manager.payment_manager import PaymentManager
from .manager.penalty_manager import PenaltyManager
from .manager.rental_manager import RentalManager
from .reporter import Reporter
