"""
The models package contains all the models used on the server.

.. autoclasstree:: uvr.models
"""

from .customer import Customer
from .deployment import Deployment
from .location import Location
from .maintenance import Maintenance, MaintenanceCheque
from .part import Part
from .payment import Payment
from .penalty import Penalty
from .rental import Rental
from .technician import Technician
from .vehicle import Vehicle
