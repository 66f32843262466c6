"""
.. autoclasstree:: uvr.views

This package contains the server API for managing the fleet,
the customers, and the rentals, maintenance and deployments.

API Conventions
---------------

The routes are organised by resource (vehicles, customers, rentals and so on),
keyed by the record ids such as ``/vehicles/ABC-123`` or ``/rentals/RNT-001``.
Request and response bodies are JSON with snake_case keys, lists are filtered
with the query string, and lifecycle changes are PATCHes to an action
below the record, as in ``PATCH /rentals/RNT-001/start``.

API Expected Responses
----------------------

The server responds with JSend formatted JSON to all GET, POST, PUT and PATCH requests.
Rejected operations respond with a ``fail``: 404 when something does not exist,
409 when it is in the wrong state, and 400 when the request breaks a rule.
DELETE requests that deactivate a record respond with a 204 no content, except for
cancelling a penalty which returns the cancelled penalty.
"""

import aiohttp_cors
from aiohttp.abc import Application

from uvr import logger
from .customers import CustomersView, CustomerView, CustomerRentalsView, CustomerPenaltiesView
from .deployments import DeploymentsView, DeploymentView, DeploymentActionView
from .locations import LocationsView, LocationView, LocationDeploymentsView
from .maintenance import MaintenanceRecordsView, MaintenanceView, MaintenanceCompleteView, MaintenanceTechnicianView, \
    MaintenancePartsView, MaintenancePartView, MaintenanceCostView
from .parts import PartsView, PartView
from .payments import PaymentsView, PaymentView
from .penalties import PenaltiesView, PenaltyView
from .rentals import RentalsView, RentalView, RentalPaymentView, RentalPenaltiesView, RentalActionView
from .reports import RevenueReportView, DefectiveVehicleReportView, LocationReportView, CustomerReportView
from .technicians import TechniciansView, TechnicianView, TechnicianMaintenanceView
from .vehicles import VehiclesView, VehicleView, VehicleAvailabilityView, VehicleRentalsView, VehicleMaintenanceView, \
    VehicleDeploymentsView, VehicleDefectView

views = [
    VehiclesView, VehicleView, VehicleAvailabilityView, VehicleRentalsView, VehicleMaintenanceView,
    VehicleDeploymentsView, VehicleDefectView,
    CustomersView, CustomerView, CustomerRentalsView, CustomerPenaltiesView,
    LocationsView, LocationView, LocationDeploymentsView,
    PartsView, PartView,
    TechniciansView, TechnicianView, TechnicianMaintenanceView,
    # the payment and penalty routes must be matched before the rental actions
    RentalsView, RentalView, RentalPaymentView, RentalPenaltiesView, RentalActionView,
    PaymentsView, PaymentView,
    MaintenanceRecordsView, MaintenanceView, MaintenanceCompleteView, MaintenanceTechnicianView,
    MaintenancePartsView, MaintenancePartView, MaintenanceCostView,
    PenaltiesView, PenaltyView,
    DeploymentsView, DeploymentView, DeploymentActionView,
    RevenueReportView, DefectiveVehicleReportView, LocationReportView, CustomerReportView,
]


def register_views(app: Application, base: str):
    """
    Registers all the API views onto the given router at a specific root url.

    :param app: The app to register the views to.
    :param base: The base URL.
    """
    cors = aiohttp_cors.setup(app, defaults={
        "*": aiohttp_cors.ResourceOptions(
            allow_credentials=True,
            expose_headers="*",
            allow_headers="*",
            allow_methods="*",
        )
    })

    for view in views:
        logger.info("Registered %s at %s", view.__name__, base + view.url)
        view.register_route(app, base)
        view.enable_cors(cors)
