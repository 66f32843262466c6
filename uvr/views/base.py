"""
Base
------------------------

The base view for the API. Every view is handed the managers
through :class:`Service` attributes, which read them off the
app that is serving the request.
"""

from typing import Optional

from aiohttp.abc import Application
from aiohttp.web import View, AbstractRoute
from aiohttp_cors import CorsConfig, CorsViewMixin, ResourceOptions

from uvr.service import RentalManager, PaymentManager, MaintenanceManager, PenaltyManager, DeploymentManager, \
    Reporter


class ViewConfigurationError(Exception):
    """
    Raised if the view doesn't provide a URL, or is used before it is registered.
    """


class Service:
    """Looks up a service by its key on the app of the current request."""

    def __init__(self, key: str):
        self.key = key

    def __get__(self, view: Optional[View], owner=None):
        if view is None:
            return self
        return view.request.app[self.key]


class BaseView(View, CorsViewMixin):
    """
    The base view that all other views extend.
    """

    url: str
    name: Optional[str]
    route: AbstractRoute

    rental_manager: RentalManager = Service("rental_manager")
    payment_manager: PaymentManager = Service("payment_manager")
    maintenance_manager: MaintenanceManager = Service("maintenance_manager")
    penalty_manager: PenaltyManager = Service("penalty_manager")
    deployment_manager: DeploymentManager = Service("deployment_manager")
    reporter: Reporter = Service("reporter")

    cors_config = {
        "*": ResourceOptions(
            allow_credentials=True,
            expose_headers="*",
            allow_headers="*",
            allow_methods="*",
        )
    }

    @classmethod
    def register_route(cls, app: Application, base: str = ""):
        """
        Adds the view to the router of the app under the base url, by its name if it has one.

        :raises ViewConfigurationError: If the URL hasn't been set on the given view.
        """
        if not hasattr(cls, "url"):
            raise ViewConfigurationError(f"{cls.__name__} has no url.")

        name = getattr(cls, "name", None)
        cls.route = app.router.add_view(base + cls.url, cls, **({"name": name} if name is not None else {}))

    @classmethod
    def enable_cors(cls, cors: CorsConfig):
        if not hasattr(cls, "route"):
            raise ViewConfigurationError(f"Register {cls.__name__} before enabling CORS on it.")
        cors.add(cls.route, webview=True)
