"""
App
-----
"""

import sentry_sdk
from aiohttp import web
from aiohttp_apispec import setup_aiohttp_apispec
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from uvr import logger
from uvr.config import server_mode, database_url, sentry_dsn, api_root
from uvr.service import RentalManager, PaymentManager, MaintenanceManager, PenaltyManager, DeploymentManager, \
    Reporter
from uvr.signals import register_signals
from uvr.version import __version__, name
from uvr.views import register_views


def build_app(db_uri=None):
    """Sets up the app with its services, signals and views."""
    app = web.Application()

    app['payment_manager'] = PaymentManager()
    app['rental_manager'] = RentalManager(app['payment_manager'])
    app['maintenance_manager'] = MaintenanceManager()
    app['penalty_manager'] = PenaltyManager(app['maintenance_manager'])
    app['deployment_manager'] = DeploymentManager()
    app['reporter'] = Reporter()
    app['database_uri'] = db_uri if db_uri is not None else database_url

    register_signals(app)
    register_views(app, api_root)

    setup_aiohttp_apispec(
        app=app, title=name, version=__version__, url=f"{api_root}/docs",
        info={"description": "Manages the vehicles, customers, rentals and maintenance of a rental fleet."},
    )

    # set up sentry exception tracking
    if server_mode != "development" and sentry_dsn is not None:
        logger.info("Starting Sentry Logging")
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=server_mode,
            release=f"{name}@{__version__}",
            integrations=[AioHttpIntegration()]
        )

    return app
