"""
Signals
-------

Hooks that open the database when the app starts, report
on the work left open since the last run, and close the
database again on the way down.

Each signal must accept an the ``app`` argument.
"""

from aiohttp.abc import Application
from tortoise import Tortoise

from uvr import logger


async def initialize_database(app: Application):
    """Connects to the database, creating any tables that are missing."""
    logger.info("Connecting to %s", app['database_uri'])
    await Tortoise.init(
        db_url=app['database_uri'],
        modules={'models': ['uvr.models']}
    )
    await Tortoise.generate_schemas(safe=True)


async def report_open_work(app: Application):
    """Logs the rentals and deployments still open from the last run."""
    active = await app['rental_manager'].active_rentals()
    booked = await app['rental_manager'].booked_rentals()
    deployed = await app['deployment_manager'].active_deployments()
    logger.info("Resuming with %s vehicles out, %s bookings waiting and %s deployments",
                len(active), len(booked), len(deployed))


async def close_database_connections(app: Application):
    await Tortoise.close_connections()


def register_signals(app, init_database=True):
    """Registers all the signals at the appropriate hooks."""
    if init_database:
        app.on_startup.append(initialize_database)
        app.on_cleanup.append(close_database_connections)

    app.on_startup.append(report_open_work)  # after the database is up
