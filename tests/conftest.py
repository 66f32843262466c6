import os
from datetime import timedelta
from decimal import Decimal
from itertools import count

import pytest
from aiohttp import web
from aiohttp.test_utils import TestClient
from faker import Faker
from faker.providers import address, internet, person, phone_number, lorem
from tortoise import Tortoise, timezone

from uvr.models import Vehicle, Customer, Location, Technician, Part, Rental
from uvr.service import RentalManager, PaymentManager, MaintenanceManager, PenaltyManager, DeploymentManager, \
    Reporter
from uvr.service.access.customers import create_customer
from uvr.service.access.locations import create_location
from uvr.service.access.parts import create_part
from uvr.service.access.technicians import create_technician
from uvr.service.access.vehicles import create_vehicle
from uvr.signals import register_signals
from uvr.views import register_views

fake = Faker()
fake.add_provider(address)
fake.add_provider(internet)
fake.add_provider(person)
fake.add_provider(phone_number)
fake.add_provider(lorem)

VEHICLE_TYPES = ("Sedan", "SUV", "Van", "Pickup", "Motorcycle")


@pytest.fixture(scope="session")
def database_url():
    return os.getenv("DATABASE_URL", "sqlite://:memory:")


@pytest.fixture
async def database(database_url):
    """Gives each test a fresh database."""
    await Tortoise.init(
        db_url=database_url,
        modules={'models': ['uvr.models']},
        _create_db=not database_url.endswith(":memory:")
    )
    await Tortoise.generate_schemas()
    yield
    if not database_url.endswith(":memory:"):
        await Tortoise._drop_databases()
    else:
        await Tortoise.close_connections()


@pytest.fixture
def payment_manager(database):
    return PaymentManager()


@pytest.fixture
def rental_manager(database, payment_manager):
    return RentalManager(payment_manager)


@pytest.fixture
def maintenance_manager(database):
    return MaintenanceManager()


@pytest.fixture
def penalty_manager(database, maintenance_manager):
    return PenaltyManager(maintenance_manager)


@pytest.fixture
def deployment_manager(database):
    return DeploymentManager()


@pytest.fixture
def reporter(database):
    return Reporter()


@pytest.fixture
async def client(
    aiohttp_client, database,
    rental_manager, payment_manager, maintenance_manager, penalty_manager, deployment_manager, reporter
) -> TestClient:
    app = web.Application()

    app['payment_manager'] = payment_manager
    app['rental_manager'] = rental_manager
    app['maintenance_manager'] = maintenance_manager
    app['penalty_manager'] = penalty_manager
    app['deployment_manager'] = deployment_manager
    app['reporter'] = reporter

    register_signals(app, init_database=False)  # we get the database from a fixture
    register_views(app, "/api/v1")

    return await aiohttp_client(app)


@pytest.fixture
def random_vehicle_factory(database):
    plate_number = count(1)

    async def create(rental_price=Decimal("1500.00"), **kwargs):
        return await create_vehicle(
            plate_id=f"{fake.lexify('???').upper()}-{next(plate_number):03d}",
            vehicle_type=fake.random_element(VEHICLE_TYPES),
            vehicle_model=fake.last_name(),
            rental_price=rental_price,
            **kwargs
        )

    return create


@pytest.fixture
def random_customer_factory(database):
    async def create():
        return await create_customer(
            fake.first_name(), fake.last_name(), fake.numerify("09#########"), fake.email()
        )

    return create


@pytest.fixture
def random_part_factory(database):
    async def create(price=Decimal("150.00"), quantity=10):
        return await create_part(fake.word().title(), price, quantity)

    return create


@pytest.fixture
async def random_vehicle(random_vehicle_factory) -> Vehicle:
    """Creates a random vehicle in the database."""
    return await random_vehicle_factory()


@pytest.fixture
async def random_customer(random_customer_factory) -> Customer:
    """Creates a random customer in the database."""
    return await random_customer_factory()


@pytest.fixture
async def random_location(database) -> Location:
    return await create_location(fake.city())


@pytest.fixture
async def random_technician(database) -> Technician:
    return await create_technician(fake.first_name(), fake.last_name(), Decimal("350.00"), "SPEC-01")


@pytest.fixture
async def random_part(random_part_factory) -> Part:
    return await random_part_factory()


@pytest.fixture
async def random_booking(rental_manager, random_customer, random_vehicle, random_location) -> Rental:
    """Books the random vehicle for the random customer, to be picked up tomorrow."""
    return await rental_manager.book(
        random_customer, random_vehicle, random_location, timezone.now() + timedelta(days=1)
    )


@pytest.fixture
async def random_rental(rental_manager, random_booking) -> Rental:
    """Creates a rental whose vehicle has been picked up."""
    return await rental_manager.start(random_booking)
