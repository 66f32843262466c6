"""
Customer Related Views
-------------------------

Handles all the customer CRUD, and the customer's rentals and penalties.
"""
from http import HTTPStatus

from aiohttp import web
from aiohttp_apispec import docs

from uvr.models import Customer
from uvr.serializer import JSendSchema, JSendStatus, Many, Money
from uvr.serializer.decorators import returns, expects
from uvr.serializer.misc import CustomerCreateSchema, CustomerUpdateSchema
from uvr.serializer.models import CustomerSchema, RentalSchema, PenaltySchema
from uvr.service.access.customers import get_customers, get_customer, create_customer, update_customer, \
    deactivate_customer
from uvr.views.base import BaseView
from uvr.views.decorators import match_getter
from uvr.views.utils import query_flag


class CustomersView(BaseView):
    """
    Gets the customers, or registers a new one.
    """
    url = "/customers"
    name = "customers"

    @docs(summary="Get All Customers")
    @returns(JSendSchema.of(customers=Many(CustomerSchema())))
    async def get(self):
        """Gets the customers, optionally filtered by last name with ``?name=``."""
        customers = await get_customers(
            name=self.request.query.get("name"), include_inactive=query_flag(self.request, "include_inactive")
        )
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"customers": customers}
        }

    @docs(summary="Register A Customer")
    @expects(CustomerCreateSchema())
    @returns(JSendSchema.of(customer=CustomerSchema()), HTTPStatus.CREATED)
    async def post(self):
        customer = await create_customer(**self.request["data"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"customer": customer}
        }


class CustomerView(BaseView):
    url = "/customers/{customer_id}"
    name = "customer"
    with_customer = match_getter(get_customer, "customer", customer_id="customer_id")

    @with_customer
    @docs(summary="Get A Customer")
    @returns(JSendSchema.of(customer=CustomerSchema()))
    async def get(self, customer: Customer):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"customer": customer}
        }

    @with_customer
    @docs(summary="Update A Customer")
    @expects(CustomerUpdateSchema())
    @returns(JSendSchema.of(customer=CustomerSchema()))
    async def patch(self, customer: Customer):
        customer = await update_customer(customer, **self.request["data"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"customer": customer}
        }

    @with_customer
    @docs(summary="Deactivate A Customer")
    async def delete(self, customer: Customer):
        await deactivate_customer(customer)
        raise web.HTTPNoContent


class CustomerRentalsView(BaseView):
    """
    Gets the rental history of a customer, including cancelled bookings.
    """
    url = "/customers/{customer_id}/rentals"
    with_customer = match_getter(get_customer, "customer", customer_id="customer_id")

    @with_customer
    @docs(summary="Get Rentals For Customer")
    @returns(JSendSchema.of(rentals=Many(RentalSchema())))
    async def get(self, customer: Customer):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"rentals": [
                rental.serialize(self.request.app.router)
                for rental in await self.rental_manager.rental_history(customer)
            ]}
        }


class CustomerPenaltiesView(BaseView):
    """
    Gets the unpaid penalties of a customer, and what they owe in total.
    """
    url = "/customers/{customer_id}/penalties"
    with_customer = match_getter(get_customer, "customer", customer_id="customer_id")

    @with_customer
    @docs(summary="Get Unpaid Penalties For Customer")
    @returns(JSendSchema.of(penalties=Many(PenaltySchema()), total=Money()))
    async def get(self, customer: Customer):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {
                "penalties": await self.penalty_manager.unpaid_penalties_for_customer(customer),
                "total": await self.penalty_manager.total_penalty_amount(customer),
            }
        }
