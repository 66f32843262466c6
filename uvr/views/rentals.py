"""
Rental Related Views
---------------------------

Handles booking vehicles and moving the rentals through their lifecycle.
"""
from http import HTTPStatus

from aiohttp_apispec import docs
from marshmallow.fields import String, Nested

from uvr.models import Rental
from uvr.serializer import JSendSchema, JSendStatus, Many, Money
from uvr.serializer.decorators import returns, expects
from uvr.serializer.misc import BookingSchema
from uvr.serializer.models import RentalSchema, PaymentSchema, PenaltySchema
from uvr.service import ServiceError
from uvr.service.access.rentals import get_rental, get_rentals
from uvr.views.base import BaseView
from uvr.views.decorators import match_getter
from uvr.views.utils import FAILURES, service_failure, query_flag


class RentalsView(BaseView):
    """
    Gets a list of rentals, or books a vehicle.
    """
    url = "/rentals"
    name = "rentals"
    states = ("active", "booked")

    @docs(summary="Get All Rentals")
    @returns(
        bad_state=(JSendSchema(), HTTPStatus.BAD_REQUEST),
        rentals=JSendSchema.of(rentals=Many(RentalSchema()))
    )
    async def get(self):
        """
        Gets the rentals in the system:

        - ``GET /rentals?state=active`` gets the vehicles currently out
        - ``GET /rentals?state=booked`` gets the bookings waiting to be picked up
        """
        state = self.request.query.get("state")

        if state is None:
            rentals = await get_rentals(include_inactive=query_flag(self.request, "include_inactive"))
        elif state == "active":
            rentals = await self.rental_manager.active_rentals()
        elif state == "booked":
            rentals = await self.rental_manager.booked_rentals()
        else:
            return "bad_state", {
                "status": JSendStatus.FAIL,
                "data": {
                    "message": f"Invalid state. Pick between {', '.join(self.states)}",
                    "states": self.states
                }
            }

        return "rentals", {
            "status": JSendStatus.SUCCESS,
            "data": {"rentals": [rental.serialize(self.request.app.router) for rental in rentals]}
        }

    @docs(summary="Book A Vehicle")
    @expects(BookingSchema())
    @returns(booked=(JSendSchema.of(rental=RentalSchema()), HTTPStatus.CREATED), **FAILURES)
    async def post(self):
        data = self.request["data"]
        try:
            rental = await self.rental_manager.book(
                data["customer_id"], data["plate_id"], data["location_id"], data["pick_up_datetime"]
            )
        except ServiceError as error:
            return service_failure(error)

        return "booked", {
            "status": JSendStatus.SUCCESS,
            "data": {"rental": rental.serialize(self.request.app.router)}
        }


class RentalView(BaseView):
    """
    Gets a single rental.
    """
    url = "/rentals/{rental_id}"
    name = "rental"
    with_rental = match_getter(get_rental, "rental", rental_id="rental_id")

    @with_rental
    @docs(summary="Get A Rental")
    @returns(JSendSchema.of(rental=RentalSchema()))
    async def get(self, rental: Rental):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"rental": rental.serialize(self.request.app.router)}
        }


class RentalPaymentView(BaseView):
    """
    Gets the payment of a rental, along with its fee so far and what is left to pay.
    """
    url = "/rentals/{rental_id}/payment"
    with_rental = match_getter(get_rental, "rental", rental_id="rental_id")

    @with_rental
    @docs(summary="Get Payment For Rental")
    @returns(JSendSchema.of(
        payment=Nested(PaymentSchema(), allow_none=True),
        fee=Money(),
        paid=Money(),
        outstanding=Money()
    ))
    async def get(self, rental: Rental):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {
                "payment": await self.payment_manager.payment_for_rental(rental),
                "fee": await self.payment_manager.calculate_rental_fee(rental),
                "paid": await self.payment_manager.total_paid_for_rental(rental),
                "outstanding": await self.payment_manager.outstanding_balance(rental),
            }
        }


class RentalPenaltiesView(BaseView):
    url = "/rentals/{rental_id}/penalties"
    with_rental = match_getter(get_rental, "rental", rental_id="rental_id")

    @with_rental
    @docs(summary="Get Penalties For Rental")
    @returns(JSendSchema.of(penalties=Many(PenaltySchema())))
    async def get(self, rental: Rental):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"penalties": await self.penalty_manager.penalties_for_rental(rental)}
        }


class RentalActionView(BaseView):
    """
    Moves a rental through its lifecycle.
    """
    url = "/rentals/{rental_id}/{action}"
    name = "rental_action"
    with_rental = match_getter(get_rental, "rental", rental_id="rental_id")
    actions = ("start", "complete", "cancel")

    @with_rental
    @docs(summary="Start, Complete Or Cancel A Rental")
    @returns(
        invalid_action=(JSendSchema(), HTTPStatus.NOT_FOUND),
        rental_updated=JSendSchema.of(rental=RentalSchema(), action=String(), price=Money()),
        **FAILURES
    )
    async def patch(self, rental: Rental):
        """
        Updates a rental in one of three ways:

        - ``PATCH /rentals/RNT-001/start`` hands over the vehicle
        - ``PATCH /rentals/RNT-001/complete`` takes the vehicle back and charges the rental
        - ``PATCH /rentals/RNT-001/cancel`` cancels a booking that was not picked up
        """
        action = self.request.match_info["action"]
        if action not in self.actions:
            return "invalid_action", {
                "status": JSendStatus.FAIL,
                "data": {
                    "message": f"Invalid action. Pick between {', '.join(self.actions)}",
                    "actions": self.actions
                }
            }

        data = {"action": action}
        try:
            if action == "start":
                rental = await self.rental_manager.start(rental)
            elif action == "complete":
                data["price"] = await self.rental_manager.complete(rental)
                rental = await get_rental(rental.rental_id)
            elif action == "cancel":
                rental = await self.rental_manager.cancel(rental)
        except ServiceError as error:
            return service_failure(error)

        data["rental"] = rental.serialize(self.request.app.router)
        return "rental_updated", {
            "status": JSendStatus.SUCCESS,
            "data": data
        }
