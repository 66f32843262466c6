"""
Payment Related Views
---------------------------
"""
from http import HTTPStatus

from aiohttp_apispec import docs

from uvr.models import Payment
from uvr.serializer import JSendSchema, JSendStatus, Many
from uvr.serializer.decorators import returns, expects
from uvr.serializer.misc import PaymentCreateSchema
from uvr.serializer.models import PaymentSchema
from uvr.service import ServiceError
from uvr.service.access.payments import get_payments, get_payment
from uvr.views.base import BaseView
from uvr.views.decorators import match_getter
from uvr.views.utils import FAILURES, service_failure, query_flag


class PaymentsView(BaseView):
    """
    Gets the payments, or records a new payment against a rental.
    """
    url = "/payments"
    name = "payments"

    @docs(summary="Get All Payments")
    @returns(JSendSchema.of(payments=Many(PaymentSchema())))
    async def get(self):
        """Gets the payments, optionally for one rental with ``?rental_id=``."""
        payments = await get_payments(
            rental=self.request.query.get("rental_id"), include_inactive=query_flag(self.request, "include_inactive")
        )
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"payments": payments}
        }

    @docs(summary="Make A Payment")
    @expects(PaymentCreateSchema())
    @returns(created=(JSendSchema.of(payment=PaymentSchema()), HTTPStatus.CREATED), **FAILURES)
    async def post(self):
        data = self.request["data"]
        try:
            payment = await self.payment_manager.process_payment(
                data["rental_id"], data["amount"], data.get("payment_date"), payment_id=data.get("payment_id")
            )
        except ServiceError as error:
            return service_failure(error)

        return "created", {
            "status": JSendStatus.SUCCESS,
            "data": {"payment": payment}
        }


class PaymentView(BaseView):
    url = "/payments/{payment_id}"
    name = "payment"
    with_payment = match_getter(get_payment, "payment", payment_id="payment_id")

    @with_payment
    @docs(summary="Get A Payment")
    @returns(JSendSchema.of(payment=PaymentSchema()))
    async def get(self, payment: Payment):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"payment": payment}
        }
