"""
Penalty Related Views
---------------------------

Handles charging customers for damage to the vehicles they rented.
"""
from http import HTTPStatus

from aiohttp_apispec import docs

from uvr.models import Penalty
from uvr.models.util import PenaltyStatus
from uvr.serializer import JSendSchema, JSendStatus, Many
from uvr.serializer.decorators import returns, expects
from uvr.serializer.misc import PenaltyCreateSchema, PenaltyUpdateSchema
from uvr.serializer.models import PenaltySchema
from uvr.service import ServiceError
from uvr.service.access.penalties import get_penalties, get_penalty
from uvr.views.base import BaseView
from uvr.views.decorators import match_getter
from uvr.views.utils import FAILURES, service_failure, query_flag


class PenaltiesView(BaseView):
    """
    Gets the penalties, or issues a penalty for a maintenance job.
    """
    url = "/penalties"
    name = "penalties"

    @docs(summary="Get All Penalties")
    @returns(
        bad_status=(JSendSchema(), HTTPStatus.BAD_REQUEST),
        penalties=JSendSchema.of(penalties=Many(PenaltySchema()))
    )
    async def get(self):
        """Gets the penalties, optionally only the paid or unpaid ones with ``?status=UNPAID``."""
        status = self.request.query.get("status")
        if status is not None:
            try:
                status = PenaltyStatus(status.upper())
            except ValueError:
                return "bad_status", {
                    "status": JSendStatus.FAIL,
                    "data": {"message": f"Invalid status. Pick between {', '.join(s.value for s in PenaltyStatus)}."}
                }

        penalties = await get_penalties(
            penalty_status=status, include_inactive=query_flag(self.request, "include_inactive")
        )
        return "penalties", {
            "status": JSendStatus.SUCCESS,
            "data": {"penalties": penalties}
        }

    @docs(summary="Issue A Penalty")
    @expects(PenaltyCreateSchema())
    @returns(created=(JSendSchema.of(penalty=PenaltySchema()), HTTPStatus.CREATED), **FAILURES)
    async def post(self):
        """Charges the cost of a maintenance job to the customer of a rental."""
        data = self.request["data"]
        try:
            penalty = await self.penalty_manager.create_penalty_from_maintenance(
                data["rental_id"], data["maintenance_id"], data.get("date_issued"), penalty_id=data.get("penalty_id")
            )
        except ServiceError as error:
            return service_failure(error)

        return "created", {
            "status": JSendStatus.SUCCESS,
            "data": {"penalty": penalty}
        }


class PenaltyView(BaseView):
    url = "/penalties/{penalty_id}"
    name = "penalty"
    with_penalty = match_getter(get_penalty, "penalty", penalty_id="penalty_id")

    @with_penalty
    @docs(summary="Get A Penalty")
    @returns(JSendSchema.of(penalty=PenaltySchema()))
    async def get(self, penalty: Penalty):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"penalty": penalty}
        }

    @with_penalty
    @docs(summary="Mark A Penalty Paid Or Unpaid")
    @expects(PenaltyUpdateSchema())
    @returns(updated=JSendSchema.of(penalty=PenaltySchema()), **FAILURES)
    async def patch(self, penalty: Penalty):
        try:
            penalty = await self.penalty_manager.update_penalty_payment(
                penalty, self.request["data"]["penalty_status"]
            )
        except ServiceError as error:
            return service_failure(error)

        return "updated", {
            "status": JSendStatus.SUCCESS,
            "data": {"penalty": penalty}
        }

    @with_penalty
    @docs(summary="Cancel A Penalty")
    @returns(cancelled=JSendSchema.of(penalty=PenaltySchema()), **FAILURES)
    async def delete(self, penalty: Penalty):
        try:
            penalty = await self.penalty_manager.cancel_penalty(penalty)
        except ServiceError as error:
            return service_failure(error)

        return "cancelled", {
            "status": JSendStatus.SUCCESS,
            "data": {"penalty": penalty}
        }
