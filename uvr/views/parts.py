"""
Part Related Views
-------------------------

Handles the parts inventory.
"""
from http import HTTPStatus

from aiohttp import web
from aiohttp_apispec import docs

from uvr.models import Part
from uvr.serializer import JSendSchema, JSendStatus, Many
from uvr.serializer.decorators import returns, expects
from uvr.serializer.misc import PartCreateSchema, PartUpdateSchema
from uvr.serializer.models import PartSchema
from uvr.service.access.parts import get_parts, get_part, get_low_stock_parts, create_part, update_part, \
    deactivate_part
from uvr.views.base import BaseView
from uvr.views.decorators import match_getter
from uvr.views.utils import query_flag


class PartsView(BaseView):
    url = "/parts"
    name = "parts"

    @docs(summary="Get All Parts")
    @returns(
        bad_threshold=(JSendSchema(), HTTPStatus.BAD_REQUEST),
        parts=JSendSchema.of(parts=Many(PartSchema()))
    )
    async def get(self):
        """Gets the parts inventory, or only the parts running low with ``?low_stock=5``."""
        threshold = self.request.query.get("low_stock")

        if threshold is not None:
            try:
                parts = await get_low_stock_parts(int(threshold))
            except ValueError:
                return "bad_threshold", {
                    "status": JSendStatus.FAIL,
                    "data": {"message": f"The low stock threshold must be a number, not {threshold}."}
                }
        else:
            parts = await get_parts(include_inactive=query_flag(self.request, "include_inactive"))

        return "parts", {
            "status": JSendStatus.SUCCESS,
            "data": {"parts": parts}
        }

    @docs(summary="Add A Part")
    @expects(PartCreateSchema())
    @returns(
        part_exists=(JSendSchema(), HTTPStatus.CONFLICT),
        created=(JSendSchema.of(part=PartSchema()), HTTPStatus.CREATED)
    )
    async def post(self):
        data = self.request["data"]

        if "part_id" in data and await get_part(data["part_id"]) is not None:
            return "part_exists", {
                "status": JSendStatus.FAIL,
                "data": {"message": f"Part {data['part_id']} already exists."}
            }

        part = await create_part(**data)
        return "created", {
            "status": JSendStatus.SUCCESS,
            "data": {"part": part}
        }


class PartView(BaseView):
    url = "/parts/{part_id}"
    name = "part"
    with_part = match_getter(get_part, "part", part_id="part_id")

    @with_part
    @docs(summary="Get A Part")
    @returns(JSendSchema.of(part=PartSchema()))
    async def get(self, part: Part):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"part": part}
        }

    @with_part
    @docs(summary="Update A Part")
    @expects(PartUpdateSchema())
    @returns(JSendSchema.of(part=PartSchema()))
    async def patch(self, part: Part):
        """Updates the name or price of a part, or sets its stock after a count."""
        part = await update_part(part, **self.request["data"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"part": part}
        }

    @with_part
    @docs(summary="Discontinue A Part")
    async def delete(self, part: Part):
        await deactivate_part(part)
        raise web.HTTPNoContent
