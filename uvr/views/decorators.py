"""
Decorators
-------------------------

Every record in the system is addressed by its string id in the url,
so the views fetch the record they act on with :func:`match_getter`
rather than looking it up themselves.
"""
from functools import wraps
from http import HTTPStatus
from typing import Dict, Callable, Awaitable, Optional, Any

from aiohttp import web
from aiohttp.web_urldispatcher import View
from apispec.ext.marshmallow import OpenAPIConverter, resolver

from uvr.serializer import JSendStatus, JSendSchema

converter = OpenAPIConverter("3.0.2", resolver, None)


def _not_found(params: Dict[str, str], record_name: str) -> web.HTTPNotFound:
    response = {
        "status": JSendStatus.FAIL,
        "data": {
            "message": f"Could not find {record_name} with the given params.",
            "params": params
        }
    }
    return web.HTTPNotFound(text=JSendSchema().dumps(response), content_type='application/json')


def match_getter(getter_function: Callable[..., Awaitable[Optional[Any]]], record_name: str, **match_map: str):
    """
    Fetches the record named in the url and passes it to the view, or 404's if it doesn't exist.

    .. code-block:: python

        # example usage
        @match_getter(get_vehicle, 'vehicle', plate_id='plate_id')
        async def get(self, vehicle: Vehicle):
            return web.json_response(data=VehicleSchema().dump(vehicle))

    :param getter_function: The access function to fetch the record with.
    :param record_name: The keyword to pass the record to the view as.
    :param match_map: Associates each keyword of the ``getter_function`` with a url variable.
    """

    def attach_record(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):
            params = {key: self.request.match_info[variable] for key, variable in match_map.items()}

            record = await getter_function(**params)
            if record is None:
                raise _not_found(params, record_name)

            return await original_function(self, **kwargs, **{record_name: record})

        document_not_found(new_func, original_function)
        return new_func

    return attach_record


def document_not_found(new_func, original_function):
    """Carries the apispec documentation over to the wrapped view, adding the 404 response."""
    new_func.__apispec__ = getattr(original_function, "__apispec__", {"schemas": [], "responses": {}, "parameters": []})
    new_func.__schemas__ = getattr(original_function, "__schemas__", [])

    json_schema = converter.schema2jsonschema(JSendSchema(only=("status", "data")))
    new_func.__apispec__["responses"].setdefault(str(HTTPStatus.NOT_FOUND.value), {
        "description": "record_missing",
        "content": {"application/json": {"schema": json_schema}}
    })
