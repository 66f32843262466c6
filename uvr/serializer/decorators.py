"""
Decorators
----------

The routes read and write JSON through these two decorators.
:func:`expects` validates the request body against a schema,
and :func:`returns` dumps whatever the route returns through
one, so that the routes themselves only deal in plain dicts
and models.
"""

from functools import wraps
from http import HTTPStatus
from json import JSONDecodeError
from typing import Optional, Tuple, Union, Dict, Any

from aiohttp import web
from aiohttp.web_urldispatcher import View
from marshmallow import Schema, ValidationError
from marshmallow_jsonschema import JSONSchema

from uvr import logger
from .jsend import JSendSchema, JSendStatus


def json_schema_of(schema: Schema) -> Dict[str, Any]:
    """Gets the jsonschema definition of a schema, to show the client what was expected."""
    return JSONSchema().dump(schema)["definitions"][type(schema).__name__]


def _fail(message: str, status: HTTPStatus = HTTPStatus.BAD_REQUEST, **data) -> web.Response:
    response_data = JSendSchema().dump({
        "status": JSendStatus.FAIL,
        "data": {"message": message, **data}
    })
    return web.json_response(response_data, status=status)


class BadRequestBody(Exception):
    """Raised when the body of a request cannot be read into the schema."""

    def __init__(self, message: str, **data):
        self.message = message
        self.data = data


async def load_body(request: web.Request, schema: Schema):
    """
    Reads the JSON body of the request through the schema.

    :raises BadRequestBody: If the body is missing, is not JSON, or does not validate.
    """
    if not request.body_exists or request.content_type != "application/json":
        raise BadRequestBody(
            f"This route ({request.method}: {request.rel_url}) only accepts JSON.",
            schema=json_schema_of(schema)
        )

    try:
        return schema.load(await request.json())
    except JSONDecodeError as err:
        raise BadRequestBody("Could not parse supplied JSON.", errors=[str(arg) for arg in err.args])
    except ValidationError as err:
        raise BadRequestBody(
            "The request did not validate properly.", errors=err.messages, schema=json_schema_of(schema)
        )


def expects(schema: Optional[Schema], into="data"):
    """
    Validates the JSON body of the request, storing the loaded
    data on the request under ``into``. Invalid bodies are rejected
    with a 400 that includes the schema that was expected.

    .. code:: python

        @expects(VehicleCreateSchema(), "my_data")
        async def post(self):
            valid_data = self.request["my_data"]

    :param schema: The schema to validate, or None to accept anything.
    :param into: The key to store the validated data in.
    """
    if schema is None:
        return lambda x: x

    if not isinstance(schema, Schema):
        raise TypeError(f"Expected a Schema, got {type(schema)}")

    def decorator(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):
            try:
                self.request[into] = await load_body(self.request, schema)
            except BadRequestBody as err:
                return _fail(err.message, **err.data)

            return await original_function(self, **kwargs)

        return new_func

    return decorator


def _serialization_error(route: str, err: Union[ValidationError, KeyError]) -> web.Response:
    logger.error("Could not serialize the response of %s: %s", route, err)
    response_data = JSendSchema().dump({
        "status": JSendStatus.ERROR,
        "data": {
            "errors": err.messages if isinstance(err, ValidationError) else [str(arg) for arg in err.args]
        },
        "message": "We tried to send you data back, but it came out wrong.",
    })
    return web.json_response(response_data, status=HTTPStatus.INTERNAL_SERVER_ERROR)


def returns(
    schema: Optional[Schema] = None, return_code: HTTPStatus = HTTPStatus.OK,
    **named_schema: Union[Schema, Tuple[Schema, HTTPStatus]]
):
    """
    Dumps what the route returns through a schema, so that the
    route can return plain dicts and models.

    .. code:: python

        @returns(JSendSchema.of(vehicle=VehicleSchema()))
        async def get(self):
            return {"status": JSendStatus.SUCCESS, "data": {"vehicle": vehicle}}

    A route that can respond in more than one way names its schemas,
    optionally paired with a status code, and returns the name along
    with the data:

    .. code:: python

        @returns(found=JSendSchema.of(vehicle=VehicleSchema()), missing=(JSendSchema(), HTTPStatus.NOT_FOUND))
        async def get(self):
            return "missing", {"status": JSendStatus.FAIL, "data": {"message": "No such vehicle."}}

    :param schema: The schema of a route that responds one way.
    :param return_code: The status code to respond with.
    :param named_schema: Schema names, paired with their schema and optionally a status code.
    """
    if schema is None and not named_schema:
        return lambda x: x

    responses = {
        name: value if isinstance(value, tuple) else (value, return_code)
        for name, value in named_schema.items()
    }
    responses[None] = (schema, return_code)

    def decorator(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):
            if schema is not None:
                schema_name, response_data = None, await original_function(self, **kwargs)
            else:
                schema_name, response_data = await original_function(self, **kwargs)

            try:
                matched_schema, status = responses[schema_name]
                return web.json_response(matched_schema.dump(response_data), status=status)
            except (ValidationError, KeyError) as err:
                return _serialization_error(original_function.__qualname__, err)

        return new_func

    return decorator
