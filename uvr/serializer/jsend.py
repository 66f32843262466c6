"""
JSend Schema
------------

Every response of the API is wrapped in the `JSend Format`_: a
``status`` of success, fail or error, with the payload under ``data``
and a human readable ``message`` for anything that went wrong.

.. _`JSend Format`: https://github.com/omniti-labs/jsend
"""

from enum import Enum

from marshmallow import Schema, fields, validates_schema, ValidationError
from marshmallow.fields import Field

from .fields import EnumField


class JSendStatus(str, Enum):
    SUCCESS = "success"
    """The request did what was asked."""

    FAIL = "fail"
    """The request was rejected, because of the data sent or the state of the records it touched."""

    ERROR = "error"
    """The server could not handle the request."""


class JSendSchema(Schema):
    status = EnumField(JSendStatus, required=True)
    data = fields.Dict()
    message = fields.String()
    code = fields.Integer()

    @validates_schema
    def assert_fields(self, data, **kwargs):
        """
        Successes and failures carry ``data``, and a failure explains
        itself with a ``message`` inside it. Errors carry a top level ``message``.
        """
        status = data["status"]

        if status == JSendStatus.ERROR:
            if "message" not in data:
                raise ValidationError("An error must include a message.", "message")
            return

        if "data" not in data:
            raise ValidationError(f"A {status.value} must include data.", "data")
        if status == JSendStatus.FAIL and "message" not in data["data"]:
            raise ValidationError("A failure must include a message in its data.", "data")

    @staticmethod
    def of(**kwargs):
        """
        Creates a JSendSchema whose ``data`` must match the given fields.
        Schemas are nested, and fields are used as they are:

        >>> vehicle_schema = JSendSchema.of(vehicle=VehicleSchema(), available=Boolean())
        >>> validated_data = vehicle_schema.load(await response.json())
        """
        data_schema = Schema.from_dict({
            field_name: schema if isinstance(schema, Field) else fields.Nested(schema)
            for field_name, schema in kwargs.items()
        }, name="DataSchema")

        class TypedJSendSchema(JSendSchema):
            data = fields.Nested(data_schema)

        return TypedJSendSchema()
