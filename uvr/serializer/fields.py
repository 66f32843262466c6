"""
Fields
-------

Defines some additional fields so that the Schemas can
serialize to and from the enums and amounts used by the models.
"""

from decimal import ROUND_HALF_UP
from enum import Enum
from typing import Union, Optional, Type

from marshmallow import fields, ValidationError


class EnumField(fields.Field):
    """
    A field that serializes an :class:`~enum.Enum` to its value and back.
    Plain strings that match one of the values are passed through.
    """

    def __init__(self, enum_type: Type[Enum], *args, **kwargs):
        """
        :param enum_type: the :class:`~enum.Enum` subclass
        """
        super().__init__(*args, **kwargs)
        if not issubclass(enum_type, Enum):
            raise TypeError(f"Expected enum type, got {enum_type} instead")
        self._enum_type = enum_type

    @property
    def choices(self):
        return [member.value for member in self._enum_type]

    def _serialize(self, value: Union[Enum, str], attr, obj, **kwargs) -> Optional[str]:
        if isinstance(value, self._enum_type):
            return value.value
        if value in self.choices:
            return value
        return None

    def _deserialize(self, value: str, attr, data, **kwargs) -> Enum:
        try:
            return self._enum_type(value)
        except ValueError:
            raise ValidationError(f"Must be one of {', '.join(self.choices)}.")

    def _jsonschema_type_mapping(self):
        """Defines the jsonschema type for the object."""
        return {
            'type': 'string',
            'enum': self.choices
        }


def Many(schema):
    return fields.List(fields.Nested(schema))


def Money(**kwargs):
    """An amount in pesos, sent as a string with two decimal places."""
    return fields.Decimal(places=2, rounding=ROUND_HALF_UP, as_string=True, **kwargs)
