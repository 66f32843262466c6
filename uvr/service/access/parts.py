"""
Parts
-----

Handles the parts inventory. Stock levels are adjusted with
conditional updates so that a decrement which would take the
quantity below zero changes nothing and reports failure.
"""
from decimal import Decimal
from typing import Optional, List, Union

from tortoise.expressions import F

from uvr.models import Part
from uvr.models.util import RecordStatus, resolve_id
from uvr.service.access.util import next_identifier


async def get_parts(*, include_inactive=False) -> List[Part]:
    query = Part.all()
    if not include_inactive:
        query = query.filter(status=RecordStatus.ACTIVE)
    return await query.order_by("part_id")


async def get_part(part_id: str) -> Optional[Part]:
    return await Part.filter(part_id=part_id).first()


async def get_low_stock_parts(threshold: int) -> List[Part]:
    """Gets the active parts with at most ``threshold`` units on hand."""
    return await Part.filter(status=RecordStatus.ACTIVE, quantity__lte=threshold).order_by("quantity")


async def create_part(part_name: str, price: Decimal, quantity: int = 0, part_id: str = None) -> Part:
    if quantity < 0:
        raise ValueError("Part quantity may not be negative.")
    if part_id is None:
        part_id = await next_identifier(Part, "PART")
    return await Part.create(part_id=part_id, part_name=part_name, price=price, quantity=quantity)


async def update_part(part: Part, **kwargs) -> Part:
    if kwargs.get("quantity", 0) < 0:
        raise ValueError("Part quantity may not be negative.")
    part.update_from_dict(kwargs)
    await part.save()
    return part


async def decrement_part_quantity(part: Union[Part, str], quantity: int) -> bool:
    """
    Takes units out of stock.

    :return: False, leaving the stock untouched, if fewer than ``quantity`` units are on hand.
    """
    if quantity < 0:
        raise ValueError("Cannot decrement by a negative quantity.")

    updated = await Part.filter(part_id=resolve_id(part), quantity__gte=quantity) \
        .update(quantity=F("quantity") - quantity)
    return updated > 0


async def increment_part_quantity(part: Union[Part, str], quantity: int) -> bool:
    """Returns units to stock."""
    if quantity < 0:
        raise ValueError("Cannot increment by a negative quantity.")

    updated = await Part.filter(part_id=resolve_id(part)).update(quantity=F("quantity") + quantity)
    return updated > 0


async def deactivate_part(part: Union[Part, str]) -> bool:
    return await Part.filter(part_id=resolve_id(part)).update(status=RecordStatus.INACTIVE) > 0


async def reactivate_part(part: Union[Part, str]) -> bool:
    return await Part.filter(part_id=resolve_id(part)).update(status=RecordStatus.ACTIVE) > 0
