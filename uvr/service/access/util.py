"""
Identifiers
-----------

Records are keyed by human-readable ``PREFIX-###`` identifiers.
"""
import re
import time
from typing import Type

from tortoise import Model
from tortoise.exceptions import BaseORMException

from uvr import logger


async def next_identifier(model: Type[Model], prefix: str) -> str:
    """
    Generates the next sequential identifier for a table.

    Scans every existing key (inactive records included, so ids are
    never reused), takes the highest numeric suffix matching the prefix
    and adds one. If the scan fails, falls back to an id derived from
    the current time.

    :param model: The model whose primary keys to scan.
    :param prefix: The identifier prefix, eg. ``RNT``.
    """
    pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$")
    pk_name = model._meta.pk_attr

    try:
        keys = await model.all().values_list(pk_name, flat=True)
    except BaseORMException as error:
        fallback = f"{prefix}-{int(time.time() * 1000) % 1000:03d}"
        logger.warning("Could not scan %s ids (%s), falling back to %s", prefix, error, fallback)
        return fallback

    highest = 0
    for key in keys:
        match = pattern.match(key or "")
        if match:
            highest = max(highest, int(match.group(1)))

    return f"{prefix}-{highest + 1:03d}"
