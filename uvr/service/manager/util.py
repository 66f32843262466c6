from typing import Callable, Awaitable, Optional, Union, TypeVar

from tortoise import Model

from uvr import logger
from uvr.models.util import resolve_id
from uvr.service.errors import ServiceError, NotFoundError

T = TypeVar("T", bound=Model)


def rejected(error: ServiceError) -> ServiceError:
    """Logs the cause of a rejected operation, returning the error to be raised."""
    logger.warning("%s: %s", type(error).__name__, error.message)
    return error


async def require(getter: Callable[[str], Awaitable[Optional[T]]], target: Union[T, str], kind: str) -> T:
    """
    Fetches a fresh copy of a record by its id.

    :param getter: The access function that fetches the record.
    :param target: The record or its id.
    :param kind: The name of the record, for the error message.
    :raises NotFoundError: If there is no such record.
    """
    identifier = resolve_id(target)
    record = await getter(identifier)
    if record is None:
        raise rejected(NotFoundError(f"{kind} {identifier} does not exist.", id=identifier))
    return record
