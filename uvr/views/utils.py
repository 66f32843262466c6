"""
Utilities
-------------------------

Turns the errors raised by the service layer into JSend responses.
Views that call into the managers include the :data:`FAILURES` in
their named schemas and return :func:`service_failure` on error:

.. code-block:: python

    @returns(started=JSendSchema.of(rental=RentalSchema()), **FAILURES)
    async def patch(self, rental):
        try:
            rental = await self.rental_manager.start(rental)
        except ServiceError as error:
            return service_failure(error)
"""
from http import HTTPStatus
from typing import Tuple, Dict, Any

from uvr.serializer import JSendSchema, JSendStatus
from uvr.service.errors import ServiceError, NotFoundError, InvalidStateError, ValidationError

FAILURES = {
    "not_found": (JSendSchema(), HTTPStatus.NOT_FOUND),
    "invalid_state": (JSendSchema(), HTTPStatus.CONFLICT),
    "invalid": (JSendSchema(), HTTPStatus.BAD_REQUEST),
    "error": (JSendSchema(), HTTPStatus.INTERNAL_SERVER_ERROR),
}


def service_failure(error: ServiceError) -> Tuple[str, Dict[str, Any]]:
    """Picks the named failure schema for the error, and the response to dump into it."""
    if isinstance(error, NotFoundError):
        name = "not_found"
    elif isinstance(error, InvalidStateError):
        name = "invalid_state"
    elif isinstance(error, ValidationError):
        name = "invalid"
    else:
        return "error", {
            "status": JSendStatus.ERROR,
            "message": error.message,
        }

    context = {key: str(getattr(value, "value", value)) for key, value in error.context.items()}
    return name, {
        "status": JSendStatus.FAIL,
        "data": {"message": error.message, **context}
    }


def query_flag(request, name: str) -> bool:
    """Reads a boolean flag such as ``?include_inactive=true`` from the query string."""
    return request.query.get(name, "false").lower() in ("1", "true", "yes")
