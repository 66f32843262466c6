"""
Payments
--------
"""
from datetime import date
from decimal import Decimal
from typing import Union, Optional, List

from uvr.models import Payment, Rental
from uvr.models.util import RecordStatus, resolve_id
from uvr.service.access.util import next_identifier


async def get_payments(*, rental: Union[Rental, str] = None, include_inactive=False) -> List[Payment]:
    query = Payment.all()

    if rental is not None:
        query = query.filter(rental_id=resolve_id(rental))
    if not include_inactive:
        query = query.filter(status=RecordStatus.ACTIVE)

    return await query.order_by("payment_date", "payment_id")


async def get_payment(payment_id: str) -> Optional[Payment]:
    return await Payment.filter(payment_id=payment_id).first()


async def get_payment_for_rental(rental: Union[Rental, str], *, include_inactive=False) -> Optional[Payment]:
    """Gets the payment recorded against a rental, if there is one."""
    query = Payment.filter(rental_id=resolve_id(rental))
    if not include_inactive:
        query = query.filter(status=RecordStatus.ACTIVE)
    return await query.order_by("payment_id").first()


async def get_payments_between(start: date, end: date) -> List[Payment]:
    """Gets the active payments dated within ``[start, end)``."""
    return await Payment.filter(
        status=RecordStatus.ACTIVE, payment_date__gte=start, payment_date__lt=end
    ).order_by("payment_date")


async def create_payment(rental: Union[Rental, str], amount: Decimal, payment_date: date,
                         payment_id: str = None) -> Payment:
    if payment_id is None:
        payment_id = await next_identifier(Payment, "PAY")

    return await Payment.create(
        payment_id=payment_id, rental_id=resolve_id(rental), amount=amount, payment_date=payment_date
    )


async def update_payment(payment: Payment, **kwargs) -> Payment:
    payment.update_from_dict(kwargs)
    await payment.save()
    return payment


async def deactivate_payment(payment: Union[Payment, str]) -> bool:
    return await Payment.filter(payment_id=resolve_id(payment)).update(status=RecordStatus.INACTIVE) > 0


async def reactivate_payment(payment: Union[Payment, str]) -> bool:
    return await Payment.filter(payment_id=resolve_id(payment)).update(status=RecordStatus.ACTIVE) > 0
