"""
Payment Manager
---------------

Computes rental fees and settles the payment recorded against each rental.

Responsibilities
================

- calculating the fee of a rental from its duration and the vehicle rate
- recording payments
- finalizing the placeholder payment created when a rental is booked
- reporting what has been paid and what is outstanding
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Union, Optional

from tortoise import timezone

from uvr import logger
from uvr.models import Rental, Payment
from uvr.models.util import aware
from uvr.pricing import get_rental_fee, round_money, ZERO
from uvr.service.access.payments import get_payment_for_rental, create_payment, update_payment, get_payment, \
    get_payments
from uvr.service.access.rentals import get_rental
from uvr.service.access.vehicles import get_vehicle
from uvr.service.errors import ValidationError
from uvr.service.manager.util import require, rejected


class PaymentManager:

    async def calculate_rental_fee(self, rental: Union[Rental, str], *, now: datetime = None) -> Decimal:
        """
        Calculates the fee for a rental.

        An ongoing rental is priced up to ``now``, and one that has
        not been picked up yet costs nothing.

        :raises NotFoundError: If the rental or its vehicle does not exist.
        """
        rental = await require(get_rental, rental, "Rental")
        if rental.start_datetime is None:
            return ZERO

        vehicle = await require(get_vehicle, rental.vehicle_id, "Vehicle")
        end = rental.end_datetime if rental.end_datetime is not None else (now or timezone.now())

        return get_rental_fee(aware(rental.start_datetime), aware(end), vehicle.rental_price)

    async def process_payment(self, rental: Union[Rental, str], amount: Decimal, payment_date: date = None, *,
                              payment_id: str = None) -> Payment:
        """
        Records a new payment against a rental.

        :raises ValidationError: If the amount is not positive or the payment id is taken.
        :raises NotFoundError: If the rental does not exist.
        """
        if amount is None or Decimal(amount) <= 0:
            raise rejected(ValidationError(f"Payment amount must be positive, not {amount}.", amount=amount))

        rental = await require(get_rental, rental, "Rental")

        if payment_id is not None and await get_payment(payment_id) is not None:
            raise rejected(ValidationError(f"Payment {payment_id} already exists.", id=payment_id))

        payment = await create_payment(
            rental, round_money(amount), payment_date or timezone.now().date(), payment_id=payment_id
        )
        logger.info("Recorded payment %s of %s for %s", payment.payment_id, payment.amount, rental.rental_id)
        return payment

    async def finalize_payment_for_rental(self, rental: Union[Rental, str], final_amount: Decimal,
                                          payment_date: date = None) -> Payment:
        """
        Settles the payment for a rental.

        The placeholder payment created at booking is updated with the final
        amount. If the rental has no payment, one is created with an id
        derived from the rental id.
        """
        rental = await require(get_rental, rental, "Rental")
        payment_date = payment_date or timezone.now().date()
        final_amount = round_money(final_amount)

        payment = await get_payment_for_rental(rental)
        if payment is not None:
            payment = await update_payment(payment, amount=final_amount, payment_date=payment_date)
        else:
            logger.warning("Rental %s had no payment to finalize, creating one", rental.rental_id)
            payment = await create_payment(
                rental, final_amount, payment_date, payment_id=f"PAY-{rental.rental_id}"
            )

        logger.info("Finalized payment %s for %s at %s", payment.payment_id, rental.rental_id, final_amount)
        return payment

    async def payment_for_rental(self, rental: Union[Rental, str]) -> Optional[Payment]:
        rental = await require(get_rental, rental, "Rental")
        return await get_payment_for_rental(rental)

    async def total_paid_for_rental(self, rental: Union[Rental, str]) -> Decimal:
        """Sums the active payments made against a rental."""
        rental = await require(get_rental, rental, "Rental")
        return sum((payment.amount for payment in await get_payments(rental=rental)), ZERO)

    async def outstanding_balance(self, rental: Union[Rental, str]) -> Decimal:
        """The fee of the rental so far, less what has been paid, never below zero."""
        fee = await self.calculate_rental_fee(rental)
        paid = await self.total_paid_for_rental(rental)
        return max(round_money(fee - paid), ZERO)
