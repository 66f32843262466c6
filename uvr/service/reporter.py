"""
Reporter
--------

Builds the management reports from the rental, payment and
maintenance records. Every report accepts a year and an optional
month, which may be given as strings as they come from the url.
"""
from collections import OrderedDict, Counter
from datetime import date
from typing import Dict, List, Tuple, Any

from uvr.models import Payment, Rental, Maintenance, Location, Customer, Penalty
from uvr.models.util import RecordStatus, aware
from uvr.pricing import ZERO, elapsed_hours, round_money
from uvr.service.errors import ValidationError


def get_period(year, month=None) -> Tuple[date, date]:
    """
    Gets the first day of the given year or month, and the first day after it.

    :raises ValidationError: If the month is not between 1 and 12.
    """
    year = int(year)
    if month is None:
        return date(year, 1, 1), date(year + 1, 1, 1)

    month = int(month)
    if not 1 <= month <= 12:
        raise ValidationError(f"{month} is not a month.", month=month)

    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


def _in_period(rental: Rental, start: date, end: date) -> bool:
    return start <= aware(rental.pick_up_datetime).date() < end


class Reporter:

    async def revenue_report(self, year, month=None) -> Dict[str, Any]:
        """
        Gets the revenue for each month of the period, from the payments
        dated in it, along with how many completed rentals they paid for.
        """
        start, end = get_period(year, month)
        payments = await Payment.filter(
            status=RecordStatus.ACTIVE, payment_date__gte=start, payment_date__lt=end
        ).order_by("payment_date").prefetch_related("rental")

        months = OrderedDict()
        for payment in payments:
            key = payment.payment_date.replace(day=1)
            if key not in months:
                months[key] = {"month": key, "rentals": set(), "revenue": ZERO}

            months[key]["revenue"] += payment.amount
            if payment.rental.end_datetime is not None:
                months[key]["rentals"].add(payment.rental_id)

        data = [
            {"month": entry["month"], "completed_rentals": len(entry["rentals"]), "revenue": entry["revenue"]}
            for entry in months.values()
        ]

        return {
            "months": data,
            "total_rentals": sum(entry["completed_rentals"] for entry in data),
            "total_revenue": sum((entry["revenue"] for entry in data), ZERO),
        }

    async def defective_vehicle_report(self) -> List[Dict[str, Any]]:
        """
        Gets every vehicle that has been maintained, with how often
        it was rented before and after it was first taken in.
        """
        records = await Maintenance.filter(status=RecordStatus.ACTIVE).order_by("start_datetime", "maintenance_id")

        vehicles = OrderedDict()
        for record in records:
            vehicles.setdefault(record.vehicle_id, []).append(record)

        report = []
        for plate_id, jobs in vehicles.items():
            first_maintenance = aware(jobs[0].start_datetime)
            rentals = await Rental.filter(vehicle_id=plate_id, status=RecordStatus.ACTIVE)
            payments = await Payment.filter(
                rental_id__in=[rental.rental_id for rental in rentals], status=RecordStatus.ACTIVE
            ) if rentals else []

            rentals_before = sum(
                1 for rental in rentals if aware(rental.start_datetime or rental.pick_up_datetime) < first_maintenance
            )

            report.append({
                "plate_id": plate_id,
                "times_maintained": len(jobs),
                "total_maintenance_cost": sum((job.total_cost for job in jobs), ZERO),
                "first_maintenance": first_maintenance,
                "rentals_before_maintenance": rentals_before,
                "rentals_after_maintenance": len(rentals) - rentals_before,
                "rental_revenue": sum((payment.amount for payment in payments), ZERO),
            })

        return report

    async def location_frequency_report(self, year, month=None) -> List[Dict[str, Any]]:
        """Counts the rentals picked up at each location, most frequent first."""
        start, end = get_period(year, month)
        rentals = await Rental.filter(status=RecordStatus.ACTIVE)

        counts = Counter(rental.location_id for rental in rentals if _in_period(rental, start, end))
        names = {
            location.location_id: location.name
            for location in await Location.filter(location_id__in=list(counts))
        } if counts else {}

        return [
            {"location_id": location_id, "name": names.get(location_id), "rentals": count}
            for location_id, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        ]

    async def customer_rental_report(self, year, month=None) -> List[Dict[str, Any]]:
        """Summarises the rentals, payments and penalties of each active customer in the period."""
        start, end = get_period(year, month)

        report = []
        for customer in await Customer.filter(status=RecordStatus.ACTIVE).order_by("customer_id"):
            rentals = [
                rental for rental in await Rental.filter(customer_id=customer.customer_id, status=RecordStatus.ACTIVE)
                if _in_period(rental, start, end)
            ]
            if not rentals:
                continue

            rental_ids = [rental.rental_id for rental in rentals]
            payments = await Payment.filter(rental_id__in=rental_ids, status=RecordStatus.ACTIVE)
            penalties = await Penalty.filter(rental_id__in=rental_ids, status=RecordStatus.ACTIVE)
            hours = sum(
                (elapsed_hours(aware(rental.start_datetime), aware(rental.end_datetime))
                 for rental in rentals if rental.start_datetime is not None and rental.end_datetime is not None),
                ZERO
            )

            report.append({
                "customer_id": customer.customer_id,
                "name": customer.full_name,
                "rentals": len(rentals),
                "total_paid": sum((payment.amount for payment in payments), ZERO),
                "total_hours": round_money(hours),
                "penalties": len(penalties),
                "total_penalties": sum((penalty.total_penalty for penalty in penalties), ZERO),
            })

        return report
