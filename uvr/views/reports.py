"""
Report Views
---------------------------

Serves the management reports. The periodic reports accept
a year or a month, as in ``/report/revenue/2024`` or
``/report/revenue/2024-06``.
"""
from re import fullmatch

from aiohttp_apispec import docs

from uvr.serializer import JSendSchema, JSendStatus, Many
from uvr.serializer.decorators import returns
from uvr.serializer.reports import RevenueReportSchema, DefectiveVehicleSchema, LocationFrequencySchema, \
    CustomerRentalSchema
from uvr.service import ServiceError
from uvr.views.base import BaseView
from uvr.views.utils import FAILURES, service_failure

PERIOD_PATTERN = r"/[0-9]{4}(?:-[0-9]{2})?"
PERIOD_REGEX = r"/(?P<year>[0-9]{4})(?:-(?P<month>[0-9]{2}))?"


class RevenueReportView(BaseView):
    url = f"/report/revenue{{filter:{PERIOD_PATTERN}}}"

    @docs(summary="Get Revenue Report")
    @returns(report=JSendSchema.of(report=RevenueReportSchema()), **FAILURES)
    async def get(self):
        """Gets the revenue for each month of the given year or month."""
        filters = fullmatch(PERIOD_REGEX, self.request.match_info["filter"])
        try:
            data = await self.reporter.revenue_report(**filters.groupdict())
        except ServiceError as error:
            return service_failure(error)

        return "report", {
            "status": JSendStatus.SUCCESS,
            "data": {"report": data}
        }


class DefectiveVehicleReportView(BaseView):
    url = "/report/defective"

    @docs(summary="Get Defective Vehicle Report")
    @returns(JSendSchema.of(vehicles=Many(DefectiveVehicleSchema())))
    async def get(self):
        """Gets every vehicle that has needed maintenance, and how it was rented around it."""
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"vehicles": await self.reporter.defective_vehicle_report()}
        }


class LocationReportView(BaseView):
    url = f"/report/locations{{filter:{PERIOD_PATTERN}}}"

    @docs(summary="Get Location Rental Frequency Report")
    @returns(report=JSendSchema.of(locations=Many(LocationFrequencySchema())), **FAILURES)
    async def get(self):
        filters = fullmatch(PERIOD_REGEX, self.request.match_info["filter"])
        try:
            data = await self.reporter.location_frequency_report(**filters.groupdict())
        except ServiceError as error:
            return service_failure(error)

        return "report", {
            "status": JSendStatus.SUCCESS,
            "data": {"locations": data}
        }


class CustomerReportView(BaseView):
    url = f"/report/customers{{filter:{PERIOD_PATTERN}}}"

    @docs(summary="Get Customer Rental Report")
    @returns(report=JSendSchema.of(customers=Many(CustomerRentalSchema())), **FAILURES)
    async def get(self):
        filters = fullmatch(PERIOD_REGEX, self.request.match_info["filter"])
        try:
            data = await self.reporter.customer_rental_report(**filters.groupdict())
        except ServiceError as error:
            return service_failure(error)

        return "report", {
            "status": JSendStatus.SUCCESS,
            "data": {"customers": data}
        }
