from decimal import Decimal

from uvr.serializer.misc import MaintenanceCompleteSchema
from uvr.serializer.reports import RevenueReportSchema


def test_complete_loads_parts_used():
    """Assert that the parts used on a job load as a list of line items."""
    data = MaintenanceCompleteSchema().load({
        "hours_worked": "3.5",
        "parts_used": [{"part_id": "PART-001", "quantity": 2}, {"part_id": "PART-002", "quantity": 1}]
    })

    assert data["parts_used"] == [{"part_id": "PART-001", "quantity": 2}, {"part_id": "PART-002", "quantity": 1}]
    assert data["hours_worked"] == Decimal("3.50")


def test_complete_without_parts():
    assert MaintenanceCompleteSchema().load({})["parts_used"] == []


def test_revenue_report_loads_its_own_output():
    """Assert that a dumped revenue report validates against its schema."""
    report = {
        "months": [
            {"month": "2024-06-01", "completed_rentals": 2, "revenue": "5.73"},
            {"month": "2024-07-01", "completed_rentals": 0, "revenue": "0.00"},
        ],
        "total_rentals": 2,
        "total_revenue": "5.73",
    }

    loaded = RevenueReportSchema().load(report)

    assert len(loaded["months"]) == 2
    assert loaded["total_revenue"] == Decimal("5.73")
