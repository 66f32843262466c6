"""
Customers
---------
"""
from typing import Optional, List, Union

from uvr.models import Customer
from uvr.models.util import RecordStatus, resolve_id
from uvr.service.access.util import next_identifier


async def get_customers(*, name: str = None, include_inactive=False) -> List[Customer]:
    """
    Gets the customers in the system.

    :param name: An optional name to filter by.
    :param include_inactive: Whether to include deactivated customers.
    """
    query = Customer.all()

    if name is not None:
        query = query.filter(last_name__icontains=name)
    if not include_inactive:
        query = query.filter(status=RecordStatus.ACTIVE)

    return await query.order_by("customer_id")


async def get_customer(customer_id: str) -> Optional[Customer]:
    return await Customer.filter(customer_id=customer_id).first()


async def create_customer(first_name: str, last_name: str, contact_number: str = None,
                          email_address: str = None, customer_id: str = None) -> Customer:
    if customer_id is None:
        customer_id = await next_identifier(Customer, "CUST")

    return await Customer.create(
        customer_id=customer_id, first_name=first_name, last_name=last_name,
        contact_number=contact_number, email_address=email_address
    )


async def update_customer(customer: Customer, **kwargs) -> Customer:
    customer.update_from_dict(kwargs)
    await customer.save()
    return customer


async def deactivate_customer(customer: Union[Customer, str]) -> bool:
    return await Customer.filter(customer_id=resolve_id(customer)).update(status=RecordStatus.INACTIVE) > 0


async def reactivate_customer(customer: Union[Customer, str]) -> bool:
    return await Customer.filter(customer_id=resolve_id(customer)).update(status=RecordStatus.ACTIVE) > 0
