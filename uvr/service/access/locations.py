"""
Locations
---------
"""
from typing import Optional, List, Union

from uvr.models import Location
from uvr.models.util import RecordStatus, resolve_id
from uvr.service.access.util import next_identifier


async def get_locations(*, include_inactive=False) -> List[Location]:
    query = Location.all()
    if not include_inactive:
        query = query.filter(status=RecordStatus.ACTIVE)
    return await query.order_by("location_id")


async def get_location(location_id: str) -> Optional[Location]:
    return await Location.filter(location_id=location_id).first()


async def create_location(name: str, location_id: str = None) -> Location:
    if location_id is None:
        location_id = await next_identifier(Location, "LOC")
    return await Location.create(location_id=location_id, name=name)


async def update_location(location: Location, **kwargs) -> Location:
    location.update_from_dict(kwargs)
    await location.save()
    return location


async def deactivate_location(location: Union[Location, str]) -> bool:
    return await Location.filter(location_id=resolve_id(location)).update(status=RecordStatus.INACTIVE) > 0


async def reactivate_location(location: Union[Location, str]) -> bool:
    return await Location.filter(location_id=resolve_id(location)).update(status=RecordStatus.ACTIVE) > 0
