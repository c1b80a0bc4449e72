"""GeoLocations — reference places that name payloads point at.

Invariants:
    - GET lists every place ordered by place
    - POST registers a new place (upper-cased); an existing place is a 409 conflict
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_geo_locations
from app.core.errors import ResourceConflictError
from app.infrastructure.database import get_db
from app.infrastructure.name_repositories import SqlGeoLocationRepository
from app.models.geo_location import GeoLocation
from app.schemas.geo_location import GeoLocationCreate
from app.schemas.name import GeoLocationDto, to_geo_location_dto

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/geolocations", tags=["geolocations"])


@router.get("", response_model=list[GeoLocationDto])
async def list_geo_locations(
    geo_locations: SqlGeoLocationRepository = Depends(get_geo_locations),
):
    return [to_geo_location_dto(g) for g in await geo_locations.list_all()]


@router.post(
    "", response_model=GeoLocationDto, status_code=status.HTTP_201_CREATED,
)
async def create_geo_location(
    body: GeoLocationCreate,
    geo_locations: SqlGeoLocationRepository = Depends(get_geo_locations),
    db: AsyncSession = Depends(get_db),
):
    """Register a place names can reference."""
    if await geo_locations.get(body.place) is not None:
        raise ResourceConflictError("GeoLocation", body.place)
    geo = GeoLocation(place=body.place, region=body.region)
    await geo_locations.add(geo)
    await db.commit()
    logger.info(f"GeoLocation {geo.place} registered")
    return to_geo_location_dto(geo)
