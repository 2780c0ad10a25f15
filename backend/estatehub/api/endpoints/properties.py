from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from estatehub.api.deps import get_property_service
from estatehub.api.schemas import PropertyCreate, PropertyResponse, PropertyUpdate
from estatehub.core.logging import get_logger
from estatehub.services import PropertyService

logger = get_logger(__name__)
router = APIRouter()


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(body: PropertyCreate, service: PropertyService = Depends(get_property_service)):
    """Create a property listing."""
    property = service.create(
        title=body.title,
        owner_id=body.owner_id,
        description=body.description,
        location=body.location,
        price=body.price,
        size=body.size,
        property_type=body.property_type,
        status=body.status,
        features=body.features,
    )
    return PropertyResponse.from_domain(property)


@router.get("", response_model=List[PropertyResponse])
async def list_properties(service: PropertyService = Depends(get_property_service)):
    """List every property."""
    return [PropertyResponse.from_domain(prop) for prop in service.list()]


# Declared before /{property_id} so "search" is not parsed as an identifier
@router.get("/search", response_model=List[PropertyResponse])
async def search_properties(
    location: Optional[str] = Query(None, description="Exact location, case-insensitive"),
    service: PropertyService = Depends(get_property_service),
):
    """Search properties by location."""
    logger.info("Property search requested", location=location)
    return [PropertyResponse.from_domain(prop) for prop in service.search(location)]


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(property_id: UUID, service: PropertyService = Depends(get_property_service)):
    """Get property by ID."""
    return PropertyResponse.from_domain(service.get(property_id))


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: UUID,
    body: PropertyUpdate,
    service: PropertyService = Depends(get_property_service),
):
    """Update the supplied fields of a property."""
    property = service.update_details(
        property_id,
        title=body.title,
        description=body.description,
        location=body.location,
        price=body.price,
        size=body.size,
        property_type=body.property_type,
        status=body.status,
        features=body.features,
    )
    return PropertyResponse.from_domain(property)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_property(property_id: UUID, service: PropertyService = Depends(get_property_service)):
    """Delete a property, applying the configured delete policy to its offers."""
    service.delete(property_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
