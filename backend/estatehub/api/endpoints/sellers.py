from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from estatehub.api.deps import get_seller_service
from estatehub.api.schemas import (
    OfferResponse,
    PropertyResponse,
    PublishRequest,
    SellerCreate,
    SellerResponse,
    SellerUpdate,
)
from estatehub.core.logging import get_logger
from estatehub.services import SellerService

logger = get_logger(__name__)
router = APIRouter()


@router.post("", response_model=SellerResponse, status_code=status.HTTP_201_CREATED)
async def create_seller(body: SellerCreate, service: SellerService = Depends(get_seller_service)):
    seller = service.create(
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        username=body.username,
        password=body.password,
    )
    return SellerResponse.from_domain(seller)


@router.get("", response_model=List[SellerResponse])
async def list_sellers(service: SellerService = Depends(get_seller_service)):
    return [SellerResponse.from_domain(seller) for seller in service.list()]


@router.get("/{seller_id}", response_model=SellerResponse)
async def get_seller(seller_id: UUID, service: SellerService = Depends(get_seller_service)):
    return SellerResponse.from_domain(service.get(seller_id))


@router.put("/{seller_id}", response_model=SellerResponse)
async def update_seller(
    seller_id: UUID,
    body: SellerUpdate,
    service: SellerService = Depends(get_seller_service),
):
    """Update the supplied fields of a seller."""
    seller = service.update(seller_id, **body.model_dump(exclude_none=True))
    return SellerResponse.from_domain(seller)


@router.delete("/{seller_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_seller(seller_id: UUID, service: SellerService = Depends(get_seller_service)):
    service.delete(seller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{seller_id}/properties", response_model=List[PropertyResponse])
async def list_seller_properties(seller_id: UUID, service: SellerService = Depends(get_seller_service)):
    """Properties owned by this seller."""
    return [PropertyResponse.from_domain(prop) for prop in service.properties(seller_id)]


@router.post("/{seller_id}/properties", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def publish_property(
    seller_id: UUID,
    body: PublishRequest,
    service: SellerService = Depends(get_seller_service),
):
    """Create a listing and publish it as FOR_SALE for this seller."""
    logger.info("Publish requested", seller_id=str(seller_id), title=body.title)
    listing = body.model_dump(exclude={"status"})
    property = service.publish(seller_id, listing)
    return PropertyResponse.from_domain(property)


@router.get("/{seller_id}/offers", response_model=List[OfferResponse])
async def list_received_offers(seller_id: UUID, service: SellerService = Depends(get_seller_service)):
    """Offers made on any of this seller's properties."""
    return [OfferResponse.from_domain(offer) for offer in service.received_offers(seller_id)]
