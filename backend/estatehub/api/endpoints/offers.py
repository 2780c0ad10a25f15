from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from estatehub.api.deps import get_offer_service, get_services
from estatehub.api.schemas import (
    OfferCreate,
    OfferResponse,
    RespondRequest,
    StatusUpdate,
    StatusUpdateResponse,
)
from estatehub.core.logging import get_logger
from estatehub.services import MarketplaceServices, OfferService, StatusChangeResult

logger = get_logger(__name__)
router = APIRouter()


def _status_response(result: StatusChangeResult) -> StatusUpdateResponse:
    return StatusUpdateResponse(
        offer=OfferResponse.from_domain(result.offer),
        email_notification_sent=result.email_notification_sent,
        message=result.message,
        auto_rejected_offer_ids=[offer.offer_id for offer in result.auto_rejected],
    )


@router.post("", response_model=OfferResponse, status_code=status.HTTP_201_CREATED)
async def create_offer(body: OfferCreate, service: OfferService = Depends(get_offer_service)):
    """Place an offer on a property."""
    offer = service.create(body.property_id, body.buyer_id, body.amount)
    return OfferResponse.from_domain(offer)


@router.get("", response_model=List[OfferResponse])
async def list_offers(service: OfferService = Depends(get_offer_service)):
    """List every offer."""
    return [OfferResponse.from_domain(offer) for offer in service.list()]


@router.get("/property/{property_id}", response_model=List[OfferResponse])
async def list_offers_for_property(property_id: UUID, service: OfferService = Depends(get_offer_service)):
    """List the offers made on one property."""
    return [OfferResponse.from_domain(offer) for offer in service.list_by_property(property_id)]


@router.get("/{offer_id}", response_model=OfferResponse)
async def get_offer(offer_id: UUID, service: OfferService = Depends(get_offer_service)):
    """Get offer by ID."""
    return OfferResponse.from_domain(service.get(offer_id))


@router.put("/{offer_id}/status", response_model=StatusUpdateResponse)
async def update_offer_status(
    offer_id: UUID,
    body: StatusUpdate,
    service: OfferService = Depends(get_offer_service),
):
    """Set an offer's status and notify the buyer."""
    logger.info("Offer status update requested", offer_id=str(offer_id), status=body.status)
    result = await service.set_status(offer_id, body.status)
    return _status_response(result)


@router.post("/{offer_id}/respond", response_model=StatusUpdateResponse)
async def respond_to_offer(
    offer_id: UUID,
    body: RespondRequest,
    services: MarketplaceServices = Depends(get_services),
):
    """Accept or reject an offer on behalf of the property's seller."""
    offer = services.offers.get(offer_id)
    seller = services.sellers.get(body.seller_id) if body.seller_id is not None else None
    result = await services.offers.respond(offer, body.accept, seller=seller)
    return _status_response(result)


@router.delete("/{offer_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_offer(offer_id: UUID, service: OfferService = Depends(get_offer_service)):
    """Delete (cancel) an offer."""
    service.delete(offer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
