from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from estatehub.api.deps import get_buyer_service
from estatehub.api.schemas import BudgetUpdate, BuyerCreate, BuyerResponse, OfferResponse
from estatehub.services import BuyerService

router = APIRouter()


@router.post("", response_model=BuyerResponse, status_code=status.HTTP_201_CREATED)
async def create_buyer(body: BuyerCreate, service: BuyerService = Depends(get_buyer_service)):
    buyer = service.create(
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        username=body.username,
        password=body.password,
        budget=body.budget,
        property_types_of_interest=body.property_types_of_interest,
    )
    return BuyerResponse.from_domain(buyer)


@router.get("", response_model=List[BuyerResponse])
async def list_buyers(service: BuyerService = Depends(get_buyer_service)):
    return [BuyerResponse.from_domain(buyer) for buyer in service.list()]


@router.get("/{buyer_id}", response_model=BuyerResponse)
async def get_buyer(buyer_id: UUID, service: BuyerService = Depends(get_buyer_service)):
    return BuyerResponse.from_domain(service.get(buyer_id))


@router.put("/{buyer_id}/budget", response_model=BuyerResponse)
async def update_buyer_budget(
    buyer_id: UUID,
    body: BudgetUpdate,
    service: BuyerService = Depends(get_buyer_service),
):
    return BuyerResponse.from_domain(service.update_budget(buyer_id, body.budget))


@router.get("/{buyer_id}/offers", response_model=List[OfferResponse])
async def list_buyer_offers(buyer_id: UUID, service: BuyerService = Depends(get_buyer_service)):
    """Offers placed by this buyer."""
    return [OfferResponse.from_domain(offer) for offer in service.offers(buyer_id)]


@router.delete("/{buyer_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_buyer(buyer_id: UUID, service: BuyerService = Depends(get_buyer_service)):
    service.delete(buyer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
