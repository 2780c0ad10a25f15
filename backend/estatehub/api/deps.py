"""
Request dependencies resolving the services of the running application
"""

from fastapi import Depends, Request

from estatehub.services import (
    BuyerService,
    MarketplaceServices,
    OfferService,
    PropertyService,
    SellerService,
)


def get_services(request: Request) -> MarketplaceServices:
    return request.app.state.services


def get_offer_service(services: MarketplaceServices = Depends(get_services)) -> OfferService:
    return services.offers


def get_property_service(services: MarketplaceServices = Depends(get_services)) -> PropertyService:
    return services.properties


def get_buyer_service(services: MarketplaceServices = Depends(get_services)) -> BuyerService:
    return services.buyers


def get_seller_service(services: MarketplaceServices = Depends(get_services)) -> SellerService:
    return services.sellers
