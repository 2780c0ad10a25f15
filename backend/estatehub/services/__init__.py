"""
Marketplace services wired around one store
"""

from dataclasses import dataclass
from typing import Optional

from estatehub.clients.email import EmailClient, build_email_client
from estatehub.core.config import Settings
from estatehub.core.exceptions import ConfigurationError
from estatehub.db.store import MarketplaceStore
from estatehub.services.notifications import DispatchMode, OfferNotifier
from estatehub.services.offers import OfferService, StatusChangeResult
from estatehub.services.policies import DeletePolicy, MarketplacePolicy
from estatehub.services.properties import PropertyService
from estatehub.services.users import BuyerService, SellerService


@dataclass
class MarketplaceServices:
    store: MarketplaceStore
    email_client: EmailClient
    notifier: OfferNotifier
    policy: MarketplacePolicy
    offers: OfferService
    properties: PropertyService
    buyers: BuyerService
    sellers: SellerService

    async def aclose(self) -> None:
        await self.notifier.drain()
        await self.email_client.aclose()


def build_services(
    settings: Settings,
    store: Optional[MarketplaceStore] = None,
    email_client: Optional[EmailClient] = None,
) -> MarketplaceServices:
    """Create the services for one application instance"""
    store = store or MarketplaceStore()
    email_client = email_client or build_email_client(settings)
    policy = MarketplacePolicy.from_settings(settings)
    try:
        mode = DispatchMode(settings.EMAIL_DISPATCH_MODE.strip().lower())
    except ValueError as e:
        raise ConfigurationError("Invalid EMAIL_DISPATCH_MODE. Use: inline, background") from e
    notifier = OfferNotifier(email_client, default_recipient=settings.DEFAULT_NOTIFICATION_EMAIL, mode=mode)
    properties = PropertyService(store, policy)

    return MarketplaceServices(
        store=store,
        email_client=email_client,
        notifier=notifier,
        policy=policy,
        offers=OfferService(store, notifier, policy),
        properties=properties,
        buyers=BuyerService(store, policy),
        sellers=SellerService(store, properties, policy),
    )


__all__ = [
    'BuyerService',
    'DeletePolicy',
    'DispatchMode',
    'MarketplacePolicy',
    'MarketplaceServices',
    'OfferNotifier',
    'OfferService',
    'PropertyService',
    'SellerService',
    'StatusChangeResult',
    'build_services',
]
