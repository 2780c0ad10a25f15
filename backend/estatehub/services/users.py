"""
Buyer and seller registries
"""

from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from estatehub.core.exceptions import ValidationError
from estatehub.core.logging import get_logger
from estatehub.db.store import MarketplaceStore
from estatehub.models import Buyer, Offer, Property, Seller
from estatehub.services.policies import DeletePolicy, MarketplacePolicy
from estatehub.services.properties import PropertyService

logger = get_logger(__name__)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class BuyerService:
    """Buyer registry plus the buyer's view of their offers"""

    def __init__(self, store: MarketplaceStore, policy: Optional[MarketplacePolicy] = None):
        self.store = store
        self.policy = policy or MarketplacePolicy()

    def create(
        self,
        first_name: Optional[str],
        last_name: Optional[str],
        email: Optional[str],
        username: Optional[str],
        password: Optional[str],
        budget: Optional[float],
        property_types_of_interest: Optional[Iterable[str]] = None,
    ) -> Buyer:
        if budget is None or budget <= 0:
            raise ValidationError("Budget must be positive", details={"budget": budget})
        if _blank(email):
            raise ValidationError("Email is required")

        buyer = Buyer(
            first_name=first_name,
            last_name=last_name,
            email=email,
            username=username,
            password=password,
            budget=budget,
            property_types_of_interest=set(property_types_of_interest or ()),
        )
        self.store.buyers.put(buyer.user_id, buyer)
        logger.info("Buyer registered", buyer_id=str(buyer.user_id))
        return buyer

    def get(self, buyer_id: UUID) -> Buyer:
        return self.store.buyers.require(buyer_id)

    def list(self) -> List[Buyer]:
        return self.store.buyers.values()

    def update_budget(self, buyer_id: UUID, budget: Optional[float]) -> Buyer:
        buyer = self.store.buyers.require(buyer_id)
        if budget is None or budget <= 0:
            raise ValidationError("Budget must be positive", details={"budget": budget})
        buyer.budget = budget
        logger.info("Buyer budget updated", buyer_id=str(buyer_id), budget=budget)
        return buyer

    def add_property_type_of_interest(self, buyer_id: UUID, property_type: str) -> Buyer:
        if _blank(property_type):
            raise ValidationError("Property type is required")
        buyer = self.store.buyers.require(buyer_id)
        buyer.add_property_type_of_interest(property_type.strip())
        return buyer

    def offers(self, buyer_id: UUID) -> List[Offer]:
        self.store.buyers.require(buyer_id)
        return self.store.offers_by_buyer(buyer_id)

    def delete(self, buyer_id: UUID) -> Buyer:
        with self.store.lock:
            buyer = self.store.buyers.require(buyer_id)
            offers = self.store.offers_by_buyer(buyer_id)
            if offers and self.policy.delete_policy is DeletePolicy.RESTRICT:
                raise ValidationError(
                    f"Buyer still has {len(offers)} offer(s)",
                    details={"buyer_id": str(buyer_id)},
                )
            if self.policy.delete_policy is DeletePolicy.CASCADE:
                for offer in offers:
                    self.store.offers.remove(offer.offer_id)
            self.store.buyers.remove(buyer_id)

        logger.info("Buyer deleted", buyer_id=str(buyer_id), offers=len(offers))
        return buyer


class SellerService:
    """Seller registry plus the seller's owned listings and received offers"""

    UPDATABLE_FIELDS = ("first_name", "last_name", "email", "username", "password")

    def __init__(
        self,
        store: MarketplaceStore,
        properties: PropertyService,
        policy: Optional[MarketplacePolicy] = None,
    ):
        self.store = store
        self.property_service = properties
        self.policy = policy or MarketplacePolicy()

    def create(
        self,
        first_name: Optional[str],
        last_name: Optional[str],
        email: Optional[str],
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> Seller:
        if _blank(first_name) or _blank(last_name) or _blank(email):
            raise ValidationError("First name, last name, and email are required")

        seller = Seller(
            first_name=first_name,
            last_name=last_name,
            email=email,
            username=username,
            password=password,
        )
        self.store.sellers.put(seller.user_id, seller)
        logger.info("Seller registered", seller_id=str(seller.user_id))
        return seller

    def get(self, seller_id: UUID) -> Seller:
        return self.store.sellers.require(seller_id)

    def list(self) -> List[Seller]:
        return self.store.sellers.values()

    def update(self, seller_id: UUID, **fields: Any) -> Seller:
        """Overwrite only the fields that were supplied"""
        unknown = set(fields) - set(self.UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown seller field(s): {', '.join(sorted(unknown))}")
        for name in ("first_name", "last_name", "email"):
            if name in fields and fields[name] is not None and _blank(fields[name]):
                raise ValidationError(f"{name} cannot be empty")

        changes = {name: value for name, value in fields.items() if not _blank(value)}

        with self.store.lock:
            seller = self.store.sellers.require(seller_id)
            for name, value in changes.items():
                setattr(seller, name, value)

        logger.info("Seller updated", seller_id=str(seller_id), fields=sorted(changes))
        return seller

    def properties(self, seller_id: UUID) -> List[Property]:
        self.store.sellers.require(seller_id)
        return self.store.properties_owned_by(seller_id)

    def received_offers(self, seller_id: UUID) -> List[Offer]:
        self.store.sellers.require(seller_id)
        return self.store.offers_received_by(seller_id)

    def publish(self, seller_id: UUID, listing: Dict[str, Any]) -> Property:
        """Create a listing from `listing` fields and publish it for this seller"""
        seller = self.store.sellers.require(seller_id)
        property = self.property_service.create(owner_id=seller.user_id, **listing)
        return self.property_service.publish(property, seller)

    def delete(self, seller_id: UUID) -> Seller:
        with self.store.lock:
            seller = self.store.sellers.require(seller_id)
            owned = self.store.properties_owned_by(seller_id)
            if owned and self.policy.delete_policy is DeletePolicy.RESTRICT:
                raise ValidationError(
                    f"Seller still owns {len(owned)} propert{'y' if len(owned) == 1 else 'ies'}",
                    details={"seller_id": str(seller_id)},
                )
            if self.policy.delete_policy is DeletePolicy.CASCADE:
                for property in owned:
                    self.property_service.delete(property.property_id)
            self.store.sellers.remove(seller_id)

        logger.info("Seller deleted", seller_id=str(seller_id), properties=len(owned))
        return seller
