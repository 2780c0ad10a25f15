"""
Property publication and listing management
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from estatehub.core.exceptions import NotFoundError, ValidationError
from estatehub.core.logging import get_logger
from estatehub.db.store import MarketplaceStore
from estatehub.models import Property, PropertyStatus, PropertyType, Seller, parse_enum
from estatehub.services.policies import DeletePolicy, MarketplacePolicy

logger = get_logger(__name__)


def _require_positive(value: Optional[float], field_name: str) -> None:
    if value is None or value <= 0:
        raise ValidationError(f"{field_name} must be positive", details={field_name.lower(): value})


def _supplied(value: Any) -> bool:
    """True for values a partial update should apply: not None and not an empty string"""
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


class PropertyService:
    """Creates, publishes, updates and searches property listings"""

    def __init__(self, store: MarketplaceStore, policy: Optional[MarketplacePolicy] = None):
        self.store = store
        self.policy = policy or MarketplacePolicy()

    def get(self, property_id: UUID) -> Property:
        return self.store.properties.require(property_id)

    def list(self) -> List[Property]:
        return self.store.properties.values()

    def list_by_owner(self, seller_id: UUID) -> List[Property]:
        return self.store.properties_owned_by(seller_id)

    def search(self, location: Optional[str] = None) -> List[Property]:
        """Case-insensitive exact match on location. No filter returns everything."""
        if location is None or not location.strip():
            return self.list()
        wanted = location.strip().casefold()
        return self.store.properties.filter(
            lambda prop: bool(prop.location) and prop.location.strip().casefold() == wanted
        )

    def create(
        self,
        title: Optional[str],
        owner_id: Optional[UUID],
        price: Optional[float],
        size: Optional[float],
        property_type,
        description: Optional[str] = None,
        location: Optional[str] = None,
        status=None,
        features: Optional[Dict[str, Any]] = None,
    ) -> Property:
        """Create a listing directly, outside of a seller's publish action"""
        if not _supplied(title):
            raise ValidationError("Title is required")
        if owner_id is None:
            raise ValidationError("ownerId is required")
        if owner_id not in self.store.sellers:
            raise NotFoundError("Seller not found", details={"id": str(owner_id)})
        _require_positive(price, "Price")
        _require_positive(size, "Size")

        property = Property(
            title=title,
            owner_id=owner_id,
            description=description or "",
            location=location or "",
            price=price,
            size=size,
            property_type=parse_enum(PropertyType, property_type, "type"),
        )
        if _supplied(status):
            property.status = parse_enum(PropertyStatus, status, "status")
        if features:
            property.features.update(features)

        self.store.properties.put(property.property_id, property)
        logger.info("Property created",
                    property_id=str(property.property_id),
                    owner_id=str(owner_id),
                    status=property.status.value)
        return property

    def publish(self, property: Optional[Property], seller: Seller) -> Property:
        """Make a property available for offers under the seller's ownership.

        Publishing the same property again only refreshes it; ownership is
        read from the table, so the seller never lists it twice.
        """
        if property is None:
            raise ValidationError("A property is required to publish")

        with self.store.lock:
            if property.owner_id is not None and property.owner_id != seller.user_id:
                raise ValidationError("Property is owned by another seller")
            property.owner_id = seller.user_id
            property.status = PropertyStatus.FOR_SALE
            property.touch()
            self.store.properties.put(property.property_id, property)

        logger.info("Property published",
                    property_id=str(property.property_id),
                    seller_id=str(seller.user_id))
        return property

    def update_details(
        self,
        property_id: UUID,
        title: Optional[str] = None,
        description: Optional[str] = None,
        location: Optional[str] = None,
        price: Optional[float] = None,
        size: Optional[float] = None,
        property_type=None,
        status=None,
        features: Optional[Dict[str, Any]] = None,
    ) -> Property:
        """Partial update: only supplied fields overwrite the stored ones"""
        changes: Dict[str, Any] = {}
        for name, value in (("title", title), ("description", description), ("location", location)):
            if _supplied(value):
                changes[name] = value
        if price is not None:
            _require_positive(price, "Price")
            changes["price"] = price
        if size is not None:
            _require_positive(size, "Size")
            changes["size"] = size
        if _supplied(property_type):
            changes["property_type"] = parse_enum(PropertyType, property_type, "type")
        if _supplied(status):
            changes["status"] = parse_enum(PropertyStatus, status, "status")

        with self.store.lock:
            property = self.store.properties.require(property_id)
            for name, value in changes.items():
                setattr(property, name, value)
            if features:
                property.features.update(features)
            property.touch()

        logger.info("Property updated", property_id=str(property_id), fields=sorted(changes))
        return property

    def delete(self, property_id: UUID) -> Property:
        with self.store.lock:
            property = self.store.properties.require(property_id)
            self._release_offers(property)
            self.store.properties.remove(property_id)

        logger.info("Property deleted", property_id=str(property_id))
        return property

    def _release_offers(self, property: Property) -> None:
        """Apply the delete policy to offers made on a property about to be removed"""
        offers = self.store.offers_for_property(property.property_id)
        if not offers or self.policy.delete_policy is DeletePolicy.ORPHAN:
            return
        if self.policy.delete_policy is DeletePolicy.RESTRICT:
            raise ValidationError(
                f"Property still has {len(offers)} offer(s)",
                details={"property_id": str(property.property_id)},
            )
        for offer in offers:
            self.store.offers.remove(offer.offer_id)
        logger.info("Offers removed with property",
                    property_id=str(property.property_id),
                    count=len(offers))
