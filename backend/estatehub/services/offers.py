"""
Offer lifecycle - placing offers and moving them through their status machine
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from uuid import UUID

from estatehub.core.exceptions import NotFoundError, ValidationError
from estatehub.core.logging import get_logger
from estatehub.db.store import MarketplaceStore
from estatehub.models import Buyer, Offer, OfferStatus, Property, Seller, parse_enum
from estatehub.models.property import utcnow
from estatehub.services.notifications import OfferNotifier
from estatehub.services.policies import MarketplacePolicy

logger = get_logger(__name__)


@dataclass
class StatusChange:
    """One committed offer transition, waiting to be announced"""
    offer: Offer
    old_status: OfferStatus
    new_status: OfferStatus


@dataclass
class StatusChangeResult:
    """Outcome of a status update as reported back to the caller"""
    offer: Offer
    old_status: OfferStatus
    new_status: OfferStatus
    email_notification_sent: Optional[bool]
    auto_rejected: List[Offer] = field(default_factory=list)

    @property
    def message(self) -> str:
        if self.email_notification_sent is None:
            return "Offer status updated; email notification queued"
        if self.email_notification_sent:
            return "Offer status updated and email notification sent"
        return "Offer status updated but email notification failed"


class OfferService:
    """Places offers and applies status transitions"""

    def __init__(self, store: MarketplaceStore, notifier: OfferNotifier, policy: Optional[MarketplacePolicy] = None):
        self.store = store
        self.notifier = notifier
        self.policy = policy or MarketplacePolicy()

    # Queries

    def get(self, offer_id: UUID) -> Offer:
        return self.store.offers.require(offer_id)

    def list(self) -> List[Offer]:
        return self.store.offers.values()

    def list_by_property(self, property_id: UUID) -> List[Offer]:
        return self.store.offers_for_property(property_id)

    def list_by_buyer(self, buyer_id: UUID) -> List[Offer]:
        return self.store.offers_by_buyer(buyer_id)

    # Creation

    def place(self, property: Optional[Property], buyer: Optional[Buyer], amount: float) -> Offer:
        """Record a buyer's bid on a property. New offers always start PENDING."""
        if property is None:
            raise ValidationError("Property is required to place an offer")
        if buyer is None:
            raise ValidationError("Buyer is required to place an offer")
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be positive", details={"amount": amount})

        offer = Offer(property_id=property.property_id, buyer_id=buyer.user_id, amount=amount)
        self.store.offers.put(offer.offer_id, offer)

        logger.info("Offer placed",
                    offer_id=str(offer.offer_id),
                    property_id=str(property.property_id),
                    buyer_id=str(buyer.user_id),
                    amount=amount)
        return offer

    def create(self, property_id: Optional[UUID], buyer_id: Optional[UUID], amount: float) -> Offer:
        """Place an offer from identifiers, resolving both references first"""
        if property_id is None:
            raise ValidationError("propertyId is required")
        if buyer_id is None:
            raise ValidationError("buyerId is required")
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be positive", details={"amount": amount})
        property = self.store.properties.require(property_id)
        buyer = self.store.buyers.require(buyer_id)
        return self.place(property, buyer, amount)

    def delete(self, offer_id: UUID) -> Offer:
        removed = self.store.offers.remove(offer_id)
        if removed is None:
            raise NotFoundError("Offer not found", details={"id": str(offer_id)})
        logger.info("Offer deleted", offer_id=str(offer_id))
        return removed

    # Transitions

    async def respond(self, offer: Optional[Offer], accept: bool, seller: Optional[Seller] = None) -> StatusChangeResult:
        """A seller's accept/reject decision on an offer.

        When `seller` is given it must own the property the offer was made on.
        """
        if offer is None:
            raise ValidationError("An offer is required to respond")

        if seller is not None:
            property = self.store.properties.get(offer.property_id)
            if property is None or property.owner_id != seller.user_id:
                raise ValidationError("Seller does not own the property this offer was made on")

        new_status = OfferStatus.ACCEPTED if accept else OfferStatus.REJECTED
        return await self._transition(offer.offer_id, new_status)

    async def set_status(self, offer_id: UUID, status) -> StatusChangeResult:
        """Direct status update. Unknown tokens fail before anything changes."""
        new_status = parse_enum(OfferStatus, status, "status")
        return await self._transition(offer_id, new_status)

    async def withdraw(self, offer_id: UUID) -> StatusChangeResult:
        return await self._transition(offer_id, OfferStatus.WITHDRAWN)

    async def _transition(self, offer_id: UUID, new_status: OfferStatus) -> StatusChangeResult:
        change, competing = self._commit(offer_id, new_status)

        sent = await self._announce(change)
        for rejected in competing:
            await self._announce(rejected)

        return StatusChangeResult(
            offer=change.offer,
            old_status=change.old_status,
            new_status=change.new_status,
            email_notification_sent=sent,
            auto_rejected=[rejected.offer for rejected in competing],
        )

    def _commit(self, offer_id: UUID, new_status: OfferStatus) -> Tuple[StatusChange, List[StatusChange]]:
        """Apply a transition and the acceptance policy under the store lock"""
        with self.store.lock:
            offer = self.store.offers.require(offer_id)
            old_status = offer.status
            if self.policy.enforce_terminal_states and old_status.is_terminal and old_status is not new_status:
                raise ValidationError(
                    f"Offer is already {old_status.value} and cannot become {new_status.value}",
                    details={"offer_id": str(offer_id)},
                )

            self._set(offer, new_status)
            change = StatusChange(offer, old_status, new_status)
            competing: List[StatusChange] = []
            if new_status is OfferStatus.ACCEPTED:
                competing = self._apply_acceptance_policy(offer)

        logger.info("Offer status changed",
                    offer_id=str(offer_id),
                    old_status=old_status.value,
                    new_status=new_status.value,
                    auto_rejected=len(competing))
        return change, competing

    def _apply_acceptance_policy(self, accepted: Offer) -> List[StatusChange]:
        status = self.policy.accepted_offer_property_status
        if status is not None:
            property = self.store.properties.get(accepted.property_id)
            if property is not None and property.status is not status:
                property.status = status
                property.touch()
                logger.info("Property status set by accepted offer",
                            property_id=str(property.property_id),
                            status=status.value)

        rejected: List[StatusChange] = []
        if self.policy.auto_reject_competing_offers:
            for other in self.store.offers_for_property(accepted.property_id):
                if other.offer_id != accepted.offer_id and other.status is OfferStatus.PENDING:
                    self._set(other, OfferStatus.REJECTED)
                    rejected.append(StatusChange(other, OfferStatus.PENDING, OfferStatus.REJECTED))
        return rejected

    @staticmethod
    def _set(offer: Offer, status: OfferStatus) -> None:
        offer.status = status
        offer.updated_at = utcnow()

    async def _announce(self, change: StatusChange) -> Optional[bool]:
        buyer = self.store.buyers.get(change.offer.buyer_id)
        recipient = buyer.email if buyer is not None else None
        return await self.notifier.notify(change.offer, change.old_status, change.new_status, recipient)
