"""
Offer model definition
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from .enums import OfferStatus
from .property import utcnow


class Offer(BaseModel):
    """A buyer's bid against a property.

    Identity, references and amount are frozen at creation; only the status
    (and its timestamp) changes afterwards.
    """
    offer_id: UUID = Field(default_factory=uuid4, frozen=True)
    property_id: UUID = Field(frozen=True)
    buyer_id: UUID = Field(frozen=True)
    amount: float = Field(frozen=True)
    status: OfferStatus = OfferStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    class Config:
        validate_assignment = True

    def __repr__(self):
        return f"<Offer(id={self.offer_id}, amount={self.amount}, status={self.status.value})>"
