"""
Property model definition
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from .enums import PropertyStatus, PropertyType


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Property(BaseModel):
    """A listing owned by a seller"""
    property_id: UUID = Field(default_factory=uuid4, frozen=True)
    title: str
    owner_id: Optional[UUID] = None
    description: str = ""
    location: str = ""
    price: float
    size: float
    property_type: PropertyType
    status: PropertyStatus = PropertyStatus.FOR_SALE
    features: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    class Config:
        validate_assignment = True

    def add_feature(self, name: str, value: Any) -> None:
        self.features[name] = value
        self.touch()

    def touch(self) -> None:
        self.updated_at = utcnow()

    def __repr__(self):
        return f"<Property(id={self.property_id}, type={self.property_type.value}, status={self.status.value})>"
