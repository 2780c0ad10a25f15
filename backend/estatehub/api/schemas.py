"""
Request and response bodies for the REST API

Bodies use camelCase keys on the wire. Request fields are all optional at the
schema level so that missing or out-of-range values reach the services, which
own the validation rules and their messages.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_domain(cls, obj: BaseModel, **extra: Any):
        data = obj.model_dump(mode="json")
        data.update(extra)
        return cls.model_validate(data)


# Properties

class PropertyFields(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    price: Optional[float] = None
    size: Optional[float] = None
    property_type: Optional[str] = Field(default=None, alias="type")
    status: Optional[str] = None
    features: Optional[Dict[str, Any]] = None


class PropertyCreate(PropertyFields):
    owner_id: Optional[UUID] = None


class PropertyUpdate(PropertyFields):
    pass


class PublishRequest(PropertyFields):
    pass


class PropertyResponse(CamelModel):
    property_id: UUID
    title: str
    owner_id: Optional[UUID] = None
    description: str = ""
    location: str = ""
    price: float
    size: float
    property_type: str = Field(alias="type")
    status: str
    features: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: Optional[datetime] = None


# Offers

class OfferCreate(CamelModel):
    property_id: Optional[UUID] = None
    buyer_id: Optional[UUID] = None
    amount: Optional[float] = None


class StatusUpdate(CamelModel):
    status: Optional[str] = None


class RespondRequest(CamelModel):
    accept: bool
    seller_id: Optional[UUID] = None


class OfferResponse(CamelModel):
    offer_id: UUID
    property_id: UUID
    buyer_id: UUID
    amount: float
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class StatusUpdateResponse(CamelModel):
    offer: OfferResponse
    email_notification_sent: Optional[bool] = None
    message: str
    auto_rejected_offer_ids: List[UUID] = Field(default_factory=list)


# Buyers and sellers

class BuyerCreate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    budget: Optional[float] = None
    property_types_of_interest: Optional[List[str]] = None


class BudgetUpdate(CamelModel):
    budget: Optional[float] = None


class SellerCreate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class SellerUpdate(SellerCreate):
    pass


class UserResponse(CamelModel):
    user_id: UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    role: str

    @classmethod
    def from_domain(cls, obj: BaseModel, **extra: Any):
        return super().from_domain(obj, role=obj.role, **extra)


class BuyerResponse(UserResponse):
    budget: float
    property_types_of_interest: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, obj: BaseModel, **extra: Any):
        return super().from_domain(
            obj, property_types_of_interest=sorted(obj.property_types_of_interest), **extra
        )


class SellerResponse(UserResponse):
    pass
