"""
Marketplace participants
"""

from typing import ClassVar, Optional, Set
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class User(BaseModel):
    """Fields shared by buyers and sellers"""
    user_id: UUID = Field(default_factory=uuid4, frozen=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, exclude=True, repr=False)

    role: ClassVar[str] = "User"

    class Config:
        validate_assignment = True

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Buyer(User):
    """Places offers; the budget is advisory and never checked against offer amounts"""
    budget: float
    property_types_of_interest: Set[str] = Field(default_factory=set)

    role: ClassVar[str] = "Buyer"

    def add_property_type_of_interest(self, property_type: str) -> None:
        self.property_types_of_interest.add(property_type)


class Seller(User):
    """Owns properties and responds to offers made on them"""

    role: ClassVar[str] = "Seller"
