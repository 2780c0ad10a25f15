"""
Enumerations for marketplace entities
"""

import enum
from typing import Type, TypeVar

from estatehub.core.exceptions import ValidationError

E = TypeVar("E", bound=enum.Enum)


class PropertyType(str, enum.Enum):
    APARTMENT = "APARTMENT"
    HOUSE = "HOUSE"
    VILLA = "VILLA"
    STUDIO = "STUDIO"
    LOFT = "LOFT"
    CHALET = "CHALET"
    LAND = "LAND"
    COMMERCIAL = "COMMERCIAL"


class PropertyStatus(str, enum.Enum):
    FOR_SALE = "FOR_SALE"
    PENDING = "PENDING"
    SOLD = "SOLD"
    OFF_MARKET = "OFF_MARKET"


class OfferStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"

    @property
    def is_terminal(self) -> bool:
        return self is not OfferStatus.PENDING


def parse_enum(enum_cls: Type[E], value, field_name: str = "value") -> E:
    """Parse a token into `enum_cls`, case-insensitively.

    Raises ValidationError listing the accepted values when the token is unknown.
    """
    if isinstance(value, enum_cls):
        return value
    token = value.strip().upper() if isinstance(value, str) else None
    if token:
        try:
            return enum_cls(token)
        except ValueError:
            pass
    allowed = ", ".join(member.value for member in enum_cls)
    raise ValidationError(
        f"Invalid {field_name}. Use: {allowed}",
        details={"field": field_name, "value": value},
    )
