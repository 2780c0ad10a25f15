"""Domain models and enum parsing."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from estatehub.core.exceptions import ValidationError
from estatehub.models import (
    Buyer,
    Offer,
    OfferStatus,
    Property,
    PropertyStatus,
    PropertyType,
    Seller,
    parse_enum,
)


@pytest.mark.parametrize("token,expected", [
    ("ACCEPTED", OfferStatus.ACCEPTED),
    ("accepted", OfferStatus.ACCEPTED),
    (" Withdrawn ", OfferStatus.WITHDRAWN),
    (OfferStatus.PENDING, OfferStatus.PENDING),
])
def test_parse_enum(token, expected):
    assert parse_enum(OfferStatus, token, "status") is expected


@pytest.mark.parametrize("token", ["MAYBE", "", None, 3])
def test_parse_enum_rejects_unknown_tokens(token):
    with pytest.raises(ValidationError) as exc_info:
        parse_enum(OfferStatus, token, "status")

    assert exc_info.value.message == "Invalid status. Use: PENDING, ACCEPTED, REJECTED, WITHDRAWN"
    assert exc_info.value.error_code == "VALIDATION_ERROR"


def test_terminal_offer_states():
    assert not OfferStatus.PENDING.is_terminal
    assert all(status.is_terminal for status in (OfferStatus.ACCEPTED, OfferStatus.REJECTED, OfferStatus.WITHDRAWN))


def test_property_defaults():
    property = Property(title="Flat", price=300000, size=60, property_type=PropertyType.APARTMENT)

    assert property.status is PropertyStatus.FOR_SALE
    assert property.features == {}
    assert property.owner_id is None

    property.add_feature("bedrooms", 2)
    assert property.features == {"bedrooms": 2}
    assert property.updated_at is not None


def test_property_id_is_immutable():
    property = Property(title="Flat", price=300000, size=60, property_type=PropertyType.APARTMENT)

    with pytest.raises(PydanticValidationError):
        property.property_id = Property(
            title="Other", price=1, size=1, property_type=PropertyType.HOUSE
        ).property_id


def test_offer_status_assignment_is_validated():
    from uuid import uuid4

    offer = Offer(property_id=uuid4(), buyer_id=uuid4(), amount=100)

    with pytest.raises(PydanticValidationError):
        offer.status = "MAYBE"
    assert offer.status is OfferStatus.PENDING


def test_password_never_serialised():
    buyer = Buyer(first_name="John", last_name="Doe", email="john@buyer.com",
                  username="johndoe", password="pass123", budget=600000)

    assert "password" not in buyer.model_dump()
    assert "pass123" not in repr(buyer)
    assert buyer.password == "pass123"


def test_roles_and_names():
    seller = Seller(first_name="Jane", last_name="Smith", email="jane@seller.com")
    buyer = Buyer(first_name="John", email="john@buyer.com", budget=1)

    assert seller.role == "Seller"
    assert buyer.role == "Buyer"
    assert seller.full_name == "Jane Smith"
    assert buyer.full_name == "John"
