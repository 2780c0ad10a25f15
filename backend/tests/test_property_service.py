"""Property creation, publication, partial updates, search and delete policies."""

from uuid import uuid4

import pytest

from estatehub.core.exceptions import NotFoundError, ValidationError
from estatehub.models import Property, PropertyStatus, PropertyType
from estatehub.services import DeletePolicy, MarketplacePolicy, PropertyService


def _new_property(owner_id=None, **overrides):
    fields = dict(
        title="Villa",
        owner_id=owner_id,
        description="Luxury villa",
        location="Geneva",
        price=1200000,
        size=200,
        property_type=PropertyType.VILLA,
    )
    fields.update(overrides)
    return Property(**fields)


def test_publish_sets_for_sale_and_ownership(services, seller):
    property = _new_property(status=PropertyStatus.OFF_MARKET)

    services.properties.publish(property, seller)

    assert property.status is PropertyStatus.FOR_SALE
    assert property.owner_id == seller.user_id
    assert services.sellers.properties(seller.user_id) == [property]


def test_publish_twice_does_not_duplicate(services, seller):
    property = _new_property()

    services.properties.publish(property, seller)
    services.properties.publish(property, seller)

    assert len(services.sellers.properties(seller.user_id)) == 1


def test_publish_multiple_properties(services, seller, listing):
    villa = services.properties.publish(_new_property(), seller)

    owned = services.sellers.properties(seller.user_id)

    assert len(owned) == 2
    assert listing in owned
    assert villa in owned


def test_publish_requires_property(services, seller):
    with pytest.raises(ValidationError, match="property is required"):
        services.properties.publish(None, seller)


def test_publish_rejects_foreign_property(services, seller):
    property = _new_property(owner_id=uuid4())

    with pytest.raises(ValidationError, match="another seller"):
        services.properties.publish(property, seller)


def test_create_applies_status_and_features(services, seller):
    property = services.properties.create(
        title="Loft", owner_id=seller.user_id, price=650000, size=90,
        property_type="loft", status="PENDING", features={"parking": True},
    )

    assert property.property_type is PropertyType.LOFT
    assert property.status is PropertyStatus.PENDING
    assert property.features == {"parking": True}


def test_create_rejects_unknown_type(services, seller):
    with pytest.raises(ValidationError, match="Invalid type"):
        services.properties.create(
            title="Castle", owner_id=seller.user_id, price=9000000, size=2000, property_type="CASTLE",
        )


def test_create_requires_known_owner(services):
    with pytest.raises(NotFoundError, match="Seller not found"):
        services.properties.create(
            title="Loft", owner_id=uuid4(), price=650000, size=90, property_type="LOFT",
        )


def test_create_requires_owner(services):
    with pytest.raises(ValidationError, match="ownerId is required"):
        services.properties.create(
            title="Loft", owner_id=None, price=650000, size=90, property_type="LOFT",
        )


@pytest.mark.parametrize("price,size", [(0, 90), (650000, -1)])
def test_create_requires_positive_price_and_size(services, seller, price, size):
    with pytest.raises(ValidationError, match="must be positive"):
        services.properties.create(
            title="Loft", owner_id=seller.user_id, price=price, size=size, property_type="LOFT",
        )


def test_update_details_only_overwrites_supplied_fields(services, listing):
    services.properties.update_details(
        listing.property_id, title="Renovated Apartment", description="", price=520000,
        features={"balcony": True},
    )

    assert listing.title == "Renovated Apartment"
    assert listing.description == "Beautiful 2BR apartment with lake view"
    assert listing.location == "Zurich"
    assert listing.price == 520000
    assert listing.size == 75.5
    assert listing.features == {"bedrooms": 2, "bathrooms": 1, "balcony": True}
    assert listing.updated_at is not None


def test_update_details_parses_enums(services, listing):
    services.properties.update_details(listing.property_id, property_type="house", status="SOLD")

    assert listing.property_type is PropertyType.HOUSE
    assert listing.status is PropertyStatus.SOLD


def test_update_details_invalid_status_changes_nothing(services, listing):
    with pytest.raises(ValidationError, match="Invalid status"):
        services.properties.update_details(listing.property_id, title="New title", status="GONE")

    assert listing.title == "Modern Apartment"


def test_update_details_unknown_property(services):
    with pytest.raises(NotFoundError):
        services.properties.update_details(uuid4(), title="Nothing")


def test_search_is_case_insensitive_exact_match(services, seller, listing):
    services.properties.create(
        title="Villa", owner_id=seller.user_id, location="Geneva",
        price=1200000, size=200, property_type="VILLA",
    )
    services.properties.create(
        title="Zurich suburbs house", owner_id=seller.user_id, location="Zurich-Oerlikon",
        price=900000, size=150, property_type="HOUSE",
    )

    assert services.properties.search("zURICH") == [listing]
    assert services.properties.search("Bern") == []
    assert len(services.properties.search(None)) == 3
    assert len(services.properties.search("  ")) == 3


def test_delete_cascades_to_offers(services, listing, buyer):
    services.offers.place(listing, buyer, 480000)

    services.properties.delete(listing.property_id)

    assert services.properties.list() == []
    assert services.offers.list() == []


def test_delete_restricted_while_offers_exist(store, services, listing, buyer):
    restricted = PropertyService(store, MarketplacePolicy(delete_policy=DeletePolicy.RESTRICT))
    services.offers.place(listing, buyer, 480000)

    with pytest.raises(ValidationError, match="still has 1 offer"):
        restricted.delete(listing.property_id)
    assert services.properties.get(listing.property_id) is listing


def test_delete_orphans_offers(store, services, listing, buyer):
    orphaning = PropertyService(store, MarketplacePolicy(delete_policy=DeletePolicy.ORPHAN))
    offer = services.offers.place(listing, buyer, 480000)

    orphaning.delete(listing.property_id)

    assert services.offers.list() == [offer]
    assert services.offers.list_by_property(listing.property_id) == [offer]


def test_delete_unknown_property(services):
    with pytest.raises(NotFoundError, match="Property not found"):
        services.properties.delete(uuid4())
