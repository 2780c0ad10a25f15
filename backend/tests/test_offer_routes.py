from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from estatehub.models import OfferStatus


@pytest.fixture
def offer(services, listing, buyer):
    return services.offers.place(listing, buyer, 480000)


def test_create_offer(client: TestClient, listing, buyer):
    """Test placing an offer through the API."""
    response = client.post("/api/offers", json={
        "propertyId": str(listing.property_id),
        "buyerId": str(buyer.user_id),
        "amount": 480000,
    })

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "PENDING"
    assert data["amount"] == 480000
    assert data["propertyId"] == str(listing.property_id)
    assert data["buyerId"] == str(buyer.user_id)


@pytest.mark.parametrize("amount", [0, -1000])
def test_create_offer_rejects_non_positive_amount(client: TestClient, listing, buyer, amount):
    response = client.post("/api/offers", json={
        "propertyId": str(listing.property_id),
        "buyerId": str(buyer.user_id),
        "amount": amount,
    })

    assert response.status_code == 400
    assert response.json() == {"error": "Amount must be positive"}


def test_create_offer_unknown_references(client: TestClient, listing, buyer):
    response = client.post("/api/offers", json={
        "propertyId": str(uuid4()),
        "buyerId": str(buyer.user_id),
        "amount": 480000,
    })
    assert response.status_code == 404
    assert response.json() == {"error": "Property not found"}

    response = client.post("/api/offers", json={
        "propertyId": str(listing.property_id),
        "buyerId": str(uuid4()),
        "amount": 480000,
    })
    assert response.status_code == 404
    assert response.json() == {"error": "Buyer not found"}


def test_create_offer_requires_property(client: TestClient, buyer):
    response = client.post("/api/offers", json={"buyerId": str(buyer.user_id), "amount": 1})

    assert response.status_code == 400
    assert response.json() == {"error": "propertyId is required"}


def test_list_and_get_offers(client: TestClient, offer, listing):
    response = client.get("/api/offers")
    assert response.status_code == 200
    assert [item["offerId"] for item in response.json()] == [str(offer.offer_id)]

    response = client.get(f"/api/offers/property/{listing.property_id}")
    assert response.status_code == 200
    assert len(response.json()) == 1

    response = client.get(f"/api/offers/{offer.offer_id}")
    assert response.status_code == 200
    assert response.json()["amount"] == 480000


def test_get_offer_not_found(client: TestClient):
    response = client.get(f"/api/offers/{uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Offer not found"}


def test_update_offer_status(client: TestClient, offer, email_client):
    """Test accepting an offer and notifying the buyer."""
    response = client.put(f"/api/offers/{offer.offer_id}/status", json={"status": "accepted"})

    assert response.status_code == 200
    data = response.json()
    assert data["offer"]["status"] == "ACCEPTED"
    assert data["emailNotificationSent"] is True
    assert data["message"] == "Offer status updated and email notification sent"
    assert data["autoRejectedOfferIds"] == []

    assert len(email_client.sent) == 1
    email = email_client.sent[0]
    assert email["recipient"] == "john@buyer.com"
    assert email["subject"] == f"Offer Status Update - {offer.offer_id}"
    assert "ACCEPTED" in email["html"]


def test_update_offer_status_reports_failed_email(client: TestClient, offer, email_client):
    email_client.succeed = False

    response = client.put(f"/api/offers/{offer.offer_id}/status", json={"status": "REJECTED"})

    assert response.status_code == 200
    assert response.json()["emailNotificationSent"] is False
    assert response.json()["message"] == "Offer status updated but email notification failed"
    assert offer.status is OfferStatus.REJECTED


def test_update_offer_status_survives_email_client_error(client: TestClient, offer, email_client, mocker):
    """A crashing email client is reported as a failed notification."""
    mocker.patch.object(email_client, "send", side_effect=RuntimeError("smtp exploded"))

    response = client.put(f"/api/offers/{offer.offer_id}/status", json={"status": "ACCEPTED"})

    assert response.status_code == 200
    data = response.json()
    assert data["offer"]["status"] == "ACCEPTED"
    assert data["emailNotificationSent"] is False
    assert data["message"] == "Offer status updated but email notification failed"
    assert offer.status is OfferStatus.ACCEPTED


def test_update_offer_status_rejects_unknown_status(client: TestClient, offer, email_client):
    response = client.put(f"/api/offers/{offer.offer_id}/status", json={"status": "MAYBE"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid status. Use: PENDING, ACCEPTED, REJECTED, WITHDRAWN"}
    assert offer.status is OfferStatus.PENDING
    assert email_client.sent == []


def test_update_offer_status_not_found(client: TestClient, email_client):
    response = client.put(f"/api/offers/{uuid4()}/status", json={"status": "ACCEPTED"})

    assert response.status_code == 404
    assert email_client.sent == []


def test_respond_to_offer(client: TestClient, offer, seller):
    response = client.post(f"/api/offers/{offer.offer_id}/respond",
                           json={"accept": False, "sellerId": str(seller.user_id)})

    assert response.status_code == 200
    assert response.json()["offer"]["status"] == "REJECTED"


def test_respond_by_another_seller(client: TestClient, offer, services):
    other = services.sellers.create("Other", "Seller", "other@seller.com")

    response = client.post(f"/api/offers/{offer.offer_id}/respond",
                           json={"accept": True, "sellerId": str(other.user_id)})

    assert response.status_code == 400
    assert response.json() == {"error": "Seller does not own the property this offer was made on"}
    assert offer.status is OfferStatus.PENDING


def test_respond_requires_decision(client: TestClient, offer):
    response = client.post(f"/api/offers/{offer.offer_id}/respond", json={})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid request: accept")


def test_delete_offer(client: TestClient, offer):
    response = client.delete(f"/api/offers/{offer.offer_id}")
    assert response.status_code == 204

    response = client.delete(f"/api/offers/{offer.offer_id}")
    assert response.status_code == 404
    assert response.json() == {"error": "Offer not found"}
