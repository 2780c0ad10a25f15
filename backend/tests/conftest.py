import pytest
from fastapi.testclient import TestClient

from estatehub.clients.email import EmailClient
from estatehub.core.config import Settings
from estatehub.db.store import MarketplaceStore
from estatehub.main import create_app
from estatehub.services import build_services


class RecordingEmailClient(EmailClient):
    """Email client double that remembers every message it was asked to send."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.sent = []
        self.closed = False

    async def send(self, recipient_email, subject, html_content):
        self.sent.append({
            "recipient": recipient_email,
            "subject": subject,
            "html": html_content,
        })
        return self.succeed

    async def aclose(self):
        self.closed = True


def make_settings(**overrides) -> Settings:
    values = {"SEED_DEMO_DATA": False, "EMAIL_ENABLED": False}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    """Settings without demo data or real email delivery."""
    return make_settings()


@pytest.fixture
def email_client():
    return RecordingEmailClient()


@pytest.fixture
def store():
    """Create a fresh store for each test."""
    return MarketplaceStore()


@pytest.fixture
def services(settings, store, email_client):
    return build_services(settings, store=store, email_client=email_client)


@pytest.fixture
def app(settings, store, email_client):
    return create_app(settings, store=store, email_client=email_client)


@pytest.fixture
def client(app):
    """Create a test client for the FastAPI application."""
    return TestClient(app)


@pytest.fixture
def seller(services):
    return services.sellers.create("Jane", "Smith", "jane@seller.com", "janesmith", "pass456")


@pytest.fixture
def buyer(services):
    return services.buyers.create("John", "Doe", "john@buyer.com", "johndoe", "pass123", 600000)


@pytest.fixture
def listing(services, seller):
    """A published apartment in Zurich owned by `seller`."""
    property = services.properties.create(
        title="Modern Apartment",
        owner_id=seller.user_id,
        description="Beautiful 2BR apartment with lake view",
        location="Zurich",
        price=500000,
        size=75.5,
        property_type="APARTMENT",
        features={"bedrooms": 2, "bathrooms": 1},
    )
    return services.properties.publish(property, seller)


@pytest.fixture
def sample_property_data():
    """Sample property payload for the REST API."""
    return {
        "title": "Lakeside Villa",
        "description": "Luxury villa with private dock",
        "location": "Geneva",
        "price": 1200000,
        "size": 200,
        "type": "VILLA",
        "features": {
            "bedrooms": 5,
            "pool": True
        }
    }
