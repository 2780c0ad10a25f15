"""
Demo data bootstrap
"""

from estatehub.core.logging import get_logger
from estatehub.db.store import MarketplaceStore
from estatehub.models import Buyer, Seller

logger = get_logger(__name__)

DEMO_BUYERS = [
    dict(first_name="Alice", last_name="Martin", email="alice@demo.com",
         username="alice", password="pass123", budget=350000),
    dict(first_name="Jonathan", last_name="Keller", email="jonathan@demo.com",
         username="jon", password="pass456", budget=550000),
]

DEMO_SELLERS = [
    dict(first_name="Demo", last_name="Seller", email="seller@demo.com",
         username="seller", password="pass789"),
]


def init_db(store: MarketplaceStore) -> None:
    """Load the demo buyers and sellers into an empty store"""
    with store.lock:
        if len(store.buyers) or len(store.sellers):
            logger.info("Store already populated, skipping demo data")
            return

        for fields in DEMO_BUYERS:
            buyer = Buyer(**fields)
            store.buyers.put(buyer.user_id, buyer)
        for fields in DEMO_SELLERS:
            seller = Seller(**fields)
            store.sellers.put(seller.user_id, seller)

    logger.info("Demo data loaded", **store.counts())
