"""
In-memory marketplace store
"""

import threading
from typing import Callable, Dict, Generic, Iterator, List, Optional, TypeVar
from uuid import UUID

from estatehub.core.exceptions import NotFoundError
from estatehub.models import Buyer, Offer, Property, Seller

T = TypeVar("T")


class Table(Generic[T]):
    """Identifier-keyed rows guarded by the owning store's lock.

    Reads return snapshots, so callers can iterate while other requests write.
    """

    def __init__(self, label: str, lock: threading.RLock):
        self.label = label
        self._lock = lock
        self._rows: Dict[UUID, T] = {}

    def get(self, row_id: UUID) -> Optional[T]:
        with self._lock:
            return self._rows.get(row_id)

    def require(self, row_id: UUID) -> T:
        """Get a row or raise NotFoundError"""
        row = self.get(row_id)
        if row is None:
            raise NotFoundError(f"{self.label} not found", details={"id": str(row_id)})
        return row

    def put(self, row_id: UUID, row: T) -> T:
        with self._lock:
            self._rows[row_id] = row
        return row

    def remove(self, row_id: UUID) -> Optional[T]:
        with self._lock:
            return self._rows.pop(row_id, None)

    def values(self) -> List[T]:
        with self._lock:
            return list(self._rows.values())

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        with self._lock:
            return [row for row in self._rows.values() if predicate(row)]

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()

    def __contains__(self, row_id: object) -> bool:
        with self._lock:
            return row_id in self._rows

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def __iter__(self) -> Iterator[T]:
        return iter(self.values())


class MarketplaceStore:
    """Authoritative tables for properties, offers, buyers and sellers.

    One instance is owned by each running application and handed to the
    services that need it. Every table shares a single re-entrant lock, so a
    multi-table change (cascade delete, auto-rejecting competing offers) can
    hold `store.lock` for its whole duration.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.properties: Table[Property] = Table("Property", self.lock)
        self.offers: Table[Offer] = Table("Offer", self.lock)
        self.buyers: Table[Buyer] = Table("Buyer", self.lock)
        self.sellers: Table[Seller] = Table("Seller", self.lock)

    # Derived relationship queries

    def offers_for_property(self, property_id: UUID) -> List[Offer]:
        return self.offers.filter(lambda offer: offer.property_id == property_id)

    def offers_by_buyer(self, buyer_id: UUID) -> List[Offer]:
        return self.offers.filter(lambda offer: offer.buyer_id == buyer_id)

    def properties_owned_by(self, seller_id: UUID) -> List[Property]:
        return self.properties.filter(lambda prop: prop.owner_id == seller_id)

    def offers_received_by(self, seller_id: UUID) -> List[Offer]:
        with self.lock:
            owned = {prop.property_id for prop in self.properties_owned_by(seller_id)}
            return self.offers.filter(lambda offer: offer.property_id in owned)

    def counts(self) -> Dict[str, int]:
        with self.lock:
            return {
                "properties": len(self.properties),
                "offers": len(self.offers),
                "buyers": len(self.buyers),
                "sellers": len(self.sellers),
            }

    def clear(self) -> None:
        with self.lock:
            for table in (self.offers, self.properties, self.buyers, self.sellers):
                table.clear()
