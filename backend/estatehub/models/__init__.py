"""
Domain models for the marketplace
"""

from .enums import OfferStatus, PropertyStatus, PropertyType, parse_enum
from .offer import Offer
from .property import Property
from .user import Buyer, Seller, User

__all__ = [
    'Buyer',
    'Offer',
    'OfferStatus',
    'Property',
    'PropertyStatus',
    'PropertyType',
    'Seller',
    'User',
    'parse_enum',
]
