"""
In-memory storage for the marketplace
"""

from .store import MarketplaceStore, Table

__all__ = ['MarketplaceStore', 'Table']
