"""
API endpoints package
"""

from . import health
from . import properties
from . import offers
from . import buyers
from . import sellers
