"""
ORM models. Importing this package registers every table on `Base.metadata`
(Alembic autogenerate and test `create_all` rely on that).
"""

from storefront.models.currency import Currency
from storefront.models.customer import Customer
from storefront.models.location import StockLocation, StockLocationAddress
from storefront.models.region import Country, Region
from storefront.models.store import Store, store_currencies
from storefront.models.user import User, UserRole

__all__ = [
    "Country",
    "Currency",
    "Customer",
    "Region",
    "StockLocation",
    "StockLocationAddress",
    "Store",
    "User",
    "UserRole",
    "store_currencies",
]
