"""Page Object Model classes for the Evershop admin panel."""

from .admin_landing import AdminLanding
from .admin_login import AdminLogin
from .listing_grid import ListingGrid
from .listing_table import ListingTable
from .navigation import Navigator
from .new_product import NewProduct
from .page_factory import PageFactory

__all__ = [
    "AdminLanding",
    "AdminLogin",
    "ListingGrid",
    "ListingTable",
    "Navigator",
    "NewProduct",
    "PageFactory",
]
