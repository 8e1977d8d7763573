"""
Centralized access to the database models.

Importing this package registers every model with `Base.metadata`, which is
what `create_all()` (startup and tests) relies on.

    from product_api.models import Product
"""

from .product import Product

__all__ = [
    "Product",
]
