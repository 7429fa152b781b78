"""
Domain models and value objects.

Contains the cart domain: CartItem, ShoppingCart, CartSnapshot.
"""

from src.core.domain.cart_item import CartItem
from src.core.domain.cart_snapshot import (
    CONTRACT_SCHEMA_VERSION,
    CartSnapshot,
    now_utc_ms,
)
from src.core.domain.shopping_cart import RemovalOutcome, ShoppingCart

__all__ = [
    # Cart item model
    "CartItem",
    # Snapshot model
    "CartSnapshot",
    "CONTRACT_SCHEMA_VERSION",
    "now_utc_ms",
    # Aggregate
    "ShoppingCart",
    "RemovalOutcome",
]
