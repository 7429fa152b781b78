"""Session — оркестрация корзины и истории для одного владельца."""

from .cart_session import CartSession

__all__ = [
    "CartSession",
]
