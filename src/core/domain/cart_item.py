"""
CartItem — Модель позиции корзины

Immutable Pydantic модель, представляющая одну строку корзины:
идентификатор товара, название, количество и цену за единицу.
Изменение количества всегда создаёт новый экземпляр (см. ShoppingCart).
"""

from decimal import Decimal

from pydantic import BaseModel, Field


# =============================================================================
# CART ITEM MODEL
# =============================================================================


class CartItem(BaseModel):
    """
    Модель строки корзины.

    Идентичность задаётся product_id: две строки с одинаковым product_id —
    это одна логическая позиция, и внутри корзины они объединяются.

    Immutable модель (frozen=True).
    """

    product_id: int = Field(..., ge=0, description="Идентификатор товара")
    product_name: str = Field(..., min_length=1, description="Название товара")
    quantity: int = Field(..., ge=0, description="Количество (шт.)")
    unit_price: Decimal = Field(..., ge=0, description="Цена за единицу")

    model_config = {"frozen": True}  # Immutable

    def total_price(self) -> Decimal:
        """
        Стоимость строки.

        Returns:
            quantity × unit_price
        """
        return self.quantity * self.unit_price

    def with_quantity(self, quantity: int) -> "CartItem":
        """
        Копия строки с новым количеством.

        Название и цена сохраняются от исходной строки.

        Args:
            quantity: Новое количество

        Returns:
            Новый экземпляр CartItem
        """
        return CartItem(
            product_id=self.product_id,
            product_name=self.product_name,
            quantity=quantity,
            unit_price=self.unit_price,
        )

    def __str__(self) -> str:
        return (
            f"{self.product_name} (ID: {self.product_id}) - "
            f"{self.quantity} × {self.unit_price:.2f} = {self.total_price():.2f}"
        )
