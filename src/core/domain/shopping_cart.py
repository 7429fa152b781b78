"""
ShoppingCart — Изменяемая корзина покупок

Агрегат, над которым работает приложение: упорядоченное по добавлению
отображение product_id → CartItem.

Инварианты:
- не более одной строки на product_id
- у каждой строки в корзине quantity > 0 (операция, которая довела бы
  количество до ≤ 0, удаляет строку целиком)

Корзина ничего не знает об истории изменений: сохранение снимков после
изменения — ответственность вызывающего кода (см. CartHistory, CartSession).
"""

import logging
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from .cart_item import CartItem
from .cart_snapshot import CartSnapshot

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class RemovalOutcome(str, Enum):
    """Результат remove_product"""

    REMOVED = "removed"  # Строка удалена полностью
    DECREMENTED = "decremented"  # Количество уменьшено
    NOT_FOUND = "not_found"  # Товара нет в корзине, ничего не изменилось


# =============================================================================
# SHOPPING CART
# =============================================================================


class ShoppingCart:
    """
    Корзина покупок.

    Владеет своими строками эксклюзивно: наружу отдаются только
    immutable CartItem и их копии.
    """

    def __init__(self) -> None:
        self._items: Dict[int, CartItem] = {}

    # -------------------------------------------------------------------------
    # Мутации
    # -------------------------------------------------------------------------

    def add_product(
        self,
        product_id: int,
        product_name: str,
        quantity: int,
        unit_price: Decimal,
    ) -> CartItem:
        """
        Добавление товара или увеличение количества.

        Если товар уже в корзине, количество увеличивается на quantity, а
        название и цена остаются от первого добавления.

        Args:
            product_id: Идентификатор товара
            product_name: Название товара
            quantity: Добавляемое количество (> 0)
            unit_price: Цена за единицу (≥ 0)

        Returns:
            Строка корзины после изменения

        Raises:
            ValueError: Если quantity ≤ 0
            ValidationError: Если данные строки невалидны (новый товар)
        """
        if quantity <= 0:
            raise ValueError(f"quantity {quantity} must be positive")

        existing = self._items.get(product_id)
        if existing is not None:
            updated = existing.with_quantity(existing.quantity + quantity)
            self._items[product_id] = updated
            logger.debug(
                "Updated quantity of '%s' (ID: %s): %s",
                updated.product_name,
                product_id,
                updated.quantity,
            )
            return updated

        item = CartItem(
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
        )
        self._items[product_id] = item
        logger.debug("Added '%s' (ID: %s): %s", product_name, product_id, quantity)
        return item

    def remove_product(self, product_id: int, quantity_to_remove: int = 0) -> RemovalOutcome:
        """
        Удаление товара или уменьшение количества.

        quantity_to_remove ≤ 0 или ≥ текущего количества удаляет строку
        целиком; иначе количество уменьшается.

        Args:
            product_id: Идентификатор товара
            quantity_to_remove: Сколько убрать (0 — удалить полностью)

        Returns:
            RemovalOutcome; NOT_FOUND если товара нет в корзине
        """
        item = self._items.get(product_id)
        if item is None:
            logger.info("Product ID %s not found in cart", product_id)
            return RemovalOutcome.NOT_FOUND

        if quantity_to_remove <= 0 or quantity_to_remove >= item.quantity:
            del self._items[product_id]
            logger.debug("Removed '%s' (ID: %s) from cart", item.product_name, product_id)
            return RemovalOutcome.REMOVED

        updated = item.with_quantity(item.quantity - quantity_to_remove)
        self._items[product_id] = updated
        logger.debug(
            "Decreased quantity of '%s' (ID: %s): %s left",
            updated.product_name,
            product_id,
            updated.quantity,
        )
        return RemovalOutcome.DECREMENTED

    def clear(self) -> None:
        """Полная очистка корзины."""
        self._items.clear()
        logger.debug("Cart cleared")

    # -------------------------------------------------------------------------
    # Снимки
    # -------------------------------------------------------------------------

    def save_state(self, ts_utc_ms: Optional[int] = None) -> CartSnapshot:
        """
        Снимок текущего состояния.

        Args:
            ts_utc_ms: Timestamp снимка; по умолчанию текущее время

        Returns:
            CartSnapshot с независимыми копиями всех строк
        """
        snapshot = CartSnapshot.capture(self._items.values(), ts_utc_ms=ts_utc_ms)
        logger.debug("Saved cart state (%s items)", snapshot.items_count())
        return snapshot

    def restore_state(self, snapshot: CartSnapshot) -> None:
        """
        Восстановление состояния из снимка.

        Текущее содержимое отбрасывается целиком (без слияния).

        Args:
            snapshot: Снимок для восстановления

        Raises:
            ValueError: Если snapshot is None
        """
        if snapshot is None:
            raise ValueError("Cannot restore cart state: snapshot is None")

        self._items = {item.product_id: item for item in snapshot.get_saved_state()}
        logger.debug(
            "Restored cart state from snapshot at %s",
            snapshot.created_at().strftime("%H:%M:%S"),
        )

    # -------------------------------------------------------------------------
    # Наблюдатели
    # -------------------------------------------------------------------------

    def items(self) -> List[CartItem]:
        """Строки корзины в порядке добавления."""
        return list(self._items.values())

    def get_item(self, product_id: int) -> Optional[CartItem]:
        return self._items.get(product_id)

    def items_count(self) -> int:
        """Количество различных товаров (строк)."""
        return len(self._items)

    def total_quantity(self) -> int:
        """Суммарное количество единиц товара."""
        return sum(item.quantity for item in self._items.values())

    def total_price(self) -> Decimal:
        """Итоговая стоимость корзины."""
        return sum((item.total_price() for item in self._items.values()), Decimal("0"))

    def is_empty(self) -> bool:
        return not self._items

    def summary_lines(self) -> List[str]:
        """
        Текстовое представление корзины построчно.

        Returns:
            Список строк для вывода (без завершающих переводов строки)
        """
        if not self._items:
            return ["Cart is empty."]

        lines = ["=== CART CONTENTS ==="]
        lines.extend(str(item) for item in self._items.values())
        lines.append(f"TOTAL: {self.total_price():.2f}")
        lines.append(f"Items: {self.total_quantity()} pcs.")
        return lines

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._items

    def __repr__(self) -> str:
        return f"ShoppingCart(items={self.items()!r})"
