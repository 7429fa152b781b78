"""CartSession — корзина и её история как одна единица синхронизации.

Пара "изменение корзины → record" выполняется под одним lock: record другого
вызывающего, вклинившийся между изменением и его record, нарушил бы
соответствие вершины past текущему состоянию корзины.
"""

import logging
import threading
from decimal import Decimal
from typing import List, Optional

from src.core.domain.cart_item import CartItem
from src.core.domain.shopping_cart import RemovalOutcome, ShoppingCart
from src.history.history_manager import CartHistory, HistoryConfig, HistoryResult

logger = logging.getLogger(__name__)


class CartSession:
    """Сессия работы с корзиной.

    При создании сохраняет начальное (пустое) состояние, так что первое же
    изменение можно отменить.
    """

    def __init__(self, config: Optional[HistoryConfig] = None):
        self._lock = threading.Lock()
        self.cart = ShoppingCart()
        self.history = CartHistory(config=config)
        self.history.record(self.cart)

    def add_product(
        self,
        product_id: int,
        product_name: str,
        quantity: int,
        unit_price: Decimal,
    ) -> CartItem:
        with self._lock:
            item = self.cart.add_product(product_id, product_name, quantity, unit_price)
            self.history.record(self.cart)
            return item

    def remove_product(self, product_id: int, quantity_to_remove: int = 0) -> RemovalOutcome:
        """Удаление/уменьшение товара.

        NOT_FOUND не меняет корзину, поэтому снимок не сохраняется и
        redo-история остаётся доступной.
        """
        with self._lock:
            outcome = self.cart.remove_product(product_id, quantity_to_remove)
            if outcome != RemovalOutcome.NOT_FOUND:
                self.history.record(self.cart)
            return outcome

    def clear_cart(self) -> None:
        with self._lock:
            self.cart.clear()
            self.history.record(self.cart)

    def undo(self) -> HistoryResult:
        with self._lock:
            return self.history.undo(self.cart)

    def redo(self) -> HistoryResult:
        with self._lock:
            return self.history.redo(self.cart)

    def history_depth(self) -> int:
        with self._lock:
            return self.history.history_depth()

    def redo_depth(self) -> int:
        with self._lock:
            return self.history.redo_depth()

    def items(self) -> List[CartItem]:
        with self._lock:
            return self.cart.items()

    def total_price(self) -> Decimal:
        with self._lock:
            return self.cart.total_price()

    def summary_lines(self) -> List[str]:
        with self._lock:
            return self.cart.summary_lines()

    def close(self) -> None:
        """Завершение сессии: очистка истории и корзины."""
        with self._lock:
            self.history.reset()
            self.cart.clear()
        logger.info("Cart session closed")

    def __enter__(self) -> "CartSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
