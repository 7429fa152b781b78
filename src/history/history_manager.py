"""CartHistory — undo/redo история корзины на двух стеках снимков.

- past: снимки прошлых состояний; верхний элемент == текущее состояние корзины
- future: снимки, отменённые через undo и доступные для redo
- Глубина past ограничена max_history_size; при переполнении вытесняется
  самый старый снимок (дно стека), порядок остальных сохраняется
- Любой record очищает future (новая ветка истории)
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional, Tuple

from src.core.domain.cart_snapshot import CartSnapshot
from src.core.domain.shopping_cart import ShoppingCart

logger = logging.getLogger(__name__)


DEFAULT_MAX_HISTORY_SIZE = 10


class HistoryOutcome(str, Enum):
    """Результат undo/redo."""
    APPLIED = "APPLIED"
    NOTHING_TO_UNDO = "NOTHING_TO_UNDO"
    NOTHING_TO_REDO = "NOTHING_TO_REDO"


@dataclass(frozen=True)
class HistoryConfig:
    """Конфигурация истории.

    max_history_size — максимальное число снимков в past (≥ 1).
    """
    max_history_size: int = DEFAULT_MAX_HISTORY_SIZE


@dataclass(frozen=True)
class HistoryResult:
    """Результат операции undo/redo."""

    outcome: HistoryOutcome
    history_depth: int
    redo_depth: int

    # Снимок, из которого восстановлена корзина (None для no-op)
    restored: Optional[CartSnapshot]

    # Для отладки
    details: str

    @property
    def applied(self) -> bool:
        return self.outcome == HistoryOutcome.APPLIED


class CartHistory:
    """Менеджер истории корзины (undo/redo на снимках).

    Вызывающий код сначала изменяет корзину, затем вызывает record(cart).
    undo/redo восстанавливают корзину из сохранённых снимков.

    Переходы по (|past|, |future|):
    - record: (n, m) → (min(n + 1, capacity), 0)
    - undo:   (n, m) → (n - 1, m + 1), только при n ≥ 2
    - redo:   (n, m) → (min(n + 1, capacity), m - 1), только при m ≥ 1
    - reset:  (n, m) → (0, 0)
    """

    def __init__(
        self,
        max_history_size: Optional[int] = None,
        config: Optional[HistoryConfig] = None
    ):
        """
        Args:
            max_history_size: ёмкость past; перекрывает значение из config
            config: конфигурация истории

        Raises:
            ValueError: если ёмкость < 1
        """
        self.config = config or HistoryConfig()
        capacity = (
            max_history_size if max_history_size is not None
            else self.config.max_history_size
        )
        if capacity < 1:
            raise ValueError(f"max_history_size must be >= 1, got {capacity}")

        self._capacity = capacity
        self._past: Deque[CartSnapshot] = deque()
        self._future: Deque[CartSnapshot] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def record(self, cart: ShoppingCart) -> CartSnapshot:
        """Сохранение снимка текущего состояния корзины.

        Снимок всегда добавляется, даже если совпадает с текущей вершиной.

        Returns:
            Сохранённый снимок (вершина past)
        """
        snapshot = cart.save_state()
        self._push_past(snapshot)

        if self._future:
            logger.debug("Redo history invalidated (%d snapshots dropped)", len(self._future))
        self._future.clear()

        logger.debug(
            "Recorded cart state: history_depth=%d, items=%d",
            len(self._past), snapshot.items_count()
        )
        return snapshot

    def undo(self, cart: ShoppingCart) -> HistoryResult:
        """Откат к предыдущему состоянию.

        Одиночный снимок в past — это текущее состояние без предыстории,
        откатывать некуда.
        """
        if len(self._past) < 2:
            logger.info("Nothing to undo: history_depth=%d", len(self._past))
            return self._create_result(
                outcome=HistoryOutcome.NOTHING_TO_UNDO,
                restored=None,
                details="Cannot undo: no previous state"
            )

        # Текущее состояние уходит в redo
        self._future.append(self._past.pop())

        previous_state = self._past[-1]
        cart.restore_state(previous_state)

        logger.info(
            "Undo applied: history_depth=%d, redo_depth=%d",
            len(self._past), len(self._future)
        )
        return self._create_result(
            outcome=HistoryOutcome.APPLIED,
            restored=previous_state,
            details=f"Restored snapshot from {previous_state.created_ts_utc_ms}"
        )

    def redo(self, cart: ShoppingCart) -> HistoryResult:
        """Повтор последнего отменённого состояния."""
        if not self._future:
            logger.info("Nothing to redo")
            return self._create_result(
                outcome=HistoryOutcome.NOTHING_TO_REDO,
                restored=None,
                details="Cannot redo: no undone states"
            )

        state_to_restore = self._future.pop()
        self._push_past(state_to_restore)
        cart.restore_state(state_to_restore)

        logger.info(
            "Redo applied: history_depth=%d, redo_depth=%d",
            len(self._past), len(self._future)
        )
        return self._create_result(
            outcome=HistoryOutcome.APPLIED,
            restored=state_to_restore,
            details=f"Restored snapshot from {state_to_restore.created_ts_utc_ms}"
        )

    def history_depth(self) -> int:
        return len(self._past)

    def redo_depth(self) -> int:
        return len(self._future)

    def can_undo(self) -> bool:
        return len(self._past) >= 2

    def can_redo(self) -> bool:
        return bool(self._future)

    def current(self) -> Optional[CartSnapshot]:
        """Вершина past (текущее состояние) или None, если record ещё не было."""
        return self._past[-1] if self._past else None

    def snapshots(self) -> Tuple[CartSnapshot, ...]:
        """Снимки past от самого старого к самому новому."""
        return tuple(self._past)

    def reset(self) -> None:
        """Очистка обоих стеков (завершение сессии)."""
        self._past.clear()
        self._future.clear()
        logger.info("History cleared")

    def _push_past(self, snapshot: CartSnapshot) -> None:
        """Push на вершину past с вытеснением самого старого снимка."""
        self._past.append(snapshot)
        if len(self._past) > self._capacity:
            evicted = self._past.popleft()
            logger.debug(
                "Evicted oldest snapshot from %d (capacity=%d)",
                evicted.created_ts_utc_ms, self._capacity
            )

    def _create_result(
        self,
        outcome: HistoryOutcome,
        restored: Optional[CartSnapshot],
        details: str
    ) -> HistoryResult:
        """Создание результата операции."""
        return HistoryResult(
            outcome=outcome,
            history_depth=len(self._past),
            redo_depth=len(self._future),
            restored=restored,
            details=details
        )
