"""History — undo/redo история состояний корзины.

- Снимки состояния в двух стеках (past/future)
- Ограниченная глубина с вытеснением самого старого снимка
- Инвалидация redo при каждом новом record
"""

from .history_manager import (
    DEFAULT_MAX_HISTORY_SIZE,
    CartHistory,
    HistoryConfig,
    HistoryOutcome,
    HistoryResult,
)

__all__ = [
    "CartHistory",
    "HistoryConfig",
    "HistoryOutcome",
    "HistoryResult",
    "DEFAULT_MAX_HISTORY_SIZE",
]
