"""
CartSnapshot — Снимок состояния корзины

Immutable Pydantic модель: полный снимок строк корзины на момент создания
и timestamp создания (UTC, миллисекунды).

Снимок владеет независимыми копиями строк: ни изменение корзины после
сохранения, ни изменение прочитанных из снимка данных не влияют на
сохранённое состояние.
"""

import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.contracts import validate_cart_snapshot

from .cart_item import CartItem


CONTRACT_SCHEMA_VERSION = "1"


def now_utc_ms() -> int:
    """Текущее время (UTC, миллисекунды)."""
    return time.time_ns() // 1_000_000


# =============================================================================
# CART SNAPSHOT MODEL
# =============================================================================


class CartSnapshot(BaseModel):
    """
    Снимок корзины (memento).

    Immutable модель (frozen=True). Строки копируются при создании снимка,
    а каждое чтение через get_saved_state() возвращает новые копии.
    """

    items: tuple[CartItem, ...] = Field(
        default_factory=tuple, description="Строки корзины в порядке добавления"
    )
    created_ts_utc_ms: int = Field(
        default_factory=now_utc_ms,
        ge=0,
        description="Timestamp создания снимка (UTC, миллисекунды)",
    )

    model_config = {"frozen": True}

    @field_validator("items")
    @classmethod
    def copy_items(cls, v: tuple[CartItem, ...]) -> tuple[CartItem, ...]:
        """Снимок не разделяет экземпляры строк с вызывающим кодом."""
        return tuple(item.model_copy(deep=True) for item in v)

    @classmethod
    def capture(
        cls, items: Iterable[CartItem], ts_utc_ms: Optional[int] = None
    ) -> "CartSnapshot":
        """
        Создание снимка из последовательности строк.

        Args:
            items: Текущие строки корзины
            ts_utc_ms: Timestamp снимка; по умолчанию текущее время

        Returns:
            Новый CartSnapshot
        """
        if ts_utc_ms is None:
            ts_utc_ms = now_utc_ms()
        return cls(items=tuple(items), created_ts_utc_ms=ts_utc_ms)

    def get_saved_state(self) -> List[CartItem]:
        """
        Сохранённое состояние.

        Returns:
            Новый список с глубокими копиями строк
        """
        return [item.model_copy(deep=True) for item in self.items]

    def created_at(self) -> datetime:
        """Время создания снимка как aware datetime (UTC)."""
        return datetime.fromtimestamp(self.created_ts_utc_ms / 1000, tz=timezone.utc)

    def items_count(self) -> int:
        return len(self.items)

    def total_price(self) -> Decimal:
        return sum((item.total_price() for item in self.items), Decimal("0"))

    # =========================================================================
    # CONTRACT (JSON-compatible dict)
    # =========================================================================

    def to_contract(self) -> Dict[str, Any]:
        """
        Экспорт снимка в JSON-совместимый контракт cart_snapshot.

        Цены сериализуются строками, чтобы не терять точность Decimal.

        Returns:
            dict, валидный по схеме cart_snapshot.json
        """
        return {
            "schema_version": CONTRACT_SCHEMA_VERSION,
            "created_ts_utc_ms": self.created_ts_utc_ms,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity,
                    "unit_price": format(item.unit_price, "f"),
                    "total_price": format(item.total_price(), "f"),
                }
                for item in self.items
            ],
        }

    @classmethod
    def from_contract(cls, data: Dict[str, Any]) -> "CartSnapshot":
        """
        Восстановление снимка из контракта cart_snapshot.

        Args:
            data: dict в формате to_contract()

        Returns:
            Новый CartSnapshot

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
            ValueError: Если product_id повторяется
        """
        validate_cart_snapshot(data)
        product_ids = [raw["product_id"] for raw in data["items"]]
        if len(product_ids) != len(set(product_ids)):
            raise ValueError(f"Duplicate product_id in cart_snapshot: {product_ids}")
        items = [
            CartItem(
                product_id=raw["product_id"],
                product_name=raw["product_name"],
                quantity=raw["quantity"],
                unit_price=Decimal(raw["unit_price"]),
            )
            for raw in data["items"]
        ]
        return cls.capture(items, ts_utc_ms=data["created_ts_utc_ms"])
