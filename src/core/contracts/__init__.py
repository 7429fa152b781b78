"""
Contract Validation Module

Модуль для валидации JSON контрактов, которыми движок истории корзины
обменивается с внешними компонентами.
"""

from .validators import (
    CartSnapshotValidator,
    ContractValidator,
    SchemaLoader,
    validate_cart_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CartSnapshotValidator",
    # Functions
    "validate_cart_snapshot",
]
