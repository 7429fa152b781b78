"""
Tests for JSON Schema Contract Validators

Тестирование контракта cart_snapshot:
- Валидность самой схемы
- Валидация правильных данных
- Детекция нарушений required полей, типов и constraints
- Интеграция с CartSnapshot (to_contract / from_contract)
"""

import copy
import json
from decimal import Decimal

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    CartSnapshotValidator,
    SchemaLoader,
    validate_cart_snapshot,
)
from src.core.domain import CartSnapshot, ShoppingCart


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_cart_snapshot():
    """Валидный cart_snapshot для тестирования."""
    return {
        "schema_version": "1",
        "created_ts_utc_ms": 1700000000000,
        "items": [
            {
                "product_id": 1,
                "product_name": "Coffee",
                "quantity": 2,
                "unit_price": "10.00",
                "total_price": "20.00",
            },
            {
                "product_id": 2,
                "product_name": "Milk",
                "quantity": 1,
                "unit_price": "5",
            },
        ],
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем."""

    def test_load_cart_snapshot_schema(self):
        schema = SchemaLoader().load_schema("cart_snapshot")
        assert schema["title"] == "cart_snapshot"

    def test_schema_is_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("cart_snapshot") is loader.load_schema("cart_snapshot")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_schema_dir(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(schema_dir=tmp_path / "nope")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError):
            SchemaLoader(schema_dir=tmp_path).load_schema("broken")


# =============================================================================
# CART SNAPSHOT CONTRACT
# =============================================================================


class TestCartSnapshotContract:
    """Валидация cart_snapshot."""

    def test_valid_data(self, valid_cart_snapshot):
        validate_cart_snapshot(valid_cart_snapshot)
        assert CartSnapshotValidator().is_valid(valid_cart_snapshot)

    def test_empty_items_valid(self, valid_cart_snapshot):
        valid_cart_snapshot["items"] = []
        validate_cart_snapshot(valid_cart_snapshot)

    @pytest.mark.parametrize("field", ["schema_version", "created_ts_utc_ms", "items"])
    def test_missing_required_field(self, valid_cart_snapshot, field):
        del valid_cart_snapshot[field]
        with pytest.raises(ValidationError):
            validate_cart_snapshot(valid_cart_snapshot)

    def test_wrong_schema_version(self, valid_cart_snapshot):
        valid_cart_snapshot["schema_version"] = "2"
        with pytest.raises(ValidationError):
            validate_cart_snapshot(valid_cart_snapshot)

    def test_zero_quantity_rejected(self, valid_cart_snapshot):
        valid_cart_snapshot["items"][0]["quantity"] = 0
        with pytest.raises(ValidationError):
            validate_cart_snapshot(valid_cart_snapshot)

    @pytest.mark.parametrize("price", ["-1", "abc", "1e5", 10.0])
    def test_bad_price_rejected(self, valid_cart_snapshot, price):
        valid_cart_snapshot["items"][0]["unit_price"] = price
        with pytest.raises(ValidationError):
            validate_cart_snapshot(valid_cart_snapshot)

    def test_unknown_field_rejected(self, valid_cart_snapshot):
        valid_cart_snapshot["items"][0]["discount"] = "1"
        with pytest.raises(ValidationError):
            validate_cart_snapshot(valid_cart_snapshot)

    def test_iter_errors_reports_all(self, valid_cart_snapshot):
        valid_cart_snapshot["items"][0]["quantity"] = 0
        valid_cart_snapshot["items"][1]["product_name"] = ""
        errors = list(CartSnapshotValidator().iter_errors(valid_cart_snapshot))
        assert len(errors) == 2


# =============================================================================
# INTEGRATION WITH CART SNAPSHOT MODEL
# =============================================================================


class TestCartSnapshotModelIntegration:
    """to_contract / from_contract."""

    def test_exported_snapshot_is_valid(self):
        cart = ShoppingCart()
        cart.add_product(1, "Coffee", 2, Decimal("10.50"))
        cart.add_product(2, "Milk", 1, Decimal("1E+1"))
        data = cart.save_state(ts_utc_ms=1700000000000).to_contract()

        validate_cart_snapshot(data)
        assert data["items"][0]["unit_price"] == "10.50"
        assert data["items"][0]["total_price"] == "21.00"
        assert data["items"][1]["unit_price"] == "10"
        json.dumps(data)  # JSON-совместимость

    def test_from_contract_rebuilds_snapshot(self, valid_cart_snapshot):
        snapshot = CartSnapshot.from_contract(valid_cart_snapshot)

        assert snapshot.created_ts_utc_ms == 1700000000000
        assert [item.product_id for item in snapshot.items] == [1, 2]
        assert snapshot.items[0].unit_price == Decimal("10.00")
        assert snapshot.total_price() == Decimal("25")

    def test_from_contract_can_restore_cart(self, valid_cart_snapshot):
        cart = ShoppingCart()
        cart.restore_state(CartSnapshot.from_contract(valid_cart_snapshot))
        assert cart.get_item(1).quantity == 2
        assert cart.get_item(2).product_name == "Milk"

    def test_from_contract_rejects_invalid(self, valid_cart_snapshot):
        valid_cart_snapshot["items"][0]["quantity"] = -5
        with pytest.raises(ValidationError):
            CartSnapshot.from_contract(valid_cart_snapshot)

    def test_from_contract_rejects_duplicate_ids(self, valid_cart_snapshot):
        valid_cart_snapshot["items"].append(copy.deepcopy(valid_cart_snapshot["items"][0]))
        with pytest.raises(ValueError, match="Duplicate product_id"):
            CartSnapshot.from_contract(valid_cart_snapshot)
