from datetime import datetime

import pytest

from inventory.exceptions import (
    InsufficientStockError,
    InvalidTransactionTypeError,
    ProductNotFoundError,
    StockLimitExceededError,
    ValidationError,
)
from inventory.stock_ledger import resolve_stock_change
from inventory.validation import MAX_INTEGER
from products.product import Product

from conftest import stock_of


class TestResolveStockChange:
    @pytest.mark.parametrize("transaction_type", ["purchase", "restock", "return"])
    def test_inbound_types_increase(self, transaction_type):
        assert resolve_stock_change(transaction_type, 4) == 4

    def test_sale_decreases(self):
        assert resolve_stock_change("sale", 4) == -4

    @pytest.mark.parametrize("direction, expected", [("increase", 3), ("decrease", -3)])
    def test_adjustment_uses_explicit_direction(self, direction, expected):
        assert resolve_stock_change("adjustment", 3, direction) == expected

    def test_adjustment_without_direction_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            resolve_stock_change("adjustment", 3)
        assert exc.value.field == "direction"

    def test_direction_rejected_for_fixed_types(self):
        with pytest.raises(ValidationError) as exc:
            resolve_stock_change("sale", 3, "increase")
        assert exc.value.rule == "unexpected"

    def test_unknown_type(self):
        with pytest.raises(InvalidTransactionTypeError) as exc:
            resolve_stock_change("gift", 1)
        assert exc.value.transaction_type == "gift"


class TestApplyStockDelta:
    def test_purchase_increases_stock(self, ledger, make_product):
        make_product("P1", stock=5)
        change = ledger.apply_stock_delta("P1", 7, "purchase")
        assert (change.old_stock, change.new_stock) == (5, 12)
        assert stock_of("P1") == 12

    def test_sale_decreases_stock(self, ledger, make_product):
        make_product("P1", stock=20)
        change = ledger.apply_stock_delta("P1", 5, "sale")
        assert change.to_dict() == {"success": True, "oldStock": 20, "newStock": 15}
        assert stock_of("P1") == 15

    def test_sale_of_exact_stock_leaves_zero(self, ledger, make_product):
        make_product("P1", stock=5)
        change = ledger.apply_stock_delta("P1", 5, "sale")
        assert change.new_stock == 0
        assert stock_of("P1") == 0

    def test_sale_of_stock_plus_one_fails(self, ledger, make_product):
        make_product("P1", stock=5)
        with pytest.raises(InsufficientStockError) as exc:
            ledger.apply_stock_delta("P1", 6, "sale")
        assert (exc.value.available, exc.value.requested) == (5, 6)
        assert str(exc.value) == "Insufficient stock. Available: 5, Requested: 6"
        assert stock_of("P1") == 5

    def test_decreasing_adjustment_respects_non_negativity(self, ledger, make_product):
        make_product("P1", stock=2)
        with pytest.raises(InsufficientStockError):
            ledger.apply_stock_delta("P1", 3, "adjustment", direction="decrease")
        change = ledger.apply_stock_delta("P1", 2, "adjustment", direction="decrease")
        assert change.new_stock == 0

    def test_return_increases_stock(self, ledger, make_product):
        make_product("P1", stock=50)
        assert ledger.apply_stock_delta("P1", 2, "return").new_stock == 52

    def test_unknown_product(self, ledger):
        with pytest.raises(ProductNotFoundError) as exc:
            ledger.apply_stock_delta("NOPE", 1, "purchase")
        assert str(exc.value) == "Product with ID NOPE not found"

    def test_invalid_type_leaves_stock_untouched(self, ledger, make_product):
        make_product("P1", stock=5)
        with pytest.raises(InvalidTransactionTypeError):
            ledger.apply_stock_delta("P1", 1, "donation")
        assert stock_of("P1") == 5

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", None])
    def test_invalid_quantity(self, ledger, make_product, quantity):
        make_product("P1", stock=5)
        with pytest.raises(ValidationError) as exc:
            ledger.apply_stock_delta("P1", quantity, "sale")
        assert exc.value.field == "quantity"
        assert stock_of("P1") == 5

    def test_oversized_quantity_is_rejected(self, ledger, make_product):
        make_product("P1", stock=5)
        with pytest.raises(ValidationError) as exc:
            ledger.apply_stock_delta("P1", 10 ** 20, "purchase")
        assert exc.value.rule == "maximum"
        assert stock_of("P1") == 5

    def test_increase_past_integer_limit_fails(self, ledger, make_product):
        make_product("P1", stock=MAX_INTEGER - 2)
        with pytest.raises(StockLimitExceededError) as exc:
            ledger.apply_stock_delta("P1", 3, "purchase")

        assert (exc.value.available, exc.value.requested) == (MAX_INTEGER - 2, 3)
        assert exc.value.limit == MAX_INTEGER
        assert stock_of("P1") == MAX_INTEGER - 2

        change = ledger.apply_stock_delta("P1", 2, "purchase")
        assert change.new_stock == MAX_INTEGER

    def test_updated_timestamp_moves(self, ledger, make_product):
        make_product("P1", stock=5)
        before = datetime.utcnow()
        ledger.apply_stock_delta("P1", 1, "restock")
        product = Product.query.filter_by(product_id="P1").one()
        assert product.updated_at >= before.replace(microsecond=0)


class TestLowStockNotification:
    def test_purchase_from_9_to_15_does_not_alert(self, ledger, make_product, events):
        make_product("P1", stock=9)
        ledger.apply_stock_delta("P1", 6, "purchase")
        assert events["low_stock"] == []

    def test_sale_from_12_to_8_alerts_with_new_stock(self, ledger, make_product, events):
        make_product("P1", stock=12, name="Widget")
        ledger.apply_stock_delta("P1", 4, "sale")
        assert len(events["low_stock"]) == 1
        alert = events["low_stock"][0]
        assert alert["product_id"] == "P1"
        assert alert["name"] == "Widget"
        assert alert["stock"] == 8

    def test_alert_fires_at_exact_threshold(self, ledger, make_product, events):
        make_product("P1", stock=11)
        ledger.apply_stock_delta("P1", 1, "sale")
        assert [a["stock"] for a in events["low_stock"]] == [10]

    def test_no_alert_when_mutation_fails(self, ledger, make_product, events):
        make_product("P1", stock=3)
        with pytest.raises(InsufficientStockError):
            ledger.apply_stock_delta("P1", 4, "sale")
        assert events["low_stock"] == []

    def test_observer_failure_does_not_undo_update(self, ledger, inventory, make_product):
        make_product("P1", stock=12)

        def broken(product):
            raise RuntimeError("pager offline")

        inventory.dispatcher.register("low_stock", broken)
        change = ledger.apply_stock_delta("P1", 5, "sale")

        assert change.new_stock == 7
        assert stock_of("P1") == 7

    def test_threshold_comes_from_configuration(self, app_factory):
        app = app_factory(LOW_STOCK_THRESHOLD=3)
        inventory = app.extensions["inventory"]
        alerts = []
        inventory.dispatcher.register("low_stock", alerts.append)
        from products.product_service import ProductService

        with app.app_context():
            ProductService.add_product("P1", "Widget", 10, 6, "X")
            inventory.ledger.apply_stock_delta("P1", 2, "sale")
            assert alerts == []
            inventory.ledger.apply_stock_delta("P1", 1, "sale")

        assert inventory.ledger.low_stock_threshold == 3
        assert [a["stock"] for a in alerts] == [3]
