import logging

import pytest

from src.extensions import mail
from inventory.notifications import (
    LOW_STOCK,
    TRANSACTION_COMPLETE,
    LowStockMailer,
    NotificationDispatcher,
    register_default_observers,
)


class TestNotificationDispatcher:
    def test_observers_run_in_registration_order(self):
        dispatcher = NotificationDispatcher()
        calls = []
        dispatcher.register(LOW_STOCK, lambda p: calls.append(("first", p["stock"])))
        dispatcher.register(LOW_STOCK, lambda p: calls.append(("second", p["stock"])))

        delivered = dispatcher.dispatch(LOW_STOCK, {"stock": 3})

        assert delivered == 2
        assert calls == [("first", 3), ("second", 3)]

    def test_event_kinds_are_independent(self):
        dispatcher = NotificationDispatcher()
        calls = []
        dispatcher.register(TRANSACTION_COMPLETE, calls.append)

        assert dispatcher.dispatch(LOW_STOCK, {"stock": 1}) == 0
        assert calls == []

    def test_unknown_event_kind_is_rejected(self):
        dispatcher = NotificationDispatcher()
        with pytest.raises(ValueError):
            dispatcher.register("restocked", print)

    def test_failing_observer_is_logged_and_isolated(self, caplog):
        dispatcher = NotificationDispatcher()
        calls = []

        def broken(payload):
            raise RuntimeError("smtp down")

        dispatcher.register(LOW_STOCK, broken)
        dispatcher.register(LOW_STOCK, calls.append)

        with caplog.at_level(logging.ERROR, logger="inventory.notifications"):
            delivered = dispatcher.dispatch(LOW_STOCK, {"stock": 2})

        assert delivered == 1
        assert calls == [{"stock": 2}]
        assert "failed while handling low_stock" in caplog.text

    def test_default_observers_log_events(self, caplog):
        dispatcher = register_default_observers(NotificationDispatcher(), {})
        product = {"product_id": "P1", "name": "Widget", "stock": 4, "category": "X"}
        txn = {"type": "sale", "product_id": "P1", "quantity": 1,
               "customer_id": "C1", "total_amount": "100.00"}

        with caplog.at_level(logging.INFO, logger="inventory.notifications"):
            dispatcher.dispatch(LOW_STOCK, product)
            dispatcher.dispatch(TRANSACTION_COMPLETE, txn)

        assert "LOW STOCK ALERT: Product Widget (ID: P1) has 4 units remaining" in caplog.text
        assert "SALE - Product ID: P1, Quantity: 1, Customer: C1" in caplog.text

    def test_mailer_only_registered_with_recipients(self):
        without = register_default_observers(NotificationDispatcher(), {})
        with_mail = register_default_observers(
            NotificationDispatcher(), {"LOW_STOCK_ALERT_RECIPIENTS": ["ops@example.com"]}
        )
        assert len(without.observers(LOW_STOCK)) == 1
        assert isinstance(with_mail.observers(LOW_STOCK)[-1], LowStockMailer)


class TestLowStockMailer:
    def test_sends_alert_email(self, app):
        mailer = LowStockMailer(["ops@example.com"], sender="inventory@example.com")
        product = {"product_id": "P9", "name": "Cable", "stock": 2, "category": "Accessories"}

        with mail.record_messages() as outbox:
            mailer(product)

        assert len(outbox) == 1
        assert outbox[0].recipients == ["ops@example.com"]
        assert outbox[0].subject == "Low stock alert: Cable (P9)"
        assert "has 2 units remaining" in outbox[0].body

    def test_configured_app_mails_on_low_stock_sale(self, app_factory):
        app = app_factory(LOW_STOCK_ALERT_RECIPIENTS=["ops@example.com"])
        ledger = app.extensions["inventory"].ledger
        from products.product_service import ProductService

        with app.app_context():
            ProductService.add_product("P1", "Widget", 10, 12, "X")
            with mail.record_messages() as outbox:
                ledger.apply_stock_delta("P1", 4, "sale")

        assert [m.subject for m in outbox] == ["Low stock alert: Widget (P1)"]
