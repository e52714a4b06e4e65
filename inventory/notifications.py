import logging
from datetime import datetime

from flask_mail import Message

from src.extensions import mail

LOW_STOCK = "low_stock"
TRANSACTION_COMPLETE = "transaction_complete"
EVENT_KINDS = (LOW_STOCK, TRANSACTION_COMPLETE)

logger = logging.getLogger("inventory.notifications")


class NotificationDispatcher:
    """Synchronous observer registry keyed by event kind.

    Observers run in registration order on the caller's thread. A failing
    observer is logged and skipped; it never fails the operation that raised
    the event.
    """

    def __init__(self):
        self._observers = {kind: [] for kind in EVENT_KINDS}

    def register(self, kind, observer):
        if kind not in self._observers:
            raise ValueError(f"Unknown event kind: {kind}")
        self._observers[kind].append(observer)
        return observer

    def observers(self, kind):
        return list(self._observers.get(kind, []))

    def dispatch(self, kind, payload):
        delivered = 0
        for observer in self.observers(kind):
            try:
                observer(payload)
                delivered += 1
            except Exception:
                logger.exception("Observer %r failed while handling %s", observer, kind)
        return delivered


def log_low_stock(product):
    logger.warning(
        "LOW STOCK ALERT: Product %s (ID: %s) has %s units remaining",
        product["name"], product["product_id"], product["stock"],
    )


def log_transaction(transaction):
    logger.info(
        "TRANSACTION LOG [%s]: %s - Product ID: %s, Quantity: %s, Customer: %s, Total: %s",
        datetime.utcnow().isoformat(),
        transaction["type"].upper(),
        transaction["product_id"],
        transaction["quantity"],
        transaction["customer_id"],
        transaction["total_amount"],
    )


class LowStockMailer:
    """Sends a low stock alert e-mail through Flask-Mail."""

    def __init__(self, recipients, sender=None):
        self.recipients = list(recipients)
        self.sender = sender

    def __call__(self, product):
        msg = Message(
            subject=f"Low stock alert: {product['name']} ({product['product_id']})",
            recipients=self.recipients,
            sender=self.sender,
        )
        msg.body = (
            f"Product {product['name']} (ID: {product['product_id']}, "
            f"category: {product['category']}) has {product['stock']} units remaining."
        )
        mail.send(msg)
        logger.info("Low stock alert e-mail sent for %s", product["product_id"])


def register_default_observers(dispatcher, config):
    dispatcher.register(LOW_STOCK, log_low_stock)
    dispatcher.register(TRANSACTION_COMPLETE, log_transaction)

    recipients = config.get("LOW_STOCK_ALERT_RECIPIENTS") or []
    if recipients:
        dispatcher.register(
            LOW_STOCK,
            LowStockMailer(recipients, sender=config.get("MAIL_DEFAULT_SENDER")),
        )
    return dispatcher
