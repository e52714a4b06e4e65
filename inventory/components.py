from flask import current_app

from src.extensions import db
from inventory.notifications import NotificationDispatcher, register_default_observers
from inventory.stock_ledger import StockLedger
from transactions.transaction_service import TransactionService


class InventoryComponents:
    """Wires the dispatcher, stock ledger and transaction recorder together."""

    def __init__(self, session, low_stock_threshold, config):
        self.low_stock_threshold = low_stock_threshold
        self.dispatcher = register_default_observers(NotificationDispatcher(), config)
        self.ledger = StockLedger(session, self.dispatcher, low_stock_threshold)
        self.transactions = TransactionService(session, self.ledger, self.dispatcher)


def init_inventory(app):
    components = InventoryComponents(db.session, app.config["LOW_STOCK_THRESHOLD"], app.config)
    app.extensions["inventory"] = components
    return components


def get_inventory():
    return current_app.extensions["inventory"]
