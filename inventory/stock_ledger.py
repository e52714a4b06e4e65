import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select, update

from inventory.exceptions import (
    InsufficientStockError,
    InvalidTransactionTypeError,
    ProductNotFoundError,
    StockLimitExceededError,
    ValidationError,
)
from inventory.notifications import LOW_STOCK
from inventory.unit_of_work import atomic
from inventory.validation import MAX_INTEGER, STOCK_DELTA_RULES, validate_input
from products.product import Product

logger = logging.getLogger("inventory.stock_ledger")

INCREASE = "increase"
DECREASE = "decrease"

# adjustment has no fixed sign; the caller states the direction explicitly
STOCK_DIRECTIONS = {
    "sale": DECREASE,
    "purchase": INCREASE,
    "restock": INCREASE,
    "return": INCREASE,
    "adjustment": None,
}


def resolve_stock_change(transaction_type, quantity, direction=None):
    """Return the signed stock change for a transaction type and quantity."""
    if transaction_type not in STOCK_DIRECTIONS:
        raise InvalidTransactionTypeError(transaction_type)

    fixed = STOCK_DIRECTIONS[transaction_type]
    if fixed is None:
        if direction not in (INCREASE, DECREASE):
            raise ValidationError(
                "direction", "required",
                "direction must be 'increase' or 'decrease' for adjustment transactions",
            )
        fixed = direction
    elif direction is not None:
        raise ValidationError(
            "direction", "unexpected",
            "direction is only accepted for adjustment transactions",
        )

    return quantity if fixed == INCREASE else -quantity


@dataclass
class StockChange:
    product: dict
    old_stock: int
    new_stock: int

    @property
    def product_id(self):
        return self.product["product_id"]

    def to_dict(self):
        return {"success": True, "oldStock": self.old_stock, "newStock": self.new_stock}


class StockLedger:
    """Owns the authoritative stock quantity of every product."""

    def __init__(self, session, dispatcher, low_stock_threshold=10):
        self.session = session
        self.dispatcher = dispatcher
        self.low_stock_threshold = low_stock_threshold

    def apply_stock_delta(self, product_id, quantity, transaction_type, direction=None):
        validate_input(
            {"product_id": product_id, "quantity": quantity, "transaction_type": transaction_type},
            STOCK_DELTA_RULES,
        )
        stock_change = resolve_stock_change(transaction_type, quantity, direction)

        with atomic(self.session):
            change = self.stage(product_id, stock_change)

        logger.info(
            "Stock updated for %s: %s -> %s (%s)",
            product_id, change.old_stock, change.new_stock, transaction_type,
        )
        self.notify(change)
        return change

    def stage(self, product_id, stock_change):
        """Apply ``stock_change`` inside the caller's open unit of work.

        The guarded UPDATE is the only read-modify-write of the stock column,
        so concurrent callers are serialised by the database row lock.
        """
        product = self.session.execute(
            select(Product).where(Product.product_id == product_id)
        ).scalar_one_or_none()
        if product is None:
            raise ProductNotFoundError(product_id)

        stmt = update(Product).where(Product.product_id == product_id)
        if stock_change < 0:
            stmt = stmt.where(Product.stock >= -stock_change)
        else:
            stmt = stmt.where(Product.stock <= MAX_INTEGER - stock_change)
        stmt = stmt.values(
            stock=Product.stock + stock_change,
            updated_at=datetime.utcnow(),
        ).execution_options(synchronize_session=False)

        result = self.session.execute(stmt)
        current = self.session.execute(
            select(Product.stock).where(Product.product_id == product_id)
        ).scalar_one_or_none()

        if result.rowcount == 0:
            if current is None:
                raise ProductNotFoundError(product_id)
            if stock_change > 0:
                raise StockLimitExceededError(
                    product_id, available=current, requested=stock_change, limit=MAX_INTEGER
                )
            raise InsufficientStockError(product_id, available=current, requested=-stock_change)

        return StockChange(
            product=product.snapshot(stock=current),
            old_stock=current - stock_change,
            new_stock=current,
        )

    def notify(self, change):
        """Raise a low stock notification for a committed change."""
        if change.new_stock <= self.low_stock_threshold:
            self.dispatcher.dispatch(LOW_STOCK, dict(change.product))
            return True
        return False
