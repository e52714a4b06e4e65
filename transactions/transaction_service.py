import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from customers.customer import Customer
from inventory.exceptions import (
    CustomerNotFoundError,
    DuplicateTransactionError,
    ProductNotFoundError,
    SupplierNotFoundError,
    ValidationError,
)
from inventory.notifications import TRANSACTION_COMPLETE
from inventory.stock_ledger import resolve_stock_change
from inventory.unit_of_work import atomic
from inventory.validation import OPTIONAL_TRANSACTION_RULES, TRANSACTION_RULES, validate_input
from products.product import Product
from suppliers.supplier import Supplier
from transactions.transaction import Transaction

logger = logging.getLogger("inventory.transactions")

CENTS = Decimal("0.01")
# Largest value a NUMERIC(12, 2) column holds
MAX_TOTAL = Decimal("9999999999.99")


def calculate_total(unit_price, quantity, discount=0):
    """Total for ``quantity`` units at ``unit_price`` less a percentage discount."""
    gross = Decimal(unit_price) * quantity
    discount_amount = (gross * Decimal(str(discount)) / Decimal("100")).quantize(CENTS)
    return (gross - discount_amount).quantize(CENTS)


class TransactionService:
    """Records transactions and applies their stock effect as one unit of work."""

    def __init__(self, session, ledger, dispatcher):
        self.session = session
        self.ledger = ledger
        self.dispatcher = dispatcher

    def create_transaction(self, transaction_id, product_id, quantity, type, customer_id,
                           supplier_id=None, discount=0, notes=None, direction=None):
        fields = {
            "transaction_id": transaction_id,
            "product_id": product_id,
            "quantity": quantity,
            "type": type,
            "customer_id": customer_id,
            "supplier_id": supplier_id,
            "discount": discount,
            "notes": notes,
        }
        validate_input(fields, TRANSACTION_RULES)
        validate_input(fields, OPTIONAL_TRANSACTION_RULES)
        discount = discount or 0
        stock_change = resolve_stock_change(type, quantity, direction)

        with atomic(self.session):
            product = self.session.execute(
                select(Product).where(Product.product_id == product_id)
            ).scalar_one_or_none()
            if product is None:
                raise ProductNotFoundError(product_id)

            self._ensure_references(customer_id, supplier_id)

            if self._exists(transaction_id):
                raise DuplicateTransactionError(transaction_id)

            unit_price = product.price
            total_amount = calculate_total(unit_price, quantity, discount)
            if total_amount > MAX_TOTAL:
                raise ValidationError(
                    "total_amount", "maximum", f"total_amount must be at most {MAX_TOTAL}"
                )
            created_at = datetime.utcnow()
            txn = Transaction(
                transaction_id=transaction_id,
                product_id=product_id,
                customer_id=customer_id,
                supplier_id=supplier_id,
                quantity=quantity,
                type=type,
                stock_change=stock_change,
                unit_price=unit_price,
                total_amount=total_amount,
                discount=Decimal(str(discount)),
                notes=notes,
                created_at=created_at,
            )
            self.session.add(txn)
            try:
                self.session.flush()
            except IntegrityError as exc:
                self.session.rollback()
                # a concurrent request inserted the same business key first
                if self._exists(transaction_id):
                    raise DuplicateTransactionError(transaction_id) from exc
                raise

            change = self.ledger.stage(product_id, stock_change)

        logger.info(
            "Transaction %s recorded: %s x%s of %s, total %s",
            transaction_id, type, quantity, product_id, total_amount,
        )

        snapshot = {
            "transaction_id": transaction_id,
            "product_id": product_id,
            "quantity": quantity,
            "type": type,
            "customer_id": customer_id,
            "supplier_id": supplier_id,
            "unit_price": unit_price,
            "total_amount": total_amount,
            "discount": Decimal(str(discount)),
            "notes": notes,
            "created_at": created_at,
            "old_stock": change.old_stock,
            "new_stock": change.new_stock,
        }

        self.ledger.notify(change)
        self.dispatcher.dispatch(TRANSACTION_COMPLETE, dict(snapshot))

        return {
            "success": True,
            "transaction_id": transaction_id,
            "total_amount": total_amount,
            "old_stock": change.old_stock,
            "new_stock": change.new_stock,
        }

    def _exists(self, transaction_id):
        return self.session.execute(
            select(Transaction.id).where(Transaction.transaction_id == transaction_id)
        ).first() is not None

    def _ensure_references(self, customer_id, supplier_id):
        found = self.session.execute(
            select(Customer.id).where(Customer.customer_id == customer_id)
        ).first()
        if found is None:
            raise CustomerNotFoundError(customer_id)

        if supplier_id is not None:
            found = self.session.execute(
                select(Supplier.id).where(Supplier.supplier_id == supplier_id)
            ).first()
            if found is None:
                raise SupplierNotFoundError(supplier_id)
