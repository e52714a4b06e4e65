from datetime import datetime
from sqlalchemy import event
from src.extensions import db
from inventory.exceptions import TransactionImmutableError

TRANSACTION_TYPES = ("sale", "purchase", "restock", "return", "adjustment")


class Transaction(db.Model):
    """Immutable ledger row for one stock-affecting event.

    ``stock_change`` is the signed effect the row had on the product's stock,
    so stock always equals the opening stock plus the sum of these values.
    """

    __tablename__ = "transactions"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    transaction_id = db.Column(db.String(50), unique=True, nullable=False, index=True)
    product_id = db.Column(
        db.String(50),
        db.ForeignKey("products.product_id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    customer_id = db.Column(
        db.String(50),
        db.ForeignKey("customers.customer_id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=True,
        index=True,
    )
    supplier_id = db.Column(
        db.String(50),
        db.ForeignKey("suppliers.supplier_id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=True,
    )
    quantity = db.Column(db.Integer, nullable=False)
    type = db.Column(db.String(20), nullable=False, index=True)  # sale / purchase / restock / return / adjustment
    stock_change = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    total_amount = db.Column(db.Numeric(12, 2), nullable=False)
    discount = db.Column(db.Numeric(5, 2), nullable=False, default=0)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    product = db.relationship("Product", back_populates="transactions")

    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_transactions_quantity_positive"),
        db.CheckConstraint(
            "type IN (" + ", ".join(f"'{t}'" for t in TRANSACTION_TYPES) + ")",
            name="ck_transactions_type",
        ),
        db.Index("idx_transactions_date_type", "created_at", "type"),
        db.Index("idx_transactions_product_date", "product_id", "created_at"),
    )

    def to_dict(self):
        return {
            "transactionId": self.transaction_id,
            "productId": self.product_id,
            "productName": self.product.name if self.product else None,
            "customerId": self.customer_id,
            "supplierId": self.supplier_id,
            "quantity": self.quantity,
            "type": self.type,
            "stockChange": self.stock_change,
            "unitPrice": str(self.unit_price),
            "totalAmount": str(self.total_amount),
            "discount": str(self.discount),
            "notes": self.notes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@event.listens_for(Transaction, "before_update")
def _reject_update(mapper, connection, target):
    raise TransactionImmutableError(target.transaction_id)


@event.listens_for(Transaction, "before_delete")
def _reject_delete(mapper, connection, target):
    raise TransactionImmutableError(target.transaction_id)
