from datetime import datetime
from src.extensions import db


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    # Product ID (business key)
    product_id = db.Column(db.String(50), unique=True, nullable=False, index=True)

    # Product Name
    name = db.Column(db.String(255), nullable=False)

    # Unit Price
    price = db.Column(db.Numeric(10, 2), nullable=False)

    # Quantity in Stock
    stock = db.Column(db.Integer, nullable=False, default=0)

    # Category
    category = db.Column(db.String(100), nullable=False, index=True)

    # Product Description
    description = db.Column(db.Text, nullable=True)

    # Supplier ID (Linked to Supplier)
    supplier_id = db.Column(
        db.String(50),
        db.ForeignKey("suppliers.supplier_id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=True,
    )

    # Date Added (automate)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Last Updated Date (automate only when updated)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    transactions = db.relationship("Transaction", back_populates="product", lazy=True)

    __table_args__ = (
        db.CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        db.CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        db.Index("idx_products_category_stock", "category", "stock"),
    )

    def snapshot(self, stock=None):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price,
            "stock": self.stock if stock is None else stock,
            "category": self.category,
            "supplier_id": self.supplier_id,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "productId": self.product_id,
            "name": self.name,
            "price": str(self.price),
            "stock": self.stock,
            "category": self.category,
            "description": self.description,
            "supplierId": self.supplier_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
