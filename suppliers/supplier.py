from datetime import datetime
from src.extensions import db


class Supplier(db.Model):
    __tablename__ = "suppliers"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    # Supplier ID (business key)
    supplier_id = db.Column(db.String(50), unique=True, nullable=False, index=True)

    # Supplier Name / Business Name
    name = db.Column(db.String(255), nullable=False)

    # Email Address
    email = db.Column(db.String(255), nullable=True)

    # Phone Number
    phone = db.Column(db.String(20), nullable=True)

    # Address
    address = db.Column(db.Text, nullable=True)

    # Contact Person
    contact_person = db.Column(db.String(255), nullable=True)

    # Created Date (automate)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    products = db.relationship("Product", backref="supplier_ref", lazy=True)
    transactions = db.relationship("Transaction", backref="supplier_ref", lazy=True)

    def to_dict(self):
        return {
            "supplierId": self.supplier_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "contactPerson": self.contact_person,
        }
