from datetime import datetime
from src.extensions import db

CUSTOMER_TYPES = ("regular", "premium", "wholesale", "standard")


class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    # Customer ID (business key)
    customer_id = db.Column(db.String(50), unique=True, nullable=False, index=True)

    # Full Name
    name = db.Column(db.String(255), nullable=False)

    # Email Address
    email = db.Column(db.String(255), nullable=True)

    # Phone Number
    phone = db.Column(db.String(20), nullable=True)

    # Address
    address = db.Column(db.Text, nullable=True)

    # Classification (regular, premium, wholesale, standard)
    customer_type = db.Column(db.String(20), nullable=False, default="regular", index=True)

    # Created Date (automate)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    transactions = db.relationship("Transaction", backref="customer", lazy=True)

    def to_dict(self):
        return {
            "customerId": self.customer_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "customerType": self.customer_type,
        }
