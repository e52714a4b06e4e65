import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from decimal import Decimal

from src.extensions import db
from models import Supplier, Customer, Product

SAMPLE_SUPPLIERS = [
    ("SUP001", "Supplier 1.", "supplier1@inventory.com", "088878678927", "Supplier 1"),
    ("SUP002", "Supplier 2", "supplier2@inventory.com", "088878678928", "Supplier 2"),
    ("SUP003", "Supplier 3", "supplier3@inventory.com", "088878678929", "Supplier 3"),
]

SAMPLE_CUSTOMERS = [
    ("CUST001", "Customer 1", "customer1@inventory.com", "088878678000", "regular"),
    ("CUST002", "Customer 2", "customer2@inventory.com", "088878678100", "premium"),
    ("CUST003", "Customer 3", "customer3@inventory.com", "088878678200", "standard"),
    ("CUST004", "Customer 4", "customer4@inventory.com", "088878678300", "regular"),
    ("CUST005", "Customer 5", "customer5@inventory.com", "088878678400", "standard"),
]

SAMPLE_PRODUCTS = [
    ("PROD001", "Laptop ASUS X550", "8500000.00", 15, "Electronics", "ASUS X550 Laptop with Intel i5 processor", "SUP001"),
    ("PROD002", "Mouse Wireless Logitech", "250000.00", 50, "Electronics", "Wireless optical mouse", "SUP002"),
    ("PROD003", "Keyboard Mechanical", "450000.00", 25, "Electronics", "RGB Mechanical Keyboard", "SUP002"),
    ("PROD004", "Monitor LED 24 inch", "1800000.00", 8, "Electronics", "24 inch Full HD LED Monitor", "SUP001"),
    ("PROD005", "Printer Canon MP280", "650000.00", 12, "Electronics", "All-in-one printer scanner", "SUP003"),
    ("PROD006", "External HDD 1TB", "750000.00", 20, "Storage", "Portable External Hard Drive 1TB", "SUP001"),
    ("PROD007", "USB Flash Drive 32GB", "85000.00", 100, "Storage", "High-speed USB 3.0 Flash Drive", "SUP002"),
    ("PROD008", "Webcam HD 1080p", "350000.00", 30, "Electronics", "Full HD Web Camera with Microphone", "SUP002"),
    ("PROD009", "Speaker Bluetooth", "280000.00", 45, "Electronics", "Portable Bluetooth Speaker", "SUP003"),
    ("PROD010", "Power Bank 10000mAh", "180000.00", 5, "Electronics", "Portable Power Bank with fast charging", "SUP001"),
]


def seed_sample_data():
    """Insert the sample suppliers, customers and products; existing keys are skipped."""
    added = 0
    for supplier_id, name, email, phone, contact in SAMPLE_SUPPLIERS:
        if not Supplier.query.filter_by(supplier_id=supplier_id).first():
            db.session.add(Supplier(supplier_id=supplier_id, name=name, email=email,
                                    phone=phone, contact_person=contact))
            added += 1
    for customer_id, name, email, phone, customer_type in SAMPLE_CUSTOMERS:
        if not Customer.query.filter_by(customer_id=customer_id).first():
            db.session.add(Customer(customer_id=customer_id, name=name, email=email,
                                    phone=phone, customer_type=customer_type))
            added += 1
    db.session.flush()
    for product_id, name, price, stock, category, description, supplier_id in SAMPLE_PRODUCTS:
        if not Product.query.filter_by(product_id=product_id).first():
            db.session.add(Product(product_id=product_id, name=name, price=Decimal(price),
                                   stock=stock, category=category, description=description,
                                   supplier_id=supplier_id))
            added += 1
    db.session.commit()
    return added


def create_tables(reset=False, seed=False):
    if reset:
        db.drop_all()
    db.create_all()
    print("All tables created successfully")
    if seed:
        print(f"Seeded {seed_sample_data()} sample records")


if __name__ == "__main__":
    from src.main import create_app
    app = create_app()
    with app.app_context():
        create_tables(reset="--reset" in sys.argv, seed="--seed" in sys.argv)
