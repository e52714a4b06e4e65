from src.extensions import db

# Import all models so migrations can detect them
from suppliers.supplier import Supplier
from customers.customer import Customer
from products.product import Product
from transactions.transaction import Transaction


__all__ = [
    "db",
    "Supplier",
    "Customer",
    "Product",
    "Transaction",
]
