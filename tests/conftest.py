"""
Pytest fixtures for the inventory test suite.

Every test gets a fresh application bound to a file-backed SQLite database
under ``tmp_path`` so that worker threads can open their own connections.
"""

from decimal import Decimal

import pytest

from src.config import TestingConfig
from src.extensions import db
from src.main import create_app
from customers.customer import Customer
from products.product_service import ProductService
from suppliers.supplier import Supplier


def build_config(tmp_path, **overrides):
    attrs = {
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'inventory.db'}",
        "SQLALCHEMY_ENGINE_OPTIONS": {"connect_args": {"check_same_thread": False, "timeout": 30}},
    }
    attrs.update(overrides)
    return type("TestConfig", (TestingConfig,), attrs)


@pytest.fixture
def app_factory(tmp_path):
    """Build an app with extra config overrides; the schema is created for it."""
    created = []

    def factory(**overrides):
        app = create_app(build_config(tmp_path, **overrides))
        with app.app_context():
            db.create_all()
        created.append(app)
        return app

    yield factory

    for app in created:
        with app.app_context():
            db.session.remove()
            db.engine.dispose()


@pytest.fixture
def app(app_factory):
    app = app_factory()
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def inventory(app):
    return app.extensions["inventory"]


@pytest.fixture
def ledger(inventory):
    return inventory.ledger


@pytest.fixture
def recorder(inventory):
    return inventory.transactions


@pytest.fixture
def events(inventory):
    """Records every notification raised through the app's dispatcher."""
    received = {"low_stock": [], "transaction_complete": []}
    for kind, bucket in received.items():
        inventory.dispatcher.register(kind, bucket.append)
    return received


@pytest.fixture
def make_product(app):
    def _make(product_id="P1", price=100, stock=5, category="X", name=None, **kwargs):
        product = ProductService.add_product(
            product_id, name or f"Product {product_id}", price, stock, category, **kwargs
        )
        return product

    return _make


@pytest.fixture
def customer(app):
    c = Customer(customer_id="C1", name="Customer 1", email="c1@example.com")
    db.session.add(c)
    db.session.commit()
    return c


@pytest.fixture
def supplier(app):
    s = Supplier(supplier_id="S1", name="Supplier 1", contact_person="Supplier Contact")
    db.session.add(s)
    db.session.commit()
    return s


def stock_of(product_id):
    from products.product import Product
    db.session.expire_all()
    return Product.query.filter_by(product_id=product_id).one().stock


def money(value):
    return Decimal(str(value)).quantize(Decimal("0.01"))
