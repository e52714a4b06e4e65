import logging

import pytest

from src.create_tables import SAMPLE_CUSTOMERS, SAMPLE_PRODUCTS, SAMPLE_SUPPLIERS, seed_sample_data
from src.main import configure_logging, create_app
from inventory.exceptions import StorageUnavailableError
from models import Customer, Product, Supplier

from conftest import build_config


def test_startup_fails_fast_when_database_unreachable(tmp_path):
    config = build_config(
        tmp_path,
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'missing' / 'dir' / 'inventory.db'}",
    )
    with pytest.raises(StorageUnavailableError) as exc:
        create_app(config)
    assert exc.value.retryable is False


def test_startup_check_can_be_disabled(tmp_path):
    config = build_config(
        tmp_path,
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'missing' / 'dir' / 'inventory.db'}",
        VERIFY_DATABASE_ON_STARTUP=False,
    )
    app = create_app(config)
    assert "inventory" in app.extensions


def test_configure_logging_adds_single_handler():
    logger = configure_logging("DEBUG")
    handlers = list(logger.handlers)
    configure_logging("WARNING")

    assert logger.handlers == handlers
    assert logger.level == logging.WARNING
    configure_logging("INFO")


def test_components_use_configured_threshold(app_factory):
    app = app_factory(LOW_STOCK_THRESHOLD=25)
    assert app.extensions["inventory"].low_stock_threshold == 25
    assert app.extensions["inventory"].ledger.low_stock_threshold == 25


class TestSeedSampleData:
    def test_seeds_all_records(self, app):
        added = seed_sample_data()

        assert added == len(SAMPLE_SUPPLIERS) + len(SAMPLE_CUSTOMERS) + len(SAMPLE_PRODUCTS)
        assert Supplier.query.count() == 3
        assert Customer.query.count() == 5
        assert Product.query.count() == 10
        assert Product.query.filter_by(product_id="PROD010").one().stock == 5

    def test_is_idempotent(self, app):
        seed_sample_data()
        assert seed_sample_data() == 0
        assert Product.query.count() == 10

    def test_seeded_data_supports_transactions(self, app, recorder):
        seed_sample_data()
        result = recorder.create_transaction("TXN001", "PROD001", 2, "sale", "CUST001")
        assert (result["old_stock"], result["new_stock"]) == (15, 13)
