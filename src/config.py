import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value, default="0"):
    return str(os.getenv(value, default)).strip().lower() in ("1", "true", "yes", "on")


class Config:
    DEBUG = _as_bool("FLASK_DEBUG", "1")
    TESTING = False
    PORT = int(os.getenv("PORT", 3000))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL", "postgresql://postgres@127.0.0.1:5432/inventory_db"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # Abort startup when the database cannot be reached
    VERIFY_DATABASE_ON_STARTUP = _as_bool("VERIFY_DATABASE_ON_STARTUP", "1")

    # Stock level at or below which a low stock notification is raised
    LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", 10))
    DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", 10))
    TOP_PRODUCTS_LIMIT = int(os.getenv("TOP_PRODUCTS_LIMIT", 10))

    # Mail configuration (low stock alert e-mails)
    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.gmail.com")
    MAIL_PORT = int(os.getenv("MAIL_PORT", 587))
    MAIL_USE_TLS = _as_bool("MAIL_USE_TLS", "1")
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "inventory@localhost")

    # Comma separated list; leave empty to disable alert e-mails
    LOW_STOCK_ALERT_RECIPIENTS = [
        r.strip() for r in os.getenv("LOW_STOCK_ALERT_RECIPIENTS", "").split(",") if r.strip()
    ]


class TestingConfig(Config):
    DEBUG = False
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    VERIFY_DATABASE_ON_STARTUP = True
    LOW_STOCK_THRESHOLD = 10
    LOW_STOCK_ALERT_RECIPIENTS = []
    MAIL_SUPPRESS_SEND = True
