from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, OperationalError

from inventory.exceptions import StorageUnavailableError


@contextmanager
def atomic(session):
    """Commit everything done inside the block as one unit, or nothing.

    Connection failures and lock timeouts surface as a retryable
    StorageUnavailableError; every other error is re-raised after rollback.
    """
    try:
        yield session
        session.commit()
    except OperationalError as exc:
        session.rollback()
        raise StorageUnavailableError(f"Database unavailable: {exc.orig}") from exc
    except DBAPIError as exc:
        session.rollback()
        if exc.connection_invalidated:
            raise StorageUnavailableError(f"Database connection lost: {exc.orig}") from exc
        raise
    except Exception:
        session.rollback()
        raise
