from .exceptions import (
    InventoryError,
    ValidationError,
    InvalidTransactionTypeError,
    DuplicateProductError,
    DuplicateTransactionError,
    ReferenceNotFoundError,
    ProductNotFoundError,
    CustomerNotFoundError,
    SupplierNotFoundError,
    InsufficientStockError,
    StockLimitExceededError,
    StorageUnavailableError,
    TransactionImmutableError,
)

__all__ = [
    'InventoryError', 'ValidationError', 'InvalidTransactionTypeError',
    'DuplicateProductError', 'DuplicateTransactionError', 'ReferenceNotFoundError',
    'ProductNotFoundError', 'CustomerNotFoundError', 'SupplierNotFoundError',
    'InsufficientStockError', 'StockLimitExceededError', 'StorageUnavailableError',
    'TransactionImmutableError',
]
