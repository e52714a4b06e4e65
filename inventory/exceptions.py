"""Typed errors raised by the inventory core.

Every error carries a machine readable ``code`` so the HTTP layer can map it
without parsing messages.
"""


class InventoryError(Exception):
    code = "INVENTORY_ERROR"

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"code": self.code, "message": self.message}


class ValidationError(InventoryError):
    code = "VALIDATION_ERROR"

    def __init__(self, field, rule, message=None):
        super().__init__(message or f"{field} failed {rule} validation")
        self.field = field
        self.rule = rule

    def to_dict(self):
        data = super().to_dict()
        data.update({"field": self.field, "rule": self.rule})
        return data


class InvalidTransactionTypeError(InventoryError):
    code = "INVALID_TRANSACTION_TYPE"

    def __init__(self, transaction_type):
        super().__init__(f"Invalid transaction type: {transaction_type}")
        self.transaction_type = transaction_type


class DuplicateProductError(InventoryError):
    code = "DUPLICATE_PRODUCT"

    def __init__(self, product_id):
        super().__init__(f"Product with ID {product_id} already exists")
        self.product_id = product_id


class DuplicateTransactionError(InventoryError):
    code = "DUPLICATE_TRANSACTION"

    def __init__(self, transaction_id):
        super().__init__(f"Transaction with ID {transaction_id} already exists")
        self.transaction_id = transaction_id


class ReferenceNotFoundError(InventoryError):
    code = "NOT_FOUND"
    entity = "Record"

    def __init__(self, key):
        super().__init__(f"{self.entity} with ID {key} not found")
        self.key = key


class ProductNotFoundError(ReferenceNotFoundError):
    code = "PRODUCT_NOT_FOUND"
    entity = "Product"


class CustomerNotFoundError(ReferenceNotFoundError):
    code = "CUSTOMER_NOT_FOUND"
    entity = "Customer"


class SupplierNotFoundError(ReferenceNotFoundError):
    code = "SUPPLIER_NOT_FOUND"
    entity = "Supplier"


class InsufficientStockError(InventoryError):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, product_id, available, requested):
        super().__init__(f"Insufficient stock. Available: {available}, Requested: {requested}")
        self.product_id = product_id
        self.available = available
        self.requested = requested

    def to_dict(self):
        data = super().to_dict()
        data.update({"available": self.available, "requested": self.requested})
        return data


class StockLimitExceededError(InventoryError):
    code = "STOCK_LIMIT_EXCEEDED"

    def __init__(self, product_id, available, requested, limit):
        super().__init__(
            f"Stock limit exceeded. Available: {available}, Requested: {requested}, Maximum: {limit}"
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested
        self.limit = limit


class StorageUnavailableError(InventoryError):
    code = "STORAGE_UNAVAILABLE"

    def __init__(self, message, retryable=True):
        super().__init__(message)
        self.retryable = retryable


class TransactionImmutableError(InventoryError):
    code = "TRANSACTION_IMMUTABLE"

    def __init__(self, transaction_id):
        super().__init__(
            f"Transaction {transaction_id} is immutable; record an adjustment or return instead"
        )
        self.transaction_id = transaction_id
