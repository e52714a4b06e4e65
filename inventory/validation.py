import math
from decimal import Decimal

from inventory.exceptions import ValidationError

TYPE_NAMES = {
    str: "string",
    int: "integer",
    "number": "number",
}

# Largest value a 32-bit INTEGER column holds
MAX_INTEGER = 2 ** 31 - 1
# Largest value a NUMERIC(10, 2) column holds
MAX_PRICE = Decimal("99999999.99")


class FieldRule:
    """Constraints for one input field.

    ``type`` is ``str``, ``int`` or ``"number"`` (a finite int, float or Decimal).
    """

    def __init__(self, required=True, type=None, minimum=None, maximum=None):
        self.required = required
        self.type = type
        self.minimum = minimum
        self.maximum = maximum


def _matches_type(value, expected):
    # bool is an int subclass but never a valid quantity or price
    if isinstance(value, bool):
        return expected is None
    if expected == "number":
        if isinstance(value, Decimal):
            return value.is_finite()
        # NaN and Infinity are valid JSON for Flask's parser
        return isinstance(value, (int, float)) and math.isfinite(value)
    if expected is None:
        return True
    return isinstance(value, expected)


def validate_input(data, rules):
    """Check ``data`` against ``rules`` in declaration order.

    Raises ValidationError for the first violated rule; returns None otherwise.
    """
    for field, rule in rules.items():
        value = data.get(field)

        if value is None or (isinstance(value, str) and not value.strip()):
            if rule.required:
                raise ValidationError(field, "required", f"{field} is required")
            continue

        if rule.type is not None and not _matches_type(value, rule.type):
            raise ValidationError(field, "type", f"{field} must be of type {TYPE_NAMES[rule.type]}")

        if rule.minimum is not None and value < rule.minimum:
            raise ValidationError(field, "minimum", f"{field} must be at least {rule.minimum}")

        if rule.maximum is not None and value > rule.maximum:
            raise ValidationError(field, "maximum", f"{field} must be at most {rule.maximum}")


PRODUCT_RULES = {
    "product_id": FieldRule(type=str),
    "name": FieldRule(type=str),
    "price": FieldRule(type="number", minimum=0, maximum=MAX_PRICE),
    "stock": FieldRule(type=int, minimum=0, maximum=MAX_INTEGER),
    "category": FieldRule(type=str),
}

STOCK_DELTA_RULES = {
    "product_id": FieldRule(type=str),
    "quantity": FieldRule(type=int, minimum=1, maximum=MAX_INTEGER),
    "transaction_type": FieldRule(type=str),
}

TRANSACTION_RULES = {
    "transaction_id": FieldRule(type=str),
    "product_id": FieldRule(type=str),
    "quantity": FieldRule(type=int, minimum=1, maximum=MAX_INTEGER),
    "type": FieldRule(type=str),
    "customer_id": FieldRule(type=str),
}

OPTIONAL_TRANSACTION_RULES = {
    "supplier_id": FieldRule(required=False, type=str),
    "discount": FieldRule(required=False, type="number", minimum=0, maximum=100),
    "notes": FieldRule(required=False, type=str),
}
