from flask import Blueprint

from inventory.components import get_inventory
from routes.responses import get_json_body, success_response

bp = Blueprint("transactions", __name__)


@bp.route("", methods=["POST"])
def create_transaction():
    payload = get_json_body()
    result = get_inventory().transactions.create_transaction(
        payload.get("transactionId"),
        payload.get("productId"),
        payload.get("quantity"),
        payload.get("type"),
        payload.get("customerId"),
        supplier_id=payload.get("supplierId"),
        discount=payload.get("discount", 0),
        notes=payload.get("notes"),
        direction=payload.get("direction"),
    )
    return success_response(
        {
            "success": True,
            "transactionId": result["transaction_id"],
            "totalAmount": str(result["total_amount"]),
            "oldStock": result["old_stock"],
            "newStock": result["new_stock"],
        },
        message="Transaction created successfully",
        status=201,
    )
