from flask import Blueprint, current_app, request

from inventory.components import get_inventory
from products.product_service import ProductService
from reports.report_service import ReportService
from routes.responses import get_json_body, get_page_args, success_response

bp = Blueprint("products", __name__)


# -------------------------
# Add a product
# -------------------------
@bp.route("", methods=["POST"])
def add_product():
    data = get_json_body()
    product = ProductService.add_product(
        data.get("productId"),
        data.get("name"),
        data.get("price"),
        data.get("stock"),
        data.get("category"),
        description=data.get("description"),
        supplier_id=data.get("supplierId"),
    )
    return success_response(
        {"success": True, "id": product.id, "productId": product.product_id},
        message="Product added successfully",
        status=201,
    )


# -------------------------
# List products with optional category filter
# -------------------------
@bp.route("", methods=["GET"])
def list_products():
    page, limit = get_page_args(current_app.config["DEFAULT_PAGE_SIZE"])
    result = ProductService.list_products(request.args.get("category"), page, limit)
    return success_response(result)


# -------------------------
# Apply a stock movement to a product
# -------------------------
@bp.route("/<product_id>", methods=["PUT"])
def update_stock(product_id):
    data = get_json_body()
    change = get_inventory().ledger.apply_stock_delta(
        product_id,
        data.get("quantity"),
        data.get("transactionType"),
        direction=data.get("direction"),
    )
    return success_response(change.to_dict(), message="Stock updated successfully")


@bp.route("/<product_id>/history", methods=["GET"])
def product_history(product_id):
    page, limit = get_page_args(current_app.config["DEFAULT_PAGE_SIZE"])
    return success_response(ReportService.get_product_history(product_id, page, limit))
