from flask import Blueprint, current_app, request

from inventory.components import get_inventory
from reports.report_service import ReportService, parse_date
from routes.responses import success_response

bp = Blueprint("reports", __name__)


@bp.route("/inventory", methods=["GET"])
def inventory_report():
    return success_response(ReportService.get_inventory_value())


@bp.route("/low-stock", methods=["GET"])
def low_stock_report():
    threshold = request.args.get("threshold", type=int)
    if threshold is None:
        threshold = get_inventory().low_stock_threshold
    products = ReportService.get_low_stock_products(threshold)
    return success_response({
        "lowStockProducts": products,
        "count": len(products),
        "threshold": threshold,
    })


@bp.route("/sales", methods=["GET"])
def sales_report():
    start_date = parse_date(request.args.get("startDate"), "startDate")
    end_date = parse_date(request.args.get("endDate"), "endDate")
    return success_response(ReportService.get_sales_report(start_date, end_date))


@bp.route("/top-products", methods=["GET"])
def top_products_report():
    start_date = parse_date(request.args.get("startDate"), "startDate")
    end_date = parse_date(request.args.get("endDate"), "endDate")
    limit = request.args.get("limit", current_app.config["TOP_PRODUCTS_LIMIT"], type=int)
    return success_response(ReportService.get_top_products(start_date, end_date, max(limit, 1)))


@bp.route("/product-summary", methods=["GET"])
def product_summary_report():
    products = ReportService.get_product_summary(request.args.get("category"))
    return success_response({"products": products, "count": len(products)})
