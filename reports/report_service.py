from datetime import datetime, date, time, timedelta
from decimal import Decimal

import pandas as pd
from sqlalchemy import func, desc

from src.extensions import db
from src.pagination import pagination_envelope
from inventory.exceptions import ValidationError
from products.product import Product
from transactions.transaction import Transaction

SALES_COLUMNS = ["created_at", "quantity", "unit_price", "total_amount",
                 "product_id", "product_name", "category"]


def parse_date(value, field):
    """Parse ``YYYY-MM-DD`` (or a full ISO timestamp) into a date; None passes through."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        if "T" in str(value):
            return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()
        return datetime.strptime(str(value), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(field, "format", f"{field} must be in YYYY-MM-DD or ISO format")


def _filter_by_dates(query, start_date, end_date):
    # both bounds are inclusive calendar days
    if start_date:
        query = query.filter(Transaction.created_at >= datetime.combine(start_date, time.min))
    if end_date:
        query = query.filter(Transaction.created_at < datetime.combine(end_date + timedelta(days=1), time.min))
    return query


def _money(value):
    return round(float(value or 0), 2)


class ReportService:
    @staticmethod
    def get_inventory_value():
        total_value, total_products, total_stock = db.session.query(
            func.coalesce(func.sum(Product.price * Product.stock), 0),
            func.count(Product.id),
            func.coalesce(func.sum(Product.stock), 0),
        ).one()
        return {
            "totalValue": str(Decimal(str(total_value)).quantize(Decimal("0.01"))),
            "totalProducts": int(total_products or 0),
            "totalStock": int(total_stock or 0),
        }

    @staticmethod
    def get_low_stock_products(threshold):
        products = (
            Product.query.filter(Product.stock <= threshold)
            .order_by(Product.stock.asc(), Product.product_id)
            .all()
        )
        result = []
        for p in products:
            data = p.to_dict()
            data["stockValue"] = str(p.price * p.stock)
            result.append(data)
        return result

    @staticmethod
    def get_product_summary(category=None):
        """Per product stock value alongside lifetime units sold and revenue."""
        sales = (
            db.session.query(
                Transaction.product_id.label("product_id"),
                func.sum(Transaction.quantity).label("total_sold"),
                func.sum(Transaction.total_amount).label("total_revenue"),
            )
            .filter(Transaction.type == "sale")
            .group_by(Transaction.product_id)
            .subquery()
        )
        query = db.session.query(
            Product,
            func.coalesce(sales.c.total_sold, 0),
            func.coalesce(sales.c.total_revenue, 0),
        ).outerjoin(sales, Product.product_id == sales.c.product_id)
        if category:
            query = query.filter(Product.category == category)

        summary = []
        for product, total_sold, total_revenue in query.order_by(Product.product_id).all():
            summary.append({
                "productId": product.product_id,
                "name": product.name,
                "category": product.category,
                "price": str(product.price),
                "stock": product.stock,
                "stockValue": str(product.price * product.stock),
                "totalSold": int(total_sold or 0),
                "totalRevenue": _money(total_revenue),
                "createdAt": product.created_at.isoformat() if product.created_at else None,
            })
        return summary

    @staticmethod
    def get_sales_report(start_date=None, end_date=None):
        """
        Sales grouped by month, category and product, plus month and
        category totals for dashboards.
        """
        query = db.session.query(
            Transaction.created_at,
            Transaction.quantity,
            Transaction.unit_price,
            Transaction.total_amount,
            Product.product_id,
            Product.name,
            Product.category,
        ).join(Product, Transaction.product_id == Product.product_id).filter(Transaction.type == "sale")
        rows = _filter_by_dates(query, start_date, end_date).all()

        if not rows:
            return {"raw": [], "salesByMonth": {}, "salesByCategory": {}, "totalSales": 0.0}

        df = pd.DataFrame([tuple(r) for r in rows], columns=SALES_COLUMNS)
        df["month"] = pd.to_datetime(df["created_at"]).dt.strftime("%Y-%m")
        df["total_amount"] = df["total_amount"].astype(float)
        df["unit_price"] = df["unit_price"].astype(float)

        grouped = (
            df.groupby(["month", "category", "product_id", "product_name"], as_index=False)
            .agg(
                total_quantity=("quantity", "sum"),
                total_sales=("total_amount", "sum"),
                avg_price=("unit_price", "mean"),
            )
            .sort_values(["total_sales", "product_id"], ascending=[False, True])
        )

        raw = [
            {
                "month": row.month,
                "category": row.category,
                "productId": row.product_id,
                "productName": row.product_name,
                "totalQuantity": int(row.total_quantity),
                "totalSales": _money(row.total_sales),
                "avgPrice": _money(row.avg_price),
            }
            for row in grouped.itertuples(index=False)
        ]
        by_month = df.groupby("month")["total_amount"].sum()
        by_category = df.groupby("category")["total_amount"].sum()

        return {
            "raw": raw,
            "salesByMonth": {k: _money(v) for k, v in by_month.items()},
            "salesByCategory": {k: _money(v) for k, v in by_category.items()},
            "totalSales": _money(df["total_amount"].sum()),
        }

    @staticmethod
    def get_top_products(start_date=None, end_date=None, limit=10):
        total_sales = func.sum(Transaction.total_amount)
        query = db.session.query(
            Product.product_id,
            Product.name,
            Product.category,
            func.sum(Transaction.quantity),
            total_sales,
            func.count(Transaction.id),
        ).join(Product, Transaction.product_id == Product.product_id).filter(Transaction.type == "sale")
        rows = (
            _filter_by_dates(query, start_date, end_date)
            .group_by(Product.product_id, Product.name, Product.category)
            .order_by(desc(total_sales), Product.product_id)
            .limit(limit)
            .all()
        )
        return [
            {
                "productId": product_id,
                "productName": name,
                "category": category,
                "totalQuantity": int(quantity or 0),
                "totalSales": _money(sales),
                "transactionCount": int(count or 0),
            }
            for product_id, name, category, quantity, sales, count in rows
        ]

    @staticmethod
    def get_product_history(product_id, page=1, limit=10):
        paginated = (
            Transaction.query.filter_by(product_id=product_id)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .paginate(page=page, per_page=limit, error_out=False)
        )
        return {
            "transactions": [t.to_dict() for t in paginated.items],
            "pagination": pagination_envelope(paginated),
        }
