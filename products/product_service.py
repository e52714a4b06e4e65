import logging
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from src.extensions import db
from src.pagination import pagination_envelope
from inventory.exceptions import DuplicateProductError, SupplierNotFoundError
from inventory.unit_of_work import atomic
from inventory.validation import FieldRule, PRODUCT_RULES, validate_input
from products.product import Product
from suppliers.supplier import Supplier

logger = logging.getLogger("inventory.products")

OPTIONAL_PRODUCT_RULES = {
    "description": FieldRule(required=False, type=str),
    "supplier_id": FieldRule(required=False, type=str),
}


class ProductService:
    @staticmethod
    def add_product(product_id, name, price, stock, category, description=None, supplier_id=None):
        """
        Create a product. Fails with DuplicateProductError when product_id is taken.
        """
        data = {
            "product_id": product_id,
            "name": name,
            "price": price,
            "stock": stock,
            "category": category,
            "description": description,
            "supplier_id": supplier_id,
        }
        validate_input(data, PRODUCT_RULES)
        validate_input(data, OPTIONAL_PRODUCT_RULES)

        with atomic(db.session):
            if Product.query.filter_by(product_id=product_id).first():
                raise DuplicateProductError(product_id)
            if supplier_id and not Supplier.query.filter_by(supplier_id=supplier_id).first():
                raise SupplierNotFoundError(supplier_id)

            product = Product(
                product_id=product_id,
                name=name,
                price=Decimal(str(price)),
                stock=stock,
                category=category,
                description=description,
                supplier_id=supplier_id,
            )
            db.session.add(product)
            try:
                db.session.flush()
            except IntegrityError as exc:
                db.session.rollback()
                if Product.query.filter_by(product_id=product_id).first():
                    raise DuplicateProductError(product_id) from exc
                raise

        logger.info("Product added: %s with %s units", name, stock)
        return product

    @staticmethod
    def get_product(product_id):
        return Product.query.filter_by(product_id=product_id).first()

    @staticmethod
    def list_products(category=None, page=1, limit=10):
        query = Product.query
        if category:
            query = query.filter(Product.category == category)

        paginated = query.order_by(Product.name, Product.product_id).paginate(
            page=page, per_page=limit, error_out=False
        )
        return {
            "products": [p.to_dict() for p in paginated.items],
            "pagination": pagination_envelope(paginated),
        }
