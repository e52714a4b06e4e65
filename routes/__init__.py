def register_routes(app):
    from products.product_routes import bp as product_bp
    app.register_blueprint(product_bp, url_prefix="/products")

    from transactions.transaction_routes import bp as transaction_bp
    app.register_blueprint(transaction_bp, url_prefix="/transactions")

    from reports.report_routes import bp as report_bp
    app.register_blueprint(report_bp, url_prefix="/reports")
