def pagination_envelope(page):
    """Pagination metadata for a Flask-SQLAlchemy ``Pagination`` object."""
    return {
        "currentPage": page.page,
        "totalPages": page.pages,
        "totalItems": page.total,
        "itemsPerPage": page.per_page,
    }
