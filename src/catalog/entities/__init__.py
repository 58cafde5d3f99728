"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: Domain model carrying the field constraints
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .service.product import Product, ProductRepository, ProductTable

__all__ = [
    "Product",
    "ProductTable",
    "ProductRepository",
]
