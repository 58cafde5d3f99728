"""Entity package: Product."""

from .entity import Product
from .repository import ProductRepository
from .table import ProductTable
from .validation import ProductValidationError, validate_product

__all__ = [
    "Product",
    "ProductRepository",
    "ProductTable",
    "ProductValidationError",
    "validate_product",
]
