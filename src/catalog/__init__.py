"""Product catalog data layer.

Contains the Product entity, its persistence model and repository, and the
database context that request handlers use to reach the product collection.
"""

__version__ = "0.1.0"
