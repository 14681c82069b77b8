"""Route group exports."""

from . import health, locations, products

__all__ = ["health", "locations", "products"]
