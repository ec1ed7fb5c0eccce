from .catalog import Product, ProductImage


__all__ = [
    "Product",
    "ProductImage",
]
