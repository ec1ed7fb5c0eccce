from catalog.domain.models import Product, ProductImage


__all__ = [
    "Product",
    "ProductImage",
]
