import logging

from rest_framework import serializers

from catalog.domain.models import Product, ProductImage


logger = logging.getLogger(__name__)


class ProductImageSerializer(serializers.ModelSerializer):
    """Image reference as exposed to the storefront and backoffice"""

    showOnHome = serializers.BooleanField(source="show_on_home", read_only=True)
    sortOrder = serializers.IntegerField(source="sort_order", read_only=True)
    isPrimary = serializers.BooleanField(source="is_primary", read_only=True)

    class Meta:
        model = ProductImage
        fields = [
            "id",
            "url",
            "showOnHome",
            "sortOrder",
            "isPrimary",
        ]
        read_only_fields = fields


class ProductDetailSerializer(serializers.ModelSerializer):
    """Product with its image URLs in gallery order"""

    stockQuantity = serializers.IntegerField(source="stock_quantity", read_only=True)
    images = serializers.SerializerMethodField()
    productImages = ProductImageSerializer(source="images", many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "category",
            "price",
            "status",
            "stockQuantity",
            "materials",
            "dimensions",
            "images",
            "productImages",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_images(self, obj) -> list:
        return [image.url for image in obj.images.all()]


class HomeGridImageSerializer(serializers.ModelSerializer):
    """Image flagged for the home page, with the product it belongs to"""

    productId = serializers.UUIDField(source="product.id", read_only=True)
    productName = serializers.CharField(source="product.name", read_only=True)
    category = serializers.CharField(source="product.category", read_only=True)

    class Meta:
        model = ProductImage
        fields = [
            "id",
            "url",
            "productId",
            "productName",
            "category",
        ]
        read_only_fields = fields
