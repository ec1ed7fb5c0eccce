"""
Response Serializers for Catalog API Documentation

These serializers define the structure of API request/response bodies for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger.
"""

from rest_framework import serializers

# ===== Common Response Serializers =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    error = serializers.CharField(help_text="Error code identifier")
    message = serializers.CharField(help_text="Human-readable error message")
    errors = serializers.DictField(
        child=serializers.ListField(child=serializers.CharField()),
        required=False,
        help_text="Per-field messages (validation errors only)",
    )


# ===== Product Upload Request =====


class ProductUploadRequestSerializer(serializers.Serializer):
    """multipart/form-data body of POST /api/products/with-upload"""

    name = serializers.CharField(max_length=255, help_text="Product name")
    description = serializers.CharField(max_length=500, required=False, help_text="Product description")
    category = serializers.ChoiceField(choices=["wall-hanging", "rug"], help_text="Product category")
    price = serializers.DecimalField(max_digits=10, decimal_places=2, help_text="Price in euros, > 0")
    status = serializers.ChoiceField(
        choices=["available", "sold", "draft"], default="draft", help_text="Product status"
    )
    stockQuantity = serializers.IntegerField(min_value=0, default=0, help_text="Stock quantity")
    materials = serializers.CharField(required=False, help_text="Materials used")
    dimensions = serializers.CharField(
        required=False, help_text='JSON string, e.g. {"width": 50, "height": 70, "unit": "cm"}'
    )
    showOnHome = serializers.CharField(
        required=False, help_text="JSON array of booleans aligned with images, e.g. [true, false]"
    )
    images = serializers.ListField(
        child=serializers.FileField(), help_text="1-5 images, max 5MB each, JPEG/PNG/WebP"
    )
