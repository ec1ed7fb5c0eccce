import uuid

from django.core.validators import MaxLengthValidator, MinValueValidator
from django.db import models


class Product(models.Model):
    CATEGORY_CHOICES = [
        ("wall-hanging", "Wall hanging"),
        ("rug", "Rug"),
    ]

    STATUS_CHOICES = [
        ("available", "Available"),
        ("sold", "Sold"),
        ("draft", "Draft"),
    ]

    # Basic Information
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, validators=[MaxLengthValidator(500)])
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, db_index=True)

    # Pricing and Inventory
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0.01)])
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="draft", db_index=True)
    stock_quantity = models.PositiveIntegerField(default=0)

    # Product Attributes
    materials = models.TextField(blank=True, help_text="Materials used")
    dimensions = models.JSONField(null=True, blank=True, help_text='{"width": n, "height": n, "unit": "cm"}')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "catalog"
        indexes = [
            models.Index(fields=["category", "status"], name="catalog_pro_categor_5d8a1e_idx"),
            models.Index(fields=["status", "-created_at"], name="catalog_pro_status_0b7c4f_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def image_urls(self):
        return [image.url for image in self.images.all()]


class ProductImage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="images")
    url = models.CharField(max_length=500, help_text="Fully-qualified public URL")
    storage_key = models.CharField(max_length=100, unique=True, help_text="Generated file name in storage")
    original_filename = models.CharField(max_length=255, blank=True, help_text="Client filename, display only")
    file_size = models.PositiveIntegerField(null=True, blank=True, help_text="File size in bytes")
    content_type = models.CharField(max_length=100, blank=True, help_text="MIME type")
    show_on_home = models.BooleanField(default=False, db_index=True)
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["sort_order", "created_at"]
        app_label = "catalog"

    @property
    def is_primary(self):
        return self.sort_order == 0

    def __str__(self):
        return f"Image {self.sort_order} for {self.product.name}"
