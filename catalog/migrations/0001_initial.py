import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(db_index=True, max_length=255)),
                (
                    "description",
                    models.TextField(blank=True, validators=[django.core.validators.MaxLengthValidator(500)]),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[("wall-hanging", "Wall hanging"), ("rug", "Rug")], db_index=True, max_length=20
                    ),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(0.01)]
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("available", "Available"), ("sold", "Sold"), ("draft", "Draft")],
                        db_index=True,
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("stock_quantity", models.PositiveIntegerField(default=0)),
                ("materials", models.TextField(blank=True, help_text="Materials used")),
                (
                    "dimensions",
                    models.JSONField(blank=True, help_text='{"width": n, "height": n, "unit": "cm"}', null=True),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["category", "status"], name="catalog_pro_categor_5d8a1e_idx"),
                    models.Index(fields=["status", "-created_at"], name="catalog_pro_status_0b7c4f_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductImage",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("url", models.CharField(help_text="Fully-qualified public URL", max_length=500)),
                (
                    "storage_key",
                    models.CharField(help_text="Generated file name in storage", max_length=100, unique=True),
                ),
                (
                    "original_filename",
                    models.CharField(blank=True, help_text="Client filename, display only", max_length=255),
                ),
                ("file_size", models.PositiveIntegerField(blank=True, help_text="File size in bytes", null=True)),
                ("content_type", models.CharField(blank=True, help_text="MIME type", max_length=100)),
                ("show_on_home", models.BooleanField(db_index=True, default=False)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="images", to="catalog.product"
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order", "created_at"],
            },
        ),
    ]
