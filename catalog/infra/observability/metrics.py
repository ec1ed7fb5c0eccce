from prometheus_client import CollectorRegistry, Counter, Histogram


# Upload pipeline metrics, exposed on their own at /api/products/metrics/
registry = CollectorRegistry()

# Upload pipeline outcomes
product_uploads_total = Counter(
    "catalog_product_uploads_total", "Product creations with image upload", ["outcome"], registry=registry
)
images_stored_total = Counter("catalog_images_stored_total", "Image files written to storage", registry=registry)
image_upload_bytes = Histogram(
    "catalog_image_upload_bytes",
    "Size distribution of stored product images",
    buckets=[64 * 1024, 256 * 1024, 1024 * 1024, 2 * 1024 * 1024, 5 * 1024 * 1024, float("inf")],
    registry=registry,
)

# Compensation
compensations_total = Counter(
    "catalog_upload_compensations_total",
    "Compensating deletions triggered by failed uploads",
    ["reason"],
    registry=registry,
)
cleanup_failures_total = Counter(
    "catalog_upload_cleanup_failures_total",
    "Stored files a compensating delete could not remove",
    registry=registry,
)

# Performance
product_upload_duration = Histogram(
    "catalog_product_upload_seconds", "Time to validate, store and persist a product", registry=registry
)
