from django.contrib import admin, messages
from django.utils.html import format_html

from infrastructure.container import container

from .models import Product, ProductImage


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0
    fields = ('image_preview', 'original_filename', 'show_on_home', 'sort_order', 'file_size', 'content_type')
    readonly_fields = ('image_preview', 'original_filename', 'sort_order', 'file_size', 'content_type')
    can_delete = False

    def has_add_permission(self, request, obj=None):
        # Images only enter through the upload endpoint
        return False

    def image_preview(self, obj):
        if obj.url:
            return format_html('<img src="{}" width="100" height="100" />', obj.url)
        return "No Image"
    image_preview.short_description = "Preview"


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'price', 'stock_quantity', 'status', 'image_count', 'created_at')
    list_filter = ('status', 'category', 'created_at')
    search_fields = ('name', 'description', 'materials')
    readonly_fields = ('id', 'created_at', 'updated_at')

    inlines = [ProductImageInline]

    fieldsets = (
        (None, {
            'fields': ('id', 'name', 'description', 'category')
        }),
        ('Pricing & Inventory', {
            'fields': ('price', 'stock_quantity', 'status')
        }),
        ('Details', {
            'fields': ('materials', 'dimensions')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )

    def image_count(self, obj):
        return obj.images.count()
    image_count.short_description = "Images"

    def delete_model(self, request, obj):
        # Same path as the API so stored files go with the product
        result = container.product_service().delete_product(str(obj.id))
        if not result.ok:
            self.message_user(request, f"Could not delete {obj}: {result.error_detail}", level=messages.ERROR)

    def delete_queryset(self, request, queryset):
        service = container.product_service()
        failed = []
        for product_id in queryset.values_list('id', flat=True):
            result = service.delete_product(str(product_id))
            if not result.ok:
                failed.append(str(product_id))
        if failed:
            self.message_user(
                request, f"Could not delete {len(failed)} product(s): {', '.join(failed)}", level=messages.ERROR
            )


@admin.register(ProductImage)
class ProductImageAdmin(admin.ModelAdmin):
    list_display = ('product', 'sort_order', 'show_on_home', 'original_filename', 'file_size', 'created_at')
    list_filter = ('show_on_home', 'content_type', 'created_at')
    search_fields = ('product__name', 'original_filename', 'storage_key')
    readonly_fields = ('id', 'product', 'url', 'storage_key', 'original_filename', 'file_size',
                       'content_type', 'sort_order', 'created_at')

    def has_add_permission(self, request):
        return False
