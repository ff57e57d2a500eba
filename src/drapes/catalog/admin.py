"""Back-office CRUD for the catalog."""

from django.contrib import admin

from .models import Category, Color, Product, ProductColor, ProductSize, Size


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "parent", "is_active"]
    list_filter = ["is_active", "parent"]
    search_fields = ["name"]
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Size)
class SizeAdmin(admin.ModelAdmin):
    list_display = ["name", "sort_order"]
    list_editable = ["sort_order"]
    search_fields = ["name"]


@admin.register(Color)
class ColorAdmin(admin.ModelAdmin):
    list_display = ["name", "hex_code", "sort_order"]
    list_editable = ["sort_order"]
    search_fields = ["name"]


class ProductSizeInline(admin.TabularInline):
    model = ProductSize
    extra = 0
    autocomplete_fields = ["size"]


class ProductColorInline(admin.TabularInline):
    model = ProductColor
    extra = 0
    autocomplete_fields = ["color"]


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["sku", "name", "category", "price", "sale_price", "stock", "is_active", "is_featured"]
    list_filter = ["is_active", "is_featured", "category"]
    list_editable = ["stock", "is_active"]
    search_fields = ["sku", "name"]
    prepopulated_fields = {"slug": ("name",)}
    inlines = [ProductSizeInline, ProductColorInline]
