from django.contrib import admin

from warehouse_core.models import Expense, Product

from .mixins import TenantAdminMixin


@admin.register(Product)
class ProductAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_display = (
        "serial_no", "name", "category", "selling_price", "stock", "min_stock_level", "is_active",
    )
    list_filter = ("category", "is_active")
    search_fields = ("serial_no", "name")
    # stock only moves through orders, purchases, credit notes and the stock endpoint
    readonly_fields = ("stock", "created_at", "updated_at")
    list_select_related = ("supplier",)


@admin.register(Expense)
class ExpenseAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_display = ("date", "category", "description", "amount", "vat", "payment_method", "is_active")
    list_filter = ("category", "is_active", "date")
    search_fields = ("description", "reference")
    date_hierarchy = "date"
