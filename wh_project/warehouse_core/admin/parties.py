from django.contrib import admin

from warehouse_core.models import Client, Supplier

from .actions import check_balances, repair_balances
from .mixins import TenantAdminMixin


# Balances are moved only by documents; the admin edits contact data
@admin.register(Client)
class ClientAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_display = ("id", "name", "email", "city", "total_dues", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name", "email", "phone")
    readonly_fields = ("total_dues", "created_at", "updated_at")
    actions = [check_balances, repair_balances]


@admin.register(Supplier)
class SupplierAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_display = (
        "id", "name", "phone", "city", "total_debit", "total_credit", "payable", "is_active",
    )
    list_filter = ("is_active",)
    search_fields = ("name", "email", "phone")
    readonly_fields = ("total_debit", "total_credit", "created_at", "updated_at")
    actions = [check_balances, repair_balances]
