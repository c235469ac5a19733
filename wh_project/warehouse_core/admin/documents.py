from django.contrib import admin

from warehouse_core.models import CreditNote, Order, Payment, Purchase

from .actions import cancel_orders, mark_orders_delivered
from .inlines import CreditNoteLineInline, OrderLineInline, PurchaseLineInline
from .mixins import TenantAdminMixin
from .readonly import ReadOnlyAdmin


# Documents move stock and balances, so they are created and edited
# through the API; the admin lists them and runs the status actions.
@admin.register(Order)
class OrderAdmin(TenantAdminMixin, ReadOnlyAdmin):
    list_display = (
        "order_no", "client_name", "status", "invoice_type", "total", "created_at",
    )
    list_filter = ("status", "invoice_type")
    search_fields = ("order_no", "client_name")
    inlines = [OrderLineInline]
    actions = [mark_orders_delivered, cancel_orders]
    allowed_actions = ("mark_orders_delivered", "cancel_orders")
    list_select_related = ("client",)


@admin.register(Purchase)
class PurchaseAdmin(TenantAdminMixin, ReadOnlyAdmin):
    list_display = (
        "purchase_order_no", "kind", "supplier", "invoice_no", "date_received", "total_amount",
    )
    list_filter = ("kind", "date_received")
    search_fields = ("purchase_order_no", "invoice_no", "supplier__name")
    inlines = [PurchaseLineInline]
    list_select_related = ("supplier",)


@admin.register(Payment)
class PaymentAdmin(TenantAdminMixin, ReadOnlyAdmin):
    list_display = ("payment_no", "client", "supplier", "amount", "payment_method", "date")
    list_filter = ("payment_method", "date")
    search_fields = ("payment_no", "client__name", "supplier__name")
    list_select_related = ("client", "supplier")


@admin.register(CreditNote)
class CreditNoteAdmin(TenantAdminMixin, ReadOnlyAdmin):
    list_display = (
        "credit_note_no", "kind", "client_name", "order_no", "total_amount", "status", "is_deleted",
    )
    list_filter = ("kind", "status", "is_deleted")
    search_fields = ("credit_note_no", "client_name", "order_no")
    inlines = [CreditNoteLineInline]
