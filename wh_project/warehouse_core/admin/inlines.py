from django.contrib import admin

from warehouse_core.models import CreditNoteLine, OrderLine, PurchaseLine


# ---------- Document lines, shown under their parent ----------
# Lines are written by the services together with stock and balances,
# so the inlines only display them.
class ReadOnlyLineInline(admin.TabularInline):
    extra = 0
    can_delete = False
    ordering = ("id",)

    def get_readonly_fields(self, request, obj=None):
        return self.fields

    def has_add_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("product")


class OrderLineInline(ReadOnlyLineInline):
    """Products sold on an order"""

    model = OrderLine
    fields = ("product", "product_name", "quantity", "price", "vat_rate")


class PurchaseLineInline(ReadOnlyLineInline):
    """Goods received on a purchase"""

    model = PurchaseLine
    fields = ("product", "product_name", "quantity", "unit_price", "line_total")


class CreditNoteLineInline(ReadOnlyLineInline):
    model = CreditNoteLine
    fields = ("product", "product_name", "quantity", "price", "reason")
