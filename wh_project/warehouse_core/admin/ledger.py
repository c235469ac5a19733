from django.contrib import admin

from warehouse_core.models import BalanceEntry, SequenceCounter

from .mixins import TenantAdminMixin
from .readonly import ReadOnlyAdmin


@admin.register(BalanceEntry)
class BalanceEntryAdmin(TenantAdminMixin, ReadOnlyAdmin):
    """Append-only history behind every balance."""

    list_display = (
        "created_at", "client", "supplier", "field", "amount", "event", "reference",
    )
    list_filter = ("field", "event")
    search_fields = ("reference", "client__name", "supplier__name", "note")
    list_select_related = ("client", "supplier")
    ordering = ("-created_at", "-id")


@admin.register(SequenceCounter)
class SequenceCounterAdmin(TenantAdminMixin, ReadOnlyAdmin):
    list_display = ("company", "name", "value", "updated_at")
    list_filter = ("name",)
