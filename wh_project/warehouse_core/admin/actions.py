from django.contrib import admin, messages
from django.db import transaction
from django.utils.translation import gettext_lazy as _

from warehouse_core.exceptions import WarehouseError
from warehouse_core.services import (reconcile, reconcile_entity,
                                     resync_counter, set_order_status)
from warehouse_core.services.sequences import SERIES_DOCUMENTS

# ---------- Admin actions ----------


def _report_drifts(modeladmin, request, drifts, checked):
    for drift in drifts:
        modeladmin.message_user(
            request,
            _("%(entity)s %(field)s: stored %(stored)s, expected %(expected)s%(fixed)s") % {
                "entity": drift.entity,
                "field": drift.field,
                "stored": drift.stored,
                "expected": drift.expected,
                "fixed": " (fixed)" if drift.fixed else "",
            },
            level=messages.WARNING,
        )
    modeladmin.message_user(
        request,
        _("Checked %(checked)d record(s), %(drifts)d drift(s).") % {
            "checked": checked, "drifts": len(drifts),
        },
        level=messages.SUCCESS if not drifts else messages.WARNING,
    )


@admin.action(description="Check balances of selected records")
def check_balances(modeladmin, request, queryset):
    drifts = []
    for entity in queryset:
        drifts.extend(reconcile_entity(entity, fix=False))
    _report_drifts(modeladmin, request, drifts, queryset.count())


@admin.action(description="Repair balances of selected records")
def repair_balances(modeladmin, request, queryset):
    """
    Overwrite stored balances with the values recomputed from documents.
    Each record is repaired in its own transaction.
    """
    drifts = []
    for entity in queryset:
        with transaction.atomic():
            drifts.extend(reconcile_entity(entity, fix=True))
    _report_drifts(modeladmin, request, drifts, queryset.count())


@admin.action(description="Check all balances of selected companies")
def check_company_balances(modeladmin, request, queryset):
    drifts = []
    for company in queryset:
        drifts.extend(reconcile(company, fix=False))
    _report_drifts(modeladmin, request, drifts, queryset.count())


@admin.action(description="Resync document counters of selected companies")
def resync_company_counters(modeladmin, request, queryset):
    for company in queryset:
        values = {series: resync_counter(company, series) for series in sorted(SERIES_DOCUMENTS)}
        modeladmin.message_user(
            request,
            f"{company}: " + ", ".join(f"{series}={value}" for series, value in values.items()),
        )


def _move_orders(modeladmin, request, queryset, status):
    moved = 0
    for order in queryset:
        try:
            # enforces the transition rules instead of letting admins bypass them
            set_order_status(order.company, order.pk, status)
            moved += 1
        except WarehouseError as e:
            modeladmin.message_user(request, f"{order}: {e.message}", level=messages.ERROR)
    modeladmin.message_user(request, f"{moved} of {queryset.count()} order(s) set to {status}.")


@admin.action(description="Mark selected orders as Delivered")
def mark_orders_delivered(modeladmin, request, queryset):
    _move_orders(modeladmin, request, queryset, "delivered")


@admin.action(description="Cancel selected orders")
def cancel_orders(modeladmin, request, queryset):
    _move_orders(modeladmin, request, queryset, "cancelled")
