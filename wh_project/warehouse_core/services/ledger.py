import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db import transaction
from django.db.models import F, Sum

from ..models import (BalanceEntry, Client, CreditNote, Order, Payment,
                      Purchase, Supplier)
from .validation import money

logger = logging.getLogger(__name__)

# stored balance fields per counterparty model
BALANCE_FIELDS = {
    Client: ("total_dues",),
    Supplier: ("total_debit", "total_credit"),
}

# number attribute carried by each source document
_REFERENCE_FIELDS = ("order_no", "credit_note_no", "payment_no", "purchase_order_no")


@dataclass
class BalanceDrift:
    """One stored balance that disagrees with its documents or its entries."""

    entity: object
    field: str
    stored: Decimal
    expected: Decimal
    folded: Decimal
    fixed: bool = False

    @property
    def difference(self):
        return self.expected - self.stored

    def as_dict(self):
        return {
            "entity_type": self.entity._meta.model_name,
            "entity_id": self.entity.pk,
            "entity_name": str(self.entity),
            "field": self.field,
            "stored": str(self.stored),
            "expected": str(self.expected),
            "folded": str(self.folded),
            "difference": str(self.difference),
            "fixed": self.fixed,
        }


def _owner_kwargs(entity):
    if isinstance(entity, Client):
        return {"client": entity}
    if isinstance(entity, Supplier):
        return {"supplier": entity}
    raise TypeError(f"{type(entity).__name__} carries no balance")


def _check_field(entity, field):
    if field not in BALANCE_FIELDS[type(entity)]:
        raise ValueError(f"{type(entity).__name__} has no balance field {field!r}")


def _reference(source):
    for attr in _REFERENCE_FIELDS:
        value = getattr(source, attr, None)
        if value:
            return value
    return ""


# ----------------------------
# Delta workflow
# ----------------------------
def apply_delta(entity, field: str, amount, event: str, source=None, note: str = ""):
    """
    Add `amount` (signed) to entity.<field> with a single UPDATE
    and append the matching BalanceEntry. Returns the entry, or None
    for a zero delta.
    """
    _check_field(entity, field)
    amount = money(amount)
    if amount == 0:
        return None

    with transaction.atomic():
        # UPDATE ... SET field = field + amount, no read-modify-write
        type(entity).objects.filter(pk=entity.pk).update(**{field: F(field) + amount})
        entry = BalanceEntry.objects.create(
            company_id=entity.company_id,
            field=field,
            amount=amount,
            event=event,
            source_type=source._meta.model_name if source is not None else "",
            source_id=source.pk if source is not None else None,
            reference=_reference(source) if source is not None else "",
            note=note,
            **_owner_kwargs(entity),
        )

    entity.refresh_from_db(fields=[field])
    logger.info(
        "%s %s %s#%s %+.2f (%s) -> %s",
        event, field, type(entity).__name__, entity.pk, amount,
        entry.reference or "-", getattr(entity, field),
    )
    return entry


# ----------------------------
# Recomputation
# ----------------------------
def fold_entries(entity) -> dict:
    """Sum of the append-only entries, per balance field."""
    totals = {f: Decimal("0.00") for f in BALANCE_FIELDS[type(entity)]}
    rows = (
        BalanceEntry.objects.filter(**_owner_kwargs(entity))
        .values("field")
        .annotate(total=Sum("amount"))
    )
    for row in rows:
        totals[row["field"]] = money(row["total"])
    return totals


def _sum(qs, field):
    return money(qs.aggregate(total=Sum(field))["total"])


def recompute_from_documents(entity) -> dict:
    """Balances derived from first principles out of the live documents."""
    if isinstance(entity, Client):
        on_account = _sum(
            Order.objects.filter(client=entity, invoice_type="on_account"), "total"
        )
        paid = _sum(Payment.objects.filter(client=entity), "amount")
        credited = _sum(
            CreditNote.objects.filter(
                client=entity, is_deleted=False, applied_to_dues=True
            ),
            "total_amount",
        )
        return {"total_dues": on_account - paid - credited}

    if isinstance(entity, Supplier):
        return {
            "total_debit": _sum(Purchase.objects.filter(supplier=entity), "total_amount"),
            "total_credit": _sum(Payment.objects.filter(supplier=entity), "amount"),
        }

    raise TypeError(f"{type(entity).__name__} carries no balance")


def reconcile_entity(entity, fix=False):
    """
    Compare stored balance, entry fold and document recomputation.
    With fix=True the stored field is set to the recomputed value and an
    "adjustment" entry brings the fold in line, so all three agree.
    """
    drifts = []
    with transaction.atomic():
        if fix:
            # lock the counterparty row while we overwrite its balance
            entity = type(entity).objects.select_for_update().get(pk=entity.pk)
        else:
            entity.refresh_from_db()

        expected = recompute_from_documents(entity)
        folded = fold_entries(entity)

        for field in BALANCE_FIELDS[type(entity)]:
            stored = money(getattr(entity, field))
            if stored == expected[field] and folded[field] == expected[field]:
                continue

            drift = BalanceDrift(entity, field, stored, expected[field], folded[field])
            logger.warning(
                "Balance drift %s#%s %s: stored=%s expected=%s folded=%s",
                type(entity).__name__, entity.pk, field,
                stored, expected[field], folded[field],
            )

            if fix:
                type(entity).objects.filter(pk=entity.pk).update(**{field: expected[field]})
                adjustment = expected[field] - folded[field]
                if adjustment:
                    BalanceEntry.objects.create(
                        company_id=entity.company_id,
                        field=field,
                        amount=adjustment,
                        event="adjustment",
                        note=f"reconcile: stored {stored}, expected {expected[field]}",
                        **_owner_kwargs(entity),
                    )
                drift.fixed = True
            drifts.append(drift)

    if fix and drifts:
        entity.refresh_from_db()
    return drifts


def reconcile(company, fix=False):
    """Reconcile every client and supplier of the tenant."""
    drifts = []
    for client in Client.objects.for_company(company).order_by("pk"):
        drifts.extend(reconcile_entity(client, fix=fix))
    for supplier in Supplier.objects.for_company(company).order_by("pk"):
        drifts.extend(reconcile_entity(supplier, fix=fix))

    logger.info(
        "Reconciled company %s: %d drift(s)%s",
        company.pk, len(drifts), " fixed" if fix and drifts else "",
    )
    return drifts
